"""Operations on the gateway's ``/v1/language`` endpoints."""

from __future__ import annotations

from urllib.parse import quote

from glide_client.config import ClientConfig
from glide_client.stream import ChatStream
from glide_client.transport import build_request, decode_json, send
from glide_client.types import ChatMessage, ChatRequest, ChatResponse, RouterConfig, RouterConfigs

_LANGUAGE_PATH = "v1/language/"


class Language:
    """Router listing, chat and streaming chat.

    Holds a reference to the owning client's configuration; it keeps no
    state of its own, so every call is an independent request.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    async def list_routers(self) -> list[RouterConfig]:
        """Retrieve the configuration of every router.

        ``GET /v1/language/``
        """
        request = build_request(self._config, "GET", _LANGUAGE_PATH)
        response = await send(self._config, request)
        return decode_json(response, RouterConfigs).routers

    async def chat(
        self,
        router: str,
        request: ChatRequest | ChatMessage | str,
    ) -> ChatResponse:
        """Send a single chat request to ``router`` and return its response.

        ``POST /v1/language/{router}/chat``
        """
        payload = ChatRequest.from_message(request).payload()
        outgoing = build_request(self._config, "POST", _router_path(router, "chat"), json=payload)
        response = await send(self._config, outgoing)
        return decode_json(response, ChatResponse)

    async def stream_chat(self, router: str) -> ChatStream:
        """Open a streaming chat connection to ``router``.

        ``GET /v1/language/{router}/chatStream``

        The caller owns the returned stream and must close it.

        The upgrade handshake carries no error body, so a rejected upgrade
        raises :class:`~glide_client.errors.ServiceError` named
        ``handshake_rejected`` with the handshake status and kind
        ``ErrorKind.UNRECOGNIZED``, whatever the gateway's reason was.
        """
        return await ChatStream.connect(self._config, _router_path(router, "chatStream"))

    def __repr__(self) -> str:
        return f"Language({self._config!r})"


def _router_path(router: str, operation: str) -> str:
    return f"{_LANGUAGE_PATH}{quote(router, safe='')}/{operation}"
