"""Async client for the Glide gateway."""

from __future__ import annotations

import logging
from types import TracebackType

import aiohttp
import httpx

from glide_client.config import ClientConfig, Settings
from glide_client.language import Language
from glide_client.transport import build_request, decode_json, send
from glide_client.types import HealthStatus

_HEALTH_PATH = "v1/health/"


class GlideClient:
    """High-level entry point bundling the gateway services.

    Arguments left unset fall back to ``GLIDE_*`` environment variables and
    then to the public endpoint. An ``http_client`` or ``ws_session`` passed in
    stays owned by the caller; one created here is closed by :meth:`aclose`.
    """

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | httpx.URL | None = None,
        user_agent: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        ws_session: aiohttp.ClientSession | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._owns_http_client = http_client is None
        self._config = ClientConfig.create(
            api_key=api_key,
            base_url=base_url,
            user_agent=user_agent,
            http_client=http_client,
            ws_session=ws_session,
            settings=settings,
        )
        self.language = Language(self._config)
        self._logger.debug("Client configured: %r", self._config)

    @classmethod
    def from_env(cls) -> GlideClient:
        """Build a client purely from ``GLIDE_*`` environment variables."""
        return cls(settings=Settings())

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def health(self) -> bool:
        """Return whether the gateway reports itself healthy.

        ``GET /v1/health/``
        """
        request = build_request(self._config, "GET", _HEALTH_PATH)
        response = await send(self._config, request)
        return decode_json(response, HealthStatus).healthy

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._config.http_client.aclose()

    async def __aenter__(self) -> GlideClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"GlideClient({self._config!r})"
