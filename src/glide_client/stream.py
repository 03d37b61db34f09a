"""Streaming chat over a gateway WebSocket."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp
from pydantic import BaseModel

from glide_client.config import ClientConfig
from glide_client.errors import DecodeError, ServiceError, StreamClosedError, TransportError

_END_TYPES = (aiohttp.WSMsgType.CLOSE, aiohttp.WSMsgType.CLOSING, aiohttp.WSMsgType.CLOSED)


class ChatStream:
    """Duplex JSON message channel over one WebSocket connection.

    Inbound messages are read with :meth:`receive` or ``async for``; outbound
    messages are written with :meth:`send`. Use it as an async context
    manager, or call :meth:`close`, so the socket is always released::

        async with await client.language.stream_chat("myrouter") as stream:
            await stream.send(ChatRequest.from_message("Hello!"))
            async for message in stream:
                ...

    A single task should own the stream; reading and writing may still run
    in separate coroutines.
    """

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        ws: aiohttp.ClientWebSocketResponse,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._ws = ws
        # only set when the stream created the session and must close it
        self._session = session
        self._close_lock = asyncio.Lock()
        self._closed = False

    @classmethod
    async def connect(cls, config: ClientConfig, path: str) -> ChatStream:
        """Upgrade ``path`` (relative to the base URL) to a WebSocket."""
        url = config.base_url.join(path)
        url = url.copy_with(scheme="wss" if url.scheme == "https" else "ws")

        session = config.ws_session
        owned = None
        if session is None:
            session = owned = aiohttp.ClientSession()

        connected = False
        try:
            ws = await session.ws_connect(str(url), headers=config.headers())
            connected = True
        except aiohttp.WSServerHandshakeError as exc:
            if exc.status >= 400:
                raise ServiceError("handshake_rejected", exc.message, status_code=exc.status) from exc
            raise TransportError(f"WebSocket upgrade to {url} failed: {exc.message}") from exc
        except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
            raise TransportError(f"WebSocket connection to {url} failed: {exc!r}") from exc
        finally:
            if not connected and owned is not None:
                await owned.close()

        cls._logger.debug("Chat stream opened: %s", url)
        return cls(ws, session=owned)

    @property
    def closed(self) -> bool:
        return self._closed

    async def receive(self) -> Any:
        """Return the next inbound JSON message.

        Raises:
            DecodeError: The frame is not valid JSON. The stream stays open.
            TransportError: The connection failed.
            StreamClosedError: Either side closed the stream.
        """
        while True:
            if self._closed:
                raise StreamClosedError()

            try:
                msg = await self._ws.receive()
            except (aiohttp.ClientError, ConnectionError) as exc:
                raise TransportError(f"Chat stream read failed: {exc!r}") from exc

            if msg.type in (aiohttp.WSMsgType.TEXT, aiohttp.WSMsgType.BINARY):
                try:
                    return json.loads(msg.data)
                except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                    self._logger.warning("Non-JSON chat stream frame: %s", exc)
                    raise DecodeError(f"Chat stream frame is not valid JSON: {exc}") from exc

            if msg.type == aiohttp.WSMsgType.ERROR:
                exc = self._ws.exception()
                raise TransportError(f"Chat stream error: {exc!r}") from exc

            if msg.type in _END_TYPES:
                self._logger.debug("Chat stream ended by %s", msg.type.name)
                if not self._closed:
                    await self.close()
                raise StreamClosedError()

            # ping and pong frames are answered by aiohttp

    async def send(self, message: Any) -> None:
        """Write one JSON message; returns once the frame is flushed to the socket.

        Pydantic models (e.g. :class:`~glide_client.types.ChatRequest`) are
        serialized without their unset optional fields.
        """
        if self._closed or self._ws.closed:
            raise StreamClosedError()
        if isinstance(message, BaseModel):
            message = message.model_dump(mode="json", exclude_none=True)

        try:
            await self._ws.send_str(json.dumps(message))
        except (aiohttp.ClientError, ConnectionError) as exc:
            raise TransportError(f"Chat stream write failed: {exc!r}") from exc

    async def close(self) -> None:
        """Send a going-away close frame and release the connection.

        Safe to call repeatedly and while another task is inside :meth:`receive`.
        """
        async with self._close_lock:
            if self._closed:
                return
            self._closed = True
            try:
                await self._ws.close(code=aiohttp.WSCloseCode.GOING_AWAY)
            finally:
                if self._session is not None:
                    await self._session.close()
            self._logger.debug("Chat stream closed")

    def __aiter__(self) -> ChatStream:
        return self

    async def __anext__(self) -> Any:
        try:
            return await self.receive()
        except StreamClosedError:
            raise StopAsyncIteration from None

    async def __aenter__(self) -> ChatStream:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
