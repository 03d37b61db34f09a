"""Request building and dispatch against the gateway."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from glide_client.config import ClientConfig
from glide_client.errors import DecodeError, ServiceError, TransportError

_logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Error body the gateway sends with 4xx and 5xx responses."""

    name: str
    message: str


def build_request(
    config: ClientConfig,
    method: str,
    path: str,
    *,
    json: Any = None,
) -> httpx.Request:
    """Create an authenticated request for ``path`` relative to the base URL."""
    url = config.base_url.join(path)
    return config.http_client.build_request(method, url, headers=config.headers(), json=json)


async def send(config: ClientConfig, request: httpx.Request) -> httpx.Response:
    """Execute ``request`` and raise the matching error for 4xx/5xx statuses.

    Successful bodies are read but left undecoded; the caller picks the schema.
    """
    _logger.debug("%s %s", request.method, request.url)
    try:
        response = await config.http_client.send(request)
    except httpx.DecodingError as exc:
        raise DecodeError(f"{request.method} {request.url} body could not be decoded: {exc}") from exc
    except httpx.RequestError as exc:
        raise TransportError(f"{request.method} {request.url} failed: {exc!r}") from exc

    status = response.status_code
    _logger.debug("%s %s -> %d", request.method, request.url, status)
    if 400 <= status < 600:
        raise _service_error(response)
    return response


def decode_json(response: httpx.Response, model: type[BaseModel]) -> Any:
    """Decode a successful response body into ``model``."""
    try:
        return model.model_validate_json(response.content)
    except ValidationError as exc:
        raise DecodeError(
            f"Unexpected {model.__name__} payload: {exc}",
            status_code=response.status_code,
        ) from exc


def _service_error(response: httpx.Response) -> ServiceError:
    try:
        body = ErrorResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise DecodeError(
            f"Malformed error body: {_preview(response)}",
            status_code=response.status_code,
        ) from exc

    error = ServiceError(body.name, body.message, status_code=response.status_code)
    _logger.warning("Gateway error %s (%d): %s", error.name, error.status_code, error.message)
    return error


def _preview(response: httpx.Response, limit: int = 200) -> str:
    return response.text[:limit] or response.reason_phrase
