"""Package specific exception hierarchy."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """General categories of gateway error responses."""

    # The error name is not part of the known gateway API.
    UNRECOGNIZED = "unrecognized"

    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    ROUTE_NOT_FOUND = "route_not_found"
    PAYLOAD_PARSE_ERROR = "payload_parse_error"
    ROUTER_NOT_FOUND = "router_not_found"
    NO_MODEL_CONFIGURED = "no_model_configured"
    MODEL_UNAVAILABLE = "model_unavailable"
    ALL_MODELS_UNAVAILABLE = "all_models_unavailable"
    UNKNOWN_ERROR = "unknown_error"


def error_kind(name: str) -> ErrorKind:
    """Classify a symbolic gateway error name; never fails."""
    try:
        kind = ErrorKind(name)
    except ValueError:
        return ErrorKind.UNRECOGNIZED
    return kind


class GlideError(Exception):
    """Base exception for glide_client package."""


class ConfigError(GlideError, ValueError):
    """Raised when the client is built with an unusable configuration."""


class TransportError(GlideError):
    """Raised when the request never produced a response (connect, TLS, IO)."""


class DecodeError(GlideError):
    """Raised when a response body or stream frame does not match its schema."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        suffix = f" (status {status_code})" if status_code is not None else ""
        super().__init__(f"{message}{suffix}")
        self.status_code = status_code


class ServiceError(GlideError):
    """Well-formed error response returned by the gateway."""

    def __init__(self, name: str, message: str, status_code: int) -> None:
        super().__init__(message)
        self.name = name
        self.message = message
        self.status_code = status_code

    @property
    def kind(self) -> ErrorKind:
        return error_kind(self.name)

    def __repr__(self) -> str:
        return (
            f"ServiceError(name={self.name!r}, message={self.message!r}, "
            f"status_code={self.status_code})"
        )


class StreamClosedError(GlideError):
    """Raised when a closed chat stream is read from or written to."""

    def __init__(self) -> None:
        super().__init__("Chat stream is closed.")
