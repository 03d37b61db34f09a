"""Async client for the Glide language-model gateway."""

from .client import GlideClient
from .config import ClientConfig, Settings
from .errors import (
    ConfigError,
    DecodeError,
    ErrorKind,
    GlideError,
    ServiceError,
    StreamClosedError,
    TransportError,
)
from .language import Language
from .stream import ChatStream
from .types import ChatMessage, ChatRequest, ChatResponse, RouterConfig

__all__ = [
    "GlideClient",
    "ClientConfig",
    "Settings",
    "Language",
    "ChatStream",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "RouterConfig",
    "GlideError",
    "ConfigError",
    "TransportError",
    "DecodeError",
    "ServiceError",
    "StreamClosedError",
    "ErrorKind",
]
