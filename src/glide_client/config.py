"""Client configuration resolved once at construction time."""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

import aiohttp
import httpx
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from glide_client.errors import ConfigError

DEFAULT_BASE_URL = "https://api.einstack.com"


def default_user_agent() -> str:
    try:
        pkg_version = version("glide-client")
    except PackageNotFoundError:
        pkg_version = "0.0.0"
    return f"glide-client/{pkg_version}"


class Settings(BaseSettings):
    """Defaults read from ``GLIDE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GLIDE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = Field(default=None)
    base_url: str = Field(default=DEFAULT_BASE_URL)
    user_agent: str = Field(default_factory=default_user_agent)
    timeout_s: float = Field(default=60.0)


def parse_base_url(base_url: str | httpx.URL) -> httpx.URL:
    """Validate an endpoint base URL, raising :class:`ConfigError` if unusable."""
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigError(f"Invalid base URL {base_url!r}: {exc}") from exc

    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"Invalid base URL {base_url!r}: expected an absolute http(s) URL")

    # Relative paths join below the base only when it ends with a slash.
    if not url.path.endswith("/"):
        url = url.copy_with(path=url.path + "/")
    return url


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings shared by every operation of one client."""

    base_url: httpx.URL
    user_agent: str
    http_client: httpx.AsyncClient
    api_key: str | None = None
    ws_session: aiohttp.ClientSession | None = None

    @classmethod
    def create(
        cls,
        *,
        api_key: str | None = None,
        base_url: str | httpx.URL | None = None,
        user_agent: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        ws_session: aiohttp.ClientSession | None = None,
        settings: Settings | None = None,
    ) -> ClientConfig:
        """Resolve keyword overrides against environment defaults."""
        settings = settings or Settings()
        if api_key is None and settings.api_key is not None:
            api_key = settings.api_key.get_secret_value()

        return cls(
            base_url=parse_base_url(base_url if base_url is not None else settings.base_url),
            user_agent=user_agent or settings.user_agent,
            http_client=http_client or httpx.AsyncClient(timeout=settings.timeout_s),
            api_key=api_key or None,
            ws_session=ws_session,
        )

    def headers(self) -> dict[str, str]:
        """Identifying and authorization headers attached to every request."""
        headers = {"User-Agent": self.user_agent}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def __repr__(self) -> str:
        key = "*********" if self.api_key else None
        return (
            f"ClientConfig(base_url={str(self.base_url)!r}, "
            f"user_agent={self.user_agent!r}, api_key={key!r})"
        )
