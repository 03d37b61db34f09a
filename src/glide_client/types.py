"""Request and response models for the gateway API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Role = Literal["system", "user", "assistant"]


class HealthStatus(BaseModel):
    """Body of ``GET /v1/health/``."""

    healthy: bool = False


class ChatMessage(BaseModel):
    """Content and role of a single chat message."""

    content: str
    # a-z, A-Z, 0-9 and underscores, at most 64 characters
    name: str | None = None
    role: Role | None = None

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        return cls(content=content, role="system")


class ChatRequestOverride(BaseModel):
    """Replacement message for one model of the router."""

    message: ChatMessage


class ChatRequest(BaseModel):
    """Unified chat request across all language models."""

    message: ChatMessage
    message_history: list[ChatMessage] | None = None
    override_params: dict[str, ChatRequestOverride] | None = None

    @classmethod
    def from_message(cls, message: ChatRequest | ChatMessage | str) -> ChatRequest:
        if isinstance(message, ChatRequest):
            return message
        if isinstance(message, str):
            message = ChatMessage(content=message)
        return cls(message=message)

    def payload(self) -> dict[str, Any]:
        """JSON body sent to the gateway; unset optional fields are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class TokenUsage(BaseModel):
    """Prompt, response and total token usage."""

    prompt_tokens: int | None = None
    response_tokens: int | None = None
    total_tokens: int | None = None


class ModelResponse(BaseModel):
    """Provider response as normalized by the gateway."""

    message: ChatMessage | None = None
    # provider-specific metadata
    metadata: dict[str, Any] | None = None
    token_count: TokenUsage | None = None


class ChatResponse(BaseModel):
    """Unified chat response across all language models."""

    model_config = ConfigDict(protected_namespaces=())

    cached: bool | None = None
    created_at: int | None = None
    id: str | None = None
    model_id: str | None = None
    model_name: str | None = None
    model_response: ModelResponse | None = None
    provider_id: str | None = None
    router_id: str | None = None

    @property
    def content(self) -> str | None:
        """Text of the model message, if the gateway sent one."""
        if self.model_response is None or self.model_response.message is None:
            return None
        return self.model_response.message.content


class RetryConfig(BaseModel):
    """Router retry policy, applied server side."""

    base_multiplier: int | None = None
    max_delay: int | str | None = None
    min_delay: int | str | None = None
    max_retries: int | None = None


class ClientsConfig(BaseModel):
    timeout: int | str | None = None


class LatencyConfig(BaseModel):
    """Latency tracking used by latency-based routing."""

    # weight of new latency measurements
    decay: float | None = None
    # how often the gateway probes models that are not the fastest
    update_interval: str | int | None = None
    # probes required before the moving average is trusted
    warmup_samples: int | None = None


class ProviderConfig(BaseModel):
    """Provider tag and its provider-specific parameters, passed through as-is."""

    name: str
    params: Any = None


class LangModelConfig(BaseModel):
    """One provider model configured under a router.

    Every key that is not a known model field is taken as a provider tag
    (``openai``, ``anthropic``, ...) holding that provider's parameters.
    """

    id: str | None = None
    enabled: bool | None = None
    weight: int | None = None
    error_budget: str | None = None
    client: ClientsConfig | None = None
    latency_config: LatencyConfig | None = None
    providers: list[ProviderConfig] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _collect_providers(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "providers" in data:
            return data
        known = {k: v for k, v in data.items() if k in cls.model_fields}
        known["providers"] = [
            {"name": k, "params": v} for k, v in data.items() if k not in cls.model_fields
        ]
        return known

    @property
    def provider(self) -> ProviderConfig | None:
        return self.providers[0] if self.providers else None


class RouterConfig(BaseModel):
    """Single router configuration."""

    enabled: bool | None = None
    models: list[LangModelConfig] = Field(default_factory=list)
    retry: RetryConfig | None = None
    # unique router ID
    routers: str | None = None
    # strategy for picking the next model to serve a request
    strategy: str | None = None


class RouterConfigs(BaseModel):
    """Body of ``GET /v1/language/``."""

    routers: list[RouterConfig] = Field(default_factory=list)

