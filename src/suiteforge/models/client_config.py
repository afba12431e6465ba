"""Client configuration and retry schedule."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

if TYPE_CHECKING:
    from suiteforge.config.settings import Settings

DEFAULT_IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE"})


class ClientConfig(BaseModel):
    """Options recognized by AuthenticatedClient.

    Attributes:
        base_url: Base URL all request paths are joined to.
        max_attempts: Attempts per request, the first one included.
        base_backoff_ms: Delay before the first retry.
        backoff_cap_ms: Upper bound for a single backoff delay.
        idempotent_methods: Methods retried without explicit opt-in.
        timeout_seconds: Per-request timeout for the default transport.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str
    max_attempts: int = Field(default=3, ge=1)
    base_backoff_ms: int = Field(default=200, ge=0)
    backoff_cap_ms: int = Field(default=5000, ge=0)
    idempotent_methods: frozenset[str] = DEFAULT_IDEMPOTENT_METHODS
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("idempotent_methods")
    @classmethod
    def normalize_methods(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(method.upper() for method in v)

    @model_validator(mode="after")
    def validate_backoff_bounds(self) -> ClientConfig:
        if self.backoff_cap_ms < self.base_backoff_ms:
            raise ValueError("backoff_cap_ms must be >= base_backoff_ms")
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> ClientConfig:
        """Build a client config from environment settings."""
        return cls(
            base_url=settings.base_url,
            max_attempts=settings.max_attempts,
            base_backoff_ms=settings.base_backoff_ms,
            backoff_cap_ms=settings.backoff_cap_ms,
            idempotent_methods=frozenset(settings.idempotent_methods),
            timeout_seconds=settings.timeout_seconds,
        )

    def backoff_seconds(self, retry: int) -> float:
        """Delay before retry number `retry` (0-based), capped.

        With the defaults: 0.2s, 0.4s, 0.8s, ... up to 5s.
        """
        delay_ms = min(self.base_backoff_ms * 2**retry, self.backoff_cap_ms)
        return delay_ms / 1000

    def is_idempotent(self, method: str) -> bool:
        return method.upper() in self.idempotent_methods
