"""Application settings using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SuiteForge configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SUITEFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Logging
    debug: bool = Field(default=False, description="Pretty console logs instead of JSON")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum log level"
    )
    setup_logging: bool = Field(
        default=True, description="Let the pytest plugin configure structlog at session start"
    )

    # API under test
    base_url: str = Field(default="http://localhost:8000", description="Base URL of the API under test")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")

    # Retry policy
    max_attempts: int = Field(default=3, ge=1, le=10, description="Attempts per request, first one included")
    base_backoff_ms: int = Field(default=200, ge=0, description="Delay before the first retry")
    backoff_cap_ms: int = Field(default=5000, ge=0, description="Upper bound for a single backoff delay")
    idempotent_methods: set[str] = Field(
        default_factory=lambda: {"GET", "PUT", "DELETE"},
        description="Methods retried without explicit opt-in",
    )

    # Credentials (issued by an external token exchange)
    api_token: SecretStr | None = Field(default=None, description="Bearer token for the API under test")
    auth_header: Literal["Authorization", "Proxy-Authorization"] = Field(
        default="Authorization", description="Header the token is injected under"
    )

    # Static test data
    selectors_path: Path | None = Field(default=None, description="JSON file of dotted selector names")
    fixtures_path: Path | None = Field(default=None, description="JSON file of named fixture records")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("idempotent_methods")
    @classmethod
    def normalize_methods(cls, v: set[str]) -> set[str]:
        """Upper-case HTTP method names."""
        return {method.strip().upper() for method in v if method.strip()}

    @field_validator("api_token")
    @classmethod
    def blank_token_is_unset(cls, v: SecretStr | None) -> SecretStr | None:
        """Treat an empty token (unset CI secret) as no token."""
        if v is not None and not v.get_secret_value().strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_backoff_bounds(self) -> "Settings":
        """Backoff cap must not be below the base delay."""
        if self.backoff_cap_ms < self.base_backoff_ms:
            raise ValueError("backoff_cap_ms must be >= base_backoff_ms")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
