"""Request outcome taxonomy.

Every HTTP call made through AuthenticatedClient resolves to exactly one
of these values instead of raising:

- Success: 2xx/3xx response
- ClientError: 4xx response, never retried
- ServerError: 5xx response, retryable
- TransportFailure: network error, timeout or cancellation, retryable
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class _Outcome(BaseModel):
    """Fields shared by all outcomes (request context for diagnostics)."""

    model_config = ConfigDict(frozen=True)

    method: str = ""
    path: str = ""
    attempts: int = Field(default=1, ge=0)

    @property
    def ok(self) -> bool:
        return False

    @property
    def retryable(self) -> bool:
        return False

    def describe(self) -> str:
        raise NotImplementedError


class Success(_Outcome):
    kind: Literal["success"] = "success"
    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return True

    def describe(self) -> str:
        return f"{self.method} {self.path}: {self.status}"


class ClientError(_Outcome):
    kind: Literal["client_error"] = "client_error"
    status: int
    message: str = ""

    def describe(self) -> str:
        return f"{self.method} {self.path}: client error {self.status} {self.message}".rstrip()


class ServerError(_Outcome):
    kind: Literal["server_error"] = "server_error"
    status: int
    message: str = ""

    @property
    def retryable(self) -> bool:
        return True

    def describe(self) -> str:
        return (
            f"{self.method} {self.path}: server error {self.status} {self.message}".rstrip()
            + f" after {self.attempts} attempt(s)"
        )


class TransportFailure(_Outcome):
    kind: Literal["transport_failure"] = "transport_failure"
    cause: str
    cancelled: bool = False

    @property
    def retryable(self) -> bool:
        # A cancelled request must not be retried
        return not self.cancelled

    def describe(self) -> str:
        return f"{self.method} {self.path}: transport failure ({self.cause}) after {self.attempts} attempt(s)"


RequestOutcome = Annotated[
    Success | ClientError | ServerError | TransportFailure,
    Field(discriminator="kind"),
]
