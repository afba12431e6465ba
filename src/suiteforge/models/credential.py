"""Credential model for header injection."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr

AuthHeader = Literal["Authorization", "Proxy-Authorization"]


class Credential(BaseModel):
    """Opaque token plus the header it must be injected under.

    Supplied by an external token source. The client never fetches,
    refreshes or inspects it.
    """

    model_config = ConfigDict(frozen=True)

    token: SecretStr = Field(description="Opaque bearer token")
    header: AuthHeader = Field(default="Authorization", description="Target header name")
    scheme: str = Field(default="Bearer", min_length=1, description="Auth scheme prefix")

    def header_value(self) -> str:
        """Render the header value, e.g. 'Bearer abc123'."""
        return f"{self.scheme} {self.token.get_secret_value()}"

    @classmethod
    def bearer(cls, token: str) -> "Credential":
        """Credential for the Authorization header."""
        return cls(token=SecretStr(token))

    @classmethod
    def proxy(cls, token: str) -> "Credential":
        """Credential for an identity-aware proxy (Proxy-Authorization)."""
        return cls(token=SecretStr(token), header="Proxy-Authorization")
