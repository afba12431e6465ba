"""Credential sources.

Tokens are issued by an external collaborator (identity-aware proxy,
secrets store, CI variable). These sources only hand the result to the
client; none of them acquires, refreshes or caches a token.
"""

from typing import Protocol, runtime_checkable

from suiteforge.config.settings import Settings, get_settings
from suiteforge.core.exceptions import ConfigError
from suiteforge.models.credential import Credential


@runtime_checkable
class CredentialSource(Protocol):
    """Anything that can supply a Credential."""

    def get_credential(self) -> Credential: ...


class StaticCredentialSource:
    """Source returning a fixed credential."""

    def __init__(self, credential: Credential) -> None:
        self._credential = credential

    def get_credential(self) -> Credential:
        return self._credential


class SettingsCredentialSource:
    """Source reading SUITEFORGE_API_TOKEN and SUITEFORGE_AUTH_HEADER."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def get_credential(self) -> Credential:
        """Build a credential from settings.

        Raises:
            ConfigError: If no API token is configured.
        """
        token = self._settings.api_token
        if token is None or not token.get_secret_value():
            raise ConfigError("Missing required env var: SUITEFORGE_API_TOKEN")
        return Credential(token=token, header=self._settings.auth_header)
