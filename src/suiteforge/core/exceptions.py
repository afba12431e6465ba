"""SuiteForge exception hierarchy.

This module defines the base exception class and specialized exceptions
for each failure category: static source data, lookups, builder reuse
and escalated HTTP outcomes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from suiteforge.models.outcome import RequestOutcome


class SuiteForgeError(Exception):
    """Base exception for all SuiteForge errors.

    All custom exceptions in SuiteForge inherit from this class so test
    code can catch toolkit failures in one place.
    """

    pass


class ConfigError(SuiteForgeError):
    """Raised when static source data is malformed.

    Use this for selector or fixture sources that cannot be parsed,
    contain duplicate names, or hold values of the wrong type.

    Attributes:
        source: Path or label of the offending source, if known.

    Example:
        raise ConfigError("Duplicate selector name: login.username", source="selectors.json")
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class NotFoundError(SuiteForgeError, KeyError):
    """Raised when a lookup key has no entry.

    Attributes:
        name: The missing key.
        registry: Name of the registry that was searched.

    Example:
        raise NotFoundError(name="login.password", registry="selectors")
    """

    def __init__(self, name: str, registry: str) -> None:
        self.name = name
        self.registry = registry
        super().__init__(f"{registry}: no entry named '{name}'")

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0])


class DuplicateError(SuiteForgeError):
    """Raised when a name is registered twice.

    Attributes:
        name: The name that already exists.
        registry: Name of the registry holding it.
    """

    def __init__(self, name: str, registry: str) -> None:
        self.name = name
        self.registry = registry
        super().__init__(f"{registry}: '{name}' is already registered")


class AlreadyBuiltError(SuiteForgeError):
    """Raised when a spent builder is used again.

    A builder materializes exactly one entity. Reusing it would create
    a duplicate server-side resource.

    Attributes:
        builder: Label of the builder (class name and target path).
    """

    def __init__(self, builder: str) -> None:
        self.builder = builder
        super().__init__(f"{builder}: builder already used, create a new one")


class RequestFailedError(SuiteForgeError):
    """Raised when a non-success request outcome is escalated.

    The core client returns outcomes as values; this exception is only
    produced by the exception-style helpers (`AuthenticatedClient.send`,
    `EntityBuilder.build`).

    Attributes:
        outcome: The failed RequestOutcome (ClientError, ServerError, TransportFailure).
        status_code: HTTP status code if available, None otherwise.
    """

    def __init__(self, outcome: RequestOutcome) -> None:
        self.outcome = outcome
        self.status_code: int | None = getattr(outcome, "status", None)
        super().__init__(outcome.describe())


class EntityParseError(SuiteForgeError):
    """Raised when a created entity's response body does not match its model.

    Example:
        raise EntityParseError("POST /users: response missing 'id'")
    """

    pass
