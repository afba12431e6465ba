"""Entity builders.

Fluent accumulation of optional fields for a domain entity, terminating in
a single POST through AuthenticatedClient.

State machine:
    OPEN  -> accepting with_field() calls
    BUILT -> build() was called (success or failure), terminal

A builder creates at most one server-side resource. Copy-pasted test
code that calls build() twice fails with AlreadyBuiltError instead of
creating a duplicate.
"""

from __future__ import annotations

import copy
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar

import structlog
from pydantic import ValidationError

from suiteforge.core.exceptions import AlreadyBuiltError, EntityParseError, RequestFailedError
from suiteforge.models.entity import Entity, User
from suiteforge.models.outcome import Success

if TYPE_CHECKING:
    from suiteforge.models.credential import Credential
    from suiteforge.services.client import AuthenticatedClient

log = structlog.get_logger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)


class BuilderState(str, Enum):
    """Builder lifecycle state."""

    OPEN = "open"
    BUILT = "built"  # Terminal state


class EntityBuilder(Generic[EntityT]):
    """Accumulates an entity draft and creates it via POST.

    Not safe for concurrent use of one instance; give each test its own
    builder.

    Example:
        builder = EntityBuilder("/projects")
        project = await (
            builder.with_field("name", "Demo")
            .with_field("visibility", "private")
            .build(client)
        )
    """

    def __init__(self, path: str, model: type[EntityT] = Entity) -> None:  # type: ignore[assignment]
        self.path = path
        self.model = model
        self._draft: dict[str, Any] = {}
        self._state = BuilderState.OPEN

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def draft(self) -> dict[str, Any]:
        """Copy of the accumulated fields."""
        return copy.deepcopy(self._draft)

    def _label(self) -> str:
        return f"{type(self).__name__}({self.path})"

    def _ensure_open(self) -> None:
        if self._state is not BuilderState.OPEN:
            raise AlreadyBuiltError(self._label())

    def with_field(self, name: str, value: Any) -> Self:
        """Set one draft field. A later call for the same field wins."""
        self._ensure_open()
        self._draft[name] = value
        return self

    def with_fields(self, **values: Any) -> Self:
        self._ensure_open()
        self._draft.update(values)
        return self

    async def build(self, client: AuthenticatedClient, credential: Credential | None = None) -> EntityT:
        """POST the draft and parse the created entity.

        The builder is spent as soon as this is called, whatever the outcome.

        Args:
            client: Client used for the creation request.
            credential: Overrides the client's default credential.

        Returns:
            The entity parsed from the response body.

        Raises:
            AlreadyBuiltError: If build() was already called on this builder.
            RequestFailedError: If the request did not succeed.
            EntityParseError: If the response body does not match the model.
        """
        self._ensure_open()
        # Mark spent before awaiting so a second call never reaches the network
        self._state = BuilderState.BUILT

        outcome = await client.request("POST", self.path, self.draft, credential)
        if not isinstance(outcome, Success):
            log.warning("entity_build_failed", builder=self._label(), outcome=outcome.kind)
            raise RequestFailedError(outcome)

        try:
            entity = self.model.model_validate(outcome.body)
        except ValidationError as e:
            raise EntityParseError(f"POST {self.path}: unexpected response body: {e}") from e

        log.debug("entity_built", builder=self._label(), entity_id=entity.id)
        return entity


class UserBuilder(EntityBuilder[User]):
    """Builder for user accounts.

    Example:
        user = await UserBuilder().with_name("John").with_email("j@x.com").build(client)
    """

    def __init__(self, path: str = "/users") -> None:
        super().__init__(path, User)

    def with_name(self, name: str) -> Self:
        return self.with_field("name", name)

    def with_email(self, email: str) -> Self:
        return self.with_field("email", email)

    def with_role(self, role: str) -> Self:
        return self.with_field("role", role)
