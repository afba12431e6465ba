"""Entity models materialized by builders."""

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """A server-side resource created from a builder draft.

    Only `id` is required; any other fields returned by the API are kept.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str

    def as_dict(self) -> dict:
        return self.model_dump()


class User(Entity):
    """User account returned by POST /users."""

    name: str = Field(min_length=1)
    email: str
    role: str | None = None
