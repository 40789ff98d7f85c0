"""User domain entity and request models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.users_api.entities.core._base import Entity

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 200
STATUS_MAX_LENGTH = 50
DEFAULT_STATUS = "active"
# Range of the 32-bit integer age column.
AGE_MIN = 0
AGE_MAX = 2**31 - 1

# Columns that may not be set to null once a record exists.
REQUIRED_FIELDS = ("name", "email", "status")


class User(Entity):
    """User entity representing a person in the system.

    This is the domain model returned by the repository and serialized in
    responses. It inherits from Entity to get the UUID identifier and the
    ``createdAt``/``updatedAt`` timestamps.
    """

    name: str = Field(max_length=NAME_MAX_LENGTH, description="Display name")
    email: str = Field(max_length=EMAIL_MAX_LENGTH, description="Unique email address")
    age: int | None = Field(default=None, description="Age in years")
    status: str = Field(default=DEFAULT_STATUS, max_length=STATUS_MAX_LENGTH)

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
            and self.age == other.age
            and self.status == other.status
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((self.id, self.name, self.email, self.age, self.status))


class UserCreate(BaseModel):
    """Body of ``POST /users``.

    ``name`` and ``email`` are optional here so that their absence is
    reported by the service with a single message instead of one error per
    field.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LENGTH)
    age: int | None = Field(default=None, ge=AGE_MIN, le=AGE_MAX)
    status: str | None = Field(default=None, min_length=1, max_length=STATUS_MAX_LENGTH)


class UserUpdate(BaseModel):
    """Body of ``PUT /users/{id}``; only keys present in the payload are applied."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: str | None = Field(default=None, min_length=1, max_length=EMAIL_MAX_LENGTH)
    age: int | None = Field(default=None, ge=AGE_MIN, le=AGE_MAX)
    status: str | None = Field(default=None, min_length=1, max_length=STATUS_MAX_LENGTH)

    def changes(self) -> dict[str, Any]:
        """Return the supplied keys and their values."""
        return self.model_dump(exclude_unset=True)
