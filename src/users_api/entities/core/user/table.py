"""User database table model."""

from sqlmodel import Field

from src.users_api.entities.core._base import EntityTable
from src.users_api.entities.core.user.entity import (
    DEFAULT_STATUS,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    STATUS_MAX_LENGTH,
)


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the database. The unique
    index on ``email`` is the source of truth for email uniqueness.
    """

    __tablename__ = "users"

    name: str = Field(max_length=NAME_MAX_LENGTH, index=True)
    email: str = Field(max_length=EMAIL_MAX_LENGTH, unique=True, index=True)
    age: int | None = Field(default=None)
    status: str = Field(default=DEFAULT_STATUS, max_length=STATUS_MAX_LENGTH)
