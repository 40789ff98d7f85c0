"""User entity package.

- User, UserCreate, UserUpdate: domain entity and request models
- UserTable: database persistence model
- UserQuery: search filters and pagination
- UserRepository: data access layer
"""

from .entity import DEFAULT_STATUS, User, UserCreate, UserUpdate
from .query import UserQuery
from .repository import UserRepository
from .table import UserTable

__all__ = [
    "DEFAULT_STATUS",
    "User",
    "UserCreate",
    "UserQuery",
    "UserRepository",
    "UserTable",
    "UserUpdate",
]
