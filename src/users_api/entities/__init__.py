"""Entities organized by business concept.

Each entity package contains:
- entity.py: Domain model and request models
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.user import User, UserCreate, UserQuery, UserRepository, UserTable, UserUpdate

__all__ = [
    "User",
    "UserCreate",
    "UserQuery",
    "UserRepository",
    "UserTable",
    "UserUpdate",
]
