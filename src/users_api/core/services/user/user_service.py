from loguru import logger

from src.users_api.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.users_api.entities.core.user.entity import (
    DEFAULT_STATUS,
    REQUIRED_FIELDS,
    User,
    UserCreate,
    UserUpdate,
)
from src.users_api.entities.core.user.query import UserQuery
from src.users_api.entities.core.user.repository import UserRepository

EMAIL_TAKEN = "email already exists"


class UserService:
    """Resource handlers for the users collection.

    Validation and the email uniqueness pre-check run here, before the
    repository is asked to write anything. The pre-check is best effort: a
    concurrent duplicate is still rejected by the unique index and surfaces
    from the repository as the same ``ConflictError``.
    """

    def __init__(self, repository: UserRepository):
        self._repository = repository

    def create_user(self, payload: UserCreate) -> User:
        if not payload.name or not payload.email:
            raise ValidationError("name and email are required")

        if self._repository.get_by_email(payload.email) is not None:
            raise ConflictError(EMAIL_TAKEN)

        user = self._repository.create(
            {
                "name": payload.name,
                "email": payload.email,
                "age": payload.age,
                "status": payload.status or DEFAULT_STATUS,
            }
        )
        logger.info("Created user {}", user.id)
        return user

    def list_users(self, query: UserQuery) -> tuple[list[User], int]:
        users, total = self._repository.search(query)
        logger.debug(
            "Listed {} of {} users (limit={}, offset={})",
            len(users),
            total,
            query.limit,
            query.offset,
        )
        return users, total

    def get_user(self, user_id: str) -> User:
        user = self._repository.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def update_user(self, user_id: str, payload: UserUpdate) -> User:
        """Apply the keys present in ``payload``; absent keys keep their values."""
        changes = payload.changes()
        nulls = sorted(name for name in REQUIRED_FIELDS if name in changes and changes[name] is None)
        if nulls:
            raise ValidationError(f"{', '.join(nulls)} cannot be null")

        current = self.get_user(user_id)

        email = changes.get("email")
        if email is not None and email != current.email:
            if self._repository.get_by_email(email) is not None:
                raise ConflictError(EMAIL_TAKEN)

        updated = self._repository.update(user_id, changes)
        if updated is None:
            # Deleted between the lookup and the write.
            raise NotFoundError("User", user_id)
        logger.info("Updated user {} ({})", user_id, ", ".join(sorted(changes)) or "no fields")
        return updated

    def delete_user(self, user_id: str) -> None:
        if not self._repository.delete(user_id):
            raise NotFoundError("User", user_id)
        logger.info("Deleted user {}", user_id)
