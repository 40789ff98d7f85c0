"""User repository for data access operations."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import and_, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from src.users_api.core.exceptions import ConflictError
from src.users_api.entities.core._base import as_utc, utc_now
from src.users_api.entities.core.user.entity import User
from src.users_api.entities.core.user.query import UserQuery
from src.users_api.entities.core.user.table import UserTable

WRITABLE_FIELDS = frozenset({"name", "email", "age", "status"})

# How SQLite and PostgreSQL name the unique email index in error messages.
EMAIL_CONSTRAINT_MARKERS = ("users.email", "ix_users_email")


class UserRepository:
    """Data-access layer for users.

    Every write commits its own transaction. A rejected write rolls the
    session back before the error propagates.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, fields: Mapping[str, Any]) -> User:
        """Insert a new user.

        ``created_at`` and ``updated_at`` receive the same timestamp.

        Raises:
            ConflictError: If the email is already taken.
        """
        self._check_fields(fields)
        now = utc_now()
        row = UserTable(**fields, created_at=now, updated_at=now)
        self._session.add(row)
        self._commit()
        self._session.refresh(row)
        return self._to_entity(row)

    def get(self, user_id: str) -> User | None:
        row = self._get_row(user_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get_by_email(self, email: str) -> User | None:
        statement = select(UserTable).where(col(UserTable.email) == email)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def search(self, query: UserQuery) -> tuple[list[User], int]:
        """Return one page of matching users and the total number of matches."""
        conditions = query.conditions()

        count_statement = select(func.count()).select_from(UserTable)
        page_statement = select(UserTable)
        if conditions:
            count_statement = count_statement.where(and_(*conditions))
            page_statement = page_statement.where(and_(*conditions))

        total = self._session.exec(count_statement).one()
        page_statement = (
            page_statement.order_by(*query.ordering())
            .offset(query.offset)
            .limit(query.limit)
        )
        rows = self._session.exec(page_statement).all()
        return [self._to_entity(row) for row in rows], total

    def update(self, user_id: str, fields: Mapping[str, Any]) -> User | None:
        """Apply ``fields`` to an existing user, leaving other columns untouched.

        Returns None when no user has ``user_id``.

        Raises:
            ConflictError: If the new email is already taken.
        """
        self._check_fields(fields)
        row = self._get_row(user_id)
        if row is None:
            return None

        for name, value in fields.items():
            setattr(row, name, value)
        row.updated_at = max(utc_now(), as_utc(row.created_at))

        self._session.add(row)
        self._commit()
        self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, user_id: str) -> bool:
        row = self._get_row(user_id)
        if row is None:
            return False
        self._session.delete(row)
        self._commit()
        return True

    def _get_row(self, user_id: str) -> UserTable | None:
        statement = select(UserTable).where(col(UserTable.id) == user_id)
        return self._session.exec(statement).first()

    def _commit(self) -> None:
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            if any(marker in str(exc.orig) for marker in EMAIL_CONSTRAINT_MARKERS):
                raise ConflictError("email already exists") from exc
            raise
        except SQLAlchemyError:
            self._session.rollback()
            raise

    @staticmethod
    def _check_fields(fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {', '.join(sorted(unknown))}")

    @staticmethod
    def _to_entity(row: UserTable) -> User:
        return User.model_validate(row, from_attributes=True)
