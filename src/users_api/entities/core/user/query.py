"""Search filters and pagination for the users collection.

Query-string values arrive as raw strings. Unparseable numbers are treated
as absent rather than rejected, and the pagination defaults fill the gap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, UnaryExpression, func, or_
from sqlmodel import col

from src.users_api.entities.core.user.table import UserTable

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

# Signed 64-bit range accepted by every supported backend.
SQL_INT_MIN = -(2**63)
SQL_INT_MAX = 2**63 - 1


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_int(value: Any) -> int | None:
    """Parse an integer query value, returning None when it is not one."""
    if _blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            return None
    return number if SQL_INT_MIN <= number <= SQL_INT_MAX else None


def parse_number(value: Any) -> int | float | None:
    """Parse a finite numeric query value (``"30"``, ``"17.5"``), else None.

    Values outside the signed 64-bit range count as unparseable.
    """
    if _blank(value) or isinstance(value, bool):
        return None
    parsed = parse_int(value)
    if parsed is not None:
        return parsed
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number) or not SQL_INT_MIN <= number <= SQL_INT_MAX:
        return None
    return number


@dataclass(frozen=True)
class UserQuery:
    """Filters and page window for a user search.

    All filters are optional and combined with AND. ``q`` matches ``name``
    or ``email`` as a case-insensitive substring; ``min_age``/``max_age``
    are inclusive and never match a null ``age``.

    Case folding uses the database ``lower()``. SQLite only folds ASCII
    letters, so non-ASCII text matches case-sensitively there.
    """

    q: str | None = None
    status: str | None = None
    min_age: int | float | None = None
    max_age: int | float | None = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    @classmethod
    def from_params(
        cls,
        *,
        q: str | None = None,
        status: str | None = None,
        min_age: Any = None,
        max_age: Any = None,
        limit: Any = None,
        offset: Any = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> UserQuery:
        """Build a query from raw request parameters."""
        page_size = parse_int(limit)
        if page_size is None or page_size < 1:
            page_size = default_limit
        start = parse_int(offset)
        if start is None or start < 0:
            start = 0

        return cls(
            q=q or None,
            status=status or None,
            min_age=parse_number(min_age),
            max_age=parse_number(max_age),
            limit=min(page_size, max_limit),
            offset=start,
        )

    def conditions(self) -> list[ColumnElement[bool]]:
        """Predicates for the supplied filters; absent filters add nothing."""
        conditions: list[ColumnElement[bool]] = []

        if self.q:
            needle = self.q.lower()
            conditions.append(
                or_(
                    func.lower(col(UserTable.name)).contains(needle, autoescape=True),
                    func.lower(col(UserTable.email)).contains(needle, autoescape=True),
                )
            )
        if self.status:
            conditions.append(col(UserTable.status) == self.status)
        if self.min_age is not None:
            conditions.append(col(UserTable.age) >= self.min_age)
        if self.max_age is not None:
            conditions.append(col(UserTable.age) <= self.max_age)

        return conditions

    def ordering(self) -> tuple[UnaryExpression[Any], ...]:
        """Newest first; records created at the same instant keep insertion order."""
        return (col(UserTable.created_at).desc(), col(UserTable.seq).asc())
