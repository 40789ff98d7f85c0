"""Exception taxonomy for the Users API.

Every error raised on purpose by the service derives from
:class:`UsersApiError` and carries the HTTP status code it maps to. The HTTP
layer translates these into responses in one place
(``src.users_api.api.http.errors``).
"""

from typing import Any


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

    status_code = 500

    def __init__(self, message: str):
        """Initialize the exception.

        Args:
            message: Human-readable message safe to return to the caller.
        """
        self.message = message
        super().__init__(message)


class ValidationError(UsersApiError):
    """Raised when required input is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        """Initialize the exception.

        Args:
            message: Summary of the validation failure.
            errors: Optional per-field details.
        """
        self.errors = errors or []
        super().__init__(message)


class ConflictError(UsersApiError):
    """Raised when a write would violate a uniqueness constraint."""

    status_code = 400


class NotFoundError(UsersApiError):
    """Raised when no record exists for the given identifier."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        """Initialize the exception.

        Args:
            resource: Name of the resource type, e.g. ``"User"``.
            identifier: The identifier that was looked up.
        """
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found")


class InternalError(UsersApiError):
    """Raised for unexpected failures; the message never reaches the caller."""

    status_code = 500
