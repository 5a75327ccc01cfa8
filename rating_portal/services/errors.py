"""Service-level error taxonomy.

Services raise these; the app-level exception handler renders them as the
structured ErrorResponse. Messages are safe to show to clients: they never
carry token failure reasons, allowed role sets or driver error text.
"""

from typing import Any


class PortalError(Exception):
    """Base class for errors that map to a client-facing response."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, detail: dict[str, Any] | None = None) -> None:
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class Unauthenticated(PortalError):
    """Missing, invalid or expired token, or the identity no longer exists."""

    status_code = 401
    code = "NOT_AUTHENTICATED"
    message = "Not authenticated"


class InvalidCredentials(PortalError):
    """Login or password check failed. Same message for every cause."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class Forbidden(PortalError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Not permitted"


class InvalidValue(PortalError):
    """A submitted value violates a domain constraint."""

    status_code = 400
    code = "INVALID_VALUE"
    message = "Invalid value"


class NotFound(PortalError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Not found"


class Conflict(PortalError):
    status_code = 409
    code = "CONFLICT"
    message = "Conflict"
