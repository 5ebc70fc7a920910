"""
Travel API Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the different failure classes.
Why:   Services raise these; global handlers (registered in main.py) turn
       them into `{error, details}` JSON with the right status code, so no
       route needs its own try/except.
How:   Each exception carries a human-readable message and optional details.

Exception Hierarchy:
    TravelAPIError (base)
    ├── ValidationError          → 400 Bad Request (bad role, missing image)
    ├── InvalidCredentialsError  → 400 Bad Request (login mismatch)
    ├── AuthorizationError       → 403 Forbidden (not an admin)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 400 Bad Request (storage rejected the statement)
    └── FileStorageError         → 500 Internal Server Error

Details policy:
    Storage failures carry the driver's own message verbatim in `details`.
    The client sees why its statement was rejected (duplicate email,
    missing column, dangling foreign key).
"""

from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# SQLSTATE for unique_violation (PostgreSQL and the SQL standard)
UNIQUE_VIOLATION_SQLSTATE = "23505"


class TravelAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (the `error` field)
        details:  Extra context returned as the `details` field (may be None)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(TravelAPIError):
    """
    Raised when client input fails a business rule.

    When:    Role outside {user, admin}, no image on add-place, unsupported
             or oversized upload, a malformed field on an admin request.
    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types) are FastAPI's
    RequestValidationError, rendered as the same 400 envelope.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        if field and details is None:
            details = {"field": field}
        super().__init__(message=message, details=details)
        self.field = field


class InvalidCredentialsError(TravelAPIError):
    """Raised when no user matches the supplied email/password pair."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message=message)


class AuthorizationError(TravelAPIError):
    """
    Raised when an admin-only operation is attempted by anyone else.

    Absence of the user, a failed role lookup, and a non-admin role all map
    here; the caller cannot tell them apart.
    HTTP:    403 Forbidden
    """

    def __init__(self, message: str = "Only admins can perform this action"):
        super().__init__(message=message)


class NotFoundError(TravelAPIError):
    """
    Raised when a requested resource does not exist.

    When:    DELETE /delete-place/{id} affected zero rows; a stored upload
             is missing from disk.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
    ):
        message = f"{resource} not found"
        details = {"resource_id": resource_id} if resource_id else None
        super().__init__(message=message, details=details)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(TravelAPIError):
    """
    Raised when a database statement fails.

    What:    An insert, delete, or query was rejected by the storage engine.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Any] = None,
    ):
        super().__init__(message=message, details=details)

    @classmethod
    def from_exception(cls, message: str, exc: Exception) -> "DatabaseError":
        """Wrap a driver/SQLAlchemy exception, keeping its message as details."""
        return cls(message=message, details=storage_error_message(exc))


class FileStorageError(TravelAPIError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, directory not writable.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        details: Optional[Any] = None,
    ):
        super().__init__(message=message, details=details)


# ── Storage error helpers ─────────────────────────────────────────────────

def storage_error_message(exc: Exception) -> str:
    """
    Return the driver's own message for a storage exception.

    SQLAlchemy wraps DBAPI errors; `orig` holds the driver exception whose
    text is what the client should see ("UNIQUE constraint failed: ...",
    "duplicate key value violates unique constraint ...").
    """
    orig = getattr(exc, "orig", None)
    if isinstance(exc, SQLAlchemyError) and orig is not None:
        return str(orig)
    return str(exc)


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    True when an IntegrityError was caused by a UNIQUE constraint.

    PostgreSQL drivers expose SQLSTATE (asyncpg as `sqlstate`, psycopg as
    `pgcode`). SQLite and MySQL only say it in the message.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return code == UNIQUE_VIOLATION_SQLSTATE
    text = str(orig).lower()
    return "unique" in text or "duplicate" in text
