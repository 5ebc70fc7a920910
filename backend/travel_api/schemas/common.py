"""
Travel API Backend — Shared Schemas
=====================================

What:  Response models used by every resource: plain acknowledgements,
       the error envelope, and the health check. Also parse_field(), which
       types the raw fields of admin-only requests once access is granted.
"""

from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from travel_api.exceptions import ValidationError


class CamelRequest(BaseModel):
    """
    Base for JSON request bodies.

    Fields declare the client's camelCase key as their alias; services
    read the snake_case attribute. Every field is optional so that access
    checks run before payload completeness is judged by the database.

    Bodies of admin-only endpoints go further and declare their fields as
    Any: a non-admin gets 403 even when a field is malformed, and the
    service types each field with parse_field() after ensure_admin.
    """

    model_config = ConfigDict(populate_by_name=True)


@lru_cache(maxsize=None)
def _adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def parse_field(name: str, value: Any, annotation: Any) -> Any:
    """
    Validate one raw request value against `annotation`.

    None (and an empty form string) stays None so NOT NULL columns still
    report through the database. Anything else that does not fit raises
    ValidationError (400) naming the client's field, e.g. "Invalid tourDate".
    """
    if value is None or value == "":
        return None
    try:
        return _adapter(annotation).validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(
            message=f"Invalid {name}",
            field=name,
            details={"field": name, "reason": e.errors()[0]["msg"]},
        )


class MessageResponse(BaseModel):
    """Acknowledgement for mutations: {"message": "Place added successfully"}."""
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "Signup failed",
            "details": "UNIQUE constraint failed: users.email",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Storage message or extra context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
