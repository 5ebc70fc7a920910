"""
Travel API Backend — Exception Helper Tests
=============================================

What:  Storage error message extraction and unique-violation detection.
"""

from sqlalchemy.exc import IntegrityError

from travel_api.exceptions import (
    DatabaseError,
    NotFoundError,
    ValidationError,
    is_unique_violation,
    storage_error_message,
)


class _PgError(Exception):
    def __init__(self, message, sqlstate):
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity(orig):
    return IntegrityError("INSERT INTO likes ...", {}, orig)


def test_unique_violation_by_sqlstate():
    assert is_unique_violation(_integrity(_PgError("duplicate key", "23505")))


def test_foreign_key_violation_by_sqlstate():
    assert not is_unique_violation(_integrity(_PgError("violates foreign key", "23503")))


def test_unique_violation_by_sqlite_message():
    assert is_unique_violation(
        _integrity(Exception("UNIQUE constraint failed: likes.place_id, likes.user_id"))
    )


def test_sqlite_foreign_key_failure_is_not_unique():
    assert not is_unique_violation(_integrity(Exception("FOREIGN KEY constraint failed")))


def test_storage_error_message_uses_driver_text():
    exc = _integrity(Exception("NOT NULL constraint failed: places.title"))
    assert storage_error_message(exc) == "NOT NULL constraint failed: places.title"


def test_database_error_from_exception():
    exc = _integrity(Exception("NOT NULL constraint failed: users.email"))
    error = DatabaseError.from_exception("Signup failed", exc)
    assert error.message == "Signup failed"
    assert error.details == "NOT NULL constraint failed: users.email"


def test_not_found_message():
    error = NotFoundError(resource="Place", resource_id="42")
    assert error.message == "Place not found"


def test_validation_error_field_becomes_details():
    error = ValidationError(message="Invalid role", field="role")
    assert error.details == {"field": "role"}
