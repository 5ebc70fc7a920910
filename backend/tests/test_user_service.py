"""
Travel API Backend — User Service Unit Tests
===============================================

What:  Tests for UserService (admin check, signup, login).
How:   Uses the mock DB session; no real database.

What we test:
    ✅ is_admin is True only for an existing row with role "admin"
    ✅ lookup failures count as "not an admin"
    ✅ ensure_admin raises AuthorizationError with the caller's message
    ✅ invalid role rejected before any storage access
    ✅ password stored hashed
    ✅ login distinguishes nothing between unknown email and wrong password
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from travel_api.exceptions import (
    AuthorizationError,
    DatabaseError,
    InvalidCredentialsError,
    ValidationError,
)
from travel_api.models.user import User
from travel_api.schemas.user import LoginRequest, SignupRequest
from travel_api.security import hash_password, verify_password
from travel_api.services.user_service import UserService


def _result(value):
    """Mimic the Result returned by AsyncSession.execute for scalar lookups."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestAdminCheck:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_admin_role(self, mock_db_session):
        mock_db_session.execute.return_value = _result("admin")
        assert await self.service.is_admin(mock_db_session, 1) is True

    @pytest.mark.asyncio
    async def test_user_role(self, mock_db_session):
        mock_db_session.execute.return_value = _result("user")
        assert await self.service.is_admin(mock_db_session, 2) is False

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        assert await self.service.is_admin(mock_db_session, 999) is False

    @pytest.mark.asyncio
    async def test_missing_user_id_skips_lookup(self, mock_db_session):
        assert await self.service.is_admin(mock_db_session, None) is False
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_failure_is_not_admin(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        assert await self.service.is_admin(mock_db_session, 1) is False

    @pytest.mark.asyncio
    async def test_ensure_admin_uses_message(self, mock_db_session):
        mock_db_session.execute.return_value = _result("user")
        with pytest.raises(AuthorizationError, match="Only admins can add places"):
            await self.service.ensure_admin(mock_db_session, 2, "Only admins can add places")

    @pytest.mark.asyncio
    async def test_numeric_string_user_id(self, mock_db_session):
        mock_db_session.execute.return_value = _result("admin")
        assert await self.service.is_admin(mock_db_session, "5") is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", ["not-a-number", "1.5", [1], {"id": 1}])
    async def test_non_numeric_user_id_skips_lookup(self, mock_db_session, user_id):
        assert await self.service.is_admin(mock_db_session, user_id) is False
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ensure_admin_returns_int_id(self, mock_db_session):
        mock_db_session.execute.return_value = _result("admin")
        assert await self.service.ensure_admin(mock_db_session, "7", "Only admins") == 7


class TestSignup:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_signup_hashes_password(self, mock_db_session):
        payload = SignupRequest(username="ana", email="ana@example.com", password="pw", role="user")
        await self.service.signup(mock_db_session, payload)

        user = mock_db_session.add.call_args.args[0]
        assert isinstance(user, User)
        assert user.password != "pw"
        assert verify_password("pw", user.password)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", ["superuser", "", None, "Admin"])
    async def test_invalid_role_rejected_before_storage(self, mock_db_session, role):
        payload = SignupRequest(username="ana", email="ana@example.com", password="pw", role=role)
        with pytest.raises(ValidationError, match="Invalid role"):
            await self.service.signup(mock_db_session, payload)

        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_constraint_failure_is_database_error(self, mock_db_session):
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: users.email")
        )
        payload = SignupRequest(username="ana", email="ana@example.com", password="pw", role="user")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.signup(mock_db_session, payload)

        assert exc_info.value.message == "Signup failed"
        assert "users.email" in exc_info.value.details


class TestLogin:

    def setup_method(self):
        self.service = UserService()

    def _stored_user(self):
        return User(
            id=5,
            username="ana",
            email="ana@example.com",
            password=hash_password("pw"),
            role="user",
        )

    @pytest.mark.asyncio
    async def test_login_success_returns_public_record(self, mock_db_session):
        mock_db_session.execute.return_value = _result(self._stored_user())

        response = await self.service.login(
            mock_db_session, LoginRequest(email="ana@example.com", password="pw")
        )

        assert response.message == "Login successful"
        assert response.user.id == 5
        assert "password" not in response.model_dump()["user"]

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db_session):
        mock_db_session.execute.return_value = _result(self._stored_user())
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            await self.service.login(
                mock_db_session, LoginRequest(email="ana@example.com", password="nope")
            )

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            await self.service.login(
                mock_db_session, LoginRequest(email="ghost@example.com", password="pw")
            )

    @pytest.mark.asyncio
    async def test_storage_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        with pytest.raises(DatabaseError, match="Login failed"):
            await self.service.login(
                mock_db_session, LoginRequest(email="ana@example.com", password="pw")
            )


def test_role_checks_only_through_service():
    """The model carries no role shortcut; UserService.is_admin reads the row."""
    assert not hasattr(User, "is_admin")
    assert not hasattr(User(role="admin"), "is_admin")
