"""
Travel API Backend — User Service
===================================

What:  Signup, login, and the admin access check.
Who:   Signup/login are called by routes/auth.py; ensure_admin is called by
       every admin-gated service method (places, agencies, tour schedules,
       comment replies).

Access Check Contract:
    A caller is an admin iff a users row exists for the given id and its
    role is exactly "admin". A missing id, a missing row, a failed lookup,
    and a non-admin role are indistinguishable to the client: all raise
    AuthorizationError (403) with the endpoint's own message.
    The check runs again on every request; nothing is cached.
"""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.exceptions import (
    AuthorizationError,
    DatabaseError,
    InvalidCredentialsError,
    ValidationError,
)
from travel_api.models.user import ROLE_ADMIN, VALID_ROLES, User
from travel_api.schemas.common import parse_field
from travel_api.schemas.user import LoginRequest, LoginResponse, SignupRequest, UserResponse
from travel_api.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Account creation, credential checks, and role lookups."""

    @staticmethod
    def _as_user_id(value: Any) -> Optional[int]:
        """Raw userId from a body or form as an int; None when it is not one."""
        try:
            return parse_field("userId", value, int)
        except ValidationError:
            return None

    async def is_admin(self, db: AsyncSession, user_id: Any) -> bool:
        """
        Return True iff `user_id` names an existing admin.

        Lookup failures count as "not an admin"; they are logged but never
        surface as a storage error.
        """
        user_id = self._as_user_id(user_id)
        if user_id is None:
            return False
        try:
            result = await db.execute(select(User.role).where(User.id == user_id))
            role = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning("Role lookup failed for user %s: %s", user_id, str(e))
            return False
        return role == ROLE_ADMIN

    async def ensure_admin(
        self,
        db: AsyncSession,
        user_id: Any,
        message: str,
    ) -> int:
        """
        Raise AuthorizationError(message) unless `user_id` is an admin.

        Args:
            user_id: Raw userId as received (int, numeric string, garbage)
            message: Endpoint-specific refusal, e.g. "Only admins can add places"

        Returns: The admin's id as an int.
        """
        if not await self.is_admin(db, user_id):
            logger.info("Admin check refused user %r: %s", user_id, message)
            raise AuthorizationError(message)
        return self._as_user_id(user_id)

    async def signup(self, db: AsyncSession, payload: SignupRequest) -> None:
        """
        Create a user with a bcrypt-hashed password.

        The role is checked before any storage access. Constraint failures
        (duplicate email, missing fields) become DatabaseError("Signup failed")
        carrying the storage message.
        """
        if payload.role not in VALID_ROLES:
            raise ValidationError(message="Invalid role", field="role")

        user = User(
            username=payload.username,
            email=payload.email,
            password=hash_password(payload.password) if payload.password else None,
            role=payload.role,
        )
        try:
            db.add(user)
            await db.flush()
        except SQLAlchemyError as e:
            logger.warning("Signup error: %s", str(e))
            raise DatabaseError.from_exception("Signup failed", e)

        logger.info("User created: id=%s role=%s", user.id, user.role)

    async def login(self, db: AsyncSession, payload: LoginRequest) -> LoginResponse:
        """
        Verify email/password and return the public user record.

        No session or token is issued; the client keeps the returned id and
        sends it as userId on later requests.
        """
        logger.info("Login attempt: email=%s", payload.email)
        if not payload.email or not payload.password:
            raise InvalidCredentialsError()

        try:
            result = await db.execute(select(User).where(User.email == payload.email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Login error: %s", str(e))
            raise DatabaseError.from_exception("Login failed", e)

        if user is None or not verify_password(payload.password, user.password):
            logger.info("Login failed: invalid credentials for %s", payload.email)
            raise InvalidCredentialsError()

        logger.info("Login successful: user %s", user.id)
        return LoginResponse(user=UserResponse.model_validate(user))


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
