"""
Travel API Backend — Like Service
===================================

What:  The like/unlike toggle and the like-status lookup.
Who:   Called by routes/likes.py.

Toggle Algorithm:
    ┌────────────────────┐   ok    ┌─────────┐
    │ SAVEPOINT; INSERT  │────────▶│ "liked" │
    └────────┬───────────┘         └─────────┘
             │ unique violation on (place_id, user_id)
             ▼
    ┌────────────────────┐   ok    ┌───────────┐
    │ ROLLBACK TO; DELETE│────────▶│ "unliked" │
    └────────────────────┘         └───────────┘

    The INSERT always goes first; existence is never read beforehand.
    With the UNIQUE constraint as the only arbiter, two concurrent likes
    for the same pair cannot both insert: one of them hits the violation
    and turns into a delete. The SAVEPOINT keeps the request transaction
    usable after the failed INSERT (PostgreSQL aborts the whole
    transaction otherwise).

    Any other INSERT failure (unknown place, unknown user) is a
    DatabaseError("Failed to like place").
"""

import logging
from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.exceptions import DatabaseError, is_unique_violation
from travel_api.models.like import Like
from travel_api.schemas.like import LikeStatusResponse, LikeToggleResponse

logger = logging.getLogger(__name__)


class LikeService:
    """Business logic for likes."""

    async def toggle_like(
        self,
        db: AsyncSession,
        place_id: Optional[int],
        user_id: Optional[int],
    ) -> LikeToggleResponse:
        """Like the place, or unlike it if this user already liked it."""
        try:
            async with db.begin_nested():
                await db.execute(insert(Like).values(place_id=place_id, user_id=user_id))
        except IntegrityError as e:
            if not is_unique_violation(e):
                logger.warning("Like error: %s", str(e))
                raise DatabaseError.from_exception("Failed to like place", e)
            return await self._unlike(db, place_id, user_id)
        except SQLAlchemyError as e:
            logger.warning("Like error: %s", str(e))
            raise DatabaseError.from_exception("Failed to like place", e)

        logger.info("Place %s liked by user %s", place_id, user_id)
        return LikeToggleResponse(message="Place liked successfully", liked=True)

    async def _unlike(
        self,
        db: AsyncSession,
        place_id: Optional[int],
        user_id: Optional[int],
    ) -> LikeToggleResponse:
        try:
            await db.execute(
                delete(Like).where(Like.place_id == place_id, Like.user_id == user_id)
            )
        except SQLAlchemyError as e:
            logger.warning("Unlike error: %s", str(e))
            raise DatabaseError.from_exception("Failed to unlike place", e)

        logger.info("Place %s unliked by user %s", place_id, user_id)
        return LikeToggleResponse(message="Place unliked successfully", liked=False)

    async def like_status(
        self,
        db: AsyncSession,
        place_id: int,
        user_id: int,
    ) -> LikeStatusResponse:
        """Whether (place_id, user_id) currently has a like row."""
        try:
            result = await db.execute(
                select(Like.id)
                .where(Like.place_id == place_id, Like.user_id == user_id)
                .limit(1)
            )
            found = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Check like status error: %s", str(e))
            raise DatabaseError.from_exception("Failed to check like status", e)

        return LikeStatusResponse(is_liked=found is not None)


# ── Singleton Instance ────────────────────────────────────────────────────
like_service = LikeService()
