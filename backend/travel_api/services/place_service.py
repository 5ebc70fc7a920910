"""
Travel API Backend — Place Service
====================================

What:  Add, delete, and list places (with like counts).
Who:   Called by routes/places.py.

Query Contracts:
    list_places:
        SELECT p.*, COUNT(l.id) AS like_count
        FROM places p LEFT JOIN likes l ON p.id = l.place_id
        GROUP BY p.id
        ORDER BY p.created_at DESC

    list_top_places: same shape,
        HAVING COUNT(l.id) > 3 OR p.rating >= 4.0
        ORDER BY p.rating DESC, COUNT(l.id) DESC

Add-place ordering:
    1. image must be present              (400 "No image uploaded")
    2. image validated and written to disk (400 on bad type/size)
    3. admin check                        (403)
    4. rating typed as a number            (400 "Invalid rating")
    5. single INSERT                       (400 on failure; stored file removed)
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import delete, desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.exceptions import DatabaseError, NotFoundError, ValidationError
from travel_api.models.like import Like
from travel_api.models.place import Place
from travel_api.schemas.common import parse_field
from travel_api.schemas.place import PlaceResponse
from travel_api.services.file_service import file_service
from travel_api.services.user_service import user_service

logger = logging.getLogger(__name__)

# Thresholds for /top-places
TOP_PLACE_MIN_LIKES = 3      # strictly more than this many likes
TOP_PLACE_MIN_RATING = 4.0   # or at least this rating


class PlaceService:
    """Business logic for places."""

    def _places_with_like_count(self):
        """Base SELECT of every place column plus its like count."""
        like_count = func.count(Like.id).label("like_count")
        query = (
            select(Place, like_count)
            .outerjoin(Like, Like.place_id == Place.id)
            .group_by(Place.id)
        )
        return query, like_count

    @staticmethod
    def _to_response(place: Place, like_count: int) -> PlaceResponse:
        return PlaceResponse(
            id=place.id,
            title=place.title,
            description=place.description,
            location=place.location,
            image=place.image,
            user_id=place.user_id,
            rating=place.rating if place.rating is not None else 0.0,
            created_at=place.created_at,
            like_count=like_count or 0,
        )

    async def add_place(
        self,
        db: AsyncSession,
        *,
        title: Optional[str],
        description: Optional[str],
        location: Optional[str],
        user_id: Any,
        rating: Any,
        image_filename: Optional[str],
        image_content: Optional[bytes],
    ) -> None:
        """
        Store the image, check the caller is an admin, insert the place.

        Raises:
            ValidationError: no image, image rejected by FileService, or a
                rating that is not a number (checked after the admin check)
            AuthorizationError: caller is not an admin
            DatabaseError: the INSERT failed
        """
        if not image_filename or image_content is None:
            raise ValidationError(message="No image uploaded", field="image")

        absolute_path, image_path = await file_service.validate_and_store(
            filename=image_filename,
            content=image_content,
        )

        try:
            admin_id = await user_service.ensure_admin(
                db, user_id, "Only admins can add places"
            )
            rating_value = parse_field("rating", rating, float)

            place = Place(
                title=title,
                description=description,
                location=location,
                image=image_path,
                user_id=admin_id,
                rating=rating_value if rating_value is not None else 0.0,
            )
            try:
                db.add(place)
                await db.flush()
            except SQLAlchemyError as e:
                logger.warning("Add place error: %s", str(e))
                raise DatabaseError.from_exception("Failed to add place", e)
        except Exception:
            # Nothing references the upload anymore
            await file_service.cleanup_file(absolute_path)
            raise

        logger.info("Place %s added by user %s", place.id, admin_id)

    async def delete_place(
        self,
        db: AsyncSession,
        place_id: int,
        user_id: Any,
    ) -> None:
        """
        Delete a place as an admin.

        Zero affected rows raise NotFoundError (404) rather than a generic
        failure. Likes, comments, and schedules go with it (ON DELETE CASCADE).
        """
        admin_id = await user_service.ensure_admin(
            db, user_id, "Only admins can delete places"
        )

        try:
            result = await db.execute(delete(Place).where(Place.id == place_id))
        except SQLAlchemyError as e:
            logger.warning("Delete place error: %s", str(e))
            raise DatabaseError.from_exception("Failed to delete place", e)

        if result.rowcount == 0:
            raise NotFoundError(resource="Place", resource_id=str(place_id))

        logger.info("Place %s deleted by user %s", place_id, admin_id)

    async def list_places(self, db: AsyncSession) -> List[PlaceResponse]:
        """Every place with its like count, newest first."""
        query, _ = self._places_with_like_count()
        query = query.order_by(desc(Place.created_at), desc(Place.id))
        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Fetch places error: %s", str(e))
            raise DatabaseError.from_exception("Failed to fetch places", e)

        return [self._to_response(place, count) for place, count in rows]

    async def list_top_places(self, db: AsyncSession) -> List[PlaceResponse]:
        """
        Places with more than three likes or a rating of at least 4.0.

        Ordered by rating, then like count, both descending.
        """
        query, like_count = self._places_with_like_count()
        query = query.having(
            or_(
                func.count(Like.id) > TOP_PLACE_MIN_LIKES,
                Place.rating >= TOP_PLACE_MIN_RATING,
            )
        ).order_by(desc(Place.rating), desc(like_count), desc(Place.id))
        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Fetch top places error: %s", str(e))
            raise DatabaseError.from_exception("Failed to fetch top places", e)

        return [self._to_response(place, count) for place, count in rows]


# ── Singleton Instance ────────────────────────────────────────────────────
place_service = PlaceService()
