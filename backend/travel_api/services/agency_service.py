"""
Travel API Backend — Agency Service
=====================================

What:  Agencies and their tour schedules.
Who:   Called by routes/agencies.py.

Query Contracts:
    list_agencies:
        SELECT * FROM agencies ORDER BY created_at DESC

    list_tour_schedules(agency_id):
        SELECT ts.*, p.title AS place_title
        FROM tour_schedules ts JOIN places p ON ts.place_id = p.id
        WHERE ts.agency_id = :agency_id
        ORDER BY ts.tour_date ASC
"""

import logging
from datetime import date
from typing import Any, List, Optional

from sqlalchemy import asc, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.exceptions import DatabaseError
from travel_api.models.agency import Agency, TourSchedule
from travel_api.models.place import Place
from travel_api.schemas.agency import AgencyResponse, TourScheduleCreate, TourScheduleResponse
from travel_api.schemas.common import parse_field
from travel_api.services.file_service import file_service
from travel_api.services.user_service import user_service

logger = logging.getLogger(__name__)


class AgencyService:
    """Business logic for agencies and tour schedules."""

    async def add_agency(
        self,
        db: AsyncSession,
        *,
        name: Optional[str],
        description: Optional[str],
        contact: Optional[str],
        user_id: Any,
        image_filename: Optional[str] = None,
        image_content: Optional[bytes] = None,
    ) -> None:
        """
        Insert an agency as an admin. The image is optional.

        When an image part is supplied it is validated and stored first, so
        the path exists before the INSERT references it. A zero-byte part is
        an image too, and is rejected as empty like on /add-place.
        """
        absolute_path: Optional[str] = None
        image_path: Optional[str] = None
        if image_content is not None:
            absolute_path, image_path = await file_service.validate_and_store(
                filename=image_filename or "",
                content=image_content,
            )

        try:
            admin_id = await user_service.ensure_admin(
                db, user_id, "Only admins can add agencies"
            )

            agency = Agency(
                name=name,
                description=description,
                contact=contact,
                image=image_path,
            )
            try:
                db.add(agency)
                await db.flush()
            except SQLAlchemyError as e:
                logger.warning("Add agency error: %s", str(e))
                raise DatabaseError.from_exception("Failed to add agency", e)
        except Exception:
            if absolute_path:
                await file_service.cleanup_file(absolute_path)
            raise

        logger.info("Agency %s added by user %s", agency.id, admin_id)

    async def list_agencies(self, db: AsyncSession) -> List[AgencyResponse]:
        """All agencies, newest first."""
        try:
            result = await db.execute(
                select(Agency).order_by(desc(Agency.created_at), desc(Agency.id))
            )
            agencies = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Fetch agencies error: %s", str(e))
            raise DatabaseError.from_exception("Failed to fetch agencies", e)

        return [AgencyResponse.model_validate(agency) for agency in agencies]

    async def add_tour_schedule(self, db: AsyncSession, payload: TourScheduleCreate) -> None:
        """
        Insert a tour schedule as an admin.

        The body arrives untyped; fields are typed only once the caller is
        known to be an admin (400 "Invalid <field>" on a malformed value).
        """
        await user_service.ensure_admin(
            db, payload.user_id, "Only admins can add tour schedules"
        )

        schedule = TourSchedule(
            agency_id=parse_field("agencyId", payload.agency_id, int),
            place_id=parse_field("placeId", payload.place_id, int),
            tour_date=parse_field("tourDate", payload.tour_date, date),
            price=parse_field("price", payload.price, float),
            description=parse_field("description", payload.description, str),
        )
        try:
            db.add(schedule)
            await db.flush()
        except SQLAlchemyError as e:
            logger.warning("Add tour schedule error: %s", str(e))
            raise DatabaseError.from_exception("Failed to add tour schedule", e)

        logger.info(
            "Tour schedule %s added for agency %s", schedule.id, payload.agency_id
        )

    async def list_tour_schedules(
        self, db: AsyncSession, agency_id: int
    ) -> List[TourScheduleResponse]:
        """Schedules of one agency with the place title, soonest first."""
        query = (
            select(TourSchedule, Place.title.label("place_title"))
            .join(Place, TourSchedule.place_id == Place.id)
            .where(TourSchedule.agency_id == agency_id)
            .order_by(asc(TourSchedule.tour_date), asc(TourSchedule.id))
        )
        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Fetch tour schedules error: %s", str(e))
            raise DatabaseError.from_exception("Failed to fetch tour schedules", e)

        return [
            TourScheduleResponse(
                id=schedule.id,
                agency_id=schedule.agency_id,
                place_id=schedule.place_id,
                tour_date=schedule.tour_date,
                price=schedule.price,
                description=schedule.description,
                place_title=place_title,
            )
            for schedule, place_title in rows
        ]


# ── Singleton Instance ────────────────────────────────────────────────────
agency_service = AgencyService()
