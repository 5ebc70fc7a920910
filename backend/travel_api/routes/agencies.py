"""
Travel API Backend — Agency and Tour Schedule Routes
======================================================
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.database import get_db_session
from travel_api.schemas.agency import AgencyResponse, TourScheduleCreate, TourScheduleResponse
from travel_api.schemas.common import ErrorResponse, MessageResponse
from travel_api.services.agency_service import agency_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Agencies"])


@router.post(
    "/add-agency",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid image or database error", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
    },
    summary="Add an agency (admin only)",
)
async def add_agency(
    name: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    contact: Optional[str] = Form(default=None),
    user_id: Optional[str] = Form(default=None, alias="userId"),
    image: Optional[UploadFile] = File(default=None, description="Optional agency logo"),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    content: Optional[bytes] = None
    filename: Optional[str] = None
    if image is not None:
        filename = image.filename
        content = await image.read()

    try:
        await agency_service.add_agency(
            db,
            name=name,
            description=description,
            contact=contact,
            user_id=user_id,
            image_filename=filename,
            image_content=content,
        )
    finally:
        if image is not None:
            await image.close()

    return MessageResponse(message="Agency added successfully")


@router.get(
    "/agencies",
    response_model=List[AgencyResponse],
    responses={400: {"description": "Database error", "model": ErrorResponse}},
    summary="List agencies, newest first",
)
async def get_agencies(db: AsyncSession = Depends(get_db_session, scope="function")) -> List[AgencyResponse]:
    return await agency_service.list_agencies(db)


@router.post(
    "/add-tour-schedule",
    response_model=MessageResponse,
    responses={
        400: {"description": "Database error", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
    },
    summary="Add a tour schedule (admin only)",
)
async def add_tour_schedule(
    payload: TourScheduleCreate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    await agency_service.add_tour_schedule(db, payload)
    return MessageResponse(message="Tour schedule added successfully")


@router.get(
    "/tour-schedules/{agency_id}",
    response_model=List[TourScheduleResponse],
    responses={400: {"description": "Database error", "model": ErrorResponse}},
    summary="Tour schedules of one agency, soonest first",
)
async def get_tour_schedules(
    agency_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[TourScheduleResponse]:
    return await agency_service.list_tour_schedules(db, agency_id)
