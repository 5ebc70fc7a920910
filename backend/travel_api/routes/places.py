"""
Travel API Backend — Place Routes
===================================

What:  Admin place management and the public place listings.

Request Flow (POST /add-place):
    1. Client sends multipart/form-data with text fields and an 'image' file
    2. Image bytes are read here; PlaceService validates and stores them
       before the admin check and the INSERT
    3. Return {"message": "Place added successfully"}
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.database import get_db_session
from travel_api.schemas.common import ErrorResponse, MessageResponse
from travel_api.schemas.place import DeletePlaceRequest, PlaceResponse
from travel_api.services.place_service import place_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Places"])


@router.post(
    "/add-place",
    response_model=MessageResponse,
    responses={
        400: {"description": "No/invalid image or database error", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
    },
    summary="Add a place (admin only)",
)
async def add_place(
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    user_id: Optional[str] = Form(default=None, alias="userId"),
    rating: Optional[str] = Form(default=None, description="Number, typed after the admin check"),
    image: Optional[UploadFile] = File(default=None, description="Place photo (PNG, JPG, JPEG, WEBP)"),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    content: Optional[bytes] = None
    filename: Optional[str] = None
    if image is not None:
        filename = image.filename
        content = await image.read()
        logger.info("Received place image: filename=%s, size=%d bytes", filename, len(content))

    try:
        await place_service.add_place(
            db,
            title=title,
            description=description,
            location=location,
            user_id=user_id,
            rating=rating,
            image_filename=filename,
            image_content=content,
        )
    finally:
        if image is not None:
            await image.close()

    return MessageResponse(message="Place added successfully")


@router.delete(
    "/delete-place/{place_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Database error", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
        404: {"description": "Place not found", "model": ErrorResponse},
    },
    summary="Delete a place (admin only)",
)
async def delete_place(
    place_id: int,
    payload: Optional[DeletePlaceRequest] = None,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    user_id = payload.user_id if payload else None
    await place_service.delete_place(db, place_id, user_id)
    return MessageResponse(message="Place deleted successfully")


@router.get(
    "/places",
    response_model=List[PlaceResponse],
    responses={400: {"description": "Database error", "model": ErrorResponse}},
    summary="List every place with its like count, newest first",
)
async def get_places(db: AsyncSession = Depends(get_db_session, scope="function")) -> List[PlaceResponse]:
    return await place_service.list_places(db)


@router.get(
    "/top-places",
    response_model=List[PlaceResponse],
    responses={400: {"description": "Database error", "model": ErrorResponse}},
    summary="Places with more than 3 likes or a rating of at least 4.0",
)
async def get_top_places(db: AsyncSession = Depends(get_db_session, scope="function")) -> List[PlaceResponse]:
    return await place_service.list_top_places(db)
