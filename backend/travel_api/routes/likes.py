"""
Travel API Backend — Like Routes
==================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.database import get_db_session
from travel_api.schemas.common import ErrorResponse
from travel_api.schemas.like import LikeRequest, LikeStatusResponse, LikeToggleResponse
from travel_api.services.like_service import like_service

router = APIRouter(tags=["Likes"])


@router.post(
    "/like-place",
    response_model=LikeToggleResponse,
    responses={400: {"description": "Database error", "model": ErrorResponse}},
    summary="Like a place, or unlike it if already liked",
)
async def like_place(
    payload: LikeRequest,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> LikeToggleResponse:
    return await like_service.toggle_like(db, payload.place_id, payload.user_id)


@router.get(
    "/like-status/{place_id}/{user_id}",
    response_model=LikeStatusResponse,
    responses={400: {"description": "Database error", "model": ErrorResponse}},
    summary="Whether a user has liked a place",
)
async def like_status(
    place_id: int,
    user_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> LikeStatusResponse:
    return await like_service.like_status(db, place_id, user_id)
