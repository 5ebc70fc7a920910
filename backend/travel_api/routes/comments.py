"""
Travel API Backend — Comment Routes
=====================================

What:  Comments on places and admin replies.
Who:   The place detail screen posts comments and renders the nested
       threads returned by GET /comments/{placeId}.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.database import get_db_session
from travel_api.schemas.comment import CommentCreate, CommentThreadResponse, ReplyCreate
from travel_api.schemas.common import ErrorResponse, MessageResponse
from travel_api.services.comment_service import comment_service

router = APIRouter(tags=["Comments"])


@router.post(
    "/add-comment",
    response_model=MessageResponse,
    responses={400: {"description": "Database error", "model": ErrorResponse}},
    summary="Comment on a place",
)
async def add_comment(
    payload: CommentCreate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    await comment_service.add_comment(db, payload)
    return MessageResponse(message="Comment added successfully")


@router.post(
    "/add-comment-reply",
    response_model=MessageResponse,
    responses={
        400: {"description": "Database error", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
    },
    summary="Reply to a comment (admin only)",
)
async def add_comment_reply(
    payload: ReplyCreate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    await comment_service.add_reply(db, payload)
    return MessageResponse(message="Reply added successfully")


@router.get(
    "/comments/{place_id}",
    response_model=List[CommentThreadResponse],
    responses={400: {"description": "Database error", "model": ErrorResponse}},
    summary="Comment threads of a place",
    description=(
        "Comments newest first, each with its replies oldest first."
    ),
)
async def get_comments(
    place_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[CommentThreadResponse]:
    return await comment_service.list_comments(db, place_id)
