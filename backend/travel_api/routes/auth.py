"""
Travel API Backend — Signup and Login Routes
==============================================

What:  POST /signup and POST /login.
How:   JSON bodies are parsed into SignupRequest/LoginRequest and handed to
       UserService. No session or token is issued; login returns the user
       record and the client sends its id as `userId` afterwards.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from travel_api.database import get_db_session
from travel_api.schemas.common import ErrorResponse, MessageResponse
from travel_api.schemas.user import LoginRequest, LoginResponse, SignupRequest
from travel_api.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/signup",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid role or signup rejected by the database", "model": ErrorResponse},
    },
    summary="Create a user or admin account",
)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    await user_service.signup(db, payload)
    return MessageResponse(message="User created")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Invalid credentials or database error", "model": ErrorResponse},
    },
    summary="Check email/password and return the user record",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> LoginResponse:
    return await user_service.login(db, payload)
