"""
Travel API Backend — User Schemas
===================================

What:  Signup/login request bodies and the public user record.
Why:   UserResponse deliberately has no password field; the stored hash
       never leaves the service layer.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from travel_api.schemas.common import CamelRequest


class SignupRequest(CamelRequest):
    """
    POST /signup body.

    `role` is a plain string on purpose: anything other than "user"/"admin"
    is rejected by UserService with a 400, not by Pydantic with a 422.
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(CamelRequest):
    """POST /login body."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public user record returned after login."""
    id: int
    username: str
    email: str
    role: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    message: str = Field(default="Login successful")
    user: UserResponse
