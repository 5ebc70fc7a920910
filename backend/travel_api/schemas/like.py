"""
Travel API Backend — Like Schemas
===================================
"""

from typing import Optional

from pydantic import BaseModel, Field

from travel_api.schemas.common import CamelRequest


class LikeRequest(CamelRequest):
    """POST /like-place body."""
    place_id: Optional[int] = Field(default=None, alias="placeId")
    user_id: Optional[int] = Field(default=None, alias="userId")


class LikeToggleResponse(BaseModel):
    """
    Outcome of the like toggle.

    `liked` is the state after the call: True when a like was inserted,
    False when an existing like was removed.
    """
    message: str
    liked: bool


class LikeStatusResponse(BaseModel):
    """GET /like-status/{placeId}/{userId} → {"isLiked": true}."""
    is_liked: bool = Field(serialization_alias="isLiked")
