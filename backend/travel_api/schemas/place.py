"""
Travel API Backend — Place Schemas
====================================
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from travel_api.schemas.common import CamelRequest


class DeletePlaceRequest(CamelRequest):
    """DELETE /delete-place/{placeId} body: the acting user, checked as-is."""
    user_id: Any = Field(default=None, alias="userId")


class PlaceResponse(BaseModel):
    """
    What:  One place row plus its aggregated like count.
    Who:   Items of GET /places and GET /top-places.
    """
    id: int
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    image: str = Field(description="Relative image path, served under /uploads")
    user_id: Optional[int] = None
    rating: float = Field(default=0.0)
    created_at: datetime
    like_count: int = Field(default=0, description="Number of likes on this place")

    model_config = {"from_attributes": True}
