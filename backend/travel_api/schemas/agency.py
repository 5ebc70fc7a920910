"""
Travel API Backend — Agency and Tour Schedule Schemas
=======================================================
"""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from travel_api.schemas.common import CamelRequest


class AgencyResponse(BaseModel):
    """Item of GET /agencies."""
    id: int
    name: str
    description: Optional[str] = None
    contact: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TourScheduleCreate(CamelRequest):
    """
    POST /add-tour-schedule body, untyped until the admin check passes.

    AgencyService types the fields as agencyId: int, placeId: int,
    tourDate: date (YYYY-MM-DD), price: float, description: str.
    """
    agency_id: Any = Field(default=None, alias="agencyId")
    place_id: Any = Field(default=None, alias="placeId")
    tour_date: Any = Field(default=None, alias="tourDate")
    price: Any = None
    description: Any = None
    user_id: Any = Field(default=None, alias="userId")


class TourScheduleResponse(BaseModel):
    """Item of GET /tour-schedules/{agencyId}, joined with the place title."""
    id: int
    agency_id: int
    place_id: int
    tour_date: date
    price: Optional[float] = None
    description: Optional[str] = None
    place_title: str

    model_config = {"from_attributes": True}
