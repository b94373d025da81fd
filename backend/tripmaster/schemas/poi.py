"""
Pydantic schemas for POI entity.
"""
from pydantic import Field
from typing import Optional
from datetime import datetime
from tripmaster.schemas.common import CamelModel, Tel


class PoiFields(CamelModel):
    """Descriptive POI fields shared by every POI-shaped payload."""
    address: Optional[str] = None
    location: Optional[str] = None  # "lng,lat"
    tel: Tel = None
    type: Optional[str] = None
    typecode: Optional[str] = None


class PoiCreate(PoiFields):
    """Schema for POI creation. ``id`` is generated when absent."""
    id: Optional[str] = Field(None, max_length=64)
    name: str = Field(..., min_length=1)


class PoiUpdate(PoiFields):
    """Schema for POI update; only supplied fields change."""
    name: Optional[str] = Field(None, min_length=1)


class PoiSnapshot(PoiFields):
    """POI as embedded in an itinerary stop."""
    id: str
    name: str


class PoiResponse(PoiSnapshot):
    """Schema for POI response."""
    user_id: int
    created_at: datetime
