"""
Pydantic schemas for Itinerary aggregate.
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from tripmaster.schemas.common import CamelModel, Money, OptionalDate
from tripmaster.schemas.poi import PoiFields, PoiSnapshot


class TransportInput(CamelModel):
    """How the traveller reaches a stop."""
    type: Optional[str] = None
    description: Optional[str] = None
    budget: Money = Decimal(0)


class StopInput(PoiFields):
    """
    One entry of an itinerary's ``pois`` list: the POI's descriptive
    fields plus the per-stop budget and transport notes.
    """
    id: Optional[str] = Field(None, max_length=64)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    budget: Money = Decimal(0)
    transport: Optional[TransportInput] = None


class ItineraryUpdate(CamelModel):
    """Full replacement of an itinerary header and its stops."""
    name: str = Field(..., min_length=1)
    date: OptionalDate = None
    description: Optional[str] = None
    pois: List[StopInput] = []


class ItineraryCreate(ItineraryUpdate):
    """Schema for itinerary creation. ``id`` is generated when absent."""
    id: Optional[str] = Field(None, max_length=64)


class StopResponse(CamelModel):
    """Schema for a stop within an itinerary response."""
    id: int
    itinerary_id: str
    poi_id: str
    description: Optional[str] = None
    budget: Money
    transport_type: Optional[str] = None
    transport_description: Optional[str] = None
    transport_budget: Money
    sort_order: int
    poi: PoiSnapshot


class ItineraryResponse(CamelModel):
    """Itinerary header with its ordered stops."""
    id: str
    name: str
    date: OptionalDate = None
    description: Optional[str] = None
    user_id: int
    created_at: datetime
    updated_at: datetime
    pois: List[StopResponse] = []
