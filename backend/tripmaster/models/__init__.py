"""Models package - Import all models for SQLAlchemy registration."""
from tripmaster.models.user import User
from tripmaster.models.poi import Poi
from tripmaster.models.itinerary import Itinerary, ItineraryStop
from tripmaster.models.budget import Budget
from tripmaster.models.memo import Memo

__all__ = [
    "User",
    "Poi",
    "Itinerary",
    "ItineraryStop",
    "Budget",
    "Memo",
]
