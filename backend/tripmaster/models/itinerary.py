"""
Itinerary model and its ordered POI stops.
"""
from sqlalchemy import Column, String, Date, Text, Numeric, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripmaster.db.base import Base, BaseModel, TimestampMixin


class Itinerary(TimestampMixin, Base):
    """Itinerary header. Stops are replaced as a whole on every update."""
    __tablename__ = "itineraries"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="itineraries")
    stops = relationship(
        "ItineraryStop",
        back_populates="itinerary",
        cascade="all, delete-orphan",
        order_by="ItineraryStop.sort_order",
    )


class ItineraryStop(BaseModel):
    """Join table placing a POI at a position within an itinerary."""
    __tablename__ = "itinerary_pois"

    itinerary_id = Column(String(64), ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=False, index=True)
    poi_id = Column(String(64), ForeignKey("pois.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=True)
    budget = Column(Numeric(10, 2), nullable=False, default=0)
    transport_type = Column(String(50), nullable=True)
    transport_description = Column(Text, nullable=True)
    transport_budget = Column(Numeric(10, 2), nullable=False, default=0)
    sort_order = Column(Integer, nullable=False, default=0)  # 0-based position within the itinerary

    # Relationships
    itinerary = relationship("Itinerary", back_populates="stops")
    poi = relationship("Poi", back_populates="stops")
