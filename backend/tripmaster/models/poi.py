"""
Point-of-interest model.
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripmaster.core.utils import utcnow
from tripmaster.db.base import Base


class Poi(Base):
    """A named place saved by a user. The id is caller-supplied or time-based."""
    __tablename__ = "pois"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)  # Free-form "lng,lat"
    tel = Column(String(255), nullable=True)  # Semicolon-joined phone numbers
    type = Column(String(255), nullable=True)
    typecode = Column(String(100), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="pois")
    stops = relationship("ItineraryStop", back_populates="poi", cascade="all")
