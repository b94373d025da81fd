"""
User model for authentication and user management.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from tripmaster.db.base import BaseModel


class User(BaseModel):
    """User account owning POIs, itineraries, budgets and memos."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships; deleting a user removes everything it owns
    pois = relationship("Poi", back_populates="owner", cascade="all, delete-orphan")
    itineraries = relationship("Itinerary", back_populates="owner", cascade="all, delete-orphan")
    budgets = relationship("Budget", back_populates="owner", cascade="all, delete-orphan")
    memos = relationship("Memo", back_populates="owner", cascade="all, delete-orphan")
