"""
Budget model for planned vs. actual spending line items.
"""
from sqlalchemy import Column, String, Text, Numeric, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripmaster.db.base import Base, TimestampMixin


class Budget(TimestampMixin, Base):
    """Budget line item owned by a user."""
    __tablename__ = "budgets"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False, default=0)  # Planned amount
    actual_amount = Column(Numeric(10, 2), nullable=False, default=0)  # Spent so far
    category = Column(String(50), nullable=False, default="other")
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="budgets")
