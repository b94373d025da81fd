"""
Memo model for free-text notes.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripmaster.db.base import Base, TimestampMixin


class Memo(TimestampMixin, Base):
    __tablename__ = "memos"

    id = Column(String(64), primary_key=True)
    title = Column(String(255), nullable=False, default="new memo")
    content = Column(Text, nullable=False, default="")
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="memos")
