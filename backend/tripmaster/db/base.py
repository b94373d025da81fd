"""
Declarative base and shared model columns.
"""
from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from tripmaster.core.utils import utcnow

Base = declarative_base()


class TimestampMixin:
    """created_at / updated_at columns set on the Python side."""
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class BaseModel(TimestampMixin, Base):
    """Abstract base for tables keyed by an auto-increment integer."""
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
