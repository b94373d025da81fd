"""
Pydantic schemas for Memo entity.
"""
from pydantic import Field
from typing import Optional
from datetime import datetime
from tripmaster.schemas.common import CamelModel


class MemoCreate(CamelModel):
    """Schema for memo creation."""
    id: Optional[str] = Field(None, max_length=64)
    title: Optional[str] = None
    content: Optional[str] = None


class MemoUpdate(CamelModel):
    """Schema for memo update."""
    title: Optional[str] = None
    content: Optional[str] = None


class MemoResponse(CamelModel):
    """Schema for memo response."""
    id: str
    title: str
    content: str
    user_id: int
    created_at: datetime
    updated_at: datetime
