"""
Pydantic schemas for Budget entity.
"""
from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from tripmaster.schemas.common import CamelModel, Money

DEFAULT_CATEGORY = "other"


class BudgetCreate(CamelModel):
    """Schema for budget creation."""
    id: Optional[str] = Field(None, max_length=64)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    amount: Money = Decimal(0)  # Planned amount
    actual_amount: Money = Decimal(0)  # Spent so far
    category: Optional[str] = DEFAULT_CATEGORY

    @field_validator("category")
    @classmethod
    def default_category(cls, v):
        return v or DEFAULT_CATEGORY


class BudgetUpdate(CamelModel):
    """Schema for budget update; only supplied fields change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    amount: Optional[Money] = None
    actual_amount: Optional[Money] = None
    category: Optional[str] = None


class BudgetResponse(CamelModel):
    """Schema for budget response."""
    id: str
    name: str
    description: Optional[str] = None
    amount: Money
    actual_amount: Money
    category: str
    user_id: int
    created_at: datetime
    updated_at: datetime
