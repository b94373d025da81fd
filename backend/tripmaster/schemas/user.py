"""
Pydantic schemas for User entity.
"""
from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from tripmaster.schemas.common import CamelModel


class UserBase(CamelModel):
    """Base user schema."""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str = Field(..., min_length=1)


class UserLogin(CamelModel):
    """Schema for user login. ``username`` may also hold the email address."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdate(UserBase):
    """Schema for updating the current user's profile."""
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class UserDelete(CamelModel):
    """Schema for deleting the current user's account."""
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Schema for user response."""
    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    """Schema for register/login/update responses."""
    message: str
    user: UserResponse
    token: str
