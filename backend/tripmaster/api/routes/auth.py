"""
Authentication routes: registration, login and the current user's profile.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from tripmaster.db.session import get_db
from tripmaster.schemas.common import MessageResponse
from tripmaster.schemas.user import (
    AuthResponse, UserCreate, UserDelete, UserLogin, UserResponse, UserUpdate
)
from tripmaster.services import auth_service
from tripmaster.api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and return a token."""
    user, token = auth_service.register_user(db, user_data)
    return {"message": "User registered successfully", "user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with username or email."""
    user, token = auth_service.authenticate(db, credentials.username, credentials.password)
    return {"message": "Login successful", "user": user, "token": token}


@router.get("/me", response_model=UserResponse)
def read_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return auth_service.get_user(db, current_user.user_id)


@router.put("/me", response_model=AuthResponse)
def update_me(
    user_data: UserUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update username/email, and the password when newPassword is given."""
    user, token = auth_service.update_user(db, current_user.user_id, user_data)
    return {"message": "User updated successfully", "user": user, "token": token}


@router.delete("/me", response_model=MessageResponse)
def delete_me(
    body: UserDelete,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete the account and everything it owns."""
    auth_service.delete_user(db, current_user.user_id, body.password)
    return {"message": "User deleted successfully"}
