"""
Authentication service: registration, login and profile self-service.
"""
import logging
from typing import Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from tripmaster.core.config import settings
from tripmaster.core.exceptions import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from tripmaster.core.security import create_user_token, get_password_hash, verify_password
from tripmaster.core.utils import utcnow
from tripmaster.db.session import commit_or_conflict, retry_on_disconnect
from tripmaster.models.itinerary import Itinerary
from tripmaster.models.poi import Poi
from tripmaster.models.user import User
from tripmaster.schemas.user import UserCreate, UserUpdate
from tripmaster.services.poi_service import itineraries_using_pois, renumber_stops

logger = logging.getLogger(__name__)


def register_user(db: Session, data: UserCreate) -> Tuple[User, str]:
    """Create a user and issue a token. Username and email must both be unused."""
    existing = db.query(User).filter(
        or_(User.username == data.username, User.email == data.email)
    ).first()
    if existing:
        raise ConflictError("Username or email already exists")

    user = User(
        username=data.username,
        email=data.email,
        password_hash=get_password_hash(data.password),
    )
    db.add(user)
    commit_or_conflict(db, "Username or email already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user, create_user_token(user.id, user.username)


def authenticate(db: Session, username_or_email: str, password: str) -> Tuple[User, str]:
    """
    Look a user up by username or email and check the password.
    Unknown user and wrong password fail with the same message.
    """
    user = _find_by_login(db, username_or_email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise UnauthorizedError("Invalid username or password")
    return user, create_user_token(user.id, user.username)


@retry_on_disconnect
def _find_by_login(db: Session, username_or_email: str) -> User:
    return db.query(User).filter(
        or_(User.username == username_or_email, User.email == username_or_email)
    ).first()


@retry_on_disconnect
def get_user(db: Session, user_id: int) -> User:
    """Get user by id."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def update_user(db: Session, user_id: int, data: UserUpdate) -> Tuple[User, str]:
    """
    Update username/email and optionally the password.

    A password change needs the current password and a new one of at
    least MIN_PASSWORD_LENGTH characters. A fresh token is returned so a
    changed username is reflected in its claims.
    """
    if data.new_password:
        if not data.current_password:
            raise ValidationError("Current password is required to change the password")
        if len(data.new_password) < settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
            )

    user = get_user(db, user_id)

    if data.new_password and not verify_password(data.current_password, user.password_hash):
        raise UnauthorizedError("Current password is incorrect")

    conflict = db.query(User).filter(
        or_(User.username == data.username, User.email == data.email),
        User.id != user_id,
    ).first()
    if conflict:
        if conflict.username == data.username:
            raise ConflictError("Username is already taken")
        raise ConflictError("Email is already taken")

    user.username = data.username
    user.email = data.email
    if data.new_password:
        user.password_hash = get_password_hash(data.new_password)
    user.updated_at = utcnow()
    commit_or_conflict(db, "Username or email already exists")
    db.refresh(user)

    logger.info(f"Updated profile of user {user.id}")
    return user, create_user_token(user.id, user.username)


def delete_user(db: Session, user_id: int, password: str) -> None:
    """
    Delete the account after re-checking the password; owned rows go with it.

    Other users' itineraries may have stops at this user's POIs. Those stops
    are removed with the POIs and the remaining ones renumbered.
    """
    user = get_user(db, user_id)
    if not verify_password(password, user.password_hash):
        raise UnauthorizedError("Password is incorrect")

    poi_ids = [row[0] for row in db.query(Poi.id).filter(Poi.user_id == user_id)]
    own_itineraries = {row[0] for row in db.query(Itinerary.id).filter(Itinerary.user_id == user_id)}
    affected = [
        itinerary_id for itinerary_id in itineraries_using_pois(db, poi_ids)
        if itinerary_id not in own_itineraries
    ]

    db.delete(user)
    db.flush()
    renumber_stops(db, affected)
    db.commit()
    logger.info(f"Deleted user {user_id}")
