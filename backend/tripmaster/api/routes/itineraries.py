"""
Itinerary routes. Each response is the full aggregate: header plus ordered stops.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from tripmaster.db.session import get_db
from tripmaster.schemas.common import MessageResponse
from tripmaster.schemas.itinerary import ItineraryCreate, ItineraryResponse, ItineraryUpdate
from tripmaster.services import itinerary_service
from tripmaster.api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/itineraries", tags=["itineraries"])


@router.get("", response_model=List[ItineraryResponse])
def list_itineraries(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return itinerary_service.list_itineraries(db, current_user.user_id)


@router.get("/{itinerary_id}", response_model=ItineraryResponse)
def get_itinerary(
    itinerary_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return itinerary_service.get_itinerary(db, current_user.user_id, itinerary_id)


@router.post("", response_model=ItineraryResponse, status_code=status.HTTP_201_CREATED)
def create_itinerary(
    itinerary_data: ItineraryCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an itinerary; POIs referenced by its stops are created or refreshed."""
    return itinerary_service.create_itinerary(db, current_user.user_id, itinerary_data)


@router.put("/{itinerary_id}", response_model=ItineraryResponse)
def update_itinerary(
    itinerary_id: str,
    itinerary_data: ItineraryUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace the header and the whole stop list."""
    return itinerary_service.update_itinerary(db, current_user.user_id, itinerary_id, itinerary_data)


@router.delete("/{itinerary_id}", response_model=MessageResponse)
def delete_itinerary(
    itinerary_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    itinerary_service.delete_itinerary(db, current_user.user_id, itinerary_id)
    return {"message": "Itinerary deleted successfully"}
