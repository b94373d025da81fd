"""
POI routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from tripmaster.db.session import get_db
from tripmaster.schemas.common import MessageResponse
from tripmaster.schemas.poi import PoiCreate, PoiResponse, PoiUpdate
from tripmaster.services import poi_service
from tripmaster.api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/pois", tags=["pois"])


@router.get("", response_model=List[PoiResponse])
def list_pois(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return poi_service.list_pois(db, current_user.user_id)


@router.post("", response_model=PoiResponse, status_code=status.HTTP_201_CREATED)
def create_poi(
    poi_data: PoiCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return poi_service.create_poi(db, current_user.user_id, poi_data)


@router.put("/{poi_id}", response_model=PoiResponse)
def update_poi(
    poi_id: str,
    poi_data: PoiUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return poi_service.update_poi(db, current_user.user_id, poi_id, poi_data)


@router.delete("/{poi_id}", response_model=MessageResponse)
def delete_poi(
    poi_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a POI; itinerary stops that used it are removed too."""
    poi_service.delete_poi(db, current_user.user_id, poi_id)
    return {"message": "POI deleted successfully"}
