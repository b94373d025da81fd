"""
POI service for owner-scoped point-of-interest CRUD.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from tripmaster.core.exceptions import NotFoundError
from tripmaster.core.utils import generate_id, utcnow
from tripmaster.db.session import commit_or_conflict, retry_on_disconnect
from tripmaster.models.itinerary import ItineraryStop
from tripmaster.models.poi import Poi
from tripmaster.schemas.poi import PoiCreate, PoiUpdate
from tripmaster.schemas.itinerary import StopInput

logger = logging.getLogger(__name__)

# Fields copied onto an existing POI when an itinerary references it
DESCRIPTIVE_FIELDS = ("name", "address", "location", "tel", "type", "typecode")


@retry_on_disconnect
def list_pois(db: Session, owner_id: int) -> List[Poi]:
    """All POIs of the owner, newest first."""
    return db.query(Poi).filter(
        Poi.user_id == owner_id
    ).order_by(Poi.created_at.desc()).all()


def get_owned_poi(db: Session, owner_id: int, poi_id: str) -> Poi:
    """Fetch a POI by id and owner; another user's POI is reported as missing."""
    poi = db.query(Poi).filter(
        Poi.id == poi_id,
        Poi.user_id == owner_id
    ).first()
    if not poi:
        raise NotFoundError("POI not found")
    return poi


def create_poi(db: Session, owner_id: int, data: PoiCreate) -> Poi:
    poi = Poi(
        id=data.id or generate_id(),
        name=data.name,
        address=data.address,
        location=data.location,
        tel=data.tel,
        type=data.type,
        typecode=data.typecode,
        user_id=owner_id,
        created_at=utcnow(),
    )
    db.add(poi)
    commit_or_conflict(db, "POI id already exists")
    db.refresh(poi)
    return poi


def update_poi(db: Session, owner_id: int, poi_id: str, data: PoiUpdate) -> Poi:
    poi = get_owned_poi(db, owner_id, poi_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "name" and not value:
            continue
        setattr(poi, field, value)
    db.commit()
    db.refresh(poi)
    return poi


def delete_poi(db: Session, owner_id: int, poi_id: str) -> None:
    """
    Delete a POI together with the itinerary stops that reference it.
    Remaining stops of the affected itineraries are renumbered from 0.
    """
    poi = get_owned_poi(db, owner_id, poi_id)
    affected = itineraries_using_pois(db, [poi_id])

    db.delete(poi)
    db.flush()
    renumber_stops(db, affected)

    db.commit()
    if affected:
        logger.info(f"Deleted POI {poi_id}; renumbered stops of {len(affected)} itineraries")


def itineraries_using_pois(db: Session, poi_ids: List[str]) -> List[str]:
    """Ids of the itineraries with at least one stop at one of the given POIs."""
    if not poi_ids:
        return []
    return [
        row[0] for row in db.query(ItineraryStop.itinerary_id).filter(
            ItineraryStop.poi_id.in_(poi_ids)
        ).distinct()
    ]


def renumber_stops(db: Session, itinerary_ids: List[str]) -> None:
    """
    Close gaps left by removed stops so each itinerary's sort_order runs 0..N-1.
    Call after the removal has been flushed; relative order is kept.
    """
    for itinerary_id in itinerary_ids:
        stops = db.query(ItineraryStop).filter(
            ItineraryStop.itinerary_id == itinerary_id
        ).order_by(ItineraryStop.sort_order, ItineraryStop.id).all()
        for index, stop in enumerate(stops):
            stop.sort_order = index


def upsert_poi(db: Session, owner_id: int, stop: StopInput) -> Poi:
    """
    Make sure the POI referenced by an itinerary stop exists.

    A new POI is created under ``owner_id``. An existing one gets its
    descriptive fields overwritten (last writer wins) but keeps its id
    and owner.
    """
    poi_id = stop.id or generate_id()
    poi = db.get(Poi, poi_id)
    if poi is None:
        poi = Poi(id=poi_id, user_id=owner_id, created_at=utcnow())
        db.add(poi)
    for field in DESCRIPTIVE_FIELDS:
        setattr(poi, field, getattr(stop, field))
    # Flush so a POI repeated later in the same stop list is found by db.get
    db.flush()
    return poi
