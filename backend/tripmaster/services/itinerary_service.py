"""
Itinerary service.

An itinerary is written as one aggregate: the header plus its ordered
stops. Each stop references a POI, which is upserted on the way in.
Updates replace the whole stop list.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from tripmaster.core.exceptions import NotFoundError
from tripmaster.core.utils import generate_id, utcnow
from tripmaster.db.session import commit_or_conflict, retry_on_disconnect
from tripmaster.models.itinerary import Itinerary, ItineraryStop
from tripmaster.models.poi import Poi
from tripmaster.schemas.itinerary import ItineraryCreate, ItineraryUpdate, StopInput
from tripmaster.services.poi_service import upsert_poi

logger = logging.getLogger(__name__)


def _poi_snapshot(poi: Poi) -> Dict[str, Any]:
    return {
        "id": poi.id,
        "name": poi.name,
        "address": poi.address,
        "location": poi.location,
        "tel": poi.tel,
        "type": poi.type,
        "typecode": poi.typecode,
    }


def assemble_itinerary(itinerary: Itinerary) -> Dict[str, Any]:
    """Build the response shape: header fields plus stops ordered by position."""
    stops = sorted(itinerary.stops, key=lambda s: s.sort_order)
    return {
        "id": itinerary.id,
        "name": itinerary.name,
        "date": itinerary.date,
        "description": itinerary.description,
        "user_id": itinerary.user_id,
        "created_at": itinerary.created_at,
        "updated_at": itinerary.updated_at,
        "pois": [
            {
                "id": stop.id,
                "itinerary_id": stop.itinerary_id,
                "poi_id": stop.poi_id,
                "description": stop.description,
                "budget": stop.budget,
                "transport_type": stop.transport_type,
                "transport_description": stop.transport_description,
                "transport_budget": stop.transport_budget,
                "sort_order": stop.sort_order,
                "poi": _poi_snapshot(stop.poi),
            }
            for stop in stops
        ],
    }


def _with_stops(db: Session):
    return db.query(Itinerary).options(
        selectinload(Itinerary.stops).joinedload(ItineraryStop.poi)
    )


@retry_on_disconnect
def list_itineraries(db: Session, owner_id: int) -> List[Dict[str, Any]]:
    """All itineraries of the owner, newest first, each with its stops."""
    itineraries = _with_stops(db).filter(
        Itinerary.user_id == owner_id
    ).order_by(Itinerary.created_at.desc()).all()
    return [assemble_itinerary(it) for it in itineraries]


@retry_on_disconnect
def get_itinerary(db: Session, owner_id: int, itinerary_id: str) -> Dict[str, Any]:
    itinerary = _with_stops(db).filter(
        Itinerary.id == itinerary_id,
        Itinerary.user_id == owner_id
    ).first()
    if not itinerary:
        raise NotFoundError("Itinerary not found")
    return assemble_itinerary(itinerary)


def _insert_stops(db: Session, owner_id: int, itinerary_id: str, stops: List[StopInput]) -> None:
    """Upsert each referenced POI and place it at its list index."""
    for index, stop in enumerate(stops):
        poi = upsert_poi(db, owner_id, stop)
        transport = stop.transport
        db.add(ItineraryStop(
            itinerary_id=itinerary_id,
            poi_id=poi.id,
            description=stop.description,
            budget=stop.budget,
            transport_type=transport.type if transport else None,
            transport_description=transport.description if transport else None,
            transport_budget=transport.budget if transport else Decimal(0),
            sort_order=index,
        ))


def create_itinerary(db: Session, owner_id: int, data: ItineraryCreate) -> Dict[str, Any]:
    """Create the header, upsert POIs and insert stops in one transaction."""
    itinerary = Itinerary(
        id=data.id or generate_id(),
        name=data.name,
        date=data.date,
        description=data.description,
        user_id=owner_id,
    )
    try:
        db.add(itinerary)
        db.flush()
        _insert_stops(db, owner_id, itinerary.id, data.pois)
    except SQLAlchemyError:
        db.rollback()
        raise
    commit_or_conflict(db, "Itinerary id already exists")

    logger.info(f"Created itinerary {itinerary.id} with {len(data.pois)} stops")
    db.expire_all()
    return get_itinerary(db, owner_id, itinerary.id)


def update_itinerary(db: Session, owner_id: int, itinerary_id: str, data: ItineraryUpdate) -> Dict[str, Any]:
    """Replace header fields and the whole stop list."""
    itinerary = db.query(Itinerary).filter(
        Itinerary.id == itinerary_id,
        Itinerary.user_id == owner_id
    ).first()
    if not itinerary:
        raise NotFoundError("Itinerary not found")

    try:
        itinerary.name = data.name
        itinerary.date = data.date
        itinerary.description = data.description
        itinerary.updated_at = utcnow()

        db.query(ItineraryStop).filter(
            ItineraryStop.itinerary_id == itinerary_id
        ).delete(synchronize_session=False)
        _insert_stops(db, owner_id, itinerary_id, data.pois)
    except SQLAlchemyError:
        db.rollback()
        raise
    commit_or_conflict(db, "POI id already exists")

    logger.info(f"Updated itinerary {itinerary_id} with {len(data.pois)} stops")
    db.expire_all()
    return get_itinerary(db, owner_id, itinerary_id)


def delete_itinerary(db: Session, owner_id: int, itinerary_id: str) -> None:
    itinerary = db.query(Itinerary).filter(
        Itinerary.id == itinerary_id,
        Itinerary.user_id == owner_id
    ).first()
    if not itinerary:
        raise NotFoundError("Itinerary not found")

    db.delete(itinerary)
    db.commit()
