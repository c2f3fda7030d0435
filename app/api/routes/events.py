from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.core.exceptions import NotFound
from app.models.event import Event, EventCategory
from app.models.seat import Seat
from app.schemas.event import EventWithVenue
from app.schemas.seat import AvailableSeat, Seat as SeatSchema
from app.services import catalog
from app.services.availability import available_seats, seat_map_configured
from app.services.inventory import display_price, price_for

router = APIRouter(prefix="/events", tags=["Events"])

SEAT_MAP_HEADER = "X-Seat-Map-Configured"


def _priced_seat(seat: Seat, event: Event) -> AvailableSeat:
    return AvailableSeat(
        **SeatSchema.model_validate(seat).model_dump(),
        price=price_for(seat, event),
        display_price=display_price(seat, event),
    )


@router.get("", response_model=List[EventWithVenue])
def list_events(
    category: Optional[EventCategory] = None,
    city: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Active events with their venue, soonest first."""
    return catalog.list_events(db, category=category, city=city, search=search)


@router.get("/{event_id}", response_model=EventWithVenue)
def get_event(event_id: UUID, db: Session = Depends(get_db)):
    event = catalog.get_event(db, event_id)
    if not event:
        raise NotFound("Event not found")
    return event


@router.get("/{event_id}/seats", response_model=List[AvailableSeat])
def list_event_seats(event_id: UUID, response: Response, db: Session = Depends(get_db)):
    """
    Seats still available for an event, ordered by row then seat number.

    An unknown event yields an empty list. The `X-Seat-Map-Configured`
    header is `false` when the venue has no seats at all, so an empty list
    can be told apart from a sold-out event.
    """
    event = catalog.get_event(db, event_id)
    if not event:
        response.headers[SEAT_MAP_HEADER] = "false"
        return []

    response.headers[SEAT_MAP_HEADER] = "true" if seat_map_configured(db, event_id) else "false"
    return [_priced_seat(seat, event) for seat in available_seats(db, event_id)]
