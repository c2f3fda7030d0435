from typing import Iterable, List, Set
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.booking import Booking, BookingSeat, MovieBookingSeat, BOOKING_CONFIRMED
from app.models.event import Event
from app.models.seat import Seat
from app.services.inventory import list_seats


def booked_seat_ids(db: Session, event_id: UUID) -> Set[UUID]:
    """Seat ids held by confirmed bookings for one event."""
    rows = (
        db.query(BookingSeat.seat_id)
        .join(Booking, Booking.id == BookingSeat.booking_id)
        .filter(
            Booking.event_id == event_id,
            Booking.status == BOOKING_CONFIRMED,
        )
        .all()
    )
    return {row.seat_id for row in rows}


def available_seats(db: Session, event_id: UUID) -> List[Seat]:
    """
    Seats of the event's venue not yet attached to a confirmed booking for that event.

    Unknown events and venues without a seat map both yield an empty list;
    use `seat_map_configured` to tell "no seat map" apart from "sold out".
    This is a point-in-time read: nothing is held or reserved.
    """
    venue_id = db.query(Event.venue_id).filter(Event.id == event_id).scalar()
    if venue_id is None:
        return []

    taken = booked_seat_ids(db, event_id)
    return [seat for seat in list_seats(db, venue_id) if seat.id not in taken]


def seat_map_configured(db: Session, event_id: UUID) -> bool:
    """True when the event's venue has at least one seat."""
    return (
        db.query(Seat.id)
        .join(Event, Event.venue_id == Seat.venue_id)
        .filter(Event.id == event_id)
        .first()
        is not None
    )


def taken_seat_numbers(db: Session, showtime_id: UUID, seat_numbers: Iterable[str]) -> Set[str]:
    """Which of the given movie seat numbers are already booked for a showtime."""
    wanted = list(seat_numbers)
    if not wanted:
        return set()
    rows = (
        db.query(MovieBookingSeat.seat_number)
        .join(Booking, Booking.id == MovieBookingSeat.booking_id)
        .filter(
            MovieBookingSeat.showtime_id == showtime_id,
            MovieBookingSeat.seat_number.in_(wanted),
            Booking.status == BOOKING_CONFIRMED,
        )
        .all()
    )
    return {row.seat_number for row in rows}
