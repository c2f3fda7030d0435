from uuid import UUID
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_user
from app.core.exceptions import Forbidden, NotFound
from app.models.booking import Booking
from app.models.user import User
from app.schemas.booking import (
    BookingCreate,
    BookingWithDetails,
    BookingSeat as BookingSeatSchema,
    MovieBookingSeat as MovieBookingSeatSchema,
)
from app.schemas.common import ErrorResponse, SeatConflictResponse, ValidationErrorResponse
from app.schemas.event import EventWithVenue
from app.schemas.theater import ShowtimeWithDetails
from app.services import booking_writer, catalog

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _serialize_booking(booking: Booking, remaining: Dict[UUID, int]) -> BookingWithDetails:
    """Convert a Booking ORM object to its schema representation."""
    showtime = None
    if booking.showtime:
        showtime = ShowtimeWithDetails.model_validate(booking.showtime).model_copy(
            update={"available_seats": remaining.get(booking.showtime_id)}
        )

    booking_seats = None
    movie_booking_seats = None
    if booking.event_id is not None:
        booking_seats = [BookingSeatSchema.model_validate(bs) for bs in booking.seats]
    else:
        movie_booking_seats = [MovieBookingSeatSchema.model_validate(ms) for ms in booking.movie_seats]

    return BookingWithDetails(
        id=booking.id,
        user_id=booking.user_id,
        kind=booking.kind,
        event_id=booking.event_id,
        showtime_id=booking.showtime_id,
        total_amount=booking.total_amount,
        status=booking.status,
        booking_date=booking.booking_date,
        created_at=booking.created_at,
        event=EventWithVenue.model_validate(booking.event) if booking.event else None,
        showtime=showtime,
        booking_seats=booking_seats,
        movie_booking_seats=movie_booking_seats,
    )


def _serialize_bookings(db: Session, bookings: List[Booking]) -> List[BookingWithDetails]:
    remaining = catalog.showtime_available_seats(
        db, [b.showtime for b in bookings if b.showtime is not None]
    )
    return [_serialize_booking(b, remaining) for b in bookings]


# ---------------------------------------------------------------------------
# POST /bookings: create a booking
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=BookingWithDetails,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": SeatConflictResponse},
    },
)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Confirm a booking. Two flows:

    **Event**: provide `eventId` and a `seatId` per seat. Seats must belong to
    the event's venue and carry the seat's current price.

    **Movie**: provide `showtimeId` and a `seatNumber` per seat.

    `totalAmount` must equal the sum of the seat prices. A seat taken by
    another booking in the meantime fails the whole request with 409.
    """
    booking = booking_writer.create_booking(db, data.to_request(current_user.id))
    return _serialize_bookings(db, [booking])[0]


# ---------------------------------------------------------------------------
# GET /bookings: list current user's bookings
# ---------------------------------------------------------------------------


@router.get("", response_model=List[BookingWithDetails])
def list_my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the authenticated user's bookings, newest first."""
    return _serialize_bookings(db, booking_writer.list_user_bookings(db, current_user.id))


# ---------------------------------------------------------------------------
# GET /bookings/{id}: single booking detail
# ---------------------------------------------------------------------------


@router.get(
    "/{booking_id}",
    response_model=BookingWithDetails,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_booking(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return a single booking. Only the owning user can access it."""
    booking: Optional[Booking] = booking_writer.get_booking(db, booking_id)
    if not booking:
        raise NotFound("Booking not found")
    if booking.user_id != current_user.id:
        raise Forbidden("Access denied")
    return _serialize_bookings(db, [booking])[0]
