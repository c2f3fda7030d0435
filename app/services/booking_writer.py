"""
Booking creation.

A booking is either an event booking (lines reference venue seats) or a
movie booking (lines carry free-text seat numbers for a showtime). Both are
written in a single transaction on the caller's session:

1. resolve the event / showtime,
2. validate the seat lines and the submitted total,
3. lock the requested seats and re-check that nobody holds them,
4. insert the booking and its lines, then commit.

Any other store failure rolls back and surfaces as InternalError.

The unique constraints on (event_id, seat_id) and (showtime_id, seat_number)
back the availability check: a concurrent writer that slips past step 3
fails at flush/commit and is reported as a SeatConflict. Nothing is left
behind when any step fails.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import InternalError, NotFound, SeatConflict, ValidationError
from app.models.booking import Booking, BookingSeat, MovieBookingSeat, BOOKING_CONFIRMED
from app.models.event import Event
from app.models.seat import Seat
from app.models.theater import Showtime
from app.services.availability import booked_seat_ids, taken_seat_numbers
from app.services.inventory import price_for

logger = logging.getLogger(__name__)

SEAT_UNIQUE_CONSTRAINTS = (
    "uq_booking_seats_event_seat",
    "uq_movie_booking_seats_showtime_seat",
    # SQLite reports the columns instead of the constraint name
    "booking_seats.event_id, booking_seats.seat_id",
    "movie_booking_seats.showtime_id, movie_booking_seats.seat_number",
)


@dataclass(frozen=True)
class EventSeatLine:
    seat_id: UUID
    price: Decimal


@dataclass(frozen=True)
class MovieSeatLine:
    seat_number: str
    price: Decimal


@dataclass
class EventBookingRequest:
    user_id: str
    event_id: UUID
    total_amount: Decimal
    seats: List[EventSeatLine] = field(default_factory=list)


@dataclass
class MovieBookingRequest:
    user_id: str
    showtime_id: UUID
    total_amount: Decimal
    seats: List[MovieSeatLine] = field(default_factory=list)


BookingRequest = Union[EventBookingRequest, MovieBookingRequest]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _seat_loc(index: int, field_name: str) -> list:
    return ["body", "seats", index, field_name]


def _check_not_empty(lines: list) -> None:
    if not lines:
        raise ValidationError.for_field(["body", "seats"], "At least one seat is required")


def _check_total(total_amount: Decimal, prices: List[Decimal]) -> None:
    expected = sum(prices, Decimal("0"))
    if total_amount != expected:
        raise ValidationError.for_field(
            ["body", "totalAmount"],
            f"totalAmount {total_amount} does not match the seat prices ({expected})",
        )


def _is_seat_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return constraint in SEAT_UNIQUE_CONSTRAINTS
    return any(name in message for name in SEAT_UNIQUE_CONSTRAINTS)


def _booking_query(db: Session):
    return db.query(Booking).options(
        joinedload(Booking.event).joinedload(Event.venue),
        joinedload(Booking.showtime).joinedload(Showtime.movie),
        joinedload(Booking.showtime).joinedload(Showtime.theater),
        joinedload(Booking.seats).joinedload(BookingSeat.seat),
        joinedload(Booking.movie_seats),
    )


# ---------------------------------------------------------------------------
# Event bookings
# ---------------------------------------------------------------------------


def _write_event_booking(db: Session, request: EventBookingRequest) -> Booking:
    event = db.query(Event).filter(Event.id == request.event_id).first()
    if not event:
        raise NotFound("Event not found")

    _check_not_empty(request.seats)
    seat_ids = [line.seat_id for line in request.seats]
    if len(set(seat_ids)) != len(seat_ids):
        raise ValidationError.for_field(["body", "seats"], "The same seat is listed more than once")

    # Lock the requested seat rows so concurrent writers for these seats queue up
    seats = (
        db.query(Seat)
        .filter(Seat.id.in_(seat_ids))
        .order_by(Seat.id)
        .with_for_update()
        .all()
    )
    seats_by_id = {seat.id: seat for seat in seats}

    errors = []
    prices: List[Decimal] = []
    for index, line in enumerate(request.seats):
        seat = seats_by_id.get(line.seat_id)
        if seat is None:
            errors.append({"loc": _seat_loc(index, "seatId"), "msg": "Seat not found", "type": "value_error"})
            continue
        if seat.venue_id != event.venue_id:
            errors.append({
                "loc": _seat_loc(index, "seatId"),
                "msg": "Seat does not belong to this event's venue",
                "type": "value_error",
            })
            continue
        expected = price_for(seat, event)
        if line.price != expected:
            logger.warning(
                "Price mismatch for seat %s on event %s: submitted %s, expected %s",
                seat.id, event.id, line.price, expected,
            )
            errors.append({
                "loc": _seat_loc(index, "price"),
                "msg": f"Price for this seat is {expected}, the price listed by GET /events/{event.id}/seats",
                "type": "value_error",
            })
            continue
        prices.append(expected)
    if errors:
        raise ValidationError("Invalid booking data", errors)

    _check_total(request.total_amount, prices)

    taken = booked_seat_ids(db, event.id).intersection(seat_ids)
    if taken:
        raise SeatConflict(unavailable_seat_ids=sorted(str(seat_id) for seat_id in taken))

    booking = Booking(
        user_id=request.user_id,
        event_id=event.id,
        total_amount=request.total_amount,
        status=BOOKING_CONFIRMED,
    )
    db.add(booking)
    db.flush()  # get booking.id

    for line, price in zip(request.seats, prices):
        db.add(BookingSeat(
            booking_id=booking.id,
            seat_id=line.seat_id,
            event_id=event.id,
            price=price,
        ))
    return booking


# ---------------------------------------------------------------------------
# Movie bookings
# ---------------------------------------------------------------------------


def _write_movie_booking(db: Session, request: MovieBookingRequest) -> Booking:
    # Lock the showtime row: movie seats have no rows of their own to lock
    showtime = (
        db.query(Showtime)
        .filter(Showtime.id == request.showtime_id)
        .with_for_update()
        .first()
    )
    if not showtime:
        raise NotFound("Showtime not found")

    _check_not_empty(request.seats)
    seat_numbers = [line.seat_number.strip() for line in request.seats]
    for index, seat_number in enumerate(seat_numbers):
        if not seat_number:
            raise ValidationError.for_field(_seat_loc(index, "seatNumber"), "Seat number must not be blank")
    if len(set(seat_numbers)) != len(seat_numbers):
        raise ValidationError.for_field(["body", "seats"], "The same seat is listed more than once")

    _check_total(request.total_amount, [line.price for line in request.seats])

    taken = taken_seat_numbers(db, showtime.id, seat_numbers)
    if taken:
        raise SeatConflict(unavailable_seat_numbers=sorted(taken))

    booked = (
        db.query(func.count(MovieBookingSeat.id))
        .join(Booking, Booking.id == MovieBookingSeat.booking_id)
        .filter(
            MovieBookingSeat.showtime_id == showtime.id,
            Booking.status == BOOKING_CONFIRMED,
        )
        .scalar()
    )
    if booked + len(seat_numbers) > showtime.theater.total_seats:
        raise SeatConflict("Not enough seats left for this showtime")

    booking = Booking(
        user_id=request.user_id,
        showtime_id=showtime.id,
        total_amount=request.total_amount,
        status=BOOKING_CONFIRMED,
    )
    db.add(booking)
    db.flush()

    for seat_number, line in zip(seat_numbers, request.seats):
        db.add(MovieBookingSeat(
            booking_id=booking.id,
            showtime_id=showtime.id,
            seat_number=seat_number,
            price=line.price,
        ))
    return booking


def _conflict_from_integrity_error(db: Session, request: BookingRequest) -> SeatConflict:
    if isinstance(request, EventBookingRequest):
        taken = booked_seat_ids(db, request.event_id).intersection(line.seat_id for line in request.seats)
        return SeatConflict(unavailable_seat_ids=sorted(str(seat_id) for seat_id in taken))
    taken = taken_seat_numbers(db, request.showtime_id, [line.seat_number.strip() for line in request.seats])
    return SeatConflict(unavailable_seat_numbers=sorted(taken))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def create_booking(db: Session, request: BookingRequest) -> Booking:
    """Write a booking and its seat lines atomically, returning it with all details loaded."""
    if isinstance(request, EventBookingRequest):
        writer = _write_event_booking
    elif isinstance(request, MovieBookingRequest):
        writer = _write_movie_booking
    else:
        raise TypeError(f"Unsupported booking request: {type(request).__name__}")

    try:
        booking = writer(db, request)
        db.flush()
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not _is_seat_conflict(exc):
            logger.exception("Could not write booking for user %s", request.user_id)
            raise InternalError("Could not save the booking") from exc
        logger.warning("Seat conflict while writing booking for user %s", request.user_id)
        raise _conflict_from_integrity_error(db, request) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Could not write booking for user %s", request.user_id)
        raise InternalError("Could not save the booking") from exc
    except SeatConflict:
        db.rollback()
        logger.warning("Seat conflict while writing booking for user %s", request.user_id)
        raise
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Booking %s confirmed for user %s (%s, %d seat(s), total %s)",
        booking.id, request.user_id, booking.kind, len(request.seats), request.total_amount,
    )
    return get_booking(db, booking.id)


def get_booking(db: Session, booking_id: UUID) -> Optional[Booking]:
    return _booking_query(db).filter(Booking.id == booking_id).first()


def list_user_bookings(db: Session, user_id: str) -> List[Booking]:
    """The user's bookings, newest first. Bookings created within one tick of the database clock tie."""
    return (
        _booking_query(db)
        .filter(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.booking_date.desc())
        .all()
    )
