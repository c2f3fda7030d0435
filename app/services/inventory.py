"""
Seat inventory and per-seat pricing.

A venue owns a fixed seat map that every event at that venue reuses.
A seat's price for an event compounds three figures:

    event.base_price × seat.price_multiplier × type factor (vip 1.5, premium 1.2, general 1.0)

The stored multiplier is usually already type-correlated (2.0 / 1.5 / 1.0),
so the type factor is applied on top of it rather than instead of it.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.event import Event
from app.models.seat import Seat, SeatType
from app.utils.ordering import natural_key

CENTS = Decimal("0.01")
WHOLE_UNITS = Decimal("1")
DEFAULT_MULTIPLIER = Decimal("1.00")


def _decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def seat_sort_key(seat: Seat):
    return natural_key(seat.row), natural_key(seat.seat_number)


def sort_seats(seats: Iterable[Seat]) -> List[Seat]:
    """Order seats by row, then seat number, comparing digit runs numerically."""
    return sorted(seats, key=seat_sort_key)


def list_seats(db: Session, venue_id: UUID) -> List[Seat]:
    """All seats of a venue, ordered by row then seat number."""
    seats = db.query(Seat).filter(Seat.venue_id == venue_id).all()
    return sort_seats(seats)


def type_factor(seat_type) -> Decimal:
    key = SeatType(seat_type).value if seat_type is not None else SeatType.general.value
    return _decimal(settings.EVENT_SEAT_TYPE_FACTORS.get(key, Decimal("1.0")))


def _raw_price(seat: Seat, event: Event) -> Decimal:
    multiplier = seat.price_multiplier if seat.price_multiplier is not None else DEFAULT_MULTIPLIER
    return _decimal(event.base_price) * _decimal(multiplier) * type_factor(seat.seat_type)


def price_for(seat: Seat, event: Event) -> Decimal:
    """Price of a seat for an event, rounded half-up to cents. This is the persisted price."""
    return _raw_price(seat, event).quantize(CENTS, rounding=ROUND_HALF_UP)


def display_price(seat: Seat, event: Event) -> int:
    """Whole-unit price shown on the seat map. Never persisted."""
    return int(_raw_price(seat, event).quantize(WHOLE_UNITS, rounding=ROUND_HALF_UP))
