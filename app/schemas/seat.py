from typing import Optional
from pydantic import UUID4
from decimal import Decimal

from app.models.seat import SeatType
from app.schemas.common import CamelModel


class Seat(CamelModel):
    id: UUID4
    venue_id: UUID4
    seat_number: str
    row: str
    section: str
    seat_type: SeatType
    price_multiplier: Optional[Decimal] = None


# Seat offered for an event (GET /events/{id}/seats), priced for that event
class AvailableSeat(Seat):
    price: Decimal
    display_price: int
