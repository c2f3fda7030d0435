from typing import Annotated, List, Literal, Optional, Union
from pydantic import Field, StringConstraints, UUID4, model_validator
from decimal import Decimal
from datetime import datetime

from app.schemas.common import CamelModel
from app.schemas.event import EventWithVenue
from app.schemas.seat import Seat
from app.schemas.theater import ShowtimeWithDetails
from app.services.booking_writer import (
    EventBookingRequest,
    EventSeatLine,
    MovieBookingRequest,
    MovieSeatLine,
)

Money = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


# One seat line in POST /bookings: seatId for events, seatNumber for movies
class BookingSeatLine(CamelModel):
    seat_id: Optional[UUID4] = None
    seat_number: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=10)]] = None
    price: Money


# Booking: Create (POST /bookings)
class BookingCreate(CamelModel):
    event_id: Optional[UUID4] = None
    showtime_id: Optional[UUID4] = None
    total_amount: Money
    seats: Annotated[List[BookingSeatLine], Field(min_length=1, max_length=20)]

    @model_validator(mode="after")
    def check_booking_kind(self):
        if (self.event_id is None) == (self.showtime_id is None):
            raise ValueError("Exactly one of eventId or showtimeId is required")
        if self.event_id is not None:
            if any(line.seat_id is None for line in self.seats):
                raise ValueError("Every seat of an event booking needs a seatId")
        elif any(not line.seat_number for line in self.seats):
            raise ValueError("Every seat of a movie booking needs a seatNumber")
        return self

    def to_request(self, user_id: str) -> Union[EventBookingRequest, MovieBookingRequest]:
        if self.event_id is not None:
            return EventBookingRequest(
                user_id=user_id,
                event_id=self.event_id,
                total_amount=self.total_amount,
                seats=[EventSeatLine(seat_id=line.seat_id, price=line.price) for line in self.seats],
            )
        return MovieBookingRequest(
            user_id=user_id,
            showtime_id=self.showtime_id,
            total_amount=self.total_amount,
            seats=[MovieSeatLine(seat_number=line.seat_number, price=line.price) for line in self.seats],
        )


# Nested line items in booking responses
class BookingSeat(CamelModel):
    id: UUID4
    booking_id: UUID4
    seat_id: UUID4
    price: Decimal
    seat: Seat


class MovieBookingSeat(CamelModel):
    id: UUID4
    booking_id: UUID4
    seat_number: str
    price: Decimal


# Booking: Full response (POST /bookings, GET /bookings, GET /bookings/{id})
class BookingWithDetails(CamelModel):
    id: UUID4
    user_id: str
    kind: Literal["event", "movie"]
    event_id: Optional[UUID4] = None
    showtime_id: Optional[UUID4] = None
    total_amount: Decimal
    status: str
    booking_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    event: Optional[EventWithVenue] = None
    showtime: Optional[ShowtimeWithDetails] = None
    booking_seats: Optional[List[BookingSeat]] = None
    movie_booking_seats: Optional[List[MovieBookingSeat]] = None
