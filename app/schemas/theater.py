from __future__ import annotations

from typing import Optional
from pydantic import UUID4
from decimal import Decimal
from datetime import datetime

from app.schemas.common import CamelModel


class Theater(CamelModel):
    id: UUID4
    name: str
    address: str
    city: str
    state: str
    total_seats: int
    amenities: Optional[str] = None
    created_at: Optional[datetime] = None


class Showtime(CamelModel):
    id: UUID4
    movie_id: UUID4
    theater_id: UUID4
    show_date: datetime
    price: Decimal
    # Derived: theater seats minus seats already booked for this showtime
    available_seats: Optional[int] = None
    created_at: Optional[datetime] = None


class ShowtimeWithTheater(Showtime):
    theater: Theater


# Showtime listing (GET /showtimes) and movie booking responses
class ShowtimeWithDetails(ShowtimeWithTheater):
    movie: Movie


from app.schemas.movie import Movie  # noqa: E402

ShowtimeWithDetails.model_rebuild()
