from typing import List, Optional
from pydantic import UUID4
from decimal import Decimal
from datetime import datetime

from app.models.movie import MovieRating
from app.schemas.common import CamelModel


class Movie(CamelModel):
    id: UUID4
    title: str
    description: Optional[str] = None
    rating: MovieRating
    duration: int
    genre: str
    director: Optional[str] = None
    cast: Optional[str] = None
    image_url: Optional[str] = None
    trailer_url: Optional[str] = None
    release_date: datetime
    imdb_rating: Optional[Decimal] = None
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None


# Movie detail (GET /movies/{id}) with upcoming showtimes
class MovieWithShowtimes(Movie):
    showtimes: List["ShowtimeWithTheater"] = []


from app.schemas.theater import ShowtimeWithTheater  # noqa: E402

MovieWithShowtimes.model_rebuild()
