from app.schemas.common import CamelModel, ErrorResponse, ValidationErrorResponse, SeatConflictResponse
from app.schemas.user import User, ProfileClaims
from app.schemas.venue import Venue
from app.schemas.event import Event, EventWithVenue
from app.schemas.seat import Seat, AvailableSeat
from app.schemas.movie import Movie, MovieWithShowtimes
from app.schemas.theater import Theater, Showtime, ShowtimeWithTheater, ShowtimeWithDetails
from app.schemas.booking import (
    BookingCreate, BookingSeatLine, BookingWithDetails, BookingSeat, MovieBookingSeat,
)
from app.schemas.stats import UserStats
