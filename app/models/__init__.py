from app.models.user import User
from app.models.venue import Venue
from app.models.event import Event, EventCategory
from app.models.seat import Seat, SeatType
from app.models.movie import Movie, MovieRating
from app.models.theater import Theater, Showtime
from app.models.booking import Booking, BookingSeat, MovieBookingSeat, BOOKING_CONFIRMED
