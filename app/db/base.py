from app.db.session import Base
from app.models.user import User
from app.models.venue import Venue
from app.models.event import Event
from app.models.seat import Seat
from app.models.movie import Movie
from app.models.theater import Theater, Showtime
from app.models.booking import Booking, BookingSeat, MovieBookingSeat
