"""Read-only lookups over venues, events, movies, theaters and showtimes."""
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from app.models.booking import Booking, MovieBookingSeat, BOOKING_CONFIRMED
from app.models.event import Event, EventCategory
from app.models.movie import Movie
from app.models.theater import Theater, Showtime
from app.models.venue import Venue


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Venues & events
# ---------------------------------------------------------------------------


def list_venues(db: Session) -> List[Venue]:
    return db.query(Venue).order_by(Venue.name.asc()).all()


def list_events(
    db: Session,
    category: Optional[EventCategory] = None,
    city: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Event]:
    """
    Active events with their venue, soonest first.

    `city` may be given as "City, State"; only the part before the first
    comma is matched against the venue city.
    """
    query = (
        db.query(Event)
        .join(Venue, Venue.id == Event.venue_id)
        .options(joinedload(Event.venue))
        .filter(Event.is_active == True)  # noqa: E712
    )

    if category:
        query = query.filter(Event.category == category)
    if city:
        city_part = city.split(",")[0].strip()
        if city_part:
            query = query.filter(Venue.city == city_part)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Event.title.ilike(pattern), Event.description.ilike(pattern)))

    return query.order_by(Event.event_date.asc()).all()


def get_event(db: Session, event_id: UUID) -> Optional[Event]:
    return (
        db.query(Event)
        .options(joinedload(Event.venue))
        .filter(Event.id == event_id)
        .first()
    )


# ---------------------------------------------------------------------------
# Movies, theaters & showtimes
# ---------------------------------------------------------------------------


def list_movies(db: Session) -> List[Movie]:
    return (
        db.query(Movie)
        .filter(Movie.is_active == True)  # noqa: E712
        .order_by(Movie.release_date.desc())
        .all()
    )


def get_movie(db: Session, movie_id: UUID) -> Optional[Movie]:
    return db.query(Movie).filter(Movie.id == movie_id).first()


def future_showtimes(db: Session, movie_id: UUID) -> List[Showtime]:
    return (
        db.query(Showtime)
        .options(joinedload(Showtime.theater))
        .filter(Showtime.movie_id == movie_id, Showtime.show_date >= _now())
        .order_by(Showtime.show_date.asc())
        .all()
    )


def list_theaters(db: Session, city: Optional[str] = None) -> List[Theater]:
    query = db.query(Theater)
    if city:
        query = query.filter(Theater.city == city)
    return query.order_by(Theater.name.asc()).all()


def list_showtimes(
    db: Session,
    movie_id: Optional[UUID] = None,
    theater_id: Optional[UUID] = None,
    on_date: Optional[date] = None,
) -> List[Showtime]:
    """Upcoming showtimes with movie and theater, optionally limited to one calendar day (UTC)."""
    query = (
        db.query(Showtime)
        .options(joinedload(Showtime.movie), joinedload(Showtime.theater))
        .filter(Showtime.show_date >= _now())
    )

    if movie_id:
        query = query.filter(Showtime.movie_id == movie_id)
    if theater_id:
        query = query.filter(Showtime.theater_id == theater_id)
    if on_date:
        start_of_day = datetime.combine(on_date, time.min, tzinfo=timezone.utc)
        query = query.filter(
            Showtime.show_date >= start_of_day,
            Showtime.show_date < start_of_day + timedelta(days=1),
        )

    return query.order_by(Showtime.show_date.asc()).all()


def showtime_available_seats(db: Session, showtimes: Iterable[Showtime]) -> Dict[UUID, int]:
    """Remaining seats per showtime: theater seats minus seats on confirmed movie bookings."""
    showtimes = list(showtimes)
    if not showtimes:
        return {}

    booked = dict(
        db.query(MovieBookingSeat.showtime_id, func.count(MovieBookingSeat.id))
        .join(Booking, Booking.id == MovieBookingSeat.booking_id)
        .filter(
            MovieBookingSeat.showtime_id.in_([s.id for s in showtimes]),
            Booking.status == BOOKING_CONFIRMED,
        )
        .group_by(MovieBookingSeat.showtime_id)
        .all()
    )
    return {
        s.id: max(0, s.theater.total_seats - booked.get(s.id, 0))
        for s in showtimes
    }
