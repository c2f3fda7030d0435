import os

# Point the app at an in-memory database before anything imports the engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_DATABASE_ON_STARTUP"] = "false"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import (
    User, Venue, Event, EventCategory, Seat, SeatType, Movie, MovieRating, Theater, Showtime,
)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    def _headers(user_id: str = "user-1", **claims) -> dict:
        token = create_access_token(user_id, claims=claims or None)
        return {"Authorization": f"Bearer {token}"}

    return _headers


class Factory:
    """Creates committed catalog rows for tests."""

    def __init__(self, db):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def user(self, user_id: str = "user-1", **kwargs) -> User:
        kwargs.setdefault("email", f"{user_id}@example.com")
        return self._save(User(id=user_id, **kwargs))

    def venue(self, **kwargs) -> Venue:
        data = dict(
            name="Madison Square Garden",
            address="4 Pennsylvania Plaza",
            city="New York",
            state="NY",
            capacity=20000,
        )
        data.update(kwargs)
        return self._save(Venue(**data))

    def event(self, venue: Venue, **kwargs) -> Event:
        data = dict(
            title="Taylor Swift | The Eras Tour",
            description="A concert through every era.",
            category=EventCategory.concert,
            venue_id=venue.id,
            event_date=datetime.now(timezone.utc) + timedelta(days=30),
            duration=180,
            base_price=Decimal("89.99"),
            is_active=True,
        )
        data.update(kwargs)
        return self._save(Event(**data))

    def seat(self, venue: Venue, row: str = "A", seat_number: str = "1", **kwargs) -> Seat:
        data = dict(
            venue_id=venue.id,
            row=row,
            seat_number=seat_number,
            section="VIP",
            seat_type=SeatType.vip,
            price_multiplier=Decimal("2.00"),
        )
        data.update(kwargs)
        return self._save(Seat(**data))

    def seat_map(self, venue: Venue, rows: int = 3, seats_per_row: int = 3) -> list:
        """Seats laid out the way the venue seeding does: VIP rows 1-5, premium to 15, general after."""
        seats = []
        for row in range(1, rows + 1):
            if row <= 5:
                seat_type, section, multiplier = SeatType.vip, "VIP", Decimal("2.00")
            elif row <= 15:
                seat_type, section, multiplier = SeatType.premium, "Premium", Decimal("1.50")
            else:
                seat_type, section, multiplier = SeatType.general, "General", Decimal("1.00")
            for number in range(1, seats_per_row + 1):
                seats.append(Seat(
                    venue_id=venue.id,
                    row=chr(64 + row),
                    seat_number=str(number),
                    section=section,
                    seat_type=seat_type,
                    price_multiplier=multiplier,
                ))
        self.db.add_all(seats)
        self.db.commit()
        return seats

    def movie(self, **kwargs) -> Movie:
        data = dict(
            title="Dune: Part Two",
            rating=MovieRating.PG_13,
            duration=166,
            genre="Sci-Fi, Adventure, Drama",
            director="Denis Villeneuve",
            release_date=datetime(2024, 3, 1, tzinfo=timezone.utc),
            imdb_rating=Decimal("8.7"),
            is_active=True,
        )
        data.update(kwargs)
        return self._save(Movie(**data))

    def theater(self, **kwargs) -> Theater:
        data = dict(
            name="AMC Empire 25",
            address="234 W 42nd St",
            city="New York",
            state="NY",
            total_seats=400,
            amenities="IMAX, Dolby Atmos",
        )
        data.update(kwargs)
        return self._save(Theater(**data))

    def showtime(self, movie: Movie, theater: Theater, **kwargs) -> Showtime:
        data = dict(
            movie_id=movie.id,
            theater_id=theater.id,
            show_date=datetime.now(timezone.utc) + timedelta(days=1),
            price=Decimal("12.99"),
        )
        data.update(kwargs)
        return self._save(Showtime(**data))


@pytest.fixture()
def make(db):
    return Factory(db)
