import uuid
from sqlalchemy import Column, String, DateTime, func, DECIMAL, ForeignKey, Uuid, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base

BOOKING_CONFIRMED = "confirmed"

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # Either an event booking or a movie booking, never both or neither
        CheckConstraint(
            "(event_id IS NULL) <> (showtime_id IS NULL)",
            name="ck_bookings_event_xor_showtime",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Uuid, ForeignKey("events.id"), nullable=True, index=True)
    showtime_id = Column(Uuid, ForeignKey("showtimes.id"), nullable=True, index=True)
    total_amount = Column(DECIMAL(10, 2), nullable=False)
    status = Column(String(20), default=BOOKING_CONFIRMED, index=True)
    booking_date = Column(DateTime(timezone=True), server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="bookings")
    event = relationship("Event", back_populates="bookings")
    showtime = relationship("Showtime", back_populates="bookings")
    seats = relationship("BookingSeat", back_populates="booking", cascade="all, delete-orphan")
    movie_seats = relationship("MovieBookingSeat", back_populates="booking", cascade="all, delete-orphan")

    @property
    def kind(self) -> str:
        return "event" if self.event_id is not None else "movie"

class BookingSeat(Base):
    __tablename__ = "booking_seats"
    __table_args__ = (
        UniqueConstraint("event_id", "seat_id", name="uq_booking_seats_event_seat"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    booking_id = Column(Uuid, ForeignKey("bookings.id"), nullable=False, index=True)
    seat_id = Column(Uuid, ForeignKey("seats.id"), nullable=False)
    event_id = Column(Uuid, ForeignKey("events.id"), nullable=False) # Copied from the booking
    price = Column(DECIMAL(10, 2), nullable=False)

    booking = relationship("Booking", back_populates="seats")
    seat = relationship("Seat")

class MovieBookingSeat(Base):
    __tablename__ = "movie_booking_seats"
    __table_args__ = (
        UniqueConstraint("showtime_id", "seat_number", name="uq_movie_booking_seats_showtime_seat"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    booking_id = Column(Uuid, ForeignKey("bookings.id"), nullable=False, index=True)
    showtime_id = Column(Uuid, ForeignKey("showtimes.id"), nullable=False, index=True) # Copied from the booking
    seat_number = Column(String(10), nullable=False)
    price = Column(DECIMAL(10, 2), nullable=False)

    booking = relationship("Booking", back_populates="movie_seats")
