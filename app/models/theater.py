import uuid
from sqlalchemy import Column, String, DateTime, func, Text, DECIMAL, Integer, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.db.session import Base

class Theater(Base):
    __tablename__ = "theaters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(50), nullable=False)
    total_seats = Column(Integer, nullable=False)
    amenities = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    showtimes = relationship("Showtime", back_populates="theater")

class Showtime(Base):
    __tablename__ = "showtimes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    movie_id = Column(Uuid, ForeignKey("movies.id"), nullable=False, index=True)
    theater_id = Column(Uuid, ForeignKey("theaters.id"), nullable=False, index=True)
    show_date = Column(DateTime(timezone=True), nullable=False, index=True)
    price = Column(DECIMAL(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    # No stored seat counter: remaining seats are derived from movie booking seats

    movie = relationship("Movie", back_populates="showtimes")
    theater = relationship("Theater", back_populates="showtimes")
    bookings = relationship("Booking", back_populates="showtime")
