import uuid
import enum
from sqlalchemy import Column, String, Boolean, DateTime, func, Text, DECIMAL, Integer, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.db.session import Base

class MovieRating(str, enum.Enum):
    G = "G"
    PG = "PG"
    PG_13 = "PG-13"
    R = "R"
    NC_17 = "NC-17"

class Movie(Base):
    __tablename__ = "movies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Store the rating label ("PG-13"), not the member name
    rating = Column(
        SAEnum(MovieRating, name="movie_rating", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    duration = Column(Integer, nullable=False) # minutes
    genre = Column(String(255), nullable=False)
    director = Column(String(255), nullable=True)
    cast = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    trailer_url = Column(Text, nullable=True)
    release_date = Column(DateTime(timezone=True), nullable=False)
    imdb_rating = Column(DECIMAL(3, 1), nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    showtimes = relationship("Showtime", back_populates="movie")
