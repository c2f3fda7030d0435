from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.core.exceptions import NotFound
from app.schemas.movie import Movie as MovieSchema, MovieWithShowtimes
from app.schemas.theater import ShowtimeWithTheater
from app.services import catalog

router = APIRouter(prefix="/movies", tags=["Movies"])


@router.get("", response_model=List[MovieSchema])
def list_movies(db: Session = Depends(get_db)):
    """Active movies, newest release first."""
    return catalog.list_movies(db)


@router.get("/{movie_id}", response_model=MovieWithShowtimes)
def get_movie(movie_id: UUID, db: Session = Depends(get_db)):
    """A movie with its upcoming showtimes and their theaters."""
    movie = catalog.get_movie(db, movie_id)
    if not movie:
        raise NotFound("Movie not found")

    showtimes = catalog.future_showtimes(db, movie_id)
    remaining = catalog.showtime_available_seats(db, showtimes)
    return MovieWithShowtimes(
        **MovieSchema.model_validate(movie).model_dump(),
        showtimes=[
            ShowtimeWithTheater.model_validate(s).model_copy(update={"available_seats": remaining[s.id]})
            for s in showtimes
        ],
    )
