from uuid import UUID
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.theater import ShowtimeWithDetails
from app.services import catalog

router = APIRouter(prefix="/showtimes", tags=["Showtimes"])


@router.get("", response_model=List[ShowtimeWithDetails])
def list_showtimes(
    movie_id: Optional[UUID] = Query(None, alias="movieId"),
    theater_id: Optional[UUID] = Query(None, alias="theaterId"),
    on_date: Optional[date] = Query(None, alias="date", description="Limit to one calendar day (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    """Upcoming showtimes with movie, theater and remaining seat count."""
    showtimes = catalog.list_showtimes(db, movie_id=movie_id, theater_id=theater_id, on_date=on_date)
    remaining = catalog.showtime_available_seats(db, showtimes)
    return [
        ShowtimeWithDetails.model_validate(s).model_copy(update={"available_seats": remaining[s.id]})
        for s in showtimes
    ]
