from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.venue import Venue as VenueSchema
from app.services import catalog

router = APIRouter(prefix="/venues", tags=["Venues"])


@router.get("", response_model=List[VenueSchema])
def list_venues(db: Session = Depends(get_db)):
    return catalog.list_venues(db)
