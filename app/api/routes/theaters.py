from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.theater import Theater as TheaterSchema
from app.services import catalog

router = APIRouter(prefix="/theaters", tags=["Theaters"])


@router.get("", response_model=List[TheaterSchema])
def list_theaters(city: Optional[str] = None, db: Session = Depends(get_db)):
    return catalog.list_theaters(db, city=city)
