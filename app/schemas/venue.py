from typing import Optional
from pydantic import UUID4
from datetime import datetime

from app.schemas.common import CamelModel


class Venue(CamelModel):
    id: UUID4
    name: str
    address: str
    city: str
    state: str
    capacity: int
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
