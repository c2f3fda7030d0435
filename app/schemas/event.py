from typing import Optional
from pydantic import UUID4
from decimal import Decimal
from datetime import datetime

from app.models.event import EventCategory
from app.schemas.common import CamelModel
from app.schemas.venue import Venue


class Event(CamelModel):
    id: UUID4
    title: str
    description: Optional[str] = None
    category: EventCategory
    venue_id: UUID4
    event_date: datetime
    duration: Optional[int] = None
    image_url: Optional[str] = None
    base_price: Decimal
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None


# Event with nested venue: list, detail and booking responses
class EventWithVenue(Event):
    venue: Venue
