import uuid
import enum
from sqlalchemy import Column, String, Boolean, DateTime, func, Text, DECIMAL, Integer, ForeignKey, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.db.session import Base

class EventCategory(str, enum.Enum):
    concert = "concert"
    sports = "sports"
    theater = "theater"
    comedy = "comedy"
    festival = "festival"

class Event(Base):
    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(SAEnum(EventCategory, name="event_category", native_enum=False), nullable=False, index=True)
    venue_id = Column(Uuid, ForeignKey("venues.id"), nullable=False, index=True)
    event_date = Column(DateTime(timezone=True), nullable=False, index=True)
    duration = Column(Integer, nullable=True) # minutes
    image_url = Column(Text, nullable=True)
    base_price = Column(DECIMAL(10, 2), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    venue = relationship("Venue", back_populates="events")
    bookings = relationship("Booking", back_populates="event")
