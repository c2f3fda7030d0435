import uuid
import enum
from sqlalchemy import Column, String, DECIMAL, ForeignKey, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.db.session import Base

class SeatType(str, enum.Enum):
    general = "general"
    premium = "premium"
    vip = "vip"

class Seat(Base):
    __tablename__ = "seats"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    venue_id = Column(Uuid, ForeignKey("venues.id"), nullable=False, index=True)
    seat_number = Column(String(10), nullable=False)
    row = Column(String(5), nullable=False)
    section = Column(String(50), nullable=False)
    seat_type = Column(SAEnum(SeatType, name="seat_type", native_enum=False), nullable=False)
    price_multiplier = Column(DECIMAL(3, 2), default=1.00)

    venue = relationship("Venue", back_populates="seats")
