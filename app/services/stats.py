import math
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.booking import Booking, BOOKING_CONFIRMED
from app.models.event import Event
from app.schemas.stats import UserStats


def stats_for(db: Session, user_id: str) -> UserStats:
    """
    Totals shown on the user's dashboard.

    - events_attended: confirmed event bookings whose event date is strictly in the past
    - total_spent: sum of total_amount over every confirmed booking, any date
    - reward_points: one point per REWARD_POINT_UNIT spent, rounded down
    """
    now = datetime.now(timezone.utc)

    events_attended = (
        db.query(func.count(Booking.id))
        .join(Event, Event.id == Booking.event_id)
        .filter(
            Booking.user_id == user_id,
            Booking.status == BOOKING_CONFIRMED,
            Event.event_date < now,
        )
        .scalar()
    ) or 0

    amounts = (
        db.query(Booking.total_amount)
        .filter(Booking.user_id == user_id, Booking.status == BOOKING_CONFIRMED)
        .all()
    )
    total_spent = sum((Decimal(str(row.total_amount)) for row in amounts), Decimal("0"))
    reward_points = math.floor(total_spent / settings.REWARD_POINT_UNIT)

    return UserStats(
        events_attended=events_attended,
        total_spent=total_spent,
        reward_points=reward_points,
    )
