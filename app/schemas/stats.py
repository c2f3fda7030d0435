from decimal import Decimal

from app.schemas.common import CamelModel


# GET /user/stats
class UserStats(CamelModel):
    events_attended: int
    total_spent: Decimal
    reward_points: int
