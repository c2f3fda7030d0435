from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.stats import UserStats
from app.services.stats import stats_for

router = APIRouter(prefix="/user", tags=["User"])


@router.get("/stats", response_model=UserStats)
def get_user_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Events attended, total confirmed spend and reward points for the caller."""
    return stats_for(db, current_user.id)
