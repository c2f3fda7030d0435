from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.user import User as UserSchema

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/user", response_model=UserSchema)
def get_auth_user(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's profile."""
    return current_user
