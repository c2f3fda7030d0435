from typing import Optional
from pydantic import BaseModel, EmailStr
from datetime import datetime

from app.schemas.common import CamelModel


# Profile claims carried by the access token, used to create the user row on first sight
class ProfileClaims(BaseModel):
    sub: str
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


# Properties returned via API (GET /auth/user)
class User(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
