import logging

import pydantic
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import Unauthorized
from app.core.security import PROFILE_CLAIMS, decode_token
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import ProfileClaims

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> dict:
    """Claims of a valid bearer token; the `sub` claim identifies the user."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized("Not authenticated")
    claims = decode_token(credentials.credentials)
    if claims is None:
        raise Unauthorized("Invalid or expired token")
    return claims


def get_current_user(
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> User:
    """
    The authenticated user.

    The identity provider owns sign-up, so the first request for a new
    subject creates the user row from the token's profile claims.
    """
    user = db.get(User, claims["sub"])
    if user:
        return user

    try:
        profile = ProfileClaims.model_validate(
            {key: claims.get(key) for key in ("sub",) + PROFILE_CLAIMS}
        )
    except pydantic.ValidationError:
        raise Unauthorized("Invalid token claims")

    user = User(**profile.model_dump(exclude={"sub"}), id=profile.sub)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the same user first
        db.rollback()
        user = db.get(User, profile.sub)
        if user is None:
            raise
        return user

    db.refresh(user)
    logger.info("Created user %s from token claims", user.id)
    return user
