import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import Profile
from .security_utils import verify_jwt_token

logger = logging.getLogger(__name__)

security = HTTPBearer()


def resolve_token(token: str, db: Session) -> Optional[Profile]:
    """
    Resolve a bearer token to its profile.
    Returns None when the token is invalid, expired or revoked by sign-out.
    """
    payload = verify_jwt_token(token)
    if not payload:
        return None

    profile_id = payload.get("sub")
    if not profile_id:
        logger.warning("⚠️ Token missing subject claim")
        return None

    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        logger.warning(f"⚠️ Token subject {profile_id} has no profile")
        return None

    if payload.get("ver") != profile.token_version:
        logger.info(f"ℹ️ Revoked token presented for profile {profile_id}")
        return None

    return profile


async def get_current_profile(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Profile:
    """Get current profile from the bearer token"""

    if not credentials:
        logger.error("❌ No credentials provided")
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    profile = resolve_token(credentials.credentials, db)
    if not profile:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token. Please sign in again.",
        )

    logger.debug(f"✅ Profile authenticated: {profile.email}")
    return profile


async def get_current_mentor(profile: Profile = Depends(get_current_profile)) -> Profile:
    """Current profile, which must have the mentor role"""
    if profile.role != "mentor":
        logger.warning(f"⚠️ Profile {profile.id} attempted a mentor-only action")
        raise HTTPException(status_code=403, detail="Only mentors can perform this action")
    return profile


async def get_current_mentee(profile: Profile = Depends(get_current_profile)) -> Profile:
    """Current profile, which must have the mentee role"""
    if profile.role != "mentee":
        logger.warning(f"⚠️ Profile {profile.id} attempted a mentee-only action")
        raise HTTPException(status_code=403, detail="Only mentees can perform this action")
    return profile
