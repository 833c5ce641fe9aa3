"""Profile router - Authentication, profile and mentor discovery endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_profile
from ...database import get_db
from ...models import Profile
from ...rate_limiter import create_rate_limiter
from .schemas import (
    AuthResponse,
    MentorSummary,
    ProfileResponse,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
)
from .service import ProfileService


auth_router = APIRouter(prefix="/auth", tags=["Authentication"])
router = APIRouter(prefix="/profiles", tags=["Profiles"])
mentors_router = APIRouter(prefix="/mentors", tags=["Mentors"])

signup_rate_limit = create_rate_limiter(limit=10, window_seconds=3600, key_prefix="signup")
signin_rate_limit = create_rate_limiter(limit=20, window_seconds=300, key_prefix="signin")


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    """Dependency injection for ProfileService"""
    return ProfileService(db)


# ============================================================================
# AUTHENTICATION
# ============================================================================


@auth_router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    data: SignUpRequest,
    service: ProfileService = Depends(get_profile_service),
    _: None = Depends(signup_rate_limit),
):
    """Create an account with its attached profile"""
    profile, token = service.sign_up(data)
    return AuthResponse(access_token=token, profile=ProfileResponse.model_validate(profile))


@auth_router.post("/signin", response_model=AuthResponse)
async def signin(
    data: SignInRequest,
    service: ProfileService = Depends(get_profile_service),
    _: None = Depends(signin_rate_limit),
):
    profile, token = service.sign_in(data)
    return AuthResponse(access_token=token, profile=ProfileResponse.model_validate(profile))


@auth_router.post("/signout")
async def signout(
    current_profile: Profile = Depends(get_current_profile),
    service: ProfileService = Depends(get_profile_service),
):
    """Invalidate all tokens issued for the current profile"""
    return service.sign_out(current_profile)


@auth_router.post("/refresh", response_model=AuthResponse)
async def refresh(
    current_profile: Profile = Depends(get_current_profile),
    service: ProfileService = Depends(get_profile_service),
):
    token = service.refresh_token(current_profile)
    return AuthResponse(access_token=token, profile=ProfileResponse.model_validate(current_profile))


@auth_router.get("/me", response_model=ProfileResponse)
async def get_me(current_profile: Profile = Depends(get_current_profile)):
    return current_profile


# ============================================================================
# PROFILES
# ============================================================================


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(current_profile: Profile = Depends(get_current_profile)):
    return current_profile


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    data: ProfileUpdate,
    current_profile: Profile = Depends(get_current_profile),
    service: ProfileService = Depends(get_profile_service),
):
    """Update the current user's profile"""
    return service.update_profile(current_profile, data)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: str,
    current_profile: Profile = Depends(get_current_profile),
    service: ProfileService = Depends(get_profile_service),
):
    return service.get_profile(profile_id)


# ============================================================================
# MENTOR DISCOVERY
# ============================================================================


@mentors_router.get("", response_model=list[MentorSummary])
async def list_mentors(
    search: Optional[str] = Query(None, description="Match name, department or expertise"),
    current_profile: Profile = Depends(get_current_profile),
    service: ProfileService = Depends(get_profile_service),
):
    """List mentors with their average rating and completed-session count"""
    return service.list_mentors(search)
