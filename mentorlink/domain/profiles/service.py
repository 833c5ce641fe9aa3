"""Profile service - Accounts, profile editing and mentor discovery"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...cache import cache, invalidate_profile_cache, profile_key
from ...models import Profile
from ...security_utils import create_access_token, hash_password, verify_password
from .repository import ProfileRepository
from .schemas import MentorSummary, ProfileResponse, ProfileUpdate, SignInRequest, SignUpRequest

logger = logging.getLogger(__name__)


def serialize_profile(profile: Profile) -> dict:
    return ProfileResponse.model_validate(profile).model_dump(mode="json")


def matches_search(mentor: MentorSummary, search: str) -> bool:
    """Case-insensitive match on name, department or any expertise area"""
    term = search.strip().lower()
    if not term:
        return True
    if term in mentor.full_name.lower():
        return True
    if mentor.department and term in mentor.department.lower():
        return True
    return any(term in area.lower() for area in mentor.expertise_areas)


class ProfileService:
    """Service layer for accounts and profiles"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProfileRepository()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def sign_up(self, data: SignUpRequest) -> tuple[Profile, str]:
        """Create an account and its profile, returning the profile and a token"""
        logger.info(f"📥 Sign-up requested for {data.email} as {data.role}")

        if self.repo.get_by_email(self.db, data.email):
            logger.warning(f"⚠️ Sign-up rejected, email already registered: {data.email}")
            raise HTTPException(status_code=409, detail="User already registered")

        profile_data = {
            "email": data.email,
            "password_hash": hash_password(data.password),
            "full_name": data.full_name,
            "role": data.role,
            "department": data.department,
            "job_title": data.job_title,
            "bio": data.bio or "",
            # Expertise only means something for mentors, goals only for mentees
            "expertise_areas": data.expertise_areas if data.role == "mentor" else [],
            "learning_goals": data.learning_goals if data.role == "mentee" else [],
        }

        try:
            profile = self.repo.create_profile(self.db, **profile_data)
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"❌ Email {data.email} was taken by another account (race condition)")
            raise HTTPException(status_code=409, detail="User already registered") from e

        logger.info(f"✅ Profile created: {profile.id} ({profile.role})")
        return profile, create_access_token(profile.id, profile.token_version)

    def sign_in(self, data: SignInRequest) -> tuple[Profile, str]:
        profile = self.repo.get_by_email(self.db, data.email)
        if not profile or not verify_password(data.password, profile.password_hash):
            logger.warning(f"⚠️ Failed sign-in for {data.email}")
            raise HTTPException(status_code=401, detail="Invalid login credentials")

        logger.info(f"✅ Signed in: {profile.email}")
        return profile, create_access_token(profile.id, profile.token_version)

    def sign_out(self, profile: Profile) -> dict:
        """Revoke every token issued so far for the profile"""
        self.repo.bump_token_version(self.db, profile)
        logger.info(f"👋 Signed out: {profile.email}")
        return {"message": "Signed out"}

    def refresh_token(self, profile: Profile) -> str:
        return create_access_token(profile.id, profile.token_version)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def get_profile(self, profile_id: str) -> dict:
        """Profile by id, read through the cache"""

        def load() -> Optional[dict]:
            profile = self.repo.get_by_id(self.db, profile_id)
            return serialize_profile(profile) if profile else None

        data = cache.read_through(profile_key(profile_id), load)
        if not data:
            raise HTTPException(status_code=404, detail="Profile not found")
        return data

    def update_profile(self, profile: Profile, data: ProfileUpdate) -> Profile:
        """Owner-only edit; blank department / job title clear the field"""
        fields = data.model_dump(exclude_unset=True)
        updates = {}

        for key in ("full_name", "bio"):
            if fields.get(key) is not None:
                updates[key] = fields[key]
        for key in ("department", "job_title"):
            if key in fields:
                value = fields[key]
                updates[key] = value.strip() if value and value.strip() else None

        if fields.get("expertise_areas") is not None:
            if profile.role != "mentor":
                raise HTTPException(status_code=400, detail="Only mentors have expertise areas")
            updates["expertise_areas"] = fields["expertise_areas"]
        if fields.get("learning_goals") is not None:
            if profile.role != "mentee":
                raise HTTPException(status_code=400, detail="Only mentees have learning goals")
            updates["learning_goals"] = fields["learning_goals"]

        profile = self.repo.update_profile(self.db, profile, **updates)
        invalidate_profile_cache(profile.id)
        logger.info(f"✅ Profile updated: {profile.id} ({', '.join(updates) or 'no changes'})")
        return profile

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def list_mentors(self, search: Optional[str] = None) -> list[MentorSummary]:
        """Mentors with rating and completed-session count, optionally filtered"""
        mentors = self.repo.list_by_role(self.db, "mentor")
        stats = self.repo.get_completed_session_stats(self.db)

        summaries = []
        for mentor in mentors:
            mentor_stats = stats.get(mentor.id, {})
            summary = MentorSummary(
                **serialize_profile(mentor),
                avg_rating=mentor_stats.get("avg_rating", 0.0),
                session_count=mentor_stats.get("session_count", 0),
            )
            if search and not matches_search(summary, search):
                continue
            summaries.append(summary)
        return summaries
