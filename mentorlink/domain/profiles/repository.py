"""Profile repository - Database operations for profiles"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Feedback, MentorshipSession, Profile


class ProfileRepository:
    """Repository for profile database operations"""

    @staticmethod
    def get_by_id(db: Session, profile_id: str) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.id == profile_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.email == email).first()

    @staticmethod
    def list_by_role(db: Session, role: str) -> list[Profile]:
        return (
            db.query(Profile)
            .filter(Profile.role == role)
            .order_by(Profile.created_at, Profile.id)
            .all()
        )

    @staticmethod
    def count_by_role(db: Session, role: str) -> int:
        return db.query(func.count(Profile.id)).filter(Profile.role == role).scalar() or 0

    @staticmethod
    def create_profile(db: Session, **profile_data) -> Profile:
        profile = Profile(**profile_data)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def update_profile(db: Session, profile: Profile, **updates) -> Profile:
        """Apply the given fields as-is (None clears nullable columns)"""
        for key, value in updates.items():
            if hasattr(profile, key):
                setattr(profile, key, value)

        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def bump_token_version(db: Session, profile: Profile) -> Profile:
        profile.token_version = (profile.token_version or 0) + 1
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def get_completed_session_stats(db: Session) -> dict[str, dict]:
        """
        Completed-session count and mean feedback rating per mentor.
        Returns {mentor_id: {"session_count": int, "avg_rating": float}}
        """
        counts = (
            db.query(MentorshipSession.mentor_id, func.count(MentorshipSession.id))
            .filter(MentorshipSession.status == "completed")
            .group_by(MentorshipSession.mentor_id)
            .all()
        )
        ratings = (
            db.query(MentorshipSession.mentor_id, func.avg(Feedback.rating))
            .join(Feedback, Feedback.session_id == MentorshipSession.id)
            .filter(MentorshipSession.status == "completed")
            .group_by(MentorshipSession.mentor_id)
            .all()
        )

        stats: dict[str, dict] = {}
        for mentor_id, count in counts:
            stats[mentor_id] = {"session_count": count, "avg_rating": 0.0}
        for mentor_id, avg in ratings:
            stats.setdefault(mentor_id, {"session_count": 0, "avg_rating": 0.0})
            stats[mentor_id]["avg_rating"] = float(avg or 0)
        return stats
