"""Session repository - Database operations for mentoring sessions"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ...models import MentorshipSession, generate_id, utcnow


class SessionRepository:
    """Repository for session database operations"""

    @staticmethod
    def get_by_id(db: Session, session_id: str) -> Optional[MentorshipSession]:
        return db.query(MentorshipSession).filter(MentorshipSession.id == session_id).first()

    @staticmethod
    def add_session(db: Session, **session_data) -> MentorshipSession:
        """Stage a new session in the caller's transaction (flushed, not committed)"""
        session_data.setdefault("id", generate_id())
        mentorship_session = MentorshipSession(**session_data)
        db.add(mentorship_session)
        db.flush()
        return mentorship_session

    @staticmethod
    def list_for_participant(
        db: Session, profile_id: str, status: Optional[str] = None
    ) -> list[MentorshipSession]:
        """Sessions where the profile is mentor or mentee, newest first"""
        query = (
            db.query(MentorshipSession)
            .options(
                joinedload(MentorshipSession.mentor),
                joinedload(MentorshipSession.mentee),
            )
            .filter(
                or_(
                    MentorshipSession.mentor_id == profile_id,
                    MentorshipSession.mentee_id == profile_id,
                )
            )
        )
        if status and status != "all":
            query = query.filter(MentorshipSession.status == status)
        return query.order_by(MentorshipSession.scheduled_at.desc()).all()

    @staticmethod
    def list_scheduled_for_mentor(db: Session, mentor_id: str) -> list[MentorshipSession]:
        return (
            db.query(MentorshipSession)
            .filter(
                MentorshipSession.mentor_id == mentor_id,
                MentorshipSession.status == "scheduled",
            )
            .all()
        )

    @staticmethod
    def list_all(db: Session) -> list[MentorshipSession]:
        return db.query(MentorshipSession).all()

    @staticmethod
    def update_status(db: Session, mentorship_session: MentorshipSession, status: str) -> MentorshipSession:
        mentorship_session.status = status
        mentorship_session.updated_at = utcnow()
        db.commit()
        db.refresh(mentorship_session)
        return mentorship_session
