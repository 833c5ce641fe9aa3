"""Feedback service - Ratings on sessions and the counterpart notification"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Feedback, Profile
from ..notifications.service import NotificationService, feedback_received_intent
from ..sessions.service import SessionService
from .repository import FeedbackRepository
from .schemas import FeedbackCreate

logger = logging.getLogger(__name__)


class FeedbackService:
    """Service layer for session feedback"""

    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.repo = FeedbackRepository()
        self.notifications = notifications or NotificationService(db)
        self.sessions = SessionService(db, self.notifications)

    def submit_feedback(self, session_id: str, author: Profile, data: FeedbackCreate) -> Feedback:
        """
        Record a rating for a session and notify the other participant.

        Only completed sessions take feedback. Multiple feedback rows per author
        and session are accepted.
        """
        if not data.rating:
            raise HTTPException(status_code=400, detail="Please select a rating")
        if data.rating < 1 or data.rating > 5:
            raise HTTPException(status_code=400, detail="Rating must be between 1 and 5")

        mentorship_session = self.sessions.get_session(session_id, author)
        if mentorship_session.status != "completed":
            logger.warning(
                f"⚠️ Feedback rejected for session {session_id} in status {mentorship_session.status}"
            )
            raise HTTPException(
                status_code=409, detail="Feedback can only be left on completed sessions"
            )

        try:
            feedback = self.repo.add_feedback(
                self.db,
                session_id=mentorship_session.id,
                from_user_id=author.id,
                rating=data.rating,
                comment=data.comment or "",
            )
            entries = self.notifications.stage(
                [feedback_received_intent(mentorship_session, author)]
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to save feedback for session {session_id}: {e}")
            raise

        self.db.refresh(feedback)
        logger.info(f"✅ Feedback {feedback.id} ({data.rating}/5) saved for session {session_id}")

        self.notifications.dispatch_best_effort(entries)
        return feedback

    def list_feedback(self, session_id: str, profile: Profile) -> list[Feedback]:
        self.sessions.get_session(session_id, profile)
        return self.repo.list_for_session(self.db, session_id)
