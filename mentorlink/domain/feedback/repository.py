"""Feedback repository - Database operations for session feedback"""

from sqlalchemy.orm import Session

from ...models import Feedback, generate_id


class FeedbackRepository:
    """Repository for feedback database operations"""

    @staticmethod
    def add_feedback(db: Session, **feedback_data) -> Feedback:
        """Stage a feedback row in the caller's transaction (flushed, not committed)"""
        feedback_data.setdefault("id", generate_id())
        feedback = Feedback(**feedback_data)
        db.add(feedback)
        db.flush()
        return feedback

    @staticmethod
    def list_for_session(db: Session, session_id: str) -> list[Feedback]:
        return (
            db.query(Feedback)
            .filter(Feedback.session_id == session_id)
            .order_by(Feedback.created_at)
            .all()
        )

    @staticmethod
    def list_all(db: Session) -> list[Feedback]:
        return db.query(Feedback).all()
