"""Analytics service - Loads each table once and builds the dashboard"""

import logging

from sqlalchemy.orm import Session

from ..availability.repository import AvailabilityRepository
from ..feedback.repository import FeedbackRepository
from ..profiles.repository import ProfileRepository
from ..sessions.repository import SessionRepository
from .aggregator import build_dashboard
from .schemas import DashboardResponse

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Service layer for the analytics dashboard"""

    def __init__(self, db: Session):
        self.db = db

    def get_dashboard(self) -> DashboardResponse:
        """Recomputed on every request"""
        mentors = ProfileRepository.list_by_role(self.db, "mentor")
        mentee_count = ProfileRepository.count_by_role(self.db, "mentee")
        sessions = SessionRepository.list_all(self.db)
        feedback = FeedbackRepository.list_all(self.db)
        availability = AvailabilityRepository.list_all(self.db)

        dashboard = build_dashboard(mentors, mentee_count, sessions, feedback, availability)
        logger.info(
            f"📊 Dashboard built: {dashboard['total_mentors']} mentors, "
            f"{dashboard['total_sessions']} sessions, {len(feedback)} feedback rows"
        )
        return DashboardResponse(**dashboard)
