"""Session service - Booking and lifecycle transitions"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import ENFORCE_SLOT_FIT, PREVENT_DOUBLE_BOOKING
from ...models import MentorshipSession, Profile
from ...shared.validators import parse_date, validate_time
from ..availability.repository import AvailabilityRepository
from ..availability.slots import combine_slot, find_window_for, intervals_overlap
from ..notifications.service import NotificationService, session_scheduled_intents
from ..profiles.repository import ProfileRepository
from .lifecycle import InvalidTransition, available_actions, check_transition, has_started, is_participant
from .repository import SessionRepository
from .schemas import ParticipantSummary, SessionCreate, SessionDetail

logger = logging.getLogger(__name__)


class SessionService:
    """Service layer for session booking and lifecycle"""

    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.repo = SessionRepository()
        self.notifications = notifications or NotificationService(db)

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    def book_session(self, mentee: Profile, data: SessionCreate) -> MentorshipSession:
        """
        Book a session for the mentee with a mentor.

        The session row and its two notification intents commit together;
        delivering the notifications afterwards never affects the booking.
        """
        if not data.date.strip() or not data.time.strip():
            raise HTTPException(status_code=400, detail="Please select a date and time")

        try:
            target_date = parse_date(data.date)
            start_time = validate_time(data.time)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        mentor = ProfileRepository.get_by_id(self.db, data.mentor_id)
        if not mentor or mentor.role != "mentor":
            raise HTTPException(status_code=404, detail="Mentor not found")

        scheduled_at = combine_slot(target_date, start_time)
        logger.info(
            f"📥 Booking requested by mentee {mentee.id} with mentor {mentor.id} "
            f"at {scheduled_at.isoformat()} ({data.duration_minutes} min)"
        )

        if ENFORCE_SLOT_FIT:
            self._check_slot_fit(mentor.id, target_date, start_time, data.duration_minutes)
        if PREVENT_DOUBLE_BOOKING:
            self._check_double_booking(mentor.id, scheduled_at, data.duration_minutes)

        try:
            mentorship_session = self.repo.add_session(
                self.db,
                mentor_id=mentor.id,
                mentee_id=mentee.id,
                scheduled_at=scheduled_at,
                duration_minutes=data.duration_minutes,
                meeting_notes=data.meeting_notes or "",
                status="scheduled",
            )
            entries = self.notifications.stage(
                session_scheduled_intents(mentorship_session, mentor, mentee)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to book session for mentee {mentee.id}: {e}")
            raise

        self.db.refresh(mentorship_session)
        logger.info(f"✅ Session booked: {mentorship_session.id}")

        self.notifications.dispatch_best_effort(entries)
        return mentorship_session

    def _check_slot_fit(self, mentor_id: str, target_date, start_time: str, duration: int) -> None:
        windows = AvailabilityRepository.list_for_mentor(self.db, mentor_id)
        if find_window_for(windows, target_date, start_time, duration) is None:
            logger.warning(f"⚠️ Booking outside availability rejected for mentor {mentor_id}")
            raise HTTPException(
                status_code=409,
                detail="The selected time does not fit within the mentor's availability",
            )

    def _check_double_booking(self, mentor_id: str, scheduled_at: datetime, duration: int) -> None:
        end = scheduled_at + timedelta(minutes=duration)
        for existing in self.repo.list_scheduled_for_mentor(self.db, mentor_id):
            existing_end = existing.scheduled_at + timedelta(minutes=existing.duration_minutes)
            if intervals_overlap(scheduled_at, end, existing.scheduled_at, existing_end):
                logger.warning(f"⚠️ Double booking rejected for mentor {mentor_id}")
                raise HTTPException(
                    status_code=409, detail="The mentor already has a session at this time"
                )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def get_session(self, session_id: str, profile: Profile) -> MentorshipSession:
        """Session visible to one of its participants"""
        mentorship_session = self.repo.get_by_id(self.db, session_id)
        if not mentorship_session:
            raise HTTPException(status_code=404, detail="Session not found")
        if not is_participant(mentorship_session, profile.id):
            raise HTTPException(status_code=403, detail="You are not a participant in this session")
        return mentorship_session

    def complete_session(
        self, session_id: str, profile: Profile, now: Optional[datetime] = None
    ) -> MentorshipSession:
        mentorship_session = self.get_session(session_id, profile)

        if profile.id != mentorship_session.mentor_id:
            raise HTTPException(status_code=403, detail="Only the mentor can complete a session")
        self._transition_or_409(mentorship_session, "completed")
        if not has_started(mentorship_session, now):
            raise HTTPException(status_code=409, detail="Session has not taken place yet")

        mentorship_session = self.repo.update_status(self.db, mentorship_session, "completed")
        logger.info(f"✅ Session {session_id} completed by mentor {profile.id}")
        return mentorship_session

    def cancel_session(self, session_id: str, profile: Profile) -> MentorshipSession:
        mentorship_session = self.get_session(session_id, profile)
        self._transition_or_409(mentorship_session, "cancelled")

        # No session_cancelled notification is produced for cancellations
        mentorship_session = self.repo.update_status(self.db, mentorship_session, "cancelled")
        logger.info(f"🚫 Session {session_id} cancelled by {profile.id}")
        return mentorship_session

    @staticmethod
    def _transition_or_409(mentorship_session: MentorshipSession, target: str) -> None:
        try:
            check_transition(mentorship_session.status, target)
        except InvalidTransition as e:
            logger.warning(f"⚠️ Rejected transition for session {mentorship_session.id}: {e}")
            raise HTTPException(status_code=409, detail=str(e)) from e

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def to_detail(
        self, mentorship_session: MentorshipSession, profile: Profile, now: Optional[datetime] = None
    ) -> SessionDetail:
        detail = SessionDetail.model_validate(mentorship_session)
        detail.mentor = (
            ParticipantSummary.model_validate(mentorship_session.mentor)
            if mentorship_session.mentor
            else None
        )
        detail.mentee = (
            ParticipantSummary.model_validate(mentorship_session.mentee)
            if mentorship_session.mentee
            else None
        )
        detail.actions = available_actions(mentorship_session, profile.id, now)
        return detail

    def list_sessions(self, profile: Profile, status: Optional[str] = None) -> list[SessionDetail]:
        """Caller's sessions, newest scheduled time first"""
        now = datetime.now()
        sessions = self.repo.list_for_participant(self.db, profile.id, status)
        return [self.to_detail(s, profile, now) for s in sessions]
