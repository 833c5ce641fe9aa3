"""
Notification service - Fan-out through the outbox

Triggering writes (session booking, feedback) stage NotificationOutbox rows in
their own transaction. Dispatch turns pending rows into Notification rows and
pushes them to realtime subscribers. Dispatch is best effort for the caller:
failures are logged and left pending for the background worker to retry.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import NOTIFICATION_LIST_LIMIT, OUTBOX_BATCH_SIZE, OUTBOX_MAX_ATTEMPTS
from ...models import MentorshipSession, Notification, NotificationOutbox, Profile
from ...realtime import NotificationHub, hub
from .repository import NotificationRepository
from .schemas import NotificationIntent, NotificationListResponse, NotificationResponse

logger = logging.getLogger(__name__)


def format_local_date(value: datetime) -> str:
    """US-style date, e.g. 3/10/2025"""
    return f"{value.month}/{value.day}/{value.year}"


def format_local_time(value: datetime) -> str:
    """US-style time with seconds, e.g. 9:00:00 AM"""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d}:{value.second:02d} {suffix}"


def session_scheduled_intents(
    session: MentorshipSession, mentor: Profile, mentee: Profile
) -> list[NotificationIntent]:
    """One session_scheduled notification per participant"""
    when = f"{format_local_date(session.scheduled_at)} at {format_local_time(session.scheduled_at)}"
    return [
        NotificationIntent(
            user_id=mentor.id,
            session_id=session.id,
            type="session_scheduled",
            message=f"{mentee.full_name} has scheduled a session with you on {when}",
        ),
        NotificationIntent(
            user_id=mentee.id,
            session_id=session.id,
            type="session_scheduled",
            message=f"You have scheduled a session with {mentor.full_name} on {when}",
        ),
    ]


def feedback_received_intent(session: MentorshipSession, author: Profile) -> NotificationIntent:
    """Notify whichever participant did not write the feedback"""
    recipient_id = session.mentee_id if author.id == session.mentor_id else session.mentor_id
    return NotificationIntent(
        user_id=recipient_id,
        session_id=session.id,
        type="feedback_received",
        message=f"{author.full_name} has left feedback for your session",
    )


class NotificationService:
    """Service layer for notifications and outbox dispatch"""

    def __init__(self, db: Session, publisher: Optional[NotificationHub] = None):
        self.db = db
        self.repo = NotificationRepository()
        self.publisher = publisher or hub

    # ------------------------------------------------------------------
    # Outbox
    # ------------------------------------------------------------------

    def stage(self, intents: list[NotificationIntent]) -> list[NotificationOutbox]:
        """Add outbox rows to the current transaction; the caller commits"""
        return self.repo.add_outbox_entries(
            self.db, [intent.model_dump() for intent in intents]
        )

    def dispatch(self, entry_ids: Optional[list[int]] = None) -> dict:
        """
        Deliver pending outbox rows, each in its own transaction.

        Returns counts of dispatched and failed entries.
        """
        pending = self.repo.list_pending_outbox(self.db, OUTBOX_BATCH_SIZE, entry_ids)
        pending_ids = [entry.id for entry in pending]
        dispatched: list[Notification] = []
        failed = 0

        for entry_id in pending_ids:
            entry = self.repo.get_outbox_entry(self.db, entry_id)
            if entry is None or entry.status != "pending":
                continue
            try:
                if not self.repo.claim_outbox_entry(self.db, entry_id):
                    self.db.rollback()
                    logger.info(f"ℹ️ Outbox entry {entry_id} already claimed by another dispatcher")
                    continue
                notification = self.repo.create_notification(
                    self.db,
                    user_id=entry.user_id,
                    session_id=entry.session_id,
                    type=entry.type,
                    message=entry.message,
                )
                self.db.commit()
                self.db.refresh(notification)
                dispatched.append(notification)
            except Exception as e:
                self.db.rollback()
                failed += 1
                logger.error(f"❌ Failed to deliver notification outbox entry {entry_id}: {e}")
                self._record_failure(entry_id, e)

        for notification in dispatched:
            self.publisher.publish(
                notification.user_id,
                NotificationResponse.model_validate(notification).model_dump(mode="json"),
            )

        if dispatched or failed:
            logger.info(f"📬 Outbox dispatch: {len(dispatched)} delivered, {failed} failed")
        return {"dispatched": len(dispatched), "failed": failed}

    def dispatch_best_effort(self, entries: list[NotificationOutbox]) -> None:
        """Dispatch freshly committed entries without ever raising to the caller"""
        try:
            entry_ids = [entry.id for entry in entries]
            if entry_ids:
                self.dispatch(entry_ids)
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create notifications: {e}")

    def _record_failure(self, entry_id: int, error: Exception) -> None:
        try:
            entry = self.repo.get_outbox_entry(self.db, entry_id)
            if entry is None:
                return
            entry.attempts = (entry.attempts or 0) + 1
            entry.last_error = str(error)[:1000]
            if entry.attempts >= OUTBOX_MAX_ATTEMPTS:
                entry.status = "failed"
                logger.error(
                    f"❌ Outbox entry {entry_id} gave up after {entry.attempts} attempts"
                )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Could not record outbox failure for entry {entry_id}: {e}")

    # ------------------------------------------------------------------
    # Recipient operations
    # ------------------------------------------------------------------

    def list_for_user(self, profile: Profile) -> NotificationListResponse:
        """Latest notifications for the recipient, newest first"""
        notifications = self.repo.list_for_user(self.db, profile.id, NOTIFICATION_LIST_LIMIT)
        return NotificationListResponse(
            unread_count=sum(1 for n in notifications if not n.is_read),
            notifications=[NotificationResponse.model_validate(n) for n in notifications],
        )

    def mark_read(self, notification_id: str, profile: Profile) -> Notification:
        notification = self.repo.get_by_id(self.db, notification_id)
        if not notification or notification.user_id != profile.id:
            raise HTTPException(status_code=404, detail="Notification not found")
        return self.repo.mark_read(self.db, notification)

    def mark_all_read(self, profile: Profile) -> dict:
        updated = self.repo.mark_all_read(self.db, profile.id)
        return {"message": "Notifications marked as read", "updated": updated}
