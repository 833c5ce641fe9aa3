"""Notification repository - Notifications and the outbox"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Notification, NotificationOutbox, utcnow


class NotificationRepository:
    """Repository for notification database operations"""

    @staticmethod
    def list_for_user(db: Session, user_id: str, limit: int) -> list[Notification]:
        return (
            db.query(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, notification_id: str) -> Optional[Notification]:
        return db.query(Notification).filter(Notification.id == notification_id).first()

    @staticmethod
    def mark_read(db: Session, notification: Notification) -> Notification:
        notification.is_read = True
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def mark_all_read(db: Session, user_id: str) -> int:
        updated = (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        db.commit()
        return updated

    @staticmethod
    def create_notification(db: Session, **notification_data) -> Notification:
        """Add a notification row without committing"""
        notification = Notification(**notification_data)
        db.add(notification)
        return notification

    # Outbox
    @staticmethod
    def add_outbox_entries(db: Session, entries: list[dict]) -> list[NotificationOutbox]:
        """Stage outbox rows in the caller's transaction (no commit)"""
        rows = [NotificationOutbox(**entry) for entry in entries]
        db.add_all(rows)
        return rows

    @staticmethod
    def get_outbox_entry(db: Session, entry_id: int) -> Optional[NotificationOutbox]:
        return db.query(NotificationOutbox).filter(NotificationOutbox.id == entry_id).first()

    @staticmethod
    def list_pending_outbox(
        db: Session, limit: int, entry_ids: Optional[list[int]] = None
    ) -> list[NotificationOutbox]:
        query = db.query(NotificationOutbox).filter(NotificationOutbox.status == "pending")
        if entry_ids is not None:
            query = query.filter(NotificationOutbox.id.in_(entry_ids))
        return query.order_by(NotificationOutbox.id).limit(limit).all()

    @staticmethod
    def claim_outbox_entry(db: Session, entry_id: int) -> bool:
        """Mark a pending row dispatched inside the caller's transaction (no commit).

        Returns False when another dispatcher already claimed the row; the
        conditional UPDATE holds the row lock until the caller commits or rolls back.
        """
        claimed = (
            db.query(NotificationOutbox)
            .filter(NotificationOutbox.id == entry_id, NotificationOutbox.status == "pending")
            .update(
                {
                    NotificationOutbox.status: "dispatched",
                    NotificationOutbox.attempts: NotificationOutbox.attempts + 1,
                    NotificationOutbox.last_error: None,
                    NotificationOutbox.dispatched_at: utcnow(),
                },
                synchronize_session=False,
            )
        )
        return claimed == 1
