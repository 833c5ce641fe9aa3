"""Notification domain schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

NotificationType = Literal[
    "session_reminder",
    "session_scheduled",
    "session_cancelled",
    "feedback_received",
]


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    session_id: Optional[str] = None
    type: NotificationType
    message: str
    is_read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationListResponse(BaseModel):
    unread_count: int
    notifications: list[NotificationResponse]


class NotificationIntent(BaseModel):
    """A notification to be delivered through the outbox"""

    user_id: str
    type: NotificationType
    message: str
    session_id: Optional[str] = None
