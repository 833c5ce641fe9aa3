import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base


def generate_id():
    """Generate a unique public ID"""
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    # Bumped on sign-out so every token issued before it stops verifying
    token_version = Column(Integer, default=0, nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)  # mentor, mentee
    department = Column(String(255), nullable=True)
    job_title = Column(String(255), nullable=True)
    bio = Column(Text, default="", nullable=False)
    expertise_areas = Column(JSON, default=list, nullable=False)  # mentor only
    learning_goals = Column(JSON, default=list, nullable=False)  # mentee only
    created_at = Column(DateTime, default=utcnow)

    availability = relationship(
        "Availability", back_populates="mentor", cascade="all, delete-orphan"
    )


class Availability(Base):
    """Recurring weekly window a mentor can be booked in"""

    __tablename__ = "availability"

    id = Column(String(36), primary_key=True, default=generate_id)
    mentor_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday ... 6 = Saturday
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    is_recurring = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    mentor = relationship("Profile", back_populates="availability")


class MentorshipSession(Base):
    __tablename__ = "sessions"

    id = Column(String(36), primary_key=True, default=generate_id)
    mentor_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    mentee_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    # Local wall-clock time, no timezone normalisation
    scheduled_at = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, default=60, nullable=False)
    # Status workflow: scheduled → completed | cancelled ("rescheduled" is never produced)
    status = Column(String(20), default="scheduled", nullable=False, index=True)
    meeting_notes = Column(Text, default="", nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    mentor = relationship("Profile", foreign_keys=[mentor_id])
    mentee = relationship("Profile", foreign_keys=[mentee_id])
    feedback = relationship("Feedback", back_populates="session", cascade="all, delete-orphan")


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=generate_id)
    session_id = Column(String(36), ForeignKey("sessions.id"), nullable=False, index=True)
    from_user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, default="", nullable=False)
    created_at = Column(DateTime, default=utcnow)

    session = relationship("MentorshipSession", back_populates="feedback")
    author = relationship("Profile")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    session_id = Column(String(36), ForeignKey("sessions.id"), nullable=True)
    type = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, index=True)


class NotificationOutbox(Base):
    """Notification intent written in the same transaction as the triggering event"""

    __tablename__ = "notification_outbox"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    session_id = Column(String(36), ForeignKey("sessions.id"), nullable=True)
    type = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), default="pending", nullable=False, index=True)
    attempts = Column(Integer, default=0, nullable=False)
    last_error = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    dispatched_at = Column(DateTime, nullable=True)
