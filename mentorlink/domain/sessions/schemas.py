"""Session domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...config import DEFAULT_SESSION_DURATION, SESSION_DURATIONS

SessionStatus = Literal["scheduled", "completed", "cancelled", "rescheduled"]
SessionFilter = Literal["all", "scheduled", "completed", "cancelled"]


class SessionCreate(BaseModel):
    """
    Schema for booking a session with a mentor.

    date and time are kept as raw strings so an empty selection reaches the
    service and is rejected there with a form-level message.
    """

    mentor_id: str
    date: str = ""  # YYYY-MM-DD
    time: str = ""  # HH:MM, normally a window start time
    duration_minutes: int = DEFAULT_SESSION_DURATION
    meeting_notes: str = ""

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, v):
        if v not in SESSION_DURATIONS:
            raise ValueError(f"Duration must be one of {', '.join(str(d) for d in SESSION_DURATIONS)} minutes")
        return v


class ParticipantSummary(BaseModel):
    id: str
    full_name: str
    role: str
    department: Optional[str] = None
    job_title: Optional[str] = None

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    """Schema for session response"""

    id: str
    mentor_id: str
    mentee_id: str
    scheduled_at: datetime
    duration_minutes: int
    status: SessionStatus
    meeting_notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SessionDetail(SessionResponse):
    """Session with both participants and the caller's available actions"""

    mentor: Optional[ParticipantSummary] = None
    mentee: Optional[ParticipantSummary] = None
    actions: list[str] = []
