"""Analytics domain schemas"""

from typing import Optional

from pydantic import BaseModel


class TopMentor(BaseModel):
    id: str
    name: str
    department: Optional[str] = None
    session_count: int
    average_rating: float


class MentorUtilization(BaseModel):
    id: str
    name: str
    utilization_percent: float
    # Completed sessions behind the percentage
    sessions_count: int


class DashboardResponse(BaseModel):
    total_mentors: int
    total_mentees: int
    total_sessions: int
    completed_sessions: int
    average_rating: float
    top_mentors: list[TopMentor] = []
    mentor_utilization: list[MentorUtilization] = []
