"""Feedback router - Ratings attached to sessions"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_profile
from ...database import get_db
from ...models import Profile
from .schemas import FeedbackCreate, FeedbackResponse
from .service import FeedbackService

router = APIRouter(prefix="/sessions", tags=["Feedback"])


def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    """Dependency injection for FeedbackService"""
    return FeedbackService(db)


@router.post("/{session_id}/feedback", response_model=FeedbackResponse, status_code=201)
async def submit_feedback(
    session_id: str,
    data: FeedbackCreate,
    current_profile: Profile = Depends(get_current_profile),
    service: FeedbackService = Depends(get_feedback_service),
):
    """Rate a session (1-5) with an optional comment"""
    return service.submit_feedback(session_id, current_profile, data)


@router.get("/{session_id}/feedback", response_model=list[FeedbackResponse])
async def list_feedback(
    session_id: str,
    current_profile: Profile = Depends(get_current_profile),
    service: FeedbackService = Depends(get_feedback_service),
):
    return service.list_feedback(session_id, current_profile)
