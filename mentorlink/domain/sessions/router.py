"""Session router - Booking and lifecycle endpoints"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_mentee, get_current_profile
from ...database import get_db
from ...models import Profile
from .schemas import SessionDetail, SessionFilter, SessionResponse, SessionCreate
from .service import SessionService

router = APIRouter(prefix="/sessions", tags=["Sessions"])


def get_session_service(db: Session = Depends(get_db)) -> SessionService:
    """Dependency injection for SessionService"""
    return SessionService(db)


@router.post("", response_model=SessionResponse, status_code=201)
async def book_session(
    data: SessionCreate,
    current_mentee: Profile = Depends(get_current_mentee),
    service: SessionService = Depends(get_session_service),
):
    """Book a session with a mentor"""
    return service.book_session(current_mentee, data)


@router.get("", response_model=list[SessionDetail])
async def list_sessions(
    status: SessionFilter = Query("all"),
    current_profile: Profile = Depends(get_current_profile),
    service: SessionService = Depends(get_session_service),
):
    """Sessions the current user takes part in"""
    return service.list_sessions(current_profile, status)


@router.get("/{session_id}", response_model=SessionDetail)
async def get_session(
    session_id: str,
    current_profile: Profile = Depends(get_current_profile),
    service: SessionService = Depends(get_session_service),
):
    mentorship_session = service.get_session(session_id, current_profile)
    return service.to_detail(mentorship_session, current_profile)


@router.post("/{session_id}/complete", response_model=SessionResponse)
async def complete_session(
    session_id: str,
    current_profile: Profile = Depends(get_current_profile),
    service: SessionService = Depends(get_session_service),
):
    """Mark a past session as completed (mentor only)"""
    return service.complete_session(session_id, current_profile)


@router.post("/{session_id}/cancel", response_model=SessionResponse)
async def cancel_session(
    session_id: str,
    current_profile: Profile = Depends(get_current_profile),
    service: SessionService = Depends(get_session_service),
):
    """Cancel a scheduled session (either participant)"""
    return service.cancel_session(session_id, current_profile)
