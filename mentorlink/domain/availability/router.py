"""Availability router - Weekly windows and bookable slots"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_mentor, get_current_profile
from ...database import get_db
from ...models import Profile
from .schemas import AvailabilityCreate, AvailabilityResponse, SlotsForDateResponse
from .service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["Availability"])
mentor_availability_router = APIRouter(prefix="/mentors", tags=["Availability"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    """Dependency injection for AvailabilityService"""
    return AvailabilityService(db)


@router.get("", response_model=list[AvailabilityResponse])
async def list_my_availability(
    current_mentor: Profile = Depends(get_current_mentor),
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.list_windows(current_mentor.id)


@router.post("", response_model=AvailabilityResponse, status_code=201)
async def add_availability(
    data: AvailabilityCreate,
    current_mentor: Profile = Depends(get_current_mentor),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Add a recurring weekly window"""
    return service.add_window(current_mentor, data)


@router.delete("/{availability_id}")
async def delete_availability(
    availability_id: str,
    current_mentor: Profile = Depends(get_current_mentor),
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.delete_window(availability_id, current_mentor)


@mentor_availability_router.get("/{mentor_id}/availability", response_model=list[AvailabilityResponse])
async def list_mentor_availability(
    mentor_id: str,
    current_profile: Profile = Depends(get_current_profile),
    service: AvailabilityService = Depends(get_availability_service),
):
    """A mentor's weekly windows, as shown to mentees before booking"""
    service.get_mentor(mentor_id)
    return service.list_windows(mentor_id)


@mentor_availability_router.get("/{mentor_id}/slots", response_model=SlotsForDateResponse)
async def get_slots_for_date(
    mentor_id: str,
    date: date = Query(..., description="Calendar date, YYYY-MM-DD"),
    current_profile: Profile = Depends(get_current_profile),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Windows that apply on the given date"""
    return service.slots_for_date(mentor_id, date)
