"""Availability service - Weekly windows and slot resolution"""

import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import availability_key, cache, invalidate_availability_cache
from ...config import PREVENT_AVAILABILITY_OVERLAP
from ...models import Availability, Profile
from ..profiles.repository import ProfileRepository
from .repository import AvailabilityRepository
from .schemas import AvailabilityCreate, AvailabilityResponse, SlotResponse, SlotsForDateResponse
from .slots import DAY_NAMES, combine_slot, day_of_week, resolve_windows, windows_overlap

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Service layer for mentor availability"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AvailabilityRepository()

    def get_mentor(self, mentor_id: str) -> Profile:
        mentor = ProfileRepository.get_by_id(self.db, mentor_id)
        if not mentor or mentor.role != "mentor":
            raise HTTPException(status_code=404, detail="Mentor not found")
        return mentor

    def list_windows(self, mentor_id: str) -> list[AvailabilityResponse]:
        """Mentor's windows ordered by day and start, read through the cache"""

        def load() -> list[dict]:
            windows = self.repo.list_for_mentor(self.db, mentor_id)
            return [
                AvailabilityResponse.model_validate(w).model_dump(mode="json") for w in windows
            ]

        data = cache.read_through(availability_key(mentor_id), load) or []
        return [AvailabilityResponse.model_validate(item) for item in data]

    def add_window(self, mentor: Profile, data: AvailabilityCreate) -> Availability:
        logger.info(
            f"📥 Adding availability for mentor {mentor.id}: "
            f"{DAY_NAMES[data.day_of_week]} {data.start_time}-{data.end_time}"
        )

        if PREVENT_AVAILABILITY_OVERLAP:
            for existing in self.repo.list_for_mentor(self.db, mentor.id):
                if windows_overlap(existing, data):
                    logger.warning(f"⚠️ Overlapping availability rejected for mentor {mentor.id}")
                    raise HTTPException(
                        status_code=409, detail="This window overlaps an existing availability window"
                    )

        window = self.repo.create_window(
            self.db,
            mentor.id,
            day_of_week=data.day_of_week,
            start_time=data.start_time,
            end_time=data.end_time,
            is_recurring=True,
        )
        invalidate_availability_cache(mentor.id)
        return window

    def delete_window(self, availability_id: str, mentor: Profile) -> dict:
        window = self.repo.get_by_id(self.db, availability_id)
        if not window or window.mentor_id != mentor.id:
            raise HTTPException(status_code=404, detail="Availability not found")

        self.repo.delete_window(self.db, window)
        invalidate_availability_cache(mentor.id)
        logger.info(f"🗑️ Availability {availability_id} deleted by mentor {mentor.id}")
        return {"message": "Availability deleted"}

    def slots_for_date(self, mentor_id: str, target_date: date) -> SlotsForDateResponse:
        """Selectable slots for one calendar date"""
        self.get_mentor(mentor_id)
        windows = resolve_windows(self.list_windows(mentor_id), target_date)
        weekday = day_of_week(target_date)

        return SlotsForDateResponse(
            mentor_id=mentor_id,
            for_date=target_date,
            day_of_week=weekday,
            day_name=DAY_NAMES[weekday],
            slots=[
                SlotResponse(
                    availability_id=w.id,
                    start_time=w.start_time,
                    end_time=w.end_time,
                    scheduled_at=combine_slot(target_date, w.start_time),
                )
                for w in windows
            ],
        )
