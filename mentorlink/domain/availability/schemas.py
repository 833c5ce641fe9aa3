"""Availability domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import time_to_minutes, validate_time


class AvailabilityCreate(BaseModel):
    """Schema for adding a recurring weekly window"""

    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    start_time: str = "09:00"
    end_time: str = "10:00"

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v):
        return validate_time(v)

    @model_validator(mode="after")
    def validate_range(self):
        if time_to_minutes(self.end_time) <= time_to_minutes(self.start_time):
            raise ValueError("End time must be after start time")
        return self


class AvailabilityResponse(BaseModel):
    id: str
    mentor_id: str
    day_of_week: int
    start_time: str
    end_time: str
    is_recurring: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SlotResponse(BaseModel):
    """One selectable slot for a calendar date"""

    availability_id: str
    start_time: str
    end_time: str
    scheduled_at: datetime


class SlotsForDateResponse(BaseModel):
    mentor_id: str
    for_date: date
    day_of_week: int
    day_name: str
    slots: list[SlotResponse]
