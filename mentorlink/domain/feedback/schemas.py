"""Feedback domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, computed_field

RATING_LABELS = {
    1: "Poor",
    2: "Fair",
    3: "Good",
    4: "Very Good",
    5: "Excellent",
}


def label_for_rating(rating: int) -> str:
    return RATING_LABELS.get(rating, "")


class FeedbackCreate(BaseModel):
    # Left optional so an unselected rating gets the form-level message
    rating: Optional[int] = None
    comment: str = ""


class FeedbackResponse(BaseModel):
    id: str
    session_id: str
    from_user_id: str
    rating: int
    comment: str = ""
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @computed_field
    @property
    def rating_label(self) -> str:
        return label_for_rating(self.rating)
