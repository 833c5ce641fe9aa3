"""Profile domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, field_validator

from ...shared.validators import split_list_input


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v.strip() if isinstance(v, str) else v


class SignUpRequest(BaseModel):
    """Schema for creating an account together with its profile"""

    email: str
    password: str
    full_name: str
    role: Literal["mentor", "mentee"]
    department: Optional[str] = None
    job_title: Optional[str] = None
    bio: str = ""
    # Comma-separated input from the signup form, or a list
    expertise_areas: Union[list[str], str] = []
    learning_goals: Union[list[str], str] = []

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if not v.strip():
            raise ValueError("Full name is required")
        return v.strip()

    @field_validator("department", "job_title", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)

    @field_validator("expertise_areas", "learning_goals", mode="after")
    @classmethod
    def split_lists(cls, v):
        return split_list_input(v)


class SignInRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class ProfileUpdate(BaseModel):
    """Schema for editing the caller's own profile"""

    full_name: Optional[str] = None
    department: Optional[str] = None
    job_title: Optional[str] = None
    bio: Optional[str] = None
    expertise_areas: Optional[Union[list[str], str]] = None
    learning_goals: Optional[Union[list[str], str]] = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Full name cannot be empty")
        return v.strip() if v else v

    @field_validator("expertise_areas", "learning_goals", mode="after")
    @classmethod
    def split_lists(cls, v):
        if v is None:
            return v
        return split_list_input(v)


class ProfileResponse(BaseModel):
    """Schema for profile response"""

    id: str
    email: str
    full_name: str
    role: str
    department: Optional[str] = None
    job_title: Optional[str] = None
    bio: str = ""
    expertise_areas: list[str] = []
    learning_goals: list[str] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    profile: ProfileResponse


class MentorSummary(ProfileResponse):
    """Mentor card for discovery, with completed-session stats"""

    avg_rating: float = 0
    session_count: int = 0
