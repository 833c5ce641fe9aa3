"""Shared validation utilities"""

import re
from datetime import date, datetime
from typing import Optional, Union

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")


def split_list_input(value: Union[str, list, None]) -> list[str]:
    """
    Normalize a comma-separated string or a list of strings.

    Items are trimmed and blanks dropped, so "" and " , " both give [].
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = value
    return [str(item).strip() for item in items if str(item).strip()]


def validate_time(value: str) -> str:
    """
    Validate a wall-clock time and normalize it to HH:MM.

    Raises:
        ValueError: If the value is not HH:MM or HH:MM:SS
    """
    value = (value or "").strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value[:5]


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse YYYY-MM-DD, returning None for empty input"""
    if not value or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError("Date must be in YYYY-MM-DD format") from e


def time_to_minutes(value: str) -> int:
    hours, minutes = value[:5].split(":")
    return int(hours) * 60 + int(minutes)
