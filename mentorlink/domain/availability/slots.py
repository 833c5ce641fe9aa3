"""
Slot resolution

Turns a mentor's recurring weekly windows into the bookable (start, end) pairs
for one calendar date. Days follow the 0 = Sunday ... 6 = Saturday convention
stored on availability rows. Dates and times are local wall-clock values; no
timezone normalisation happens here.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Sequence, TypeVar

from ...shared.validators import time_to_minutes

W = TypeVar("W")

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def day_of_week(target_date: date) -> int:
    """Weekday of a date with Sunday as 0"""
    return (target_date.weekday() + 1) % 7


def resolve_windows(windows: Iterable[W], target_date: date) -> list[W]:
    """Windows whose day_of_week matches the date's weekday, input order kept"""
    weekday = day_of_week(target_date)
    return [w for w in windows if w.day_of_week == weekday]


def bookable_slots(windows: Iterable, target_date: date) -> list[tuple[str, str]]:
    return [(w.start_time, w.end_time) for w in resolve_windows(windows, target_date)]


def combine_slot(target_date: date, start_time: str) -> datetime:
    """Scheduled timestamp for a slot: the date at the given HH:MM"""
    minutes = time_to_minutes(start_time)
    return datetime(target_date.year, target_date.month, target_date.day) + timedelta(minutes=minutes)


def fits_window(start_time: str, end_time: str, booking_start: str, duration_minutes: int) -> bool:
    """True when a booking starting at booking_start lasts inside [start_time, end_time]"""
    window_start = time_to_minutes(start_time)
    window_end = time_to_minutes(end_time)
    begin = time_to_minutes(booking_start)
    return window_start <= begin and begin + duration_minutes <= window_end


def find_window_for(windows: Sequence, target_date: date, booking_start: str, duration_minutes: int):
    """First window on the date's weekday that the booking fits in, or None"""
    for window in resolve_windows(windows, target_date):
        if fits_window(window.start_time, window.end_time, booking_start, duration_minutes):
            return window
    return None


def intervals_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open interval overlap; touching intervals do not overlap"""
    return start_a < end_b and start_b < end_a


def windows_overlap(first, second) -> bool:
    if first.day_of_week != second.day_of_week:
        return False
    return (
        time_to_minutes(first.start_time) < time_to_minutes(second.end_time)
        and time_to_minutes(second.start_time) < time_to_minutes(first.end_time)
    )
