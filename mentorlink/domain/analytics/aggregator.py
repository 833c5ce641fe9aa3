"""
Dashboard rollup over profiles, sessions, feedback and availability.

Pure functions: the service loads each table once and hands the rows in, so
the rollup can be tested without a database.
"""

from collections import defaultdict
from typing import Iterable, Optional

from ...config import LEADERBOARD_SIZE, UTILIZATION_WEEKS_PER_PERIOD


def average(values: list) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def utilization_percent(
    completed_count: int, window_count: int, weeks_per_period: Optional[int] = None
) -> float:
    """Completed sessions against the bookable windows of one period, capped at 100"""
    weeks = weeks_per_period or UTILIZATION_WEEKS_PER_PERIOD
    if window_count <= 0:
        return 0.0
    percent = completed_count / (window_count * weeks) * 100
    return max(0.0, min(percent, 100.0))


def mentor_rollup(mentors: Iterable, sessions: Iterable, feedback: Iterable, availability: Iterable) -> list[dict]:
    """Per-mentor counts, rating and utilization, in mentor order"""
    sessions_by_mentor = defaultdict(list)
    session_owner = {}
    for s in sessions:
        sessions_by_mentor[s.mentor_id].append(s)
        session_owner[s.id] = s.mentor_id

    ratings_by_mentor = defaultdict(list)
    for f in feedback:
        mentor_id = session_owner.get(f.session_id)
        if mentor_id:
            ratings_by_mentor[mentor_id].append(f.rating)

    windows_by_mentor = defaultdict(int)
    for window in availability:
        windows_by_mentor[window.mentor_id] += 1

    rollup = []
    for mentor in mentors:
        mentor_sessions = sessions_by_mentor.get(mentor.id, [])
        completed_count = sum(1 for s in mentor_sessions if s.status == "completed")
        rollup.append(
            {
                "id": mentor.id,
                "name": mentor.full_name,
                "department": mentor.department,
                "session_count": len(mentor_sessions),
                "completed_count": completed_count,
                "average_rating": average(ratings_by_mentor.get(mentor.id, [])),
                "utilization_percent": utilization_percent(
                    completed_count, windows_by_mentor.get(mentor.id, 0)
                ),
            }
        )
    return rollup


def top_mentors(rollup: list[dict], size: Optional[int] = None) -> list[dict]:
    """Mentors with at least one session, best rated first, ties on session count"""
    size = size or LEADERBOARD_SIZE
    ranked = sorted(
        (m for m in rollup if m["session_count"] > 0),
        key=lambda m: (-m["average_rating"], -m["session_count"]),
    )
    return [
        {
            "id": m["id"],
            "name": m["name"],
            "department": m["department"],
            "session_count": m["session_count"],
            "average_rating": m["average_rating"],
        }
        for m in ranked[:size]
    ]


def utilization_leaderboard(rollup: list[dict], size: Optional[int] = None) -> list[dict]:
    """Every mentor ranked by utilization; zero-session mentors are not filtered out"""
    size = size or LEADERBOARD_SIZE
    ranked = sorted(rollup, key=lambda m: -m["utilization_percent"])
    return [
        {
            "id": m["id"],
            "name": m["name"],
            "utilization_percent": m["utilization_percent"],
            "sessions_count": m["completed_count"],
        }
        for m in ranked[:size]
    ]


def build_dashboard(mentors, mentee_count: int, sessions, feedback, availability) -> dict:
    mentors = list(mentors)
    sessions = list(sessions)
    feedback = list(feedback)

    rollup = mentor_rollup(mentors, sessions, feedback, availability)

    return {
        "total_mentors": len(mentors),
        "total_mentees": mentee_count,
        "total_sessions": len(sessions),
        "completed_sessions": sum(1 for s in sessions if s.status == "completed"),
        "average_rating": average([f.rating for f in feedback]),
        "top_mentors": top_mentors(rollup),
        "mentor_utilization": utilization_leaderboard(rollup),
    }
