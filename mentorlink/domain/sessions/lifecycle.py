"""
Session lifecycle rules

    scheduled → completed   (mentor, once the scheduled time has passed)
    scheduled → cancelled   (either participant)

completed and cancelled are terminal. "rescheduled" is a valid stored status
but no transition produces it.
"""

from datetime import datetime
from typing import Optional

TRANSITIONS: dict[str, frozenset] = {
    "scheduled": frozenset({"completed", "cancelled"}),
}


class InvalidTransition(Exception):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change a {current} session to {target}")


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def check_transition(current: str, target: str) -> None:
    if not can_transition(current, target):
        raise InvalidTransition(current, target)


def is_participant(session, profile_id: str) -> bool:
    return profile_id in (session.mentor_id, session.mentee_id)


def has_started(session, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    return session.scheduled_at <= now


def available_actions(session, profile_id: str, now: Optional[datetime] = None) -> list[str]:
    """Actions a participant may take on the session right now"""
    if not is_participant(session, profile_id):
        return []

    actions = []
    if session.status == "scheduled":
        if profile_id == session.mentor_id and has_started(session, now):
            actions.append("complete")
        actions.append("cancel")
    elif session.status == "completed":
        actions.append("feedback")
    return actions
