# app/services/reminder_policy.py
"""
Reminder policy for court dates.

Maps a court date instant and the current instant to the reminders that
should still be scheduled. Pure functions only: no database, no clock.
"""

import enum
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import List, Optional

DEFAULT_REMINDER_TIME = time(hour=9, minute=0)


class ReminderKind(str, enum.Enum):
    INITIAL = "initial"
    FOLLOWUP_1 = "followup_1"
    FOLLOWUP_2 = "followup_2"
    FINAL = "final"


class ReminderPriority(str, enum.Enum):
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# kind -> (days before the court date, priority), earliest first
REMINDER_SCHEDULE = {
    ReminderKind.INITIAL: (7, ReminderPriority.MEDIUM),
    ReminderKind.FOLLOWUP_1: (3, ReminderPriority.MEDIUM),
    ReminderKind.FOLLOWUP_2: (1, ReminderPriority.HIGH),
    ReminderKind.FINAL: (0, ReminderPriority.URGENT),
}

# Dispatch ordering, most pressing first
PRIORITY_RANK = {
    ReminderPriority.URGENT: 0,
    ReminderPriority.HIGH: 1,
    ReminderPriority.MEDIUM: 2,
}


@dataclass(frozen=True)
class ReminderCandidate:
    kind: ReminderKind
    offset_days: int
    priority: ReminderPriority
    scheduled_for: datetime


def reminder_priority(kind: ReminderKind) -> ReminderPriority:
    """Priority of a reminder kind."""
    return REMINDER_SCHEDULE[ReminderKind(kind)][1]


def reminder_instant(
    court_instant: datetime,
    offset_days: int,
    reminder_time: time = DEFAULT_REMINDER_TIME,
) -> datetime:
    """Calendar day `offset_days` before the court date, at the reminder time of day."""
    day = court_instant.date() - timedelta(days=offset_days)
    return datetime.combine(day, reminder_time, tzinfo=court_instant.tzinfo)


def compute_reminder_candidates(
    court_instant: Optional[datetime],
    now: datetime,
    reminder_time: time = DEFAULT_REMINDER_TIME,
) -> List[ReminderCandidate]:
    """
    Reminders still worth scheduling for a court date.

    Candidates whose delivery instant is not strictly after `now` are
    dropped, so a court date less than a week out yields fewer than four.
    An absent or already-past court date yields nothing.
    """
    if court_instant is None or court_instant <= now:
        return []

    candidates = []
    for kind, (offset_days, priority) in REMINDER_SCHEDULE.items():
        scheduled_for = reminder_instant(court_instant, offset_days, reminder_time)
        if scheduled_for <= now:
            continue
        candidates.append(
            ReminderCandidate(
                kind=kind,
                offset_days=offset_days,
                priority=priority,
                scheduled_for=scheduled_for,
            )
        )
    return candidates
