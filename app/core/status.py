#app/core/status.py
"""
Status classification of a project's current period.

Everything here is pure: the caller passes ``now`` explicitly and the
result is never stored, since it changes with wall-clock time.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

SECONDS_PER_DAY = 24 * 60 * 60


class ProjectStatus(str, Enum):
    CLOSED = "CLOSED"
    SCHEDULE_NEEDED = "SCHEDULE_NEEDED"
    OVERDUE = "OVERDUE"
    DUE_SOON = "DUE_SOON"
    ON_TRACK = "ON_TRACK"


@dataclass(frozen=True)
class StatusResult:
    status: ProjectStatus
    label: str
    color: str
    overdue_days: Optional[int] = None


def as_utc(value: Any) -> Optional[datetime]:
    """
    Normalizes a stored timestamp to an aware UTC datetime.

    Naive datetimes (SQLite drops tzinfo) are read as UTC, plain dates as
    UTC midnight. Anything else yields None.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return None


def _field(project: Any, name: str) -> Any:
    if isinstance(project, dict):
        return project.get(name)
    return getattr(project, name, None)


def classify(project: Any, now: datetime) -> StatusResult:
    """
    Classifies a project (ORM object, schema or dict) at the instant ``now``.

    Priority: closed, then missing deadline, then the ceiling of the
    remaining days until ``planned_end``.
    """
    if _field(project, "is_closed"):
        return StatusResult(ProjectStatus.CLOSED, "Closed", "gray")

    planned_end = as_utc(_field(project, "planned_end"))
    current = as_utc(now)
    if planned_end is None or current is None:
        return StatusResult(ProjectStatus.SCHEDULE_NEEDED, "Needs scheduling", "blue")

    diff_days = math.ceil((planned_end - current).total_seconds() / SECONDS_PER_DAY)

    if diff_days < 0:
        overdue = abs(diff_days)
        unit = "day" if overdue == 1 else "days"
        return StatusResult(ProjectStatus.OVERDUE, f"Overdue by {overdue} {unit}", "red", overdue)
    if diff_days <= 1:  # deadline is today or tomorrow
        return StatusResult(ProjectStatus.DUE_SOON, "Due soon", "yellow")
    return StatusResult(ProjectStatus.ON_TRACK, "On track", "green")


def days_since(timestamp: Any, now: datetime) -> Optional[int]:
    """Whole days (rounded up) between ``timestamp`` and ``now``; None when unknown."""
    moment = as_utc(timestamp)
    current = as_utc(now)
    if moment is None or current is None:
        return None
    return math.ceil(abs((current - moment).total_seconds()) / SECONDS_PER_DAY)
