"""
Alarm engine - temporal urgency of a single activity.

This is the only place alarm state is computed. Board cards, the activity
listing and the timeline all call ``compute_alarm``; nothing else derives
overdue or ghost state on its own.

Rules:
- ``critical``: a doing activity whose planned end (start + duration) is
  before today. Its bar stretches to today.
- ``ghost``: a todo activity whose start date is before today.
- ``normal``: everything else, including every finished activity.

Day differences are whole calendar days between truncated dates (floor).
"""
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel

from canvasflow.models.activity import ActivityStatus

DateLike = Union[date, datetime, str]


class AlarmState(str, Enum):
    CRITICAL = "critical"
    GHOST = "ghost"
    NORMAL = "normal"


class AlarmInfo(BaseModel):
    state: AlarmState
    is_overdue: bool
    days_overdue: int
    days_late: int = 0
    planned_end_date: Optional[date] = None
    visual_end_date: date

    class Config:
        frozen = True


def to_day(value: DateLike) -> date:
    """Truncate a date, datetime or ISO string to its calendar day"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    raise ValueError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")


def activity_field(activity: Any, name: str, default: Any = None) -> Any:
    """Read a field from an ORM row, pydantic model or plain mapping"""
    if isinstance(activity, dict):
        return activity.get(name, default)
    return getattr(activity, name, default)


def activity_status(activity: Any) -> ActivityStatus:
    """Status as an ActivityStatus; unknown values raise ValueError"""
    return ActivityStatus(activity_field(activity, "status"))


def activity_progress(activity: Any) -> int:
    """Progress percentage; missing counts as 0, outside 0-100 raises ValueError"""
    progress = activity_field(activity, "progress")
    if progress is None:
        return 0
    if progress < 0 or progress > 100:
        raise ValueError(f"progress must be within 0-100 (got {progress})")
    return int(progress)


def compute_alarm(activity: Any, now: DateLike) -> AlarmInfo:
    """
    Classify an activity's urgency as of ``now``.

    Args:
        activity: anything exposing ``status``, ``start_date`` and
            ``duration_days`` (attributes or mapping keys)
        now: the current moment; only its calendar day matters

    Raises:
        ValueError: if the status is unknown or the duration is negative
        ValueError: if progress is outside 0-100
    """
    status = activity_status(activity)
    activity_progress(activity)
    today = to_day(now)
    start = to_day(activity_field(activity, "start_date"))
    duration_days = activity_field(activity, "duration_days")

    if duration_days is not None:
        if duration_days < 0:
            raise ValueError(f"duration_days must not be negative (got {duration_days})")
        planned_end = start + timedelta(days=duration_days)
    else:
        planned_end = None

    # Open-ended activities grow with the calendar
    visual_end = planned_end if planned_end is not None else today
    state = AlarmState.NORMAL
    is_overdue = False
    days_overdue = 0
    days_late = 0

    if status == ActivityStatus.DOING:
        if planned_end is not None and planned_end < today:
            state = AlarmState.CRITICAL
            is_overdue = True
            days_overdue = (today - planned_end).days
            visual_end = today
    elif status == ActivityStatus.TODO:
        if start < today:
            state = AlarmState.GHOST
            days_late = (today - start).days

    return AlarmInfo(
        state=state,
        is_overdue=is_overdue,
        days_overdue=days_overdue,
        days_late=days_late,
        planned_end_date=planned_end,
        visual_end_date=visual_end,
    )
