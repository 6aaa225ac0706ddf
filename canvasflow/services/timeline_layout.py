"""
Timeline layout - Gantt coordinate system for activities in progress.

Only ``doing`` activities are charted. Each call derives the visible date
range, the time-axis columns and one bar per activity from the current
activity set, the view mode and today's date. Nothing is cached.

Positions use a linear day scale: week mode divides the day delta by 7 and
month mode by 30 (not calendar-exact) before multiplying by the pixel width
of one column.
"""
import calendar
from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from canvasflow.models.activity import ActivityStatus
from canvasflow.services.alarm_engine import (
    AlarmInfo,
    DateLike,
    activity_field,
    activity_progress,
    activity_status,
    compute_alarm,
    to_day,
)
from canvasflow.utils.i18n import month_abbr, month_name, weekday_abbr
from canvasflow.utils.sorting import sort_activities


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# Pixel width of one column
PIXELS_PER_UNIT: Dict[ViewMode, int] = {
    ViewMode.DAY: 40,
    ViewMode.WEEK: 100,
    ViewMode.MONTH: 120,
}

# Days represented by one column in the linear position scale
DAYS_PER_UNIT: Dict[ViewMode, int] = {
    ViewMode.DAY: 1,
    ViewMode.WEEK: 7,
    ViewMode.MONTH: 30,
}

# Floor so zero or very short bars stay visible and clickable
MIN_BAR_WIDTH: Dict[ViewMode, float] = {
    ViewMode.DAY: PIXELS_PER_UNIT[ViewMode.DAY] * 0.8,
    ViewMode.WEEK: 20.0,
    ViewMode.MONTH: 12.0,
}

EMPTY_WINDOW_DAYS = 14
NEAR_FUTURE_DAYS = 14
DAY_PADDING_DAYS = 7
WEEK_PADDING_DAYS = 7
MONTH_PADDING_MONTHS = 1

PROGRESS_INSET_PX = 2
LABEL_INSIDE_MIN_WIDTH = 60


class TimelineColumn(BaseModel):
    start: date
    label: str
    sub_label: str
    left: float
    width: float


class TimelineBar(BaseModel):
    activity_id: Any
    title: str
    project_id: Optional[Any] = None
    project_name: Optional[str] = None
    color: Optional[str] = None
    start_date: date
    end_date: date
    left: float
    width: float
    progress: int
    progress_width: float
    progress_inset_width: float
    label: str
    label_inside: bool
    alarm: AlarmInfo


class TimelineLayout(BaseModel):
    view_mode: ViewMode
    range_start: date
    range_end: date
    pixels_per_unit: int
    total_width: float
    today: date
    today_position: float
    columns: List[TimelineColumn]
    bars: List[TimelineBar]


# --- Calendar helpers ---

def week_start(day: date) -> date:
    """Monday on or before ``day``"""
    return day - timedelta(days=day.weekday())


def week_end(day: date) -> date:
    """Sunday on or after ``day``"""
    return week_start(day) + timedelta(days=6)


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length"""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


# --- Scale ---

def days_between(start: date, end: date) -> int:
    return (end - start).days


def position(day: DateLike, range_start: DateLike, view_mode: ViewMode) -> float:
    """Left offset in pixels of ``day`` relative to the start of the range"""
    view_mode = ViewMode(view_mode)
    delta = days_between(to_day(range_start), to_day(day))
    return delta / DAYS_PER_UNIT[view_mode] * PIXELS_PER_UNIT[view_mode]


def bar_width(start: DateLike, end: DateLike, view_mode: ViewMode) -> float:
    """Pixel width of a bar from ``start`` to ``end``, floored at the mode minimum"""
    view_mode = ViewMode(view_mode)
    scale = PIXELS_PER_UNIT[view_mode] / DAYS_PER_UNIT[view_mode]
    span = days_between(to_day(start), to_day(end)) * scale
    return max(MIN_BAR_WIDTH[view_mode], span)


# --- Range ---

def _snap(view_mode: ViewMode, low: date, high: date) -> Tuple[date, date]:
    if view_mode == ViewMode.WEEK:
        return week_start(low), week_end(high)
    if view_mode == ViewMode.MONTH:
        return month_start(low), month_end(high)
    return low, high


def derive_range(
    bounds: Sequence[Tuple[date, date]],
    view_mode: ViewMode,
    today: date,
) -> Tuple[date, date]:
    """
    Visible [start, end] window for the given (start, visual end) pairs.

    With no bars the window is today +/- 14 days (snapped to whole weeks in
    week mode) or the months either side of today in month mode.
    """
    view_mode = ViewMode(view_mode)

    if not bounds:
        if view_mode == ViewMode.MONTH:
            return _snap(view_mode, add_months(today, -1), add_months(today, 1))
        window = timedelta(days=EMPTY_WINDOW_DAYS)
        return _snap(view_mode, today - window, today + window)

    dates = [today, today + timedelta(days=NEAR_FUTURE_DAYS)]
    for start, end in bounds:
        dates.append(start)
        dates.append(end)
    low, high = min(dates), max(dates)

    if view_mode == ViewMode.DAY:
        padding = timedelta(days=DAY_PADDING_DAYS)
        return low - padding, high + padding
    if view_mode == ViewMode.WEEK:
        padding = timedelta(days=WEEK_PADDING_DAYS)
        return _snap(view_mode, low - padding, high + padding)
    return _snap(
        view_mode,
        add_months(low, -MONTH_PADDING_MONTHS),
        add_months(high, MONTH_PADDING_MONTHS),
    )


# --- Columns ---

def _column_labels(view_mode: ViewMode, day: date, language: str) -> Tuple[str, str]:
    if view_mode == ViewMode.DAY:
        return str(day.day), weekday_abbr(day.weekday(), language)
    if view_mode == ViewMode.WEEK:
        return f"W{day.isocalendar()[1]}", f"{month_abbr(day.month, language)} {day.day}"
    return month_name(day.month, language), str(day.year)


def _step(view_mode: ViewMode, day: date) -> date:
    if view_mode == ViewMode.DAY:
        return day + timedelta(days=1)
    if view_mode == ViewMode.WEEK:
        return day + timedelta(days=7)
    return add_months(day, 1)


def generate_columns(
    range_start: DateLike,
    range_end: DateLike,
    view_mode: ViewMode,
    language: str = "en",
) -> List[TimelineColumn]:
    """
    Time-axis columns from the range start through the range end (inclusive).

    Week columns begin on Mondays and month columns on the first of the
    month, even when the range itself does not.
    """
    view_mode = ViewMode(view_mode)
    start, end = to_day(range_start), to_day(range_end)
    if end < start:
        raise ValueError(f"Range end {end} is before range start {start}")

    ppu = PIXELS_PER_UNIT[view_mode]
    current, _ = _snap(view_mode, start, end)
    columns = []
    while current <= end:
        label, sub_label = _column_labels(view_mode, current, language)
        columns.append(TimelineColumn(
            start=current,
            label=label,
            sub_label=sub_label,
            left=position(current, start, view_mode),
            width=ppu,
        ))
        current = _step(view_mode, current)
    return columns


# --- Layout ---


def compute_timeline_layout(
    activities: Iterable[Any],
    view_mode: ViewMode,
    now: DateLike,
    projects: Optional[Sequence[Any]] = None,
    language: str = "en",
    private_label: str = "Private",
) -> TimelineLayout:
    """
    Lay out the Gantt timeline for the doing activities in ``activities``.

    Args:
        activities: activity rows; todo and finished ones are ignored
        view_mode: day, week or month
        now: the current moment; only its calendar day matters
        projects: projects used for bar color and name lookups
        language: language for column labels only
        private_label: name under which project-less activities sort

    Raises:
        ValueError: on an unknown view mode or status, a negative duration,
            or progress outside 0-100
    """
    view_mode = ViewMode(view_mode)
    today = to_day(now)
    projects = list(projects or [])
    by_id = {p.id: p for p in projects}

    doing = [a for a in activities if activity_status(a) == ActivityStatus.DOING]
    doing = sort_activities(doing, projects, private_label)
    alarms = [compute_alarm(a, today) for a in doing]
    bounds = [
        (to_day(activity_field(a, "start_date")), alarm.visual_end_date)
        for a, alarm in zip(doing, alarms)
    ]

    range_start, range_end = derive_range(bounds, view_mode, today)
    columns = generate_columns(range_start, range_end, view_mode, language)

    bars = []
    for activity, alarm, (start, end) in zip(doing, alarms, bounds):
        width = bar_width(start, end, view_mode)
        progress = activity_progress(activity)
        progress_width = width * progress / 100
        title = activity_field(activity, "title") or ""
        label_inside = width > LABEL_INSIDE_MIN_WIDTH

        project_id = activity_field(activity, "project_id")
        project = by_id.get(project_id) if project_id is not None else None

        bars.append(TimelineBar(
            activity_id=activity_field(activity, "id"),
            title=title,
            project_id=project_id,
            project_name=project.name if project is not None else None,
            color=project.color if project is not None else None,
            start_date=start,
            end_date=end,
            left=position(start, range_start, view_mode),
            width=width,
            progress=progress,
            progress_width=progress_width,
            progress_inset_width=max(0.0, progress_width - 2 * PROGRESS_INSET_PX),
            label=f"{progress}%" if label_inside else title,
            label_inside=label_inside,
            alarm=alarm,
        ))

    ppu = PIXELS_PER_UNIT[view_mode]
    return TimelineLayout(
        view_mode=view_mode,
        range_start=range_start,
        range_end=range_end,
        pixels_per_unit=ppu,
        total_width=float(len(columns) * ppu),
        today=today,
        today_position=position(today, range_start, view_mode),
        columns=columns,
        bars=bars,
    )
