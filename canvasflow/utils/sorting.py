"""
Sorting utilities for projects and activities
"""
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Sequence


def _get(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def sort_projects(projects: Iterable) -> List:
    """Sort projects alphabetically (A-Z, case-insensitive) by name."""
    return sorted(projects, key=lambda p: _get(p, "name").casefold())


def _start_key(value) -> datetime:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).replace(tzinfo=None)


def sort_activities(activities: Iterable, projects: Sequence, private_label: str = "Private") -> List:
    """
    Sort activities by project name (A-Z), then start date, then title.

    Activities without a project sort as if their project were named
    ``private_label``; a dangling project id sorts as an empty name.
    """
    names: Dict = {_get(p, "id"): _get(p, "name") for p in projects}

    def key(activity):
        project_id = _get(activity, "project_id")
        if project_id is None:
            project_name = private_label
        else:
            project_name = names.get(project_id, "")
        return (
            project_name.casefold(),
            _start_key(_get(activity, "start_date")),
            (_get(activity, "title") or "").casefold(),
        )

    return sorted(activities, key=key)
