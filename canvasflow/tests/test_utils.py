"""
Utility tests - palette, sorting, validators, month names, logging.
"""
import logging
from datetime import date, datetime
from types import SimpleNamespace

import pytest

from canvasflow.utils.colors import PROJECT_COLORS, get_available_colors, get_random_available_color
from canvasflow.utils.i18n import month_abbr
from canvasflow.utils import logger as logger_module
from canvasflow.utils.sorting import sort_activities, sort_projects
from canvasflow.utils.validators import (
    validate_duration_days,
    validate_language,
    validate_name,
    validate_progress,
    validate_project_color,
)


# ===================== COLORS =====================


def test_available_colors_exclude_used():
    available = get_available_colors(["#ff6b6b", "#4A90D9"])
    values = [c["value"] for c in available]

    assert len(available) == len(PROJECT_COLORS) - 2
    assert "#FF6B6B" not in values
    assert "#4A90D9" not in values


def test_random_color_is_unused():
    used = [c["value"] for c in PROJECT_COLORS[:-1]]
    assert get_random_available_color(used) == PROJECT_COLORS[-1]["value"]


def test_random_color_none_when_exhausted():
    assert get_random_available_color([c["value"] for c in PROJECT_COLORS]) is None


# ===================== SORTING =====================


def test_sort_projects_case_insensitive():
    projects = [SimpleNamespace(name="beta"), SimpleNamespace(name="Alpha"), SimpleNamespace(name="gamma")]
    assert [p.name for p in sort_projects(projects)] == ["Alpha", "beta", "gamma"]


def test_sort_activities_by_project_then_date_then_title():
    projects = [SimpleNamespace(id=1, name="Website"), SimpleNamespace(id=2, name="Accounting")]
    activities = [
        SimpleNamespace(id=1, project_id=1, start_date=datetime(2024, 1, 2), title="b"),
        SimpleNamespace(id=2, project_id=None, start_date=datetime(2024, 1, 1), title="a"),
        SimpleNamespace(id=3, project_id=2, start_date=datetime(2024, 1, 5), title="z"),
        SimpleNamespace(id=4, project_id=1, start_date=datetime(2024, 1, 2), title="A"),
        SimpleNamespace(id=5, project_id=1, start_date=date(2024, 1, 1), title="c"),
    ]
    ordered = sort_activities(activities, projects, private_label="Private")

    assert [a.id for a in ordered] == [3, 2, 5, 4, 1]


def test_sort_activities_private_label_changes_position():
    projects = [SimpleNamespace(id=1, name="Marketing")]
    activities = [
        SimpleNamespace(id=1, project_id=1, start_date=date(2024, 1, 1), title="x"),
        SimpleNamespace(id=2, project_id=None, start_date=date(2024, 1, 1), title="y"),
    ]

    assert [a.id for a in sort_activities(activities, projects, "Privado")] == [1, 2]
    assert [a.id for a in sort_activities(activities, projects, "Intern")] == [2, 1]


# ===================== VALIDATORS =====================


def test_validate_progress_bounds():
    assert validate_progress(0) == 0
    assert validate_progress(100) == 100
    with pytest.raises(ValueError):
        validate_progress(101)


def test_validate_duration_days():
    assert validate_duration_days(None) is None
    assert validate_duration_days(3) == 3
    with pytest.raises(ValueError):
        validate_duration_days(0)


def test_validate_project_color_normalizes_case():
    assert validate_project_color("#a855f7") == "#A855F7"
    with pytest.raises(ValueError):
        validate_project_color("#000000")


def test_validate_language():
    assert validate_language("DE") == "de"
    with pytest.raises(ValueError):
        validate_language("pt")


def test_validate_name_strips_and_rejects_blank():
    assert validate_name("  Website ") == "Website"
    with pytest.raises(ValueError):
        validate_name("   ")


# ===================== I18N =====================


def test_month_abbr_is_unambiguous_per_language():
    for language in ("en", "es", "de", "fr", "it"):
        abbreviations = [month_abbr(m, language) for m in range(1, 13)]
        assert len(set(abbreviations)) == 12

    assert month_abbr(6, "fr") == "juin"
    assert month_abbr(7, "fr") == "juil"
    assert month_abbr(3, "xx") == "Mar"


# ===================== LOGGING =====================


def test_log_level_setting_overrides_debug(monkeypatch):
    monkeypatch.setattr(logger_module, "settings", logger_module.settings.model_copy(
        update={"DEBUG": True, "LOG_LEVEL": "warning"}
    ))
    assert logger_module.get_logger("canvasflow.test.quiet").level == logging.WARNING


def test_log_level_follows_debug_when_unset(monkeypatch):
    monkeypatch.setattr(logger_module, "settings", logger_module.settings.model_copy(
        update={"DEBUG": True, "LOG_LEVEL": ""}
    ))
    assert logger_module.get_logger("canvasflow.test.debug").level == logging.DEBUG


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setattr(logger_module, "settings", logger_module.settings.model_copy(
        update={"LOG_LEVEL": "chatty"}
    ))
    with pytest.raises(ValueError):
        logger_module.log_level()
