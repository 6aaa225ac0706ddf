"""
Input validation utilities
"""
from typing import Optional

from canvasflow.utils.colors import PALETTE_VALUES

SUPPORTED_LANGUAGES = ("en", "es", "de", "fr", "it")


def validate_progress(progress: int) -> int:
    """Validate progress is a percentage"""
    if progress < 0 or progress > 100:
        raise ValueError("Progress must be between 0 and 100")
    return progress


def validate_duration_days(duration_days: Optional[int]) -> Optional[int]:
    """Validate duration is a positive number of days (None means open-ended)"""
    if duration_days is not None and duration_days < 1:
        raise ValueError("Duration must be at least 1 day")
    return duration_days


def validate_project_color(color: str) -> str:
    """Validate project color comes from the fixed palette"""
    normalized = color.upper()
    if normalized not in PALETTE_VALUES:
        raise ValueError(f"Invalid color. Must be one of: {sorted(PALETTE_VALUES)}")
    return normalized


def validate_language(language: str) -> str:
    """Validate UI language code"""
    code = language.lower()
    if code not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Invalid language. Must be one of: {list(SUPPORTED_LANGUAGES)}")
    return code


def validate_name(value: str) -> str:
    """Strip surrounding whitespace; blank names are rejected"""
    stripped = value.strip()
    if not stripped:
        raise ValueError("Name must not be blank")
    return stripped
