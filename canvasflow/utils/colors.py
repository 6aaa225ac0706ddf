"""
Project color palette
"""
import random
from typing import Dict, Iterable, List, Optional

PROJECT_COLORS: List[Dict[str, str]] = [
    {"name": "Coral", "value": "#FF6B6B"},
    {"name": "Orange", "value": "#FF9F43"},
    {"name": "Gold", "value": "#FFC107"},
    {"name": "Lime", "value": "#A8E6CF"},
    {"name": "Teal", "value": "#20C997"},
    {"name": "Cyan", "value": "#17A2B8"},
    {"name": "Blue", "value": "#4A90D9"},
    {"name": "Indigo", "value": "#6C5CE7"},
    {"name": "Purple", "value": "#A855F7"},
    {"name": "Pink", "value": "#EC4899"},
    {"name": "Rose", "value": "#F472B6"},
    {"name": "Slate", "value": "#64748B"},
]

PALETTE_VALUES = frozenset(c["value"] for c in PROJECT_COLORS)


def get_available_colors(used_colors: Iterable[str]) -> List[Dict[str, str]]:
    """Palette entries not yet taken by one of the user's projects"""
    used = {c.upper() for c in used_colors}
    return [c for c in PROJECT_COLORS if c["value"] not in used]


def get_random_available_color(used_colors: Iterable[str]) -> Optional[str]:
    """Pick a free palette color, or None once every color is in use"""
    available = get_available_colors(used_colors)
    if not available:
        return None
    return random.choice(available)["value"]
