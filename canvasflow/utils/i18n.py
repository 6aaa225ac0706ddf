"""
Weekday and month names for timeline column labels
"""
from typing import Dict, List

WEEKDAY_ABBR: Dict[str, List[str]] = {
    "en": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
    "es": ["lun", "mar", "mié", "jue", "vie", "sáb", "dom"],
    "de": ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"],
    "fr": ["lun", "mar", "mer", "jeu", "ven", "sam", "dim"],
    "it": ["lun", "mar", "mer", "gio", "ven", "sab", "dom"],
}

MONTH_NAMES: Dict[str, List[str]] = {
    "en": ["January", "February", "March", "April", "May", "June",
           "July", "August", "September", "October", "November", "December"],
    "es": ["enero", "febrero", "marzo", "abril", "mayo", "junio",
           "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"],
    "de": ["Januar", "Februar", "März", "April", "Mai", "Juni",
           "Juli", "August", "September", "Oktober", "November", "Dezember"],
    "fr": ["janvier", "février", "mars", "avril", "mai", "juin",
           "juillet", "août", "septembre", "octobre", "novembre", "décembre"],
    "it": ["gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
           "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre"],
}

MONTH_ABBR: Dict[str, List[str]] = {
    "en": ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
    "es": ["ene", "feb", "mar", "abr", "may", "jun",
           "jul", "ago", "sept", "oct", "nov", "dic"],
    "de": ["Jan", "Feb", "März", "Apr", "Mai", "Juni",
           "Juli", "Aug", "Sept", "Okt", "Nov", "Dez"],
    "fr": ["janv", "févr", "mars", "avr", "mai", "juin",
           "juil", "août", "sept", "oct", "nov", "déc"],
    "it": ["gen", "feb", "mar", "apr", "mag", "giu",
           "lug", "ago", "set", "ott", "nov", "dic"],
}

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "de": "German",
    "fr": "French",
    "it": "Italian",
}


def weekday_abbr(weekday: int, language: str = "en") -> str:
    """Abbreviated weekday name, Monday = 0"""
    return WEEKDAY_ABBR.get(language, WEEKDAY_ABBR["en"])[weekday]


def month_name(month: int, language: str = "en") -> str:
    """Full month name, January = 1"""
    return MONTH_NAMES.get(language, MONTH_NAMES["en"])[month - 1]


def month_abbr(month: int, language: str = "en") -> str:
    """Short month name as written in that language, January = 1"""
    return MONTH_ABBR.get(language, MONTH_ABBR["en"])[month - 1]
