# src/prioritask/forms/dates.py

"""
Due-date helpers.

Two representations are in play:
- display: DD/MM/YYYY, what the user types (built up by normalize_date_input)
- canonical: YYYY-MM-DD, what the API stores

parse_display_date() is the only validity check: it builds a real date and
requires the built date to read back the same numbers that were typed.
"""

from __future__ import annotations

import re
from datetime import date

_NON_DIGITS = re.compile(r"[^0-9]")
_DIGITS = re.compile(r"[0-9]+")


def normalize_date_input(raw: str | None) -> str:
    """
    Reformat accumulated keystrokes into the DD/MM/YYYY mask.

    Non-digits are dropped and at most 8 digits are kept, so a separator can
    only ever appear after the day and after the month.
    """
    digits = _NON_DIGITS.sub("", raw or "")[:8]
    day = digits[0:2]
    month = digits[2:4]
    year = digits[4:8]
    if len(digits) <= 2:
        return day
    if len(digits) <= 4:
        return f"{day}/{month}"
    return f"{day}/{month}/{year}"


def parse_display_date(value: str | None) -> str | None:
    """Convert DD/MM/YYYY to canonical YYYY-MM-DD, or None if not a real date."""
    if not value:
        return None
    parts = value.split("/")
    if len(parts) != 3:
        return None
    day_s, month_s, year_s = parts
    if not day_s or not month_s or not year_s:
        return None
    if not all(_DIGITS.fullmatch(p) for p in parts):
        return None
    if len(day_s) > 2 or len(month_s) > 2 or len(year_s) > 4:
        return None

    iso = f"{year_s.zfill(4)}-{month_s.zfill(2)}-{day_s.zfill(2)}"
    year, month, day = int(year_s), int(month_s), int(day_s)
    try:
        built = date(year, month, day)
    except ValueError:
        return None
    if (built.year, built.month, built.day) != (year, month, day):
        return None
    return iso


def format_display_date(iso_date: str | None) -> str:
    """Convert canonical YYYY-MM-DD to DD/MM/YYYY; empty if a component is missing."""
    if not iso_date:
        return ""
    parts = iso_date.split("-")
    if len(parts) < 3:
        return ""
    year, month, day = parts[0], parts[1], parts[2]
    if not year or not month or not day:
        return ""
    return f"{day}/{month}/{year}"


def to_picker_value(iso_date: str | None) -> str:
    """Value for a native date picker: the canonical string itself, or empty."""
    if not iso_date:
        return ""
    parts = iso_date.split("-")
    if len(parts) < 3:
        return ""
    year, month, day = parts[0], parts[1], parts[2]
    if not year or not month or not day:
        return ""
    return f"{year}-{month}-{day}"
