"""Date and time normalization for loosely-typed source records."""

import re
from datetime import date, datetime
from typing import Any, Optional

_DATE_PARTS = (
    re.compile(r"\d{1,4}", re.ASCII),
    re.compile(r"\d{1,2}", re.ASCII),
    re.compile(r"\d{1,2}", re.ASCII),
)
_TIME_RE = re.compile(r"(\d{1,2}):(\d{1,2})", re.ASCII)


def to_iso_date(value: date) -> str:
    """Format a date as zero-padded YYYY-MM-DD."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def normalize_date(value: Any) -> Optional[str]:
    """Extract the calendar date from a date or ISO datetime string.

    Returns None for anything that is not a string with at least three
    numeric dash-separated date components.
    """
    if not value or not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed:
        return None

    date_part = trimmed.split("T")[0]
    parts = date_part.split("-")
    if len(parts) < 3:
        return None

    year, month, day = parts[:3]
    for part, pattern in zip((year, month, day), _DATE_PARTS):
        if not pattern.fullmatch(part):
            return None

    return f"{year.zfill(4)}-{month.zfill(2)}-{day.zfill(2)}"


def extract_time(value: Any) -> Optional[str]:
    """Return HH:MM from the time component of an ISO datetime string."""
    if not value or not isinstance(value, str):
        return None
    parts = value.strip().split("T")
    if len(parts) < 2 or not parts[1]:
        return None

    match = _TIME_RE.match(parts[1])
    if not match:
        return None
    hh, mm = match.groups()
    return f"{hh.zfill(2)}:{mm.zfill(2)}"


def format_human_date(iso: str) -> str:
    """Render YYYY-MM-DD as e.g. 'Mon, 05 Jan 2025'."""
    try:
        parsed = datetime.strptime(iso, "%Y-%m-%d")
    except (TypeError, ValueError):
        return iso
    return parsed.strftime("%a, %d %b %Y")


def format_human_date_time(iso: str, time: Optional[str] = None) -> str:
    base = format_human_date(iso)
    if time:
        return f"{base} · {time}"
    return base
