"""Utility functions for exam schedule generation."""

import uuid
from datetime import date, datetime, timedelta

# Namespace for deterministic placement and assignment ids
ID_NAMESPACE = uuid.UUID("5d1c8a4e-2f0b-4c35-9a57-3e1f0b7d6c21")


def make_placement_id(
    semester: str, exam_type: str, course_id: str, day: date, window_id: str
) -> str:
    """Build a stable placement id.

    The same scope, course, date and window always give the same id, so a
    re-run over unchanged input reproduces the previous ids.
    """
    key = f"{semester}|{exam_type}|{course_id}|{day.isoformat()}|{window_id}"
    return str(uuid.uuid5(ID_NAMESPACE, key))


def make_assignment_id(placement_id: str, staff_id: str) -> str:
    """Build a stable invigilator assignment id."""
    return str(uuid.uuid5(ID_NAMESPACE, f"{placement_id}|{staff_id}"))


def iter_dates(start: date, end: date):
    """Yield each calendar date from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def parse_date(value: date | str) -> date:
    """Parse an ISO date (YYYY-MM-DD), passing date objects through.

    A datetime is cut down to its calendar date.

    Raises:
        ValueError: If the string is not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def parse_bool(value, default: bool = True) -> bool:
    """Parse a spreadsheet flag such as 'true', '1', 'yes' or 'no'.

    Empty or missing values give ``default``.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if value != value:  # NaN from pandas
            return default
        return bool(value)
    text = str(value).strip().lower()
    if not text or text == "nan":
        return default
    return text in ("true", "1", "yes", "y", "t")
