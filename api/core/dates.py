"""
Date parsing/formatting for request and response values.

All datetimes are timezone-aware and handled in UTC:
- a bare date ("2023-01-15") means midnight UTC of that day
- other formats are read with python-dateutil
- a naive datetime is taken as UTC
- responses use a fixed English format, e.g. "Mon Jan 01 2024"
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

from dateutil import parser as dateutil_parser

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(raw: str) -> datetime:
    """
    Parse a date or datetime string.

    ISO-8601 is read directly; anything else ("2023-1-5", "2023/01/15",
    "January 15, 2023", "Mon Jan 16 2023") goes through dateutil. Missing
    components default to the start of the current year.

    Raises ValueError when the value cannot be parsed or is out of range.
    """
    value = (raw or "").strip()
    if not value:
        raise ValueError("Date is empty.")

    if _DATE_ONLY.match(value):
        day = date.fromisoformat(value)
        return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)

    iso_value = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        parsed = datetime.fromisoformat(iso_value)
    except ValueError:
        try:
            parsed = dateutil_parser.parse(value, default=datetime(utc_now().year, 1, 1))
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"Invalid date: {raw!r}") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"Date out of range: {raw!r}") from exc


def format_date(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{_WEEKDAYS[value.weekday()]} {_MONTHS[value.month - 1]} {value.day:02d} {value.year:04d}"


def parse_limit(raw: str | None) -> int | None:
    """
    Read a leading integer ("2", " 3", "4abc" -> 4).

    Returns None when there is no leading integer or the value is negative.
    """
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    limit = int(match.group(1))
    return limit if limit >= 0 else None
