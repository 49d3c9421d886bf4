"""Date utilities for Calendar Widget application."""

import calendar
import re
from datetime import date, datetime
from typing import Optional

import pytz

DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_COLLECTION_ID_PATTERN = re.compile(r"[0-9a-fA-F]{32}")


def parse_date(value: str) -> Optional[date]:
    """
    Parse a strict YYYY-MM-DD string.

    Args:
        value: Candidate date string

    Returns:
        The calendar date, or None if the string is not a real date
        in exactly that format
    """
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def is_valid_date(value: str) -> bool:
    """Return True if value is a real calendar date in YYYY-MM-DD form."""
    return parse_date(value) is not None


def is_valid_collection_id(value: str) -> bool:
    """Return True if value is 32 hex digits once dashes are removed."""
    if not isinstance(value, str):
        return False
    return _COLLECTION_ID_PATTERN.fullmatch(value.replace("-", "")) is not None


def date_part(value: str) -> Optional[str]:
    """
    Extract the YYYY-MM-DD part of a date or date-time string.

    Record stores may hand back "2024-03-01" or "2024-03-01T09:00:00.000+09:00";
    both belong to the same calendar day.
    """
    if not isinstance(value, str):
        return None
    candidate = value[:10]
    return candidate if is_valid_date(candidate) else None


def month_window(year: int, month: int) -> tuple[str, str]:
    """
    Get the first and last day of a month.

    Args:
        year: Four-digit year
        month: Month number (1-12)

    Returns:
        Tuple of (start_date, end_date) as YYYY-MM-DD strings

    Raises:
        ValueError: If month is out of range
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"


def current_month(timezone: str = "UTC") -> tuple[int, int]:
    """Return (year, month) for today in the given timezone."""
    now = datetime.now(pytz.timezone(timezone))
    return now.year, now.month
