"""Calendar date primitives for package day accounting.

Stored records use the DD/MM/YYYY text format. This module is the only
place that text is parsed or produced:
- parse_date / format_date are exact inverses for valid dates
- add_days / days_between are calendar-correct (month, year and leap-year rollover)
- Start date is Day 1, so a package ends on start + package_days - 1
"""

from datetime import date, datetime, timedelta

from loguru import logger

DATE_SEPARATOR = "/"


def parse_date(text: str | None) -> date | None:
    """Parse a DD/MM/YYYY string into a date.

    Args:
        text: Date text, day first

    Returns:
        Parsed date, or None when the text does not split into three
        integer fields or does not name a real calendar day
    """
    if not text:
        return None

    parts = text.split(DATE_SEPARATOR)
    if len(parts) != 3:
        return None

    # ASCII digits only; int() also accepts underscores and padding
    if not all(part.isascii() and part.isdigit() for part in parts):
        return None
    day, month, year = (int(part) for part in parts)

    try:
        return date(year, month, day)
    except ValueError:
        # Day 31 in April, month 13
        return None


def format_date(value: date | None) -> str:
    """Format a date as DD/MM/YYYY (day and month zero-padded, year as-is)."""
    if value is None:
        return ""
    return f"{value.day:02d}{DATE_SEPARATOR}{value.month:02d}{DATE_SEPARATOR}{value.year}"


def to_calendar_date(value: date | datetime) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def add_days(value: date | datetime | None, days: int) -> date | None:
    """Shift a date by a (possibly negative) number of days.

    Returns None when the date is missing or the result falls outside the
    supported calendar (years 1 to 9999).
    """
    if value is None:
        return None
    try:
        return to_calendar_date(value) + timedelta(days=days)
    except OverflowError:
        logger.warning(f"Shifting {value} by {days} days leaves the calendar range, treating as missing")
        return None


def days_between(start: date | datetime | None, end: date | datetime | None) -> int:
    """Signed day count from start to end.

    Positive when end is after start, zero for the same day. Both inputs
    are normalized to midnight first. Returns 0 when either side is missing.
    """
    if start is None or end is None:
        return 0
    return (to_calendar_date(end) - to_calendar_date(start)).days


def calculate_end_date(start_text: str | None, package_days: int) -> str:
    """Calculate the inclusive end date of a package.

    Example: start 01/01/2024 with 30 days ends on 30/01/2024 (Day 30).

    Args:
        start_text: Start date in DD/MM/YYYY format
        package_days: Package length in days

    Returns:
        End date in DD/MM/YYYY format, or "" when the start is unparseable
    """
    start = parse_date(start_text)
    if start is None:
        return ""
    return format_date(add_days(start, package_days - 1))
