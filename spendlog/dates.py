"""Date utilities for spendlog.

Pure functions for calendar range calculations and date input parsing.
All ranges are inclusive and expressed as whole days, so comparisons never
depend on time of day.
"""

from datetime import date, timedelta

import pandas as pd

from spendlog.errors import ValidationError


def week_bounds(today: date) -> tuple[date, date]:
    """Calculate the calendar week containing a date.

    Weeks run Sunday through Saturday.

    Args:
        today: Reference date.

    Returns:
        Tuple of (sunday, saturday), both inclusive.
    """
    # date.weekday() is Monday=0, so shift to Sunday=0
    days_since_sunday = (today.weekday() + 1) % 7
    start = today - timedelta(days=days_since_sunday)
    return start, start + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    """Calculate the calendar month containing a date.

    Args:
        today: Reference date.

    Returns:
        Tuple of (first_day, last_day), both inclusive.
    """
    first = today.replace(day=1)
    next_month = (first.replace(day=28) + timedelta(days=4)).replace(day=1)
    return first, next_month - timedelta(days=1)


def is_within(day: date, start: date, end: date) -> bool:
    """Check whether a day falls in an inclusive range."""
    return start <= day <= end


def parse_user_date(raw_date: str) -> date:
    """Parse a date typed by the user.

    Uses pandas.to_datetime so ISO, European and other common formats are
    all accepted. Ambiguous numeric dates are read day-first.

    Args:
        raw_date: Date text (e.g. "2026-02-09", "09/02/2026").

    Returns:
        Calendar date.

    Raises:
        ValidationError: If the text is not a date.
    """
    text = raw_date.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValidationError(f"Could not parse date '{raw_date}': {e}") from e

    if pd.isna(parsed):
        raise ValidationError(f"Could not parse date '{raw_date}'")
    return parsed.date()
