"""Date utilities for ftracker.

Pure functions for date parsing, month keys and month ranges.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any

import pandas as pd

from ftracker.domain.models import Month

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")

RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


def parse_date(value: Any) -> date:
    """Parse a calendar date, dropping any time of day.

    ISO dates and timestamps are read directly and must parse in full. Other
    text such as "15/01/2024" is handed to pandas with day-first parsing.
    Words relative to the current day ("now", "today") are rejected.

    Args:
        value: A date, datetime, or date string.

    Returns:
        The calendar date.

    Raises:
        ValueError: If value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")

    text = value.strip()
    if not text:
        raise ValueError("Date is empty")

    if _ISO_DATE.match(text):
        try:
            return date.fromisoformat(text)
        except ValueError:
            return datetime.fromisoformat(text).date()

    # pandas resolves these against the wall clock
    if text.casefold() in RELATIVE_DATE_WORDS:
        raise ValueError(f"Not a date: {value!r}")

    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Not a date: {value!r}") from e

    if pd.isna(parsed):
        raise ValueError(f"Not a date: {value!r}")
    return parsed.date()


def month_key(day: date) -> Month:
    """Get the YYYY-MM month a date falls in."""
    return Month(f"{day.year:04d}-{day.month:02d}")


def parse_month(value: str) -> Month:
    """Validate and normalize a YYYY-MM month string.

    Raises:
        ValueError: If value is not a valid month.
    """
    dt = datetime.strptime(value.strip(), "%Y-%m")
    return Month(dt.strftime("%Y-%m"))


def month_label(month: Month) -> str:
    """Human-readable month (e.g., "January 2025")."""
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")


def month_range(month: Month) -> tuple[date, date, str]:
    """Calculate inclusive date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (first_day, last_day, label) where:
        - first_day: First day of month
        - last_day: Last day of month
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    first_day = dt.date()
    next_month = (first_day.replace(day=28) + timedelta(days=4)).replace(day=1)
    last_day = next_month - timedelta(days=1)
    label = dt.strftime("%B %Y")
    return first_day, last_day, label
