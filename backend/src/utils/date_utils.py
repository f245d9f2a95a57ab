"""
Date-key utilities for period filtering and day grouping.

Records carry calendar dates as `YYYY-MM-DD` strings ("date keys"). This module
is the single place where those strings are validated, compared and iterated.
Date keys are compared lexically and are never converted to timezone-aware
timestamps: doing so shifts dates across midnight for users in other zones.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Tuple, Union

# Calendar-day iteration is anchored at local noon so that stepping by one day
# can never land on the previous/next date around DST or UTC offset changes.
NEUTRAL_TIME_OF_DAY = time(12, 0)

DATE_KEY_FORMAT = '%Y-%m-%d'
MONTH_KEY_FORMAT = '%Y-%m'


def normalize_date_key(value: Union[str, date]) -> str:
    """
    Normalize a date value to a `YYYY-MM-DD` key.

    Accepts:
    - YYYY-MM-DD (e.g., "2024-03-01", "2024-3-1")
    - ISO timestamps from SQL backends (e.g., "2024-03-01T00:00:00.000Z");
      only the calendar part is kept, no timezone conversion is applied
    - date objects

    Args:
        value: Date string or date object

    Returns:
        Date key in YYYY-MM-DD format

    Raises:
        ValueError: If the value cannot be parsed as a calendar date
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Date string cannot be empty")

    date_str = value.strip().split('T')[0].split(' ')[0]
    parts = date_str.split('-')
    if len(parts) != 3:
        raise ValueError(f"Invalid date format (expected YYYY-MM-DD): {value}")

    normalized = f"{parts[0].zfill(4)}-{parts[1].zfill(2)}-{parts[2].zfill(2)}"
    try:
        datetime.strptime(normalized, DATE_KEY_FORMAT)
    except ValueError as e:
        raise ValueError(f"Invalid date format (expected YYYY-MM-DD): {value}") from e
    return normalized


def normalize_month_key(value: str) -> str:
    """
    Normalize a month value to a `YYYY-MM` key.

    Raises:
        ValueError: If the value is not a valid year-month
    """
    if not value or not value.strip():
        raise ValueError("Month string cannot be empty")

    parts = value.strip().split('-')
    if len(parts) != 2:
        raise ValueError(f"Invalid month format (expected YYYY-MM): {value}")

    normalized = f"{parts[0].zfill(4)}-{parts[1].zfill(2)}"
    try:
        datetime.strptime(normalized, MONTH_KEY_FORMAT)
    except ValueError as e:
        raise ValueError(f"Invalid month format (expected YYYY-MM): {value}") from e
    return normalized


def _anchor(date_key: str) -> datetime:
    return datetime.combine(datetime.strptime(date_key, DATE_KEY_FORMAT).date(), NEUTRAL_TIME_OF_DAY)


def iter_date_keys(start_key: str, end_key: str) -> Iterator[str]:
    """
    Yield every calendar day from start_key to end_key, both inclusive.

    Yields nothing when start_key > end_key.
    """
    if start_key > end_key:
        return
    current = _anchor(start_key)
    last = _anchor(end_key)
    while True:
        yield current.strftime(DATE_KEY_FORMAT)
        # Stop before stepping past date.max
        if current.date() >= last.date():
            return
        current += timedelta(days=1)


def days_between(start_key: str, end_key: str) -> int:
    """Number of calendar days from start_key to end_key, both inclusive (0 if reversed)."""
    start = datetime.strptime(start_key, DATE_KEY_FORMAT).date()
    end = datetime.strptime(end_key, DATE_KEY_FORMAT).date()
    return max((end - start).days + 1, 0)


def month_bounds(month_key: str) -> Tuple[str, str]:
    """
    Get the first and last date keys of a month.

    Example: "2024-02" -> ("2024-02-01", "2024-02-29")
    """
    month_key = normalize_month_key(month_key)
    first = datetime.strptime(f"{month_key}-01", DATE_KEY_FORMAT).date()
    if first.month == 12:
        next_month = date(first.year + 1, 1, 1)
    else:
        next_month = date(first.year, first.month + 1, 1)
    last = next_month - timedelta(days=1)
    return first.isoformat(), last.isoformat()


def current_month_key(today: Optional[date] = None) -> str:
    """Current local month as `YYYY-MM` (local calendar, not UTC)."""
    today = today or date.today()
    return today.strftime(MONTH_KEY_FORMAT)


def current_date_key(today: Optional[date] = None) -> str:
    """Current local day as `YYYY-MM-DD` (local calendar, not UTC)."""
    today = today or date.today()
    return today.isoformat()


def format_day_label(date_key: str) -> str:
    """
    Format a date key as a short `DD/MM` chart label.

    Works on the string directly so no timezone is involved.
    """
    year, month, day = date_key.split('-')
    return f"{day}/{month}"
