from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Union

from django.utils import formats, timezone

DateInput = Union[date, datetime, str, None]

SECONDS_IN_ONE_DAY = 24 * 60 * 60


def _to_local_naive(value: datetime) -> datetime:
    if timezone.is_aware(value):
        return timezone.make_naive(value)
    return value


def parse_iso_date(value: DateInput) -> Optional[datetime]:
    """
    Parse a date-like value into a naive `datetime` in the project's local time.

    Args:
        value: `date`, `datetime`, or an ISO-8601 string such as "2025-09-30"
            or "2025-09-30T10:00:00Z" (or any falsy value).

    Returns:
        datetime | None: Parsed value on success, otherwise None. Plain dates
        become midnight of that day.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time.min)
        return _to_local_naive(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return None


def start_of_today(today: Optional[date] = None) -> datetime:
    """Midnight of `today`, defaulting to the current local date."""
    if today is None:
        today = timezone.localdate()
    return datetime.combine(today, time.min)


def days_between(start: datetime, end: datetime) -> float:
    """Raw (signed, unrounded) number of days from `start` to `end`."""
    return (end - start).total_seconds() / SECONDS_IN_ONE_DAY


def display_date(value: datetime) -> str:
    """Short, locale-aware rendering of a date for user-facing messages."""
    return formats.date_format(value.date(), "SHORT_DATE_FORMAT")
