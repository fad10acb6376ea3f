"""
Calendar-day helpers.

All labor cost attribution happens per calendar day.  A timestamp belongs to
the calendar day of its own wall-clock reading; callers pass timestamps in
the restaurant's local time (naive or aware) and the engines never convert
time zones.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime, timedelta

ONE_DAY = timedelta(days=1)


def to_calendar_day(value: date | datetime) -> date:
    """Normalize a date or timestamp to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def iter_days(start: date | datetime, end: date | datetime) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive.

    Yields nothing when ``start`` is after ``end``.
    """
    current = to_calendar_day(start)
    last = to_calendar_day(end)
    while current <= last:
        yield current
        current += ONE_DAY


def date_range(start: date | datetime, end: date | datetime) -> tuple[date, ...]:
    return tuple(iter_days(start, end))


def wall_clock(value: datetime) -> datetime:
    """Drop any UTC offset, keeping the timestamp's own wall-clock reading.

    Offset-aware and naive timestamps are comparable once both pass through here.
    """
    if value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


def format_day(day: date) -> str:
    """YYYY-MM-DD."""
    return day.isoformat()
