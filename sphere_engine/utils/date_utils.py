"""Date normalization and bucketing utilities

Every comparison strips the time of day first, so two timestamps on the same
local calendar day always land in the same bucket.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import List, Tuple
from sphere_engine.domain.models import Timestamp

DAY = "day"
WEEK = "week"
MONTH = "month"


def to_local_date(value: Timestamp) -> date:
    """Normalize a date or datetime to its local calendar day (local midnight)"""
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def bucket_key(value: Timestamp, granularity: str = DAY) -> str:
    """
    Stable string key for the bucket containing `value`.

    - day:   2024-03-07
    - week:  2024-W10 (ISO week, Monday start)
    - month: 2024-03
    """
    day = to_local_date(value)
    if granularity == DAY:
        return day.isoformat()
    if granularity == WEEK:
        iso_year, iso_week, _ = day.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    if granularity == MONTH:
        return f"{day.year}-{day.month:02d}"
    raise ValueError(f"Unknown bucket granularity: {granularity}")


def in_range(value: Timestamp, start: Timestamp | None, end: Timestamp | None) -> bool:
    """Inclusive day-level range check; a missing bound is open"""
    day = to_local_date(value)
    if start is not None and day < to_local_date(start):
        return False
    if end is not None and day > to_local_date(end):
        return False
    return True


def days_until(value: Timestamp, today: Timestamp | None = None) -> int:
    """Whole days from today to `value`; negative means overdue"""
    reference = to_local_date(today) if today is not None else date.today()
    return (to_local_date(value) - reference).days


def week_bounds(value: Timestamp) -> Tuple[date, date]:
    """Monday..Sunday week containing `value`"""
    day = to_local_date(value)
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(value: Timestamp) -> Tuple[date, date]:
    """First and last calendar day of the month containing `value`"""
    day = to_local_date(value)
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def previous_window(start: Timestamp, end: Timestamp) -> Tuple[date, date]:
    """Equal-length window immediately before [start, end]"""
    start_day = to_local_date(start)
    length = (to_local_date(end) - start_day).days + 1
    return start_day - timedelta(days=length), start_day - timedelta(days=1)


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]
