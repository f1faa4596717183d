"""Unit tests for date normalization and bucketing"""

import pytest
from datetime import date, datetime, timedelta, timezone
from sphere_engine.utils.date_utils import (
    DAY,
    MONTH,
    WEEK,
    bucket_key,
    days_until,
    generate_date_range,
    in_range,
    month_bounds,
    previous_window,
    to_local_date,
    week_bounds,
)


def test_to_local_date_strips_time():
    assert to_local_date(datetime(2024, 3, 13, 23, 59)) == date(2024, 3, 13)
    assert to_local_date(date(2024, 3, 13)) == date(2024, 3, 13)


def test_to_local_date_converts_aware_datetimes_to_local_zone():
    aware = datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc)
    assert to_local_date(aware) == aware.astimezone().date()


def test_same_day_timestamps_share_a_bucket():
    morning = datetime(2024, 3, 13, 0, 1)
    night = datetime(2024, 3, 13, 23, 59)
    assert bucket_key(morning) == bucket_key(night) == "2024-03-13"


def test_bucket_key_week_is_iso_monday_start():
    assert bucket_key(date(2024, 3, 11), WEEK) == "2024-W11"  # Monday
    assert bucket_key(date(2024, 3, 17), WEEK) == "2024-W11"  # Sunday
    assert bucket_key(date(2024, 3, 18), WEEK) == "2024-W12"


def test_bucket_key_week_uses_iso_year():
    assert bucket_key(date(2024, 12, 30), WEEK) == "2025-W01"


def test_bucket_key_month():
    assert bucket_key(date(2024, 3, 31), MONTH) == "2024-03"
    assert bucket_key(datetime(2024, 11, 1, 8, 30), MONTH) == "2024-11"


def test_bucket_key_unknown_granularity():
    with pytest.raises(ValueError):
        bucket_key(date(2024, 3, 13), "quarter")


def test_in_range_is_inclusive_and_open_ended():
    start, end = date(2024, 3, 1), date(2024, 3, 31)
    assert in_range(date(2024, 3, 1), start, end)
    assert in_range(datetime(2024, 3, 31, 23, 0), start, end)
    assert not in_range(date(2024, 4, 1), start, end)
    assert in_range(date(1999, 1, 1), None, end)
    assert in_range(date(2099, 1, 1), start, None)


def test_days_until():
    today = date(2024, 3, 13)
    assert days_until(date(2024, 3, 16), today) == 3
    assert days_until(date(2024, 3, 10), today) == -3
    assert days_until(datetime(2024, 3, 13, 18, 0), today) == 0


def test_week_bounds():
    assert week_bounds(date(2024, 3, 13)) == (date(2024, 3, 11), date(2024, 3, 17))
    assert week_bounds(date(2024, 3, 11)) == (date(2024, 3, 11), date(2024, 3, 17))


def test_month_bounds_handles_leap_february():
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(date(2023, 2, 10)) == (date(2023, 2, 1), date(2023, 2, 28))


def test_previous_window_has_equal_length():
    start, end = date(2024, 3, 11), date(2024, 3, 17)
    prev_start, prev_end = previous_window(start, end)
    assert (prev_start, prev_end) == (date(2024, 3, 4), date(2024, 3, 10))
    assert (prev_end - prev_start) == (end - start)


def test_generate_date_range():
    start = date(2024, 3, 1)
    days = generate_date_range(start, start + timedelta(days=2))
    assert days == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]
    assert generate_date_range(start, start - timedelta(days=1)) == []


def test_day_constant_is_default():
    assert bucket_key(date(2024, 3, 13)) == bucket_key(date(2024, 3, 13), DAY)
