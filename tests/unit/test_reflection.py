"""Unit tests for weekly reflection and daily trend"""

import pytest
from datetime import date, timedelta
from sphere_engine.domain.models import Transaction
from sphere_engine.domain.reflection import (
    DailySpendPoint,
    daily_spending_trend,
    half_period_trend,
    repeated_merchants,
    weekly_reflection,
)


def test_weekly_reflection(sample_transactions, today):
    reflection = weekly_reflection(sample_transactions, today)

    assert reflection.week_start == date(2024, 3, 11)
    assert reflection.week_end == date(2024, 3, 17)
    assert reflection.this_week_total == pytest.approx(100.0)
    assert reflection.last_week_total == pytest.approx(150.0)
    assert reflection.percent_change == pytest.approx(-100 / 3)
    assert reflection.is_lower_than_last_week is True
    assert [c.name for c in reflection.top_categories] == ["Groceries", "Coffee"]
    assert [t.id for t in reflection.largest_transactions] == ["t3", "t1", "t2"]


def test_weekly_reflection_repeated_merchants(sample_transactions, today):
    reflection = weekly_reflection(sample_transactions, today)

    assert len(reflection.repeated_merchants) == 1
    pattern = reflection.repeated_merchants[0]
    assert pattern.merchant == "Blue Bottle"
    assert pattern.count == 2
    assert pattern.total == pytest.approx(17.25)


def test_weekly_reflection_no_previous_spend(today):
    txns = [Transaction("1", "a", today, -30.0, "Store", "SHOPPING")]
    reflection = weekly_reflection(txns, today)
    assert reflection.percent_change == 0.0


def test_largest_transactions_capped_at_five(today):
    txns = [Transaction(str(i), "a", today, -float(i), "Store", "SHOPPING") for i in range(1, 9)]
    reflection = weekly_reflection(txns, today)
    assert [t.amount for t in reflection.largest_transactions] == [-8.0, -7.0, -6.0, -5.0, -4.0]


def test_repeated_merchants_sorted_by_total(today):
    txns = [
        Transaction("1", "a", today, -5.0, "Cafe", "COFFEE"),
        Transaction("2", "a", today, -5.0, "Cafe", "COFFEE"),
        Transaction("3", "a", today, -40.0, "Market", "GROCERIES"),
        Transaction("4", "a", today, -45.0, "Market", "GROCERIES"),
        Transaction("5", "a", today, -99.0, "Once", "SHOPPING"),
    ]
    assert [p.merchant for p in repeated_merchants(txns)] == ["Market", "Cafe"]


def test_daily_spending_trend_includes_zero_days(sample_transactions, today):
    points = daily_spending_trend(sample_transactions, today - timedelta(days=3), today)

    assert [p.day for p in points] == [date(2024, 3, 10), date(2024, 3, 11), date(2024, 3, 12), date(2024, 3, 13)]
    assert [p.daily for p in points] == pytest.approx([0.0, 82.75, 4.75, 12.50])
    assert points[-1].cumulative == pytest.approx(100.0)


def test_daily_spending_trend_cumulative_is_monotonic(sample_transactions, today):
    points = daily_spending_trend(sample_transactions, date(2024, 3, 1), today)
    cumulative = [p.cumulative for p in points]
    assert cumulative == sorted(cumulative)


def test_half_period_trend():
    points = [
        DailySpendPoint(date(2024, 3, 1), 10.0, 10.0),
        DailySpendPoint(date(2024, 3, 2), 10.0, 20.0),
        DailySpendPoint(date(2024, 3, 3), 15.0, 35.0),
        DailySpendPoint(date(2024, 3, 4), 15.0, 50.0),
    ]
    assert half_period_trend(points) == pytest.approx(50.0)


def test_half_period_trend_degenerate():
    assert half_period_trend([]) == 0.0
    assert half_period_trend([DailySpendPoint(date(2024, 3, 1), 5.0, 5.0)]) == 0.0
    zeros = [DailySpendPoint(date(2024, 3, d), 0.0, 0.0) for d in (1, 2)]
    assert half_period_trend(zeros) == 0.0
