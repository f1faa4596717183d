"""Weekly reflection and daily cumulative spending trend"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Sequence
from sphere_engine.domain.models import Direction, Timestamp, Transaction
from sphere_engine.domain.aggregation import (
    CategoryShare,
    aggregate,
    category_breakdown,
    compare_windows,
    filter_window,
)
from sphere_engine.utils.date_utils import DAY, bucket_key, generate_date_range, to_local_date, week_bounds

MIN_REPEAT_VISITS = 2
LARGEST_TRANSACTIONS = 5


@dataclass
class MerchantPattern:
    merchant: str
    count: int
    total: float


@dataclass
class WeeklyReflection:
    week_start: date
    week_end: date
    this_week_total: float
    last_week_total: float
    percent_change: float
    top_categories: List[CategoryShare] = field(default_factory=list)
    repeated_merchants: List[MerchantPattern] = field(default_factory=list)
    largest_transactions: List[Transaction] = field(default_factory=list)

    @property
    def is_lower_than_last_week(self) -> bool:
        return self.percent_change <= 0


def repeated_merchants(transactions: Sequence[Transaction], min_visits: int = MIN_REPEAT_VISITS) -> List[MerchantPattern]:
    """Merchants visited at least `min_visits` times, highest total first"""
    patterns: Dict[str, MerchantPattern] = {}
    for txn in transactions:
        pattern = patterns.setdefault(txn.merchant_name, MerchantPattern(txn.merchant_name, 0, 0.0))
        pattern.count += 1
        pattern.total += abs(txn.amount)

    return sorted(
        (p for p in patterns.values() if p.count >= min_visits),
        key=lambda p: p.total,
        reverse=True,
    )


def weekly_reflection(transactions: Sequence[Transaction], today: Timestamp | None = None) -> WeeklyReflection:
    """This Monday-start week against the previous one, outflows only"""
    reference = to_local_date(today) if today is not None else date.today()
    start, end = week_bounds(reference)

    comparison = compare_windows(transactions, start, end, Direction.OUTFLOW)
    this_week = filter_window(transactions, start, end, Direction.OUTFLOW)

    return WeeklyReflection(
        week_start=start,
        week_end=end,
        this_week_total=comparison.current_total,
        last_week_total=comparison.previous_total,
        percent_change=comparison.percent_change,
        top_categories=category_breakdown(aggregate(this_week)),
        repeated_merchants=repeated_merchants(this_week),
        largest_transactions=sorted(this_week, key=lambda t: abs(t.amount), reverse=True)[:LARGEST_TRANSACTIONS],
    )


@dataclass
class DailySpendPoint:
    day: date
    daily: float
    cumulative: float


def daily_spending_trend(
    transactions: Sequence[Transaction],
    start: Timestamp,
    today: Timestamp | None = None,
) -> List[DailySpendPoint]:
    """One point per day from `start` through `today`, including zero-spend days"""
    first = to_local_date(start)
    last = to_local_date(today) if today is not None else date.today()

    by_day = aggregate(transactions, first, last, Direction.OUTFLOW, granularity=DAY).by_bucket

    points = []
    running = 0.0
    for day in generate_date_range(first, last):
        spent = float(by_day.get(bucket_key(day), 0))
        running += spent
        points.append(DailySpendPoint(day=day, daily=spent, cumulative=running))
    return points


def half_period_trend(points: Sequence[DailySpendPoint]) -> float:
    """
    Percent change of the average daily spend in the second half of the
    period versus the first half; 0 when the first half has no spend.
    """
    mid = len(points) // 2
    first_half, second_half = points[:mid], points[mid:]
    if not first_half or not second_half:
        return 0.0

    first_avg = sum(p.daily for p in first_half) / len(first_half)
    second_avg = sum(p.daily for p in second_half) / len(second_half)
    if first_avg == 0:
        return 0.0
    return (second_avg - first_avg) / first_avg * 100
