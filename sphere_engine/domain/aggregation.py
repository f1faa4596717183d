"""Spending aggregation - category and time-bucket totals for a window"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence
from sphere_engine.domain.models import Direction, Transaction, Timestamp
from sphere_engine.domain.categories import resolve
from sphere_engine.utils.date_utils import DAY, bucket_key, in_range, previous_window

CENT = Decimal("0.01")


def resolve_direction(txn: Transaction) -> Direction:
    """
    Single direction rule used everywhere direction matters.

    The explicit `direction` field wins; otherwise a negative amount is an
    outflow and anything else an inflow.
    """
    if txn.direction is not None:
        return Direction(txn.direction)
    return Direction.OUTFLOW if txn.amount < 0 else Direction.INFLOW


def normalize_transaction(txn: Transaction) -> Transaction:
    """Return a copy with `direction` always populated"""
    return replace(txn, direction=resolve_direction(txn))


def is_outflow(txn: Transaction) -> bool:
    return resolve_direction(txn) is Direction.OUTFLOW


def filter_window(
    transactions: Iterable[Transaction],
    start_date: Timestamp | None = None,
    end_date: Timestamp | None = None,
    direction: Direction | None = Direction.OUTFLOW,
) -> List[Transaction]:
    """Transactions in [start_date, end_date] moving in `direction` (None = both)"""
    return [
        t
        for t in transactions
        if in_range(t.posted_date, start_date, end_date)
        and (direction is None or resolve_direction(t) is direction)
    ]


def to_money(amount: float) -> Decimal:
    """Absolute amount as an exact Decimal, rounded half-up to the cent"""
    return Decimal(str(abs(amount))).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class SpendingAggregate:
    """
    Totals for one filter window.

    Amounts are exact Decimals, so the category and bucket maps each sum to
    `total` with no float drift.
    """

    total: Decimal = Decimal(0)
    by_category: Dict[str, Decimal] = field(default_factory=dict)
    by_bucket: Dict[str, Decimal] = field(default_factory=dict)
    transaction_count: int = 0


def aggregate(
    transactions: Iterable[Transaction],
    start_date: Timestamp | None = None,
    end_date: Timestamp | None = None,
    direction: Direction = Direction.OUTFLOW,
    granularity: str = DAY,
) -> SpendingAggregate:
    """
    Group transactions by display category and by time bucket.

    Amounts are summed as absolute values. Every matching transaction lands in
    exactly one category and exactly one bucket, so both maps sum to `total`.
    """
    by_category: Dict[str, Decimal] = {}
    by_bucket: Dict[str, Decimal] = {}
    total = Decimal(0)
    count = 0

    for txn in filter_window(transactions, start_date, end_date, direction):
        amount = to_money(txn.amount)
        category = resolve(txn.raw_category).display_name
        bucket = bucket_key(txn.posted_date, granularity)
        by_category[category] = by_category.get(category, Decimal(0)) + amount
        by_bucket[bucket] = by_bucket.get(bucket, Decimal(0)) + amount
        total += amount
        count += 1

    return SpendingAggregate(
        total=total,
        by_category=by_category,
        by_bucket=dict(sorted(by_bucket.items())),
        transaction_count=count,
    )


@dataclass
class CategoryShare:
    name: str
    amount: float
    share: float  # fraction of the window total
    color: str


def category_breakdown(result: SpendingAggregate, limit: int | None = None) -> List[CategoryShare]:
    """Categories sorted by amount (desc) with their share of the total.

    A zero total yields an empty list instead of dividing by zero.
    """
    if result.total == 0:
        return []

    ranked = sorted(result.by_category.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]

    return [
        CategoryShare(
            name=name,
            amount=float(amount),
            share=float(amount / result.total),
            color=resolve(name).color,
        )
        for name, amount in ranked
    ]


def trend_delta(current: float, previous: float) -> float:
    """Relative change between two windows; 0 when the previous window is 0"""
    if previous == 0:
        return 0.0
    return (current - previous) / previous


@dataclass
class WindowComparison:
    current_total: float
    previous_total: float
    delta: float  # fraction, e.g. -0.25 for a 25% drop

    @property
    def percent_change(self) -> float:
        return self.delta * 100


def compare_windows(
    transactions: Sequence[Transaction],
    start_date: date,
    end_date: date,
    direction: Direction = Direction.OUTFLOW,
) -> WindowComparison:
    """Compare [start_date, end_date] with the equal-length window right before it"""
    prev_start, prev_end = previous_window(start_date, end_date)
    current = float(aggregate(transactions, start_date, end_date, direction).total)
    previous = float(aggregate(transactions, prev_start, prev_end, direction).total)

    return WindowComparison(
        current_total=current,
        previous_total=previous,
        delta=trend_delta(current, previous),
    )
