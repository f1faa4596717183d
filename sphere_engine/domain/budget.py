"""Budget pace engine - actual spend vs a linear time-prorated expectation"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List, Mapping
from sphere_engine.domain.models import CategoryBudget, Timestamp
from sphere_engine.domain.aggregation import SpendingAggregate
from sphere_engine.utils.date_utils import month_bounds, to_local_date

PACE_TOLERANCE_PCT = 5.0
PACE_WARNING_THRESHOLD_PCT = 20.0
NEAR_LIMIT_PCT = 80.0


class PaceStatus(str, Enum):
    UNDER = "under"  # at or below expected spend
    WARNING = "warning"  # over expected by up to the warning threshold
    OVER = "over"  # over expected by more than the warning threshold


@dataclass
class CategoryProgress:
    name: str
    budget: float
    spent: float
    progress: float  # percent of budget used, capped at 100
    is_over_budget: bool
    is_near_limit: bool

    @property
    def remaining(self) -> float:
        return self.budget - self.spent


@dataclass
class BudgetPace:
    total_budget: float
    total_spent: float
    overall_progress_pct: float
    expected_progress_pct: float
    is_on_track: bool
    expected_spend: int
    pace_difference: float
    pace_difference_pct: float
    status: PaceStatus
    day_of_month: int
    days_in_month: int
    categories: List[CategoryProgress] = field(default_factory=list)

    @property
    def days_remaining(self) -> int:
        return self.days_in_month - self.day_of_month


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _ratio(spent: float, budget: float) -> float:
    return spent / budget if budget else 0.0


def category_progress(category: CategoryBudget, near_limit_pct: float = NEAR_LIMIT_PCT) -> CategoryProgress:
    progress = min(100.0, _ratio(category.spent, category.budget) * 100)
    is_over = category.spent > category.budget

    return CategoryProgress(
        name=category.name,
        budget=category.budget,
        spent=category.spent,
        progress=progress,
        is_over_budget=is_over,
        is_near_limit=progress >= near_limit_pct and not is_over,
    )


def classify_pace(
    pace_difference: float,
    pace_difference_pct: float,
    warning_threshold_pct: float = PACE_WARNING_THRESHOLD_PCT,
) -> PaceStatus:
    if pace_difference <= 0:
        return PaceStatus.UNDER
    if pace_difference_pct <= warning_threshold_pct:
        return PaceStatus.WARNING
    return PaceStatus.OVER


def calculate_budget_pace(
    categories: Iterable[CategoryBudget],
    now: Timestamp | None = None,
    month_start: Timestamp | None = None,
    month_end: Timestamp | None = None,
    tolerance_pct: float = PACE_TOLERANCE_PCT,
    warning_threshold_pct: float = PACE_WARNING_THRESHOLD_PCT,
    near_limit_pct: float = NEAR_LIMIT_PCT,
) -> BudgetPace:
    """
    Compare month-to-date spend against a budget prorated linearly by day.

    Window defaults to the calendar month containing `now`. Zero totals
    resolve to 0% instead of dividing by zero. A window that ends before it
    starts raises ValueError.
    """
    today = to_local_date(now) if now is not None else date.today()
    default_start, default_end = month_bounds(today)
    start = to_local_date(month_start) if month_start is not None else default_start
    end = to_local_date(month_end) if month_end is not None else default_end

    day_of_month = (today - start).days + 1
    days_in_month = (end - start).days + 1
    if days_in_month <= 0:
        raise ValueError(f"Budget window ends before it starts: {start} to {end}")

    lines = list(categories)
    total_budget = sum(c.budget for c in lines)
    total_spent = sum(c.spent for c in lines)

    overall_progress = min(100.0, _ratio(total_spent, total_budget) * 100)
    expected_progress = day_of_month / days_in_month * 100

    expected_spend = round_half_up(total_budget * day_of_month / days_in_month)
    difference = total_spent - expected_spend
    difference_pct = abs(difference / expected_spend * 100) if expected_spend > 0 else 0.0

    progress = sorted(
        (category_progress(c, near_limit_pct) for c in lines),
        key=lambda p: _ratio(p.spent, p.budget),
        reverse=True,
    )

    return BudgetPace(
        total_budget=total_budget,
        total_spent=total_spent,
        overall_progress_pct=overall_progress,
        expected_progress_pct=expected_progress,
        is_on_track=overall_progress <= expected_progress + tolerance_pct,
        expected_spend=expected_spend,
        pace_difference=difference,
        pace_difference_pct=difference_pct,
        status=classify_pace(difference, difference_pct, warning_threshold_pct),
        day_of_month=day_of_month,
        days_in_month=days_in_month,
        categories=progress,
    )


def budgets_from_spending(
    spending: SpendingAggregate,
    budgets: Mapping[str, float],
) -> List[CategoryBudget]:
    """Budget lines whose `spent` comes from a spending aggregate over the same window"""
    return [
        CategoryBudget(name=name, budget=budget, spent=float(spending.by_category.get(name, 0)))
        for name, budget in budgets.items()
    ]
