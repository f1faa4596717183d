"""Debt cost-of-waiting, urgency and payoff projections"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Sequence
from sphere_engine.domain.models import Liability, LiabilityType, Timestamp
from sphere_engine.utils.date_utils import days_until, to_local_date

URGENT_DAYS = 3
SOON_DAYS = 7
HIGH_UTILIZATION_PCT = 30.0
PAYOFF_MAX_MONTHS = 600  # 50 years


def daily_rate(apr_percent: float) -> float:
    return apr_percent / 100 / 365


def cost_of_waiting(balance: float, apr_percent: float, days: int) -> float:
    """
    Simple (non-compounding) daily interest accrued over `days`.

    Good enough for a short-horizon nudge, not for statement-accurate billing.
    """
    return balance * daily_rate(apr_percent) * days


def late_fee_incurred(days: int, days_until_due: int | None, late_fee: float | None) -> float:
    """The flat late fee when waiting `days` runs past the due date, else 0"""
    if not late_fee or days_until_due is None:
        return 0.0
    return late_fee if days > days_until_due else 0.0


@dataclass
class WaitingCost:
    interest: float
    late_fee: float
    total: float


def waiting_cost(
    balance: float,
    apr_percent: float,
    days: int,
    days_until_due: int | None = None,
    late_fee: float | None = None,
) -> WaitingCost:
    """Interest for `days` plus the late fee when the wait crosses the due date"""
    interest = cost_of_waiting(balance, apr_percent, days)
    fee = late_fee_incurred(days, days_until_due, late_fee)
    return WaitingCost(interest=interest, late_fee=fee, total=interest + fee)


def recommended_payment(safe_to_spend: float, balance: float) -> float:
    """Never more than what is safe to spend, nor more than what is owed"""
    return min(safe_to_spend, balance)


def utilization_percent(liability: Liability) -> float | None:
    """Balance / limit for credit cards; None for other types or without a limit"""
    if liability.type != LiabilityType.CREDIT_CARD or not liability.credit_limit:
        return None
    return liability.current_balance / liability.credit_limit * 100


class UrgencyLevel(str, Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"
    SOON = "soon"
    NORMAL = "normal"
    NONE = "none"  # no due date


URGENCY_COLORS: Dict[UrgencyLevel, str] = {
    UrgencyLevel.OVERDUE: "#ef4444",
    UrgencyLevel.URGENT: "#ef4444",
    UrgencyLevel.SOON: "#f59e0b",
    UrgencyLevel.NORMAL: "#6b7280",
    UrgencyLevel.NONE: "#6b7280",
}


@dataclass
class Urgency:
    level: UrgencyLevel
    label: str
    color: str


def classify_urgency(
    days_until_due: int | None,
    urgent_days: int = URGENT_DAYS,
    soon_days: int = SOON_DAYS,
) -> Urgency:
    """
    Urgency bands by days until due:
    - < 0: overdue
    - <= urgent_days: urgent
    - <= soon_days: soon
    - otherwise: normal
    """
    if days_until_due is None:
        level = UrgencyLevel.NONE
    elif days_until_due < 0:
        level = UrgencyLevel.OVERDUE
    elif days_until_due <= urgent_days:
        level = UrgencyLevel.URGENT
    elif days_until_due <= soon_days:
        level = UrgencyLevel.SOON
    else:
        level = UrgencyLevel.NORMAL

    if level is UrgencyLevel.NONE:
        label = "No due date"
    elif level is UrgencyLevel.OVERDUE:
        label = "Overdue"
    else:
        label = f"{days_until_due} days"

    return Urgency(level=level, label=label, color=URGENCY_COLORS[level])


@dataclass
class DebtSnapshot:
    """Everything the debt detail view derives from one liability"""

    liability: Liability
    days_until_due: int | None
    urgency: Urgency
    utilization_percent: float | None
    is_high_utilization: bool
    cost_of_waiting_7_days: WaitingCost | None
    cost_of_waiting_30_days: WaitingCost | None
    recommended_payment: float


def analyze_liability(
    liability: Liability,
    safe_to_spend: float,
    today: Timestamp | None = None,
    urgent_days: int = URGENT_DAYS,
    soon_days: int = SOON_DAYS,
    high_utilization_pct: float = HIGH_UTILIZATION_PCT,
) -> DebtSnapshot:
    due_in = days_until(liability.due_date, today) if liability.due_date is not None else None
    utilization = utilization_percent(liability)

    if liability.apr is not None:
        wait_7 = waiting_cost(liability.current_balance, liability.apr, 7, due_in, liability.late_fee)
        wait_30 = waiting_cost(liability.current_balance, liability.apr, 30, due_in, liability.late_fee)
    else:
        wait_7 = wait_30 = None

    return DebtSnapshot(
        liability=liability,
        days_until_due=due_in,
        urgency=classify_urgency(due_in, urgent_days, soon_days),
        utilization_percent=utilization,
        is_high_utilization=utilization is not None and utilization > high_utilization_pct,
        cost_of_waiting_7_days=wait_7,
        cost_of_waiting_30_days=wait_30,
        recommended_payment=recommended_payment(safe_to_spend, liability.current_balance),
    )


@dataclass
class PayoffProjection:
    monthly_payment: float
    months: int | None  # None = never pays off
    total_interest: float | None

    @property
    def pays_off(self) -> bool:
        return self.months is not None


def calculate_payoff(
    balance: float,
    apr_percent: float,
    monthly_payment: float,
    max_months: int = PAYOFF_MAX_MONTHS,
) -> PayoffProjection:
    """
    Months and total interest to clear `balance` with a fixed monthly payment.

    Interest accrues monthly at apr/12. A payment that does not cover the
    first month's interest, or one that leaves a balance after `max_months`,
    never pays the debt off.
    """
    monthly_rate = apr_percent / 100 / 12

    if monthly_payment <= 0:
        return PayoffProjection(monthly_payment, None, None)

    # Payment covers the full balance: one month with one month's interest
    if monthly_payment >= balance:
        return PayoffProjection(monthly_payment, 1, balance * monthly_rate)

    if monthly_payment <= balance * monthly_rate:
        return PayoffProjection(monthly_payment, None, None)

    remaining = balance
    months = 0
    total_interest = 0.0
    while remaining > 0 and months < max_months:
        interest = remaining * monthly_rate
        total_interest += interest
        remaining = max(0.0, remaining + interest - monthly_payment)
        months += 1

    # Still owing after max_months counts as never paying off
    if remaining > 0:
        return PayoffProjection(monthly_payment, None, None)

    return PayoffProjection(monthly_payment, months, total_interest)


@dataclass
class PayoffScenarios:
    minimum: PayoffProjection
    double: PayoffProjection
    custom: PayoffProjection
    interest_saved: float | None  # custom vs minimum
    months_saved: int | None


def payoff_scenarios(
    balance: float,
    apr_percent: float,
    minimum_payment: float,
    custom_payment: float | None = None,
    max_months: int = PAYOFF_MAX_MONTHS,
) -> PayoffScenarios:
    """Minimum, double-minimum and custom payment plans side by side"""
    if custom_payment is None:
        custom_payment = minimum_payment * 2
    custom_payment = max(minimum_payment, custom_payment)

    minimum = calculate_payoff(balance, apr_percent, minimum_payment, max_months)
    double = calculate_payoff(balance, apr_percent, minimum_payment * 2, max_months)
    custom = calculate_payoff(balance, apr_percent, custom_payment, max_months)

    if minimum.pays_off and custom.pays_off:
        interest_saved = minimum.total_interest - custom.total_interest
        months_saved = minimum.months - custom.months
    else:
        interest_saved = months_saved = None

    return PayoffScenarios(
        minimum=minimum,
        double=double,
        custom=custom,
        interest_saved=interest_saved,
        months_saved=months_saved,
    )


SORT_BY_DUE_DATE = "due_date"
SORT_BY_AMOUNT = "amount"
SORT_BY_APR = "apr"


def sort_liabilities(liabilities: Iterable[Liability], by: str = SORT_BY_DUE_DATE) -> List[Liability]:
    """Due date ascending (undated last), amount descending or APR descending"""
    items = list(liabilities)
    if by == SORT_BY_DUE_DATE:
        return sorted(
            items,
            key=lambda l: (l.due_date is None, to_local_date(l.due_date) if l.due_date else date.min),
        )
    if by == SORT_BY_AMOUNT:
        return sorted(items, key=lambda l: l.current_balance, reverse=True)
    if by == SORT_BY_APR:
        return sorted(items, key=lambda l: l.apr or 0, reverse=True)
    raise ValueError(f"Unknown sort option: {by}")


def total_debt(liabilities: Iterable[Liability]) -> float:
    return sum(l.current_balance for l in liabilities)


@dataclass
class DebtTypeShare:
    type: LiabilityType
    amount: float
    share: float


def debt_by_type(liabilities: Sequence[Liability]) -> List[DebtTypeShare]:
    """Debt grouped by liability type, largest first; empty when nothing is owed"""
    totals: Dict[LiabilityType, float] = {}
    for liability in liabilities:
        kind = LiabilityType(liability.type)
        totals[kind] = totals.get(kind, 0.0) + liability.current_balance

    overall = sum(totals.values())
    if overall == 0:
        return []

    return [
        DebtTypeShare(type=kind, amount=amount, share=amount / overall)
        for kind, amount in sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ]
