"""Upcoming bills summary"""

from dataclasses import dataclass, field
from typing import Iterable, List
from sphere_engine.domain.models import Cadence, RecurringCharge, Timestamp
from sphere_engine.utils.date_utils import days_until, to_local_date

DEFAULT_HORIZON_DAYS = 7


@dataclass
class BillsSummary:
    total_upcoming: float  # due within the horizon
    total_monthly: float  # monthly-cadence bills only
    due_soon: List[RecurringCharge] = field(default_factory=list)
    later: List[RecurringCharge] = field(default_factory=list)
    overdue: List[RecurringCharge] = field(default_factory=list)


def summarize_bills(
    bills: Iterable[RecurringCharge],
    today: Timestamp | None = None,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> BillsSummary:
    ordered = sorted(bills, key=lambda b: to_local_date(b.next_date))

    due_soon, later, overdue = [], [], []
    for bill in ordered:
        days = days_until(bill.next_date, today)
        if days < 0:
            overdue.append(bill)
        elif days <= horizon_days:
            due_soon.append(bill)
        else:
            later.append(bill)

    return BillsSummary(
        total_upcoming=sum(b.avg_amount for b in due_soon),
        total_monthly=sum(b.avg_amount for b in ordered if b.cadence == Cadence.MONTHLY),
        due_soon=due_soon,
        later=later,
        overdue=overdue,
    )
