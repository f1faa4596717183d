"""Dashboard engine - one consistent pass of every calculator over a snapshot"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List
from sphere_engine.domain.models import (
    Account,
    InvestmentAccount,
    Liability,
    RecurringCharge,
    Timestamp,
    Transaction,
    UserSettings,
    Vault,
)
from sphere_engine.domain import budget, debt, investments, safe_to_spend as sts
from sphere_engine.domain.aggregation import CategoryShare, SpendingAggregate, aggregate, category_breakdown
from sphere_engine.domain.bills import BillsSummary, summarize_bills
from sphere_engine.domain.budget import BudgetPace, budgets_from_spending, calculate_budget_pace
from sphere_engine.domain.debt import DebtSnapshot, DebtTypeShare, analyze_liability, debt_by_type, sort_liabilities
from sphere_engine.domain.investments import PortfolioSummary, project_portfolio, summarize_portfolio
from sphere_engine.domain.net_worth import NetWorth, calculate_net_worth
from sphere_engine.domain.reflection import (
    DailySpendPoint,
    WeeklyReflection,
    daily_spending_trend,
    half_period_trend,
    weekly_reflection,
)
from sphere_engine.domain.safe_to_spend import ResolvedBuffer, SafeToSpend, calculate_safe_to_spend, resolve_user_buffer
from sphere_engine.domain.savings import total_round_ups
from sphere_engine.utils.date_utils import month_bounds, to_local_date


@dataclass(frozen=True)
class FinancialSnapshot:
    """Self-consistent set of inputs fetched at one point in time"""

    accounts: List[Account] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)
    liabilities: List[Liability] = field(default_factory=list)
    bills: List[RecurringCharge] = field(default_factory=list)
    investments: List[InvestmentAccount] = field(default_factory=list)
    vaults: List[Vault] = field(default_factory=list)
    settings: UserSettings = field(default_factory=UserSettings)
    budgets: Dict[str, float] = field(default_factory=dict)  # display category -> monthly budget


@dataclass(frozen=True)
class EnginePolicy:
    """Tunable thresholds; defaults match the product's documented behavior"""

    horizon_days: int = sts.DEFAULT_HORIZON_DAYS
    pace_tolerance_pct: float = budget.PACE_TOLERANCE_PCT
    pace_warning_threshold_pct: float = budget.PACE_WARNING_THRESHOLD_PCT
    near_limit_pct: float = budget.NEAR_LIMIT_PCT
    urgent_days: int = debt.URGENT_DAYS
    soon_days: int = debt.SOON_DAYS
    high_utilization_pct: float = debt.HIGH_UTILIZATION_PCT
    annual_return_pct: float = investments.DEFAULT_ANNUAL_RETURN_PCT
    monthly_contribution: float = investments.DEFAULT_MONTHLY_CONTRIBUTION


@dataclass
class Dashboard:
    as_of: date
    safe_to_spend: SafeToSpend
    buffer: ResolvedBuffer
    net_worth: NetWorth
    month_spending: SpendingAggregate
    month_categories: List[CategoryShare]
    spending_trend: List[DailySpendPoint]
    spending_trend_pct: float  # second half of the month vs first half
    budget_pace: BudgetPace | None
    debts: List[DebtSnapshot]
    debt_breakdown: List[DebtTypeShare]
    bills: BillsSummary
    weekly: WeeklyReflection
    portfolio: PortfolioSummary
    portfolio_projection: Dict[int, float]  # years -> projected value
    round_ups_this_month: float


def compute_dashboard(
    snapshot: FinancialSnapshot,
    today: Timestamp | None = None,
    policy: EnginePolicy = EnginePolicy(),
) -> Dashboard:
    """
    Main entry point: derive every dashboard figure from one snapshot.

    Budget pace reuses the month-to-date spending aggregate and every debt is
    analysed against the same safe-to-spend amount.
    """
    as_of = to_local_date(today) if today is not None else date.today()
    month_start, month_end = month_bounds(as_of)

    buffer = resolve_user_buffer(snapshot.vaults, snapshot.settings)
    safe = calculate_safe_to_spend(
        snapshot.accounts,
        snapshot.transactions,
        snapshot.bills,
        buffer.amount,
        horizon_days=policy.horizon_days,
        today=as_of,
    )

    month_spending = aggregate(snapshot.transactions, month_start, as_of)
    trend = daily_spending_trend(snapshot.transactions, month_start, as_of)

    pace = None
    if snapshot.budgets:
        pace = calculate_budget_pace(
            budgets_from_spending(month_spending, snapshot.budgets),
            now=as_of,
            month_start=month_start,
            month_end=month_end,
            tolerance_pct=policy.pace_tolerance_pct,
            warning_threshold_pct=policy.pace_warning_threshold_pct,
            near_limit_pct=policy.near_limit_pct,
        )

    debts = [
        analyze_liability(
            liability,
            safe.amount,
            today=as_of,
            urgent_days=policy.urgent_days,
            soon_days=policy.soon_days,
            high_utilization_pct=policy.high_utilization_pct,
        )
        for liability in sort_liabilities(snapshot.liabilities)
    ]

    portfolio = summarize_portfolio(snapshot.investments)

    return Dashboard(
        as_of=as_of,
        safe_to_spend=safe,
        buffer=buffer,
        net_worth=calculate_net_worth(snapshot.accounts, snapshot.liabilities),
        month_spending=month_spending,
        month_categories=category_breakdown(month_spending),
        spending_trend=trend,
        spending_trend_pct=half_period_trend(trend),
        budget_pace=pace,
        debts=debts,
        debt_breakdown=debt_by_type(snapshot.liabilities),
        bills=summarize_bills(snapshot.bills, as_of, policy.horizon_days),
        weekly=weekly_reflection(snapshot.transactions, as_of),
        portfolio=portfolio,
        portfolio_projection=project_portfolio(
            portfolio.value,
            policy.monthly_contribution,
            annual_return_pct=policy.annual_return_pct,
        ),
        round_ups_this_month=total_round_ups(snapshot.transactions, snapshot.settings, month_start, as_of),
    )
