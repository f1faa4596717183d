"""Single-calculator endpoints for screens that need one figure"""

from fastapi import APIRouter, Depends, HTTPException

from sphere_engine.api.dependencies import get_engine_policy
from sphere_engine.api.v1.schemas import (
    AggregateRequest,
    AggregateResponse,
    BudgetPaceRequest,
    BudgetPaceResponse,
    CategoryResponse,
    CostOfWaitingRequest,
    CostOfWaitingResponse,
    NetWorthRequest,
    NetWorthResponse,
    PayoffRequest,
    PayoffResponse,
    ProjectionRequest,
    ProjectionResponse,
    SafeToSpendRequest,
    SafeToSpendResponse,
)
from sphere_engine.config import settings
from sphere_engine.domain import categories, debt
from sphere_engine.domain.aggregation import aggregate, category_breakdown
from sphere_engine.domain.budget import calculate_budget_pace
from sphere_engine.domain.dashboard import EnginePolicy
from sphere_engine.domain.investments import project_growth
from sphere_engine.domain.net_worth import calculate_net_worth
from sphere_engine.domain.safe_to_spend import calculate_safe_to_spend
from sphere_engine.infrastructure.observability.metrics import calculation_counter, safe_to_spend_clamped_counter

router = APIRouter()


@router.post("/safe-to-spend", response_model=SafeToSpendResponse)
def safe_to_spend(body: SafeToSpendRequest, policy: EnginePolicy = Depends(get_engine_policy)):
    calculation_counter.labels(calculator="safe_to_spend").inc()
    result = calculate_safe_to_spend(
        [a.to_domain() for a in body.accounts],
        [t.to_domain() for t in body.transactions],
        [b.to_domain() for b in body.bills],
        body.user_buffer if body.user_buffer is not None else settings.default_user_buffer,
        horizon_days=body.horizon_days if body.horizon_days is not None else policy.horizon_days,
        today=body.as_of,
    )
    if result.is_clamped:
        safe_to_spend_clamped_counter.inc()
    return SafeToSpendResponse.model_validate(result)


@router.post("/net-worth", response_model=NetWorthResponse)
def net_worth(body: NetWorthRequest):
    calculation_counter.labels(calculator="net_worth").inc()
    result = calculate_net_worth(
        [a.to_domain() for a in body.accounts],
        [l.to_domain() for l in body.liabilities],
    )
    return NetWorthResponse.model_validate(result)


@router.post("/spending/aggregate", response_model=AggregateResponse)
def spending_aggregate(body: AggregateRequest):
    calculation_counter.labels(calculator="spending").inc()
    result = aggregate(
        [t.to_domain() for t in body.transactions],
        body.start_date,
        body.end_date,
        body.direction,
        body.granularity,
    )
    return AggregateResponse(
        total=result.total,
        by_category=result.by_category,
        by_bucket=result.by_bucket,
        transaction_count=result.transaction_count,
        categories=category_breakdown(result),
    )


@router.post("/budget/pace", response_model=BudgetPaceResponse)
def budget_pace(body: BudgetPaceRequest, policy: EnginePolicy = Depends(get_engine_policy)):
    calculation_counter.labels(calculator="budget_pace").inc()
    try:
        result = calculate_budget_pace(
            [c.to_domain() for c in body.categories],
            now=body.as_of,
            month_start=body.month_start,
            month_end=body.month_end,
            tolerance_pct=policy.pace_tolerance_pct,
            warning_threshold_pct=policy.pace_warning_threshold_pct,
            near_limit_pct=policy.near_limit_pct,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return BudgetPaceResponse.model_validate(result)


@router.post("/debts/cost-of-waiting", response_model=CostOfWaitingResponse)
def cost_of_waiting(body: CostOfWaitingRequest):
    calculation_counter.labels(calculator="cost_of_waiting").inc()
    result = debt.waiting_cost(body.balance, body.apr, body.days, body.days_until_due, body.late_fee)
    return CostOfWaitingResponse(
        balance=body.balance,
        apr=body.apr,
        days=body.days,
        daily_rate=debt.daily_rate(body.apr),
        cost=result.interest,
        late_fee=result.late_fee,
        total=result.total,
    )


@router.post("/debts/payoff", response_model=PayoffResponse)
def debt_payoff(body: PayoffRequest):
    calculation_counter.labels(calculator="payoff").inc()
    result = debt.payoff_scenarios(
        body.balance,
        body.apr,
        body.minimum_payment,
        body.custom_payment,
        max_months=settings.payoff_max_months,
    )
    return PayoffResponse.model_validate(result)


@router.post("/investments/projection", response_model=ProjectionResponse)
def investment_projection(body: ProjectionRequest):
    calculation_counter.labels(calculator="projection").inc()
    annual_return = (
        body.annual_return_pct if body.annual_return_pct is not None else settings.default_annual_return_pct
    )
    return ProjectionResponse(
        current_value=body.current_value,
        monthly_contribution=body.monthly_contribution,
        years=body.years,
        annual_return_pct=annual_return,
        future_value=project_growth(body.current_value, body.monthly_contribution, body.years, annual_return),
    )


@router.get("/categories/resolve", response_model=CategoryResponse)
def resolve_category(raw: str = ""):
    return CategoryResponse.model_validate(categories.resolve(raw))
