"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from sphere_engine.domain.budget import PaceStatus
from sphere_engine.domain.dashboard import FinancialSnapshot
from sphere_engine.domain.debt import UrgencyLevel
from sphere_engine.domain.models import (
    Account,
    AccountType,
    Cadence,
    CategoryBudget,
    Direction,
    InvestmentAccount,
    Liability,
    LiabilityType,
    RecurringCharge,
    Transaction,
    UserSettings,
    Vault,
)


class DomainSchema(BaseModel):
    """Schemas that read straight from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


class AccountSchema(DomainSchema):
    id: str
    institution: str = "Unknown"
    type: AccountType
    available_balance: float = 0.0
    current_balance: float = 0.0
    currency: str = "USD"
    name: str = ""

    def to_domain(self) -> Account:
        return Account(**self.model_dump())


class TransactionSchema(DomainSchema):
    id: str
    account_id: str
    posted_date: date | datetime
    amount: float = Field(..., description="Signed amount, negative = outflow")
    merchant_name: str = "Unknown"
    raw_category: Optional[str] = None
    pending: bool = False
    direction: Optional[Direction] = None

    def to_domain(self) -> Transaction:
        return Transaction(**self.model_dump())


class LiabilitySchema(DomainSchema):
    id: str
    name: str
    type: LiabilityType
    current_balance: float
    credit_limit: Optional[float] = None
    minimum_payment: Optional[float] = None
    due_date: date | datetime | None = None
    apr: Optional[float] = Field(None, description="Annual percentage rate, e.g. 24.99")
    late_fee: Optional[float] = None
    lender: Optional[str] = None

    def to_domain(self) -> Liability:
        return Liability(**self.model_dump())


class RecurringChargeSchema(DomainSchema):
    id: str
    merchant: str
    cadence: Cadence = Cadence.MONTHLY
    next_date: date | datetime
    avg_amount: float
    raw_category: Optional[str] = None

    def to_domain(self) -> RecurringCharge:
        return RecurringCharge(**self.model_dump())


class InvestmentAccountSchema(DomainSchema):
    id: str
    name: str
    balance: float
    contributions: float
    institution: str = ""

    def to_domain(self) -> InvestmentAccount:
        return InvestmentAccount(**self.model_dump())


class VaultSchema(DomainSchema):
    id: str
    name: str
    balance: float = 0.0

    def to_domain(self) -> Vault:
        return Vault(**self.model_dump())


class UserSettingsSchema(DomainSchema):
    user_buffer: float = 200.0
    round_up_enabled: bool = False
    round_up_multiplier: float = 1.0

    def to_domain(self) -> UserSettings:
        return UserSettings(**self.model_dump())


class CategoryBudgetSchema(DomainSchema):
    name: str
    budget: float = Field(..., ge=0)
    spent: float = Field(..., ge=0)

    def to_domain(self) -> CategoryBudget:
        return CategoryBudget(**self.model_dump())


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class SnapshotRequest(BaseModel):
    """Request body for POST /v1/dashboard"""

    accounts: List[AccountSchema] = []
    transactions: List[TransactionSchema] = []
    liabilities: List[LiabilitySchema] = []
    bills: List[RecurringChargeSchema] = []
    investments: List[InvestmentAccountSchema] = []
    vaults: List[VaultSchema] = []
    settings: UserSettingsSchema = UserSettingsSchema()
    budgets: Dict[str, float] = Field(default_factory=dict, description="Monthly budget per display category")
    as_of: Optional[date] = None

    def to_snapshot(self) -> FinancialSnapshot:
        return FinancialSnapshot(
            accounts=[a.to_domain() for a in self.accounts],
            transactions=[t.to_domain() for t in self.transactions],
            liabilities=[l.to_domain() for l in self.liabilities],
            bills=[b.to_domain() for b in self.bills],
            investments=[i.to_domain() for i in self.investments],
            vaults=[v.to_domain() for v in self.vaults],
            settings=self.settings.to_domain(),
            budgets=dict(self.budgets),
        )


class SafeToSpendRequest(BaseModel):
    accounts: List[AccountSchema] = []
    transactions: List[TransactionSchema] = []
    bills: List[RecurringChargeSchema] = []
    user_buffer: Optional[float] = Field(None, description="Defaults to the configured buffer")
    horizon_days: Optional[int] = Field(None, ge=0)
    as_of: Optional[date] = None


class NetWorthRequest(BaseModel):
    accounts: List[AccountSchema] = []
    liabilities: List[LiabilitySchema] = []


class AggregateRequest(BaseModel):
    transactions: List[TransactionSchema] = []
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    direction: Direction = Direction.OUTFLOW
    granularity: Literal["day", "week", "month"] = "day"


class BudgetPaceRequest(BaseModel):
    categories: List[CategoryBudgetSchema]
    as_of: Optional[date] = None
    month_start: Optional[date] = None
    month_end: Optional[date] = None

    @model_validator(mode="after")
    def validate_month_window(self) -> "BudgetPaceRequest":
        if self.month_start and self.month_end and self.month_end < self.month_start:
            raise ValueError("month_end must not be before month_start")
        return self


class CostOfWaitingRequest(BaseModel):
    balance: float = Field(..., ge=0)
    apr: float = Field(..., ge=0, description="Annual percentage rate")
    days: int = Field(7, ge=0)
    days_until_due: Optional[int] = Field(None, description="Negative when already overdue")
    late_fee: Optional[float] = Field(None, ge=0)


class PayoffRequest(BaseModel):
    balance: float = Field(..., ge=0)
    apr: float = Field(..., ge=0)
    minimum_payment: float = Field(..., gt=0)
    custom_payment: Optional[float] = Field(None, gt=0)


class ProjectionRequest(BaseModel):
    current_value: float = Field(..., ge=0)
    monthly_contribution: float = 0.0
    years: float = Field(..., ge=0)
    annual_return_pct: Optional[float] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class CategoryResponse(DomainSchema):
    display_name: str
    color: str


class SafeToSpendBreakdownSchema(DomainSchema):
    liquid_available: float
    pending_outflows: float
    upcoming_essentials: float
    user_buffer: float
    raw_amount: float


class SafeToSpendResponse(DomainSchema):
    amount: float
    is_clamped: bool
    shortfall: float
    breakdown: SafeToSpendBreakdownSchema


class BufferSchema(DomainSchema):
    amount: float
    is_vault_buffer: bool
    vault_name: Optional[str] = None


class NetWorthResponse(DomainSchema):
    assets: float
    liabilities: float
    net_worth: float


class CategoryShareSchema(DomainSchema):
    name: str
    amount: float
    share: float
    color: str


class DailySpendPointSchema(DomainSchema):
    day: date
    daily: float
    cumulative: float


class SpendingAggregateSchema(DomainSchema):
    total: float
    by_category: Dict[str, float]
    by_bucket: Dict[str, float]
    transaction_count: int


class AggregateResponse(SpendingAggregateSchema):
    categories: List[CategoryShareSchema]


class CategoryProgressSchema(DomainSchema):
    name: str
    budget: float
    spent: float
    progress: float
    is_over_budget: bool
    is_near_limit: bool
    remaining: float


class BudgetPaceResponse(DomainSchema):
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
    days_remaining: int
    categories: List[CategoryProgressSchema]


class CostOfWaitingResponse(BaseModel):
    balance: float
    apr: float
    days: int
    daily_rate: float
    cost: float
    late_fee: float
    total: float


class UrgencySchema(DomainSchema):
    level: UrgencyLevel
    label: str
    color: str


class WaitingCostSchema(DomainSchema):
    interest: float
    late_fee: float
    total: float


class DebtTypeShareSchema(DomainSchema):
    type: LiabilityType
    amount: float
    share: float


class DebtSnapshotSchema(DomainSchema):
    liability: LiabilitySchema
    days_until_due: Optional[int]
    urgency: UrgencySchema
    utilization_percent: Optional[float]
    is_high_utilization: bool
    cost_of_waiting_7_days: Optional[WaitingCostSchema]
    cost_of_waiting_30_days: Optional[WaitingCostSchema]
    recommended_payment: float


class PayoffProjectionSchema(DomainSchema):
    monthly_payment: float
    months: Optional[int]
    total_interest: Optional[float]
    pays_off: bool


class PayoffResponse(DomainSchema):
    minimum: PayoffProjectionSchema
    double: PayoffProjectionSchema
    custom: PayoffProjectionSchema
    interest_saved: Optional[float]
    months_saved: Optional[int]


class ProjectionResponse(BaseModel):
    current_value: float
    monthly_contribution: float
    years: float
    annual_return_pct: float
    future_value: float


class BillsSummarySchema(DomainSchema):
    total_upcoming: float
    total_monthly: float
    due_soon: List[RecurringChargeSchema]
    later: List[RecurringChargeSchema]
    overdue: List[RecurringChargeSchema]


class MerchantPatternSchema(DomainSchema):
    merchant: str
    count: int
    total: float


class WeeklyReflectionSchema(DomainSchema):
    week_start: date
    week_end: date
    this_week_total: float
    last_week_total: float
    percent_change: float
    is_lower_than_last_week: bool
    top_categories: List[CategoryShareSchema]
    repeated_merchants: List[MerchantPatternSchema]
    largest_transactions: List[TransactionSchema]


class PortfolioSchema(DomainSchema):
    value: float
    contributions: float
    gain: float
    gain_percent: float
    is_positive: bool


class DashboardResponse(DomainSchema):
    """Response for /v1/dashboard"""

    as_of: date
    safe_to_spend: SafeToSpendResponse
    buffer: BufferSchema
    net_worth: NetWorthResponse
    month_spending: SpendingAggregateSchema
    month_categories: List[CategoryShareSchema]
    spending_trend: List[DailySpendPointSchema]
    spending_trend_pct: float
    budget_pace: Optional[BudgetPaceResponse]
    debts: List[DebtSnapshotSchema]
    debt_breakdown: List[DebtTypeShareSchema]
    bills: BillsSummarySchema
    weekly: WeeklyReflectionSchema
    portfolio: PortfolioSchema
    portfolio_projection: Dict[int, float]
    round_ups_this_month: float
