"""Domain models - pure Python dataclasses representing financial records"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Union

# Posted dates arrive either as calendar dates or as full timestamps
Timestamp = Union[date, datetime]


class AccountType(str, Enum):
    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"
    INVESTMENT = "investment"
    LOAN = "loan"


class Direction(str, Enum):
    """Money movement relative to the user"""

    INFLOW = "INFLOW"  # income, deposits, refunds
    OUTFLOW = "OUTFLOW"  # purchases, bills, fees


class LiabilityType(str, Enum):
    CREDIT_CARD = "credit_card"
    AUTO_LOAN = "auto_loan"
    STUDENT_LOAN = "student_loan"
    MORTGAGE = "mortgage"
    PERSONAL_LOAN = "personal_loan"
    BNPL = "bnpl"
    LOAN = "loan"


class Cadence(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Account:
    """Bank account snapshot from the data source"""

    id: str
    institution: str
    type: AccountType
    available_balance: float
    current_balance: float
    currency: str = "USD"
    name: str = ""


@dataclass(frozen=True)
class Transaction:
    """Posted or pending transaction.

    `amount` is signed (negative = outflow). `direction`, when present,
    overrides the sign; see aggregation.resolve_direction.
    """

    id: str
    account_id: str
    posted_date: Timestamp
    amount: float
    merchant_name: str
    raw_category: str | None
    pending: bool = False
    direction: Direction | None = None


@dataclass(frozen=True)
class Liability:
    """Debt owed to a lender"""

    id: str
    name: str
    type: LiabilityType
    current_balance: float
    credit_limit: float | None = None
    minimum_payment: float | None = None
    due_date: Timestamp | None = None
    apr: float | None = None  # annual percentage, e.g. 24.99
    late_fee: float | None = None  # flat fee charged after the due date
    lender: str | None = None


@dataclass(frozen=True)
class RecurringCharge:
    """Recurring bill detected by the bank-linking provider"""

    id: str
    merchant: str
    cadence: Cadence
    next_date: Timestamp
    avg_amount: float
    raw_category: str | None = None


@dataclass(frozen=True)
class InvestmentAccount:
    """Investment holding; gain is always derived, never stored"""

    id: str
    name: str
    balance: float
    contributions: float  # cost basis
    institution: str = ""

    @property
    def gain(self) -> float:
        return self.balance - self.contributions

    @property
    def gain_percent(self) -> float:
        if self.contributions == 0:
            return 0.0
        return self.gain / self.contributions * 100


@dataclass(frozen=True)
class Vault:
    """Savings vault (sub-account earmarked for a goal)"""

    id: str
    name: str
    balance: float


@dataclass(frozen=True)
class UserSettings:
    """User preferences supplied by the settings store"""

    user_buffer: float = 200.0
    round_up_enabled: bool = False
    round_up_multiplier: float = 1.0


@dataclass(frozen=True)
class CategoryBudget:
    """Monthly budget line compared against actual spend"""

    name: str
    budget: float
    spent: float
