"""Safe-to-Spend calculator - money safely spendable today"""

from dataclasses import dataclass
from typing import Iterable, Sequence
from sphere_engine.domain.models import (
    Account,
    AccountType,
    RecurringCharge,
    Timestamp,
    Transaction,
    UserSettings,
    Vault,
)
from sphere_engine.domain.aggregation import is_outflow
from sphere_engine.utils.date_utils import days_until

DEFAULT_HORIZON_DAYS = 7
BUFFER_VAULT_KEYWORDS = ("buffer", "rainy day")


@dataclass
class SafeToSpendBreakdown:
    """Unclamped components, so callers can show a deficit"""

    liquid_available: float
    pending_outflows: float
    upcoming_essentials: float
    user_buffer: float

    @property
    def raw_amount(self) -> float:
        return self.liquid_available - self.pending_outflows - self.upcoming_essentials - self.user_buffer


@dataclass
class SafeToSpend:
    amount: float  # never negative
    breakdown: SafeToSpendBreakdown

    @property
    def is_clamped(self) -> bool:
        return self.breakdown.raw_amount < 0

    @property
    def shortfall(self) -> float:
        """How far commitments exceed available funds (0 when not overcommitted)"""
        return max(0.0, -self.breakdown.raw_amount)


def liquid_available(accounts: Iterable[Account]) -> float:
    """Available balance across checking accounts; savings are not 'available now'"""
    return sum(a.available_balance for a in accounts if a.type == AccountType.CHECKING)


def pending_outflows(transactions: Iterable[Transaction]) -> float:
    return sum(abs(t.amount) for t in transactions if t.pending and is_outflow(t))


def upcoming_essentials(
    bills: Iterable[RecurringCharge],
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    today: Timestamp | None = None,
) -> float:
    """Bills due within [0, horizon_days] days, both ends inclusive"""
    return sum(
        b.avg_amount
        for b in bills
        if 0 <= days_until(b.next_date, today) <= horizon_days
    )


def calculate_safe_to_spend(
    accounts: Sequence[Account],
    pending_transactions: Sequence[Transaction],
    upcoming_bills: Sequence[RecurringCharge],
    user_buffer: float,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    today: Timestamp | None = None,
) -> SafeToSpend:
    """
    amount = max(0, liquid - pending outflows - bills due soon - buffer)

    The amount is floored at zero; the breakdown keeps the raw components.
    """
    breakdown = SafeToSpendBreakdown(
        liquid_available=liquid_available(accounts),
        pending_outflows=pending_outflows(pending_transactions),
        upcoming_essentials=upcoming_essentials(upcoming_bills, horizon_days, today),
        user_buffer=user_buffer,
    )
    return SafeToSpend(amount=max(0.0, breakdown.raw_amount), breakdown=breakdown)


@dataclass
class ResolvedBuffer:
    amount: float
    is_vault_buffer: bool
    vault_name: str | None = None


def resolve_user_buffer(vaults: Iterable[Vault], user_settings: UserSettings) -> ResolvedBuffer:
    """
    A vault named like "Buffer" or "Rainy Day" supplies the buffer amount;
    otherwise the configured user buffer applies.
    """
    for vault in vaults:
        name = vault.name.lower()
        if any(keyword in name for keyword in BUFFER_VAULT_KEYWORDS):
            return ResolvedBuffer(amount=vault.balance, is_vault_buffer=True, vault_name=vault.name)

    return ResolvedBuffer(amount=user_settings.user_buffer, is_vault_buffer=False)
