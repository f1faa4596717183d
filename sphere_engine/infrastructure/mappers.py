"""Map raw Sphere API rows to domain records

Direction is normalized here, once, so every calculator sees the same rule.
"""

from datetime import date
from typing import Any, Dict
from sphere_engine.domain.models import (
    Account,
    AccountType,
    Cadence,
    InvestmentAccount,
    Liability,
    LiabilityType,
    RecurringCharge,
    Transaction,
    UserSettings,
    Vault,
)
from sphere_engine.domain.aggregation import normalize_transaction
from sphere_engine.domain.exceptions import InvalidRecordError

Row = Dict[str, Any]

# Plaid account type/subtype -> account type; a known subtype refines the type
ACCOUNT_TYPE_MAP = {
    "depository": AccountType.CHECKING,
    "credit": AccountType.CREDIT,
    "loan": AccountType.LOAN,
    "investment": AccountType.INVESTMENT,
}

ACCOUNT_SUBTYPE_MAP = {
    "checking": AccountType.CHECKING,
    "cash_management": AccountType.CHECKING,
    "cash management": AccountType.CHECKING,
    "savings": AccountType.SAVINGS,
    "credit card": AccountType.CREDIT,
    "brokerage": AccountType.INVESTMENT,
}

CADENCE_MAP = {
    "WEEKLY": Cadence.WEEKLY,
    "BIWEEKLY": Cadence.BIWEEKLY,
    "MONTHLY": Cadence.MONTHLY,
    "YEARLY": Cadence.YEARLY,
    "ANNUALLY": Cadence.YEARLY,
}


def parse_local_date(value: str) -> date:
    """Parse the YYYY-MM-DD prefix as a local calendar date, ignoring any time part"""
    return date.fromisoformat(value.split("T")[0])


def _optional_date(value: str | None) -> date | None:
    return parse_local_date(value) if value else None


def _optional_float(value: Any) -> float | None:
    return float(value) if value is not None else None


def map_account(row: Row) -> Account:
    try:
        account_type = AccountType.CHECKING
        if row.get("type"):
            account_type = ACCOUNT_TYPE_MAP.get(row["type"], account_type)
        # Plaid reports savings as "depository", so the subtype decides
        if row.get("subtype"):
            account_type = ACCOUNT_SUBTYPE_MAP.get(row["subtype"], account_type)

        institution = (row.get("plaid_items") or {}).get("institution_name") or "Unknown"

        return Account(
            id=row["id"],
            institution=institution,
            type=account_type,
            available_balance=float(row.get("available_balance") or 0),
            current_balance=float(row.get("current_balance") or 0),
            currency=row.get("currency") or "USD",
            name=row.get("name") or "",
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRecordError(f"Invalid account record: {e}") from e


def map_transaction(row: Row) -> Transaction:
    try:
        categories = row.get("category") or []
        txn = Transaction(
            id=row["id"],
            account_id=row["account_id"],
            posted_date=parse_local_date(row["date"]),
            amount=float(row["amount"]),
            merchant_name=row.get("merchant_name") or row.get("name") or "Unknown",
            raw_category=row.get("primary_category") or (categories[0] if categories else None),
            pending=bool(row.get("pending", False)),
            direction=row.get("direction"),
        )
        return normalize_transaction(txn)
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRecordError(f"Invalid transaction record: {e}") from e


def map_liability(row: Row) -> Liability:
    try:
        return Liability(
            id=row["id"],
            name=row["name"],
            type=LiabilityType(row["type"]),
            current_balance=float(row["current_balance"]),
            credit_limit=_optional_float(row.get("credit_limit")),
            minimum_payment=_optional_float(row.get("minimum_payment")),
            due_date=_optional_date(row.get("due_date")),
            apr=_optional_float(row.get("apr")),
            late_fee=_optional_float(row.get("late_fee")),
            lender=row.get("lender"),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRecordError(f"Invalid liability record: {e}") from e


def map_recurring_charge(row: Row, today: date | None = None) -> RecurringCharge:
    """Missing next date means 'expected today', as the bank-linking feed reports it"""
    try:
        categories = row.get("category") or []
        next_date = _optional_date(row.get("next_expected_date")) or today or date.today()
        return RecurringCharge(
            id=row["id"],
            merchant=row.get("merchant_name") or row.get("description") or "Unknown",
            cadence=CADENCE_MAP.get((row.get("frequency") or "MONTHLY").upper(), Cadence.MONTHLY),
            next_date=next_date,
            avg_amount=float(row.get("average_amount") or row.get("last_amount") or 0),
            raw_category=categories[0] if categories else None,
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRecordError(f"Invalid recurring transaction record: {e}") from e


def map_investment_account(row: Row) -> InvestmentAccount:
    """Cost basis is required; it is never estimated from the balance"""
    try:
        contributions = row.get("contributions", row.get("cost_basis"))
        if contributions is None:
            raise KeyError("contributions")
        return InvestmentAccount(
            id=row["id"],
            name=row.get("name") or "",
            balance=float(row.get("current_balance", row.get("balance"))),
            contributions=float(contributions),
            institution=(row.get("plaid_items") or {}).get("institution_name") or "",
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRecordError(f"Invalid investment record: {e}") from e


def map_vault(row: Row) -> Vault:
    try:
        return Vault(id=row["id"], name=row["name"], balance=float(row.get("balance") or 0))
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRecordError(f"Invalid vault record: {e}") from e


def map_user_settings(profile: Row, default_buffer: float = 200.0) -> UserSettings:
    try:
        buffer = profile.get("default_buffer_amount")
        return UserSettings(
            user_buffer=float(buffer) if buffer is not None else default_buffer,
            round_up_enabled=bool(profile.get("round_up_enabled", False)),
            round_up_multiplier=float(profile.get("round_up_multiplier") or 1),
        )
    except (ValueError, TypeError) as e:
        raise InvalidRecordError(f"Invalid profile record: {e}") from e
