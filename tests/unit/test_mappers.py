"""Unit tests for raw record mapping"""

import pytest
from datetime import date
from sphere_engine.domain.exceptions import InvalidRecordError
from sphere_engine.domain.models import AccountType, Cadence, Direction, LiabilityType
from sphere_engine.infrastructure.mappers import (
    map_account,
    map_investment_account,
    map_liability,
    map_recurring_charge,
    map_transaction,
    map_user_settings,
    map_vault,
    parse_local_date,
)


def test_parse_local_date_ignores_time_part():
    assert parse_local_date("2024-03-13T23:30:00Z") == date(2024, 3, 13)
    assert parse_local_date("2024-03-13") == date(2024, 3, 13)


@pytest.mark.parametrize(
    "plaid_type, subtype, expected",
    [
        ("depository", "checking", AccountType.CHECKING),
        ("depository", "savings", AccountType.SAVINGS),
        ("depository", None, AccountType.CHECKING),
        ("credit", "credit card", AccountType.CREDIT),
        ("investment", "401k", AccountType.INVESTMENT),
        ("loan", "student", AccountType.LOAN),
        (None, None, AccountType.CHECKING),
    ],
)
def test_map_account_type(plaid_type, subtype, expected):
    row = {"id": "a1", "type": plaid_type, "subtype": subtype, "available_balance": 10, "current_balance": 12}
    assert map_account(row).type is expected


def test_map_account_fields():
    account = map_account(
        {
            "id": "a1",
            "name": "Everyday Checking",
            "type": "depository",
            "subtype": "checking",
            "available_balance": "4250.32",
            "current_balance": None,
            "plaid_items": {"institution_name": "Chase"},
        }
    )
    assert account.institution == "Chase"
    assert account.available_balance == pytest.approx(4250.32)
    assert account.current_balance == 0.0
    assert account.currency == "USD"


def test_map_account_missing_id():
    with pytest.raises(InvalidRecordError):
        map_account({"type": "depository"})


def test_map_transaction_normalizes_direction():
    txn = map_transaction(
        {
            "id": "t1",
            "account_id": "a1",
            "date": "2024-03-13",
            "amount": -12.5,
            "merchant_name": None,
            "name": "BLUE BOTTLE #12",
            "category": ["COFFEE", "Coffee Shop"],
        }
    )
    assert txn.direction is Direction.OUTFLOW
    assert txn.merchant_name == "BLUE BOTTLE #12"
    assert txn.raw_category == "COFFEE"
    assert txn.pending is False


def test_map_transaction_explicit_direction_and_primary_category():
    txn = map_transaction(
        {
            "id": "t2",
            "account_id": "a1",
            "date": "2024-03-13T08:00:00",
            "amount": 20,
            "direction": "OUTFLOW",
            "primary_category": "FOOD_AND_DRINK",
            "category": ["Restaurants"],
            "pending": True,
        }
    )
    assert txn.direction is Direction.OUTFLOW
    assert txn.raw_category == "FOOD_AND_DRINK"
    assert txn.pending is True


def test_map_transaction_bad_amount():
    with pytest.raises(InvalidRecordError):
        map_transaction({"id": "t", "account_id": "a", "date": "2024-03-13", "amount": "n/a"})


def test_map_liability():
    liability = map_liability(
        {
            "id": "l1",
            "name": "Sapphire",
            "type": "credit_card",
            "current_balance": "2340.50",
            "credit_limit": 5000,
            "due_date": "2024-03-15",
            "apr": 24.99,
        }
    )
    assert liability.type is LiabilityType.CREDIT_CARD
    assert liability.due_date == date(2024, 3, 15)
    assert liability.minimum_payment is None


def test_map_liability_unknown_type():
    with pytest.raises(InvalidRecordError):
        map_liability({"id": "l1", "name": "X", "type": "payday", "current_balance": 1})


def test_map_recurring_charge():
    bill = map_recurring_charge(
        {
            "id": "r1",
            "merchant_name": "Comcast",
            "frequency": "annually",
            "next_expected_date": "2024-03-16",
            "average_amount": 145,
            "category": ["RENT_AND_UTILITIES"],
        }
    )
    assert bill.cadence is Cadence.YEARLY
    assert bill.next_date == date(2024, 3, 16)
    assert bill.avg_amount == 145.0
    assert bill.raw_category == "RENT_AND_UTILITIES"


def test_map_recurring_charge_without_next_date_is_due_today():
    bill = map_recurring_charge({"id": "r1", "description": "Gym", "last_amount": 30}, today=date(2024, 3, 13))
    assert bill.next_date == date(2024, 3, 13)
    assert bill.cadence is Cadence.MONTHLY
    assert bill.merchant == "Gym"


def test_map_investment_account_requires_cost_basis():
    row = {"id": "i1", "name": "Brokerage", "current_balance": 11000}
    with pytest.raises(InvalidRecordError):
        map_investment_account(row)

    account = map_investment_account({**row, "cost_basis": 10000})
    assert account.gain == pytest.approx(1000.0)


def test_map_vault():
    assert map_vault({"id": "v1", "name": "Buffer", "balance": "350"}).balance == 350.0


def test_map_user_settings():
    settings = map_user_settings({"default_buffer_amount": 150, "round_up_enabled": True})
    assert settings.user_buffer == 150.0
    assert settings.round_up_enabled is True
    assert settings.round_up_multiplier == 1.0

    assert map_user_settings({}, default_buffer=200.0).user_buffer == 200.0
