"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from sphere_engine.api.main import create_app
from sphere_engine.domain.models import (
    Account,
    AccountType,
    Cadence,
    Liability,
    LiabilityType,
    RecurringCharge,
    Transaction,
)

# Wednesday; week runs Mon 2024-03-11 .. Sun 2024-03-17
TODAY = date(2024, 3, 13)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_accounts() -> list[Account]:
    return [
        Account(
            id="acc_checking",
            institution="Chase",
            type=AccountType.CHECKING,
            available_balance=4250.32,
            current_balance=4300.00,
        ),
        Account(
            id="acc_savings",
            institution="Ally",
            type=AccountType.SAVINGS,
            available_balance=12000.00,
            current_balance=12000.00,
        ),
    ]


@pytest.fixture
def sample_bills() -> list[RecurringCharge]:
    return [
        RecurringCharge(
            id="bill_internet",
            merchant="Comcast",
            cadence=Cadence.MONTHLY,
            next_date=TODAY + timedelta(days=3),
            avg_amount=145.00,
        ),
        RecurringCharge(
            id="bill_rent",
            merchant="Landlord",
            cadence=Cadence.MONTHLY,
            next_date=TODAY + timedelta(days=18),
            avg_amount=1800.00,
        ),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Spending this week and last week, plus a paycheck"""
    return [
        Transaction("t1", "acc_checking", TODAY, -12.50, "Blue Bottle", "COFFEE"),
        Transaction("t2", "acc_checking", TODAY - timedelta(days=1), -4.75, "Blue Bottle", "COFFEE"),
        Transaction("t3", "acc_checking", TODAY - timedelta(days=2), -82.75, "Whole Foods", "GROCERIES"),
        Transaction("t4", "acc_checking", TODAY - timedelta(days=8), -150.00, "Shell", "GAS"),
        Transaction("t5", "acc_checking", TODAY - timedelta(days=9), 2500.00, "Employer", "INCOME"),
    ]


@pytest.fixture
def sample_liabilities() -> list[Liability]:
    return [
        Liability(
            id="liab_visa",
            name="Sapphire",
            type=LiabilityType.CREDIT_CARD,
            current_balance=2340.50,
            credit_limit=5000.00,
            minimum_payment=35.00,
            due_date=TODAY + timedelta(days=2),
            apr=24.99,
        ),
        Liability(
            id="liab_auto",
            name="Auto Loan",
            type=LiabilityType.AUTO_LOAN,
            current_balance=14500.00,
            minimum_payment=320.00,
            due_date=TODAY + timedelta(days=20),
            apr=6.5,
        ),
    ]
