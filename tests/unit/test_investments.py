"""Unit tests for investment projections"""

import pytest
from sphere_engine.domain.models import InvestmentAccount
from sphere_engine.domain.investments import (
    project_growth,
    project_portfolio,
    summarize_portfolio,
)


@pytest.mark.parametrize("value, rate", [(0.0, 7.0), (1500.0, 7.0), (25000.0, 0.0), (980.5, 12.0)])
def test_project_growth_zero_years_is_identity(value, rate):
    assert project_growth(value, 0, 0, rate) == value


def test_project_growth_compounds_monthly():
    assert project_growth(1000, 0, 1, 12) == pytest.approx(1000 * 1.01**12)


def test_project_growth_contributions_without_return():
    assert project_growth(0, 100, 1, 0) == pytest.approx(1200.0)


def test_project_growth_fractional_years_truncate_to_months():
    assert project_growth(0, 100, 0.5, 0) == pytest.approx(600.0)
    assert project_growth(0, 100, 0.99, 0) == pytest.approx(1100.0)


def test_project_growth_default_rate_grows():
    assert project_growth(10000, 200, 10) > 10000 + 200 * 120


def test_summarize_portfolio():
    summary = summarize_portfolio(
        [
            InvestmentAccount("i1", "Brokerage", balance=12000.0, contributions=10000.0),
            InvestmentAccount("i2", "Roth IRA", balance=4500.0, contributions=5000.0),
        ]
    )
    assert summary.value == pytest.approx(16500.0)
    assert summary.gain == pytest.approx(1500.0)
    assert summary.gain_percent == pytest.approx(10.0)
    assert summary.is_positive is True


def test_summarize_portfolio_empty():
    summary = summarize_portfolio([])
    assert summary.gain_percent == 0.0
    assert summary.is_positive is True


def test_investment_account_gain_is_derived():
    account = InvestmentAccount("i1", "Brokerage", balance=900.0, contributions=1000.0)
    assert account.gain == pytest.approx(-100.0)
    assert account.gain_percent == pytest.approx(-10.0)
    assert InvestmentAccount("i2", "New", balance=50.0, contributions=0.0).gain_percent == 0.0


def test_project_portfolio_horizons():
    projections = project_portfolio(10000, 100, horizons=(1, 5), annual_return_pct=0)
    assert projections == pytest.approx({1: 11200.0, 5: 16000.0})
