"""Investment growth projection and portfolio totals"""

from dataclasses import dataclass
from typing import Dict, Iterable, Sequence
from sphere_engine.domain.models import InvestmentAccount

DEFAULT_ANNUAL_RETURN_PCT = 7.0
DEFAULT_MONTHLY_CONTRIBUTION = 500.0
PROJECTION_HORIZONS = (5, 10)


def project_growth(
    current_value: float,
    monthly_contribution: float,
    years: float,
    annual_return_pct: float = DEFAULT_ANNUAL_RETURN_PCT,
) -> float:
    """
    Future value after compounding monthly and adding a contribution each month.

    Fractional years truncate to whole months; zero months returns current_value.
    """
    months = int(years * 12)
    monthly_return = annual_return_pct / 100 / 12

    value = current_value
    for _ in range(months):
        value = value * (1 + monthly_return) + monthly_contribution
    return value


@dataclass
class PortfolioSummary:
    value: float
    contributions: float

    @property
    def gain(self) -> float:
        return self.value - self.contributions

    @property
    def gain_percent(self) -> float:
        if self.contributions == 0:
            return 0.0
        return self.gain / self.contributions * 100

    @property
    def is_positive(self) -> bool:
        return self.gain >= 0


def summarize_portfolio(accounts: Iterable[InvestmentAccount]) -> PortfolioSummary:
    holdings = list(accounts)
    return PortfolioSummary(
        value=sum(a.balance for a in holdings),
        contributions=sum(a.contributions for a in holdings),
    )


def project_portfolio(
    portfolio_value: float,
    monthly_contribution: float,
    horizons: Sequence[int] = PROJECTION_HORIZONS,
    annual_return_pct: float = DEFAULT_ANNUAL_RETURN_PCT,
) -> Dict[int, float]:
    """Projected value keyed by horizon in years"""
    return {
        years: project_growth(portfolio_value, monthly_contribution, years, annual_return_pct)
        for years in horizons
    }
