"""Net worth aggregation"""

from dataclasses import dataclass
from typing import Iterable
from sphere_engine.domain.models import Account, Liability, Vault


@dataclass
class NetWorth:
    assets: float
    liabilities: float
    net_worth: float  # may be negative


def calculate_net_worth(
    accounts: Iterable[Account],
    liabilities: Iterable[Liability],
    vaults: Iterable[Vault] = (),
) -> NetWorth:
    """Current balances of all accounts (plus vaults held outside them) minus all debt"""
    assets = sum(a.current_balance for a in accounts) + sum(v.balance for v in vaults)
    debt = sum(l.current_balance for l in liabilities)

    return NetWorth(assets=assets, liabilities=debt, net_worth=assets - debt)
