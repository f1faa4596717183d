"""Round-up savings"""

import math
from typing import Iterable
from sphere_engine.domain.models import Direction, Timestamp, Transaction, UserSettings
from sphere_engine.domain.aggregation import filter_window


def round_up_amount(amount: float, multiplier: float = 1.0) -> float:
    """Spare change to the next whole dollar, scaled by `multiplier`"""
    spent = abs(amount)
    return (math.ceil(spent) - spent) * multiplier


def total_round_ups(
    transactions: Iterable[Transaction],
    user_settings: UserSettings,
    start_date: Timestamp | None = None,
    end_date: Timestamp | None = None,
) -> float:
    """Round-ups over outflows in the window; 0 when round-ups are off"""
    if not user_settings.round_up_enabled:
        return 0.0

    return sum(
        round_up_amount(t.amount, user_settings.round_up_multiplier)
        for t in filter_window(transactions, start_date, end_date, Direction.OUTFLOW)
    )
