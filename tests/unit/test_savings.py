"""Unit tests for round-up savings"""

import pytest
from datetime import date
from sphere_engine.domain.models import UserSettings
from sphere_engine.domain.savings import round_up_amount, total_round_ups


def test_round_up_amount():
    assert round_up_amount(-4.25) == pytest.approx(0.75)
    assert round_up_amount(-5.0) == 0.0
    assert round_up_amount(-4.25, multiplier=2) == pytest.approx(1.5)


def test_total_round_ups_disabled(sample_transactions):
    assert total_round_ups(sample_transactions, UserSettings(round_up_enabled=False)) == 0.0


def test_total_round_ups_outflows_in_window(sample_transactions, today):
    settings = UserSettings(round_up_enabled=True)
    # 12.50, 4.75, 82.75 and 150.00; the paycheck is ignored
    assert total_round_ups(sample_transactions, settings, date(2024, 3, 1), today) == pytest.approx(1.0)
    assert total_round_ups(sample_transactions, settings, today, today) == pytest.approx(0.5)
