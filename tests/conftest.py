"""Pytest configuration and shared fixtures."""

from typing import Any, Dict

import pytest

from core.config import DebtPolicy
from distributions.historical import ReturnStats
from engine.projection import project


@pytest.fixture
def sample_inputs() -> Dict[str, Any]:
    """Debt scenario where the payment comfortably beats the interest."""
    return {
        "debt_principal": 10000.0,
        "annual_rate_percent": 20.0,
        "monthly_payment": 200.0,
        "start_price": 100.0,
    }


@pytest.fixture
def historical_stats() -> ReturnStats:
    return ReturnStats(mean_daily_return=0.002, daily_volatility=0.05, source="historical", n_observations=89)


@pytest.fixture
def flat_price_result():
    """12 months, flat price (no growth), debt only accrues: never crosses over."""
    return project(10000.0, 20.0, 200.0, 100.0, 12, 0.0, debt_policy=DebtPolicy.IGNORE_PAYMENTS)


@pytest.fixture
def sample_price_pairs():
    """[timestamp_ms, price] pairs as returned by the market-chart endpoint."""
    day_ms = 86_400_000
    start = 1_700_000_000_000
    return [[start + i * day_ms, p] for i, p in enumerate([100.0, 110.0, 99.0, 104.0, 108.0])]
