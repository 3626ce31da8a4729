"""Tests for the historical return estimator and its fallbacks"""

import math

import numpy as np
import pandas as pd
import pytest

from core.errors import InsufficientData, InvalidPriceData
from distributions.benchmarks import (
    FALLBACK_DAILY_VOLATILITY,
    FALLBACK_MEAN_DAILY_RETURN,
    fallback_return_stats,
    get_fallback_tier,
)
from distributions.historical import ReturnStats, estimate_returns, estimate_returns_or_fallback


class TestEstimateReturns:

    def test_symmetric_moves(self):
        """+10% then -10%: mean zero, population volatility 0.1"""
        stats = estimate_returns([100, 110, 99])
        assert stats.mean_daily_return == pytest.approx(0.0, abs=1e-12)
        assert stats.daily_volatility == pytest.approx(0.1, rel=1e-9)
        assert stats.source == "historical"
        assert stats.n_observations == 2

    def test_population_not_sample_std(self):
        prices = [100.0, 102.0, 101.0, 105.0, 103.0]
        returns = np.diff(prices) / np.array(prices[:-1])
        stats = estimate_returns(prices)
        assert stats.mean_daily_return == pytest.approx(returns.mean())
        assert stats.daily_volatility == pytest.approx(returns.std(ddof=0))
        assert stats.daily_volatility != pytest.approx(returns.std(ddof=1))

    def test_constant_prices(self):
        stats = estimate_returns([50.0] * 10)
        assert stats.mean_daily_return == 0.0
        assert stats.daily_volatility == 0.0

    def test_accepts_series_and_generators(self):
        s = pd.Series([100.0, 110.0, 121.0])
        assert estimate_returns(s).mean_daily_return == pytest.approx(0.1)
        assert estimate_returns(p for p in [100.0, 110.0, 121.0]).mean_daily_return == pytest.approx(0.1)

    @pytest.mark.parametrize("prices", [[], [100.0]])
    def test_insufficient_data(self, prices):
        with pytest.raises(InsufficientData):
            estimate_returns(prices)

    @pytest.mark.parametrize("prices", [
        [100.0, 0.0, 50.0],
        [100.0, -5.0],
        [100.0, float("nan"), 101.0],
        [100.0, float("inf")],
        ["abc", "def"],
    ])
    def test_invalid_prices_rejected(self, prices):
        with pytest.raises(InvalidPriceData):
            estimate_returns(prices)

    def test_annualized_and_monthly(self):
        stats = ReturnStats(mean_daily_return=0.001, daily_volatility=0.02)
        assert stats.annualized_return == pytest.approx(1.001 ** 365 - 1)
        assert stats.monthly_growth_rate() == pytest.approx(1.001 ** 30 - 1)
        assert not stats.is_fallback


class TestFallback:

    def test_fixed_fallback(self):
        stats = fallback_return_stats()
        assert stats.mean_daily_return == FALLBACK_MEAN_DAILY_RETURN == 0.002
        assert stats.daily_volatility == FALLBACK_DAILY_VOLATILITY == 0.05
        assert stats.is_fallback

    @pytest.mark.parametrize("market_cap,tier", [
        (500e9, "large_cap"),
        (100e9, "large_cap"),
        (50e9, "mid_cap"),
        (1e6, "small_cap"),
        (0.0, "small_cap"),
    ])
    def test_market_cap_tiers(self, market_cap, tier):
        assert get_fallback_tier(market_cap).name == tier

    def test_larger_assets_get_more_conservative_figures(self):
        large = fallback_return_stats(market_cap=1e12)
        small = fallback_return_stats(market_cap=1e6)
        assert large.mean_daily_return < small.mean_daily_return
        assert large.daily_volatility < small.daily_volatility
        assert large.is_fallback and small.is_fallback

    def test_unusable_market_cap_uses_fixed(self):
        assert fallback_return_stats(market_cap=math.nan).mean_daily_return == 0.002
        assert fallback_return_stats(market_cap=-1.0).mean_daily_return == 0.002

    def test_estimate_or_fallback_on_short_history(self):
        stats = estimate_returns_or_fallback([100.0])
        assert stats.is_fallback
        assert stats.mean_daily_return == 0.002

    def test_estimate_or_fallback_on_bad_prices(self):
        stats = estimate_returns_or_fallback([100.0, 0.0, 100.0], market_cap=200e9)
        assert stats.is_fallback
        assert stats.mean_daily_return == 0.001

    def test_estimate_or_fallback_on_missing_history(self):
        assert estimate_returns_or_fallback(None).is_fallback

    def test_estimate_or_fallback_passes_good_history(self):
        stats = estimate_returns_or_fallback([100, 110, 99])
        assert stats.source == "historical"
