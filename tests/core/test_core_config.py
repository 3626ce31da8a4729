"""Tests for configuration helpers"""

import pandas as pd
import pytest

from core.config import LOOKBACK_LABELS, DebtPolicy, ProjectionConfig, SourceConfig, lookback_days
from core.utils import annualize_daily_return, daily_to_monthly_growth, month_dates, round_half_away


class TestLookbackDays:

    @pytest.mark.parametrize("window,days", [("30", 30), ("90", 90), ("365", 365), ("max", 365)])
    def test_known_windows(self, window, days):
        assert lookback_days(window) == days

    def test_unknown_window_rejected(self):
        with pytest.raises(ValueError, match="Unknown lookback window"):
            lookback_days("7")

    def test_labels_cover_all_windows(self):
        assert LOOKBACK_LABELS["max"] == "All Time"
        assert set(LOOKBACK_LABELS) == {"30", "90", "365", "max"}


class TestProjectionConfig:

    def test_defaults(self):
        cfg = ProjectionConfig()
        assert cfg.max_months == 360
        assert cfg.days_per_month == 30
        assert cfg.debt_policy is DebtPolicy.IGNORE_PAYMENTS
        assert cfg.fixed_horizon_months is None

    def test_debt_policy_from_string(self):
        assert DebtPolicy("amortizing") is DebtPolicy.AMORTIZING


class TestSourceConfig:

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("COINGECKO_API_KEY", "secret")
        monkeypatch.setenv("COINGECKO_BASE_URL", "https://example.test/api/")
        monkeypatch.setenv("PRICE_CACHE_TTL_SECONDS", "60")
        cfg = SourceConfig.from_env()
        assert cfg.api_key == "secret"
        assert cfg.base_url == "https://example.test/api"
        assert cfg.cache_ttl_seconds == 60.0

    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("COINGECKO_API_KEY", raising=False)
        monkeypatch.delenv("COINGECKO_BASE_URL", raising=False)
        monkeypatch.delenv("PRICE_CACHE_TTL_SECONDS", raising=False)
        cfg = SourceConfig.from_env()
        assert cfg.api_key is None
        assert cfg.cache_ttl_seconds == 300.0


class TestUtils:

    def test_monthly_growth_compounds_thirty_days(self):
        assert daily_to_monthly_growth(0.002) == pytest.approx(1.002 ** 30 - 1, rel=1e-12)
        assert daily_to_monthly_growth(0.0) == 0.0

    def test_annualize(self):
        assert annualize_daily_return(0.001) == pytest.approx(1.001 ** 365 - 1, rel=1e-12)

    def test_round_half_away_from_zero(self):
        assert round_half_away(0.125, 2) == pytest.approx(0.13)
        assert round_half_away(-2.5, 0) == -3.0
        assert round_half_away(1.23456, 4) == pytest.approx(1.2346)

    def test_month_dates(self):
        dates = month_dates(pd.Timestamp("2024-01-31"), 3)
        assert dates == [pd.Timestamp("2024-02-29"), pd.Timestamp("2024-03-31"), pd.Timestamp("2024-04-30")]
        assert month_dates(None, 0) == []
