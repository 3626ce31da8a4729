"""
Projection configuration.
Return-estimate fallbacks live in distributions/benchmarks.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

LOOKBACK_LABELS: Dict[str, str] = {
    "30": "1 Month",
    "90": "3 Months",
    "365": "1 Year",
    "max": "All Time",
}


class DebtPolicy(str, Enum):
    """How the debt balance moves each month."""

    AMORTIZING = "amortizing"            # accrue interest, then subtract the payment
    IGNORE_PAYMENTS = "ignore_payments"  # accrue interest only; the payment goes to DCA


@dataclass(frozen=True)
class ProjectionConfig:
    max_months: int = 360
    days_per_month: int = 30

    debt_policy: DebtPolicy = DebtPolicy.IGNORE_PAYMENTS
    # only honoured under IGNORE_PAYMENTS; None means use the payoff horizon
    fixed_horizon_months: Optional[int] = None

    # reporting boundary only
    currency_decimals: int = 2
    unit_decimals: int = 4


@dataclass(frozen=True)
class SourceConfig:
    base_url: str = "https://api.coingecko.com/api/v3"
    api_key: Optional[str] = None
    vs_currency: str = "usd"
    timeout_seconds: float = 15.0
    cache_ttl_seconds: float = 300.0
    top_assets_count: int = 20

    @classmethod
    def from_env(cls) -> "SourceConfig":
        base_url = os.environ.get("COINGECKO_BASE_URL", cls.base_url)
        ttl = os.environ.get("PRICE_CACHE_TTL_SECONDS")
        return cls(
            base_url=base_url.rstrip("/"),
            api_key=os.environ.get("COINGECKO_API_KEY") or None,
            cache_ttl_seconds=float(ttl) if ttl else cls.cache_ttl_seconds,
        )


def lookback_days(window: str) -> int:
    """Days of history requested for a lookback window ("max" is capped at one year)."""
    if window == "max":
        return 365
    if window not in LOOKBACK_LABELS:
        raise ValueError(
            f"Unknown lookback window '{window}'. "
            f"Available: {list(LOOKBACK_LABELS.keys())}"
        )
    return int(window)
