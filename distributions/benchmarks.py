"""
Fallback return statistics for assets without usable price history.

Used when the historical price source fails or returns fewer than 2 points.
The projection still runs, but ReturnStats.source == "fallback" marks it as
a degraded-confidence estimate.

Two flavours:
  - Fixed:       0.2% mean daily return, 5% daily volatility
  - Market cap:  tiered figures, more conservative for larger assets
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional

from .historical import ReturnStats

FALLBACK_MEAN_DAILY_RETURN = 0.002
FALLBACK_DAILY_VOLATILITY = 0.05


@dataclass(frozen=True)
class FallbackTier:
    """Fallback return figures for assets above a market-cap floor (USD)."""
    name: str
    min_market_cap: float
    mean_daily_return: float
    daily_volatility: float


# Ordered largest floor first; the first tier whose floor the market cap meets wins.
MARKET_CAP_TIERS: Dict[str, FallbackTier] = {
    "large_cap": FallbackTier(
        name="large_cap",
        min_market_cap=100e9,
        mean_daily_return=0.001,
        daily_volatility=0.03,
    ),
    "mid_cap": FallbackTier(
        name="mid_cap",
        min_market_cap=10e9,
        mean_daily_return=0.0015,
        daily_volatility=0.04,
    ),
    "small_cap": FallbackTier(
        name="small_cap",
        min_market_cap=0.0,
        mean_daily_return=FALLBACK_MEAN_DAILY_RETURN,
        daily_volatility=FALLBACK_DAILY_VOLATILITY,
    ),
}


def get_fallback_tier(market_cap: float) -> FallbackTier:
    if market_cap < 0:
        raise ValueError(f"market_cap must be non-negative, got {market_cap}")
    for tier in MARKET_CAP_TIERS.values():
        if market_cap >= tier.min_market_cap:
            return tier
    return MARKET_CAP_TIERS["small_cap"]


def fallback_return_stats(market_cap: Optional[float] = None) -> ReturnStats:
    """
    Return the fallback ReturnStats.

    Parameters
    ----------
    market_cap : float, optional
        Asset market capitalisation in USD. If omitted (or not a usable
        number), the fixed 0.002 / 0.05 constants are returned.
    """
    if market_cap is None or math.isnan(market_cap) or market_cap < 0:
        return ReturnStats(
            mean_daily_return=FALLBACK_MEAN_DAILY_RETURN,
            daily_volatility=FALLBACK_DAILY_VOLATILITY,
            source="fallback",
            n_observations=0,
        )

    tier = get_fallback_tier(float(market_cap))
    return ReturnStats(
        mean_daily_return=tier.mean_daily_return,
        daily_volatility=tier.daily_volatility,
        source="fallback",
        n_observations=0,
    )
