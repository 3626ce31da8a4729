"""
Distributions package: estimate the return statistics that drive the price path.

  1. historical.py: mean daily return and volatility from price history
  2. benchmarks.py: fallback figures when history is missing or unusable
"""

from .historical import ReturnStats, estimate_returns, estimate_returns_or_fallback
from .benchmarks import (
    FALLBACK_MEAN_DAILY_RETURN,
    FALLBACK_DAILY_VOLATILITY,
    fallback_return_stats,
    get_fallback_tier,
)

__all__ = [
    "ReturnStats",
    "estimate_returns",
    "estimate_returns_or_fallback",
    "FALLBACK_MEAN_DAILY_RETURN",
    "FALLBACK_DAILY_VOLATILITY",
    "fallback_return_stats",
    "get_fallback_tier",
]
