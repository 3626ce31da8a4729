"""
Estimate mean daily return and volatility from an asset's price history.

Input:  Chronological prices (one per sample, typically daily closes)
Output: ReturnStats (mean simple return per step, population std of returns)

This is the primary source of the projection's growth rate:
  A. Historical prices for the selected lookback window (this file)
  B. Fixed fallback constants when history is unusable (benchmarks.py)

Steps:
  1. Reject series with fewer than 2 points (InsufficientData)
  2. Reject any price <= 0 or non-finite (InvalidPriceData)
  3. Simple returns r[i] = (p[i] - p[i-1]) / p[i-1]
  4. Mean of r, and std of r divided by the count of returns (not n-1)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

import numpy as np
import pandas as pd

from core.errors import InsufficientData, InvalidPriceData
from core.logging_config import get_logger
from core.utils import annualize_daily_return, daily_to_monthly_growth

logger = get_logger(__name__)

ReturnSource = Literal["historical", "fallback"]


@dataclass(frozen=True)
class ReturnStats:
    """Per-step return statistics feeding the projection engine."""
    mean_daily_return: float
    daily_volatility: float
    source: ReturnSource = "historical"
    n_observations: int = 0

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"

    @property
    def annualized_return(self) -> float:
        return annualize_daily_return(self.mean_daily_return)

    def monthly_growth_rate(self, days_per_month: int = 30) -> float:
        return daily_to_monthly_growth(self.mean_daily_return, days_per_month)

    def __repr__(self) -> str:
        return (
            f"ReturnStats({self.source}: "
            f"mean={self.mean_daily_return:.6f}, vol={self.daily_volatility:.6f}, "
            f"n={self.n_observations})"
        )


def _as_price_array(prices: Iterable[float]) -> np.ndarray:
    if not isinstance(prices, (np.ndarray, pd.Series, list, tuple)):
        prices = list(prices)
    try:
        arr = np.asarray(prices, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidPriceData(f"Prices must be numeric: {exc}") from exc
    return arr.reshape(-1)


def estimate_returns(prices: Iterable[float]) -> ReturnStats:
    """
    Compute mean daily return and daily volatility from historical prices.

    Parameters
    ----------
    prices : sequence of float
        Chronological prices, all > 0

    Returns
    -------
    ReturnStats with source="historical"

    Raises
    ------
    InsufficientData
        Fewer than 2 prices
    InvalidPriceData
        Any price <= 0 or non-finite (would divide by zero / propagate NaN)
    """
    arr = _as_price_array(prices)

    if arr.size < 2:
        raise InsufficientData(f"Need at least 2 prices to estimate returns, got {arr.size}.")

    bad = ~np.isfinite(arr) | (arr <= 0)
    if bad.any():
        raise InvalidPriceData(
            f"{int(bad.sum())} prices are zero, negative or non-finite "
            f"(first at index {int(np.argmax(bad))})."
        )

    returns = np.diff(arr) / arr[:-1]
    mean = float(returns.mean())
    volatility = float(np.sqrt(np.mean((returns - mean) ** 2)))

    return ReturnStats(
        mean_daily_return=mean,
        daily_volatility=volatility,
        source="historical",
        n_observations=int(returns.size),
    )


def estimate_returns_or_fallback(
    prices: Optional[Iterable[float]],
    *,
    market_cap: Optional[float] = None,
) -> ReturnStats:
    """
    estimate_returns(), substituting fallback stats when the history is unusable.

    The returned ReturnStats carries source="fallback" in that case so callers
    can flag the projection as a degraded-confidence estimate.
    """
    # local import: benchmarks imports ReturnStats from this module
    from .benchmarks import fallback_return_stats

    if prices is None:
        logger.warning("return_estimate_fallback", reason="no price history")
        return fallback_return_stats(market_cap)

    try:
        return estimate_returns(prices)
    except (InsufficientData, InvalidPriceData) as exc:
        logger.warning(
            "return_estimate_fallback",
            reason=type(exc).__name__,
            detail=str(exc),
            market_cap=market_cap,
        )
        return fallback_return_stats(market_cap)
