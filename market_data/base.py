"""
Price source interfaces and the data they hand to the projection core.

HistoricalPriceSource is the one pluggable capability the core depends on:
"fetch historical prices for asset X over window W". Implementations:
  - market_data.coingecko.CoinGeckoPriceSource (HTTP, cached)
  - data_prep.loader.CsvPriceSource (local file)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class PriceSeries:
    """Chronological (timestamp, price) samples for one asset."""
    asset_id: str
    timestamps: pd.DatetimeIndex
    prices: np.ndarray

    def __post_init__(self) -> None:
        if len(self.timestamps) != len(self.prices):
            raise ValueError(
                f"timestamps ({len(self.timestamps)}) and prices ({len(self.prices)}) differ in length"
            )
        prices = np.array(self.prices, dtype=float)
        prices.setflags(write=False)
        object.__setattr__(self, "prices", prices)

    def __len__(self) -> int:
        return len(self.prices)

    @classmethod
    def from_pairs(cls, asset_id: str, pairs: Iterable[Sequence[float]]) -> "PriceSeries":
        """Build from [timestamp_ms, price] pairs, as the market-chart endpoint returns."""
        rows: List[Tuple[float, float]] = [(float(p[0]), float(p[1])) for p in pairs]
        ts = pd.to_datetime([r[0] for r in rows], unit="ms", utc=True)
        prices = np.array([r[1] for r in rows], dtype=float)
        return cls(asset_id=asset_id, timestamps=pd.DatetimeIndex(ts), prices=prices)

    @classmethod
    def from_frame(
        cls,
        asset_id: str,
        df: pd.DataFrame,
        *,
        time_col: str = "timestamp",
        price_col: str = "price",
    ) -> "PriceSeries":
        data = df[[time_col, price_col]].copy()
        data[time_col] = pd.to_datetime(data[time_col], errors="coerce", utc=True)
        data[price_col] = pd.to_numeric(data[price_col], errors="coerce")
        data = data.dropna(subset=[time_col]).sort_values(time_col)
        return cls(
            asset_id=asset_id,
            timestamps=pd.DatetimeIndex(data[time_col]),
            prices=data[price_col].to_numpy(dtype=float),
        )

    def to_series(self) -> pd.Series:
        return pd.Series(self.prices, index=self.timestamps, name=self.asset_id)


@dataclass(frozen=True)
class Asset:
    id: str
    symbol: str
    name: str
    price: Optional[float] = None
    market_cap: Optional[float] = None

    @property
    def label(self) -> str:
        return f"{self.symbol} ({self.name})"


# Shown when the top-assets request fails.
DEFAULT_ASSETS: Tuple[Asset, ...] = (
    Asset("bitcoin", "BTC", "Bitcoin"),
    Asset("ethereum", "ETH", "Ethereum"),
    Asset("tether", "USDT", "Tether"),
    Asset("binancecoin", "BNB", "BNB"),
    Asset("solana", "SOL", "Solana"),
    Asset("cardano", "ADA", "Cardano"),
    Asset("ripple", "XRP", "Ripple"),
    Asset("dogecoin", "DOGE", "Dogecoin"),
    Asset("avalanche-2", "AVAX", "Avalanche"),
    Asset("polkadot", "DOT", "Polkadot"),
)


def filter_assets(assets: Iterable[Asset], query: str) -> List[Asset]:
    """Symbol contains the upper-cased query, or name contains it case-insensitively."""
    q = (query or "").strip()
    return [a for a in assets if q.upper() in a.symbol.upper() or q.lower() in a.name.lower()]


class HistoricalPriceSource:
    """Interface for fetching an asset's price history over a lookback window."""

    def fetch_historical_prices(self, asset_id: str, window: str) -> PriceSeries:
        raise NotImplementedError


class CurrentPriceSource:
    """Interface for fetching an asset's current price (the projection's start price)."""

    def fetch_current_price(self, asset_id: str) -> float:
        raise NotImplementedError
