"""
Market data: price source interfaces and the CoinGecko implementation.
"""

from .base import (
    Asset,
    CurrentPriceSource,
    DEFAULT_ASSETS,
    HistoricalPriceSource,
    PriceSeries,
    filter_assets,
)
from .coingecko import CoinGeckoPriceSource, TTLCache

__all__ = [
    "Asset",
    "CurrentPriceSource",
    "DEFAULT_ASSETS",
    "HistoricalPriceSource",
    "PriceSeries",
    "filter_assets",
    "CoinGeckoPriceSource",
    "TTLCache",
]
