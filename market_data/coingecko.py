"""
CoinGecko price source (httpx) with an in-memory TTL cache.

Endpoints used:
  coins/markets           top assets by market cap (asset picker)
  search                  free-text asset lookup
  simple/price            current price (projection start price)
  coins/{id}/market_chart historical prices for the lookback window

Caching belongs here, not in the projection core: the core only sees a
PriceSeries and cannot tell whether it was fresh or cached.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from core.config import SourceConfig, lookback_days
from core.errors import PriceSourceError
from core.logging_config import get_logger

from .base import DEFAULT_ASSETS, Asset, CurrentPriceSource, HistoricalPriceSource, PriceSeries

logger = get_logger(__name__)


class TTLCache:
    """Dict-backed cache whose entries expire ttl_seconds after insertion."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class CoinGeckoPriceSource(HistoricalPriceSource, CurrentPriceSource):
    """
    Historical and current prices from the CoinGecko REST API.

    Usage:
        with CoinGeckoPriceSource(SourceConfig.from_env()) as source:
            history = source.fetch_historical_prices("bitcoin", "90")
            start_price = source.fetch_current_price("bitcoin")
    """

    def __init__(
        self,
        config: Optional[SourceConfig] = None,
        *,
        client: Optional[httpx.Client] = None,
        cache: Optional[TTLCache] = None,
    ):
        self.config = config or SourceConfig()
        headers = {"Accept": "application/json"}
        if self.config.api_key:
            headers["x-cg-demo-api-key"] = self.config.api_key
        self._owns_client = client is None
        self.client = client or httpx.Client(
            base_url=self.config.base_url,
            headers=headers,
            timeout=self.config.timeout_seconds,
        )
        self.cache = cache if cache is not None else TTLCache(self.config.cache_ttl_seconds)

    def __enter__(self) -> "CoinGeckoPriceSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _get_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        params = params or {}
        key = endpoint + "?" + "&".join(f"{k}={params[k]}" for k in sorted(params))
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("price_source_cache_hit", key=key)
            return cached

        try:
            response = self.client.get(endpoint, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise PriceSourceError(
                f"{endpoint} returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PriceSourceError(f"{endpoint} request failed: {exc}") from exc

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise PriceSourceError(
                f"{endpoint} returned non-JSON response ({content_type or 'no content-type'}): "
                f"{response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise PriceSourceError(f"{endpoint} returned malformed JSON: {exc}") from exc
        self.cache.set(key, data)
        return data

    def fetch_historical_prices(self, asset_id: str, window: str) -> PriceSeries:
        days = lookback_days(window)
        data = self._get_json(
            f"coins/{asset_id}/market_chart",
            {"vs_currency": self.config.vs_currency, "days": days},
        )
        pairs = data.get("prices") if isinstance(data, dict) else None
        if not isinstance(pairs, list):
            raise PriceSourceError(f"market_chart for '{asset_id}' has no 'prices' array")
        try:
            series = PriceSeries.from_pairs(asset_id, pairs)
        except (TypeError, ValueError, IndexError) as exc:
            raise PriceSourceError(f"market_chart for '{asset_id}' is malformed: {exc}") from exc
        logger.info("historical_prices_fetched", asset_id=asset_id, window=window, n_points=len(series))
        return series

    def fetch_current_price(self, asset_id: str) -> float:
        vs = self.config.vs_currency
        data = self._get_json("simple/price", {"ids": asset_id, "vs_currencies": vs})
        try:
            price = float(data[asset_id][vs])
        except (KeyError, TypeError, ValueError) as exc:
            raise PriceSourceError(f"No {vs} price returned for '{asset_id}'") from exc
        if not price > 0:
            raise PriceSourceError(f"Non-positive price {price} returned for '{asset_id}'")
        return price

    def fetch_top_assets(self) -> List[Asset]:
        """Top assets by market cap; DEFAULT_ASSETS if the request fails."""
        try:
            data = self._get_json(
                "coins/markets",
                {
                    "vs_currency": self.config.vs_currency,
                    "order": "market_cap_desc",
                    "per_page": self.config.top_assets_count,
                    "page": 1,
                    "sparkline": "false",
                },
            )
            if not isinstance(data, list):
                raise PriceSourceError("coins/markets did not return a list")
            return [
                Asset(
                    id=row["id"],
                    symbol=str(row["symbol"]).upper(),
                    name=row["name"],
                    price=row.get("current_price"),
                    market_cap=row.get("market_cap"),
                )
                for row in data
            ]
        except (PriceSourceError, KeyError, TypeError) as exc:
            logger.warning("top_assets_fallback", error=str(exc))
            return list(DEFAULT_ASSETS)

    def search_asset(self, query: str) -> Optional[Asset]:
        """First search hit for query, or None."""
        data = self._get_json("search", {"query": query})
        coins = data.get("coins") if isinstance(data, dict) else None
        if not coins:
            return None
        coin = coins[0]
        try:
            return Asset(id=coin["id"], symbol=str(coin["symbol"]).upper(), name=coin.get("name", coin["id"]))
        except (KeyError, TypeError, AttributeError) as exc:
            raise PriceSourceError(f"search result for '{query}' is malformed: {exc}") from exc
