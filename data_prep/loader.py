from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd

from core.config import lookback_days
from core.errors import PriceSourceError
from market_data.base import HistoricalPriceSource, PriceSeries

TIME_COLUMNS = ("timestamp", "date", "time", "snapped_at")
PRICE_COLUMNS = ("price", "close", "adj_close")


def _pick_column(df: pd.DataFrame, candidates) -> Optional[str]:
    lower = {c.lower().strip(): c for c in df.columns}
    for name in candidates:
        if name in lower:
            return lower[name]
    return None


def load_price_csv(path: Union[str, Path], asset_id: Optional[str] = None) -> PriceSeries:
    """
    Load a price history CSV (timestamp/date column + price/close column).
    Rows with unparseable timestamps are dropped; prices are left as-is so the
    estimator can reject bad values.
    """
    df = pd.read_csv(path)
    time_col = _pick_column(df, TIME_COLUMNS)
    price_col = _pick_column(df, PRICE_COLUMNS)
    if time_col is None or price_col is None:
        raise PriceSourceError(
            f"{path}: need one of {TIME_COLUMNS} and one of {PRICE_COLUMNS}, got {list(df.columns)}"
        )
    return PriceSeries.from_frame(
        asset_id or Path(path).stem, df, time_col=time_col, price_col=price_col
    )


class CsvPriceSource(HistoricalPriceSource):
    """
    Historical prices from local CSV files, one file per asset id.

    The lookback window keeps only samples within N days of the latest one
    ("max" keeps a year, matching the HTTP source).
    """

    def __init__(self, paths: Dict[str, Union[str, Path]]):
        self.paths = {k: Path(v) for k, v in paths.items()}

    def fetch_historical_prices(self, asset_id: str, window: str) -> PriceSeries:
        if asset_id not in self.paths:
            raise PriceSourceError(f"No CSV configured for asset '{asset_id}'")
        try:
            full = load_price_csv(self.paths[asset_id], asset_id)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise PriceSourceError(f"Could not read {self.paths[asset_id]}: {exc}") from exc

        if len(full) == 0:
            return full
        cutoff = full.timestamps.max() - pd.Timedelta(days=lookback_days(window))
        keep = full.timestamps >= cutoff
        return PriceSeries(asset_id=asset_id, timestamps=full.timestamps[keep], prices=full.prices[keep])
