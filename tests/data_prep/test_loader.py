"""Tests for the CSV price source"""

import pandas as pd
import pytest

from core.errors import PriceSourceError
from data_prep.loader import CsvPriceSource, load_price_csv


@pytest.fixture
def price_csv(tmp_path):
    dates = pd.date_range("2024-01-01", periods=400, freq="D")
    df = pd.DataFrame({"Date": dates.strftime("%Y-%m-%d"), "Close": [100.0 + i for i in range(400)]})
    path = tmp_path / "bitcoin.csv"
    df.to_csv(path, index=False)
    return path


def test_load_price_csv(price_csv):
    series = load_price_csv(price_csv)
    assert series.asset_id == "bitcoin"
    assert len(series) == 400
    assert series.prices[0] == 100.0


def test_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("when,value\n2024-01-01,1\n")
    with pytest.raises(PriceSourceError, match="need one of"):
        load_price_csv(path)


@pytest.mark.parametrize("window, expected", [("30", 31), ("90", 91), ("365", 366), ("max", 366)])
def test_window_filtering(price_csv, window, expected):
    series = CsvPriceSource({"bitcoin": price_csv}).fetch_historical_prices("bitcoin", window)
    assert len(series) == expected
    assert series.prices[-1] == 499.0


def test_unknown_asset(price_csv):
    with pytest.raises(PriceSourceError, match="No CSV configured"):
        CsvPriceSource({"bitcoin": price_csv}).fetch_historical_prices("ethereum", "30")


def test_missing_file(tmp_path):
    source = CsvPriceSource({"bitcoin": tmp_path / "missing.csv"})
    with pytest.raises(PriceSourceError, match="Could not read"):
        source.fetch_historical_prices("bitcoin", "30")
