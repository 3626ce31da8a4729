"""Tests for input and price-history validation"""

import math

import numpy as np
import pandas as pd
import pytest

from core.errors import InvalidInput
from core.schema import SimulationInputs
from data_prep.validators import ValidationResult, check_inputs, validate_inputs, validate_price_series
from market_data.base import PriceSeries


def _series(prices, dates=None):
    dates = dates or [f"2024-01-0{i + 1}" for i in range(len(prices))]
    return PriceSeries("x", pd.DatetimeIndex(pd.to_datetime(dates)), np.array(prices, dtype=float))


class TestValidateInputs:

    def test_valid(self):
        inputs = validate_inputs(10000, 20, 200, 100)
        assert isinstance(inputs, SimulationInputs)
        assert inputs.monthly_rate == pytest.approx(20 / 12 / 100)

    def test_numeric_strings_accepted(self):
        assert validate_inputs("10000", "20", "200", "100").debt_principal == 10000.0

    def test_missing_value(self):
        with pytest.raises(InvalidInput) as excinfo:
            validate_inputs(None, 20, 200, 100)
        assert excinfo.value.fields == ["debt_principal"]

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(InvalidInput) as excinfo:
            validate_inputs(10000, 20, bad, 100)
        assert "monthly_payment" in excinfo.value.fields

    def test_out_of_range_fields_collected(self):
        with pytest.raises(InvalidInput) as excinfo:
            validate_inputs(0, -1, 200, 0)
        assert set(excinfo.value.fields) == {"debt_principal", "annual_rate_percent", "start_price"}

    def test_zero_rate_allowed(self):
        assert validate_inputs(1000, 0, 100, 1).annual_rate_percent == 0


class TestCheckInputs:

    def test_clean(self, sample_inputs):
        result = check_inputs(validate_inputs(**sample_inputs))
        assert result.is_valid
        assert result.warnings == []

    def test_payment_below_interest_left_to_scheduler(self):
        result = check_inputs(validate_inputs(10000, 24, 150, 100))
        assert result.is_valid
        assert result.warnings == []

    def test_warnings(self):
        result = check_inputs(validate_inputs(1000, 150, 2000, 1))
        assert result.is_valid
        assert len(result.warnings) == 2


class TestValidatePriceSeries:

    def test_good_series(self):
        result = validate_price_series(_series([100, 110, 99]))
        assert result.is_valid
        assert "All checks passed" in result.summary()

    def test_empty(self):
        assert not validate_price_series(None).is_valid

    def test_too_short(self):
        assert not validate_price_series(_series([100])).is_valid

    def test_errors_raise_invalid_input(self):
        with pytest.raises(InvalidInput, match="need at least 2"):
            validate_price_series(_series([100])).raise_for_errors()

    def test_bad_prices(self):
        result = validate_price_series(_series([100, 0, np.nan]))
        assert len(result.errors) == 2

    def test_order_and_duplicates_are_warnings(self):
        result = validate_price_series(_series([1, 2, 3], ["2024-01-02", "2024-01-01", "2024-01-01"]))
        assert result.is_valid
        assert len(result.warnings) == 2


def test_raise_for_errors_noop_when_valid():
    ValidationResult(warnings=["just a warning"]).raise_for_errors()
