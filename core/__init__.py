"""
Core package: configuration, input schema, errors, logging and shared utilities.
No projection logic lives here.
"""

from .config import DebtPolicy, ProjectionConfig, SourceConfig, LOOKBACK_LABELS, lookback_days
from .errors import (
    SimulationError,
    InvalidInput,
    PaymentTooLowError,
    InsufficientData,
    InvalidPriceData,
    PriceSourceError,
)
from .schema import SimulationInputs
from .utils import monthly_rate, daily_to_monthly_growth, round_half_away, month_dates

__all__ = [
    "DebtPolicy",
    "ProjectionConfig",
    "SourceConfig",
    "LOOKBACK_LABELS",
    "lookback_days",
    "SimulationError",
    "InvalidInput",
    "PaymentTooLowError",
    "InsufficientData",
    "InvalidPriceData",
    "PriceSourceError",
    "SimulationInputs",
    "monthly_rate",
    "daily_to_monthly_growth",
    "round_half_away",
    "month_dates",
]
