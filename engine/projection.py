"""
Month-by-month projection: debt balance vs a DCA position funded by the same payment.

Per month i (0-based), in order:
  1. Debt:      interest = debt * r; debt += interest
                AMORTIZING also subtracts the payment (floored at 0)
  2. Interest:  cumulative interest += interest
  3. Price:     price[i] = start_price * (1 + g)^i, g = (1 + daily)^30 - 1
  4. DCA:       units += payment / price[i]; asset_value[i] = units * price[i]

Full double precision throughout. Rounding happens only in analysis.summary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from core.config import DebtPolicy
from core.errors import InvalidInput
from core.utils import daily_to_monthly_growth, month_dates, monthly_rate as to_monthly_rate


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class SimulationResult:
    """
    Parallel monthly series produced by project().

    debt_series, asset_value_series, price_series, units_series and
    cumulative_interest_series all have length == months. Arrays are read-only.
    """
    months: int
    debt_series: np.ndarray
    asset_value_series: np.ndarray
    price_series: np.ndarray
    units_series: np.ndarray
    cumulative_interest_series: np.ndarray

    principal: float
    monthly_payment: float
    start_price: float
    monthly_growth_rate: float
    debt_policy: DebtPolicy

    @property
    def is_empty(self) -> bool:
        return self.months == 0

    @property
    def final_debt(self) -> float:
        return float(self.debt_series[-1]) if self.months else float(self.principal)

    @property
    def final_asset_value(self) -> float:
        return float(self.asset_value_series[-1]) if self.months else 0.0

    @property
    def total_units(self) -> float:
        return float(self.units_series[-1]) if self.months else 0.0

    @property
    def total_interest(self) -> float:
        return float(self.cumulative_interest_series[-1]) if self.months else 0.0

    @property
    def final_price(self) -> float:
        return float(self.price_series[-1]) if self.months else float(self.start_price)

    def to_dataframe(self, start_date: Optional[pd.Timestamp] = None) -> pd.DataFrame:
        """One row per projected month (1-based), with calendar dates."""
        return pd.DataFrame(
            {
                "month": np.arange(1, self.months + 1),
                "date": pd.DatetimeIndex(month_dates(start_date, self.months)),
                "debt": self.debt_series,
                "asset_value": self.asset_value_series,
                "price": self.price_series,
                "units": self.units_series,
                "cumulative_interest": self.cumulative_interest_series,
                "profit_if_sold": self.asset_value_series - self.debt_series,
            }
        )


def project(
    principal: float,
    annual_rate_percent: float,
    monthly_payment: float,
    start_price: float,
    months: int,
    mean_daily_return: float,
    *,
    debt_policy: DebtPolicy = DebtPolicy.IGNORE_PAYMENTS,
    days_per_month: int = 30,
) -> SimulationResult:
    """
    Run the deterministic monthly projection.

    Parameters
    ----------
    principal : float
        Starting debt balance
    annual_rate_percent : float
        APR in percent
    monthly_payment : float
        Cash invested in the asset each month (and, under AMORTIZING, paid to the debt)
    start_price : float
        Asset price at month 0
    months : int
        Horizon; 0 yields empty series
    mean_daily_return : float
        From the return estimator (or its fallback)
    debt_policy : DebtPolicy
        AMORTIZING or IGNORE_PAYMENTS

    Returns
    -------
    SimulationResult with freshly allocated series
    """
    numeric = {
        "principal": principal,
        "annual_rate_percent": annual_rate_percent,
        "monthly_payment": monthly_payment,
        "start_price": start_price,
        "mean_daily_return": mean_daily_return,
    }
    non_finite = [name for name, value in numeric.items() if not math.isfinite(value)]
    if non_finite:
        raise InvalidInput(f"Non-finite projection inputs: {', '.join(non_finite)}", fields=non_finite)
    if months < 0:
        raise InvalidInput(f"months must be >= 0, got {months}", fields=["months"])
    if start_price <= 0:
        raise InvalidInput(f"start_price must be > 0, got {start_price}", fields=["start_price"])

    policy = DebtPolicy(debt_policy)
    r_m = to_monthly_rate(annual_rate_percent)
    g = daily_to_monthly_growth(mean_daily_return, days_per_month)
    amortizing = policy is DebtPolicy.AMORTIZING

    debt_s = np.zeros(months, dtype=float)
    value_s = np.zeros(months, dtype=float)
    price_s = np.zeros(months, dtype=float)
    units_s = np.zeros(months, dtype=float)
    interest_s = np.zeros(months, dtype=float)

    debt = float(principal)
    cum_interest = 0.0
    units = 0.0

    for i in range(months):
        interest = debt * r_m
        debt = debt + interest
        if amortizing:
            debt = max(debt - monthly_payment, 0.0)
        cum_interest += interest

        price = start_price * (1.0 + g) ** i
        units += monthly_payment / price

        debt_s[i] = debt
        interest_s[i] = cum_interest
        price_s[i] = price
        units_s[i] = units
        value_s[i] = units * price

    return SimulationResult(
        months=int(months),
        debt_series=_frozen(debt_s),
        asset_value_series=_frozen(value_s),
        price_series=_frozen(price_s),
        units_series=_frozen(units_s),
        cumulative_interest_series=_frozen(interest_s),
        principal=float(principal),
        monthly_payment=float(monthly_payment),
        start_price=float(start_price),
        monthly_growth_rate=g,
        debt_policy=policy,
    )
