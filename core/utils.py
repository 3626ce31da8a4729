from __future__ import annotations

from typing import List, Optional

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta


def monthly_rate(annual_rate_percent: float) -> float:
    """APR in percent -> simple monthly rate (12 equal periods)."""
    return float(annual_rate_percent) / 12.0 / 100.0


def daily_to_monthly_growth(mean_daily_return: float, days_per_month: int = 30) -> float:
    """Compound a daily return over a month: (1+r)^days - 1."""
    return float(np.power(1.0 + mean_daily_return, days_per_month) - 1.0)


def annualize_daily_return(mean_daily_return: float, days_per_year: int = 365) -> float:
    return float(np.power(1.0 + mean_daily_return, days_per_year) - 1.0)


def round_half_away(x, decimals: int = 2):
    """Round half away from zero (vectorized); used only when reporting."""
    m = 10 ** decimals
    arr = np.asarray(x, dtype=float)
    out = np.sign(arr) * (np.floor(np.abs(arr) * m + 0.5) / m)
    if out.ndim == 0:
        return float(out)
    return out


def month_dates(start: Optional[pd.Timestamp], n_months: int) -> List[pd.Timestamp]:
    """
    Calendar date for each projection month, one month after another.
    Month 1 falls one month after start; start defaults to today.
    """
    base = pd.Timestamp.today().normalize() if start is None else pd.Timestamp(start).normalize()
    return [base + relativedelta(months=k) for k in range(1, n_months + 1)]
