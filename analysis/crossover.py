"""
Crossover and break-even analysis of a SimulationResult.

Crossover month: first 1-based month where the DCA stack value reaches the debt.

When there is no crossover, two advisory "what would have been needed" figures:
  - break-even price:   remaining debt / units held at the horizon
  - break-even payment: remaining debt / (final price × Σ 1/price[i])
    (units bought scale linearly with the payment along the same price path)
Neither is fed back into a new projection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from engine.projection import SimulationResult


@dataclass(frozen=True)
class CrossoverAnalysis:
    crossover_month: Optional[int]  # None means no crossover within the horizon
    break_even_price: Optional[float] = None
    break_even_monthly_payment: Optional[float] = None

    @property
    def has_crossover(self) -> bool:
        return self.crossover_month is not None


def find_crossover_month(asset_values: np.ndarray, debts: np.ndarray) -> Optional[int]:
    """Smallest 1-based i with asset_values[i-1] >= debts[i-1], else None."""
    asset_values = np.asarray(asset_values, dtype=float)
    debts = np.asarray(debts, dtype=float)
    if asset_values.shape != debts.shape:
        raise ValueError(
            f"Series length mismatch: {asset_values.shape[0]} asset values vs {debts.shape[0]} debts"
        )
    hits = np.flatnonzero(asset_values >= debts)
    return int(hits[0]) + 1 if hits.size else None


def analyze(result: SimulationResult) -> CrossoverAnalysis:
    """
    Derive crossover month and (if none) break-even figures.

    An empty result (months == 0) is "no crossover, no data": no break-even figures.
    """
    if result.months == 0:
        return CrossoverAnalysis(crossover_month=None)

    crossover = find_crossover_month(result.asset_value_series, result.debt_series)
    if crossover is not None:
        return CrossoverAnalysis(crossover_month=crossover)

    remaining = float(result.debt_series[-1])
    final_price = float(result.price_series[-1])
    units = float(result.asset_value_series[-1]) / final_price
    inverse_price_sum = float(np.sum(1.0 / result.price_series))

    return CrossoverAnalysis(
        crossover_month=None,
        break_even_price=remaining / units,
        break_even_monthly_payment=remaining / (final_price * inverse_price_sum),
    )
