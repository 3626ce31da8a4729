"""
Reporting-boundary summary of one simulation run.

This is the only place figures are rounded: currency to 2 dp, unit counts to 4 dp
(ProjectionConfig.currency_decimals / unit_decimals).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

import pandas as pd

from core.config import LOOKBACK_LABELS, DebtPolicy, ProjectionConfig
from core.utils import round_half_away
from distributions.historical import ReturnStats

from .crossover import CrossoverAnalysis

if TYPE_CHECKING:
    from engine.projection import SimulationResult


@dataclass
class SimulationSummary:
    """Rounded headline figures for the presentation layer."""
    symbol: str
    months: int
    debt_policy: DebtPolicy

    start_price: float
    projected_final_price: float
    final_debt: float
    final_asset_value: float
    total_units: float
    total_interest: float
    units_forgone_to_interest: float
    average_buy_price: Optional[float]
    profit_if_sold: float

    mean_daily_return: float
    annualized_return: float
    return_source: str
    lookback_label: str

    crossover_month: Optional[int]
    break_even_price: Optional[float]
    break_even_monthly_payment: Optional[float]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Horizon", "Value": f"{self.months}", "Unit": "months"},
            {"Metric": "Final Debt", "Value": f"{self.final_debt:,.2f}", "Unit": "$"},
            {"Metric": f"{self.symbol} Stack", "Value": f"{self.total_units:,.4f}", "Unit": self.symbol},
            {"Metric": "Stack Value", "Value": f"{self.final_asset_value:,.2f}", "Unit": "$"},
            {"Metric": "Total Interest", "Value": f"{self.total_interest:,.2f}", "Unit": "$"},
            {"Metric": "Profit If Sold", "Value": f"{self.profit_if_sold:,.2f}", "Unit": "$"},
            {"Metric": "Start Price", "Value": f"{self.start_price:,.2f}", "Unit": "$"},
            {"Metric": "Projected Final Price", "Value": f"{self.projected_final_price:,.2f}", "Unit": "$"},
            {"Metric": "Mean Daily Return", "Value": f"{self.mean_daily_return:.3%}", "Unit": ""},
            {"Metric": "Projected Annual Return", "Value": f"{self.annualized_return:.2%}", "Unit": ""},
            {"Metric": "Return Estimate", "Value": f"{self.return_source} ({self.lookback_label})", "Unit": ""},
            {
                "Metric": "Crossover Month",
                "Value": str(self.crossover_month) if self.crossover_month is not None else "none",
                "Unit": "",
            },
        ]
        if self.average_buy_price is not None:
            rows.insert(4, {"Metric": "Average Buy Price", "Value": f"{self.average_buy_price:,.2f}", "Unit": "$"})
        if self.break_even_price is not None:
            rows.append({"Metric": "Break-even Price", "Value": f"{self.break_even_price:,.2f}", "Unit": "$"})
        if self.break_even_monthly_payment is not None:
            rows.append({
                "Metric": "Break-even Monthly Payment",
                "Value": f"{self.break_even_monthly_payment:,.2f}",
                "Unit": "$/mo",
            })
        return pd.DataFrame(rows)

    def insights(self) -> List[str]:
        """Plain-language result lines."""
        sym = self.symbol
        if self.months == 0:
            return ["No months to project, so there is nothing to compare."]

        lines = []
        if self.crossover_month is not None:
            lines.append(f"Your {sym} stack overtakes debt at month {self.crossover_month}.")
        else:
            lines.append(f"Your {sym} stack never overtakes debt within {self.months} months.")
        lines.append(
            f"You burn ~${self.total_interest:,.2f} in interest, enough for "
            f"~{self.units_forgone_to_interest:,.4f} {sym} at today's price."
        )
        if self.average_buy_price is not None:
            lines.append(f"Average buy-in price: ~${self.average_buy_price:,.2f} per {sym}.")
        outcome = "profit" if self.profit_if_sold >= 0 else "lose"
        lines.append(f"If sold at month {self.months}, you {outcome} ~${abs(self.profit_if_sold):,.2f}.")
        if self.break_even_price is not None:
            lines.append(f"To cover all debt, {sym} must hit ~${self.break_even_price:,.2f} by month {self.months}.")
        if self.break_even_monthly_payment is not None:
            lines.append(f"Or DCA at least ${self.break_even_monthly_payment:,.2f}/mo for this to break even.")
        if self.return_source == "fallback":
            lines.append("Price history was unavailable; the projection uses a fallback return estimate.")
        return lines


def build_summary(
    result: SimulationResult,
    analysis: CrossoverAnalysis,
    stats: ReturnStats,
    *,
    symbol: str = "TOKENS",
    lookback_window: str = "90",
    config: Optional[ProjectionConfig] = None,
) -> SimulationSummary:
    cfg = config or ProjectionConfig()
    cur = cfg.currency_decimals
    unit = cfg.unit_decimals

    def money(v: Optional[float]) -> Optional[float]:
        return None if v is None else round_half_away(v, cur)

    units = result.total_units
    average_buy = result.monthly_payment * result.months / units if units > 0 else None

    return SimulationSummary(
        symbol=symbol or "TOKENS",
        months=result.months,
        debt_policy=result.debt_policy,
        start_price=money(result.start_price),
        projected_final_price=money(result.final_price),
        final_debt=money(result.final_debt),
        final_asset_value=money(result.final_asset_value),
        total_units=round_half_away(units, unit),
        total_interest=money(result.total_interest),
        units_forgone_to_interest=round_half_away(result.total_interest / result.start_price, unit),
        average_buy_price=money(average_buy),
        profit_if_sold=money(result.final_asset_value - result.final_debt),
        mean_daily_return=stats.mean_daily_return,
        annualized_return=stats.annualized_return,
        return_source=stats.source,
        lookback_label=LOOKBACK_LABELS.get(lookback_window, lookback_window),
        crossover_month=analysis.crossover_month,
        break_even_price=money(analysis.break_even_price),
        break_even_monthly_payment=money(analysis.break_even_monthly_payment),
    )
