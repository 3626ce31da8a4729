"""
Simulation runner: orchestrates one debt-vs-DCA run end to end.

Pipeline (straight-line, synchronous, no shared state between runs):
  1. Validate form inputs                     (data_prep.validators)
  2. Return stats from the session            (distributions; fallback if missing)
  3. Payoff horizon                           (engine.amortization)
  4. Monthly projection                       (engine.projection)
  5. Crossover / break-even + summary         (analysis)

Module-level state is avoided: the selected asset, lookback window and the last
ReturnStats live in a SimulationSession passed to each entry point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from analysis.crossover import CrossoverAnalysis, analyze
from analysis.summary import SimulationSummary, build_summary
from core.config import DebtPolicy, ProjectionConfig, lookback_days
from core.errors import PriceSourceError
from core.logging_config import get_logger
from core.schema import SimulationInputs
from data_prep.validators import check_inputs, validate_inputs, validate_price_series
from distributions.benchmarks import fallback_return_stats
from distributions.historical import ReturnStats, estimate_returns_or_fallback
from market_data.base import CurrentPriceSource, HistoricalPriceSource

from .amortization import PayoffSchedule, schedule_payoff
from .projection import SimulationResult, project

logger = get_logger(__name__)


@dataclass
class SimulationSession:
    """Per-user selection state carried between runs."""
    asset_id: str = ""
    symbol: str = ""
    lookback_window: str = "90"
    market_cap: Optional[float] = None
    return_stats: Optional[ReturnStats] = None
    start_price: Optional[float] = None

    def select_asset(self, asset_id: str, symbol: str = "", *, market_cap: Optional[float] = None) -> None:
        """Switch asset; cached stats and price belong to the old asset and are dropped."""
        self.asset_id = asset_id
        self.symbol = symbol.upper()
        self.market_cap = market_cap
        self.return_stats = None
        self.start_price = None

    def set_lookback_window(self, window: str) -> None:
        lookback_days(window)  # raises on an unknown window
        if window != self.lookback_window:
            self.lookback_window = window
            self.return_stats = None

    @property
    def display_symbol(self) -> str:
        return self.symbol or "TOKENS"


@dataclass(frozen=True)
class SimulationRun:
    """Everything one run produced, for the presentation layer."""
    inputs: SimulationInputs
    return_stats: ReturnStats
    schedule: PayoffSchedule
    result: SimulationResult
    analysis: CrossoverAnalysis
    summary: SimulationSummary


def refresh_return_stats(
    session: SimulationSession,
    source: HistoricalPriceSource,
) -> ReturnStats:
    """
    Fetch history for the session's asset and window, estimate returns, store them.

    Fetch failures and unusable histories fall back to fixed (or market-cap
    tiered) figures; the result's source flag records which one was used.
    """
    if not session.asset_id:
        stats = fallback_return_stats(session.market_cap)
        logger.warning("return_estimate_fallback", reason="no asset selected")
        session.return_stats = stats
        return stats

    try:
        history = source.fetch_historical_prices(session.asset_id, session.lookback_window)
    except PriceSourceError as exc:
        logger.warning(
            "historical_fetch_failed",
            asset_id=session.asset_id,
            window=session.lookback_window,
            error=str(exc),
        )
        stats = estimate_returns_or_fallback(None, market_cap=session.market_cap)
    else:
        check = validate_price_series(history)
        for warning in check.warnings:
            logger.warning("price_history_warning", asset_id=session.asset_id, detail=warning)
        stats = estimate_returns_or_fallback(history.prices, market_cap=session.market_cap)

    logger.info(
        "return_stats_updated",
        asset_id=session.asset_id,
        window=session.lookback_window,
        source=stats.source,
        mean_daily_return=stats.mean_daily_return,
        daily_volatility=stats.daily_volatility,
    )
    session.return_stats = stats
    return stats


def refresh_start_price(session: SimulationSession, source: CurrentPriceSource) -> Optional[float]:
    """Current price of the session's asset, or None (and nothing stored) when the fetch fails."""
    session.start_price = None
    if not session.asset_id:
        return None
    try:
        session.start_price = source.fetch_current_price(session.asset_id)
    except PriceSourceError as exc:
        logger.warning("current_price_fetch_failed", asset_id=session.asset_id, error=str(exc))
    return session.start_price


def resolve_horizon(schedule: PayoffSchedule, config: ProjectionConfig) -> int:
    """Payoff horizon, or the fixed horizon when payments are ignored and one is set."""
    if config.debt_policy is DebtPolicy.IGNORE_PAYMENTS and config.fixed_horizon_months is not None:
        return int(config.fixed_horizon_months)
    return schedule.months


def run_simulation(
    session: SimulationSession,
    inputs: Union[SimulationInputs, Mapping[str, Any]],
    *,
    config: Optional[ProjectionConfig] = None,
) -> SimulationRun:
    """
    Run one projection for the session's asset.

    Parameters
    ----------
    session : SimulationSession
        Selected asset, lookback window and (optionally) precomputed ReturnStats
    inputs : SimulationInputs or mapping
        Debt, APR (percent), monthly payment and start price. A mapping is
        validated first.
    config : ProjectionConfig, optional
        Debt policy, horizon cap, fixed horizon, rounding

    Raises
    ------
    InvalidInput
        Inputs missing / non-finite / out of range
    PaymentTooLowError
        Payment does not exceed the interest-only threshold
    """
    cfg = config or ProjectionConfig()
    if not isinstance(inputs, SimulationInputs):
        inputs = validate_inputs(**dict(inputs))
    for warning in check_inputs(inputs).warnings:
        logger.warning("input_warning", detail=warning)

    stats = session.return_stats
    if stats is None:
        stats = fallback_return_stats(session.market_cap)
        logger.warning("return_estimate_fallback", reason="no return stats in session")

    schedule = schedule_payoff(
        inputs.debt_principal,
        inputs.annual_rate_percent,
        inputs.monthly_payment,
        max_months=cfg.max_months,
    )
    months = resolve_horizon(schedule, cfg)

    result = project(
        inputs.debt_principal,
        inputs.annual_rate_percent,
        inputs.monthly_payment,
        inputs.start_price,
        months,
        stats.mean_daily_return,
        debt_policy=cfg.debt_policy,
        days_per_month=cfg.days_per_month,
    )
    crossover = analyze(result)
    summary = build_summary(
        result,
        crossover,
        stats,
        symbol=session.display_symbol,
        lookback_window=session.lookback_window,
        config=cfg,
    )

    logger.info(
        "simulation_complete",
        asset_id=session.asset_id,
        months=result.months,
        debt_policy=cfg.debt_policy.value,
        capped=schedule.capped,
        crossover_month=crossover.crossover_month,
        return_source=stats.source,
    )

    return SimulationRun(
        inputs=inputs,
        return_stats=stats,
        schedule=schedule,
        result=result,
        analysis=crossover,
        summary=summary,
    )
