"""
Projection engine: payoff horizon, monthly debt-vs-DCA projection, and the run pipeline.
"""

from .amortization import PayoffSchedule, schedule_months, schedule_payoff
from .projection import SimulationResult, project
from .runner import SimulationRun, SimulationSession, refresh_return_stats, refresh_start_price, run_simulation

__all__ = [
    "PayoffSchedule",
    "schedule_months",
    "schedule_payoff",
    "SimulationResult",
    "project",
    "SimulationRun",
    "SimulationSession",
    "refresh_return_stats",
    "refresh_start_price",
    "run_simulation",
]
