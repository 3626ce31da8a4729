"""
Analysis outputs: crossover / break-even figures and the reporting summary.
"""

from .crossover import CrossoverAnalysis, analyze, find_crossover_month
from .summary import SimulationSummary, build_summary

__all__ = [
    "CrossoverAnalysis",
    "analyze",
    "find_crossover_month",
    "SimulationSummary",
    "build_summary",
]
