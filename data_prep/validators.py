"""
Validation for simulation inputs and price histories before they reach the engine.

Catches problems early:
- Missing or non-finite form inputs (blocking, raised as InvalidInput)
- Implausible rates or payments (warnings only; the scheduler raises on payments below interest)
- Price histories too short, non-positive or out of order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import numpy as np
from pydantic import ValidationError

from core.errors import InvalidInput
from core.schema import SimulationInputs
from market_data.base import PriceSeries


@dataclass
class ValidationResult:
    """Collects validation errors (blocking) and warnings (informational)."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)

    def raise_for_errors(self) -> None:
        if self.errors:
            raise InvalidInput("; ".join(self.errors))


def validate_inputs(
    debt_principal: Any,
    annual_rate_percent: Any,
    monthly_payment: Any,
    start_price: Any,
) -> SimulationInputs:
    """
    Build SimulationInputs, translating pydantic errors into InvalidInput.

    Raises
    ------
    InvalidInput
        Any value missing, non-numeric, non-finite or out of range.
        InvalidInput.fields lists the offending field names.
    """
    try:
        return SimulationInputs(
            debt_principal=debt_principal,
            annual_rate_percent=annual_rate_percent,
            monthly_payment=monthly_payment,
            start_price=start_price,
        )
    except ValidationError as exc:
        fields = [str(err["loc"][0]) for err in exc.errors() if err.get("loc")]
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidInput(f"Fill all required fields with finite numbers ({details})", fields=fields) from exc


def check_inputs(inputs: SimulationInputs) -> ValidationResult:
    """
    Non-blocking sanity checks on already-validated inputs; warnings only.
    A payment at or below the interest is left to engine.amortization.schedule_payoff,
    which raises PaymentTooLowError.
    """
    result = ValidationResult()
    if inputs.annual_rate_percent > 100:
        result.warnings.append(
            f"APR {inputs.annual_rate_percent}% is above 100%; check the rate is in percent."
        )
    if inputs.monthly_payment > inputs.debt_principal:
        result.warnings.append("Monthly payment exceeds the whole debt; payoff takes one month.")
    return result


def validate_price_series(series: Optional[PriceSeries], *, min_points: int = 2) -> ValidationResult:
    """
    Check a price history before estimation.
    Errors here mean the estimator would raise and the fallback will be used.
    """
    result = ValidationResult()
    if series is None or len(series) == 0:
        result.errors.append("Price history is empty.")
        return result

    n = len(series)
    if n < min_points:
        result.errors.append(f"Price history has {n} point(s); need at least {min_points}.")

    prices = series.prices
    n_nonfinite = int((~np.isfinite(prices)).sum())
    n_nonpos = int((prices[np.isfinite(prices)] <= 0).sum())
    if n_nonfinite > 0:
        result.errors.append(f"{n_nonfinite} prices are missing or non-finite.")
    if n_nonpos > 0:
        result.errors.append(f"{n_nonpos} prices are zero or negative.")

    if not series.timestamps.is_monotonic_increasing:
        result.warnings.append("Timestamps are not in chronological order.")
    n_dup = int(series.timestamps.duplicated().sum())
    if n_dup > 0:
        result.warnings.append(f"{n_dup} duplicate timestamps found.")

    return result
