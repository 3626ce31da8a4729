"""
Exception hierarchy for the projection core.

InvalidInput and PaymentTooLowError stop a run before it starts.
InsufficientData, InvalidPriceData and PriceSourceError are recovered by
substituting fallback return statistics.
"""

from __future__ import annotations

from typing import List, Optional


class SimulationError(Exception):
    """Base class for every error raised by the projection core."""


class InvalidInput(SimulationError):
    """A required numeric input is missing, non-finite or out of range."""

    def __init__(self, message: str, *, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class PaymentTooLowError(SimulationError):
    """The monthly payment does not exceed the interest-only threshold."""

    def __init__(self, monthly_payment: float, minimum_payment: float):
        super().__init__(
            f"Monthly payment must exceed interest to pay off debt: "
            f"payment {monthly_payment:,.2f} <= interest-only {minimum_payment:,.2f}"
        )
        self.monthly_payment = monthly_payment
        self.minimum_payment = minimum_payment


class InsufficientData(SimulationError):
    """Fewer than two historical prices were supplied."""


class InvalidPriceData(SimulationError):
    """A historical price is zero, negative or non-finite."""


class PriceSourceError(SimulationError):
    """A price source collaborator could not deliver data."""
