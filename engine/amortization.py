"""
Payoff horizon for a fixed-payment debt.

The scheduler answers one question: how many months of fixed payments retire
the debt? It never reports more than max_months (30 years by default);
reaching the cap is a horizon, not a failure.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import PaymentTooLowError
from core.utils import monthly_rate as to_monthly_rate

MAX_SCHEDULE_MONTHS = 360


@dataclass(frozen=True)
class PayoffSchedule:
    """Result of schedule_payoff()."""
    months: int
    monthly_rate: float
    minimum_payment: float  # interest-only threshold
    capped: bool            # True when max_months was reached with balance > 0
    residual_balance: float  # balance after the last month (<= 0 unless capped)


def interest_only_payment(principal: float, annual_rate_percent: float) -> float:
    return float(principal) * to_monthly_rate(annual_rate_percent)


def schedule_payoff(
    principal: float,
    annual_rate_percent: float,
    monthly_payment: float,
    *,
    max_months: int = MAX_SCHEDULE_MONTHS,
) -> PayoffSchedule:
    """
    Iterate balance = balance * (1 + r) - payment until it reaches zero or the cap.

    Raises
    ------
    PaymentTooLowError
        monthly_payment <= principal * monthly rate (the debt never shrinks)
    """
    r_m = to_monthly_rate(annual_rate_percent)
    minimum = float(principal) * r_m
    if monthly_payment <= minimum:
        raise PaymentTooLowError(float(monthly_payment), minimum)

    balance = float(principal)
    months = 0
    while balance > 0 and months < max_months:
        balance = balance * (1 + r_m) - monthly_payment
        months += 1

    return PayoffSchedule(
        months=months,
        monthly_rate=r_m,
        minimum_payment=minimum,
        capped=balance > 0,
        residual_balance=balance,
    )


def schedule_months(
    principal: float,
    annual_rate_percent: float,
    monthly_payment: float,
    *,
    max_months: int = MAX_SCHEDULE_MONTHS,
) -> int:
    """Months needed to retire the debt, capped at max_months."""
    return schedule_payoff(
        principal, annual_rate_percent, monthly_payment, max_months=max_months
    ).months
