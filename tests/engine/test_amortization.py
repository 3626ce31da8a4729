"""Tests for the payoff scheduler"""

import math

import pytest

from core.errors import PaymentTooLowError
from engine.amortization import (
    MAX_SCHEDULE_MONTHS,
    interest_only_payment,
    schedule_months,
    schedule_payoff,
)


class TestPaymentThreshold:

    def test_scenario_payment_above_interest(self):
        # interest-only = 10000 * 0.20 / 12 ≈ 166.67 < 200
        months = schedule_months(10000, 20, 200)
        assert 0 < months < MAX_SCHEDULE_MONTHS

    def test_scenario_payment_below_interest(self):
        # interest-only = 10000 * 0.24 / 12 = 200 > 150
        with pytest.raises(PaymentTooLowError) as exc_info:
            schedule_months(10000, 24, 150)
        assert exc_info.value.minimum_payment == pytest.approx(200.0)
        assert "must exceed interest" in str(exc_info.value)

    def test_payment_equal_to_interest_rejected(self):
        minimum = interest_only_payment(12000, 12)
        with pytest.raises(PaymentTooLowError):
            schedule_months(12000, 12, minimum)

    def test_payment_just_above_interest_accepted(self):
        minimum = interest_only_payment(12000, 12)
        assert schedule_months(12000, 12, minimum + 0.01) == MAX_SCHEDULE_MONTHS


class TestScheduleMonths:

    def test_zero_rate_exact_payoff(self):
        assert schedule_months(1000, 0, 100) == 10

    def test_zero_rate_partial_last_month(self):
        assert schedule_months(1050, 0, 100) == 11

    def test_payment_covers_whole_debt(self):
        assert schedule_months(500, 10, 10000) == 1

    def test_matches_closed_form(self):
        # n = -ln(1 - rP/A) / ln(1 + r), rounded up
        r = 0.20 / 12
        expected = math.ceil(-math.log(1 - r * 10000 / 200) / math.log(1 + r))
        assert schedule_months(10000, 20, 200) == expected

    def test_cap_at_360(self):
        schedule = schedule_payoff(100000, 12, 1000.01)
        assert schedule.months == MAX_SCHEDULE_MONTHS
        assert schedule.capped
        assert schedule.residual_balance > 0

    def test_custom_cap(self):
        assert schedule_months(10000, 20, 200, max_months=24) == 24

    @pytest.mark.parametrize("principal,rate,payment", [
        (10000, 20, 200),
        (250000, 6.5, 1600),
        (5000, 0, 1),
        (1e6, 1, 900),
    ])
    def test_never_exceeds_cap(self, principal, rate, payment):
        assert schedule_months(principal, rate, payment) <= MAX_SCHEDULE_MONTHS

    def test_payoff_details(self):
        schedule = schedule_payoff(10000, 20, 200)
        assert not schedule.capped
        assert schedule.residual_balance <= 0
        assert schedule.monthly_rate == pytest.approx(0.20 / 12)
        assert schedule.minimum_payment == pytest.approx(10000 * 0.20 / 12)
