"""Future-value and contribution calculations for monthly installments."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sip_tracker.core.calendar import add_months, months_between
from sip_tracker.core.errors import require
from sip_tracker.core.installments import effective_end_date, installments_paid

logger = logging.getLogger(__name__)


def _check_inputs(monthly_amount: float, annual_rate_percent: float, installments: int) -> None:
    require(monthly_amount >= 0, f"monthly amount must be non-negative, got {monthly_amount}")
    require(
        0 <= annual_rate_percent <= 100,
        f"annual return rate must be within [0, 100], got {annual_rate_percent}",
    )
    require(installments >= 0, f"installment count must be non-negative, got {installments}")


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def expected_value(monthly_amount: float, annual_rate_percent: float, installments: int) -> float:
    """
    Ordinary-annuity future value of ``installments`` equal monthly contributions.

        FV = A * ((1 + r)^n - 1) / r,   r = annual_rate_percent / 100 / 12

    Rounded to 2 decimals. Zero installments give 0 and a zero rate collapses
    to the plain sum of contributions.
    """
    _check_inputs(monthly_amount, annual_rate_percent, installments)
    if installments == 0:
        return 0.0

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        return monthly_amount * installments

    future_value = monthly_amount * (((1 + rate) ** installments - 1) / rate)
    return round(future_value, 2)


def total_contributed(monthly_amount: float, installments: int) -> float:
    """Principal paid in: the baseline gain/loss is measured against."""
    require(monthly_amount >= 0, f"monthly amount must be non-negative, got {monthly_amount}")
    require(installments >= 0, f"installment count must be non-negative, got {installments}")
    return monthly_amount * installments


def compounded_installment_value(
    monthly_amount: float, annual_rate_percent: float, months_held: int
) -> float:
    """Value of a single contribution after compounding for ``months_held`` months.

    Summing this over months_held = 0 .. n-1 reproduces ``expected_value`` for n
    installments, which is what lets a plan's value be split per installment.
    """
    _check_inputs(monthly_amount, annual_rate_percent, months_held)
    return monthly_amount * (1 + monthly_rate(annual_rate_percent)) ** months_held


def gain_loss(expected: float, invested: float) -> float:
    return expected - invested


def return_percentage(expected: float, invested: float) -> float:
    if invested <= 0:
        return 0.0
    return gain_loss(expected, invested) / invested * 100


def overall_expected_percentage(
    start_date: date,
    annual_rate_percent: float,
    pause_date: Optional[date],
    is_paused: bool,
    now: date,
) -> float:
    """
    Time-weighted average expected return across installments held so far.

    Each installment held ``m`` full months contributes ``(1 + rate)^(m / 12) - 1``
    using the annual rate; installments held less than a month are skipped.
    """
    count = installments_paid(start_date, pause_date, is_paused, now)
    if count == 0:
        return 0.0

    end = effective_end_date(pause_date, is_paused, now)
    total_return = 0.0
    weight = 0
    for index in range(count):
        held = months_between(add_months(start_date, index), end)
        if held > 0:
            total_return += (1 + annual_rate_percent / 100) ** (held / 12) - 1
            weight += 1

    if weight == 0:
        return 0.0

    logger.debug("time-weighted return over %d of %d installments", weight, count)
    return total_return / weight * 100
