"""Installment counting and schedule generation."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sip_tracker.core.calendar import add_months, months_between
from sip_tracker.core.errors import require
from sip_tracker.schemas.plan import InvestmentPlan
from sip_tracker.schemas.results import Installment


def effective_end_date(pause_date: Optional[date], is_paused: bool, now: date) -> date:
    """Evaluation cutoff: the pause date for a paused plan, otherwise ``now``."""
    if is_paused and pause_date is not None:
        return pause_date
    return now


def installments_paid(
    start_date: date,
    pause_date: Optional[date],
    is_paused: bool,
    now: date,
) -> int:
    """
    Count monthly installments posted from ``start_date`` through the effective end.

    An installment is posted on the start date and on each monthly anniversary
    up to and including the end month, so the start month is installment #1.
    Future-dated plans and pauses that predate the start accrue nothing.
    """
    end = effective_end_date(pause_date, is_paused, now)
    if end < start_date:
        return 0
    return max(0, months_between(start_date, end) + 1)


def installment_dates(start_date: date, count: int) -> List[date]:
    require(count >= 0, f"installment count must be non-negative, got {count}")
    return [add_months(start_date, index) for index in range(count)]


def plan_installments_paid(plan: InvestmentPlan, now: date) -> int:
    return installments_paid(plan.start_date, plan.pause_date, plan.is_paused, now)


def installment_schedule(plan: InvestmentPlan, now: date) -> List[Installment]:
    """Generate the plan's installments as of ``now``, oldest first."""
    count = plan_installments_paid(plan, now)
    return [
        Installment(
            sequence_index=index,
            date=posted_on,
            contribution_amount=plan.monthly_amount,
        )
        for index, posted_on in enumerate(installment_dates(plan.start_date, count))
    ]
