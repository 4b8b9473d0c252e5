"""Split a plan's expected value into available and locked amounts."""

from __future__ import annotations

import logging
from datetime import date
from typing import List

from sip_tracker.core.installments import installment_schedule
from sip_tracker.core.locking import installment_lock_end_date, is_installment_locked
from sip_tracker.core.valuation import compounded_installment_value, expected_value
from sip_tracker.schemas.plan import InvestmentPlan
from sip_tracker.schemas.results import InstallmentDetail, WithdrawalAvailability

logger = logging.getLogger(__name__)


def installment_details(plan: InvestmentPlan, now: date) -> List[InstallmentDetail]:
    """
    Value and classify every installment of ``plan`` as of ``now``.

    Installment ``i`` of ``n`` has been held ``n - 1 - i`` months at the
    effective end (the pause date for a paused plan) and compounds on its own
    from its posting date. Lock status is always judged against the real
    ``now``: a paused plan's installments keep unlocking while it is paused.
    """
    schedule = installment_schedule(plan, now)
    count = len(schedule)

    details: List[InstallmentDetail] = []
    for installment in schedule:
        months_held = count - 1 - installment.sequence_index
        value = compounded_installment_value(
            plan.monthly_amount, plan.annual_return_rate, months_held
        )
        details.append(
            InstallmentDetail(
                sequence_index=installment.sequence_index,
                date=installment.date,
                contribution_amount=installment.contribution_amount,
                months_held=months_held,
                expected_value=value,
                is_locked=is_installment_locked(installment.date, plan.lock_duration_years, now),
                lock_end_date=installment_lock_end_date(installment.date, plan.lock_duration_years),
            )
        )
    return details


def available_withdrawal(plan: InvestmentPlan, now: date) -> WithdrawalAvailability:
    """
    Aggregate a plan's installments into available / locked / total buckets.

    ``available + locked`` always equals ``total`` (the plan's rounded expected
    value); the locked bucket is rounded first and available takes the rest.
    """
    details = installment_details(plan, now)
    total = expected_value(plan.monthly_amount, plan.annual_return_rate, len(details))

    if not details or plan.lock_duration_years <= 0:
        return WithdrawalAvailability(
            available=total,
            locked=0.0,
            total=total,
            per_installment=details,
        )

    locked_sum = sum(detail.expected_value for detail in details if detail.is_locked)
    locked_count = sum(1 for detail in details if detail.is_locked)

    if locked_count == 0:
        available, locked = total, 0.0
    elif locked_count == len(details):
        available, locked = 0.0, total
    else:
        locked = round(locked_sum, 2)
        available = round(total - locked, 2)

    logger.debug(
        "plan %s: %d of %d installments locked (locked=%.2f, available=%.2f)",
        plan.id or plan.name,
        locked_count,
        len(details),
        locked,
        available,
    )
    return WithdrawalAvailability(
        available=available,
        locked=locked,
        total=total,
        per_installment=details,
    )
