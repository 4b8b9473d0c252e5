"""Per-installment lock windows."""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from sip_tracker.core.calendar import add_months


def lock_months(lock_duration_years: float) -> int:
    """Convert a lock duration in years to whole months, rounding halves up."""
    return int(math.floor(lock_duration_years * 12 + 0.5))


def installment_lock_end_date(installment_date: date, lock_duration_years: float) -> Optional[date]:
    """Date an installment becomes withdrawable, or ``None`` when the plan has no lock.

    The lock is anchored at the installment's own posting date, not at the
    plan's start date.
    """
    if lock_duration_years <= 0:
        return None
    return add_months(installment_date, lock_months(lock_duration_years))


def is_installment_locked(installment_date: date, lock_duration_years: float, now: date) -> bool:
    lock_end = installment_lock_end_date(installment_date, lock_duration_years)
    if lock_end is None:
        return False
    return now < lock_end
