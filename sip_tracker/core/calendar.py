"""Month arithmetic over calendar dates."""

from __future__ import annotations

from datetime import date

from dateutil.relativedelta import relativedelta


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``, truncated toward zero.

    A month is complete once ``add_months(start, k) <= end``, so the count
    agrees with month-end clamping: 2024-01-31 -> 2024-02-29 is one month.
    """
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by ``months``, clamping to the last day of the target month."""
    return value + relativedelta(months=months)
