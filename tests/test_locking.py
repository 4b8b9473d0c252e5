from __future__ import annotations

from datetime import date

from sip_tracker.core.locking import installment_lock_end_date, is_installment_locked, lock_months


def test_lock_end_is_anchored_at_installment_date():
    assert installment_lock_end_date(date(2024, 1, 1), 2) == date(2026, 1, 1)
    assert installment_lock_end_date(date(2024, 6, 15), 1.5) == date(2025, 12, 15)
    assert installment_lock_end_date(date(2024, 1, 31), 0.5) == date(2024, 7, 31)
    assert installment_lock_end_date(date(2023, 8, 31), 0.5) == date(2024, 2, 29)


def test_no_lock_has_no_end_date():
    assert installment_lock_end_date(date(2024, 1, 1), 0) is None
    assert installment_lock_end_date(date(2024, 1, 1), -1) is None


def test_fractional_years_round_half_up_to_months():
    assert lock_months(0.5) == 6
    assert lock_months(1.5) == 18
    assert lock_months(0.375) == 5
    assert lock_months(0.2) == 2
    assert lock_months(10) == 120


def test_is_installment_locked():
    now = date(2024, 7, 1)
    assert is_installment_locked(date(2024, 1, 1), 2, now)
    assert not is_installment_locked(date(2021, 1, 1), 2, now)
    assert not is_installment_locked(date(2024, 1, 1), 0, now)


def test_installment_unlocks_on_lock_end_date():
    assert is_installment_locked(date(2023, 7, 1), 1, date(2024, 6, 30))
    assert not is_installment_locked(date(2023, 7, 1), 1, date(2024, 7, 1))
