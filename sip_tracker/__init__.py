"""Installment (SIP) valuation and withdrawal-availability engine."""

from sip_tracker.core.installments import installments_paid
from sip_tracker.core.locking import installment_lock_end_date, is_installment_locked
from sip_tracker.core.portfolio import plan_metrics, portfolio_summary, transaction_history
from sip_tracker.core.valuation import expected_value, total_contributed
from sip_tracker.core.withdrawal import available_withdrawal

__version__ = "0.1.0"

__all__ = [
    "installments_paid",
    "expected_value",
    "total_contributed",
    "installment_lock_end_date",
    "is_installment_locked",
    "available_withdrawal",
    "portfolio_summary",
    "plan_metrics",
    "transaction_history",
]
