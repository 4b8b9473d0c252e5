"""Portfolio-level and per-plan summaries."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from sip_tracker.core.installments import plan_installments_paid
from sip_tracker.core.valuation import (
    expected_value,
    gain_loss,
    overall_expected_percentage,
    return_percentage,
    total_contributed,
)
from sip_tracker.core.withdrawal import available_withdrawal
from sip_tracker.schemas.plan import InvestmentPlan, WithdrawalRecord
from sip_tracker.schemas.results import PlanMetrics, PortfolioSummary, TransactionRow

logger = logging.getLogger(__name__)


def portfolio_summary(
    plans: Iterable[InvestmentPlan],
    withdrawals: Iterable[WithdrawalRecord],
    now: date,
) -> PortfolioSummary:
    """
    Fold all plans and withdrawals into portfolio totals.

    Only plans with status ``active`` (paused or not) count toward invested and
    expected value. Every withdrawal counts, whatever its plan's status.
    """
    invested = 0.0
    expected = 0.0
    counted = 0
    for plan in plans:
        if not plan.contributes_to_portfolio:
            continue
        paid = plan_installments_paid(plan, now)
        invested += total_contributed(plan.monthly_amount, paid)
        expected += expected_value(plan.monthly_amount, plan.annual_return_rate, paid)
        counted += 1

    withdrawn = sum(record.amount for record in withdrawals)

    logger.debug("portfolio as of %s: %d active plans", now.isoformat(), counted)
    return PortfolioSummary(
        total_invested=round(invested, 2),
        expected_value=round(expected, 2),
        total_withdrawn=round(withdrawn, 2),
        net_portfolio=round(invested - withdrawn, 2),
        gain_loss=round(gain_loss(expected, invested), 2),
    )


def plan_metrics(plan: InvestmentPlan, now: date) -> PlanMetrics:
    """Headline numbers for a single plan's detail view."""
    paid = plan_installments_paid(plan, now)
    invested = total_contributed(plan.monthly_amount, paid)
    expected = expected_value(plan.monthly_amount, plan.annual_return_rate, paid)
    availability = available_withdrawal(plan, now)

    return PlanMetrics(
        installments_paid=paid,
        total_invested=invested,
        expected_value=expected,
        gain_loss=round(gain_loss(expected, invested), 2),
        return_percentage=return_percentage(expected, invested),
        overall_expected_percentage=overall_expected_percentage(
            plan.start_date,
            plan.annual_return_rate,
            plan.pause_date,
            plan.is_paused,
            now,
        ),
        available=availability.available,
        locked=availability.locked,
    )


def transaction_history(plan: InvestmentPlan, now: date) -> List[TransactionRow]:
    """Running invested / expected totals after each installment, oldest first."""
    rows: List[TransactionRow] = []
    for detail in available_withdrawal(plan, now).per_installment:
        number = detail.sequence_index + 1
        invested = total_contributed(plan.monthly_amount, number)
        expected = expected_value(plan.monthly_amount, plan.annual_return_rate, number)
        rows.append(
            TransactionRow(
                installment_number=number,
                date=detail.date,
                amount=plan.monthly_amount,
                total_invested=invested,
                expected_value=expected,
                gain=round(gain_loss(expected, invested), 2),
                return_percentage=return_percentage(expected, invested),
                is_locked=detail.is_locked,
                lock_end_date=detail.lock_end_date,
            )
        )
    return rows


def withdrawals_for_plan(
    withdrawals: Iterable[WithdrawalRecord], plan_id: Optional[str]
) -> List[WithdrawalRecord]:
    if plan_id is None:
        return []
    return [record for record in withdrawals if record.plan_id == plan_id]
