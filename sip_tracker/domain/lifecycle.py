"""Pause, resume and status transitions for a plan's lifecycle state."""

from __future__ import annotations

from datetime import date
from typing import Union

from sip_tracker.domain.validation import PlanValidationError
from sip_tracker.schemas.plan import (
    ActiveState,
    CompletedState,
    InactiveState,
    InvestmentPlan,
    PausedState,
    PlanStatus,
)


def pause_plan(plan: InvestmentPlan, pause_date: date, today: date) -> InvestmentPlan:
    """Freeze an active plan's installment clock at ``pause_date``."""
    errors = []
    if not isinstance(plan.state, ActiveState):
        errors.append(f"only an active, unpaused SIP can be paused (state is {plan.state.kind})")
    if pause_date < plan.start_date:
        errors.append("pause date cannot be before the SIP start date")
    if pause_date > today:
        errors.append("pause date cannot be in the future")
    if errors:
        raise PlanValidationError(errors)
    return plan.model_copy(update={"state": PausedState(since=pause_date)})


def resume_plan(plan: InvestmentPlan) -> InvestmentPlan:
    """Resume a paused plan; installments accrue from the start date again."""
    if not isinstance(plan.state, PausedState):
        raise PlanValidationError([f"only a paused SIP can be resumed (state is {plan.state.kind})"])
    return plan.model_copy(update={"state": ActiveState()})


def set_status(plan: InvestmentPlan, status: Union[PlanStatus, str]) -> InvestmentPlan:
    """Move a plan between active / inactive / completed, keeping any pause date."""
    try:
        status = PlanStatus(status)
    except ValueError:
        raise PlanValidationError([f"unknown status {status!r}"]) from None

    pause_date = plan.pause_date
    if status is PlanStatus.INACTIVE:
        state: Union[ActiveState, PausedState, InactiveState, CompletedState] = InactiveState(
            paused_since=pause_date
        )
    elif status is PlanStatus.COMPLETED:
        state = CompletedState(paused_since=pause_date)
    elif pause_date is not None:
        state = PausedState(since=pause_date)
    else:
        state = ActiveState()
    return plan.model_copy(update={"state": state})
