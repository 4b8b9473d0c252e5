from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence

from sip_tracker.config import Settings
from sip_tracker.core.withdrawal import available_withdrawal
from sip_tracker.schemas.plan import InvestmentPlan, PlanStatus, WithdrawalRecord

logger = logging.getLogger(__name__)

NOT_AN_OBJECT = "request body must be a JSON object"


class PlanValidationError(ValueError):
    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        super().__init__("; ".join(errors))
        self.errors = errors
        self.warnings = warnings or []


@dataclass
class PlanPreparation:
    plan: Optional[InvestmentPlan]
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class WithdrawalPreparation:
    withdrawal: Optional[WithdrawalRecord]
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _parse_date(value: Any, label: str, errors: List[str]) -> Optional[date]:
    if value is None or value == "":
        errors.append(f"{label} is required")
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        errors.append(f"{label} must be an ISO date (YYYY-MM-DD), got {value!r}")
        return None


def _parse_number(value: Any, label: str, errors: List[str]) -> Optional[float]:
    if value is None or value == "":
        errors.append(f"{label} is required")
        return None
    if isinstance(value, bool):
        errors.append(f"{label} must be a number")
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        errors.append(f"{label} must be a number, got {value!r}")
        return None


def check_plan_record(
    record: Mapping[str, Any],
    today: date,
    settings: Optional[Settings] = None,
) -> PlanPreparation:
    """Apply the plan form rules to a flat storage row, collecting every problem."""
    settings = settings or Settings()
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(record, Mapping):
        return PlanPreparation(plan=None, errors=[NOT_AN_OBJECT])

    if not str(record.get("name") or "").strip():
        errors.append("SIP name is required")

    start_date = _parse_date(record.get("start_date"), "start date", errors)
    if start_date is not None and start_date > today:
        errors.append("start date cannot be in the future")

    amount = _parse_number(record.get("amount"), "SIP amount", errors)
    if amount is not None:
        if amount <= 0:
            errors.append("amount must be a positive number")
        elif amount < settings.min_plan_amount:
            errors.append(f"minimum SIP amount is {settings.min_plan_amount:g}")

    annual_return = _parse_number(record.get("annual_return"), "expected annual return", errors)
    if annual_return is not None and not 0 <= annual_return <= 100:
        errors.append("return rate must be between 0% and 100%")

    lock_years = record.get("lock_period_years")
    if lock_years not in (None, ""):
        lock_value = _parse_number(lock_years, "lock period", errors)
        if lock_value is not None and not 0 <= lock_value <= settings.max_lock_years:
            errors.append(f"lock period must be between 0 and {settings.max_lock_years:g} years")

    status = record.get("status") or PlanStatus.ACTIVE.value
    if not isinstance(status, str) or status not in {member.value for member in PlanStatus}:
        errors.append(f"unknown status {status!r}")

    if record.get("is_paused"):
        pause_date = _parse_date(record.get("pause_date"), "pause date", errors)
        if pause_date is not None:
            if start_date is not None and pause_date < start_date:
                errors.append("pause date cannot be before the SIP start date")
            if pause_date > today:
                errors.append("pause date cannot be in the future")
    elif record.get("pause_date"):
        warnings.append("pause date is ignored for a SIP that is not paused")

    if errors:
        return PlanPreparation(plan=None, errors=errors, warnings=warnings)

    plan = InvestmentPlan.from_record(record)
    for message in warnings:
        logger.warning("plan %s: %s", plan.id or plan.name, message)
    return PlanPreparation(plan=plan, errors=errors, warnings=warnings)


def prepare_plan(
    record: Mapping[str, Any],
    today: date,
    settings: Optional[Settings] = None,
) -> InvestmentPlan:
    preparation = check_plan_record(record, today, settings)
    if preparation.errors or not preparation.plan:
        raise PlanValidationError(preparation.errors, preparation.warnings)
    return preparation.plan


def check_withdrawal_record(
    record: Mapping[str, Any],
    plans: Sequence[InvestmentPlan],
    today: date,
    settings: Optional[Settings] = None,
) -> WithdrawalPreparation:
    """
    Apply the withdrawal form rules.

    Exceeding the attributed plan's unlocked value is reported as a warning
    only: recording a withdrawal is never blocked by lock status.
    """
    settings = settings or Settings()
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(record, Mapping):
        return WithdrawalPreparation(withdrawal=None, errors=[NOT_AN_OBJECT])

    amount = _parse_number(record.get("amount"), "withdrawal amount", errors)
    if amount is not None:
        if amount <= 0:
            errors.append("amount must be a positive number")
        elif amount < settings.min_withdrawal_amount:
            errors.append(f"minimum withdrawal amount is {settings.min_withdrawal_amount:g}")

    withdrawn_on = _parse_date(record.get("date"), "withdrawal date", errors)
    if withdrawn_on is not None and withdrawn_on > today:
        errors.append("withdrawal date cannot be in the future")

    if errors:
        return WithdrawalPreparation(withdrawal=None, errors=errors, warnings=warnings)

    plan_id = record.get("plan_id", record.get("sip_id"))
    withdrawal = WithdrawalRecord.model_validate(
        {
            "id": record.get("id"),
            "amount": amount,
            "date": withdrawn_on,
            "plan_id": plan_id,
        }
    )

    if plan_id is not None:
        plan = next((candidate for candidate in plans if candidate.id == plan_id), None)
        if plan is None:
            warnings.append(f"withdrawal refers to unknown SIP {plan_id!r}")
        else:
            available = available_withdrawal(plan, withdrawal.date).available
            if withdrawal.amount > available:
                warnings.append(
                    f"withdrawal of {withdrawal.amount:.2f} exceeds the {available:.2f} "
                    f"available (unlocked) in SIP {plan.name!r}"
                )

    for message in warnings:
        logger.warning("withdrawal on %s: %s", withdrawal.date.isoformat(), message)
    return WithdrawalPreparation(withdrawal=withdrawal, errors=errors, warnings=warnings)


def prepare_withdrawal(
    record: Mapping[str, Any],
    plans: Sequence[InvestmentPlan],
    today: date,
    settings: Optional[Settings] = None,
) -> WithdrawalRecord:
    preparation = check_withdrawal_record(record, plans, today, settings)
    if preparation.errors or not preparation.withdrawal:
        raise PlanValidationError(preparation.errors, preparation.warnings)
    return preparation.withdrawal
