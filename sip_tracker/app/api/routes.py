"""HTTP routes for the Flask API."""

import logging
from datetime import date
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from sip_tracker.config import Settings
from sip_tracker.core.errors import ContractViolation
from sip_tracker.core.portfolio import plan_metrics, portfolio_summary, transaction_history
from sip_tracker.core.withdrawal import available_withdrawal
from sip_tracker.domain.validation import (
    PlanValidationError,
    check_plan_record,
    check_withdrawal_record,
)
from sip_tracker.schemas.requests import (
    PlanEvaluationRequest,
    PortfolioRequest,
    WithdrawalCheckRequest,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


def _evaluation_date(as_of: Optional[date]) -> date:
    """Read the clock once per request; everything below receives this date."""
    return as_of or date.today()


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _query_as_of() -> Optional[date]:
    raw = request.args.get("as_of")
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise PlanValidationError([f"as_of must be an ISO date (YYYY-MM-DD), got {raw!r}"]) from None


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(PlanValidationError)
def _handle_plan_validation_error(exc: PlanValidationError):
    return jsonify({"errors": exc.errors, "warnings": exc.warnings}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ContractViolation)
def _handle_contract_violation(exc: ContractViolation):
    logger.error("calculation rejected input: %s", exc)
    return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify({"message": "pong"})


@api_bp.post("/plans/validate")
def validate_plan() -> Any:
    """Run the plan form rules over a storage-style row, as of the optional ``?as_of=`` date."""
    now = _evaluation_date(_query_as_of())
    preparation = check_plan_record(_payload(), now, _settings())
    if preparation.errors or not preparation.plan:
        raise PlanValidationError(preparation.errors, preparation.warnings)
    return jsonify(
        {
            "plan": preparation.plan.model_dump(mode="json"),
            "warnings": preparation.warnings,
        }
    )


@api_bp.post("/plans/metrics")
def metrics() -> Any:
    payload = PlanEvaluationRequest.model_validate(_payload())
    now = _evaluation_date(payload.as_of)
    return jsonify(plan_metrics(payload.plan, now).model_dump(mode="json"))


@api_bp.post("/plans/availability")
def availability() -> Any:
    """Available vs. locked value with the per-installment breakdown."""
    payload = PlanEvaluationRequest.model_validate(_payload())
    now = _evaluation_date(payload.as_of)
    return jsonify(available_withdrawal(payload.plan, now).model_dump(mode="json"))


@api_bp.post("/plans/history")
def history() -> Any:
    payload = PlanEvaluationRequest.model_validate(_payload())
    now = _evaluation_date(payload.as_of)
    rows = transaction_history(payload.plan, now)
    return jsonify([row.model_dump(mode="json") for row in rows])


@api_bp.post("/portfolio/summary")
def summary() -> Any:
    payload = PortfolioRequest.model_validate(_payload())
    now = _evaluation_date(payload.as_of)
    logger.info(
        "portfolio summary for %d plans and %d withdrawals as of %s",
        len(payload.plans),
        len(payload.withdrawals),
        now.isoformat(),
    )
    result = portfolio_summary(payload.plans, payload.withdrawals, now)
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/withdrawals/check")
def check_withdrawal() -> Any:
    """Validate a withdrawal row; availability problems come back as warnings."""
    payload = WithdrawalCheckRequest.model_validate(_payload())
    now = _evaluation_date(payload.as_of)
    preparation = check_withdrawal_record(payload.withdrawal, payload.plans, now, _settings())
    if preparation.errors or not preparation.withdrawal:
        raise PlanValidationError(preparation.errors, preparation.warnings)
    return jsonify(
        {
            "withdrawal": preparation.withdrawal.model_dump(mode="json"),
            "warnings": preparation.warnings,
        }
    )
