"""Data contracts for installment plans and withdrawals."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PlanStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    COMPLETED = "completed"


class ActiveState(BaseModel):
    """Accruing one installment per month up to the evaluation date."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["active"] = "active"


class PausedState(BaseModel):
    """Installment clock frozen at ``since``; still counted in the portfolio."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["paused"] = "paused"
    since: dt.date


class InactiveState(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["inactive"] = "inactive"
    paused_since: Optional[dt.date] = None


class CompletedState(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["completed"] = "completed"
    paused_since: Optional[dt.date] = None


PlanState = Annotated[
    Union[ActiveState, PausedState, InactiveState, CompletedState],
    Field(discriminator="kind"),
]


class InvestmentPlan(BaseModel):
    """One recurring monthly investment commitment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: Optional[str] = None
    name: str = "SIP"
    start_date: dt.date
    monthly_amount: float = Field(..., gt=0, description="Contribution per installment.")
    annual_return_rate: float = Field(
        ...,
        ge=0,
        le=100,
        description="Expected annual return as a percentage (e.g. 12 for 12%).",
    )
    lock_duration_years: float = Field(
        0.0,
        ge=0,
        description="Holding period applied to each installment from its own date.",
    )
    state: PlanState = Field(default_factory=ActiveState)

    @property
    def pause_date(self) -> Optional[dt.date]:
        if isinstance(self.state, PausedState):
            return self.state.since
        if isinstance(self.state, (InactiveState, CompletedState)):
            return self.state.paused_since
        return None

    @property
    def is_paused(self) -> bool:
        return self.pause_date is not None

    @property
    def status(self) -> PlanStatus:
        if isinstance(self.state, InactiveState):
            return PlanStatus.INACTIVE
        if isinstance(self.state, CompletedState):
            return PlanStatus.COMPLETED
        return PlanStatus.ACTIVE

    @property
    def contributes_to_portfolio(self) -> bool:
        return self.status is PlanStatus.ACTIVE

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "InvestmentPlan":
        """Build a plan from a flat storage row (``is_paused``/``pause_date``/``status``)."""
        status = PlanStatus(record.get("status") or PlanStatus.ACTIVE.value)
        pause_date = record.get("pause_date") if record.get("is_paused") else None

        state: Union[ActiveState, PausedState, InactiveState, CompletedState]
        if status is PlanStatus.INACTIVE:
            state = InactiveState(paused_since=pause_date)
        elif status is PlanStatus.COMPLETED:
            state = CompletedState(paused_since=pause_date)
        elif record.get("is_paused"):
            # a paused row without a date cannot be represented; let pydantic reject it
            state = PausedState.model_validate({"since": pause_date})
        else:
            state = ActiveState()

        return cls.model_validate(
            {
                "id": record.get("id"),
                "name": record.get("name") or "SIP",
                "start_date": record["start_date"],
                "monthly_amount": record["amount"],
                "annual_return_rate": record["annual_return"],
                "lock_duration_years": record.get("lock_period_years") or 0.0,
                "state": state.model_dump(),
            }
        )

    def to_record(self) -> Dict[str, Any]:
        """Flatten back into the storage row shape."""
        pause_date = self.pause_date
        return {
            "id": self.id,
            "name": self.name,
            "start_date": self.start_date.isoformat(),
            "amount": self.monthly_amount,
            "annual_return": self.annual_return_rate,
            "lock_period_years": self.lock_duration_years,
            "is_paused": self.is_paused,
            "pause_date": pause_date.isoformat() if pause_date else None,
            "status": self.status.value,
        }


class WithdrawalRecord(BaseModel):
    """A point-in-time amount removed from the portfolio."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: Optional[str] = None
    amount: float = Field(..., gt=0)
    date: dt.date
    plan_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "WithdrawalRecord":
        return cls.model_validate(
            {
                "id": record.get("id"),
                "amount": record["amount"],
                "date": record["date"],
                "plan_id": record.get("sip_id"),
            }
        )
