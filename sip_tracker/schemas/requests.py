"""Request payloads accepted by the HTTP API."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sip_tracker.schemas.plan import InvestmentPlan, WithdrawalRecord


class PlanEvaluationRequest(BaseModel):
    """A single plan evaluated as of ``as_of`` (defaults to today)."""

    model_config = ConfigDict(extra="forbid")

    plan: InvestmentPlan
    as_of: Optional[dt.date] = None


class PortfolioRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    plans: List[InvestmentPlan] = Field(default_factory=list)
    withdrawals: List[WithdrawalRecord] = Field(default_factory=list)
    as_of: Optional[dt.date] = None


class WithdrawalCheckRequest(BaseModel):
    """Raw withdrawal row plus the owner's plans it may be attributed to."""

    model_config = ConfigDict(extra="forbid")

    withdrawal: dict
    plans: List[InvestmentPlan] = Field(default_factory=list)
    as_of: Optional[dt.date] = None
