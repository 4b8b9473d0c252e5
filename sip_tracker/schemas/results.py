"""Result contracts produced by the calculation core."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Installment(BaseModel):
    """One derived monthly contribution event; never persisted."""

    model_config = ConfigDict(frozen=True)

    sequence_index: int = Field(..., ge=0)
    date: dt.date
    contribution_amount: float


class InstallmentDetail(Installment):
    months_held: int = Field(..., ge=0)
    expected_value: float = Field(..., ge=0)
    is_locked: bool
    lock_end_date: Optional[dt.date] = None


class WithdrawalAvailability(BaseModel):
    """Available vs. locked split of a plan's expected value."""

    available: float = Field(..., ge=0)
    locked: float = Field(..., ge=0)
    total: float = Field(..., ge=0)
    per_installment: List[InstallmentDetail] = Field(default_factory=list)


class PlanMetrics(BaseModel):
    installments_paid: int = Field(..., ge=0)
    total_invested: float
    expected_value: float
    gain_loss: float
    return_percentage: float
    overall_expected_percentage: float
    available: float
    locked: float


class TransactionRow(BaseModel):
    """Running totals up to and including one installment."""

    installment_number: int = Field(..., ge=1)
    date: dt.date
    amount: float
    total_invested: float
    expected_value: float
    gain: float
    return_percentage: float
    is_locked: bool
    lock_end_date: Optional[dt.date] = None


class PortfolioSummary(BaseModel):
    total_invested: float
    expected_value: float
    total_withdrawn: float
    net_portfolio: float
    gain_loss: float
