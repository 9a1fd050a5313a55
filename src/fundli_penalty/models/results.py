"""Result types: what the calculator and the policy store hand back.

Money is carried as ``Decimal`` quantized to cents and serialized to JSON
as a plain number. All models emit camelCase keys when dumped by alias,
which is how the API layer returns them.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class _ResultModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Calculator output
# ═══════════════════════════════════════════════════════════════════════════

class PenaltyCalculationResult(_ResultModel):
    """Penalty breakdown for one repayment."""

    is_late: bool
    """True iff at least one billable penalty day remains after the grace period."""

    total_days_late: int
    """Whole days between due and payment dates (floored, may be negative)."""

    penalty_days: int
    """Billable days after grace and cap; 0 ≤ penalty_days ≤ max_penalty_days."""

    penalty_amount: Money
    """amount × rate × penalty_days, rounded half away from zero to cents."""

    total_repayment: Money
    """amount + penalty, rounded once to cents."""

    grace_period_used: bool
    """Late by calendar days, but the grace window absorbed every billable day."""

    penalty_rate: float
    """Rate applied. 0 when the policy is disabled."""

    due_date: datetime
    payment_date: datetime


class FixedDaysPenaltyResult(_ResultModel):
    """Penalty for a caller-supplied number of days (no date arithmetic)."""

    penalty_days: int
    penalty_amount: Money
    total_repayment: Money
    penalty_rate: float


# ═══════════════════════════════════════════════════════════════════════════
# Policy views
# ═══════════════════════════════════════════════════════════════════════════

class FormattedPolicy(_ResultModel):
    """Human-readable policy, e.g. ``"0.5% per day"`` / ``"1 day"``."""

    rate: str
    grace_period: str
    max_days: str
    currency: str
    enabled: bool


class PolicyApiView(_ResultModel):
    """Raw policy values plus derived figures, as returned by the API."""

    rate_per_day: float
    rate_percentage: float
    grace_period_hours: int
    grace_period_days: float
    max_penalty_days: int
    currency: str
    enabled: bool
    formatted: FormattedPolicy


class PenaltyStats(_ResultModel):
    """Policy-derived figures alongside collection aggregates.

    The aggregates stay at zero until a repayment ledger is wired in.
    """

    total_penalties_collected: Money = Decimal("0.00")
    average_penalty_amount: Money = Decimal("0.00")
    total_late_payments: int = 0
    penalty_rate: float
    """Rate as a percentage (0.5 = 0.5% per day)."""
    grace_period_days: float
    system_enabled: bool


class FormattedPenaltyInfo(_ResultModel):
    """Display projection of a PenaltyCalculationResult."""

    is_late: bool
    days_late: int
    penalty_amount: Money
    total_amount: Money
    grace_period_used: bool
    formatted_penalty: str
    formatted_total: str
    penalty_rate: str
