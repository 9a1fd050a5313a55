"""Penalty policy: the rate, grace period, cap and switch for late fees."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Inclusive (low, high) bounds for every numeric policy field.
POLICY_BOUNDS: dict[str, tuple[float, float]] = {
    "rate_per_day": (0.0, 1.0),
    "grace_period_hours": (0, 168),
    "max_penalty_days": (1, 3650),
}

DEFAULT_RATE_PER_DAY = 0.005
DEFAULT_GRACE_PERIOD_HOURS = 24
DEFAULT_MAX_PENALTY_DAYS = 365
DEFAULT_CURRENCY = "USD"


class PenaltyPolicy(BaseModel):
    """The process-wide late-repayment policy.

    Instances are immutable. The store replaces the whole object on every
    successful update, so a reference obtained from it never changes
    underneath the holder.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    rate_per_day: float = Field(
        default=DEFAULT_RATE_PER_DAY,
        ge=POLICY_BOUNDS["rate_per_day"][0],
        le=POLICY_BOUNDS["rate_per_day"][1],
        description="Fraction of the principal charged per penalty day (0.005 = 0.5%).",
    )
    grace_period_hours: int = Field(
        default=DEFAULT_GRACE_PERIOD_HOURS,
        ge=POLICY_BOUNDS["grace_period_hours"][0],
        le=POLICY_BOUNDS["grace_period_hours"][1],
        description="Hours after the due date before penalty starts accruing (max one week).",
    )
    max_penalty_days: int = Field(
        default=DEFAULT_MAX_PENALTY_DAYS,
        ge=POLICY_BOUNDS["max_penalty_days"][0],
        le=POLICY_BOUNDS["max_penalty_days"][1],
        description="Cap on billable penalty days (max ten years).",
    )
    currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=1,
        description="Currency code shown alongside amounts. Format is not checked.",
    )
    enabled: bool = Field(
        default=True,
        strict=True,
        description="Master switch. When off, every calculation returns zero penalty.",
    )


class PenaltyPolicyUpdate(BaseModel):
    """Partial policy update. Only the fields that are set get applied.

    Types are checked here; numeric bounds are checked by the store so that
    every rejection carries the same message format.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    rate_per_day: float | None = None
    grace_period_hours: int | None = None
    max_penalty_days: int | None = None
    currency: str | None = None
    enabled: bool | None = Field(default=None, strict=True)

    def changes(self) -> dict[str, object]:
        """Touched fields only, keyed by snake_case name."""
        return self.model_dump(exclude_unset=True)
