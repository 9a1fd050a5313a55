"""Engine — policy store, penalty calculator and display helpers."""

from fundli_penalty.engine.policy_store import PenaltyPolicyStore
from fundli_penalty.engine.calculator import (
    DAY_DIVISORS,
    LEGACY_PENALTY_DIVISOR_MS,
    MS_PER_DAY,
    PenaltyCalculator,
)
from fundli_penalty.engine.formatting import (
    format_days,
    format_penalty_info,
    format_policy,
    format_rate,
    round2,
)

__all__ = [
    "PenaltyPolicyStore",
    "PenaltyCalculator",
    "DAY_DIVISORS",
    "LEGACY_PENALTY_DIVISOR_MS",
    "MS_PER_DAY",
    "format_days",
    "format_penalty_info",
    "format_policy",
    "format_rate",
    "round2",
]
