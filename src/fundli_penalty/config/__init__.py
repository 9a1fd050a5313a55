"""Configuration models — penalty policy and service settings."""

from fundli_penalty.config.policy import (
    POLICY_BOUNDS,
    PenaltyPolicy,
    PenaltyPolicyUpdate,
)
from fundli_penalty.config.settings import DayDivisor, ServiceSettings

__all__ = [
    "POLICY_BOUNDS",
    "PenaltyPolicy",
    "PenaltyPolicyUpdate",
    "DayDivisor",
    "ServiceSettings",
]
