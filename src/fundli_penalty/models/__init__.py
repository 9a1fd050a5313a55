"""Models — loan inputs, calculator output and policy views."""

from fundli_penalty.models.loan import LoanDue
from fundli_penalty.models.results import (
    FixedDaysPenaltyResult,
    FormattedPenaltyInfo,
    FormattedPolicy,
    Money,
    PenaltyCalculationResult,
    PenaltyStats,
    PolicyApiView,
)

__all__ = [
    "FixedDaysPenaltyResult",
    "FormattedPenaltyInfo",
    "FormattedPolicy",
    "LoanDue",
    "Money",
    "PenaltyCalculationResult",
    "PenaltyStats",
    "PolicyApiView",
]
