"""Late-repayment penalty engine for the FUNDLI lending platform."""

from fundli_penalty.config.policy import PenaltyPolicy, PenaltyPolicyUpdate
from fundli_penalty.engine.calculator import PenaltyCalculator
from fundli_penalty.engine.policy_store import PenaltyPolicyStore
from fundli_penalty.errors import InputError, PenaltyError, ValidationError

__version__ = "1.0.0"

__all__ = [
    "PenaltyPolicy",
    "PenaltyPolicyUpdate",
    "PenaltyPolicyStore",
    "PenaltyCalculator",
    "PenaltyError",
    "ValidationError",
    "InputError",
]
