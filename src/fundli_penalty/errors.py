"""Exception hierarchy for the penalty engine."""

from __future__ import annotations


class PenaltyError(Exception):
    """Base exception for all penalty engine errors."""
    pass


class ValidationError(PenaltyError, ValueError):
    """A policy update was rejected. Nothing was applied."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class InputError(PenaltyError, ValueError):
    """Calculator input is missing or cannot be read as a number/date."""
    pass
