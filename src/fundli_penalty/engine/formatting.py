"""Rounding and display helpers shared by the store, calculator and API."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from fundli_penalty.config.policy import PenaltyPolicy
from fundli_penalty.models.results import (
    FormattedPenaltyInfo,
    FormattedPolicy,
    PenaltyCalculationResult,
)

CENT = Decimal("0.01")
TENTH = Decimal("0.1")

# Currencies rendered with a leading symbol; everything else gets a code suffix.
CURRENCY_SYMBOLS = {
    "USD": "$",
    "NGN": "₦",
    "GBP": "£",
    "EUR": "€",
}


def round2(value: Decimal | int | float) -> Decimal:
    """Round half away from zero to two decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_rate(rate_per_day: float) -> str:
    """0.005 → ``"0.5% per day"``; halves round up (0.0125 → ``"1.3%"``)."""
    percent = (Decimal(str(rate_per_day)) * 100).quantize(TENTH, rounding=ROUND_HALF_UP)
    return f"{percent}% per day"


def format_days(days: float) -> str:
    """1 → ``"1 day"``; 0.5 → ``"0.5 days"``; 10/24 → ``"0.4166666666666667 days"``.

    Whole numbers drop the decimal point; fractions keep full precision.
    """
    days = float(days)
    text = str(int(days)) if days.is_integer() else repr(days)
    suffix = "" if days == 1 else "s"
    return f"{text} day{suffix}"


def format_money(amount: Decimal, currency: str) -> str:
    """``$15.00`` for known symbols, ``15.00 KES`` otherwise."""
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol:
        return f"{symbol}{amount:.2f}"
    return f"{amount:.2f} {currency}"


def format_policy(policy: PenaltyPolicy) -> FormattedPolicy:
    return FormattedPolicy(
        rate=format_rate(policy.rate_per_day),
        grace_period=format_days(policy.grace_period_hours / 24),
        max_days=f"{policy.max_penalty_days} days",
        currency=policy.currency,
        enabled=policy.enabled,
    )


def format_penalty_info(
    result: PenaltyCalculationResult,
    currency: str = "USD",
) -> FormattedPenaltyInfo:
    """Project a calculation result into the strings shown to borrowers."""
    return FormattedPenaltyInfo(
        is_late=result.is_late,
        days_late=result.penalty_days,
        penalty_amount=result.penalty_amount,
        total_amount=result.total_repayment,
        grace_period_used=result.grace_period_used,
        formatted_penalty=format_money(result.penalty_amount, currency),
        formatted_total=format_money(result.total_repayment, currency),
        penalty_rate=format_rate(result.penalty_rate),
    )
