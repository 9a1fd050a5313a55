"""Late-repayment penalty calculator.

Pure arithmetic: (amount, due date, payment date) + current policy →
PenaltyCalculationResult.

Key formulas:
  time_diff        = payment − due                      (ms, may be negative)
  total_days_late  = floor(time_diff / MS_PER_DAY)
  penalty_days     = max(0, floor((time_diff − grace_ms) / divisor))
  capped_days      = min(penalty_days, max_penalty_days)
  penalty_amount   = round2(amount × rate × capped_days)
  total_repayment  = round2(amount + amount × rate × capped_days)

Two divisors are available for ``penalty_days``:

``"legacy"``
    LEGACY_PENALTY_DIVISOR_MS = 1000 × 60 × 60 × 1000 ms (about 41.7 days).
    This is the divisor behind every penalty already recorded, so it stays
    the default. A payment has to be roughly six weeks past grace before a
    single penalty day is billed.
``"calendar"``
    MS_PER_DAY, i.e. one billable day per full calendar day after grace.

Switching a running deployment to ``"calendar"`` changes amounts owed on
open loans and needs sign-off from the lending operations team.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, InvalidOperation

from fundli_penalty.config.settings import DayDivisor
from fundli_penalty.engine.formatting import round2
from fundli_penalty.engine.policy_store import PenaltyPolicyStore
from fundli_penalty.errors import InputError
from fundli_penalty.models.loan import LoanDue
from fundli_penalty.models.results import FixedDaysPenaltyResult, PenaltyCalculationResult

logger = logging.getLogger(__name__)

MS_PER_HOUR = 1000 * 60 * 60
MS_PER_DAY = MS_PER_HOUR * 24
LEGACY_PENALTY_DIVISOR_MS = MS_PER_HOUR * 1000

DAY_DIVISORS: dict[str, int] = {
    "legacy": LEGACY_PENALTY_DIVISOR_MS,
    "calendar": MS_PER_DAY,
}

_ONE_MS = timedelta(milliseconds=1)

# Largest accepted amount. Keeps every product and cent rounding inside the
# default 28-digit decimal context.
MAX_AMOUNT = Decimal("1e15")


# ═══════════════════════════════════════════════════════════════════════════
# Input coercion
# ═══════════════════════════════════════════════════════════════════════════

def to_amount(value: object, name: str = "amount") -> Decimal:
    """Read a positive, finite amount. Bools and non-numeric strings are rejected."""
    if value is None:
        raise InputError(f"{name} is required")
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise InputError(f"{name} must be a number, got {type(value).__name__}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise InputError(f"{name} must be a number, got {value!r}") from None
    if not amount.is_finite() or amount <= 0:
        raise InputError(f"{name} must be a positive number, got {value!r}")
    if amount >= MAX_AMOUNT:
        raise InputError(f"{name} must be less than {MAX_AMOUNT:,.0f}, got {value!r}")
    return amount


def to_utc_datetime(value: object, name: str) -> datetime:
    """Normalize a datetime, date or ISO-8601 string to an aware UTC datetime.

    Naive values are taken to be UTC; plain dates mean midnight UTC.
    """
    if value is None:
        raise InputError(f"{name} is required")
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            raise InputError(f"{name} is not a valid date: {value!r}") from None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise InputError(f"{name} must be a date, got {type(value).__name__}")


# ═══════════════════════════════════════════════════════════════════════════
# Calculator
# ═══════════════════════════════════════════════════════════════════════════

class PenaltyCalculator:
    """Computes penalties against the policy held by a PenaltyPolicyStore.

    Parameters
    ----------
    store : PenaltyPolicyStore
        Source of the policy. Read once per call.
    day_divisor : {"legacy", "calendar"}
        How post-grace lateness converts to billable days (see module doc).
    """

    def __init__(self, store: PenaltyPolicyStore, day_divisor: DayDivisor = "legacy"):
        if day_divisor not in DAY_DIVISORS:
            raise ValueError(
                f"day_divisor must be one of {sorted(DAY_DIVISORS)}, got {day_divisor!r}"
            )
        self.store = store
        self.day_divisor = day_divisor
        self.divisor_ms = DAY_DIVISORS[day_divisor]

    def calculate(
        self,
        amount: object,
        due_date: object,
        payment_date: object = None,
    ) -> PenaltyCalculationResult:
        """Penalty for repaying ``amount`` on ``payment_date`` (default: now).

        Raises
        ------
        InputError
            ``amount`` is missing or not positive, or a date cannot be read.
        """
        principal = to_amount(amount)
        due = to_utc_datetime(due_date, "due_date")
        if payment_date is None:
            paid = datetime.now(timezone.utc)
        else:
            paid = to_utc_datetime(payment_date, "payment_date")

        policy = self.store.snapshot()

        if not policy.enabled:
            return PenaltyCalculationResult(
                is_late=False,
                total_days_late=0,
                penalty_days=0,
                penalty_amount=round2(0),
                total_repayment=round2(principal),
                grace_period_used=False,
                penalty_rate=0.0,
                due_date=due,
                payment_date=paid,
            )

        # Integer milliseconds; floor division matches floor() for negatives.
        time_diff_ms = (paid - due) // _ONE_MS
        total_days_late = time_diff_ms // MS_PER_DAY

        grace_ms = policy.grace_period_hours * MS_PER_HOUR
        effective_late_ms = time_diff_ms - grace_ms
        penalty_days = max(0, effective_late_ms // self.divisor_ms)
        capped_days = min(penalty_days, policy.max_penalty_days)

        raw_penalty = principal * Decimal(str(policy.rate_per_day)) * capped_days

        result = PenaltyCalculationResult(
            is_late=penalty_days > 0,
            total_days_late=total_days_late,
            penalty_days=capped_days,
            penalty_amount=round2(raw_penalty),
            total_repayment=round2(principal + raw_penalty),
            grace_period_used=total_days_late > 0 and penalty_days == 0,
            penalty_rate=policy.rate_per_day,
            due_date=due,
            payment_date=paid,
        )
        logger.debug(
            "Penalty for %s due %s paid %s: %d day(s) late, %d billable (%s divisor), penalty %s",
            principal, due.isoformat(), paid.isoformat(),
            total_days_late, capped_days, self.day_divisor, result.penalty_amount,
        )
        return result

    def calculate_by_fixed_days(self, amount: object, penalty_days: object) -> FixedDaysPenaltyResult:
        """Penalty for a day count the caller already determined.

        The count is capped at ``max_penalty_days``. The rate applies whether or
        not the policy is enabled; callers use this to price days already owed.
        """
        principal = to_amount(amount)
        if isinstance(penalty_days, bool) or not isinstance(penalty_days, int):
            raise InputError(f"penalty_days must be an integer, got {penalty_days!r}")
        if penalty_days < 0:
            raise InputError(f"penalty_days must not be negative, got {penalty_days}")

        policy = self.store.snapshot()
        rate = policy.rate_per_day
        capped_days = min(penalty_days, policy.max_penalty_days)
        raw_penalty = principal * Decimal(str(rate)) * capped_days

        return FixedDaysPenaltyResult(
            penalty_days=capped_days,
            penalty_amount=round2(raw_penalty),
            total_repayment=round2(principal + raw_penalty),
            penalty_rate=rate,
        )

    def current_penalty(
        self,
        loan: LoanDue,
        current_date: object = None,
    ) -> PenaltyCalculationResult:
        """Live penalty on a loan as of ``current_date`` (default: now).

        Loans without a due date or repayment amount are reported as not late.
        """
        if loan.due_date is None or not loan.repayment_amount:
            now = (
                datetime.now(timezone.utc)
                if current_date is None
                else to_utc_datetime(current_date, "current_date")
            )
            due = to_utc_datetime(loan.due_date, "due_date") if loan.due_date else now
            return PenaltyCalculationResult(
                is_late=False,
                total_days_late=0,
                penalty_days=0,
                penalty_amount=round2(0),
                total_repayment=round2(
                    to_amount(loan.repayment_amount, "repayment_amount")
                    if loan.repayment_amount
                    else 0
                ),
                grace_period_used=False,
                penalty_rate=0.0,
                due_date=due,
                payment_date=now,
            )
        return self.calculate(loan.repayment_amount, loan.due_date, current_date)

