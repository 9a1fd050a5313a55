"""Loan inputs — the slice of a loan record the penalty calculator reads."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoanDue(BaseModel):
    """Repayment amount and due date of one loan.

    Either may be missing on loans that have not been disbursed yet.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    repayment_amount: Decimal | None = Field(
        default=None,
        description="Amount due at the due date, before any penalty.",
    )
    due_date: datetime | None = Field(
        default=None,
        description="When the repayment falls due.",
    )
