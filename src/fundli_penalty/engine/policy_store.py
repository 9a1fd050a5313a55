"""Penalty policy store: the single owner of the live PenaltyPolicy.

Updates are validate-then-apply under a lock: every touched field is
checked first, then the whole policy object is swapped in one assignment.
Readers never lock; they get whichever complete snapshot is current.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from fundli_penalty.config.policy import (
    POLICY_BOUNDS,
    PenaltyPolicy,
    PenaltyPolicyUpdate,
)
from fundli_penalty.engine.formatting import format_policy
from fundli_penalty.errors import ValidationError
from fundli_penalty.models.results import PolicyApiView

logger = logging.getLogger(__name__)


def _describe_pydantic_error(exc: PydanticValidationError) -> tuple[str, str | None]:
    err = exc.errors()[0]
    loc = err.get("loc") or ()
    field = str(loc[0]) if loc else None
    if field:
        return f"{field}: {err['msg']}", field
    return err["msg"], None


class PenaltyPolicyStore:
    """Holds the process-wide penalty policy and guards every mutation."""

    def __init__(self, policy: PenaltyPolicy | None = None):
        self._policy = policy if policy is not None else PenaltyPolicy()
        self._lock = threading.Lock()

    # ── Reads ─────────────────────────────────────────────────────────────

    def get(self) -> PenaltyPolicy:
        """Copy of the current policy."""
        return self._policy.model_copy()

    def snapshot(self) -> PenaltyPolicy:
        """The current immutable policy object, without copying.

        Used by the calculator to pin one policy for a whole calculation.
        """
        return self._policy

    def rate_percentage(self) -> float:
        return self._policy.rate_per_day * 100

    def grace_period_days(self) -> float:
        return self._policy.grace_period_hours / 24

    def is_enabled(self) -> bool:
        return self._policy.enabled

    def api_view(self) -> PolicyApiView:
        """Raw values, derived figures and a formatted block in one view."""
        policy = self._policy
        return PolicyApiView(
            rate_per_day=policy.rate_per_day,
            rate_percentage=policy.rate_per_day * 100,
            grace_period_hours=policy.grace_period_hours,
            grace_period_days=policy.grace_period_hours / 24,
            max_penalty_days=policy.max_penalty_days,
            currency=policy.currency,
            enabled=policy.enabled,
            formatted=format_policy(policy),
        )

    # ── Writes ────────────────────────────────────────────────────────────

    def update(self, changes: Mapping[str, Any] | PenaltyPolicyUpdate) -> PenaltyPolicy:
        """Apply a partial update atomically and return the new policy.

        ``changes`` may use snake_case or camelCase keys. Fields not present
        keep their current value. If any touched field is invalid, raises
        ``ValidationError`` and the policy is left exactly as it was.
        """
        if isinstance(changes, PenaltyPolicyUpdate):
            payload = changes
        else:
            try:
                payload = PenaltyPolicyUpdate.model_validate(dict(changes))
            except PydanticValidationError as exc:
                message, field = _describe_pydantic_error(exc)
                logger.warning("Rejected penalty policy update: %s", message)
                raise ValidationError(message, field=field) from exc

        touched = payload.changes()

        with self._lock:
            for field, (low, high) in POLICY_BOUNDS.items():
                if field not in touched:
                    continue
                value = touched[field]
                if value is None or not (low <= value <= high):
                    message = f"{field} must be between {low:g} and {high:g}, got {value!r}"
                    logger.warning("Rejected penalty policy update: %s", message)
                    raise ValidationError(message, field=field)

            try:
                updated = PenaltyPolicy.model_validate(
                    {**self._policy.model_dump(), **touched}
                )
            except PydanticValidationError as exc:
                message, field = _describe_pydantic_error(exc)
                logger.warning("Rejected penalty policy update: %s", message)
                raise ValidationError(message, field=field) from exc

            self._policy = updated

        logger.info("Penalty policy updated: %s", touched)
        return updated.model_copy()

    def set_enabled(self, enabled: bool) -> PenaltyPolicy:
        """Switch the penalty system on or off through the validated update path."""
        return self.update({"enabled": enabled})

    def reset(self) -> PenaltyPolicy:
        """Restore the default policy, as a process restart would."""
        with self._lock:
            self._policy = PenaltyPolicy()
        logger.info("Penalty policy reset to defaults")
        return self._policy.model_copy()
