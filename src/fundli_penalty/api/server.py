"""FastAPI server — admin API for the late-repayment penalty policy.

Run with:
    uvicorn fundli_penalty.api.server:app --reload --port 8000

Or:
    fundli-penalty-api

Endpoints:
    GET  /penalty-config        — current policy with derived + formatted values
    PUT  /penalty-config        — partial policy update
    POST /penalty-config/test   — what-if penalty calculation
    GET  /penalty-config/stats  — policy figures + collection aggregates

Authentication and response envelopes belong to the gateway in front of
this service.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

import fundli_penalty
from fundli_penalty.config.policy import PenaltyPolicyUpdate
from fundli_penalty.config.settings import ServiceSettings
from fundli_penalty.engine.calculator import PenaltyCalculator
from fundli_penalty.engine.formatting import format_penalty_info
from fundli_penalty.engine.policy_store import PenaltyPolicyStore
from fundli_penalty.errors import InputError, ValidationError
from fundli_penalty.logging_utils import setup_logging
from fundli_penalty.models.results import (
    FormattedPenaltyInfo,
    PenaltyCalculationResult,
    PenaltyStats,
    PolicyApiView,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class PenaltyTestRequest(BaseModel):
    """Request body for /penalty-config/test."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    amount: float | str | None = Field(
        default=None,
        description="Repayment amount. Must be positive.",
    )
    due_date: str | None = Field(
        default=None,
        description="ISO-8601 due date, e.g. '2024-01-01T00:00:00Z'.",
    )
    payment_date: str | None = Field(
        default=None,
        description="ISO-8601 payment date. Omit to use the current time.",
    )


class PenaltyTestResponse(BaseModel):
    """Response from /penalty-config/test."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    test_result: PenaltyCalculationResult
    formatted: FormattedPenaltyInfo
    config: PolicyApiView


# ═══════════════════════════════════════════════════════════════════════════
# Dependencies
# ═══════════════════════════════════════════════════════════════════════════

def get_store(request: Request) -> PenaltyPolicyStore:
    return request.app.state.policy_store


def get_calculator(request: Request) -> PenaltyCalculator:
    return request.app.state.calculator


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

router = APIRouter(prefix="/penalty-config", tags=["penalty-config"])


@router.get("", response_model=PolicyApiView)
def read_penalty_config(store: PenaltyPolicyStore = Depends(get_store)):
    """Current penalty policy: raw values, percentages and display strings."""
    return store.api_view()


@router.put("", response_model=PolicyApiView)
def update_penalty_config(
    req: PenaltyPolicyUpdate,
    store: PenaltyPolicyStore = Depends(get_store),
):
    """Update any subset of ratePerDay, gracePeriodHours, maxPenaltyDays,
    currency and enabled. Out-of-range values reject the whole update.
    """
    try:
        store.update(req)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return store.api_view()


@router.post("/test", response_model=PenaltyTestResponse)
def test_penalty_calculation(
    req: PenaltyTestRequest,
    store: PenaltyPolicyStore = Depends(get_store),
    calculator: PenaltyCalculator = Depends(get_calculator),
):
    """What-if calculation against the live policy."""
    if req.amount in (None, "", 0) or req.due_date in (None, ""):
        raise HTTPException(status_code=400, detail="Amount and due date are required")

    try:
        result = calculator.calculate(req.amount, req.due_date, req.payment_date)
    except InputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Penalty test calculation failed")
        raise HTTPException(
            status_code=500, detail="Failed to test penalty calculation"
        ) from exc

    policy = store.get()
    return PenaltyTestResponse(
        test_result=result,
        formatted=format_penalty_info(result, policy.currency),
        config=store.api_view(),
    )


@router.get("/stats", response_model=PenaltyStats)
def read_penalty_stats(store: PenaltyPolicyStore = Depends(get_store)):
    """Policy-derived figures. Collection aggregates are reported as zero."""
    # TODO: fill the three aggregates from the repayment ledger once it exposes penalty totals.
    return PenaltyStats(
        penalty_rate=store.rate_percentage(),
        grace_period_days=store.grace_period_days(),
        system_enabled=store.is_enabled(),
    )


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: ServiceSettings | None = None,
    store: PenaltyPolicyStore | None = None,
) -> FastAPI:
    """Build the API with its own policy store and calculator.

    Each app owns one store; the policy starts at the defaults and lives as
    long as the process.
    """
    settings = settings or ServiceSettings()
    store = store or PenaltyPolicyStore()

    application = FastAPI(
        title="FUNDLI Penalty Configuration API",
        version=fundli_penalty.__version__,
        description=(
            "Admin API for the late-repayment penalty policy: read and update "
            "the rate, grace period, cap and switch, and run what-if "
            "calculations against the live policy."
        ),
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.settings = settings
    application.state.policy_store = store
    application.state.calculator = PenaltyCalculator(store, day_divisor=settings.day_divisor)

    @application.get("/health")
    def health_check():
        """Health check for the load balancer."""
        return {"status": "ok"}

    @application.get("/")
    def root() -> dict[str, Any]:
        return {
            "name": "FUNDLI Penalty Configuration API",
            "version": fundli_penalty.__version__,
            "day_divisor": settings.day_divisor,
            "start_here": "GET /penalty-config",
            "docs": "GET /docs (interactive Swagger UI)",
        }

    application.include_router(router)
    return application


app = create_app(ServiceSettings.from_env())


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    settings = ServiceSettings.from_env()
    setup_logging("fundli_penalty", level=settings.log_level)
    logger.info(
        "Starting penalty API on %s:%d (day divisor: %s)",
        settings.host, settings.port, settings.day_divisor,
    )
    uvicorn.run(
        "fundli_penalty.api.server:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
