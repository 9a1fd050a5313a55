"""Service settings read from the environment."""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field

DayDivisor = Literal["legacy", "calendar"]


class ServiceSettings(BaseModel):
    """Runtime settings for the penalty API process.

    ``day_divisor`` selects how the calculator turns post-grace lateness into
    billable days; see ``fundli_penalty.engine.calculator``.
    """

    host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port for uvicorn")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Level for the fundli_penalty logger tree.",
    )
    day_divisor: DayDivisor = Field(
        default="legacy",
        description="'legacy' = divisor used by existing penalty records; "
                    "'calendar' = one calendar day (86,400,000 ms).",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware.",
    )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ServiceSettings":
        """Build settings from ``PENALTY_*`` environment variables.

        Unset variables fall back to the field defaults.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if "PENALTY_API_HOST" in env:
            values["host"] = env["PENALTY_API_HOST"]
        if "PENALTY_API_PORT" in env:
            values["port"] = env["PENALTY_API_PORT"]
        if "PENALTY_LOG_LEVEL" in env:
            values["log_level"] = env["PENALTY_LOG_LEVEL"].upper()
        if "PENALTY_DAY_DIVISOR" in env:
            values["day_divisor"] = env["PENALTY_DAY_DIVISOR"].lower()
        if "PENALTY_CORS_ORIGINS" in env:
            values["cors_origins"] = [
                origin.strip()
                for origin in env["PENALTY_CORS_ORIGINS"].split(",")
                if origin.strip()
            ]
        return cls(**values)
