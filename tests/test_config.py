"""Validation tests for PenaltyPolicy, PenaltyPolicyUpdate and ServiceSettings."""

import pytest
from pydantic import ValidationError

from fundli_penalty.config.policy import POLICY_BOUNDS, PenaltyPolicy, PenaltyPolicyUpdate
from fundli_penalty.config.settings import ServiceSettings


class TestPenaltyPolicyDefaults:

    def test_default_construction(self):
        policy = PenaltyPolicy()
        assert policy.rate_per_day == 0.005
        assert policy.grace_period_hours == 24
        assert policy.max_penalty_days == 365
        assert policy.currency == "USD"
        assert policy.enabled is True

    def test_bounds_table(self):
        assert POLICY_BOUNDS == {
            "rate_per_day": (0.0, 1.0),
            "grace_period_hours": (0, 168),
            "max_penalty_days": (1, 3650),
        }


class TestPenaltyPolicyValidation:

    def test_rate_range(self):
        PenaltyPolicy(rate_per_day=0)
        PenaltyPolicy(rate_per_day=1)
        with pytest.raises(ValidationError):
            PenaltyPolicy(rate_per_day=-0.001)
        with pytest.raises(ValidationError):
            PenaltyPolicy(rate_per_day=1.001)

    def test_grace_range(self):
        PenaltyPolicy(grace_period_hours=0)
        PenaltyPolicy(grace_period_hours=168)
        with pytest.raises(ValidationError):
            PenaltyPolicy(grace_period_hours=169)

    def test_max_days_range(self):
        PenaltyPolicy(max_penalty_days=1)
        PenaltyPolicy(max_penalty_days=3650)
        with pytest.raises(ValidationError):
            PenaltyPolicy(max_penalty_days=0)
        with pytest.raises(ValidationError):
            PenaltyPolicy(max_penalty_days=3651)

    def test_enabled_is_strict_bool(self):
        with pytest.raises(ValidationError):
            PenaltyPolicy(enabled="false")

    def test_frozen(self):
        policy = PenaltyPolicy()
        with pytest.raises(ValidationError):
            policy.rate_per_day = 0.9

    def test_camel_case_aliases(self):
        policy = PenaltyPolicy.model_validate({"ratePerDay": 0.01, "maxPenaltyDays": 30})
        assert policy.rate_per_day == 0.01
        assert policy.max_penalty_days == 30
        assert "gracePeriodHours" in policy.model_dump(by_alias=True)

    def test_json_round_trip(self):
        orig = PenaltyPolicy(rate_per_day=0.02, currency="NGN", enabled=False)
        restored = PenaltyPolicy.model_validate_json(orig.model_dump_json(by_alias=True))
        assert restored == orig


class TestPenaltyPolicyUpdate:

    def test_only_set_fields_reported(self):
        assert PenaltyPolicyUpdate(rate_per_day=0.01).changes() == {"rate_per_day": 0.01}

    def test_camel_case_payload(self):
        update = PenaltyPolicyUpdate.model_validate({"gracePeriodHours": 12, "enabled": False})
        assert update.changes() == {"grace_period_hours": 12, "enabled": False}

    def test_bounds_not_checked_here(self):
        assert PenaltyPolicyUpdate(rate_per_day=5).changes() == {"rate_per_day": 5.0}

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            PenaltyPolicyUpdate.model_validate({"penaltyCap": 10})


class TestServiceSettings:

    def test_defaults(self):
        settings = ServiceSettings.from_env({})
        assert settings.host == "0.0.0.0"
        assert settings.port == 8000
        assert settings.log_level == "INFO"
        assert settings.day_divisor == "legacy"
        assert settings.cors_origins == ["*"]

    def test_from_env(self):
        settings = ServiceSettings.from_env({
            "PENALTY_API_HOST": "127.0.0.1",
            "PENALTY_API_PORT": "9000",
            "PENALTY_LOG_LEVEL": "debug",
            "PENALTY_DAY_DIVISOR": "CALENDAR",
            "PENALTY_CORS_ORIGINS": "http://localhost:3000, http://localhost:5173,",
        })
        assert settings.host == "127.0.0.1"
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"
        assert settings.day_divisor == "calendar"
        assert settings.cors_origins == ["http://localhost:3000", "http://localhost:5173"]

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("PENALTY_DAY_DIVISOR", "calendar")
        assert ServiceSettings.from_env().day_divisor == "calendar"

    def test_invalid_divisor_rejected(self):
        with pytest.raises(ValidationError):
            ServiceSettings.from_env({"PENALTY_DAY_DIVISOR": "weekly"})

    def test_invalid_port_rejected(self):
        with pytest.raises(ValidationError):
            ServiceSettings.from_env({"PENALTY_API_PORT": "0"})
