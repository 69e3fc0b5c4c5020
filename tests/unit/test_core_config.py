"""Unit tests for Settings validation.

Tests cover:
- Required fields and defaults
- URL normalization
- Secret key length
- Positive numeric settings
- Production-only Stripe key prefix checks
- Redis URL requirement for the redis rate limit backend
"""

import pytest
from pydantic import ValidationError

from src.core.config import Settings
from src.core.enums import Environment

BASE = {
    "database_url": "sqlite+aiosqlite:///:memory:",
    "api_base_url": "https://api.cloudvault.test",
    "secret_key": "k" * 32,
    "stripe_secret_key": "sk_test_1",
    "stripe_webhook_secret": "whsec_1",
}


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **{**BASE, **overrides})


@pytest.mark.unit
class TestSettings:
    """Settings parsing and validation."""

    def test_defaults(self):
        settings = _settings(environment="development")

        assert settings.api_v1_prefix == "/api/v1"
        assert settings.rate_limit_backend == "memory"
        assert settings.rate_limit_failure_policy == "fail_open"
        assert settings.billing_unresolved_owner_policy == "acknowledge"
        assert settings.webhook_dedup_capacity == 1000
        assert settings.stripe_webhook_tolerance_seconds == 300
        assert settings.is_development is True

    def test_trailing_slash_removed_from_base_url(self):
        settings = _settings(api_base_url="https://api.cloudvault.test/")

        assert settings.api_base_url == "https://api.cloudvault.test"

    def test_short_secret_key_rejected(self):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            _settings(secret_key="short")

    @pytest.mark.parametrize(
        "field",
        [
            "webhook_dedup_capacity",
            "rate_limit_sweep_interval_seconds",
            "stripe_webhook_tolerance_seconds",
        ],
    )
    def test_non_positive_values_rejected(self, field):
        with pytest.raises(ValidationError, match="must be positive"):
            _settings(**{field: 0})

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            _settings(rate_limit_failure_policy="fail_sideways")

    def test_redis_backend_requires_url(self):
        with pytest.raises(ValidationError, match="redis_url is required"):
            _settings(rate_limit_backend="redis")

    def test_redis_backend_with_url(self):
        settings = _settings(
            rate_limit_backend="redis", redis_url="redis://localhost:6379/0"
        )

        assert settings.redis_url == "redis://localhost:6379/0"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("stripe_secret_key", "pk_live_oops"),
            ("stripe_webhook_secret", "secret"),
        ],
    )
    def test_production_requires_stripe_prefixes(self, field, value):
        with pytest.raises(ValidationError, match=field):
            _settings(environment=Environment.PRODUCTION, **{field: value})

    def test_placeholders_allowed_outside_production(self):
        settings = _settings(
            environment=Environment.DEVELOPMENT,
            stripe_secret_key="placeholder",
            stripe_webhook_secret="placeholder",
        )

        assert settings.stripe_secret_key == "placeholder"

    def test_production_with_valid_keys(self):
        settings = _settings(environment=Environment.PRODUCTION)

        assert settings.is_production is True
        assert settings.is_development is False

    def test_missing_required_field(self, monkeypatch):
        monkeypatch.delenv("STRIPE_WEBHOOK_SECRET", raising=False)
        values = {k: v for k, v in BASE.items() if k != "stripe_webhook_secret"}

        with pytest.raises(ValidationError):
            Settings(_env_file=None, **values)
