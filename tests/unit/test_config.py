"""Test configuration validation and settings."""

import pytest
from pydantic import ValidationError

from shikshanam.config import DEFAULT_INTERNAL_TOKEN, DEFAULT_SECRET_KEY, Settings, get_settings, settings


class TestSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test built-in defaults when nothing is configured."""
        for name in (
            "SHIKSHANAM_GRAPHY_API_KEY",
            "SHIKSHANAM_GRAPHY_MID",
            "SHIKSHANAM_CMS_API_URL",
            "SHIKSHANAM_CMS_RETRY_DELAY",
            "SHIKSHANAM_RATE_LIMIT",
        ):
            monkeypatch.delenv(name, raising=False)

        defaults = Settings(_env_file=None)  # type: ignore[call-arg]

        assert defaults.graphy_base_url == "https://api.ongraphy.com"
        assert defaults.graphy_mid == "hyperquest"
        assert defaults.graphy_api_key is None
        assert defaults.graphy_configured is False
        assert defaults.cms_api_url == "http://localhost:3001"
        assert defaults.cms_cache_ttl_seconds == 300
        assert defaults.cms_cache_max_size == 100
        assert defaults.cms_max_retries == 3
        assert defaults.cms_retry_delay == 1.0
        assert defaults.rate_limit == "60/minute"
        assert defaults.internal_api_token == DEFAULT_INTERNAL_TOKEN

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHIKSHANAM_GRAPHY_MID", "other-shop")
        monkeypatch.setenv("SHIKSHANAM_CMS_CACHE_TTL_SECONDS", "60")

        configured = Settings()

        assert configured.graphy_mid == "other-shop"
        assert configured.cms_cache_ttl_seconds == 60

    def test_graphy_configured(self) -> None:
        assert Settings(graphy_mid="shop", graphy_api_key="k").graphy_configured is True
        assert Settings(graphy_mid="", graphy_api_key="k").graphy_configured is False

    def test_cache_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(cms_cache_max_size=0)

    def test_retries_cannot_be_negative(self) -> None:
        with pytest.raises(ValidationError):
            Settings(cms_max_retries=-1)

    def test_invalid_environment(self) -> None:
        with pytest.raises(ValidationError):
            Settings(environment="staging")  # type: ignore[arg-type]

    def test_is_lambda_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AWS_LAMBDA_FUNCTION_NAME", raising=False)
        assert Settings(environment="lambda").is_lambda_environment is True
        assert Settings(environment="development").is_lambda_environment is False

        monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "shikshanam-api")
        assert Settings(environment="development").is_lambda_environment is True

    def test_get_settings_returns_module_instance(self) -> None:
        assert get_settings() is settings


class TestProductionSecrets:
    """Test production refuses the built-in secrets."""

    def test_default_secret_key_rejected(self) -> None:
        with pytest.raises(ValidationError, match="SECRET_KEY"):
            Settings(environment="production", internal_api_token="real-token")

    def test_default_internal_token_rejected(self) -> None:
        with pytest.raises(ValidationError, match="INTERNAL_API_TOKEN"):
            Settings(environment="production", secret_key="real-secret")

    def test_custom_secrets_accepted(self) -> None:
        configured = Settings(
            environment="production", secret_key="real-secret", internal_api_token="real-token"
        )
        assert configured.secret_key != DEFAULT_SECRET_KEY

    def test_defaults_allowed_outside_production(self) -> None:
        assert Settings(environment="development").secret_key == DEFAULT_SECRET_KEY
