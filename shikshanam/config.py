"""Configuration using pydantic-settings."""

import os
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

DEFAULT_SECRET_KEY = "your-secret-key-change-in-production"  # noqa: S105
DEFAULT_INTERNAL_TOKEN = "shikshanam-internal-sync-2024"  # noqa: S105


class Settings(BaseSettings):
    """Application settings with validation and constants."""

    host: str = "0.0.0.0"  # nosec B104 - Required for container deployment
    port: int = 8000
    log_level: str = "INFO"
    log_file: str | None = None

    environment: Literal["development", "production", "lambda"] = "development"

    # Graphy LMS
    graphy_base_url: str = "https://api.ongraphy.com"
    graphy_mid: str = "hyperquest"
    graphy_api_key: str | None = None
    graphy_timeout: int = 30

    # CMS content
    cms_api_url: str = "http://localhost:3001"
    cms_cache_ttl_seconds: int = 300
    cms_cache_max_size: int = Field(100, ge=1)
    cms_max_retries: int = Field(3, ge=0)
    cms_retry_delay: float = 1.0
    cms_request_timeout: int = 10

    internal_api_token: str = DEFAULT_INTERNAL_TOKEN

    # JWT settings
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 30

    rate_limit: str = "60/minute"
    redis_url: str | None = None

    cors_origins: list[str] = ["*"]

    @property
    def is_lambda_environment(self) -> bool:
        """Check if running in AWS Lambda."""
        return self.environment == "lambda" or bool(os.getenv("AWS_LAMBDA_FUNCTION_NAME"))

    @property
    def graphy_configured(self) -> bool:
        """Check if Graphy credentials are present."""
        return bool(self.graphy_mid and self.graphy_api_key)

    @model_validator(mode="after")
    def validate_production_secrets(self) -> "Settings":
        """Refuse the built-in secrets in production."""
        if self.environment != "production":
            return self
        if self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError(
                "Default SECRET_KEY used in production. "
                "Please set the SHIKSHANAM_SECRET_KEY environment variable."
            )
        if self.internal_api_token == DEFAULT_INTERNAL_TOKEN:
            raise ValueError(
                "Default INTERNAL_API_TOKEN used in production. "
                "Please set the SHIKSHANAM_INTERNAL_API_TOKEN environment variable."
            )
        return self

    class Config:
        """Pydantic config."""

        env_prefix = "SHIKSHANAM_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings() -> Settings:
    """Get settings instance (for dependency injection)."""
    return settings
