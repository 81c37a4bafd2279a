"""
Configuration settings for the classification guess stage.

All settings are loaded from environment variables prefixed with
CLASSIFICATION_ (e.g. CLASSIFICATION_SERVICE_URL). Use .env file for local
development. Settings are read once at startup and are read-only afterwards.
"""

from functools import lru_cache
from typing import Any, Optional
from urllib.parse import urlsplit

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from classification_guess.exceptions import ConfigurationError


HEADER_NAME_DEFAULT_VALUE = "X-Classification-Guess"
THREAD_COUNT_DEFAULT_VALUE = 2


class Settings(BaseSettings):
    """Stage settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLASSIFICATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Classification Guess Stage"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Classification service ===
    SERVICE_URL: str  # e.g. http://localhost:9000/email/classification/predict
    HEADER_NAME: str = HEADER_NAME_DEFAULT_VALUE
    TIMEOUT_IN_MS: Optional[int] = None  # None waits forever
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)

    # === Worker pool ===
    THREAD_COUNT: int = Field(default=THREAD_COUNT_DEFAULT_VALUE, gt=0)

    @field_validator("SERVICE_URL")
    @classmethod
    def _check_service_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("'serviceUrl' is mandatory")
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Expecting an http(s) URL for serviceUrl. Got {value}")
        return value

    @field_validator("HEADER_NAME")
    @classmethod
    def _check_header_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("'headerName' is mandatory")
        return value.strip()

    @field_validator("TIMEOUT_IN_MS")
    @classmethod
    def _check_timeout(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError(f"Non strictly positive timeout for timeoutInMs. Got {value}")
        return value

    @property
    def deadline_seconds(self) -> Optional[float]:
        """Caller-side deadline in seconds, or None for an unbounded wait."""
        if self.TIMEOUT_IN_MS is None:
            return None
        return self.TIMEOUT_IN_MS / 1000.0


def load_settings(**overrides: Any) -> Settings:
    """
    Load settings from the environment, applying explicit overrides.

    Raises:
        ConfigurationError: when a setting is missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Invalid classification guess configuration: {', '.join(fields)}",
            details={"errors": [err["msg"] for err in e.errors()], "fields": fields},
        ) from e


@lru_cache()
def get_settings() -> Settings:
    """Get settings singleton (loaded on first use)."""
    return load_settings()
