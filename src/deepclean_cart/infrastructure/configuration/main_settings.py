from enum import StrEnum
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from deepclean_cart.core.exceptions import ConfigurationError


class AppEnvironment(StrEnum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


DEFAULT_API_BASE_URLS = {
    AppEnvironment.DEVELOPMENT: "http://192.168.29.65:5001/api",
    AppEnvironment.STAGING: "https://staging-api.deepcleanhub.com/api",
    AppEnvironment.PRODUCTION: "https://api.deepcleanhub.com/api",
}


class Settings(BaseSettings):
    """Runtime configuration for the cart client, read from env and ``.env``."""

    # ── API ──
    app_env: AppEnvironment = Field(default=AppEnvironment.DEVELOPMENT, alias="APP_ENV")
    api_base_url: str = Field(default="", alias="API_BASE_URL")
    request_timeout_seconds: float = Field(default=10.0, alias="REQUEST_TIMEOUT_SECONDS")

    # ── Retry (GET only) ──
    max_get_retries: int = Field(default=3, alias="MAX_GET_RETRIES")
    retry_base_delay_seconds: float = Field(default=1.0, alias="RETRY_BASE_DELAY_SECONDS")
    retry_max_delay_seconds: float = Field(default=10.0, alias="RETRY_MAX_DELAY_SECONDS")

    # ── Local storage ──
    cache_ttl_seconds: float = Field(default=300.0, alias="CACHE_TTL_SECONDS")
    cache_dir: Path | None = Field(default=None, alias="CACHE_DIR")
    token_store_path: Path | None = Field(default=None, alias="TOKEN_STORE_PATH")

    # ── Behaviour ──
    optimistic_updates: bool = Field(default=False, alias="OPTIMISTIC_UPDATES")
    rollback_bookings_on_failure: bool = Field(default=False, alias="ROLLBACK_BOOKINGS_ON_FAILURE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "console"] | None = Field(default=None, alias="LOG_FORMAT")
    tracing_enabled: bool = Field(default=False, alias="TRACING_ENABLED")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("api_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    @model_validator(mode="after")
    def apply_environment_defaults(self) -> "Settings":
        if not self.api_base_url:
            self.api_base_url = DEFAULT_API_BASE_URLS[self.app_env]
        return self

    @property
    def cache_ttl_ms(self) -> float:
        return self.cache_ttl_seconds * 1000

    def validate_runtime(self) -> None:
        """Reject values that would make the client misbehave at runtime."""
        if not self.api_base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                "API_BASE_URL must be an http(s) URL", context={"api_base_url": self.api_base_url}
            )
        if self.request_timeout_seconds <= 0:
            raise ConfigurationError("REQUEST_TIMEOUT_SECONDS must be positive")
        if self.max_get_retries < 0:
            raise ConfigurationError("MAX_GET_RETRIES cannot be negative")
        if self.retry_base_delay_seconds > self.retry_max_delay_seconds:
            raise ConfigurationError(
                "RETRY_BASE_DELAY_SECONDS cannot exceed RETRY_MAX_DELAY_SECONDS",
                context={
                    "base": self.retry_base_delay_seconds,
                    "max": self.retry_max_delay_seconds,
                },
            )
        if self.cache_ttl_seconds <= 0:
            raise ConfigurationError("CACHE_TTL_SECONDS must be positive")
        if self.app_env is AppEnvironment.PRODUCTION and self.api_base_url.startswith("http://"):
            raise ConfigurationError("Production requires an https API_BASE_URL")
