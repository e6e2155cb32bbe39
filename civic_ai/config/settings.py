"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Civic AI"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    check_ai_on_startup: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @model_validator(mode="after")
    def validate_pipeline_limits(self) -> "Settings":
        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        for field_name in ("rate_limit_interval_ms", "retry_base_delay_ms"):
            value = getattr(self, field_name)
            if value < 0:
                raise ValueError(f"{field_name} must not be negative, got {value}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        if not 0 <= self.low_confidence_threshold <= 100:
            raise ValueError(
                f"low_confidence_threshold must be within [0, 100], got {self.low_confidence_threshold}"
            )
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).warning(
                "allowed_origins is set to ['*'], consider restricting in production"
            )
        return self

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_rest_endpoint: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 30.0

    # Classification pipeline
    rate_limit_interval_ms: int = 2000
    retry_max_attempts: int = 3
    retry_base_delay_ms: int = 1000
    low_confidence_threshold: int = 30

    # CORS
    allowed_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
