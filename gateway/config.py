# gateway/config.py
"""
Centralized application configuration using pydantic-settings.

All settings are read from environment variables or .env file.
Priority: environment variables > .env file > defaults.
"""

import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT: str = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    # --- Database ---
    DB_URL: str = Field(
        default="postgresql://localhost:5432/aerie",
        description="PostgreSQL connection URL (sqlite+aiosqlite URLs for local dev)"
    )
    DB_POOL_SIZE: int = Field(default=5, ge=1, description="Pooled connections kept open")
    DB_MAX_OVERFLOW: int = Field(default=15, ge=0, description="Extra connections beyond the pool size")
    DB_POOL_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Seconds to wait for a pooled connection before failing"
    )

    # --- Server ---
    HOST: str = Field(default="127.0.0.1", description="Server bind host")
    PORT: int = Field(default=9000, description="Server bind port")

    # --- Application ---
    VERSION: str = Field(
        default="1.0.0",
        description="Application version stamped into new views"
    )
    SERVICE_NAME: str = Field(default="aerie-gateway", description="Tracing service name")
    AUTH_USERNAME_HEADER: str = Field(
        default="x-auth-username",
        description="Header carrying the username authenticated by the session layer"
    )

    # --- Debug / Logging ---
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    LOGS_PATH: str = Field(
        default=os.path.join(PROJECT_ROOT, "logs"),
        description="Directory for access/error log files"
    )
    OTEL_ENABLED: bool = Field(default=False, description="Enable OpenTelemetry tracing")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v_upper


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance (singleton pattern)."""
    return Settings()


# --- Singleton instance for easy import ---
settings = get_settings()
