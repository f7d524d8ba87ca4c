from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    # Local dev: load from .env automatically.
    # In production: you typically inject real env vars instead.
    model_config = SettingsConfigDict(env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8")

    # Env vars:
    # - APP_NAME (optional)
    # - HOST / PORT: listen address
    # - LOG_LEVEL: DEBUG shows store mutations
    # - IDLE_TIMEOUT_SECONDS: keep-alive idle timeout
    # - SHUTDOWN_TIMEOUT_SECONDS: how long in-flight requests get on shutdown
    app_name: str = Field(default="Users API", validation_alias="APP_NAME")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8080, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    idle_timeout_seconds: int = Field(default=60, validation_alias="IDLE_TIMEOUT_SECONDS")
    shutdown_timeout_seconds: int = Field(default=10, validation_alias="SHUTDOWN_TIMEOUT_SECONDS")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        return level if level in _LOG_LEVELS else "INFO"


def get_settings() -> Settings:
    """Load settings from environment.

    Keep this as the single canonical constructor for Settings(). FastAPI
    dependencies and tests can override/monkeypatch this function.
    """
    return Settings()
