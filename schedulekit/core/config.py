# schedulekit/core/config.py
import logging
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytz


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


class Settings(BaseSettings):
    """Runtime knobs for the scheduling engine, read from SCHEDULEKIT_* env vars."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEDULEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_timezone: str = Field(
        default="UTC",
        description="Timezone used to render slots for guests that did not supply one",
    )
    slow_operation_threshold_s: float = Field(
        default=1.0,
        ge=0,
        description="Service operations slower than this are logged as warnings",
    )
    metrics_enabled: bool = Field(default=True, description="Record Prometheus metrics")
    log_level: str = Field(default="INFO")
    reject_past_override_dates: bool = Field(
        default=True,
        description="Override factories refuse dates before today (UTC)",
    )

    @field_validator("default_timezone")
    @classmethod
    def validate_default_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone identifier: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


settings = Settings()
