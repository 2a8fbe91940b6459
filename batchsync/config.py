"""Configuration management for the batchsync scheduler."""

import os
from datetime import time, timedelta
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from .constants import (
    DEBUG_SCHEDULE_DELAY,
    DEFAULT_DAILY_END,
    DEFAULT_DAILY_START,
    DEFAULT_EXECUTION_BUDGET_SECONDS,
    DEFAULT_INTERVAL_HOURS,
    REDUNDANCY_THRESHOLD,
    TASK_IDENTIFIER_SUFFIX,
)
from .exceptions import SchedulerConfigurationError
from .models.domain.schedule import ScheduleConfig
from .types import Environment
from .utils import parse_clock_time


class Settings(BaseModel):
    """Application settings."""

    # Environment
    version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Host Settings
    app_identifier: str = Field(
        default="at.roteskreuz.stopcorona",
        description="Application bundle identifier used to derive the task identifier",
    )
    requires_network: bool = Field(
        default=True, description="Whether runs require network connectivity"
    )

    # Schedule Settings
    daily_start: time = Field(
        default=DEFAULT_DAILY_START, description="Start of the daily active window"
    )
    daily_end: time = Field(
        default=DEFAULT_DAILY_END, description="End of the daily active window"
    )
    interval_hours: int = Field(
        default=DEFAULT_INTERVAL_HOURS,
        gt=0,
        description="Hours between scheduled runs inside the daily window",
    )
    redundancy_threshold_minutes: int = Field(
        default=int(REDUNDANCY_THRESHOLD.total_seconds() // 60),
        gt=0,
        description="Runs closer than this to the last success are skipped",
    )
    debug_delay_seconds: int = Field(
        default=int(DEBUG_SCHEDULE_DELAY.total_seconds()),
        gt=0,
        description="Delay for manually scheduled debug runs in seconds",
    )

    # Local Host Settings
    execution_budget_seconds: float = Field(
        default=DEFAULT_EXECUTION_BUDGET_SECONDS,
        gt=0,
        description="Execution budget granted to a run before it expires",
    )
    poll_interval_seconds: float = Field(
        default=1.0, gt=0, description="Polling interval of the local host loop"
    )

    # Persistence
    state_db_path: Path | None = Field(
        default=None, description="Custom path of the scheduler state database"
    )

    @model_validator(mode="after")
    def check_daily_window(self) -> "Settings":
        """Reject a daily window that does not start before it ends."""
        if self.daily_start >= self.daily_end:
            raise ValueError(
                f"daily_start ({self.daily_start}) must be before "
                f"daily_end ({self.daily_end})"
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING

    @property
    def task_identifier(self) -> str:
        """Fixed identifier the background task is registered under."""
        return self.app_identifier + TASK_IDENTIFIER_SUFFIX

    @property
    def schedule_config(self) -> ScheduleConfig:
        """Daily window and interval as a schedule configuration."""
        return ScheduleConfig(
            daily_start=self.daily_start,
            daily_end=self.daily_end,
            interval_hours=self.interval_hours,
        )

    @property
    def redundancy_threshold(self) -> timedelta:
        return timedelta(minutes=self.redundancy_threshold_minutes)

    @property
    def debug_delay(self) -> timedelta:
        return timedelta(seconds=self.debug_delay_seconds)


def _clock_time_from_env(name: str, default: str) -> time:
    value = os.getenv(name, default)
    try:
        return parse_clock_time(value)
    except ValueError as e:
        raise SchedulerConfigurationError(
            f"{name} must be a HH:MM time, got {value!r}"
        ) from e


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    daily_start = _clock_time_from_env("BATCHSYNC_DAILY_START", "08:00")
    daily_end = _clock_time_from_env("BATCHSYNC_DAILY_END", "20:00")

    requires_network = os.getenv(
        "BATCHSYNC_REQUIRES_NETWORK", "true"
    ).lower() in ["true", "1", "yes", "on"]

    state_db_path_str = os.getenv("BATCHSYNC_STATE_DB_PATH")
    state_db_path = Path(state_db_path_str) if state_db_path_str else None

    return Settings(
        environment=Environment(os.getenv("BATCHSYNC_ENV", "development")),
        log_level=os.getenv("BATCHSYNC_LOG_LEVEL", "INFO").upper(),
        app_identifier=os.getenv(
            "BATCHSYNC_APP_IDENTIFIER", "at.roteskreuz.stopcorona"
        ),
        requires_network=requires_network,
        daily_start=daily_start,
        daily_end=daily_end,
        interval_hours=int(os.getenv("BATCHSYNC_INTERVAL_HOURS", "4")),
        redundancy_threshold_minutes=int(
            os.getenv("BATCHSYNC_REDUNDANCY_THRESHOLD_MINUTES", "55")
        ),
        debug_delay_seconds=int(os.getenv("BATCHSYNC_DEBUG_DELAY_SECONDS", "60")),
        execution_budget_seconds=float(
            os.getenv("BATCHSYNC_EXECUTION_BUDGET_SECONDS", "30.0")
        ),
        poll_interval_seconds=float(
            os.getenv("BATCHSYNC_POLL_INTERVAL_SECONDS", "1.0")
        ),
        state_db_path=state_db_path,
    )


# Global settings instance
settings = load_settings()
