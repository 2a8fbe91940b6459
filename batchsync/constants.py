"""Application constants and configuration values."""

from datetime import time, timedelta
from typing import Final

# Suffix appended to the application identifier to form the task identifier
TASK_IDENTIFIER_SUFFIX: Final[str] = ".exposure-notification"

# Default daily active window for background downloads
DEFAULT_DAILY_START: Final[time] = time(8, 0)
DEFAULT_DAILY_END: Final[time] = time(20, 0)
DEFAULT_INTERVAL_HOURS: Final[int] = 4

# Runs closer than this to the last successful run are skipped
REDUNDANCY_THRESHOLD: Final[timedelta] = timedelta(minutes=55)

# Delay used when scheduling a run manually for debugging
DEBUG_SCHEDULE_DELAY: Final[timedelta] = timedelta(seconds=60)

# Time the local host grants a task before expiring it
DEFAULT_EXECUTION_BUDGET_SECONDS: Final[float] = 30.0

CLOCK_TIME_FORMAT: Final[str] = "%H:%M"
