"""Utility functions for the application."""

from datetime import UTC, datetime, time, timedelta

from batchsync.constants import CLOCK_TIME_FORMAT


def get_current_timestamp() -> str:
    """Get current timestamp in ISO8601 format."""
    return datetime.now(UTC).isoformat()


def parse_clock_time(value: str) -> time:
    """Parse a wall-clock time in HH:MM format.

    Args:
        value: Time string such as "08:00"

    Returns:
        Parsed time of day

    Raises:
        ValueError: If the string is not a valid HH:MM time
    """
    return datetime.strptime(value.strip(), CLOCK_TIME_FORMAT).time()


def whole_minutes(delta: timedelta) -> int:
    """Return the number of whole minutes in a duration, truncated toward zero."""
    return int(delta.total_seconds() / 60)
