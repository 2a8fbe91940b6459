"""Redundant-run detection for the background batch download."""

from datetime import datetime, timedelta

from batchsync.constants import REDUNDANCY_THRESHOLD
from batchsync.utils import whole_minutes


def should_run(
    now: datetime,
    last_successful_run_at: datetime | None,
    threshold: timedelta = REDUNDANCY_THRESHOLD,
) -> bool:
    """Return False if the last successful run is closer than the threshold.

    Args:
        now: Current instant
        last_successful_run_at: Completion time of the last full successful run
        threshold: Minimum distance between two runs

    Returns:
        True if the run should proceed
    """
    if last_successful_run_at is None:
        return True
    return now - last_successful_run_at >= threshold


class ExecutionGuard:
    """Decides whether a triggered run is redundant."""

    def __init__(self, threshold: timedelta = REDUNDANCY_THRESHOLD) -> None:
        self.threshold = threshold

    def should_run(
        self, now: datetime, last_successful_run_at: datetime | None
    ) -> bool:
        return should_run(now, last_successful_run_at, self.threshold)

    def elapsed_minutes(self, now: datetime, last_successful_run_at: datetime) -> int:
        """Whole minutes since the last successful run."""
        return whole_minutes(now - last_successful_run_at)
