"""Clock implementations."""

from datetime import datetime, timedelta

from batchsync.interfaces.clock import Clock


class SystemClock(Clock):
    """Wall clock in the local timezone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class ManualClock(Clock):
    """Clock that only moves when told to, for simulations and tests."""

    def __init__(self, start: datetime) -> None:
        if start.tzinfo is None:
            raise ValueError("ManualClock requires a timezone-aware start time")
        self._now = start

    def now(self) -> datetime:
        return self._now

    def set(self, value: datetime) -> None:
        self._now = value

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward and return the new instant."""
        self._now += delta
        return self._now
