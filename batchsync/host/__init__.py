"""Host scheduler and clock implementations."""

from .clock import ManualClock, SystemClock
from .local import LocalHostScheduler
from .memory import InMemoryHostScheduler
from .task import BackgroundTask

__all__ = [
    "BackgroundTask",
    "InMemoryHostScheduler",
    "LocalHostScheduler",
    "ManualClock",
    "SystemClock",
]
