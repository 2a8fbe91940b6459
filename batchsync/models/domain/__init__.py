"""Domain models shared by scheduler components."""

from .batch import Batch, BatchSet, ProcessingOutcome
from .outcome import RunOutcome
from .schedule import ScheduleConfig, ScheduleRequest, ScheduleWindow
from .task import (
    HostStats,
    HostStatus,
    SchedulerDiagnostics,
    SchedulerStatus,
    TaskStats,
)

__all__ = [
    "Batch",
    "BatchSet",
    "ProcessingOutcome",
    "RunOutcome",
    "ScheduleConfig",
    "ScheduleRequest",
    "ScheduleWindow",
    "HostStats",
    "HostStatus",
    "SchedulerDiagnostics",
    "SchedulerStatus",
    "TaskStats",
]
