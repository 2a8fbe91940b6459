"""Task management domain models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from batchsync.models.domain.outcome import RunOutcome
from batchsync.models.domain.schedule import ScheduleRequest


class TaskStats(BaseModel):
    """Statistics for background task invocations."""

    invocations: int = 0
    successes: int = 0
    failures: int = 0
    redundant: int = 0
    expirations: int = 0
    last_invocation_time: datetime | None = None
    last_error_time: datetime | None = None


class SchedulerStatus(BaseModel):
    """Status information for the task lifecycle controller."""

    state: str
    task_identifier: str
    stats: TaskStats
    last_outcome: RunOutcome | None = None
    config: dict[str, Any]


class HostStats(BaseModel):
    """Statistics for the local host scheduler loop."""

    invocations: int = 0
    expirations: int = 0
    errors: int = 0
    start_time: datetime | None = None
    last_invocation_time: datetime | None = None


class HostStatus(BaseModel):
    """Status information for the local host scheduler loop."""

    status: str
    loop_running: bool
    pending: int
    stats: HostStats
    config: dict[str, Any]


class SchedulerDiagnostics(BaseModel):
    """Snapshot of the scheduler shown on the debug screen."""

    task_identifier: str
    authorized: bool
    state: str
    last_result: str | None = None
    last_successful_run_at: datetime | None = None
    next_run_time: datetime | None = None
    pending_requests: list[ScheduleRequest] = Field(default_factory=list)
