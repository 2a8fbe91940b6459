"""Background batch download scheduling."""

from .controller import TaskLifecycleController
from .guard import ExecutionGuard, should_run
from .recorder import OutcomeRecorder
from .registrar import ScheduleRegistrar
from .requirement import resolve_download_requirement
from .service import BatchDownloadScheduler
from .timing import TimeWindowPlanner, build_schedule_window, next_run_time

__all__ = [
    "BatchDownloadScheduler",
    "ExecutionGuard",
    "OutcomeRecorder",
    "ScheduleRegistrar",
    "TaskLifecycleController",
    "TimeWindowPlanner",
    "build_schedule_window",
    "next_run_time",
    "resolve_download_requirement",
    "should_run",
]
