"""Debug diagnostics for the background batch download scheduler."""

from batchsync.log import get_logger
from batchsync.models.domain.schedule import ScheduleRequest
from batchsync.models.domain.task import SchedulerDiagnostics
from batchsync.scheduler.service import BatchDownloadScheduler

logger = get_logger(__name__)


class SchedulerDiagnosticsService:
    """Exposes scheduler state and debug actions to a debug screen."""

    def __init__(self, scheduler: BatchDownloadScheduler) -> None:
        self.scheduler = scheduler

    def snapshot(self) -> SchedulerDiagnostics:
        """Collect the current scheduler diagnostics."""
        scheduler = self.scheduler
        return SchedulerDiagnostics(
            task_identifier=scheduler.task_identifier,
            authorized=scheduler.registrar.authorization.is_authorized(),
            state=scheduler.controller.state.value,
            last_result=scheduler.recorder.last_outcome_display(),
            last_successful_run_at=scheduler.recorder.last_successful_run_at(),
            next_run_time=scheduler.planner.next_run_time(scheduler.clock.now()),
            pending_requests=scheduler.registrar.pending_requests(),
        )

    def last_result(self) -> str | None:
        """Display string of the most recent run."""
        return self.scheduler.recorder.last_outcome_display()

    def schedule_debug_run(self) -> ScheduleRequest | None:
        """Arm a run shortly from now regardless of the daily window."""
        request = self.scheduler.schedule_background_task_for_debugging()
        if request is None:
            logger.warning("Debug run could not be scheduled")
        return request
