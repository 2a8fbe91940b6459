"""Lifecycle of a single background batch download invocation."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from functools import partial

from batchsync.exceptions import DownloadError, ProcessingError
from batchsync.interfaces.clock import Clock
from batchsync.interfaces.host import HostTask
from batchsync.interfaces.pipelines import (
    DownloadPipeline,
    DownloadProgress,
    ProcessingPipeline,
)
from batchsync.interfaces.signals import HealthStatusProvider
from batchsync.log import get_logger
from batchsync.models.domain.batch import BatchSet, ProcessingOutcome
from batchsync.models.domain.outcome import RunOutcome
from batchsync.models.domain.task import SchedulerStatus, TaskStats
from batchsync.scheduler.guard import ExecutionGuard
from batchsync.scheduler.recorder import OutcomeRecorder
from batchsync.scheduler.registrar import ScheduleRegistrar
from batchsync.scheduler.requirement import resolve_download_requirement
from batchsync.types import TaskState


class TaskLifecycleController:
    """Runs one background invocation from guard check to re-arming.

    State flow::

        IDLE -> STARTED -> COMPLETED_SUCCESS | COMPLETED_FAILURE | EXPIRED
             -> REARMED -> IDLE

    Every terminal state re-arms the next scheduled run, so the schedule
    never silently stops. After the host expires a task no completion is
    reported for it.
    """

    def __init__(
        self,
        guard: ExecutionGuard,
        recorder: OutcomeRecorder,
        health: HealthStatusProvider,
        download: DownloadPipeline,
        processing: ProcessingPipeline,
        registrar: ScheduleRegistrar,
        clock: Clock,
        on_processing_result: Callable[[ProcessingOutcome], Awaitable[None]]
        | None = None,
        on_state_change: Callable[[TaskState], Awaitable[None]] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            guard: Redundant-run guard
            recorder: Outcome and last-success bookkeeping
            health: Current health status provider
            download: Batch download pipeline
            processing: Batch processing (risk calculation) pipeline
            registrar: Registrar used to re-arm the next run
            clock: Source of the current instant
            on_processing_result: Callback receiving successful processing results
            on_state_change: Callback when the lifecycle state changes
            logger: Logger to use instead of the module logger
        """
        self.guard = guard
        self.recorder = recorder
        self.health = health
        self.download = download
        self.processing = processing
        self.registrar = registrar
        self.clock = clock
        self.on_processing_result = on_processing_result
        self.on_state_change = on_state_change
        self.logger = logger or get_logger(__name__)

        self.state = TaskState.IDLE
        self.stats = TaskStats()
        self._lock = asyncio.Lock()

    async def handle_invocation(self, task: HostTask) -> None:
        """Handle one host invocation of the background task.

        Invocations are serialized, so a manual trigger waits for a running
        host invocation to finish.
        """
        async with self._lock:
            await self._run(task)

    def get_status(self) -> SchedulerStatus:
        """Get current state and statistics."""
        return SchedulerStatus(
            state=self.state.value,
            task_identifier=self.registrar.task_identifier,
            stats=self.stats,
            last_outcome=self.recorder.last_outcome(),
            config={
                "redundancy_threshold_minutes": int(
                    self.guard.threshold.total_seconds() // 60
                ),
                "requires_network": self.registrar.requires_network,
            },
        )

    async def _run(self, task: HostTask) -> None:
        self.stats.invocations += 1
        self.stats.last_invocation_time = self.clock.now()
        await self._set_state(TaskState.STARTED)
        self.logger.debug("Starting background batch download task.")

        try:
            terminal = await self._execute(task)
        except asyncio.CancelledError:
            self.logger.warning("Background batch download task was cancelled")
            self._rearm()
            self.state = TaskState.IDLE
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error in background batch download task: {e}")
            terminal = self._fail(task, e)

        await self._set_state(terminal)

        self._rearm()
        await self._set_state(TaskState.REARMED)
        await self._set_state(TaskState.IDLE)

    def _rearm(self) -> None:
        try:
            self.registrar.arm_next(self.clock.now())
        except Exception as e:
            self.logger.error(f"Failed to re-arm the background batch download task: {e}")

    async def _execute(self, task: HostTask) -> TaskState:
        now = self.clock.now()

        if task.is_expired:
            # Expired while waiting for a previous invocation or a callback
            return self._expire_early(now)

        last_run_at = self.recorder.last_successful_run_at()

        if last_run_at is not None and not self.guard.should_run(now, last_run_at):
            minutes = self.guard.elapsed_minutes(now, last_run_at)
            self.logger.debug(
                "Cancelling batch processing background task, because it "
                f"already happened {minutes} minutes ago."
            )
            self.recorder.record(RunOutcome.cancelled_redundant(now, minutes))
            task.set_completed(success=True)
            self.stats.redundant += 1
            return TaskState.COMPLETED_SUCCESS

        requirement = resolve_download_requirement(self.health.current_status())
        self.logger.info(f"Starting batch download with requirement {requirement.value}")

        progress = self.download.start(requirement)
        task.expiration_handler = partial(self._handle_expiration, progress)
        if task.is_expired:
            self._handle_expiration(progress)

        try:
            await progress.wait()
        except asyncio.CancelledError:
            progress.cancel()
            raise

        if task.is_expired or progress.cancelled:
            # Timeout was recorded by the expiration handler
            if not progress.cancelled and progress.exception() is None:
                self._discard(progress.result())
            self.stats.expirations += 1
            return TaskState.EXPIRED

        error = progress.exception()
        if error is not None:
            if not isinstance(error, DownloadError):
                self.logger.warning(f"Unexpected batch download failure: {error!r}")
            self.logger.error(
                "Failed to complete the background batch download task due "
                f"to an error: {error}."
            )
            return self._fail(task, error)

        await self._process(progress.result())

        if task.is_expired:
            self.stats.expirations += 1
            return TaskState.EXPIRED

        self.logger.debug("Successfully completed the background batch download task.")
        self.recorder.record(RunOutcome.success(self.clock.now()))
        task.set_completed(success=True)
        self.stats.successes += 1
        return TaskState.COMPLETED_SUCCESS

    async def _process(self, batches: BatchSet) -> None:
        """Run risk calculation; only its success advances the last run time."""
        try:
            outcome = await self.processing.process(batches)
        except ProcessingError as e:
            self.logger.error(f"Failed to process downloaded batches: {e}")
        except Exception as e:
            self.logger.error(f"Unexpected error while processing batches: {e!r}")
        else:
            self.recorder.mark_successful_run(self.clock.now())
            if self.on_processing_result:
                self.logger.debug("Passing the risk calculation result on.")
                try:
                    await self.on_processing_result(outcome)
                except Exception as e:
                    self.logger.error(f"Error in processing result callback: {e}")
        finally:
            self._discard(batches)

    def _discard(self, batches: BatchSet) -> None:
        try:
            self.download.discard(batches)
        except Exception as e:
            self.logger.error(f"Failed to remove downloaded batches: {e}")

    def _fail(self, task: HostTask, error: BaseException) -> TaskState:
        if task.is_expired:
            self.stats.expirations += 1
            return TaskState.EXPIRED

        detail = str(error) or type(error).__name__
        self.recorder.record(RunOutcome.download_error(self.clock.now(), detail))
        task.set_completed(success=False)
        self.stats.failures += 1
        self.stats.last_error_time = self.clock.now()
        return TaskState.COMPLETED_FAILURE

    def _expire_early(self, now: datetime) -> TaskState:
        self.logger.error(
            "Background batch download task ran out of time before it started."
        )
        self.recorder.record(RunOutcome.timeout(now))
        self.stats.expirations += 1
        return TaskState.EXPIRED

    def _handle_expiration(self, progress: DownloadProgress) -> None:
        progress.cancel()
        self.logger.error(
            "Failed to complete the background batch download task, because "
            "the task ran out of time."
        )
        self.recorder.record(RunOutcome.timeout(self.clock.now()))

    async def _set_state(self, state: TaskState) -> None:
        """Set the lifecycle state and notify the callback."""
        old_state = self.state
        self.state = state

        if old_state != state:
            self.logger.debug(f"State changed: {old_state.value} -> {state.value}")
            if self.on_state_change:
                try:
                    await self.on_state_change(state)
                except Exception as e:
                    self.logger.error(f"Error in state change callback: {e}")
