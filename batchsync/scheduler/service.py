"""Wiring of the background batch download scheduler."""

from collections.abc import Awaitable, Callable

from batchsync.config import Settings
from batchsync.config import settings as default_settings
from batchsync.host.clock import SystemClock
from batchsync.interfaces.clock import Clock
from batchsync.interfaces.host import HostScheduler
from batchsync.interfaces.pipelines import DownloadPipeline, ProcessingPipeline
from batchsync.interfaces.signals import AuthorizationSignal, HealthStatusProvider
from batchsync.interfaces.state import PersistentState
from batchsync.log import get_logger
from batchsync.models.domain.batch import ProcessingOutcome
from batchsync.models.domain.schedule import ScheduleRequest
from batchsync.scheduler.controller import TaskLifecycleController
from batchsync.scheduler.guard import ExecutionGuard
from batchsync.scheduler.recorder import OutcomeRecorder
from batchsync.scheduler.registrar import ScheduleRegistrar
from batchsync.scheduler.timing import TimeWindowPlanner
from batchsync.types import TaskState

logger = get_logger(__name__)


class BatchDownloadScheduler:
    """Schedules and runs the periodic background batch download.

    Usage::

        scheduler = BatchDownloadScheduler(
            host=host,
            authorization=exposure_manager,
            health=health_repository,
            download=batch_download_service,
            processing=risk_calculation,
            state=SqlPersistentState(engine),
        )
        scheduler.register_background_task()
    """

    def __init__(
        self,
        host: HostScheduler,
        authorization: AuthorizationSignal,
        health: HealthStatusProvider,
        download: DownloadPipeline,
        processing: ProcessingPipeline,
        state: PersistentState,
        clock: Clock | None = None,
        settings: Settings | None = None,
        on_processing_result: Callable[[ProcessingOutcome], Awaitable[None]]
        | None = None,
        on_state_change: Callable[[TaskState], Awaitable[None]] | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.clock = clock or SystemClock()

        self.planner = TimeWindowPlanner(self.settings.schedule_config)
        self.guard = ExecutionGuard(self.settings.redundancy_threshold)
        self.recorder = OutcomeRecorder(state)
        self.registrar = ScheduleRegistrar(
            host=host,
            authorization=authorization,
            planner=self.planner,
            clock=self.clock,
            task_identifier=self.settings.task_identifier,
            requires_network=self.settings.requires_network,
            debug_delay=self.settings.debug_delay,
        )
        self.controller = TaskLifecycleController(
            guard=self.guard,
            recorder=self.recorder,
            health=health,
            download=download,
            processing=processing,
            registrar=self.registrar,
            clock=self.clock,
            on_processing_result=on_processing_result,
            on_state_change=on_state_change,
        )

    @property
    def task_identifier(self) -> str:
        return self.registrar.task_identifier

    def register_background_task(self) -> None:
        """Register the task handler with the host and arm the first run."""
        self.registrar.register(self.controller.handle_invocation)

    def schedule_background_task_if_needed(self) -> ScheduleRequest | None:
        """Arm the next run, e.g. after authorization has been granted."""
        return self.registrar.arm_next()

    def schedule_background_task_for_debugging(self) -> ScheduleRequest | None:
        """Replace all pending requests with one a short delay from now."""
        logger.info("Scheduling background batch download for debugging")
        return self.registrar.arm_for_debugging()
