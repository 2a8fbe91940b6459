"""Asyncio host scheduler running background tasks in-process."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from batchsync.config import Settings
from batchsync.interfaces.clock import Clock
from batchsync.interfaces.host import TaskHandler
from batchsync.log import configure_logging, get_logger
from batchsync.models.domain.task import HostStats, HostStatus
from batchsync.types import HostSchedulerStatus

from .memory import InMemoryHostScheduler
from .task import BackgroundTask

logger = get_logger(__name__)


class LocalHostScheduler(InMemoryHostScheduler):
    """Host scheduler with a background loop and an execution budget.

    The loop polls for due requests and invokes their handlers. A handler
    that outlives the execution budget has its task expired.
    """

    def __init__(
        self,
        clock: Clock,
        poll_interval_seconds: float = 1.0,
        execution_budget_seconds: float = 30.0,
        network_available: Callable[[], bool] | None = None,
        on_status_change: Callable[[HostSchedulerStatus], Awaitable[None]]
        | None = None,
    ) -> None:
        """Initialize the local host scheduler.

        Args:
            clock: Source of the current instant
            poll_interval_seconds: Interval between due-request checks in seconds
            execution_budget_seconds: Time granted to each invocation
            network_available: Predicate telling whether network is available
            on_status_change: Callback when status changes
        """
        super().__init__(clock, network_available)
        self.poll_interval_seconds = poll_interval_seconds
        self.execution_budget_seconds = execution_budget_seconds
        self.on_status_change = on_status_change

        self.status = HostSchedulerStatus.IDLE
        self.stats = HostStats()
        self._background_task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()

        logger.info(
            f"LocalHostScheduler initialized with {poll_interval_seconds}s poll "
            f"interval and {execution_budget_seconds}s execution budget"
        )

    @classmethod
    def from_settings(
        cls,
        clock: Clock,
        settings: Settings,
        network_available: Callable[[], bool] | None = None,
    ) -> "LocalHostScheduler":
        """Configure logging and create a host using the settings' loop timing."""
        configure_logging(settings)
        return cls(
            clock,
            poll_interval_seconds=settings.poll_interval_seconds,
            execution_budget_seconds=settings.execution_budget_seconds,
            network_available=network_available,
        )

    async def __aenter__(self) -> "LocalHostScheduler":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.stop()

    async def start(self) -> None:
        """Start the background loop."""
        if self._background_task and not self._background_task.done():
            logger.warning("Host scheduler loop already running")
            return

        self._stop_event.clear()
        self.stats.start_time = self.clock.now()
        await self._set_status(HostSchedulerStatus.RUNNING)
        self._background_task = asyncio.create_task(self._loop())
        logger.info("Local host scheduler started")

    async def stop(self) -> None:
        """Stop the background loop, cancelling a running invocation."""
        logger.info("Stopping local host scheduler...")
        self._stop_event.set()

        if self._background_task and not self._background_task.done():
            self._background_task.cancel()
            try:
                await self._background_task
            except asyncio.CancelledError:
                pass

        await self._set_status(HostSchedulerStatus.STOPPED)
        logger.info("Local host scheduler stopped")

    def get_status(self) -> HostStatus:
        """Get current status and statistics."""
        return HostStatus(
            status=self.status.value,
            loop_running=(
                self._background_task is not None and not self._background_task.done()
            ),
            pending=len(self.pending_requests()),
            stats=self.stats,
            config={
                "poll_interval_seconds": self.poll_interval_seconds,
                "execution_budget_seconds": self.execution_budget_seconds,
            },
        )

    async def _loop(self) -> None:
        """Background loop invoking due requests."""
        logger.info("Host scheduler loop started")

        while not self._stop_event.is_set():
            try:
                await self.run_due()
            except asyncio.CancelledError:
                logger.info("Host scheduler loop cancelled")
                break
            except Exception as e:
                self.stats.errors += 1
                logger.error(f"Error in host scheduler loop: {e}")

            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=self.poll_interval_seconds,
                )
            except asyncio.TimeoutError:
                # Timeout means check again
                pass

        logger.info("Host scheduler loop stopped")

    async def _invoke(self, handler: TaskHandler, task: BackgroundTask) -> None:
        """Run the handler, expiring its task once the budget is spent."""
        self.stats.invocations += 1
        self.stats.last_invocation_time = self.clock.now()

        invocation = asyncio.create_task(handler(task))
        try:
            done, _ = await asyncio.wait(
                {invocation}, timeout=self.execution_budget_seconds
            )
        except asyncio.CancelledError:
            invocation.cancel()
            raise
        if not done:
            logger.warning(
                f"Task {task.identifier} exceeded its "
                f"{self.execution_budget_seconds}s execution budget"
            )
            self.stats.expirations += 1
            task.expire()
            await invocation
            return

        invocation.result()

    async def _set_status(self, status: HostSchedulerStatus) -> None:
        """Set the status and notify the callback."""
        old_status = self.status
        self.status = status

        if old_status != status:
            logger.debug(f"Status changed: {old_status.value} -> {status.value}")
            if self.on_status_change:
                try:
                    await self.on_status_change(status)
                except Exception as e:
                    logger.error(f"Error in status change callback: {e}")
