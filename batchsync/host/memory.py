"""In-process host scheduler."""

from collections.abc import Callable
from datetime import datetime

from batchsync.exceptions import SubmissionError
from batchsync.interfaces.clock import Clock
from batchsync.interfaces.host import HostScheduler, TaskHandler
from batchsync.log import get_logger
from batchsync.models.domain.schedule import ScheduleRequest

from .task import BackgroundTask

logger = get_logger(__name__)


class InMemoryHostScheduler(HostScheduler):
    """Host scheduler keeping at most one pending request per identifier.

    Submitting a request for an identifier replaces its pending request.
    Due requests are only invoked through ``run_due``.
    """

    def __init__(
        self,
        clock: Clock,
        network_available: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the host.

        Args:
            clock: Source of the current instant
            network_available: Predicate telling whether network is available
        """
        self.clock = clock
        self.network_available = network_available or (lambda: True)
        self.rejecting = False
        self.submissions: list[ScheduleRequest] = []
        self._handlers: dict[str, TaskHandler] = {}
        self._pending: dict[str, ScheduleRequest] = {}

    def register(self, identifier: str, handler: TaskHandler) -> None:
        if identifier in self._handlers:
            logger.warning(f"Replacing handler registered for {identifier}")
        self._handlers[identifier] = handler

    def submit(self, request: ScheduleRequest) -> None:
        if request.identifier not in self._handlers:
            raise SubmissionError(
                f"No handler registered for task identifier {request.identifier}"
            )
        if self.rejecting:
            raise SubmissionError("Host scheduler is not accepting requests")

        self._pending[request.identifier] = request
        self.submissions.append(request)

    def pending_requests(self) -> list[ScheduleRequest]:
        return list(self._pending.values())

    def cancel(self, identifier: str) -> None:
        self._pending.pop(identifier, None)

    def cancel_all(self) -> None:
        self._pending.clear()

    def due_requests(self, now: datetime | None = None) -> list[ScheduleRequest]:
        """Pending requests that may start at ``now``."""
        now = now or self.clock.now()
        network = self.network_available()
        return [
            request
            for request in self._pending.values()
            if request.earliest_begin <= now and (network or not request.requires_network)
        ]

    async def run_due(self, now: datetime | None = None) -> list[BackgroundTask]:
        """Invoke the handlers of all due requests.

        Returns:
            Task handles of the invocations that ran
        """
        tasks = []
        for request in self.due_requests(now):
            # A handler may re-arm, so only drop the request that is starting
            if self._pending.get(request.identifier) == request:
                del self._pending[request.identifier]

            task = BackgroundTask(request.identifier)
            logger.debug(f"Invoking background task {request.identifier}")
            try:
                await self._invoke(self._handlers[request.identifier], task)
            except Exception as e:
                logger.error(f"Background task {request.identifier} raised: {e}")
            tasks.append(task)
        return tasks

    async def _invoke(self, handler: TaskHandler, task: BackgroundTask) -> None:
        await handler(task)
