"""Arming the host scheduler for the next background batch download."""

import logging
from datetime import datetime, timedelta

from batchsync.constants import DEBUG_SCHEDULE_DELAY
from batchsync.exceptions import SubmissionError
from batchsync.interfaces.clock import Clock
from batchsync.interfaces.host import HostScheduler, TaskHandler
from batchsync.interfaces.signals import AuthorizationSignal
from batchsync.log import get_logger
from batchsync.models.domain.schedule import ScheduleRequest
from batchsync.scheduler.timing import TimeWindowPlanner


class ScheduleRegistrar:
    """Registers the background task and submits timed requests to the host."""

    def __init__(
        self,
        host: HostScheduler,
        authorization: AuthorizationSignal,
        planner: TimeWindowPlanner,
        clock: Clock,
        task_identifier: str,
        requires_network: bool = True,
        debug_delay: timedelta = DEBUG_SCHEDULE_DELAY,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the registrar.

        Args:
            host: Host scheduler receiving the requests
            authorization: Exposure notification authorization signal
            planner: Planner producing the next run time
            clock: Source of the current instant
            task_identifier: Fixed identifier of the background task
            requires_network: Whether runs require network connectivity
            debug_delay: Delay used by manually scheduled debug runs
            logger: Logger to use instead of the module logger
        """
        self.host = host
        self.authorization = authorization
        self.planner = planner
        self.clock = clock
        self.task_identifier = task_identifier
        self.requires_network = requires_network
        self.debug_delay = debug_delay
        self.logger = logger or get_logger(__name__)

    def register(self, handler: TaskHandler) -> None:
        """Register the task handler with the host and arm the first run."""
        self.host.register(self.task_identifier, handler)
        self.logger.info(f"Registered background task: {self.task_identifier}")
        self.arm_next()

    def arm_next(self, now: datetime | None = None) -> ScheduleRequest | None:
        """Arm the next scheduled run if authorization has been granted.

        Safe to call repeatedly: an identical pending request is kept and a
        different one is replaced, so requests never stack up.

        Args:
            now: Instant to plan from (defaults to the clock)

        Returns:
            The pending request after arming, or None if nothing is armed
        """
        if not self.authorization.is_authorized():
            self.logger.debug(
                "Not scheduling background task, exposure notifications "
                f"are {self.authorization.current_status().value}"
            )
            return None

        now = now or self.clock.now()
        next_time = self.planner.next_run_time(now)

        armed = None
        if next_time is not None:
            armed = self._submit(self._build_request(next_time))

        self.pending_requests()
        return armed

    def arm_for_debugging(self, now: datetime | None = None) -> ScheduleRequest | None:
        """Drop all pending requests and arm a run shortly from now.

        Bypasses the authorization gate and the daily window.
        """
        self.host.cancel_all()
        now = now or self.clock.now()
        return self._submit(self._build_request(now + self.debug_delay))

    def pending_requests(self) -> list[ScheduleRequest]:
        """Return and log the host's pending requests."""
        pending = self.host.pending_requests()
        self.logger.debug(f"Pending task requests: {pending}")
        return pending

    def _build_request(self, earliest_begin: datetime) -> ScheduleRequest:
        return ScheduleRequest(
            identifier=self.task_identifier,
            earliest_begin=earliest_begin,
            requires_network=self.requires_network,
        )

    def _submit(self, request: ScheduleRequest) -> ScheduleRequest | None:
        if request in self.host.pending_requests():
            self.logger.debug(
                "Background task already scheduled at "
                f"{request.earliest_begin.isoformat()}"
            )
            return request

        try:
            self.host.submit(request)
        except SubmissionError as e:
            self.logger.error(f"Failed to schedule background batch download task: {e}")
            return None

        self.logger.debug(
            "Successfully scheduled background batch download task at "
            f"{request.earliest_begin.isoformat()}: {request.identifier}"
        )
        return request
