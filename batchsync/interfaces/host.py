"""Host scheduler interfaces."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from batchsync.models.domain.schedule import ScheduleRequest


class HostTask(ABC):
    """Handle for one host invocation of a registered task.

    The host may call ``expire()`` at any time before a completion is
    reported. Once expired, the host has reclaimed the task and completion
    reports are no longer meaningful.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        self.expiration_handler: Callable[[], None] | None = None

    @abstractmethod
    def set_completed(self, success: bool) -> None:
        """Report the completion status of this invocation to the host."""
        pass

    @property
    @abstractmethod
    def is_expired(self) -> bool:
        pass


TaskHandler = Callable[[HostTask], Awaitable[None]]


class HostScheduler(ABC):
    """Operating-environment scheduler that invokes registered tasks."""

    @abstractmethod
    def register(self, identifier: str, handler: TaskHandler) -> None:
        """Register the handler invoked for tasks with this identifier."""
        pass

    @abstractmethod
    def submit(self, request: ScheduleRequest) -> None:
        """Submit a timed request.

        An accepted request replaces the pending request with the same
        identifier. A rejected request leaves the pending one in place.

        Raises:
            SubmissionError: If the host rejects the request
        """
        pass

    @abstractmethod
    def pending_requests(self) -> list[ScheduleRequest]:
        pass

    @abstractmethod
    def cancel(self, identifier: str) -> None:
        """Cancel the pending request for an identifier, if any."""
        pass

    @abstractmethod
    def cancel_all(self) -> None:
        pass
