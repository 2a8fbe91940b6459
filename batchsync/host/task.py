"""Task handle passed to background task handlers."""

from batchsync.interfaces.host import HostTask
from batchsync.log import get_logger

logger = get_logger(__name__)


class BackgroundTask(HostTask):
    """Host task handle tracking completion reports and expiration."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.reports: list[bool] = []
        self._expired = False

    @property
    def is_expired(self) -> bool:
        return self._expired

    @property
    def completion(self) -> bool | None:
        """First completion status reported, if any."""
        return self.reports[0] if self.reports else None

    @property
    def is_finished(self) -> bool:
        return self._expired or bool(self.reports)

    def set_completed(self, success: bool) -> None:
        if self._expired:
            logger.warning(f"Completion reported for expired task {self.identifier}")
        self.reports.append(success)

    def expire(self) -> None:
        """Expire the task and run its expiration handler.

        Ignored once the task has finished.
        """
        if self.is_finished:
            return
        self._expired = True
        logger.debug(f"Task {self.identifier} ran out of time")
        if self.expiration_handler:
            self.expiration_handler()
