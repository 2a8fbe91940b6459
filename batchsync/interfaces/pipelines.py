"""Download and processing pipeline interfaces."""

import asyncio
from abc import ABC, abstractmethod

from batchsync.log import get_logger
from batchsync.models.domain.batch import BatchSet, ProcessingOutcome
from batchsync.types import DownloadRequirement

logger = get_logger(__name__)


class DownloadProgress:
    """Cancellable handle of an in-flight batch download."""

    def __init__(self, task: "asyncio.Task[BatchSet]") -> None:
        self._task = task
        self._cancel_requested = False

    def cancel(self) -> bool:
        """Cancel the download.

        Calling this on a finished or already cancelled download is a no-op.

        Returns:
            True if this call requested the cancellation
        """
        if self._cancel_requested or self._task.done():
            return False
        self._cancel_requested = True
        self._task.cancel()
        logger.debug("Batch download cancellation requested")
        return True

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    async def wait(self) -> None:
        """Wait until the download finishes, fails or is cancelled."""
        await asyncio.wait({self._task})

    def exception(self) -> BaseException | None:
        """Return the download failure of a finished, non-cancelled download."""
        return self._task.exception()

    def result(self) -> BatchSet:
        return self._task.result()


class DownloadPipeline(ABC):
    """Downloads exposure key batches for a requirement."""

    @abstractmethod
    async def fetch(self, requirement: DownloadRequirement) -> BatchSet:
        """Download the batches required for the given scope.

        Raises:
            DownloadError: If the download fails
        """
        pass

    @abstractmethod
    def discard(self, batches: BatchSet) -> None:
        """Release transient data of downloaded batches."""
        pass

    def start(self, requirement: DownloadRequirement) -> DownloadProgress:
        """Start downloading in the background and return its progress handle."""
        task = asyncio.create_task(self.fetch(requirement))
        return DownloadProgress(task)


class ProcessingPipeline(ABC):
    """Processes downloaded batches (risk calculation)."""

    @abstractmethod
    async def process(self, batches: BatchSet) -> ProcessingOutcome:
        """Process downloaded batches.

        Raises:
            ProcessingError: If processing fails
        """
        pass
