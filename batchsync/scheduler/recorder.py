"""Run outcome bookkeeping."""

import threading
from datetime import datetime

from batchsync.interfaces.state import PersistentState
from batchsync.log import get_logger
from batchsync.models.domain.outcome import RunOutcome

logger = get_logger(__name__)


class OutcomeRecorder:
    """Persists the latest run outcome and the last successful run time.

    Last write wins; no history is kept. Reads and writes are serialized so
    that a manual trigger and a host invocation never interleave.
    """

    def __init__(self, state: PersistentState) -> None:
        self.state = state
        self._lock = threading.Lock()
        self._last_outcome: RunOutcome | None = None

    def record(self, outcome: RunOutcome) -> str:
        """Store the outcome's display string and return it."""
        display = outcome.describe()
        with self._lock:
            self._last_outcome = outcome
            self.state.set_last_outcome_display(display)
        logger.info(f"Recorded batch download result: {display}")
        return display

    def last_outcome(self) -> RunOutcome | None:
        """Outcome recorded by this process, if any."""
        with self._lock:
            return self._last_outcome

    def last_outcome_display(self) -> str | None:
        with self._lock:
            return self.state.get_last_outcome_display()

    def last_successful_run_at(self) -> datetime | None:
        with self._lock:
            return self.state.get_last_successful_run_at()

    def mark_successful_run(self, at: datetime) -> None:
        with self._lock:
            self.state.set_last_successful_run_at(at)
        logger.debug(f"Last successful batch processing at {at.isoformat()}")
