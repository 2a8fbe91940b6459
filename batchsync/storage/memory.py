"""In-memory scheduler state."""

from datetime import datetime

from batchsync.interfaces.state import PersistentState


class InMemoryPersistentState(PersistentState):
    """Scheduler state kept for the lifetime of the process."""

    def __init__(
        self,
        last_successful_run_at: datetime | None = None,
        last_outcome_display: str | None = None,
    ) -> None:
        self._last_successful_run_at = last_successful_run_at
        self._last_outcome_display = last_outcome_display

    def get_last_successful_run_at(self) -> datetime | None:
        return self._last_successful_run_at

    def set_last_successful_run_at(self, value: datetime) -> None:
        self._last_successful_run_at = value

    def get_last_outcome_display(self) -> str | None:
        return self._last_outcome_display

    def set_last_outcome_display(self, value: str) -> None:
        self._last_outcome_display = value
