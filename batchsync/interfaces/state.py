"""Persistent scheduler state interface."""

from abc import ABC, abstractmethod
from datetime import datetime


class PersistentState(ABC):
    """Durable storage for the scheduler's last run bookkeeping."""

    @abstractmethod
    def get_last_successful_run_at(self) -> datetime | None:
        """Return when the last full successful run completed, if ever."""
        pass

    @abstractmethod
    def set_last_successful_run_at(self, value: datetime) -> None:
        pass

    @abstractmethod
    def get_last_outcome_display(self) -> str | None:
        """Return the display string of the most recent run outcome."""
        pass

    @abstractmethod
    def set_last_outcome_display(self, value: str) -> None:
        pass
