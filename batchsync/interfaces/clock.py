"""Clock interface."""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current timezone-aware instant."""
        pass
