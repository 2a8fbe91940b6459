"""Read-only signals owned by other parts of the application."""

from abc import ABC, abstractmethod

from batchsync.types import AuthorizationStatus, HealthStatus


class HealthStatusProvider(ABC):
    """Provides the current health status of the device owner."""

    @abstractmethod
    def current_status(self) -> HealthStatus:
        pass


class AuthorizationSignal(ABC):
    """Provides the current exposure notification authorization status."""

    @abstractmethod
    def current_status(self) -> AuthorizationStatus:
        pass

    def is_authorized(self) -> bool:
        return self.current_status() == AuthorizationStatus.AUTHORIZED
