"""Services built on top of the scheduler."""

from .diagnostics_service import SchedulerDiagnosticsService

__all__ = ["SchedulerDiagnosticsService"]
