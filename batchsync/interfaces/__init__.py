"""Interfaces of the collaborators consumed by the scheduler."""

from .clock import Clock
from .host import HostScheduler, HostTask, TaskHandler
from .pipelines import DownloadPipeline, DownloadProgress, ProcessingPipeline
from .signals import AuthorizationSignal, HealthStatusProvider
from .state import PersistentState

__all__ = [
    "Clock",
    "HostScheduler",
    "HostTask",
    "TaskHandler",
    "DownloadPipeline",
    "DownloadProgress",
    "ProcessingPipeline",
    "AuthorizationSignal",
    "HealthStatusProvider",
    "PersistentState",
]
