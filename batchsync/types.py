"""Common type definitions for the batchsync system."""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class HealthStatus(str, Enum):
    """Health status of the device owner, owned by the health repository."""

    HEALTHY = "healthy"
    UNDER_SELF_MONITORING = "under_self_monitoring"
    PROBABLY_SICK = "probably_sick"
    ATTESTED_SICKNESS = "attested_sickness"


class DownloadRequirement(str, Enum):
    """Breadth of historical batches the download pipeline should fetch."""

    # Seven-day batch plus the daily batches
    WIDE_SCOPE = "seven_days_batch_and_daily_batches"
    # Fourteen-day batch only
    NARROW_SCOPE = "only_fourteen_days_batch"


class AuthorizationStatus(str, Enum):
    """Exposure notification authorization as reported by the host."""

    AUTHORIZED = "authorized"
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    RESTRICTED = "restricted"


class RunClassification(str, Enum):
    """Classification of a single background run."""

    SUCCESS = "success"
    CANCELLED_REDUNDANT = "cancelled_redundant"
    DOWNLOAD_ERROR = "download_error"
    TIMEOUT = "timeout"


class TaskState(str, Enum):
    """Lifecycle state of the background download task."""

    IDLE = "idle"
    STARTED = "started"
    COMPLETED_SUCCESS = "completed_success"
    COMPLETED_FAILURE = "completed_failure"
    EXPIRED = "expired"
    REARMED = "rearmed"


class HostSchedulerStatus(str, Enum):
    """Status of the local host scheduler loop."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    ERROR = "error"
