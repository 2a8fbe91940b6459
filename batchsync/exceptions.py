"""Exceptions for the background batch download scheduler."""


class BatchSyncError(Exception):
    """Base exception for batchsync errors."""

    pass


class SchedulerConfigurationError(BatchSyncError):
    """Raised when the schedule configuration is invalid."""

    pass


class DownloadError(BatchSyncError):
    """Raised when the batch download pipeline fails."""

    pass


class ProcessingError(BatchSyncError):
    """Raised when processing downloaded batches fails."""

    pass


class SubmissionError(BatchSyncError):
    """Raised when the host scheduler rejects a schedule request."""

    pass
