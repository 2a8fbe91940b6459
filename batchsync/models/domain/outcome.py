"""Run outcome domain model."""

from datetime import datetime

from pydantic import BaseModel, Field

from batchsync.types import RunClassification


class RunOutcome(BaseModel):
    """Classification of the most recent background run."""

    timestamp: datetime = Field(..., description="When the outcome was recorded")
    classification: RunClassification
    detail: str | None = Field(default=None, description="Optional error detail")

    @classmethod
    def success(cls, timestamp: datetime) -> "RunOutcome":
        return cls(timestamp=timestamp, classification=RunClassification.SUCCESS)

    @classmethod
    def cancelled_redundant(
        cls, timestamp: datetime, elapsed_minutes: int
    ) -> "RunOutcome":
        return cls(
            timestamp=timestamp,
            classification=RunClassification.CANCELLED_REDUNDANT,
            detail=f"done {elapsed_minutes} minutes ago",
        )

    @classmethod
    def download_error(cls, timestamp: datetime, detail: str) -> "RunOutcome":
        return cls(
            timestamp=timestamp,
            classification=RunClassification.DOWNLOAD_ERROR,
            detail=detail,
        )

    @classmethod
    def timeout(cls, timestamp: datetime) -> "RunOutcome":
        return cls(timestamp=timestamp, classification=RunClassification.TIMEOUT)

    def describe(self) -> str:
        """Render the outcome as a human-readable display string.

        Examples:
            ``2026-10-17T08:00:00+02:00: Success``
            ``2026-10-17T08:00:00+02:00: Cancelled because done 12 minutes ago.``
        """
        prefix = self.timestamp.isoformat()
        match self.classification:
            case RunClassification.SUCCESS:
                return f"{prefix}: Success"
            case RunClassification.CANCELLED_REDUNDANT:
                return f"{prefix}: Cancelled because {self.detail}."
            case RunClassification.DOWNLOAD_ERROR:
                return f"{prefix}: Download error: {self.detail}"
            case RunClassification.TIMEOUT:
                return f"{prefix}: Background task ran out of time."
