"""Downloaded batch and processing result models."""

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from batchsync.types import DownloadRequirement


class Batch(BaseModel):
    """A single downloaded batch of exposure keys."""

    name: str = Field(..., description="Batch name as published by the server")
    interval_days: int = Field(..., ge=1, description="Days covered by the batch")
    path: Path | None = Field(
        default=None, description="Local location of the transient batch data"
    )


class BatchSet(BaseModel):
    """Batches fetched for one download requirement."""

    requirement: DownloadRequirement
    batches: list[Batch] = Field(default_factory=list)
    downloaded_at: datetime = Field(default_factory=datetime.now)

    def __len__(self) -> int:
        return len(self.batches)


class ProcessingOutcome(BaseModel):
    """Result of processing a batch set."""

    processed_at: datetime = Field(default_factory=datetime.now)
    batch_count: int = Field(default=0, ge=0)
    details: dict[str, Any] = Field(default_factory=dict)
