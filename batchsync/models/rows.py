"""SQLModel database models for batchsync."""

from sqlmodel import Field, SQLModel

from batchsync.utils import get_current_timestamp


class SchedulerStateRow(SQLModel, table=True):
    """Single-row table holding the durable scheduler state."""

    __tablename__ = "scheduler_state"

    state_id: int | None = Field(default=None, primary_key=True)
    last_successful_run_at: str | None = Field(
        default=None,
        description="ISO8601 completion time of the last full successful run",
    )
    last_outcome_display: str | None = Field(
        default=None, description="Display string of the most recent run outcome"
    )
    updated_at: str = Field(
        default_factory=get_current_timestamp,
        description="ISO8601 datetime - automatically updated",
    )
