"""Schedule domain models."""

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator


class ScheduleConfig(BaseModel):
    """Daily active window and interval for background runs."""

    model_config = ConfigDict(frozen=True)

    daily_start: time = Field(..., description="First run time of the day")
    daily_end: time = Field(..., description="Last allowed run time of the day")
    interval_hours: PositiveInt = Field(..., description="Hours between runs")

    @model_validator(mode="after")
    def check_window_order(self) -> "ScheduleConfig":
        """Ensure the window starts before it ends within one day."""
        if self.daily_start >= self.daily_end:
            raise ValueError(
                f"daily_start ({self.daily_start}) must be before "
                f"daily_end ({self.daily_end})"
            )
        return self


class ScheduleWindow(BaseModel):
    """Ordered run times for a single calendar day."""

    model_config = ConfigDict(frozen=True)

    day: date = Field(..., description="Calendar day the window belongs to")
    run_times: tuple[datetime, ...] = Field(
        ..., description="Strictly increasing run times within the daily window"
    )

    def next_after(self, now: datetime) -> datetime | None:
        """Return the first run time strictly after now, if any remain today."""
        return next((run_time for run_time in self.run_times if run_time > now), None)

    def __len__(self) -> int:
        return len(self.run_times)


class ScheduleRequest(BaseModel):
    """Timed request asking the host to invoke a task."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., description="Fixed task identifier")
    earliest_begin: datetime = Field(
        ..., description="Host must not start the task before this instant"
    )
    requires_network: bool = Field(
        default=True, description="Network connectivity required at execution"
    )
