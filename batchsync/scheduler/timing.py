"""Daily run-time planning for the background batch download."""

from datetime import date, datetime, timedelta, tzinfo

from batchsync.log import get_logger
from batchsync.models.domain.schedule import ScheduleConfig, ScheduleWindow

logger = get_logger(__name__)


def build_schedule_window(
    config: ScheduleConfig, today: date, tz: tzinfo | None = None
) -> ScheduleWindow:
    """Divide the daily window of a day into run times.

    Walks from ``daily_start`` in steps of ``interval_hours`` and stops at the
    first candidate outside ``[daily_start, daily_end]``. A trailing remainder
    shorter than one interval is dropped.

    Args:
        config: Daily window and interval
        today: Calendar day to plan
        tz: Timezone of the produced run times

    Returns:
        Schedule window whose first run time is ``daily_start``
    """
    start = datetime.combine(today, config.daily_start, tzinfo=tz)
    end = datetime.combine(today, config.daily_end, tzinfo=tz)
    step = timedelta(hours=config.interval_hours)

    run_times = [start]
    candidate = start + step
    while start <= candidate <= end:
        run_times.append(candidate)
        candidate += step

    return ScheduleWindow(day=today, run_times=tuple(run_times))


def next_run_time(config: ScheduleConfig, now: datetime) -> datetime | None:
    """Return the first planned run time strictly after now.

    The window is rebuilt for the calendar day containing ``now`` on every
    call. Returns None once the last run time of that day has passed.
    """
    window = build_schedule_window(config, now.date(), now.tzinfo)
    return window.next_after(now)


class TimeWindowPlanner:
    """Plans background run times inside a daily window."""

    def __init__(self, config: ScheduleConfig) -> None:
        self.config = config

    def window_for(self, today: date, tz: tzinfo | None = None) -> ScheduleWindow:
        return build_schedule_window(self.config, today, tz)

    def next_run_time(self, now: datetime) -> datetime | None:
        next_time = next_run_time(self.config, now)
        if next_time is None:
            logger.debug(f"No run time left today after {now.isoformat()}")
        return next_time
