"""Tests for the scheduler diagnostics service."""

from datetime import datetime, timedelta, timezone

import pytest

from batchsync.host.task import BackgroundTask
from batchsync.services.diagnostics_service import SchedulerDiagnosticsService
from batchsync.types import AuthorizationStatus

TZ = timezone(timedelta(hours=2))


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 10, 17, hour, minute, tzinfo=TZ)


@pytest.fixture
def diagnostics(scheduler):
    return SchedulerDiagnosticsService(scheduler)


class TestSchedulerDiagnosticsService:
    """Test the debug diagnostics surface."""

    def test_snapshot_before_any_run(self, diagnostics, scheduler):
        scheduler.register_background_task()

        snapshot = diagnostics.snapshot()

        assert snapshot.task_identifier == "com.example.app.exposure-notification"
        assert snapshot.authorized is True
        assert snapshot.state == "idle"
        assert snapshot.last_result is None
        assert snapshot.last_successful_run_at is None
        assert snapshot.next_run_time == at(16)
        assert [r.earliest_begin for r in snapshot.pending_requests] == [at(16)]

    @pytest.mark.asyncio
    async def test_last_result_after_run(self, diagnostics, scheduler):
        scheduler.register_background_task()

        await scheduler.controller.handle_invocation(
            BackgroundTask(scheduler.task_identifier)
        )

        assert diagnostics.last_result() == "2026-10-17T14:00:00+02:00: Success"
        assert diagnostics.snapshot().last_successful_run_at == at(14)

    def test_unauthorized_snapshot(self, diagnostics, authorization):
        authorization.status = AuthorizationStatus.DENIED

        snapshot = diagnostics.snapshot()

        assert snapshot.authorized is False
        assert snapshot.pending_requests == []

    def test_schedule_debug_run(self, diagnostics, scheduler, host):
        scheduler.register_background_task()

        request = diagnostics.schedule_debug_run()

        assert request.earliest_begin == at(14, 1)
        assert host.pending_requests() == [request]

    def test_schedule_debug_run_rejected(self, diagnostics, scheduler, host, caplog):
        scheduler.register_background_task()
        host.rejecting = True

        assert diagnostics.schedule_debug_run() is None
        assert "Debug run could not be scheduled" in caplog.text
