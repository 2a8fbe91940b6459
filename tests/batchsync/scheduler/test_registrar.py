"""Tests for arming the host scheduler."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from batchsync.scheduler.registrar import ScheduleRegistrar
from batchsync.scheduler.timing import TimeWindowPlanner
from batchsync.types import AuthorizationStatus

TZ = timezone(timedelta(hours=2))
IDENTIFIER = "com.example.app.exposure-notification"


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 10, 17, hour, minute, tzinfo=TZ)


async def noop_handler(task):
    pass


@pytest.fixture
def registrar(host, authorization, clock, test_settings):
    """Registrar whose task identifier is already registered with the host."""
    host.register(IDENTIFIER, noop_handler)
    return ScheduleRegistrar(
        host=host,
        authorization=authorization,
        planner=TimeWindowPlanner(test_settings.schedule_config),
        clock=clock,
        task_identifier=IDENTIFIER,
    )


class TestArmNext:
    """Test arming the next scheduled run."""

    def test_submits_next_run_time(self, registrar, host):
        """Test the request carries identifier, next run time and network need."""
        request = registrar.arm_next(at(14))

        assert request is not None
        assert request.identifier == IDENTIFIER
        assert request.earliest_begin == at(16)
        assert request.requires_network is True
        assert host.pending_requests() == [request]
        assert host.submissions == [request]

    def test_defaults_to_clock(self, registrar, clock):
        clock.set(at(9))

        request = registrar.arm_next()

        assert request.earliest_begin == at(12)

    @pytest.mark.parametrize(
        "status",
        [
            AuthorizationStatus.NOT_DETERMINED,
            AuthorizationStatus.DENIED,
            AuthorizationStatus.RESTRICTED,
        ],
    )
    def test_unauthorized_never_submits(self, registrar, host, authorization, status):
        """Test nothing is submitted without authorization, whatever the time."""
        authorization.status = status

        for now in (at(6), at(14), at(20, 1)):
            assert registrar.arm_next(now) is None

        assert host.submissions == []
        assert host.pending_requests() == []

    def test_resumes_after_authorization(self, registrar, host, authorization):
        authorization.status = AuthorizationStatus.DENIED
        registrar.arm_next(at(14))

        authorization.status = AuthorizationStatus.AUTHORIZED
        request = registrar.arm_next(at(14))

        assert request.earliest_begin == at(16)
        assert len(host.submissions) == 1

    def test_nothing_left_today(self, registrar, host):
        """Test no request is submitted after the last daily point."""
        assert registrar.arm_next(at(20, 1)) is None
        assert host.submissions == []

    def test_repeated_arming_submits_once(self, registrar, host):
        """Test arming twice with unchanged now yields one submission."""
        first = registrar.arm_next(at(14))
        second = registrar.arm_next(at(14))

        assert first == second
        assert len(host.submissions) == 1
        assert len(host.pending_requests()) == 1

    def test_rearming_later_replaces_pending_request(self, registrar, host):
        """Test a new run time replaces the pending request instead of stacking."""
        registrar.arm_next(at(14))
        request = registrar.arm_next(at(16, 30))

        assert request.earliest_begin == at(20)
        assert host.pending_requests() == [request]
        assert len(host.submissions) == 2

    def test_rejected_submission_is_not_fatal(self, registrar, host, caplog):
        """Test a rejected request is logged and otherwise ignored."""
        host.rejecting = True

        with caplog.at_level(logging.ERROR):
            result = registrar.arm_next(at(14))

        assert result is None
        assert host.pending_requests() == []
        assert "Failed to schedule background batch download task" in caplog.text

    def test_rejected_replacement_keeps_pending_request(self, registrar, host):
        """Test a rejected re-arm leaves the previously armed run in place."""
        armed = registrar.arm_next(at(14))
        host.rejecting = True

        assert registrar.arm_next(at(16, 30)) is None
        assert host.pending_requests() == [armed]

    def test_unregistered_identifier_is_not_fatal(
        self, host, authorization, clock, test_settings
    ):
        registrar = ScheduleRegistrar(
            host=host,
            authorization=authorization,
            planner=TimeWindowPlanner(test_settings.schedule_config),
            clock=clock,
            task_identifier="unregistered",
        )

        assert registrar.arm_next(at(14)) is None
        assert host.submissions == []

    def test_requires_network_flag(self, host, authorization, clock, test_settings):
        registrar = ScheduleRegistrar(
            host=host,
            authorization=authorization,
            planner=TimeWindowPlanner(test_settings.schedule_config),
            clock=clock,
            task_identifier=IDENTIFIER,
            requires_network=False,
        )
        host.register(IDENTIFIER, noop_handler)

        assert registrar.arm_next(at(14)).requires_network is False


class TestRegister:
    """Test registering the task with the host."""

    def test_register_arms_first_run(self, host, authorization, clock, test_settings):
        registrar = ScheduleRegistrar(
            host=host,
            authorization=authorization,
            planner=TimeWindowPlanner(test_settings.schedule_config),
            clock=clock,
            task_identifier=IDENTIFIER,
        )

        registrar.register(noop_handler)

        [request] = host.pending_requests()
        assert request.identifier == IDENTIFIER
        assert request.earliest_begin == at(16)


class TestArmForDebugging:
    """Test manually scheduled debug runs."""

    def test_replaces_pending_requests(self, registrar, host):
        registrar.arm_next(at(14))

        request = registrar.arm_for_debugging(at(14))

        assert request.earliest_begin == at(14) + timedelta(seconds=60)
        assert host.pending_requests() == [request]

    def test_bypasses_authorization_and_window(self, registrar, host, authorization):
        authorization.status = AuthorizationStatus.DENIED

        request = registrar.arm_for_debugging(at(22))

        assert request.earliest_begin == at(22, 1)
        assert host.pending_requests() == [request]

    def test_pending_requests(self, registrar):
        assert registrar.pending_requests() == []

        request = registrar.arm_next(at(14))

        assert registrar.pending_requests() == [request]
