"""Daily scheduler: trigger times, eager run, overlap handling, lifecycle."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from compliance_engine.core.exceptions import RunInProgressError
from compliance_engine.services.orchestrator import RunSummary
from compliance_engine.services.scheduler import ComplianceScheduler

NOW = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def summary():
    return RunSummary(run_id="run-1", started_at=NOW, outcome="completed")


@pytest.fixture
def mock_orchestrator(summary):
    orchestrator = Mock()
    orchestrator.run = AsyncMock(return_value=summary)
    orchestrator.is_running = False
    return orchestrator


async def _wait_for(predicate, attempts: int = 200):
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


class TestNextTrigger:
    def test_later_today_in_local_time(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator, hour=14, tz="Asia/Riyadh")
        # 09:00 UTC is 12:00 in Riyadh (UTC+3)
        assert scheduler.next_trigger_after(NOW) == datetime(2026, 10, 17, 11, 0, tzinfo=timezone.utc)

    def test_tomorrow_when_time_has_passed(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator, hour=1, tz="Asia/Riyadh")
        assert scheduler.next_trigger_after(NOW) == datetime(2026, 10, 17, 22, 0, tzinfo=timezone.utc)

    def test_local_date_differs_from_utc_date(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator, hour=1, tz="Asia/Riyadh")
        # 21:30 UTC on the 17th is 00:30 on the 18th in Riyadh
        moment = datetime(2026, 10, 17, 21, 30, tzinfo=timezone.utc)
        assert scheduler.next_trigger_after(moment) == datetime(2026, 10, 17, 22, 0, tzinfo=timezone.utc)

    def test_exact_trigger_time_rolls_to_next_day(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator, hour=1, tz="Asia/Riyadh")
        moment = datetime(2026, 10, 17, 22, 0, tzinfo=timezone.utc)
        assert scheduler.next_trigger_after(moment) == datetime(2026, 10, 18, 22, 0, tzinfo=timezone.utc)

    def test_follows_daylight_saving_change(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator, hour=9, minute=30, tz="Europe/London")
        # Clocks go forward on 2026-03-29, so 09:30 local is 08:30 UTC that day
        moment = datetime(2026, 3, 28, 12, 0, tzinfo=timezone.utc)
        assert scheduler.next_trigger_after(moment) == datetime(2026, 3, 29, 8, 30, tzinfo=timezone.utc)


class TestTriggers:
    @pytest.mark.asyncio
    async def test_run_now_keeps_last_summary(self, mock_orchestrator, summary):
        scheduler = ComplianceScheduler(mock_orchestrator)

        assert await scheduler.run_now() is summary
        assert scheduler.last_summary is summary

    @pytest.mark.asyncio
    async def test_run_now_reports_overlap(self, mock_orchestrator):
        mock_orchestrator.run.side_effect = RunInProgressError()
        scheduler = ComplianceScheduler(mock_orchestrator)

        with pytest.raises(RunInProgressError):
            await scheduler.run_now()

    @pytest.mark.asyncio
    async def test_trigger_skips_overlap(self, mock_orchestrator):
        mock_orchestrator.run.side_effect = RunInProgressError()
        scheduler = ComplianceScheduler(mock_orchestrator)

        assert await scheduler.trigger() is None
        assert scheduler.last_summary is None


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_runs_eagerly_and_schedules_next(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator, run_on_start=True)

        await scheduler.start()
        await _wait_for(lambda: scheduler.next_run_at is not None)

        assert scheduler.running
        mock_orchestrator.run.assert_awaited_once()
        assert scheduler.next_run_at > datetime.now(timezone.utc)

        await scheduler.stop()
        assert not scheduler.running
        assert scheduler.next_run_at is None

    @pytest.mark.asyncio
    async def test_start_without_eager_run(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator, run_on_start=False)

        await scheduler.start()
        await _wait_for(lambda: scheduler.next_run_at is not None)

        mock_orchestrator.run.assert_not_awaited()
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_loop(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator)

        await scheduler.start()
        await scheduler.start()
        await _wait_for(lambda: scheduler.next_run_at is not None)

        mock_orchestrator.run.assert_awaited_once()
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_failed_eager_run_keeps_schedule(self, mock_orchestrator):
        mock_orchestrator.run.side_effect = RuntimeError("boom")
        scheduler = ComplianceScheduler(mock_orchestrator)

        await scheduler.start()
        await _wait_for(lambda: scheduler.next_run_at is not None)

        assert scheduler.running
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_stop_before_start_is_harmless(self, mock_orchestrator):
        scheduler = ComplianceScheduler(mock_orchestrator)
        await scheduler.stop()
        assert not scheduler.running

    def test_timezone_name(self, mock_orchestrator):
        assert ComplianceScheduler(mock_orchestrator, tz="Asia/Riyadh").timezone_name == "Asia/Riyadh"
