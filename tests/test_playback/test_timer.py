"""Tests for the APScheduler-backed and manual tick sources."""

from __future__ import annotations

from unittest.mock import MagicMock

from apscheduler.jobstores.base import JobLookupError

from sequence_engine.playback.timer import ManualTickSource, SchedulerTickSource


def _scheduler(running: bool = False) -> MagicMock:
    scheduler = MagicMock()
    scheduler.running = running
    return scheduler


class TestSchedulerTickSource:
    def test_start_adds_interval_job(self) -> None:
        scheduler = _scheduler()
        source = SchedulerTickSource(interval_s=1.0, scheduler=scheduler)
        callback = MagicMock()

        handle = source.start(callback)

        scheduler.start.assert_called_once()
        scheduler.add_job.assert_called_once_with(
            callback, "interval", seconds=1.0, max_instances=1, coalesce=True,
        )
        assert handle.active

    def test_running_scheduler_not_restarted(self) -> None:
        scheduler = _scheduler(running=True)
        SchedulerTickSource(scheduler=scheduler).start(MagicMock())
        scheduler.start.assert_not_called()

    def test_cancel_removes_job_once(self) -> None:
        scheduler = _scheduler()
        handle = SchedulerTickSource(scheduler=scheduler).start(MagicMock())
        job = scheduler.add_job.return_value

        handle.cancel()
        handle.cancel()

        job.remove.assert_called_once()
        assert not handle.active

    def test_cancel_tolerates_missing_job(self) -> None:
        scheduler = _scheduler()
        handle = SchedulerTickSource(scheduler=scheduler).start(MagicMock())
        scheduler.add_job.return_value.remove.side_effect = JobLookupError("gone")

        handle.cancel()

        assert not handle.active

    def test_shutdown_leaves_borrowed_scheduler_running(self) -> None:
        scheduler = _scheduler(running=True)
        SchedulerTickSource(scheduler=scheduler).shutdown()
        scheduler.shutdown.assert_not_called()


class TestManualTickSource:
    def test_fire_calls_armed_callbacks(self) -> None:
        source = ManualTickSource()
        callback = MagicMock()
        source.start(callback)
        source.fire(3)
        assert callback.call_count == 3

    def test_cancelled_handle_not_fired(self) -> None:
        source = ManualTickSource()
        callback = MagicMock()
        handle = source.start(callback)
        handle.cancel()
        source.fire()
        callback.assert_not_called()
        assert source.armed_count == 0
        assert not handle.active

    def test_cancel_during_fire_stops_later_ticks(self) -> None:
        source = ManualTickSource()
        calls: list[int] = []
        handle = None

        def once() -> None:
            calls.append(1)
            handle.cancel()

        handle = source.start(once)
        source.fire(5)
        assert calls == [1]
