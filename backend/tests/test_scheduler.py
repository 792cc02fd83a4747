"""
Tests for services/scheduler.py timers.
"""

import pytest
import sys
import os
from unittest.mock import Mock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import schedule

from services.scheduler import ManualTimer, ScheduleTimer


class TestManualTimer:

    def test_runs_jobs_at_their_interval(self):
        timer = ManualTimer()
        job = Mock()
        timer.every(0.1, job, "tick")

        timer.advance(0.05)
        assert job.call_count == 0
        timer.advance(0.05)
        assert job.call_count == 1
        timer.advance(1.0)
        assert job.call_count == 11

    def test_now_follows_virtual_time(self):
        timer = ManualTimer(start=5.0)
        seen = []
        timer.every(0.5, lambda: seen.append(timer.now()), "clock")

        timer.advance(1.0)

        assert seen == [5.5, 6.0]
        assert timer.now() == 6.0

    def test_jobs_due_together_run_in_registration_order(self):
        timer = ManualTimer()
        calls = []
        timer.every(1.0, lambda: calls.append("first"), "a")
        timer.every(0.5, lambda: calls.append("second"), "b")

        timer.advance(1.0)

        assert calls == ["second", "first", "second"]

    def test_cancel_from_inside_a_job(self):
        timer = ManualTimer()
        other = Mock()

        def stop_everything():
            timer.cancel("other")
            timer.cancel("stopper")

        timer.every(1.0, stop_everything, "stopper")
        timer.every(1.0, other, "other")

        timer.advance(3.0)

        other.assert_not_called()
        assert timer.tags == []

    def test_idle_seconds(self):
        timer = ManualTimer()
        assert timer.idle_seconds() is None
        timer.every(2.0, Mock(), "job")
        timer.advance(0.5)
        assert timer.idle_seconds() == pytest.approx(1.5)

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            ManualTimer().every(0, Mock(), "bad")


class TestScheduleTimer:

    def test_uses_private_scheduler(self):
        timer = ScheduleTimer()
        timer.every(0.1, Mock(), "tick")

        assert schedule.get_jobs("tick") == []

    def test_every_and_cancel_by_tag(self):
        scheduler = schedule.Scheduler()
        timer = ScheduleTimer(scheduler=scheduler)

        timer.every(0.1, Mock(), "game:tick")
        timer.every(1.0, Mock(), "game:clock")
        assert len(scheduler.get_jobs()) == 2

        timer.cancel("game:tick")
        assert len(scheduler.get_jobs()) == 1
        assert scheduler.get_jobs("game:clock")

    def test_now_uses_injected_clock(self):
        timer = ScheduleTimer(clock=lambda: 123.0)
        assert timer.now() == 123.0

    def test_run_pending_delegates(self):
        scheduler = Mock()
        ScheduleTimer(scheduler=scheduler).run_pending()
        scheduler.run_pending.assert_called_once_with()
