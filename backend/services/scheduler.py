"""
Timers that drive a game session.

Both timers expose the same small interface:
 - now(): current time in seconds
 - every(interval, job, tag): run job every ``interval`` seconds
 - cancel(tag): drop every job registered under ``tag``
 - run_pending(): run the jobs that are due

ScheduleTimer runs on the wall clock through a private ``schedule.Scheduler``
so several sessions never share job lists. ManualTimer keeps virtual time
that only moves when advance() is called.
"""

import logging
import time
from typing import Callable, List, Optional

import schedule

logger = logging.getLogger(__name__)


class ScheduleTimer:
    """Wall-clock timer backed by the ``schedule`` library."""

    def __init__(
        self,
        scheduler: Optional[schedule.Scheduler] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._scheduler = scheduler if scheduler is not None else schedule.Scheduler()
        self._clock = clock

    def now(self) -> float:
        return self._clock()

    def every(self, interval: float, job: Callable[[], None], tag: str) -> schedule.Job:
        logger.debug("Scheduling %s every %ss", tag, interval)
        return self._scheduler.every(interval).seconds.do(job).tag(tag)

    def cancel(self, tag: str) -> None:
        self._scheduler.clear(tag)

    def run_pending(self) -> None:
        self._scheduler.run_pending()

    def idle_seconds(self) -> Optional[float]:
        """Seconds until the next job is due, or None without jobs."""
        return self._scheduler.idle_seconds


class _ManualJob:
    def __init__(self, interval: float, job: Callable[[], None], tag: str, start: float, seq: int):
        self.interval = interval
        self.job = job
        self.tag = tag
        self.start = start
        self.seq = seq
        self.runs = 0

    @property
    def next_run(self) -> float:
        # Computed from the start time so float steps like 0.1 do not drift
        return self.start + (self.runs + 1) * self.interval


class ManualTimer:
    """
    Virtual-time timer for tests and headless play.

    Jobs only run inside advance(), in due-time order; jobs due at the same
    instant run in registration order.
    """

    EPSILON = 1e-9

    def __init__(self, start: float = 0.0):
        self._now = start
        self._jobs: List[_ManualJob] = []
        self._seq = 0

    def now(self) -> float:
        return self._now

    def every(self, interval: float, job: Callable[[], None], tag: str) -> _ManualJob:
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        self._seq += 1
        entry = _ManualJob(interval, job, tag, self._now, self._seq)
        self._jobs.append(entry)
        return entry

    def cancel(self, tag: str) -> None:
        self._jobs = [j for j in self._jobs if j.tag != tag]

    def run_pending(self) -> None:
        self.advance(0)

    def idle_seconds(self) -> Optional[float]:
        if not self._jobs:
            return None
        return min(j.next_run for j in self._jobs) - self._now

    def advance(self, seconds: float) -> None:
        """Move virtual time forward, running every job that falls due."""
        target = self._now + seconds
        while True:
            due = [j for j in self._jobs if j.next_run <= target + self.EPSILON]
            if not due:
                break
            entry = min(due, key=lambda j: (j.next_run, j.seq))
            self._now = max(self._now, entry.next_run)
            entry.runs += 1
            entry.job()
        self._now = target

    @property
    def tags(self) -> List[str]:
        return [j.tag for j in self._jobs]
