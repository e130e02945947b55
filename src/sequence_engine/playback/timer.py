"""Tick sources — cancellable once-per-interval callbacks for playback.

The controller arms a tick source whenever playback enters RUNNING and
cancels the returned handle whenever it leaves RUNNING.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TimerHandle(ABC):
    """A live periodic callback that can be cancelled exactly once."""

    @property
    @abstractmethod
    def active(self) -> bool:
        ...

    @abstractmethod
    def cancel(self) -> None:
        """Stop future ticks. Safe to call more than once."""
        ...


class TickSource(ABC):
    """Factory for periodic tick callbacks."""

    @abstractmethod
    def start(self, callback: TickCallback) -> TimerHandle:
        """Begin calling *callback* once per interval until cancelled."""
        ...

    def shutdown(self) -> None:
        """Release any resources held by the source."""


# ---------------------------------------------------------------------------
# APScheduler-backed source
# ---------------------------------------------------------------------------


class _JobHandle(TimerHandle):
    def __init__(self, job) -> None:
        self._job = job
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        try:
            self._job.remove()
        except JobLookupError:
            logger.debug("Tick job %s already removed", self._job.id)


class SchedulerTickSource(TickSource):
    """Ticks from an APScheduler interval job on a background thread.

    Each ``start()`` adds a fresh interval job; its handle removes the
    job. The scheduler is started lazily and, when created here, shut
    down by ``shutdown()``.
    """

    def __init__(
        self,
        interval_s: float = 1.0,
        scheduler: BackgroundScheduler | None = None,
    ) -> None:
        self.interval_s = interval_s
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler or BackgroundScheduler(daemon=True)

    def start(self, callback: TickCallback) -> TimerHandle:
        if not self._scheduler.running:
            self._scheduler.start()
        job = self._scheduler.add_job(
            callback,
            "interval",
            seconds=self.interval_s,
            max_instances=1,
            coalesce=True,
        )
        logger.debug("Armed tick job %s every %.1fs", job.id, self.interval_s)
        return _JobHandle(job)

    def shutdown(self) -> None:
        if self._owns_scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.debug("Tick scheduler stopped")


# ---------------------------------------------------------------------------
# Manually fired source
# ---------------------------------------------------------------------------


class _ManualHandle(TimerHandle):
    def __init__(self, source: ManualTickSource, callback: TickCallback) -> None:
        self._source = source
        self.callback = callback

    @property
    def active(self) -> bool:
        return self in self._source._handles

    def cancel(self) -> None:
        if self.active:
            self._source._handles.remove(self)


class ManualTickSource(TickSource):
    """Ticks only when ``fire()`` is called.

    Used where the host drives time itself (a UI refresh loop) and in
    tests that step playback second by second.
    """

    def __init__(self) -> None:
        self._handles: list[_ManualHandle] = []

    @property
    def armed_count(self) -> int:
        return len(self._handles)

    def start(self, callback: TickCallback) -> TimerHandle:
        handle = _ManualHandle(self, callback)
        self._handles.append(handle)
        return handle

    def fire(self, times: int = 1) -> None:
        """Deliver *times* ticks to every armed callback."""
        for _ in range(times):
            for handle in list(self._handles):
                if handle.active:
                    handle.callback()
