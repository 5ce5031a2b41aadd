#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Delayed-task schedulers driving simulated motion.

ThreadingScheduler runs callbacks on wall-clock timers. VirtualClock keeps
a queue of pending calls and only runs them when advanced, which makes
simulated plots fully deterministic.
"""

import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    """Handle for a pending delayed call."""
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Protocol for running a callback after a delay in milliseconds."""
    def call_later(
        self,
        delay_ms: float,
        callback: Callable[[], None]
    ) -> ScheduledCall: ...


class ThreadingScheduler:
    """Scheduler backed by ``threading.Timer``."""

    def __init__(self):
        self._timers: List[threading.Timer] = []
        self._lock = threading.Lock()

    def call_later(
        self,
        delay_ms: float,
        callback: Callable[[], None]
    ) -> threading.Timer:
        timer = threading.Timer(delay_ms / 1000.0, self._run, args=(callback,))
        timer.daemon = True
        with self._lock:
            self._timers = [t for t in self._timers if t.is_alive()]
            self._timers.append(timer)
        timer.start()
        return timer

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            logger.exception("Scheduled call failed")

    def cancel_all(self) -> None:
        """Cancel every timer that has not fired yet."""
        with self._lock:
            timers, self._timers = self._timers, []
        for timer in timers:
            timer.cancel()


class VirtualCall:
    """A call queued on a VirtualClock."""

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualClock:
    """Deterministic scheduler with a manually advanced clock.

    Calls due at the same instant run in the order they were scheduled.
    """

    def __init__(self, start_ms: float = 0.0):
        self.now_ms = start_ms
        self._queue = []
        self._counter = itertools.count()

    def call_later(
        self,
        delay_ms: float,
        callback: Callable[[], None]
    ) -> VirtualCall:
        call = VirtualCall(self.now_ms + max(delay_ms, 0.0), callback)
        heapq.heappush(self._queue, (call.due_ms, next(self._counter), call))
        return call

    @property
    def pending(self) -> int:
        """Number of calls still waiting to run."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def next_due(self) -> Optional[float]:
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward, running every call that falls due.

        Returns:
            Number of calls that ran
        """
        target = self.now_ms + delta_ms
        ran = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            _, _, call = heapq.heappop(self._queue)
            self.now_ms = due
            call.callback()
            ran += 1
        self.now_ms = target
        return ran

    def run_until_idle(self, limit: int = 100000) -> int:
        """Run queued calls, including ones they schedule, until none remain.

        Args:
            limit: Safety cap on the number of calls to run

        Returns:
            Number of calls that ran
        """
        ran = 0
        while ran < limit:
            due = self.next_due()
            if due is None:
                break
            _, _, call = heapq.heappop(self._queue)
            self.now_ms = due
            call.callback()
            ran += 1
        return ran
