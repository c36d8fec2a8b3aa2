# followyourflush/camera/scheduler.py
"""
Timer abstractions the choreographer schedules its ticks through. Each
callback runs to completion before anything it schedules can start, so
ticks never overlap.
"""
import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Tuple


class ScheduledCall:
    """Handle for a pending callback."""

    def __init__(self, callback: Callable[[], None], due_ms: float = 0.0):
        self.callback = callback
        self.due_ms = due_ms
        self.cancelled = False
        self._timer: Optional[threading.Timer] = None

    def cancel(self):
        self.cancelled = True
        if self._timer:
            self._timer.cancel()


class ManualScheduler:
    """
    Deterministic scheduler driven by a virtual clock. Used by tests and by
    headless runs, where nothing should actually wait.
    """

    def __init__(self):
        self.now_ms = 0.0
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback, due_ms=self.now_ms + max(0.0, delay_ms))
        heapq.heappush(self._queue, (call.due_ms, next(self._counter), call))
        return call

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def _run_next(self):
        due_ms, _, call = heapq.heappop(self._queue)
        self.now_ms = max(self.now_ms, due_ms)
        if not call.cancelled:
            call.callback()

    def advance(self, ms: float):
        """Moves the clock forward, running every callback that falls due on the way."""
        target = self.now_ms + ms
        while self._queue and self._queue[0][0] <= target:
            self._run_next()
        self.now_ms = target

    def run_until_idle(self, max_calls: int = 100000) -> int:
        """Runs callbacks in due order until none are left. Returns how many ran."""
        calls = 0
        while self._queue:
            if calls >= max_calls:
                raise RuntimeError(f"Scheduler still busy after {max_calls} callbacks.")
            self._run_next()
            calls += 1
        return calls


class TimerScheduler:
    """
    Real-time scheduler on threading.Timer. Callbacks are serialized under
    `lock`, which callers share with any code that touches the same state.
    """

    def __init__(self, lock: Optional[threading.RLock] = None):
        self.lock = lock or threading.RLock()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback)

        def run():
            with self.lock:
                if call.cancelled:
                    return
                try:
                    callback()
                except Exception as e:
                    logging.error(f"Scheduled callback failed: {e}", exc_info=True)

        timer = threading.Timer(max(0.0, delay_ms) / 1000.0, run)
        timer.daemon = True
        call._timer = timer
        timer.start()
        return call
