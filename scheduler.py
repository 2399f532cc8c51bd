# scheduler.py
"""
Cooperative timers for the single-threaded frame loop.

Callbacks never run concurrently: the main loop calls run_pending() once
per frame and every callback that has come due runs to completion, in
due-time order, on the calling thread.
"""
import heapq
import itertools
import logging
from typing import Callable, List, Optional, Tuple

# --- Data Contracts ---
#
# class Scheduler:
#   - __init__(self, clock: Callable[[], float]):
#     - clock returns the current time in milliseconds (e.g. pygame.time.get_ticks).
#   - call_at(due_ms, callback) -> ScheduledTask: runs once, at an absolute time.
#   - call_later(delay_ms, callback) -> ScheduledTask: runs once.
#   - call_every(interval_ms, callback) -> ScheduledTask: runs until cancelled.
#   - run_pending() -> int: number of callbacks executed.
#     - Invariants: a task scheduled from inside a callback never runs in
#       the same run_pending() pass; a cancelled task never runs again.


class ScheduledTask:
    """Handle for a pending callback."""
    def __init__(self, callback: Callable[[], None], due: float, interval: Optional[float] = None):
        self.callback = callback
        self.due = due
        self.interval = interval
        self.cancelled = False

    @property
    def recurring(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        name = getattr(self.callback, '__name__', repr(self.callback))
        return f"ScheduledTask({name}, due={self.due}, interval={self.interval}, cancelled={self.cancelled})"


class Scheduler:
    """A min-heap of tasks keyed by due time."""
    def __init__(self, clock: Callable[[], float]):
        self.clock = clock
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def _push(self, task: ScheduledTask) -> None:
        heapq.heappush(self._queue, (task.due, next(self._counter), task))

    def call_at(self, due_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        """Runs `callback` once, on the first pass at or after `due_ms`."""
        task = ScheduledTask(callback, due_ms)
        self._push(task)
        return task

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        return self.call_at(self.clock() + delay_ms, callback)

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        if interval_ms <= 0:
            raise ValueError(f"Recurring interval must be positive, got {interval_ms}.")
        task = ScheduledTask(callback, self.clock() + interval_ms, interval=interval_ms)
        self._push(task)
        return task

    @property
    def pending(self) -> int:
        """Number of live (not cancelled) tasks."""
        return sum(1 for _, _, task in self._queue if not task.cancelled)

    def run_pending(self) -> int:
        """Runs every task whose due time has passed."""
        now = self.clock()
        due: List[ScheduledTask] = []
        while self._queue and self._queue[0][0] <= now:
            _, _, task = heapq.heappop(self._queue)
            if not task.cancelled:
                due.append(task)

        executed = 0
        for task in due:
            # An earlier callback in this pass may have cancelled it.
            if task.cancelled:
                continue
            task.callback()
            executed += 1
            if task.recurring and not task.cancelled:
                task.due = now + task.interval
                self._push(task)

        if executed > 1:
            logging.debug(f"Scheduler ran {executed} callbacks at t={now}ms.")
        return executed

    def cancel_all(self) -> None:
        for _, _, task in self._queue:
            task.cancel()
        self._queue.clear()
