"""
Scheduler - Cancellable delayed and repeating callbacks.

The game loop needs two kinds of scheduled work:
- a repeating timer tick while a game is running
- a one-shot callback that hides a mismatched pair

Two implementations:
- AsyncioScheduler runs callbacks on the asyncio event loop (server)
- ManualScheduler keeps a virtual clock that is advanced explicitly
  (terminal front-end, tests)

Callbacks always run one at a time, never concurrently with each other.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import asyncio
from dataclasses import dataclass, field
import heapq
import itertools
from typing import Callable


Callback = Callable[[], None]


class ScheduledTask(ABC):
    """Handle for scheduled work."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the task. Cancelling twice is harmless."""
        ...

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    """Interface for scheduling callbacks."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callback) -> ScheduledTask:
        """Run callback once, delay seconds from now."""
        ...

    @abstractmethod
    def call_every(self, interval: float, callback: Callback) -> ScheduledTask:
        """Run callback every interval seconds until cancelled. First run is one interval from now."""
        ...


# =============================================================================
# asyncio
# =============================================================================

class _AsyncioTask(ScheduledTask):
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class _RepeatingAsyncioTask(ScheduledTask):
    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callback):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._next_at = loop.time()
        self._handle: asyncio.TimerHandle | None = None

    def arm(self) -> None:
        # Absolute deadlines keep the ticks from drifting.
        self._next_at += self._interval
        self._handle = self._loop.call_at(self._next_at, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        self.arm()
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler(Scheduler):
    """
    Schedules callbacks on an asyncio event loop.

    Without an explicit loop, the running loop at scheduling time is used,
    so scheduling must happen from inside the loop (request handlers do).
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._explicit_loop = loop

    def _loop(self) -> asyncio.AbstractEventLoop:
        return self._explicit_loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callback) -> ScheduledTask:
        return _AsyncioTask(self._loop().call_later(delay, callback))

    def call_every(self, interval: float, callback: Callback) -> ScheduledTask:
        if interval <= 0:
            raise ValueError("interval must be positive")
        task = _RepeatingAsyncioTask(self._loop(), interval, callback)
        task.arm()
        return task


# =============================================================================
# Manual clock
# =============================================================================

@dataclass
class _ManualEntry(ScheduledTask):
    due: float
    callback: Callback
    interval: float | None = None
    _cancelled: bool = field(default=False, repr=False)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    A scheduler driven by a virtual clock.

    Usage:
        scheduler = ManualScheduler()
        scheduler.call_later(1.0, hide_pair)
        scheduler.advance(0.5)   # nothing runs
        scheduler.advance(0.5)   # hide_pair runs

    Due callbacks run in deadline order; ties run in scheduling order.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: list[tuple[float, int, _ManualEntry]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callback) -> ScheduledTask:
        entry = _ManualEntry(due=self.now + max(0.0, delay), callback=callback)
        self._push(entry)
        return entry

    def call_every(self, interval: float, callback: Callback) -> ScheduledTask:
        if interval <= 0:
            raise ValueError("interval must be positive")
        entry = _ManualEntry(due=self.now + interval, callback=callback, interval=interval)
        self._push(entry)
        return entry

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, running every callback that falls due.

        Returns the number of callbacks run.
        """
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards")

        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, entry = heapq.heappop(self._queue)
            if entry.cancelled:
                continue
            self.now = due
            if entry.interval is not None:
                entry.due = due + entry.interval
                self._push(entry)
            entry.callback()
            ran += 1

        self.now = target
        return ran

    @property
    def pending_count(self) -> int:
        """Number of live (not cancelled) scheduled tasks."""
        return sum(1 for _, _, entry in self._queue if not entry.cancelled)

    def _push(self, entry: _ManualEntry) -> None:
        heapq.heappush(self._queue, (entry.due, next(self._counter), entry))
