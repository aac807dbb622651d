"""Timer-driven deferred work that can be cancelled or superseded."""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    import tkinter as tk

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Runs a callback once after a delay on the host's event loop."""

    def after(self, delay_ms: int, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class TkScheduler:
    """Scheduler backed by a tkinter widget's ``after`` queue."""

    __slots__ = ("_widget",)

    def __init__(self, widget: tk.Misc) -> None:
        self._widget = widget

    def after(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self._widget.after(delay_ms, callback)

    def cancel(self, handle: str) -> None:
        self._widget.after_cancel(handle)


class ManualScheduler:
    """Virtual clock for headless hosts: time only moves on :meth:`advance`."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[tuple[int, int, Callable[[], None]]] = []
        self._cancelled: set[int] = set()
        self._ids = itertools.count()

    @property
    def pending(self) -> int:
        return len(self._queue) - len(self._cancelled)

    def after(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        heapq.heappush(self._queue, (self.now_ms + max(0, delay_ms), handle, callback))
        return handle

    def cancel(self, handle: int) -> None:
        if any(h == handle for _, h, _ in self._queue):
            self._cancelled.add(handle)

    def advance(self, ms: int) -> int:
        """Move the clock forward, running every callback that falls due.

        Callbacks scheduled while advancing run too if they fall due inside
        the window. Returns the number of callbacks run.
        """
        target = self.now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, handle, callback = heapq.heappop(self._queue)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            self.now_ms = due
            callback()
            ran += 1
        self.now_ms = target
        return ran

    def run_pending(self) -> int:
        """Run everything queued, however far in the future."""
        if not self._queue:
            return 0
        return self.advance(max(due for due, _, _ in self._queue) - self.now_ms)


class DeferredAction:
    """A single slot of deferred work.

    Scheduling again replaces whatever is pending, so at most one callback
    per slot is ever waiting.
    """

    __slots__ = ("_scheduler", "delay_ms", "_handle", "_callback")

    def __init__(self, scheduler: Scheduler, delay_ms: int) -> None:
        self._scheduler = scheduler
        self.delay_ms = delay_ms
        self._handle: Any = None
        self._callback: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, callback: Callable[[], None], delay_ms: int | None = None) -> None:
        if self.cancel():
            logger.debug("Superseded pending deferred action")
        self._callback = callback
        delay = self.delay_ms if delay_ms is None else delay_ms
        self._handle = self._scheduler.after(delay, self._fire)

    def cancel(self) -> bool:
        """Drop the pending callback. Returns True if one was pending."""
        if self._callback is None:
            return False
        self._scheduler.cancel(self._handle)
        self._handle = None
        self._callback = None
        return True

    def flush(self) -> bool:
        """Run the pending callback now. Returns True if one was pending."""
        callback = self._callback
        if callback is None:
            return False
        self.cancel()
        callback()
        return True

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()
