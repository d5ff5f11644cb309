"""Recurring-callback schedulers used to drive solution playback."""

from __future__ import annotations

import time
from typing import Callable, Protocol


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class Ticker(Protocol):
    """Anything that can call *callback* every *interval_ms* until cancelled."""

    def start(self, interval_ms: int, callback: Callable[[], None]) -> TickHandle: ...


class _PolledHandle:
    def __init__(self, ticker: PolledTicker, interval_ms: int, callback: Callable[[], None]) -> None:
        self._ticker = ticker
        self.interval = interval_ms / 1000.0
        self.callback = callback
        self.next_due = ticker.clock() + self.interval
        self.active = True

    def cancel(self) -> None:
        self.active = False
        self._ticker._drop(self)


class PolledTicker:
    """Ticker for loops that own their own wait (e.g. a terminal input loop).

    Nothing fires on its own; the owner calls :meth:`poll` whenever it
    wakes up and every overdue callback runs once.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._handles: list[_PolledHandle] = []

    def start(self, interval_ms: int, callback: Callable[[], None]) -> _PolledHandle:
        handle = _PolledHandle(self, interval_ms, callback)
        self._handles.append(handle)
        return handle

    @property
    def active(self) -> bool:
        return bool(self._handles)

    def time_until_due(self) -> float | None:
        """Seconds until the next callback is due, or ``None`` if idle."""
        if not self._handles:
            return None
        now = self.clock()
        return max(0.0, min(h.next_due for h in self._handles) - now)

    def poll(self) -> int:
        """Fire due callbacks; return how many ran."""
        fired = 0
        now = self.clock()
        for handle in list(self._handles):
            if handle.active and now >= handle.next_due:
                handle.next_due = now + handle.interval
                handle.callback()
                fired += 1
        return fired

    def _drop(self, handle: _PolledHandle) -> None:
        if handle in self._handles:
            self._handles.remove(handle)
