"""Shared fixtures: a hand-cranked ticker for playback tests."""

from __future__ import annotations

from typing import Callable

import pytest


class ManualHandle:
    def __init__(self, ticker: "ManualTicker", interval_ms: int, callback: Callable[[], None]) -> None:
        self.ticker = ticker
        self.interval_ms = interval_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTicker:
    """Records every started timer; ``fire()`` runs the live ones once."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []

    def start(self, interval_ms: int, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self, interval_ms, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            for handle in self.live:
                handle.callback()


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()
