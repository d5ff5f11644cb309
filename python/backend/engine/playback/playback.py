"""Solution playback: walks a solver's path one board at a time."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Callable, Sequence

from backend.engine.playback.ticker import TickHandle, Ticker
from backend.models.board import PuzzleState

logger = logging.getLogger(__name__)

PLAYBACK_INTERVAL_MS = 1000


class PlaybackStatus(StrEnum):
    IDLE = "idle"
    READY = "ready"
    PLAYING = "playing"


class SolutionPlayback:
    """State machine over a held solution path.

    ``IDLE`` holds nothing.  ``READY`` holds a path and a cursor.
    ``PLAYING`` additionally advances the cursor on every timer tick and
    drops back to ``READY`` once the last board is shown.  At most one
    timer handle is alive at a time.
    """

    def __init__(
        self,
        ticker: Ticker,
        on_change: Callable[[PuzzleState], None] | None = None,
        interval_ms: int = PLAYBACK_INTERVAL_MS,
    ) -> None:
        self._ticker = ticker
        self._on_change = on_change
        self.interval_ms = interval_ms
        self._path: tuple[PuzzleState, ...] | None = None
        self._index = 0
        self._handle: TickHandle | None = None

    # -- queries --------------------------------------------------------------

    @property
    def status(self) -> PlaybackStatus:
        if self._path is None:
            return PlaybackStatus.IDLE
        if self._handle is not None:
            return PlaybackStatus.PLAYING
        return PlaybackStatus.READY

    @property
    def path(self) -> tuple[PuzzleState, ...] | None:
        return self._path

    @property
    def current_index(self) -> int | None:
        return None if self._path is None else self._index

    @property
    def is_playing(self) -> bool:
        return self._handle is not None

    @property
    def length(self) -> int:
        return 0 if self._path is None else len(self._path)

    @property
    def current(self) -> PuzzleState | None:
        return None if self._path is None else self._path[self._index]

    @property
    def at_start(self) -> bool:
        return self._path is None or self._index == 0

    @property
    def at_end(self) -> bool:
        return self._path is None or self._index >= len(self._path) - 1

    # -- transitions ----------------------------------------------------------

    def load(self, path: Sequence[PuzzleState]) -> PuzzleState:
        """Hold *path* with the cursor at 0 and return the board to display."""
        if not path:
            raise ValueError("Solution path must contain at least one board.")
        self.stop_ticking()
        self._path = tuple(path)
        self._index = 0
        self._emit()
        return self._path[0]

    def clear(self) -> None:
        """Drop the path (any edit to the board makes it stale)."""
        self.stop_ticking()
        self._path = None
        self._index = 0

    def step_forward(self) -> bool:
        """Manual step; pauses playback first.  Returns True if moved."""
        self.stop_ticking()
        return self._advance()

    def step_backward(self) -> bool:
        self.stop_ticking()
        if self._path is None or self._index == 0:
            return False
        self._index -= 1
        self._emit()
        return True

    def toggle_play(self) -> bool:
        """Play or pause.  Returns the resulting ``is_playing``.

        Starting is refused when nothing is held or the cursor is already
        on the last board.
        """
        if self.is_playing:
            self.stop_ticking()
            return False
        if self.at_end:
            return False
        self._start_ticking()
        return True

    def tick(self) -> None:
        """Timer callback: advance once, stop at the last board."""
        if not self.is_playing:
            return
        self._advance()
        if self.at_end:
            self.stop_ticking()

    def stop_ticking(self) -> None:
        """Cancel the playback timer.  Safe to call at any time."""
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()
            logger.debug("Playback stopped at step %d", self._index)

    def close(self) -> None:
        self.stop_ticking()

    # -- helpers --------------------------------------------------------------

    def _start_ticking(self) -> None:
        self.stop_ticking()
        self._handle = self._ticker.start(self.interval_ms, self.tick)
        logger.debug("Playback started at step %d", self._index)

    def _advance(self) -> bool:
        if self._path is None or self._index >= len(self._path) - 1:
            return False
        self._index += 1
        self._emit()
        return True

    def _emit(self) -> None:
        if self._on_change is not None and self._path is not None:
            self._on_change(self._path[self._index])
