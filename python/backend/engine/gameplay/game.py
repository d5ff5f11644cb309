"""Core gameplay logic: moves, shuffles, solve requests and playback."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Sequence

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamesolver import SolveRequestFailed, SolverClient
from backend.engine.gamestate import GameState
from backend.engine.playback import PlaybackStatus, SolutionPlayback, Ticker
from backend.models.board import Direction, PuzzleState, tile_for_direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveTicket:
    """Identifies one outstanding solve request."""

    generation: int
    board: PuzzleState


class GamePlay:
    """Orchestrates a single session.

    This is the only object that writes to :attr:`state`; frontends call
    its methods and re-render from ``state.board`` afterwards.
    """

    def __init__(
        self,
        ticker: Ticker,
        board: PuzzleState | None = None,
        rng: random.Random | None = None,
        on_board_change: Callable[[PuzzleState], None] | None = None,
    ) -> None:
        self.state = GameState(board or GameGenerator.solved())
        self.on_board_change = on_board_change
        self.playback = SolutionPlayback(ticker, on_change=self._show)
        self._rng = rng
        self._pending: SolveTicket | None = None

    @classmethod
    def from_board(cls, board: PuzzleState, ticker: Ticker) -> "GamePlay":
        """Create a session from an existing board."""
        return cls(ticker, board=board)

    # -- edits (each one invalidates any held solution) -----------------------

    def move_tile(self, index: int) -> bool:
        """Slide the tile at *index* into the blank (click).

        Returns True if the tile was adjacent to the blank and the move
        was applied.
        """
        board = self.state.board
        if not board.can_move(index):
            return False
        self._edit(board.slide(index))
        self.state.increment_moves()
        return True

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        """
        index = tile_for_direction(self.state.board.tiles, direction)
        if index is None:
            return False
        return self.move_tile(index)

    def shuffle(self) -> PuzzleState:
        board = GameGenerator.generate(self._rng)
        self._edit(board)
        self.state.moves = 0
        return board

    # -- solve lifecycle ------------------------------------------------------

    def begin_solve(self) -> SolveTicket | None:
        """Mark a request as in flight.  ``None`` if one already is."""
        if self._pending is not None:
            return None
        self.playback.stop_ticking()
        ticket = SolveTicket(self.state.bump_generation(), self.state.board)
        self._pending = ticket
        self.state.loading = True
        return ticket

    def finish_solve(self, ticket: SolveTicket, path: Sequence[PuzzleState]) -> bool:
        """Install *path* unless the board changed since *ticket* was issued."""
        self._settle(ticket)
        if ticket.generation != self.state.generation:
            logger.info("Discarding stale solution for generation %d", ticket.generation)
            return False
        self.playback.load(path)
        return True

    def fail_solve(self, ticket: SolveTicket, error: BaseException) -> None:
        self._settle(ticket)
        logger.warning("Solve request failed: %s", error)

    def solve(self, client: SolverClient) -> bool:
        """Blocking request/response round trip.

        Re-raises :class:`SolveRequestFailed` once loading is cleared; any
        other error from *client* also clears it before propagating.
        Returns False if a request is already running.
        """
        ticket = self.begin_solve()
        if ticket is None:
            return False
        try:
            path = client.solve(ticket.board)
        except SolveRequestFailed as exc:
            self.fail_solve(ticket, exc)
            raise
        finally:
            self._settle(ticket)
        return self.finish_solve(ticket, path)

    # -- playback -------------------------------------------------------------

    def step_forward(self) -> bool:
        return self.playback.step_forward()

    def step_backward(self) -> bool:
        return self.playback.step_backward()

    def toggle_play(self) -> bool:
        return self.playback.toggle_play()

    def close(self) -> None:
        self.playback.close()

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    @property
    def is_loading(self) -> bool:
        return self.state.loading

    @property
    def has_solution(self) -> bool:
        return self.playback.status is not PlaybackStatus.IDLE

    @property
    def step_label(self) -> str:
        if not self.has_solution:
            return ""
        return f"Step {self.playback.current_index + 1} of {self.playback.length}"

    # -- helpers --------------------------------------------------------------

    def _edit(self, board: PuzzleState) -> None:
        self.playback.clear()
        self.state.board = board
        self.state.bump_generation()

    def _show(self, board: PuzzleState) -> None:
        self.state.board = board
        self.state.bump_generation()
        if self.on_board_change is not None:
            self.on_board_change(board)

    def _settle(self, ticket: SolveTicket) -> None:
        if self._pending == ticket:
            self._pending = None
        self.state.loading = self._pending is not None
