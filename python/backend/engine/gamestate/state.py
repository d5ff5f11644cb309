"""Tracks the mutable state of one puzzle session."""

from __future__ import annotations

from backend.models.board import PuzzleState


class GameState:
    """Holds the displayed board, move counter, and solve bookkeeping.

    ``generation`` changes whenever the displayed board changes and on
    every solve request, so a response can be matched against the board
    it was asked for.
    """

    def __init__(self, board: PuzzleState | None = None) -> None:
        self.board = board or PuzzleState()
        self.moves: int = 0
        self.loading: bool = False
        self.generation: int = 0

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    def bump_generation(self) -> int:
        self.generation += 1
        return self.generation

    @property
    def is_solved(self) -> bool:
        return self.board.is_goal()
