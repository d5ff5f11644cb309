"""Generates solvable 8-puzzle boards."""

from __future__ import annotations

import random

from backend.models.board import CELLS, GOAL, PuzzleState, is_solvable

# Half of all permutations are solvable, so each draw succeeds with p = 0.5.
# Exhausting this cap has probability 2**-1000.
MAX_SHUFFLE_ATTEMPTS = 1000


class GameGenerator:
    """Creates solvable puzzles by rejection-sampling random permutations."""

    @staticmethod
    def solved() -> PuzzleState:
        """Return the goal-state board (tiles in order, blank bottom-right)."""
        return PuzzleState(GOAL)

    @staticmethod
    def shuffle(
        rng: random.Random | None = None,
        max_attempts: int = MAX_SHUFFLE_ATTEMPTS,
    ) -> tuple[int, ...]:
        """Return a uniformly random *solvable* permutation of 0..8.

        Expect about two draws per call.
        """
        rng = rng or random.Random()
        for _ in range(max_attempts):
            tiles = list(range(CELLS))
            rng.shuffle(tiles)
            if is_solvable(tiles):
                return tuple(tiles)
        raise RuntimeError(
            f"No solvable permutation found in {max_attempts} attempts."
        )

    @staticmethod
    def generate(rng: random.Random | None = None) -> PuzzleState:
        return PuzzleState(GameGenerator.shuffle(rng))
