"""Board model for the 8-puzzle.

Tiles are stored as a flat, row-major tuple of nine ints where 0 is the
blank.  ``row = index // 3`` and ``col = index % 3``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Sequence

SIZE = 3
CELLS = SIZE * SIZE
GOAL: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 0)


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# -- pure tile operations -----------------------------------------------------


def can_move(tiles: Sequence[int], index: int) -> bool:
    """Return True if the tile at *index* is orthogonally next to the blank."""
    if not 0 <= index < CELLS:
        return False
    blank = tiles.index(0)
    row, col = divmod(index, SIZE)
    blank_row, blank_col = divmod(blank, SIZE)
    return (abs(row - blank_row) == 1 and col == blank_col) or (
        abs(col - blank_col) == 1 and row == blank_row
    )


def apply_move(
    tiles: Sequence[int], from_index: int, to_index: int
) -> tuple[int, ...]:
    """Slide the tile at *from_index* into the blank at *to_index*.

    Illegal moves are ignored and the input comes back unchanged.
    """
    current = tuple(tiles)
    if not 0 <= to_index < CELLS or current[to_index] != 0:
        return current
    if not can_move(current, from_index):
        return current
    out = list(current)
    out[from_index], out[to_index] = out[to_index], out[from_index]
    return tuple(out)


def count_inversions(tiles: Sequence[int]) -> int:
    numbers = [v for v in tiles if v != 0]
    inversions = 0
    for i in range(len(numbers) - 1):
        for j in range(i + 1, len(numbers)):
            if numbers[i] > numbers[j]:
                inversions += 1
    return inversions


def is_solvable(tiles: Sequence[int]) -> bool:
    """Odd-width boards are solvable iff the inversion count is even."""
    return count_inversions(tiles) % 2 == 0


def movable_indices(tiles: Sequence[int]) -> list[int]:
    return [i for i in range(CELLS) if can_move(tiles, i)]


def tile_for_direction(tiles: Sequence[int], direction: Direction) -> int | None:
    """Return the index of the tile that slides in *direction*, if any.

    E.g. ``Direction.UP`` picks the tile **below** the blank.
    """
    blank_row, blank_col = divmod(tiles.index(0), SIZE)
    offsets = {
        Direction.UP: (1, 0),
        Direction.DOWN: (-1, 0),
        Direction.LEFT: (0, 1),
        Direction.RIGHT: (0, -1),
    }
    dr, dc = offsets[direction]
    r, c = blank_row + dr, blank_col + dc
    if not (0 <= r < SIZE and 0 <= c < SIZE):
        return None
    return r * SIZE + c


# -- value object -------------------------------------------------------------


@dataclass(frozen=True)
class PuzzleState:
    """An immutable 3×3 arrangement.

    Every instance holds a permutation of 0..8; use :meth:`from_tiles`
    for anything coming from outside the process.
    """

    tiles: tuple[int, ...] = GOAL

    @classmethod
    def from_tiles(cls, tiles: Sequence[int]) -> PuzzleState:
        """Validate *tiles* and wrap them.

        Example::

            PuzzleState.from_tiles([1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        if isinstance(tiles, (str, bytes)) or len(tiles) != CELLS:
            raise ValueError(
                f"Expected {CELLS} tiles for a {SIZE}×{SIZE} board, got {tiles!r}."
            )
        values = tuple(tiles)
        if any(isinstance(v, bool) or not isinstance(v, int) for v in values):
            raise ValueError(f"Tiles must be integers, got {values!r}.")
        if sorted(values) != list(range(CELLS)):
            raise ValueError(f"Tiles must be a permutation of 0..8, got {values!r}.")
        return cls(values)

    # -- queries --------------------------------------------------------------

    @property
    def blank_index(self) -> int:
        return self.tiles.index(0)

    def can_move(self, index: int) -> bool:
        return can_move(self.tiles, index)

    def is_goal(self) -> bool:
        return self.tiles == GOAL

    def is_solvable(self) -> bool:
        return is_solvable(self.tiles)

    def is_tile_correct(self, index: int) -> bool:
        """Check if the tile at *index* sits in its goal position."""
        return self.tiles[index] == GOAL[index]

    def rows(self) -> list[tuple[int, ...]]:
        return [self.tiles[r * SIZE : (r + 1) * SIZE] for r in range(SIZE)]

    # -- transitions ----------------------------------------------------------

    def apply_move(self, from_index: int, to_index: int) -> PuzzleState:
        return PuzzleState(apply_move(self.tiles, from_index, to_index))

    def slide(self, index: int) -> PuzzleState:
        """Move the tile at *index* into the blank, or return ``self``."""
        return self.apply_move(index, self.blank_index)
