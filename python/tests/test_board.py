"""Board model tests: adjacency, moves, inversions and solvability."""

from __future__ import annotations

import random

import pytest

from backend.models.board import (
    GOAL,
    Direction,
    PuzzleState,
    apply_move,
    can_move,
    count_inversions,
    is_solvable,
    movable_indices,
    tile_for_direction,
)

# A spread of arrangements with the blank in most cells.
_BOARDS = [
    (1, 2, 3, 4, 5, 6, 7, 8, 0),
    (0, 1, 2, 3, 4, 5, 6, 7, 8),
    (1, 0, 3, 4, 2, 5, 7, 8, 6),
    (8, 6, 7, 2, 5, 4, 3, 0, 1),
    (4, 1, 3, 0, 2, 6, 7, 5, 8),
    (1, 2, 3, 4, 0, 5, 7, 8, 6),
    (6, 4, 7, 8, 5, 0, 3, 2, 1),
    (2, 8, 1, 0, 4, 3, 7, 6, 5),
    (1, 2, 0, 4, 5, 3, 7, 8, 6),
]


def _ids(tiles: tuple[int, ...]) -> str:
    return "".join(map(str, tiles))


def _random_walk(tiles: tuple[int, ...], steps: int, seed: int) -> list[tuple[int, ...]]:
    rng = random.Random(seed)
    seen = [tiles]
    for _ in range(steps):
        blank = tiles.index(0)
        tiles = apply_move(tiles, rng.choice(movable_indices(tiles)), blank)
        seen.append(tiles)
    return seen


# -- can_move -----------------------------------------------------------------


def test_can_move_goal_board() -> None:
    assert can_move(GOAL, 5)
    assert can_move(GOAL, 7)
    assert not can_move(GOAL, 0)
    assert not can_move(GOAL, 4)  # diagonal
    assert not can_move(GOAL, 8)  # the blank itself


def test_can_move_does_not_wrap_rows() -> None:
    # blank at index 3 (row 1, col 0); index 2 is row 0, col 2
    tiles = (1, 2, 3, 0, 4, 5, 6, 7, 8)
    assert not can_move(tiles, 2)
    assert sorted(movable_indices(tiles)) == [0, 4, 6]


@pytest.mark.parametrize("tiles", _BOARDS, ids=_ids)
def test_can_move_matches_manhattan_distance(tiles: tuple[int, ...]) -> None:
    br, bc = divmod(tiles.index(0), 3)
    for i in range(9):
        r, c = divmod(i, 3)
        assert can_move(tiles, i) == (abs(r - br) + abs(c - bc) == 1)


def test_can_move_rejects_out_of_range() -> None:
    assert not can_move(GOAL, -1)
    assert not can_move(GOAL, 9)


# -- apply_move ---------------------------------------------------------------


def test_apply_move_scenario() -> None:
    assert apply_move([1, 2, 3, 4, 5, 6, 7, 8, 0], 5, 8) == (1, 2, 3, 4, 5, 0, 7, 8, 6)


def test_apply_move_ignores_illegal_moves() -> None:
    assert apply_move(GOAL, 0, 8) == GOAL  # not adjacent
    assert apply_move(GOAL, 4, 5) == GOAL  # target is not the blank
    assert apply_move(GOAL, 4, 8) == GOAL  # diagonal


@pytest.mark.parametrize("tiles", _BOARDS, ids=_ids)
def test_apply_move_twice_restores_board(tiles: tuple[int, ...]) -> None:
    blank = tiles.index(0)
    for i in movable_indices(tiles):
        once = apply_move(tiles, i, blank)
        assert once != tiles
        assert apply_move(once, blank, i) == tiles


@pytest.mark.parametrize("tiles", _BOARDS, ids=_ids)
def test_moves_keep_permutation_and_parity(tiles: tuple[int, ...]) -> None:
    parity = is_solvable(tiles)
    for step in _random_walk(tiles, 200, seed=sum(tiles) * 7 + tiles.index(0)):
        assert sorted(step) == list(range(9))
        assert is_solvable(step) == parity


# -- inversions / solvability -------------------------------------------------


def test_goal_has_no_inversions() -> None:
    assert count_inversions(GOAL) == 0
    assert is_solvable(GOAL)


def test_count_inversions_ignores_blank() -> None:
    assert count_inversions((0, 1, 2, 3, 4, 5, 6, 7, 8)) == 0
    assert count_inversions((8, 7, 6, 5, 4, 3, 2, 1, 0)) == 28
    assert count_inversions((2, 1, 3, 4, 5, 6, 7, 8, 0)) == 1


def test_single_swap_is_unsolvable() -> None:
    assert not is_solvable((2, 1, 3, 4, 5, 6, 7, 8, 0))
    assert not is_solvable((1, 2, 3, 4, 5, 6, 8, 7, 0))


def test_swapping_two_tiles_flips_solvability() -> None:
    rng = random.Random(3)
    for _ in range(500):
        tiles = list(range(9))
        rng.shuffle(tiles)
        i, j = rng.sample([k for k in range(9) if tiles[k] != 0], 2)
        swapped = tiles[:]
        swapped[i], swapped[j] = swapped[j], swapped[i]
        assert is_solvable(tiles) != is_solvable(swapped)


# -- direction helper ---------------------------------------------------------


@pytest.mark.parametrize(
    ("direction", "expected"),
    [
        (Direction.UP, None),
        (Direction.DOWN, 5),
        (Direction.LEFT, None),
        (Direction.RIGHT, 7),
    ],
)
def test_tile_for_direction_on_goal(direction: Direction, expected: int | None) -> None:
    assert tile_for_direction(GOAL, direction) == expected


def test_tile_for_direction_from_centre() -> None:
    tiles = (1, 2, 3, 4, 0, 5, 6, 7, 8)
    assert tile_for_direction(tiles, Direction.UP) == 7
    assert tile_for_direction(tiles, Direction.DOWN) == 1
    assert tile_for_direction(tiles, Direction.LEFT) == 5
    assert tile_for_direction(tiles, Direction.RIGHT) == 3


# -- PuzzleState --------------------------------------------------------------


def test_default_state_is_goal() -> None:
    state = PuzzleState()
    assert state.tiles == GOAL
    assert state.is_goal()
    assert state.blank_index == 8
    assert state.rows() == [(1, 2, 3), (4, 5, 6), (7, 8, 0)]


def test_from_tiles_accepts_lists() -> None:
    state = PuzzleState.from_tiles([1, 2, 3, 4, 5, 6, 7, 0, 8])
    assert state.tiles == (1, 2, 3, 4, 5, 6, 7, 0, 8)
    assert state.blank_index == 7
    assert not state.is_goal()


@pytest.mark.parametrize(
    "tiles",
    [
        [1, 2, 3, 4, 5, 6, 7, 8],
        [1, 2, 3, 4, 5, 6, 7, 8, 0, 9],
        [1, 1, 3, 4, 5, 6, 7, 8, 0],
        [1, 2, 3, 4, 5, 6, 7, 8, 9],
        [1, 2, 3, 4, 5, 6, 7, 8, "0"],
        [1, 2, 3, 4, 5, 6, 7, 8, 0.0],
        "123456780",
    ],
    ids=["short", "long", "duplicate", "out-of-range", "string-tile", "float-tile", "string"],
)
def test_from_tiles_rejects_invalid(tiles) -> None:
    with pytest.raises(ValueError):
        PuzzleState.from_tiles(tiles)


def test_slide_and_tile_correctness() -> None:
    state = PuzzleState()
    moved = state.slide(5)
    assert moved.tiles == (1, 2, 3, 4, 5, 0, 7, 8, 6)
    assert not moved.is_tile_correct(8)
    assert moved.is_tile_correct(0)
    assert state.slide(0) == state
