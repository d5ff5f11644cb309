"""Client for the remote 8-puzzle solving service.

The search itself runs on the backend; this module only ships the
current board over HTTP and validates the path that comes back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import requests

from backend.models.board import PuzzleState

logger = logging.getLogger(__name__)

DEFAULT_SOLVER_URL = "https://8puzzle-backend.vercel.app"
DEFAULT_TIMEOUT = 10.0
# The startup screen stays up at least this long after the probe returns.
STARTUP_MIN_DISPLAY_MS = 1000


class SolveRequestFailed(RuntimeError):
    """The solver could not be reached or answered with something unusable."""


@dataclass(frozen=True)
class SolverConfig:
    base_url: str = DEFAULT_SOLVER_URL
    timeout: float = DEFAULT_TIMEOUT
    probe: bool = True

    @property
    def solve_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/solve/"

    @property
    def health_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/"


class SolverClient:
    """Thin ``requests`` wrapper around the solver's two endpoints."""

    def __init__(
        self,
        config: SolverConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or SolverConfig()
        self._session = session or requests.Session()

    def solve(self, board: PuzzleState) -> list[PuzzleState]:
        """Return the solution path from *board* to the goal, inclusive.

        Raises :class:`SolveRequestFailed` on any transport or HTTP error
        and on responses that do not form a valid path.
        """
        logger.info("Requesting solution for %s", list(board.tiles))
        try:
            response = self._session.post(
                self.config.solve_url,
                json={"state": list(board.tiles)},
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError, RecursionError) as exc:
            raise SolveRequestFailed(f"Solver request failed: {exc}") from exc

        return parse_solution(data, board)

    def probe(self) -> bool:
        """Check once that the backend answers.  Never raises."""
        try:
            response = self._session.get(
                self.config.health_url, timeout=self.config.timeout
            )
            response.raise_for_status()
            response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Solver unreachable at %s: %s", self.config.health_url, exc)
            return False
        logger.info("Solver reachable at %s", self.config.health_url)
        return True

    def close(self) -> None:
        self._session.close()


# -- response validation ------------------------------------------------------


def parse_solution(data: Any, start: PuzzleState) -> list[PuzzleState]:
    """Turn a ``{"solution_paths": [...]}`` payload into checked boards."""
    if not isinstance(data, dict) or "solution_paths" not in data:
        raise SolveRequestFailed("Solver response has no 'solution_paths'.")
    raw = data["solution_paths"]
    if not isinstance(raw, list) or not raw:
        raise SolveRequestFailed("Solver returned an empty solution path.")

    try:
        path = [PuzzleState.from_tiles(step) for step in raw]
    except (TypeError, ValueError) as exc:
        raise SolveRequestFailed(f"Solver returned an invalid board: {exc}") from exc

    if path[0] != start:
        raise SolveRequestFailed(
            f"Solution starts at {list(path[0].tiles)}, "
            f"expected {list(start.tiles)}."
        )
    for i, (prev, nxt) in enumerate(zip(path, path[1:]), 1):
        if not _one_move_apart(prev.tiles, nxt.tiles):
            raise SolveRequestFailed(f"Step {i} of the solution is not a legal move.")
    return path


def _one_move_apart(a: Sequence[int], b: Sequence[int]) -> bool:
    blank = b.index(0)
    return a[blank] != 0 and PuzzleState(tuple(a)).slide(blank).tiles == tuple(b)
