"""Solver client tests.

No network: the ``requests`` session is replaced by a fake that records
calls and replays a canned response (or raises).
"""

from __future__ import annotations

import logging

import pytest
import requests

from backend.engine.gamesolver import (
    SolveRequestFailed,
    SolverClient,
    SolverConfig,
    parse_solution,
)
from backend.models.board import PuzzleState

START = PuzzleState((1, 2, 3, 4, 5, 6, 0, 7, 8))
PATH = [
    [1, 2, 3, 4, 5, 6, 0, 7, 8],
    [1, 2, 3, 4, 5, 6, 7, 0, 8],
    [1, 2, 3, 4, 5, 6, 7, 8, 0],
]


# -- fakes --------------------------------------------------------------------


class _FakeResponse:
    def __init__(self, payload=None, status: int = 200, bad_json: bool = False) -> None:
        self._payload = payload
        self.status_code = status
        self._bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._bad_json:
            raise requests.JSONDecodeError("Expecting value", "", 0)
        return self._payload


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, exc: Exception | None = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: list[tuple[str, str, dict]] = []
        self.closed = False

    def _reply(self, method: str, url: str, **kwargs) -> _FakeResponse:
        self.calls.append((method, url, kwargs))
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response

    def post(self, url: str, **kwargs) -> _FakeResponse:
        return self._reply("POST", url, **kwargs)

    def get(self, url: str, **kwargs) -> _FakeResponse:
        return self._reply("GET", url, **kwargs)

    def close(self) -> None:
        self.closed = True


def _client(session: _FakeSession, **config) -> SolverClient:
    return SolverClient(SolverConfig(**config), session=session)  # type: ignore[arg-type]


# -- config -------------------------------------------------------------------


def test_config_urls_tolerate_trailing_slash() -> None:
    config = SolverConfig(base_url="http://solver.local/")
    assert config.solve_url == "http://solver.local/solve/"
    assert config.health_url == "http://solver.local/"


# -- solve --------------------------------------------------------------------


def test_solve_posts_state_and_parses_path() -> None:
    session = _FakeSession(_FakeResponse({"solution_paths": PATH}))
    client = _client(session, base_url="http://solver.local", timeout=3.0)

    path = client.solve(START)

    assert [p.tiles for p in path] == [tuple(p) for p in PATH]
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "http://solver.local/solve/"
    assert kwargs["json"] == {"state": [1, 2, 3, 4, 5, 6, 0, 7, 8]}
    assert kwargs["timeout"] == 3.0


@pytest.mark.parametrize(
    "session",
    [
        _FakeSession(_FakeResponse({"error": "boom"}, status=500)),
        _FakeSession(exc=requests.ConnectionError("refused")),
        _FakeSession(exc=requests.Timeout("slow")),
        _FakeSession(_FakeResponse(bad_json=True)),
    ],
    ids=["http-500", "connection", "timeout", "bad-json"],
)
def test_solve_wraps_transport_failures(session: _FakeSession) -> None:
    with pytest.raises(SolveRequestFailed) as info:
        _client(session).solve(START)
    assert isinstance(info.value.__cause__, (requests.RequestException, ValueError))


class _DeeplyNestedResponse(_FakeResponse):
    def json(self):
        raise RecursionError("maximum recursion depth exceeded while decoding a JSON array")


def test_solve_wraps_deeply_nested_body() -> None:
    session = _FakeSession(_DeeplyNestedResponse())
    with pytest.raises(SolveRequestFailed) as info:
        _client(session).solve(START)
    assert isinstance(info.value.__cause__, RecursionError)


def test_solve_rejects_bad_payload() -> None:
    session = _FakeSession(_FakeResponse({"solution_paths": []}))
    with pytest.raises(SolveRequestFailed):
        _client(session).solve(START)


def test_close_closes_session() -> None:
    session = _FakeSession()
    _client(session).close()
    assert session.closed


# -- response validation ------------------------------------------------------


def test_parse_solution_single_board_for_solved_start() -> None:
    goal = PuzzleState()
    assert parse_solution({"solution_paths": [list(goal.tiles)]}, goal) == [goal]


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [PATH],
        {},
        {"solution_paths": None},
        {"solution_paths": []},
        {"solution_paths": [[1, 2, 3]]},
        {"solution_paths": [5]},
        {"solution_paths": [[1, 1, 3, 4, 5, 6, 0, 7, 8]]},
    ],
    ids=["none", "list", "missing", "null", "empty", "short-board", "not-a-board", "duplicate"],
)
def test_parse_solution_rejects_malformed(payload) -> None:
    with pytest.raises(SolveRequestFailed):
        parse_solution(payload, START)


def test_parse_solution_rejects_wrong_start() -> None:
    with pytest.raises(SolveRequestFailed, match="starts at"):
        parse_solution({"solution_paths": PATH[1:]}, START)


def test_parse_solution_rejects_teleporting_step() -> None:
    jump = [PATH[0], [1, 2, 3, 4, 5, 6, 7, 8, 0]]
    with pytest.raises(SolveRequestFailed, match="not a legal move"):
        parse_solution({"solution_paths": jump}, START)


def test_parse_solution_rejects_repeated_board() -> None:
    stall = [PATH[0], PATH[0], PATH[1]]
    with pytest.raises(SolveRequestFailed, match="not a legal move"):
        parse_solution({"solution_paths": stall}, START)


# -- probe --------------------------------------------------------------------


def test_probe_success() -> None:
    session = _FakeSession(_FakeResponse({"message": "ok"}))
    assert _client(session, base_url="http://solver.local").probe()
    assert session.calls[0][:2] == ("GET", "http://solver.local/")


@pytest.mark.parametrize(
    "session",
    [
        _FakeSession(exc=requests.ConnectionError("refused")),
        _FakeSession(_FakeResponse(status=503)),
        _FakeSession(_FakeResponse(bad_json=True)),
    ],
    ids=["connection", "http-503", "bad-json"],
)
def test_probe_failure_is_logged_not_raised(session: _FakeSession, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="backend.engine.gamesolver.solver"):
        assert not _client(session).probe()
    assert "Solver unreachable" in caplog.text
