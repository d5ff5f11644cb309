from backend.engine.gamesolver.solver import (
    DEFAULT_SOLVER_URL,
    DEFAULT_TIMEOUT,
    STARTUP_MIN_DISPLAY_MS,
    SolveRequestFailed,
    SolverClient,
    SolverConfig,
    parse_solution,
)

__all__ = [
    "DEFAULT_SOLVER_URL",
    "DEFAULT_TIMEOUT",
    "STARTUP_MIN_DISPLAY_MS",
    "SolveRequestFailed",
    "SolverClient",
    "SolverConfig",
    "parse_solution",
]
