#!/usr/bin/env python3
"""8-Puzzle Solver.

Usage::

    python main.py                  # interactive menu
    python main.py -f rich          # Rich terminal
    python main.py -f pyqt          # PyQt GUI
    python main.py --solver-url http://localhost:8000 --log-level info
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamesolver import (  # noqa: E402
    DEFAULT_SOLVER_URL,
    DEFAULT_TIMEOUT,
    SolverConfig,
)

logger = logging.getLogger("puzzle")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pyqt = "pyqt"


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}


# -- helpers ------------------------------------------------------------------


def configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _launch(frontend: Frontend, config: SolverConfig) -> None:
    logger.debug("Launching %s frontend against %s", frontend.value, config.base_url)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(config)


def _menu_loop(config: SolverConfig) -> None:
    while True:
        print()
        print("  ====================================")
        print("         8 - P U Z Z L E   S O L V E R")
        print("  ====================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (PyQt GUI)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return
        if choice == "1":
            _launch(Frontend.rich, config)
        elif choice == "2":
            _launch(Frontend.pyqt, config)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    solver_url: str = typer.Option(
        DEFAULT_SOLVER_URL, "--solver-url",
        envvar="PUZZLE_SOLVER_URL",
        help="Base URL of the solving service.",
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT, "--timeout",
        envvar="PUZZLE_SOLVER_TIMEOUT",
        min=0.1,
        help="HTTP timeout in seconds.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity.",
    ),
    skip_probe: bool = typer.Option(
        False, "--skip-probe",
        help="Skip the startup reachability check.",
    ),
) -> None:
    """8-Puzzle Solver."""
    configure_logging(log_level)
    config = SolverConfig(base_url=solver_url, timeout=timeout, probe=not skip_probe)

    if frontend is None:
        _menu_loop(config)
        return

    _launch(frontend, config)


if __name__ == "__main__":
    app()
