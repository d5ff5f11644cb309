"""Rich terminal frontend: styled board, solve requests, and playback.

Uses the ``rich`` library for output and the shared single-key input
handler.  Playback ticks are driven from the input loop through a
``PolledTicker``, so everything runs on one thread.
"""

from __future__ import annotations

import time

import rich.box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import (
    STARTUP_MIN_DISPLAY_MS,
    SolveRequestFailed,
    SolverClient,
    SolverConfig,
)
from backend.engine.playback import PolledTicker
from backend.models.board import Direction, PuzzleState, movable_indices
from frontend.cli.input_handler import get_key, get_key_timeout

console = Console()

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

SOLVER_UNAVAILABLE = "Failed to connect to the solver service. Please try again later."


# -- board rendering ----------------------------------------------------------


def _render_board(board: PuzzleState) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(3):
        table.add_column(width=3, justify="center")

    movable = set(movable_indices(board.tiles))
    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            index = r * 3 + c
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif board.is_tile_correct(index):
                cells.append(f"[bold green]{val}[/bold green]")
            elif index in movable:
                cells.append(f"[bold cyan]{val}[/bold cyan]")
            else:
                cells.append(f"[bold white]{val}[/bold white]")
        table.add_row(*cells)

    return table


def _controls(game: GamePlay) -> Text:
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("1-9", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("R", style="bold yellow")
    controls.append("  shuffle   ", style="dim")
    controls.append("V", style="bold cyan")
    controls.append("  solve   ", style="dim")
    if game.has_solution:
        controls.append(",", style="bold cyan")
        controls.append(" prev   ", style="dim")
        controls.append("Space", style="bold green")
        controls.append(" pause   " if game.playback.is_playing else " play   ", style="dim")
        controls.append(".", style="bold cyan")
        controls.append(" next   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")
    return controls


# -- screens ------------------------------------------------------------------


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    if game.has_solution:
        stats.append("    ", style="dim")
        stats.append(game.step_label, style="bold magenta")
        if game.playback.is_playing:
            stats.append("  ▶", style="bold green")
    if game.is_won:
        stats.append("    Solved!", style="bold green")

    title = "[bold cyan]8 Puzzle Solver[/bold cyan]"
    panel = Panel(
        Align.center(_render_board(game.state.board)),
        title=title,
        border_style="green" if game.is_won else "bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls(game)))


def _draw_help() -> None:
    console.clear()
    lines = Text()
    lines.append("How to play:\n\n", style="bold")
    lines.append("  • Move tiles next to the empty space (arrows, WASD or 1-9)\n")
    lines.append("  • Press R to shuffle a new solvable puzzle\n")
    lines.append("  • Press V to ask the solver for a solution\n")
    lines.append("  • Step with , and . or press Space to play it back\n")
    console.print()
    console.print(Align.center(Panel(lines, title="[bold]HELP[/bold]", border_style="bright_blue")))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


def _notify_failure() -> None:
    """Blocking notice: the user acknowledges before play continues."""
    console.print()
    console.print(
        Align.center(
            Panel(
                Text(SOLVER_UNAVAILABLE, style="bold red"),
                border_style="red",
                padding=(1, 2),
            )
        )
    )
    console.print(Align.center(Text("  Press any key to continue.", style="dim")))
    get_key()


def _startup(client: SolverClient, config: SolverConfig) -> None:
    """Probe the solver behind an 'Initializing...' spinner."""
    if not config.probe:
        return
    with console.status("[bold cyan]Initializing...[/bold cyan]", spinner="dots"):
        client.probe()
        time.sleep(STARTUP_MIN_DISPLAY_MS / 1000)


# -- game loop ----------------------------------------------------------------


def _solve(game: GamePlay, client: SolverClient) -> str:
    try:
        with console.status("[bold magenta]Solving...[/bold magenta]", spinner="dots"):
            installed = game.solve(client)
    except SolveRequestFailed:
        _notify_failure()
        return ""
    if not installed:
        return ""
    moves = game.playback.length - 1
    return f"[green]Solution found: {moves} moves.[/green] Press Space to play."


def _wait_for_key(ticker: PolledTicker, game: GamePlay, status: str) -> str:
    """Block for a key while letting due playback ticks repaint the board."""
    while True:
        wait = ticker.time_until_due()
        if wait is None:
            return get_key()
        key = get_key_timeout(wait)
        if key is not None:
            return key
        if ticker.poll():
            _draw_game(game, status)


def _session(client: SolverClient) -> None:
    ticker = PolledTicker()
    game = GamePlay(ticker)
    status = ""

    try:
        while True:
            _draw_game(game, status)
            key = _wait_for_key(ticker, game, status)
            status = ""

            if key in _DIRECTIONS:
                game.move(_DIRECTIONS[key])
            elif key.startswith("cell:"):
                game.move_tile(int(key.split(":", 1)[1]))
            elif key == "shuffle":
                game.shuffle()
                status = "[yellow]Shuffled![/yellow]"
            elif key == "solve":
                status = _solve(game, client)
            elif key == "prev":
                game.step_backward()
            elif key == "next":
                game.step_forward()
            elif key == "play":
                game.toggle_play()
            elif key == "help":
                _draw_help()
            elif key == "quit":
                return
    finally:
        game.close()


# -- public entry point -------------------------------------------------------


def run(config: SolverConfig) -> None:
    """Launch the Rich terminal UI."""
    client = SolverClient(config)
    try:
        _startup(client, config)
        _session(client)
    finally:
        client.close()
        console.clear()
        console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
