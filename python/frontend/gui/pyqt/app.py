"""PyQt6 GUI frontend: fully self-contained.

Includes the startup screen, the board with click-to-move tiles,
shuffle/solve buttons and solution playback controls.  Solve requests run
on a worker thread and report back through Qt signals.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable

from PyQt6.QtCore import Qt, QThread, QTimer, pyqtSignal
from PyQt6.QtGui import QCloseEvent, QFont, QKeyEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from backend.engine.gameplay import GamePlay, SolveTicket
from backend.engine.gamesolver import (
    STARTUP_MIN_DISPLAY_MS,
    SolveRequestFailed,
    SolverClient,
    SolverConfig,
)
from backend.models.board import Direction, PuzzleState

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_SUBTEXT = "#a6adc8"
_BLUE = "#89b4fa"
_BLUE_H = "#a4c4fc"
_GREEN = "#a6e3a1"
_GREEN_H = "#b8ecb4"
_PINK = "#f5c2e7"
_MAUVE = "#cba6f7"
_LAVENDER = "#b4befe"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_TILE_PX = 96
_INIT_TEXTS = ("Initializing...", "Please wait...")
_INIT_TEXT_MS = 2000
_HINT = "Click / arrows  move    R  shuffle    V  solve    , .  step    Space  play"

SOLVER_UNAVAILABLE = "Failed to connect to the solver service. Please try again later."


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 14,
    bold: bool = True,
    min_w: int = 0,
    min_h: int = 44,
    radius: int = 8,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold if bold else QFont.Weight.Normal))
    btn.setMinimumHeight(min_h)
    if min_w:
        btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:{radius}px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
        f" QPushButton:disabled {{ background:{_SURFACE0}; color:{_OVERLAY0}; }}"
    )
    return btn


# ═══════════════════════════════════════════════════════════════════════════
# Timer and worker plumbing
# ═══════════════════════════════════════════════════════════════════════════


class _QtHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()
        self._timer.deleteLater()


class _QtTicker:
    """Playback ticker backed by a repeating ``QTimer`` on the UI thread."""

    def __init__(self, parent: QWidget) -> None:
        self._parent = parent

    def start(self, interval_ms: int, callback: Callable[[], None]) -> _QtHandle:
        timer = QTimer(self._parent)
        timer.timeout.connect(callback)
        timer.start(interval_ms)
        return _QtHandle(timer)


class _SolveWorker(QThread):
    solved = pyqtSignal(object, object)
    failed = pyqtSignal(object, object)

    def __init__(self, client: SolverClient, ticket: SolveTicket) -> None:
        super().__init__()
        self._client = client
        self.ticket = ticket

    def run(self) -> None:
        try:
            path = self._client.solve(self.ticket.board)
        except SolveRequestFailed as exc:
            self.failed.emit(self.ticket, exc)
            return
        except Exception as exc:
            logger.exception("Unexpected error from the solver client")
            self.failed.emit(self.ticket, SolveRequestFailed(str(exc)))
            return
        self.solved.emit(self.ticket, path)


class _ProbeWorker(QThread):
    probed = pyqtSignal(bool)

    def __init__(self, client: SolverClient) -> None:
        super().__init__()
        self._client = client

    def run(self) -> None:
        self.probed.emit(self._client.probe())


# ═══════════════════════════════════════════════════════════════════════════
# Pages
# ═══════════════════════════════════════════════════════════════════════════


class _StartupPage(QWidget):
    """Loading screen shown while the solver is probed."""

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("page")

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(12)

        title = QLabel("8  PUZZLE  SOLVER")
        title.setFont(QFont("Helvetica", 30, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)

        root.addSpacerItem(QSpacerItem(0, 20))

        self._label = QLabel(_INIT_TEXTS[0])
        self._label.setFont(QFont("Helvetica", 16))
        self._label.setStyleSheet(f"color:{_SUBTEXT};")
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._label)

        self._flip = QTimer(self)
        self._flip.timeout.connect(self._alternate)
        self._flip.start(_INIT_TEXT_MS)

    def _alternate(self) -> None:
        current = self._label.text()
        self._label.setText(_INIT_TEXTS[1] if current == _INIT_TEXTS[0] else _INIT_TEXTS[0])

    def stop(self) -> None:
        self._flip.stop()


class _GamePage(QWidget):
    """The puzzle board with tile buttons, solve and playback controls."""

    def __init__(self, client: SolverClient) -> None:
        super().__init__()
        self.setObjectName("page")
        self._client = client
        self._worker: _SolveWorker | None = None
        self.game = GamePlay(_QtTicker(self), on_board_change=self._on_playback_change)

        root = QVBoxLayout(self)
        root.setSpacing(8)
        root.setContentsMargins(16, 10, 16, 10)

        t = QLabel("8 Puzzle Solver")
        t.setFont(QFont("Helvetica", 20, QFont.Weight.Bold))
        t.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(t)

        self._stats = QLabel()
        self._stats.setFont(QFont("Helvetica", 13))
        self._stats.setStyleSheet(f"color:{_PINK};")
        self._stats.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._stats)

        # board
        frame = QFrame()
        frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
        grid = QGridLayout(frame)
        grid.setSpacing(6)
        grid.setContentsMargins(8, 8, 8, 8)
        root.addWidget(frame, alignment=Qt.AlignmentFlag.AlignCenter)

        self._tiles: list[QPushButton] = []
        for index in range(9):
            b = QPushButton()
            b.setFixedSize(_TILE_PX, _TILE_PX)
            b.setFont(QFont("Helvetica", _TILE_PX // 3, QFont.Weight.Bold))
            b.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            b.clicked.connect(lambda _, i=index: self._click(i))
            grid.addWidget(b, index // 3, index % 3)
            self._tiles.append(b)

        # actions
        actions = QHBoxLayout()
        actions.setSpacing(10)
        self.shuffle_btn = _styled_btn("Shuffle", bg=_BLUE, hover=_BLUE_H, fg=_BASE, min_w=150)
        self.shuffle_btn.clicked.connect(self.shuffle)
        self.solve_btn = _styled_btn("Solve Puzzle", bg=_MAUVE, hover=_LAVENDER, fg=_BASE, min_w=150)
        self.solve_btn.clicked.connect(self.solve)
        actions.addWidget(self.shuffle_btn)
        actions.addWidget(self.solve_btn)
        root.addLayout(actions)

        # playback
        self._playback_row = QWidget()
        playback = QHBoxLayout(self._playback_row)
        playback.setContentsMargins(0, 0, 0, 0)
        playback.setSpacing(10)
        self.prev_btn = _styled_btn("Previous", min_w=110)
        self.prev_btn.clicked.connect(self.step_backward)
        self.play_btn = _styled_btn("Play", bg=_GREEN, hover=_GREEN_H, fg=_BASE, min_w=110)
        self.play_btn.clicked.connect(self.toggle_play)
        self.next_btn = _styled_btn("Next", min_w=110)
        self.next_btn.clicked.connect(self.step_forward)
        for btn in (self.prev_btn, self.play_btn, self.next_btn):
            playback.addWidget(btn)
        root.addWidget(self._playback_row)

        self._step = QLabel()
        self._step.setFont(QFont("Helvetica", 13, QFont.Weight.Bold))
        self._step.setStyleSheet(f"color:{_SUBTEXT};")
        self._step.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._step)

        hint = QLabel(_HINT)
        hint.setFont(QFont("Helvetica", 11))
        hint.setStyleSheet(f"color:{_OVERLAY0};")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(hint)

        self._sync()

    # -- rendering --

    def _sync(self) -> None:
        board = self.game.state.board
        for index, b in enumerate(self._tiles):
            v = board.tiles[index]
            if v == 0:
                b.setText("")
                b.setCursor(Qt.CursorShape.ArrowCursor)
                b.setStyleSheet(
                    f"QPushButton{{background:{_SURFACE0};border:none;border-radius:12px;}}"
                )
                continue
            b.setText(str(v))
            movable = board.can_move(index)
            b.setCursor(
                Qt.CursorShape.PointingHandCursor if movable else Qt.CursorShape.ForbiddenCursor
            )
            bg = _GREEN if board.is_tile_correct(index) else _BLUE
            hv = _GREEN_H if board.is_tile_correct(index) else _BLUE_H
            b.setStyleSheet(
                f"QPushButton{{background:{bg};color:{_BASE};"
                f"border:none;border-radius:12px;font-weight:bold;}}"
                f"QPushButton:hover{{background:{hv};}}"
            )

        loading = self.game.is_loading
        self.shuffle_btn.setEnabled(not loading)
        self.solve_btn.setEnabled(not loading)
        self.solve_btn.setText("Solving..." if loading else "Solve Puzzle")

        playback = self.game.playback
        self._playback_row.setVisible(self.game.has_solution)
        self.prev_btn.setEnabled(not playback.at_start)
        self.next_btn.setEnabled(not playback.at_end)
        self.play_btn.setEnabled(playback.is_playing or not playback.at_end)
        self.play_btn.setText("Pause" if playback.is_playing else "Play")
        self._step.setText(self.game.step_label)

        status = f"Moves: {self.game.state.moves}"
        if self.game.is_won:
            status += "    Solved!"
        self._stats.setText(status)

    def _on_playback_change(self, _board: PuzzleState) -> None:
        self._sync()

    # -- actions --

    def _click(self, index: int) -> None:
        if self.game.move_tile(index):
            self._sync()

    def move(self, d: Direction) -> None:
        if self.game.move(d):
            self._sync()

    def shuffle(self) -> None:
        if self.game.is_loading:
            return
        self.game.shuffle()
        self._sync()

    def solve(self) -> None:
        ticket = self.game.begin_solve()
        if ticket is None:
            return
        worker = _SolveWorker(self._client, ticket)
        worker.solved.connect(self._on_solved)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(self._reap)
        self._worker = worker
        worker.start()
        self._sync()

    def _on_solved(self, ticket: SolveTicket, path) -> None:
        self.game.finish_solve(ticket, path)
        self._sync()

    def _on_failed(self, ticket: SolveTicket, error: Exception) -> None:
        self.game.fail_solve(ticket, error)
        self._sync()
        QMessageBox.warning(self, "Solver unavailable", SOLVER_UNAVAILABLE)

    def _reap(self) -> None:
        worker = self.sender()
        if worker is self._worker:
            self._worker = None
        if isinstance(worker, _SolveWorker):
            worker.deleteLater()

    def step_forward(self) -> None:
        self.game.step_forward()
        self._sync()

    def step_backward(self) -> None:
        self.game.step_backward()
        self._sync()

    def toggle_play(self) -> None:
        self.game.toggle_play()
        self._sync()

    def close_session(self) -> None:
        self.game.close()
        if self._worker is not None:
            self._worker.wait()


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════

_IDX_STARTUP = 0
_IDX_GAME = 1


class _MainWindow(QMainWindow):
    def __init__(self, config: SolverConfig) -> None:
        super().__init__()
        self._config = config
        self._client = SolverClient(config)
        self._probe: _ProbeWorker | None = None

        self.setWindowTitle("8 Puzzle Solver")
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(480, 640)

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        self._startup = _StartupPage()
        self._stack.addWidget(self._startup)  # 0

        self._game_page = _GamePage(self._client)
        self._stack.addWidget(self._game_page)  # 1

        if config.probe:
            self._stack.setCurrentIndex(_IDX_STARTUP)
            self._probe = _ProbeWorker(self._client)
            self._probe.probed.connect(self._on_probed)
            self._probe.start()
        else:
            self._show_game()

    # -- navigation ---

    def _on_probed(self, reachable: bool) -> None:
        if not reachable:
            logger.info("Continuing without a reachable solver")
        QTimer.singleShot(STARTUP_MIN_DISPLAY_MS, self._show_game)

    def _show_game(self) -> None:
        self._startup.stop()
        self._stack.setCurrentIndex(_IDX_GAME)

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()

        if key == Qt.Key.Key_Escape:
            self.close()
            return
        if self._stack.currentIndex() != _IDX_GAME:
            super().keyPressEvent(event)
            return

        gp = self._game_page
        _dirs = {
            Qt.Key.Key_Up: Direction.UP,
            Qt.Key.Key_W: Direction.UP,
            Qt.Key.Key_Down: Direction.DOWN,
            Qt.Key.Key_S: Direction.DOWN,
            Qt.Key.Key_Left: Direction.LEFT,
            Qt.Key.Key_A: Direction.LEFT,
            Qt.Key.Key_Right: Direction.RIGHT,
            Qt.Key.Key_D: Direction.RIGHT,
        }
        if key in _dirs:
            gp.move(_dirs[key])
        elif key == Qt.Key.Key_R:
            gp.shuffle()
        elif key == Qt.Key.Key_V:
            gp.solve()
        elif key == Qt.Key.Key_Space and gp.game.has_solution:
            gp.toggle_play()
        elif key == Qt.Key.Key_Comma:
            gp.step_backward()
        elif key == Qt.Key.Key_Period:
            gp.step_forward()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent | None) -> None:  # noqa: N802
        self._game_page.close_session()
        if self._probe is not None:
            self._probe.wait()
        self._client.close()
        super().closeEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(config: SolverConfig) -> None:
    """Launch the PyQt6 GUI (opens on the startup screen)."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(config)
    window.show()
    qapp.exec()
