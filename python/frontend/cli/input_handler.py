"""Raw keyboard input for the terminal frontend.

Keys are read one at a time without echo and translated into the action
names the game loop dispatches on (``"up"``, ``"solve"``, ``"cell:4"``...).
"""

from __future__ import annotations

import os
import sys
import time
from typing import Callable

_WINDOWS = os.name == "nt"

ESCAPE = "\x1b"
# Escape sequences may arrive split; wait this long for the tail.
_SEQUENCE_GAP = 0.1

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "r": "shuffle",
    "v": "solve",
    "p": "play",
    " ": "play",
    ",": "prev",
    "<": "prev",
    "[": "prev",
    ".": "next",
    ">": "next",
    "]": "next",
    "h": "help",
    "?": "help",
    "q": "quit",
    "\x03": "quit",
    "\r": "enter",
    "\n": "enter",
}

# Final byte of ``ESC [ x`` cursor sequences.
_CURSOR_KEYS: dict[str, str] = {"A": "up", "B": "down", "C": "right", "D": "left"}


def resolve(ch: str) -> str:
    """Translate one character into an action name.

    Digits ``1``-``9`` pick a cell in reading order (1 is top-left, 9
    bottom-right) and come back as ``"cell:<index>"``.  Letters are
    case-insensitive.  Unmapped printable characters are returned as-is,
    anything else as ``""``.
    """
    if len(ch) == 1 and ch in "123456789":
        return f"cell:{int(ch) - 1}"
    action = _KEY_MAP.get(ch) or _KEY_MAP.get(ch.lower())
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


def _decode_escape(read_next: Callable[[], str | None]) -> str:
    # A lone ESC quits; ESC [ <letter> is a cursor key.
    if read_next() != "[":
        return "quit"
    final = read_next()
    if final is None:
        return ""
    return _CURSOR_KEYS.get(final, "")


# -- platform readers ---------------------------------------------------------


def _read_blocking() -> str:
    if _WINDOWS:
        import msvcrt  # type: ignore[import-not-found]

        return msvcrt.getch().decode("utf-8", errors="ignore")

    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_fd(fd: int, timeout: float) -> str | None:
    import select

    ready, _, _ = select.select([fd], [], [], timeout)
    if not ready:
        return None
    # os.read skips Python's buffer so select sees the rest of a sequence.
    return os.read(fd, 1).decode("utf-8", errors="ignore")


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its action name.

    Arrow keys and WASD give directions; Escape, ``q`` and Ctrl-C give
    ``"quit"``.  See :func:`resolve` for the rest.
    """
    ch = _read_blocking()
    if ch == ESCAPE:
        return _decode_escape(_read_blocking)
    return resolve(ch)


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but give up after *timeout* seconds.

    Returns ``None`` when nothing was pressed, which lets the caller run
    due playback ticks between keypresses.
    """
    if _WINDOWS:
        import msvcrt  # type: ignore[import-not-found]

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if msvcrt.kbhit():
                return get_key()
            time.sleep(0.02)
        return None

    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = _read_fd(fd, timeout)
        if ch is None:
            return None
        if ch == ESCAPE:
            return _decode_escape(lambda: _read_fd(fd, _SEQUENCE_GAP))
        return resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
