"""Cross-platform single-keypress reader for CLI frontends.

Handles arrow keys, WASD-style letters, space and Enter without line
buffering.  Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable


# -- low-level character readers -----------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "a": "left",
    "A": "left",
    "d": "right",
    "D": "right",
    " ": "select",
    "\r": "enter",
    "\n": "enter",
    "c": "cancel",
    "C": "cancel",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "R": "restart",
    "n": "hint",
    "N": "hint",
    "v": "solve",
    "V": "solve",
}

_ARROW_MAP: dict[str, str] = {
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


def _decode_escape(read_next: Callable[[], str | None]) -> str:
    """Finish an ESC sequence.  *read_next* returns ``None`` if nothing follows."""
    ch2 = read_next()
    if ch2 is None:
        return "cancel"  # bare Escape
    if ch2 != "[":
        return "cancel"
    ch3 = read_next()
    if ch3 is None:
        return ""
    return _ARROW_MAP.get(ch3, "")


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Read a single keypress and return a normalised action string.

    Blocks until a key is pressed.

    Possible return values:
        "left", "right"        — move cursor / nudge held tile
        "select"               — space (pick up, drop, toggle)
        "enter"                — Enter / Return
        "cancel"               — c / Escape (put a held tile back)
        "quit"                 — q / Ctrl-C
        "restart", "hint", "solve"
        "<char>"               — unmapped printable char
        ""                     — unrecognised key
    """
    ch = _getch()
    if ch == "\x1b":
        return _decode_escape(_getch)
    return resolve(ch)


def get_key_timeout(timeout: float) -> str | None:
    """Read a single keypress with a timeout.

    Returns the normalised action string (same as ``get_key``) or
    ``None`` if no key was pressed within *timeout* seconds.
    """
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time as _time

        end = _time.monotonic() + timeout
        while _time.monotonic() < end:
            if msvcrt.kbhit():
                return get_key()
            _time.sleep(0.02)
        return None

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def _read_pending() -> str | None:
        # os.read is unbuffered, so select() still sees the rest of a
        # multi-byte escape sequence.
        ready, _, _ = select.select([fd], [], [], 0.1)
        if not ready:
            return None
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        ch = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch == "\x1b":
            return _decode_escape(_read_pending)
        return resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
