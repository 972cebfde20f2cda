"""Console output helpers for the quote screen.

ANSI cursor-control sequences, with a plain-text fallback when escape
codes are disabled or the output is not a terminal.
"""

import contextlib
import os
import sys
from typing import TextIO

CLEAR_SCREEN = "\033[2J"
CLEAR_LINE = "\033[K"


def move_cursor(row: int, col: int) -> str:
    """Escape sequence that moves the cursor to 1-based ``row``/``col``."""
    return f"\033[{row};{col}H"


def ansi_enabled(stream: TextIO, use_ansi: bool | None = None) -> bool:
    """Decide whether to emit escape codes on ``stream``.

    Args:
        stream: Output stream.
        use_ansi: Force on/off. If None, checks OPTSIM_NO_ANSI
            (set to any value to disable) and whether ``stream`` is a tty.

    Returns:
        True if escape codes should be written.
    """
    if use_ansi is not None:
        return use_ansi
    if os.environ.get("OPTSIM_NO_ANSI"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_windows_console() -> None:
    """Configure Windows console for UTF-8 output (best-effort).

    On Windows, attempts to reconfigure stdout to use UTF-8 encoding.
    Silently ignores any errors (e.g., if stdout doesn't support reconfigure).
    Escape codes rely on the terminal's own VT support; disable them with
    ``--no-ansi`` on consoles that lack it.
    """
    if os.name == "nt":
        with contextlib.suppress(Exception):
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
