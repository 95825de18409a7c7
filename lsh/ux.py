"""
ANSI styling and diagnostics for the interpreter.

- Color output only when supported (TTY and NO_COLOR not set)
- Raw SGR helpers for the line editor, which writes bytes itself
- rich consoles for help text and single-line diagnostics
"""

from __future__ import annotations

import os
import sys

from rich.console import Console


def _supports_color(stream) -> bool:
    if os.getenv("NO_COLOR") is not None:
        return False
    try:
        return hasattr(stream, "isatty") and stream.isatty()
    except Exception:
        return False


_COLOR_ENABLED = _supports_color(sys.stdout)


class SGR:
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    RED = "\x1b[0;31m"
    GREEN = "\x1b[0;32m"
    YELLOW = "\x1b[0;33m"
    BLUE = "\x1b[0;34m"
    WHITE = "\x1b[0;37m"


# Terminal control sequences used by the line editor.
CURSOR_RIGHT = b"\x1b[1C"
CURSOR_LEFT = b"\x1b[1D"
ERASE_TO_EOL = b"\x1b[K"


def set_color(enabled: bool) -> None:
    global _COLOR_ENABLED
    _COLOR_ENABLED = enabled
    out_console.no_color = not enabled
    err_console.no_color = not enabled


def color_enabled() -> bool:
    return _COLOR_ENABLED


def style(text: str, *codes: str) -> str:
    if not _COLOR_ENABLED or not text:
        return text
    return "".join(codes) + text + SGR.RESET


def directory(text: str) -> str:
    return style(text, SGR.BLUE)


def prompt(symbol: str) -> str:
    """Prompt string: a blue symbol, then white input text."""
    if not _COLOR_ENABLED:
        return f"{symbol} "
    return f"{SGR.BLUE}{symbol}{SGR.WHITE} "


out_console = Console(highlight=False, markup=False, emoji=False)
err_console = Console(stderr=True, highlight=False, markup=False, emoji=False)


def report(message: str, console: Console | None = None) -> None:
    """Write one diagnostic line, prefixed with the program name."""
    (console or err_console).print(f"lsh: {message}", style="red", soft_wrap=True)


__all__ = [
    "SGR",
    "CURSOR_RIGHT",
    "CURSOR_LEFT",
    "ERASE_TO_EOL",
    "set_color",
    "color_enabled",
    "style",
    "directory",
    "prompt",
    "out_console",
    "err_console",
    "report",
]
