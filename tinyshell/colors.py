"""ANSI colour helpers for terminal output."""

from __future__ import annotations

import sys
from enum import Enum
from typing import TextIO

RESET = "\033[0m"


class Color(Enum):
    """Foreground colours and their ANSI SGR codes."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37

    @property
    def escape(self) -> str:
        """The escape sequence that switches to this colour."""
        return f"\033[0;{self.value}m"


def colorize(text: str, color: Color) -> str:
    """Return ``text`` wrapped in the escape codes for ``color`` and a reset."""
    return f"{color.escape}{text}{RESET}"


def _emit(text: str, color: Color, stream: TextIO | None) -> None:
    out = sys.stdout if stream is None else stream
    out.write(colorize(text, color))


def black(text: str, stream: TextIO | None = None) -> None:
    """Write ``text`` in black."""
    _emit(text, Color.BLACK, stream)


def red(text: str, stream: TextIO | None = None) -> None:
    """Write ``text`` in red."""
    _emit(text, Color.RED, stream)


def green(text: str, stream: TextIO | None = None) -> None:
    """Write ``text`` in green."""
    _emit(text, Color.GREEN, stream)


def yellow(text: str, stream: TextIO | None = None) -> None:
    """Write ``text`` in yellow."""
    _emit(text, Color.YELLOW, stream)


def blue(text: str, stream: TextIO | None = None) -> None:
    """Write ``text`` in blue."""
    _emit(text, Color.BLUE, stream)


def magenta(text: str, stream: TextIO | None = None) -> None:
    """Write ``text`` in magenta."""
    _emit(text, Color.MAGENTA, stream)


def cyan(text: str, stream: TextIO | None = None) -> None:
    """Write ``text`` in cyan."""
    _emit(text, Color.CYAN, stream)


def white(text: str, stream: TextIO | None = None) -> None:
    """Write ``text`` in white."""
    _emit(text, Color.WHITE, stream)