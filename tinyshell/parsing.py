"""Splitting and trimming of shell input lines."""

from __future__ import annotations

_BLANKS = " \t\n"


def trim(text: str) -> str:
    """Remove leading and trailing spaces, tabs and newlines."""
    return text.strip(_BLANKS)


def ends_with_background(text: str) -> bool:
    """Whether the last non-blank character of ``text`` is ``&``."""
    return text.rstrip(_BLANKS).endswith("&")


def strip_background(text: str) -> str:
    """Return ``text`` up to, not including, its last ``&``."""
    pos = text.rfind("&")
    if pos < 0:
        raise ValueError("no '&' in line")
    return text[:pos]


def split_command(line: str) -> tuple[str, str]:
    """Split ``line`` into its first space-delimited word and the remainder.

    The remainder is everything after the single space that ends the word.
    """
    stripped = line.lstrip(" ")
    if not stripped:
        raise ValueError("empty command")
    command, _, rest = stripped.partition(" ")
    return command, rest


def split_pipeline(line: str) -> list[str]:
    """Split ``line`` on ``|`` into trimmed stages, skipping empty pieces."""
    return [trim(piece) for piece in line.split("|") if piece]