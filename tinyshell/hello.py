"""Print a greeting."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

_GREETING = "Hello world!"


def _greet(stream: TextIO) -> str:
    """Write the greeting line to ``stream`` and return what was written."""
    line = f"{_GREETING}\n"
    stream.write(line)
    stream.flush()
    return line


def main(argv: Sequence[str] | None = None) -> int:
    """Print the greeting; any arguments are ignored."""
    written = _greet(sys.stdout)
    return 0 if written.endswith("\n") else 1


if __name__ == "__main__":
    sys.exit(main())