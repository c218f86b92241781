"""Print the n-th Fibonacci number."""

from __future__ import annotations

import re
import sys
from typing import Sequence

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def fib(n: int) -> int:
    """Return the n-th Fibonacci number; values below 2 are returned as is."""
    if n < 2:
        return n
    previous, current = 0, 1
    for _ in range(n - 1):
        previous, current = current, previous + current
    return current


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Print ``fib`` of the single argument; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Not the correct no.of arguments.")
        return 1
    print(fib(_atoi(args[0])))
    return 0


if __name__ == "__main__":
    sys.exit(main())