"""Print arguments separated by spaces."""

from __future__ import annotations

import sys
from typing import Optional, Sequence


def echo(args: Sequence[str]) -> str:
    """The arguments joined by spaces and ended by a newline; empty if none."""
    if not args:
        return ""
    return " ".join(args) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Write the arguments to standard output."""
    args = list(sys.argv[1:] if argv is None else argv)
    sys.stdout.write(echo(args))
    return 0