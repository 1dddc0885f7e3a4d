"""Count lines, words and bytes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import BinaryIO, Optional, Sequence

CHUNK = 512
# A NUL byte also ends a word.
_SEPARATORS = frozenset(b" \r\t\n\v\0")


@dataclass(frozen=True)
class Counts:
    """Line, word and byte totals of one input."""

    lines: int
    words: int
    chars: int


def count(stream: BinaryIO) -> Counts:
    """Count a binary stream until end of input."""
    lines = words = chars = 0
    in_word = False
    while True:
        chunk = stream.read(CHUNK)
        if not chunk:
            break
        chars += len(chunk)
        lines += chunk.count(b"\n")
        for byte in chunk:
            if byte in _SEPARATORS:
                in_word = False
            elif not in_word:
                words += 1
                in_word = True
    return Counts(lines, words, chars)


def _report(counts: Counts, name: str) -> None:
    sys.stdout.write(f"{counts.lines} {counts.words} {counts.chars} {name}\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Report counts for the named files, or for standard input."""
    paths = list(sys.argv[1:] if argv is None else argv)
    try:
        if not paths:
            _report(count(sys.stdin.buffer), "")
            return 0
        for path in paths:
            try:
                stream = open(path, "rb")
            except OSError:
                sys.stdout.write(f"wc: cannot open {path}\n")
                return 1
            with stream:
                _report(count(stream), path)
    except OSError:
        sys.stdout.write("wc: read error\n")
        return 1
    return 0