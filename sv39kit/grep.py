"""Line filter supporting the ^ . * $ operators."""

from __future__ import annotations

import sys
from typing import Iterator, Optional, Sequence, TextIO

BUFSIZE = 1024


def match(pattern: str, text: str) -> bool:
    """True if ``pattern`` matches anywhere in ``text``."""
    if pattern.startswith("^"):
        return _matchhere(pattern, 1, text, 0)
    return any(_matchhere(pattern, 0, text, i) for i in range(len(text) + 1))


def _matchhere(pattern: str, ri: int, text: str, ti: int) -> bool:
    while True:
        if ri == len(pattern):
            return True
        if ri + 1 < len(pattern) and pattern[ri + 1] == "*":
            return _matchstar(pattern[ri], pattern, ri + 2, text, ti)
        if pattern[ri] == "$" and ri + 1 == len(pattern):
            return ti == len(text)
        if ti < len(text) and pattern[ri] in (".", text[ti]):
            ri += 1
            ti += 1
            continue
        return False


def _matchstar(c: str, pattern: str, ri: int, text: str, ti: int) -> bool:
    while True:
        if _matchhere(pattern, ri, text, ti):
            return True
        if ti < len(text) and (text[ti] == c or c == "."):
            ti += 1
        else:
            return False


def grep(pattern: str, stream: TextIO) -> Iterator[str]:
    """Yield each newline-terminated line of ``stream`` that matches.

    A trailing line without a newline is never reported, and reading
    stops once a single line fills the whole buffer.
    """
    pending = ""
    while True:
        room = BUFSIZE - len(pending) - 1
        chunk = stream.read(room) if room > 0 else ""
        if not chunk:
            return
        pending += chunk
        *lines, pending = pending.split("\n")
        for line in lines:
            if match(pattern, line):
                yield line + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Filter the named files, or standard input, through a pattern."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, paths = args[0], args[1:]
    if not paths:
        sys.stdout.writelines(grep(pattern, sys.stdin))
        return 0
    for path in paths:
        try:
            stream = open(path, encoding="utf-8", errors="replace", newline="")
        except OSError:
            sys.stdout.write(f"grep: cannot open {path}\n")
            return 1
        with stream:
            sys.stdout.writelines(grep(pattern, stream))
    return 0