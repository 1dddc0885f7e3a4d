"""String helpers for user programs."""

from __future__ import annotations

from typing import TextIO


def atoi(s: str) -> int:
    """Value of the leading decimal digits of ``s``; 0 if there are none."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + ord(ch) - ord("0")
    return n


def gets(stream: TextIO, max: int) -> str:
    """Read one line of at most ``max - 1`` characters, keeping its terminator.

    Reading stops after a newline or carriage return, at the character
    limit, or at end of input.
    """
    chars = []
    while len(chars) + 1 < max:
        c = stream.read(1)
        if not c:
            break
        chars.append(c)
        if c in "\n\r":
            break
    return "".join(chars)


def strcmp(p: str, q: str) -> int:
    """Compare two strings; negative, zero or positive like their difference."""
    for a, b in zip(p, q):
        if a != b:
            return ord(a) - ord(b)
    if len(p) == len(q):
        return 0
    return ord(p[len(q)]) if len(p) > len(q) else -ord(q[len(p)])