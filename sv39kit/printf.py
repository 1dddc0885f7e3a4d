"""A small formatter that understands %d, %l, %x, %p, %s, %c and %%."""

from __future__ import annotations

import sys
from typing import Any, Iterator, TextIO

_DIGITS = "0123456789ABCDEF"
_U32 = 0xFFFF_FFFF
_U64 = 0xFFFF_FFFF_FFFF_FFFF


def _to_int32(value: int) -> int:
    value &= _U32
    return value - (1 << 32) if value >= 1 << 31 else value


def _printint(value: int, base: int, signed: bool) -> str:
    xx = _to_int32(value)
    negative = signed and xx < 0
    x = -xx if negative else xx & _U32
    digits = []
    while True:
        digits.append(_DIGITS[x % base])
        x //= base
        if x == 0:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _take(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def render(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with its conversions filled from ``args``.

    Integers are taken as 32-bit values, as are the operands of %l;
    %p prints a 64-bit value as sixteen upper-case hex digits.
    An unknown conversion is copied through with its percent sign.
    """
    values = iter(args)
    out = []
    in_conversion = False
    for c in fmt:
        if not in_conversion:
            if c == "%":
                in_conversion = True
            else:
                out.append(c)
            continue
        if c == "d":
            out.append(_printint(_take(values), 10, True))
        elif c == "l":
            out.append(_printint(_take(values), 10, False))
        elif c == "x":
            out.append(_printint(_take(values), 16, False))
        elif c == "p":
            out.append(f"0x{_take(values) & _U64:016X}")
        elif c == "s":
            s = _take(values)
            out.append("(null)" if s is None else str(s).split("\0", 1)[0])
        elif c == "c":
            ch = _take(values)
            out.append(ch[0] if isinstance(ch, str) else chr(ch & 0xFF))
        elif c == "%":
            out.append("%")
        else:
            out.append("%" + c)
        in_conversion = False
    return "".join(out)


def fprintf(stream: TextIO, fmt: str, *args: Any) -> None:
    """Write the rendered format to ``stream``."""
    stream.write(render(fmt, *args))


def printf(fmt: str, *args: Any) -> None:
    """Write the rendered format to standard output."""
    fprintf(sys.stdout, fmt, *args)