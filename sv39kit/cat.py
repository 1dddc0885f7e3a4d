"""Copy files, or standard input, to standard output."""

from __future__ import annotations

import sys
from typing import BinaryIO, Optional, Sequence

CHUNK = 512


def cat(src: BinaryIO, dst: BinaryIO) -> None:
    """Copy ``src`` to ``dst`` in chunks; raise OSError on a short write."""
    while True:
        try:
            chunk = src.read(CHUNK)
        except OSError as exc:
            raise OSError("cat: read error") from exc
        if not chunk:
            return
        try:
            written = dst.write(chunk)
        except OSError as exc:
            raise OSError("cat: write error") from exc
        if written is not None and written != len(chunk):
            raise OSError("cat: write error")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Concatenate the named files onto standard output."""
    paths = list(sys.argv[1:] if argv is None else argv)
    out = sys.stdout.buffer
    try:
        if not paths:
            cat(sys.stdin.buffer, out)
            return 0
        for path in paths:
            try:
                stream = open(path, "rb")
            except OSError:
                out.flush()
                sys.stderr.write(f"cat: cannot open {path}\n")
                return 1
            with stream:
                cat(stream, out)
    except OSError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    finally:
        out.flush()
    return 0