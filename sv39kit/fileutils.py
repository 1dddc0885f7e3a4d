"""Small file and process commands: kill, ln, mkdir, rm and mkfifo."""

from __future__ import annotations

import os
import signal
import sys
from typing import Callable, Optional, Sequence

from .ulib import atoi


def _args(argv: Optional[Sequence[str]]) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def kill_main(argv: Optional[Sequence[str]] = None) -> int:
    """Terminate each process whose id is given; failures are ignored."""
    args = _args(argv)
    if not args:
        sys.stderr.write("usage: kill pid...\n")
        return 1
    for arg in args:
        pid = atoi(arg)
        # Non-positive ids name no single process.
        if pid <= 0:
            continue
        try:
            os.kill(pid, signal.SIGTERM)
        except OSError:
            pass
    return 0


def ln_main(argv: Optional[Sequence[str]] = None) -> int:
    """Make ``new`` another name for ``old``."""
    args = _args(argv)
    if len(args) != 2:
        sys.stderr.write("Usage: ln old new\n")
        return 1
    old, new = args
    try:
        os.link(old, new)
    except OSError:
        sys.stderr.write(f"link {old} {new}: failed\n")
    return 0


def _each(
    args: list[str], usage: str, action: Callable[[str], None], failure: str
) -> int:
    if not args:
        sys.stderr.write(usage)
        return 1
    for arg in args:
        try:
            action(arg)
        except OSError:
            sys.stderr.write(failure.format(arg))
            break
    return 0


def _remove(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.unlink(path)


def mkdir_main(argv: Optional[Sequence[str]] = None) -> int:
    """Create each named directory, stopping at the first failure."""
    return _each(
        _args(argv), "Usage: mkdir files...\n", os.mkdir, "mkdir: {} failed to create\n"
    )


def rm_main(argv: Optional[Sequence[str]] = None) -> int:
    """Remove each named file or empty directory, stopping at the first failure."""
    return _each(
        _args(argv), "Usage: rm files...\n", _remove, "rm: {} failed to delete\n"
    )


def mkfifo_main(argv: Optional[Sequence[str]] = None) -> int:
    """Create each named pipe, stopping at the first failure."""
    return _each(
        _args(argv), "Usage: mkfifo files...\n", os.mkfifo, "mkfifo: {} failed to create\n"
    )