"""List files and directories with their type, inode number and size."""

from __future__ import annotations

import os
import stat as stat_mod
import sys
from typing import Optional, Sequence, TextIO

from .params import FileType

DIRSIZ = 14
BUFSIZE = 512


def fmtname(path: str) -> str:
    """Last component of ``path``, blank-padded to ``DIRSIZ`` if shorter."""
    name = path[path.rfind("/") + 1:]
    if len(name) >= DIRSIZ:
        return name
    return name.ljust(DIRSIZ)


def _file_type(mode: int) -> Optional[FileType]:
    if stat_mod.S_ISDIR(mode):
        return FileType.DIR
    if stat_mod.S_ISREG(mode):
        return FileType.FILE
    if stat_mod.S_ISCHR(mode) or stat_mod.S_ISBLK(mode):
        return FileType.DEVICE
    if stat_mod.S_ISFIFO(mode):
        return FileType.PIPE
    return None


def _line(path: str, kind: FileType, st: os.stat_result) -> str:
    return f"{fmtname(path)} {int(kind)} {st.st_ino} {st.st_size}\n"


def ls(path: str, out: TextIO) -> None:
    """Write a listing of ``path`` to ``out``; open errors go to standard error."""
    try:
        st = os.stat(path)
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    kind = _file_type(st.st_mode)
    if kind in (FileType.FILE, FileType.DEVICE):
        out.write(_line(path, kind, st))
    elif kind is FileType.DIR:
        if len(path) + 1 + DIRSIZ + 1 > BUFSIZE:
            out.write("ls: path too long\n")
            return
        try:
            names = [".", ".."] + sorted(os.listdir(path))
        except OSError:
            sys.stderr.write(f"ls: cannot open {path}\n")
            return
        for name in names:
            entry = f"{path}/{name}"
            try:
                est = os.stat(entry)
            except OSError:
                out.write(f"ls: cannot stat {entry}\n")
                continue
            ekind = _file_type(est.st_mode)
            if ekind is None:
                continue
            out.write(_line(entry, ekind, est))
    elif kind is FileType.PIPE:
        out.write("Do not use ls on named pipe\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """List each named path, or the current directory."""
    paths = list(sys.argv[1:] if argv is None else argv)
    for path in paths or ["."]:
        ls(path, sys.stdout)
    return 0