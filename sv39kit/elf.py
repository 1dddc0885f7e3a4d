"""Layout of ELF64 file and program headers."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from typing import ClassVar, Iterator

ELF_MAGIC = 0x464C457F  # "\x7FELF" read as a little-endian word

ELF_PROG_LOAD = 1

ELF_PROG_FLAG_EXEC = 1
ELF_PROG_FLAG_WRITE = 2
ELF_PROG_FLAG_READ = 4

_EHDR = struct.Struct("<I12sHHIQQQIHHHHHH")
_PHDR = struct.Struct("<IIQQQQQQ")


class ElfError(ValueError):
    """Data that is not a well-formed ELF header."""


def _pack(layout: struct.Struct, values: tuple) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ElfError(str(exc)) from exc


@dataclass
class ElfHeader:
    """The file header at the start of an executable."""

    magic: int = ELF_MAGIC
    elf: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    SIZE: ClassVar[int] = _EHDR.size

    def __post_init__(self) -> None:
        self.elf = bytes(self.elf)
        if len(self.elf) != 12:
            raise ElfError("identification bytes must be 12 long")

    @classmethod
    def unpack(cls, data: bytes) -> ElfHeader:
        """Parse a header from the start of ``data``; the magic must match."""
        if len(data) < cls.SIZE:
            raise ElfError("truncated ELF header")
        header = cls(*_EHDR.unpack_from(data))
        if header.magic != ELF_MAGIC:
            raise ElfError(f"bad ELF magic {header.magic:#x}")
        return header

    def pack(self) -> bytes:
        """The header's on-disk bytes."""
        return _pack(_EHDR, astuple(self))


@dataclass
class ProgramHeader:
    """One segment description."""

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    SIZE: ClassVar[int] = _PHDR.size

    @classmethod
    def unpack(cls, data: bytes) -> ProgramHeader:
        """Parse a program header from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise ElfError("truncated program header")
        return cls(*_PHDR.unpack_from(data))

    def pack(self) -> bytes:
        """The program header's on-disk bytes."""
        return _pack(_PHDR, astuple(self))


def program_headers(data: bytes) -> Iterator[ProgramHeader]:
    """Yield each program header listed in the file header of ``data``."""
    header = ElfHeader.unpack(data)
    for i in range(header.phnum):
        off = header.phoff + i * ProgramHeader.SIZE
        yield ProgramHeader.unpack(data[off:off + ProgramHeader.SIZE])