"""System-wide limits, physical memory layout, open flags and file metadata."""

from __future__ import annotations

import enum
from dataclasses import dataclass

# Process, file and file-system limits.
NPROC = 64
NCPU = 8
NOFILE = 16
NFILE = 100
NINODE = 50
NDEV = 10
ROOTDEV = 1
MAXARG = 32
MAXOPBLOCKS = 10
LOGSIZE = MAXOPBLOCKS * 3
NBUF = MAXOPBLOCKS * 3
FSSIZE = 2000
MAXPATH = 128

# Fixed-width integer masks.
UINT8_MASK = 0xFF
UINT16_MASK = 0xFFFF
UINT32_MASK = 0xFFFF_FFFF
UINT64_MASK = 0xFFFF_FFFF_FFFF_FFFF

# Page geometry for the Sv39 scheme: three 9-bit levels over a 12-bit offset.
PGSIZE = 4096
# One bit below the full 39 is used, so addresses never need sign extension.
MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

# Physical memory layout of the emulated "virt" machine.
UART0 = 0x1000_0000
UART0_IRQ = 10

VIRTIO0 = 0x1000_1000
VIRTIO0_IRQ = 1

CLINT = 0x200_0000
CLINT_MTIME = CLINT + 0xBFF8

PLIC = 0x0C00_0000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000

KERNBASE = 0x8000_0000
PHYSTOP = KERNBASE + 128 * 1024 * 1024

TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE


def clint_mtimecmp(hartid: int) -> int:
    """Address of the timer-compare register of a hart."""
    return CLINT + 0x4000 + 8 * hartid


def plic_menable(hart: int) -> int:
    """Machine-mode interrupt enable bits of a hart."""
    return PLIC + 0x2000 + hart * 0x100


def plic_senable(hart: int) -> int:
    """Supervisor-mode interrupt enable bits of a hart."""
    return PLIC + 0x2080 + hart * 0x100


def plic_mpriority(hart: int) -> int:
    """Machine-mode priority threshold of a hart."""
    return PLIC + 0x200000 + hart * 0x2000


def plic_spriority(hart: int) -> int:
    """Supervisor-mode priority threshold of a hart."""
    return PLIC + 0x201000 + hart * 0x2000


def plic_mclaim(hart: int) -> int:
    """Machine-mode claim/complete register of a hart."""
    return PLIC + 0x200004 + hart * 0x2000


def plic_sclaim(hart: int) -> int:
    """Supervisor-mode claim/complete register of a hart."""
    return PLIC + 0x201004 + hart * 0x2000


def kstack(p: int) -> int:
    """Virtual address of process slot ``p``'s kernel stack, below a guard page."""
    return TRAMPOLINE - (p + 1) * 2 * PGSIZE


class OpenFlag(enum.IntFlag):
    """Mode bits accepted by open."""

    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200
    TRUNC = 0x400


class FileType(enum.IntEnum):
    """Kind of object an inode describes."""

    DIR = 1
    FILE = 2
    DEVICE = 3
    PIPE = 4


@dataclass
class Stat:
    """Metadata reported for an open file."""

    dev: int
    ino: int
    type: FileType
    nlink: int
    size: int

    def __post_init__(self) -> None:
        self.type = FileType(self.type)