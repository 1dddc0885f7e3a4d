import pytest

from sv39kit import params
from sv39kit.params import (
    FileType,
    OpenFlag,
    Stat,
    clint_mtimecmp,
    kstack,
    plic_sclaim,
    plic_senable,
    plic_spriority,
)


def test_clint_mtimecmp_spacing():
    assert clint_mtimecmp(0) == params.CLINT + 0x4000
    assert clint_mtimecmp(3) - clint_mtimecmp(2) == 8


def test_plic_supervisor_registers():
    for hart in range(params.NCPU):
        assert plic_sclaim(hart) == plic_spriority(hart) + 4
        assert plic_senable(hart + 1) - plic_senable(hart) == 0x100
    assert plic_senable(0) == params.PLIC + 0x2080
    assert plic_spriority(0) == params.PLIC + 0x201000


def test_kstack_layout():
    assert kstack(0) == params.TRAMPOLINE - 2 * params.PGSIZE
    for p in range(params.NPROC - 1):
        assert kstack(p) - kstack(p + 1) == 2 * params.PGSIZE
        assert kstack(p) % params.PGSIZE == 0


def test_trampoline_and_trapframe():
    assert params.TRAMPOLINE + params.PGSIZE == params.MAXVA
    assert params.TRAPFRAME == params.TRAMPOLINE - params.PGSIZE
    # the first kernel stack sits one guard page below the trapframe slot
    assert kstack(0) == params.TRAPFRAME - params.PGSIZE
    assert params.PHYSTOP - params.KERNBASE == 128 * 1024 * 1024


def test_open_flags_combine():
    flags = OpenFlag.CREATE | OpenFlag.RDWR
    assert int(flags) == 0x200 | 0x002
    assert OpenFlag.TRUNC in OpenFlag(0x400 | 0x001)


def test_stat_converts_type():
    st = Stat(dev=1, ino=2, type=1, nlink=1, size=0)
    assert st.type is FileType.DIR


def test_stat_rejects_unknown_type():
    with pytest.raises(ValueError):
        Stat(dev=1, ino=2, type=9, nlink=1, size=0)


def test_log_sizes_and_timer_registers():
    assert params.LOGSIZE == params.NBUF == 3 * params.MAXOPBLOCKS
    # every hart's compare register lies below the shared mtime counter
    assert clint_mtimecmp(params.NCPU - 1) < params.CLINT + 0xBFF8