"""Sv39 page tables kept in a simulated physical memory."""

from __future__ import annotations

import enum
from typing import Optional

from .params import KERNBASE, MAXVA, PGSIZE

PTE_SIZE = 8
_PTE_FLAG_MASK = 0x3FF
_INDEX_MASK = 0x1FF


class PteFlag(enum.IntFlag):
    """Bits of a page-table entry."""

    V = 1 << 0
    R = 1 << 1
    W = 1 << 2
    X = 1 << 3
    U = 1 << 4


class VmError(Exception):
    """An invalid mapping operation or a bad virtual address."""


def _roundup(sz: int) -> int:
    return (sz + PGSIZE - 1) & ~(PGSIZE - 1)


def _rounddown(a: int) -> int:
    return a & ~(PGSIZE - 1)


def _px(level: int, va: int) -> int:
    return (va >> (12 + 9 * level)) & _INDEX_MASK


def _pa2pte(pa: int) -> int:
    return (pa >> 12) << 10


def _pte2pa(pte: int) -> int:
    return (pte >> 10) << 12


class PhysicalMemory:
    """A fixed number of physical pages starting at ``KERNBASE``."""

    def __init__(self, npages: int) -> None:
        if npages < 0:
            raise ValueError("negative page count")
        self.base = KERNBASE
        self._pages = [bytearray(PGSIZE) for _ in range(npages)]
        self._free = list(range(npages - 1, -1, -1))
        self._in_use: set[int] = set()

    def _index(self, pa: int) -> int:
        index = (pa - self.base) // PGSIZE
        if pa < self.base or index >= len(self._pages):
            raise VmError(f"physical address {pa:#x} out of range")
        return index

    def kalloc(self) -> int:
        """Take one page and return its physical address."""
        if not self._free:
            raise MemoryError("out of physical pages")
        index = self._free.pop()
        self._in_use.add(index)
        return self.base + index * PGSIZE

    def kfree(self, pa: int) -> None:
        """Give back a page obtained from :meth:`kalloc`."""
        if pa % PGSIZE:
            raise VmError(f"kfree: {pa:#x} is not page aligned")
        index = self._index(pa)
        if index not in self._in_use:
            raise VmError(f"kfree: {pa:#x} is not allocated")
        self._in_use.remove(index)
        self._free.append(index)

    def page(self, pa: int) -> bytearray:
        """The contents of the page holding physical address ``pa``."""
        return self._pages[self._index(pa)]

    def free_pages(self) -> int:
        """Number of pages not handed out."""
        return len(self._free)

    def _zero(self, pa: int) -> None:
        self.page(pa)[:] = bytes(PGSIZE)

    def _load(self, addr: int) -> int:
        page = self.page(addr)
        off = addr % PGSIZE
        return int.from_bytes(page[off:off + PTE_SIZE], "little")

    def _store(self, addr: int, value: int) -> None:
        page = self.page(addr)
        off = addr % PGSIZE
        page[off:off + PTE_SIZE] = value.to_bytes(PTE_SIZE, "little")


class PageTable:
    """A three-level Sv39 page table whose pages live in ``memory``."""

    def __init__(self, memory: PhysicalMemory) -> None:
        self.memory = memory
        self.root = memory.kalloc()
        memory._zero(self.root)

    def walk(self, va: int, alloc: bool = False) -> Optional[int]:
        """Physical address of the level-0 entry for ``va``.

        Missing page-table pages are created when ``alloc`` is true;
        otherwise, or when memory runs out, None is returned.
        """
        if not 0 <= va < MAXVA:
            raise VmError("walk")
        mem = self.memory
        table = self.root
        for level in (2, 1):
            addr = table + PTE_SIZE * _px(level, va)
            pte = mem._load(addr)
            if pte & PteFlag.V:
                table = _pte2pa(pte)
                continue
            if not alloc:
                return None
            try:
                table = mem.kalloc()
            except MemoryError:
                return None
            mem._zero(table)
            mem._store(addr, _pa2pte(table) | PteFlag.V)
        return table + PTE_SIZE * _px(0, va)

    def walkaddr(self, va: int) -> Optional[int]:
        """Physical page behind user address ``va``, or None if not mapped."""
        if not 0 <= va < MAXVA:
            return None
        addr = self.walk(va)
        if addr is None:
            return None
        pte = self.memory._load(addr)
        if not pte & PteFlag.V or not pte & PteFlag.U:
            return None
        return _pte2pa(pte)

    def mappages(self, va: int, size: int, pa: int, perm: int) -> None:
        """Map ``size`` bytes at ``va`` onto physical memory from ``pa``."""
        if size == 0:
            raise VmError("mappages: size")
        a = _rounddown(va)
        last = _rounddown(va + size - 1)
        while True:
            addr = self.walk(a, True)
            if addr is None:
                raise MemoryError("mappages: cannot allocate page-table page")
            if self.memory._load(addr) & PteFlag.V:
                raise VmError("mappages: remap")
            self.memory._store(addr, _pa2pte(pa) | int(perm) | PteFlag.V)
            if a == last:
                return
            a += PGSIZE
            pa += PGSIZE

    def unmap(self, va: int, npages: int, do_free: bool) -> None:
        """Remove ``npages`` existing mappings from ``va``, optionally freeing them."""
        if va % PGSIZE:
            raise VmError("uvmunmap: not aligned")
        mem = self.memory
        for a in range(va, va + npages * PGSIZE, PGSIZE):
            addr = self.walk(a)
            if addr is None:
                raise VmError("uvmunmap: walk")
            pte = mem._load(addr)
            if not pte & PteFlag.V:
                raise VmError("uvmunmap: not mapped")
            if pte & _PTE_FLAG_MASK == PteFlag.V:
                raise VmError("uvmunmap: not a leaf")
            if do_free:
                mem.kfree(_pte2pa(pte))
            mem._store(addr, 0)

    def first(self, src: bytes) -> None:
        """Load less than a page of initial code at address zero."""
        if len(src) >= PGSIZE:
            raise VmError("uvmfirst: more than a page")
        pa = self.memory.kalloc()
        self.memory._zero(pa)
        self.mappages(0, PGSIZE, pa, PteFlag.W | PteFlag.R | PteFlag.X | PteFlag.U)
        self.memory.page(pa)[:len(src)] = src

    def grow(self, oldsz: int, newsz: int, xperm: int) -> int:
        """Map zeroed user pages to grow from ``oldsz`` to ``newsz``; return the new size.

        On running out of memory the pages added so far are released and
        MemoryError is raised.
        """
        if newsz < oldsz:
            return oldsz
        oldsz = _roundup(oldsz)
        mem = self.memory
        for a in range(oldsz, newsz, PGSIZE):
            try:
                pa = mem.kalloc()
            except MemoryError:
                self.shrink(a, oldsz)
                raise
            mem._zero(pa)
            try:
                self.mappages(a, PGSIZE, pa, PteFlag.R | PteFlag.U | int(xperm))
            except MemoryError:
                mem.kfree(pa)
                self.shrink(a, oldsz)
                raise
        return newsz

    def shrink(self, oldsz: int, newsz: int) -> int:
        """Release user pages to bring the size from ``oldsz`` down to ``newsz``."""
        if newsz >= oldsz:
            return oldsz
        if _roundup(newsz) < _roundup(oldsz):
            npages = (_roundup(oldsz) - _roundup(newsz)) // PGSIZE
            self.unmap(_roundup(newsz), npages, True)
        return newsz

    def _freewalk(self, table: int) -> None:
        mem = self.memory
        for addr in range(table, table + PGSIZE, PTE_SIZE):
            pte = mem._load(addr)
            if pte & PteFlag.V and not pte & (PteFlag.R | PteFlag.W | PteFlag.X):
                self._freewalk(_pte2pa(pte))
                mem._store(addr, 0)
            elif pte & PteFlag.V:
                raise VmError("freewalk: leaf")
        mem.kfree(table)

    def free(self, sz: int) -> None:
        """Free ``sz`` bytes of user memory and then every page-table page."""
        if sz > 0:
            self.unmap(0, _roundup(sz) // PGSIZE, True)
        self._freewalk(self.root)

    def copy_to(self, new: PageTable, sz: int) -> None:
        """Copy the first ``sz`` bytes of mappings and memory into ``new``.

        On failure the pages already copied are released and MemoryError
        is raised.
        """
        for va in range(0, sz, PGSIZE):
            addr = self.walk(va)
            if addr is None:
                raise VmError("uvmcopy: pte should exist")
            pte = self.memory._load(addr)
            if not pte & PteFlag.V:
                raise VmError("uvmcopy: page not present")
            pa = _pte2pa(pte)
            flags = pte & _PTE_FLAG_MASK
            try:
                copy = new.memory.kalloc()
            except MemoryError:
                new.unmap(0, va // PGSIZE, True)
                raise
            new.memory.page(copy)[:] = self.memory.page(pa)
            try:
                new.mappages(va, PGSIZE, copy, flags)
            except MemoryError:
                new.memory.kfree(copy)
                new.unmap(0, va // PGSIZE, True)
                raise

    def clear_user(self, va: int) -> None:
        """Withdraw user access from the page at ``va``."""
        addr = self.walk(va)
        if addr is None:
            raise VmError("uvmclear")
        self.memory._store(addr, self.memory._load(addr) & ~PteFlag.U)

    def _user_page(self, va0: int, what: str, va: int) -> bytearray:
        pa0 = self.walkaddr(va0)
        if pa0 is None:
            raise VmError(f"{what}: bad address {va:#x}")
        return self.memory.page(pa0)

    def copyout(self, dstva: int, data: bytes) -> None:
        """Write ``data`` to user address ``dstva``."""
        view = memoryview(bytes(data))
        while view:
            va0 = _rounddown(dstva)
            page = self._user_page(va0, "copyout", dstva)
            off = dstva - va0
            n = min(PGSIZE - off, len(view))
            page[off:off + n] = view[:n]
            view = view[n:]
            dstva = va0 + PGSIZE

    def copyin(self, srcva: int, length: int) -> bytes:
        """Read ``length`` bytes from user address ``srcva``."""
        out = bytearray()
        while length > 0:
            va0 = _rounddown(srcva)
            page = self._user_page(va0, "copyin", srcva)
            off = srcva - va0
            n = min(PGSIZE - off, length)
            out += page[off:off + n]
            length -= n
            srcva = va0 + PGSIZE
        return bytes(out)

    def copyinstr(self, srcva: int, max: int) -> bytes:
        """Read a NUL-terminated string of fewer than ``max`` bytes, without the NUL."""
        out = bytearray()
        while max > 0:
            va0 = _rounddown(srcva)
            page = self._user_page(va0, "copyinstr", srcva)
            off = srcva - va0
            n = min(PGSIZE - off, max)
            chunk = page[off:off + n]
            nul = chunk.find(0)
            if nul >= 0:
                out += chunk[:nul]
                return bytes(out)
            out += chunk
            max -= n
            srcva = va0 + PGSIZE
        raise VmError("copyinstr: string not terminated")