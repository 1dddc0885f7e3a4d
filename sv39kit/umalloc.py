"""A first-fit, address-ordered free-list allocator over a growable arena."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

HEADER_SIZE = 16
MIN_GROWTH_UNITS = 4096
_BASE = 0
_ARENA_START = 1


class OutOfMemory(MemoryError):
    """The arena cannot grow enough to satisfy a request."""


@dataclass
class _Header:
    next: int
    size: int


class Heap:
    """Allocator whose arena may grow to ``limit`` bytes.

    Addresses are byte offsets in a simulated address space; each block
    is preceded by a header of ``HEADER_SIZE`` bytes and sizes are kept
    in header-sized units.
    """

    def __init__(self, limit: int) -> None:
        self._end = _ARENA_START + limit // HEADER_SIZE
        self._brk = _ARENA_START
        self._headers: dict[int, _Header] = {}
        self._freep: Optional[int] = None
        self._allocated: set[int] = set()

    def _next(self, unit: int) -> int:
        return self._headers[unit].next

    def _size(self, unit: int) -> int:
        return self._headers[unit].size

    def _morecore(self, nunits: int) -> Optional[int]:
        nunits = max(nunits, MIN_GROWTH_UNITS)
        if self._brk + nunits > self._end:
            return None
        hp = self._brk
        self._brk += nunits
        self._headers[hp] = _Header(next=hp, size=nunits)
        self._release(hp)
        return self._freep

    def _release(self, bp: int) -> None:
        p = self._freep
        while not (p < bp < self._next(p)):
            if p >= self._next(p) and (bp > p or bp < self._next(p)):
                break
            p = self._next(p)

        block = self._headers[bp]
        upper = self._next(p)
        if bp + block.size == upper:
            block.size += self._size(upper)
            block.next = self._next(upper)
            del self._headers[upper]
        else:
            block.next = upper

        lower = self._headers[p]
        if p + lower.size == bp:
            lower.size += block.size
            lower.next = block.next
            del self._headers[bp]
        else:
            lower.next = bp
        self._freep = p

    def malloc(self, nbytes: int) -> int:
        """Allocate ``nbytes`` and return the address of the block."""
        if nbytes < 0:
            raise ValueError("negative allocation size")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._headers[_BASE] = _Header(next=_BASE, size=0)
            self._freep = _BASE
        prevp = self._freep
        p = self._next(prevp)
        while True:
            block = self._headers[p]
            if block.size >= nunits:
                if block.size == nunits:
                    self._headers[prevp].next = block.next
                else:
                    block.size -= nunits
                    p += block.size
                    self._headers[p] = _Header(next=p, size=nunits)
                self._freep = prevp
                self._allocated.add(p)
                return (p + 1) * HEADER_SIZE
            if p == self._freep:
                grown = self._morecore(nunits)
                if grown is None:
                    raise OutOfMemory(f"cannot allocate {nbytes} bytes")
                p = grown
            prevp = p
            p = self._next(p)

    def free(self, addr: int) -> None:
        """Return a block obtained from :meth:`malloc` to the free list."""
        if addr % HEADER_SIZE:
            raise ValueError(f"address {addr:#x} was not returned by malloc")
        bp = addr // HEADER_SIZE - 1
        if bp not in self._allocated:
            raise ValueError(f"address {addr:#x} is not an allocated block")
        self._allocated.remove(bp)
        self._release(bp)

    def free_blocks(self) -> list[tuple[int, int]]:
        """The free list in address order as (header address, size in bytes)."""
        if self._freep is None:
            return []
        blocks = []
        p = self._next(_BASE)
        while p != _BASE:
            blocks.append((p * HEADER_SIZE, self._size(p) * HEADER_SIZE))
            p = self._next(p)
        return blocks