"""Virtio MMIO registers and the split-virtqueue structures of a block device."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import ClassVar


class MmioRegister(enum.IntEnum):
    """Offsets of the virtio MMIO control registers."""

    MAGIC_VALUE = 0x000
    VERSION = 0x004
    DEVICE_ID = 0x008
    VENDOR_ID = 0x00C
    DEVICE_FEATURES = 0x010
    DRIVER_FEATURES = 0x020
    QUEUE_SEL = 0x030
    QUEUE_NUM_MAX = 0x034
    QUEUE_NUM = 0x038
    QUEUE_READY = 0x044
    QUEUE_NOTIFY = 0x050
    INTERRUPT_STATUS = 0x060
    INTERRUPT_ACK = 0x064
    STATUS = 0x070
    QUEUE_DESC_LOW = 0x080
    QUEUE_DESC_HIGH = 0x084
    DRIVER_DESC_LOW = 0x090
    DRIVER_DESC_HIGH = 0x094
    DEVICE_DESC_LOW = 0x0A0
    DEVICE_DESC_HIGH = 0x0A4


MAGIC_VALUE = 0x74726976
EXPECTED_VERSION = 2
DISK_DEVICE_ID = 2
VENDOR_ID = 0x554D4551


class ConfigStatus(enum.IntFlag):
    """Bits of the device status register."""

    ACKNOWLEDGE = 1
    DRIVER = 2
    DRIVER_OK = 4
    FEATURES_OK = 8


# Device feature bit numbers.
VIRTIO_BLK_F_RO = 5
VIRTIO_BLK_F_SCSI = 7
VIRTIO_BLK_F_CONFIG_WCE = 11
VIRTIO_BLK_F_MQ = 12
VIRTIO_F_ANY_LAYOUT = 27
VIRTIO_RING_F_INDIRECT_DESC = 28
VIRTIO_RING_F_EVENT_IDX = 29

# Number of descriptors; a power of two.
NUM = 8

VRING_DESC_F_NEXT = 1
VRING_DESC_F_WRITE = 2

VIRTIO_BLK_T_IN = 0
VIRTIO_BLK_T_OUT = 1

_DESC = struct.Struct("<QIHH")
_AVAIL = struct.Struct(f"<HH{NUM}HH")
_USED = struct.Struct("<HH" + "II" * NUM)
_BLK_REQ = struct.Struct("<IIQ")


def _unpack(layout: struct.Struct, data: bytes, what: str) -> tuple:
    if len(data) < layout.size:
        raise ValueError(f"truncated {what}: {len(data)} of {layout.size} bytes")
    return layout.unpack_from(data)


def _pack(layout: struct.Struct, *values: int) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


@dataclass
class Descriptor:
    """One buffer in the descriptor table."""

    addr: int = 0
    length: int = 0
    flags: int = 0
    next: int = 0

    SIZE: ClassVar[int] = _DESC.size

    @classmethod
    def unpack(cls, data: bytes) -> Descriptor:
        """Parse a descriptor from the start of ``data``."""
        return cls(*_unpack(_DESC, data, "descriptor"))

    def pack(self) -> bytes:
        """The descriptor's bytes as the device reads them."""
        return _pack(_DESC, self.addr, self.length, self.flags, self.next)


@dataclass
class AvailRing:
    """The driver's ring of descriptor-chain heads."""

    flags: int = 0
    idx: int = 0
    ring: tuple[int, ...] = field(default_factory=lambda: (0,) * NUM)
    unused: int = 0

    SIZE: ClassVar[int] = _AVAIL.size

    def __post_init__(self) -> None:
        self.ring = tuple(self.ring)
        if len(self.ring) != NUM:
            raise ValueError(f"ring must hold {NUM} entries")

    @classmethod
    def unpack(cls, data: bytes) -> AvailRing:
        """Parse the available ring from the start of ``data``."""
        flags, idx, *rest = _unpack(_AVAIL, data, "available ring")
        return cls(flags, idx, tuple(rest[:NUM]), rest[NUM])

    def pack(self) -> bytes:
        """The ring's bytes as the device reads them."""
        return _pack(_AVAIL, self.flags, self.idx, *self.ring, self.unused)


@dataclass
class UsedElem:
    """A completed request reported by the device."""

    id: int = 0
    length: int = 0


@dataclass
class UsedRing:
    """The device's ring of completed requests."""

    flags: int = 0
    idx: int = 0
    ring: tuple[UsedElem, ...] = field(
        default_factory=lambda: tuple(UsedElem() for _ in range(NUM))
    )

    SIZE: ClassVar[int] = _USED.size

    def __post_init__(self) -> None:
        self.ring = tuple(self.ring)
        if len(self.ring) != NUM:
            raise ValueError(f"ring must hold {NUM} entries")

    @classmethod
    def unpack(cls, data: bytes) -> UsedRing:
        """Parse the used ring from the start of ``data``."""
        flags, idx, *rest = _unpack(_USED, data, "used ring")
        pairs = zip(rest[0::2], rest[1::2])
        return cls(flags, idx, tuple(UsedElem(i, n) for i, n in pairs))

    def pack(self) -> bytes:
        """The ring's bytes as the device writes them."""
        values = [v for elem in self.ring for v in (elem.id, elem.length)]
        return _pack(_USED, self.flags, self.idx, *values)


@dataclass
class BlockRequest:
    """The first descriptor's contents in a disk request."""

    type: int = VIRTIO_BLK_T_IN
    reserved: int = 0
    sector: int = 0

    SIZE: ClassVar[int] = _BLK_REQ.size

    @classmethod
    def unpack(cls, data: bytes) -> BlockRequest:
        """Parse a request header from the start of ``data``."""
        return cls(*_unpack(_BLK_REQ, data, "block request"))

    def pack(self) -> bytes:
        """The request header's bytes."""
        return _pack(_BLK_REQ, self.type, self.reserved, self.sector)