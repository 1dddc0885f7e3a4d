import pytest

from sv39kit.virtio import (
    NUM,
    VIRTIO_BLK_T_OUT,
    VRING_DESC_F_NEXT,
    VRING_DESC_F_WRITE,
    AvailRing,
    BlockRequest,
    Descriptor,
    UsedElem,
    UsedRing,
)


def test_descriptor_wire_bytes():
    desc = Descriptor(addr=0x1000, length=512, flags=VRING_DESC_F_NEXT | VRING_DESC_F_WRITE, next=1)
    assert desc.pack() == (
        b"\x00\x10\x00\x00\x00\x00\x00\x00" b"\x00\x02\x00\x00" b"\x03\x00\x01\x00"
    )


def test_descriptor_round_trip():
    desc = Descriptor(addr=0x8765_4321_0000, length=16, flags=VRING_DESC_F_NEXT, next=7)
    assert Descriptor.unpack(desc.pack()) == desc
    assert len(desc.pack()) == Descriptor.SIZE


def test_descriptor_truncated():
    with pytest.raises(ValueError):
        Descriptor.unpack(Descriptor().pack()[:-1])


def test_descriptor_out_of_range_field():
    with pytest.raises(ValueError):
        Descriptor(next=1 << 16).pack()


def test_avail_ring_round_trip():
    ring = AvailRing(flags=0, idx=5, ring=tuple(range(NUM)), unused=9)
    data = ring.pack()
    assert len(data) == AvailRing.SIZE
    assert AvailRing.unpack(data) == ring


def test_avail_ring_wrong_length():
    with pytest.raises(ValueError):
        AvailRing(ring=(0, 1, 2))


def test_used_ring_round_trip():
    ring = UsedRing(idx=3, ring=tuple(UsedElem(i, i * 512) for i in range(NUM)))
    data = ring.pack()
    assert len(data) == UsedRing.SIZE
    assert UsedRing.unpack(data) == ring


def test_used_ring_default_is_zero():
    assert UsedRing().pack() == bytes(UsedRing.SIZE)


def test_used_ring_wrong_length():
    with pytest.raises(ValueError):
        UsedRing(ring=(UsedElem(),))


def test_block_request_round_trip():
    req = BlockRequest(type=VIRTIO_BLK_T_OUT, sector=2000)
    data = req.pack()
    assert data[:4] == b"\x01\x00\x00\x00"
    assert BlockRequest.unpack(data) == req
    assert len(data) == BlockRequest.SIZE


def test_block_request_truncated():
    with pytest.raises(ValueError):
        BlockRequest.unpack(b"\x00" * 4)