"""Tests for BinaryReader: all synthetic bytes."""

import struct

import pytest

from rlupk.parser.binary_reader import BinaryReader
from rlupk.parser.errors import PackageIOError


def test_uint16():
    data = struct.pack("<HH", 0, 0xFFFF)
    r = BinaryReader(data)
    assert r.uint16() == 0
    assert r.uint16() == 65535


def test_uint32():
    data = struct.pack("<II", 42, 0x9E2A83C1)
    r = BinaryReader(data)
    assert r.uint32() == 42
    assert r.uint32() == 0x9E2A83C1


def test_uint64():
    r = BinaryReader(struct.pack("<Q", 0xFFFF_FFFF_FFFF_FFFF))
    assert r.uint64() == 0xFFFF_FFFF_FFFF_FFFF


def test_int32():
    data = struct.pack("<ii", -1, 100)
    r = BinaryReader(data)
    assert r.int32() == -1
    assert r.int32() == 100


def test_int64():
    data = struct.pack("<qq", -2, 1 << 40)
    r = BinaryReader(data)
    assert r.int64() == -2
    assert r.int64() == 1 << 40


def test_reads_are_little_endian():
    r = BinaryReader(b"\xC1\x83\x2A\x9E")
    assert r.uint32() == 0x9E2A83C1


def test_bytes():
    data = b"\x01\x02\x03\x04"
    r = BinaryReader(data)
    assert r.bytes(2) == b"\x01\x02"
    assert r.bytes(2) == b"\x03\x04"


def test_skip():
    data = struct.pack("<III", 1, 2, 3)
    r = BinaryReader(data)
    r.skip(4)
    assert r.uint32() == 2


def test_remaining_and_position():
    r = BinaryReader(b"abcdef")
    assert r.position == 0
    assert r.remaining == 6
    r.skip(2)
    assert r.position == 2
    assert r.remaining == 4


def test_read_past_end():
    r = BinaryReader(b"\x01\x02")
    r.uint16()
    with pytest.raises(PackageIOError, match="exceed boundary") as exc_info:
        r.uint16()
    assert exc_info.value.offset == 2


def test_short_read_does_not_advance():
    r = BinaryReader(b"\x01\x02\x03")
    with pytest.raises(PackageIOError):
        r.uint32()
    assert r.position == 0


def test_bytes_negative_size():
    r = BinaryReader(b"\x01\x02")
    with pytest.raises(PackageIOError):
        r.bytes(-1)


def test_skip_past_end():
    r = BinaryReader(b"\x01\x02")
    with pytest.raises(PackageIOError, match="exceed boundary"):
        r.skip(10)


def test_io_error_is_value_error():
    r = BinaryReader(b"")
    with pytest.raises(ValueError):
        r.int32()


def test_seek():
    data = struct.pack("<III", 100, 200, 300)
    r = BinaryReader(data)
    r.seek(8)
    assert r.uint32() == 300
    r.seek(0)
    assert r.uint32() == 100


def test_seek_to_end_is_allowed():
    r = BinaryReader(b"abcd")
    r.seek(4)
    assert r.remaining == 0


def test_seek_out_of_bounds():
    r = BinaryReader(b"abcd")
    with pytest.raises(PackageIOError, match="outside bounds"):
        r.seek(5)
    with pytest.raises(PackageIOError, match="outside bounds"):
        r.seek(-1)


def test_bounded_end():
    r = BinaryReader(b"abcdef", offset=1, end=3)
    assert r.bytes(2) == b"bc"
    with pytest.raises(PackageIOError):
        r.bytes(1)
