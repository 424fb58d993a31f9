"""Low-level binary reader with typed read methods and a moving cursor."""

import struct

from rlupk.parser.errors import PackageIOError


class BinaryReader:
    """Wraps a bytes buffer with little-endian typed reads and a moving cursor.

    Every read is checked against the end of the buffer, so a truncated
    package surfaces as a PackageIOError at the exact offset instead of a
    short slice.
    """

    __slots__ = ("_data", "_pos", "_end")

    def __init__(self, data: bytes, offset: int = 0, end: int | None = None) -> None:
        self._data = data
        self._pos = offset
        self._end = end if end is not None else len(data)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    def _read(self, size: int) -> bytes:
        if size < 0 or self._pos + size > self._end:
            raise PackageIOError(
                f"Read of {size} bytes at offset {self._pos} "
                f"would exceed boundary at {self._end}",
                offset=self._pos,
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def uint16(self) -> int:
        return struct.unpack_from("<H", self._read(2))[0]

    def uint32(self) -> int:
        return struct.unpack_from("<I", self._read(4))[0]

    def uint64(self) -> int:
        return struct.unpack_from("<Q", self._read(8))[0]

    def int32(self) -> int:
        return struct.unpack_from("<i", self._read(4))[0]

    def int64(self) -> int:
        return struct.unpack_from("<q", self._read(8))[0]

    def bytes(self, size: int) -> bytes:
        return self._read(size)

    def skip(self, size: int) -> None:
        if size < 0 or self._pos + size > self._end:
            raise PackageIOError(
                f"Skip of {size} bytes at offset {self._pos} "
                f"would exceed boundary at {self._end}",
                offset=self._pos,
            )
        self._pos += size

    def seek(self, offset: int) -> None:
        """Seek to an absolute position within the bounded region."""
        if offset < 0 or offset > self._end:
            raise PackageIOError(
                f"Seek to {offset} is outside bounds [0, {self._end}]",
                offset=offset,
            )
        self._pos = offset
