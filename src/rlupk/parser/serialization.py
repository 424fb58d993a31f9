"""Length-prefixed Unreal serialization primitives: strings and arrays.

Every structured type is decoded by a plain reader function taking the
BinaryReader first. Types that need outside information to decode (such as
the licensee version deciding offset widths) take it as extra positional
arguments, which read_array forwards to each element.
"""

from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from rlupk.parser.binary_reader import BinaryReader
from rlupk.parser.errors import FormatError


T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class ElementReader(Protocol[T_co]):
    """Anything that decodes one value from a reader, given optional context."""

    def __call__(self, reader: BinaryReader, *context: Any) -> T_co: ...


def _read_fstring_bytes(reader: BinaryReader) -> tuple[bytes, bool] | None:
    """Read a length-prefixed string body. Returns (data, is_unicode) or None."""
    start = reader.position
    length = reader.int32()
    if length == 0:
        return None
    if length > 0:
        return reader.bytes(length), False
    size = -length
    if size % 2:
        raise FormatError(
            f"UTF-16 string at offset {start} has odd byte length {size}",
            offset=start,
        )
    return reader.bytes(size), True


def read_fstring(reader: BinaryReader) -> str | None:
    """Read an FString.

    Positive length: that many single-byte characters including a null
    terminator. Negative length: -length bytes of UTF-16LE including a
    two-byte terminator. Zero: no string.
    """
    body = _read_fstring_bytes(reader)
    if body is None:
        return None
    data, is_unicode = body
    if is_unicode:
        return data[:-2].decode("utf-16-le", errors="replace")
    return data[:-1].decode("latin-1")


def skip_fstring(reader: BinaryReader) -> None:
    """Consume an FString, validating only its length."""
    _read_fstring_bytes(reader)


def read_array(
    reader: BinaryReader,
    read_element: ElementReader[T] | Callable[..., T],
    *context: Any,
) -> list[T]:
    """Read an int32 count followed by that many elements.

    Each element is decoded with read_element(reader, *context).
    """
    start = reader.position
    count = reader.int32()
    if count < 0:
        raise FormatError(f"Negative array count {count} at offset {start}", offset=start)
    return [read_element(reader, *context) for _ in range(count)]


def _read_int32(reader: BinaryReader) -> int:
    return reader.int32()


def read_int32_array(reader: BinaryReader) -> list[int]:
    return read_array(reader, _read_int32)
