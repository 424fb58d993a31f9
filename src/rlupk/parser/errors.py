"""Typed errors raised while unpacking a package.

Every error is fatal to the file being converted. They subclass ValueError so
callers that only care about "bad input" can catch that.
"""


class PackageError(ValueError):
    """Base class. `offset` is the byte offset involved, when known."""

    kind = "package"

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class FormatError(PackageError):
    """Magic mismatch or malformed length-prefixed data."""

    kind = "format"


class UnsupportedCompressionError(PackageError):
    """Declared compression flags lack the ZLIB bit."""

    kind = "unsupported-compression"


class CryptographicError(PackageError):
    """Cipher input not block-aligned, or the cipher itself failed."""

    kind = "crypto"


class PackageIOError(PackageError):
    """Short read or seek outside the buffer."""

    kind = "io"


class DecompressionError(PackageError):
    """Inflate failure or sub-block size accounting mismatch."""

    kind = "decompression"
