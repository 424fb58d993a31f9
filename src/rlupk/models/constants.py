"""Package format constants: magic tag, compression flags, header cipher key."""

from enum import IntFlag


# First four bytes of every package (and of every compressed chunk header).
PACKAGE_FILE_TAG = 0x9E2A83C1

# From this licensee version on, chunk offsets and export serial offsets are
# stored as int64 instead of int32.
WIDE_OFFSET_LICENSEE_VERSION = 22

# AES block size; the encrypted header region is rounded up to this.
AES_BLOCK_SIZE = 16

# AES-256 key shared by every package of this game.
AES_KEY = bytes([
    0xC7, 0xDF, 0x6B, 0x13, 0x25, 0x2A, 0xCC, 0x71,
    0x47, 0xBB, 0x51, 0xC9, 0x8A, 0xD7, 0xE3, 0x4B,
    0x7F, 0xE5, 0x00, 0xB7, 0x7F, 0xA5, 0xFA, 0xB2,
    0x93, 0xE2, 0xF2, 0x4E, 0x6B, 0x17, 0xE7, 0x79,
])


class CompressionFlags(IntFlag):
    """Package compression flags. Only ZLIB is supported for unpacking."""
    NONE = 0x00
    ZLIB = 0x01
    GZIP = 0x02
    BIAS_MEMORY = 0x10   # prefer smaller output (compression only)
    BIAS_SPEED = 0x20    # prefer faster compression (compression only)
