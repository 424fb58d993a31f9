"""Rebuild a package with a decrypted header and inflated chunks.

Pipeline:
  1. Decode the plaintext summary at the start of the file.
  2. Refuse anything that is not ZLIB-compressed.
  3. Decrypt the header tail (name_offset onwards).
  4. Read the real chunk table from the decrypted bytes; the one in the
     plaintext summary is not used.
  5. Start from a copy of the input, overlay the decrypted header, then
     overlay every chunk's inflated data at its uncompressed offset.

Each chunk in the original file is a header (tag, block size, totals)
followed by sub-block size pairs, then the zlib streams of each sub-block
back to back.
"""

import logging
import zlib

from rlupk.engine.decryptor import decrypt_header, read_encrypted_header
from rlupk.models.package import (
    CompressedChunkBlock,
    CompressedChunkInfo,
    UnpackedPackage,
)
from rlupk.parser.binary_reader import BinaryReader
from rlupk.parser.errors import (
    DecompressionError,
    PackageIOError,
    UnsupportedCompressionError,
)
from rlupk.parser.summary_parser import (
    read_compressed_chunk_block,
    read_compressed_chunk_header,
    read_compressed_chunk_table,
    read_package_summary,
)


logger = logging.getLogger(__name__)


def _write_at(buffer: bytearray, offset: int, data: bytes) -> None:
    """Overwrite *buffer* at *offset*, appending whatever runs past the end.

    The offset itself must lie within [0, len(buffer)]: data may extend the
    buffer but never leave a gap, so growth is bounded by the bytes written.
    """
    if offset < 0 or offset > len(buffer):
        raise PackageIOError(
            f"Write of {len(data)} bytes at offset {offset} is outside output "
            f"bounds [0, {len(buffer)}]",
            offset=offset,
        )
    buffer[offset : offset + len(data)] = data


def read_chunk_blocks(reader: BinaryReader, total_uncompressed: int) -> list[CompressedChunkBlock]:
    """Read sub-block descriptors until their sizes add up to *total_uncompressed*."""
    blocks: list[CompressedChunkBlock] = []
    running = 0
    while running < total_uncompressed:
        start = reader.position
        block = read_compressed_chunk_block(reader)
        if block.uncompressed_size <= 0 or block.compressed_size < 0:
            raise DecompressionError(
                f"Invalid sub-block sizes {block.compressed_size}/{block.uncompressed_size} "
                f"at offset {start}",
                offset=start,
            )
        running += block.uncompressed_size
        blocks.append(block)
    if running != total_uncompressed:
        raise DecompressionError(
            f"Sub-blocks add up to {running} bytes, chunk declares {total_uncompressed}",
            offset=reader.position,
        )
    return blocks


def inflate_block(data: bytes, expected_size: int, offset: int | None = None) -> bytes:
    """Inflate one zlib-wrapped sub-block and check its size."""
    try:
        raw = zlib.decompress(data, bufsize=max(expected_size, 1))
    except zlib.error as exc:
        raise DecompressionError(
            f"zlib error in sub-block at offset {offset}: {exc}", offset=offset
        ) from exc
    if len(raw) != expected_size:
        raise DecompressionError(
            f"Sub-block at offset {offset} inflated to {len(raw)} bytes, "
            f"expected {expected_size}",
            offset=offset,
        )
    return raw


def decompress_chunk(reader: BinaryReader, chunk: CompressedChunkInfo) -> bytes:
    """Inflate one chunk from the original file into its uncompressed bytes."""
    reader.seek(chunk.compressed_offset)
    header = read_compressed_chunk_header(reader)
    if not header.has_valid_tag:
        logger.debug(
            "Chunk at %d has unexpected tag 0x%08X", chunk.compressed_offset, header.tag
        )
    blocks = read_chunk_blocks(reader, header.summary.uncompressed_size)

    parts: list[bytes] = []
    for block in blocks:
        start = reader.position
        compressed = reader.bytes(block.compressed_size)
        parts.append(inflate_block(compressed, block.uncompressed_size, start))
    return b"".join(parts)


def unpack_package(data: bytes) -> UnpackedPackage:
    """Decrypt and decompress a whole package held in memory.

    Raises:
        FormatError: Bad magic or malformed header data.
        UnsupportedCompressionError: The ZLIB flag is not set.
        CryptographicError: The header region could not be decrypted.
        PackageIOError: A read ran past the end of the input.
        DecompressionError: A chunk failed to inflate or its sizes disagree.
    """
    reader = BinaryReader(data)
    summary = read_package_summary(reader)

    if not summary.is_zlib_compressed:
        raise UnsupportedCompressionError(
            f"Unsupported compression flags {summary.compression_flags!r}"
        )

    decrypted = decrypt_header(read_encrypted_header(data, summary))

    decrypted_reader = BinaryReader(decrypted)
    decrypted_reader.seek(summary.compressed_chunk_info_offset)
    chunks = read_compressed_chunk_table(decrypted_reader, summary.licensee_version)
    logger.debug("Chunk table: %d chunks", len(chunks))

    output = bytearray(data)
    _write_at(output, summary.name_offset, decrypted)

    for index, chunk in enumerate(chunks):
        logger.debug(
            "Chunk %d: %d bytes at %d -> %d bytes at %d",
            index, chunk.compressed_size, chunk.compressed_offset,
            chunk.uncompressed_size, chunk.uncompressed_offset,
        )
        _write_at(output, chunk.uncompressed_offset, decompress_chunk(reader, chunk))

    return UnpackedPackage(
        summary=summary,
        decrypted_header=decrypted,
        chunks=chunks,
        data=bytes(output),
    )


def decrypt_package(data: bytes) -> bytes:
    """Return the reconstructed package bytes for *data*."""
    return unpack_package(data).data
