"""Parse the package file summary (header) and its nested structures.

Layout, in order (all little-endian):
  tag u32 | file_version u16 | licensee_version u16 | total_header_size i32
  folder_name FString | package_flags u32
  name/export/import count+offset pairs i32 | depends_offset i32
  4 x unknown i32 | guid 4 x u32 | generations TArray
  engine_version u32 | cooker_version u32 | compression_flags u32
  compressed_chunks TArray | unknown i32 | TArray<FString>
  TArray<unknown entry> | garbage_size i32 | chunk_info_offset i32
  last_block_size i32

Chunk offsets are int64 from licensee version 22 on, int32 before.
"""

import logging

from rlupk.models.constants import (
    PACKAGE_FILE_TAG,
    WIDE_OFFSET_LICENSEE_VERSION,
    CompressionFlags,
)
from rlupk.models.package import (
    CompressedChunkBlock,
    CompressedChunkHeader,
    CompressedChunkInfo,
    GenerationInfo,
    Guid,
    PackageSummary,
    UnknownSummaryEntry,
)
from rlupk.parser.binary_reader import BinaryReader
from rlupk.parser.errors import FormatError
from rlupk.parser.serialization import (
    read_array,
    read_fstring,
    read_int32_array,
    skip_fstring,
)


logger = logging.getLogger(__name__)


def read_offset(reader: BinaryReader, licensee_version: int) -> int:
    """Read a file offset whose width depends on the licensee version."""
    if licensee_version >= WIDE_OFFSET_LICENSEE_VERSION:
        return reader.int64()
    return reader.int32()


def read_guid(reader: BinaryReader) -> Guid:
    return Guid(
        a=reader.uint32(),
        b=reader.uint32(),
        c=reader.uint32(),
        d=reader.uint32(),
    )


def read_generation_info(reader: BinaryReader) -> GenerationInfo:
    return GenerationInfo(
        export_count=reader.int32(),
        name_count=reader.int32(),
        net_object_count=reader.int32(),
    )


def read_unknown_summary_entry(reader: BinaryReader) -> UnknownSummaryEntry:
    values = (
        reader.int32(),
        reader.int32(),
        reader.int32(),
        reader.int32(),
        reader.int32(),
    )
    return UnknownSummaryEntry(values=values, array=read_int32_array(reader))


def read_compressed_chunk_info(
    reader: BinaryReader, licensee_version: int
) -> CompressedChunkInfo:
    return CompressedChunkInfo(
        uncompressed_offset=read_offset(reader, licensee_version),
        uncompressed_size=reader.int32(),
        compressed_offset=read_offset(reader, licensee_version),
        compressed_size=reader.int32(),
    )


def read_compressed_chunk_table(
    reader: BinaryReader, licensee_version: int
) -> list[CompressedChunkInfo]:
    """Read a TArray of chunk descriptors sized for *licensee_version*."""
    return read_array(reader, read_compressed_chunk_info, licensee_version)


def read_compressed_chunk_block(reader: BinaryReader) -> CompressedChunkBlock:
    return CompressedChunkBlock(
        compressed_size=reader.int32(),
        uncompressed_size=reader.int32(),
    )


def read_compressed_chunk_header(reader: BinaryReader) -> CompressedChunkHeader:
    return CompressedChunkHeader(
        tag=reader.uint32(),
        block_size=reader.int32(),
        summary=read_compressed_chunk_block(reader),
    )


def read_package_summary(reader: BinaryReader) -> PackageSummary:
    """Decode the package summary at the reader's current position.

    Raises:
        FormatError: If the leading tag is not the package magic. Only the
            four tag bytes are consumed in that case.
    """
    start = reader.position
    tag = reader.uint32()
    if tag != PACKAGE_FILE_TAG:
        raise FormatError(
            f"Not a valid Unreal Engine package: tag 0x{tag:08X} at offset {start}",
            offset=start,
        )

    file_version = reader.uint16()
    licensee_version = reader.uint16()
    total_header_size = reader.int32()
    folder_name = read_fstring(reader)
    package_flags = reader.uint32()

    name_count = reader.int32()
    name_offset = reader.int32()
    export_count = reader.int32()
    export_offset = reader.int32()
    import_count = reader.int32()
    import_offset = reader.int32()
    depends_offset = reader.int32()
    unknown_offsets = (reader.int32(), reader.int32(), reader.int32(), reader.int32())

    guid = read_guid(reader)
    generations = read_array(reader, read_generation_info)

    engine_version = reader.uint32()
    cooker_version = reader.uint32()
    compression_flags = CompressionFlags(reader.uint32())
    compressed_chunks = read_compressed_chunk_table(reader, licensee_version)

    unknown_hash = reader.int32()
    # String array contents are not used; only their lengths are validated.
    read_array(reader, skip_fstring)
    unknown_entries = read_array(reader, read_unknown_summary_entry)

    summary = PackageSummary(
        tag=tag,
        file_version=file_version,
        licensee_version=licensee_version,
        total_header_size=total_header_size,
        folder_name=folder_name,
        package_flags=package_flags,
        name_count=name_count,
        name_offset=name_offset,
        export_count=export_count,
        export_offset=export_offset,
        import_count=import_count,
        import_offset=import_offset,
        depends_offset=depends_offset,
        unknown_offsets=unknown_offsets,
        guid=guid,
        generations=generations,
        engine_version=engine_version,
        cooker_version=cooker_version,
        compression_flags=compression_flags,
        compressed_chunks=compressed_chunks,
        unknown_hash=unknown_hash,
        unknown_entries=unknown_entries,
        garbage_size=reader.int32(),
        compressed_chunk_info_offset=reader.int32(),
        last_block_size=reader.int32(),
    )
    logger.debug(
        "Summary: version %d/%d, header size %d, names at %d, flags %r, %d plaintext chunks",
        file_version, licensee_version, total_header_size, name_offset,
        compression_flags, len(compressed_chunks),
    )
    return summary
