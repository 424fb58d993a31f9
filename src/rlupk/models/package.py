"""Package header data classes.

Field names follow the Unreal Engine 3 package summary. Unknown fields are
kept so a decoded summary accounts for every byte it consumed.
"""

from dataclasses import dataclass, field

from rlupk.models.constants import (
    AES_BLOCK_SIZE,
    PACKAGE_FILE_TAG,
    WIDE_OFFSET_LICENSEE_VERSION,
    CompressionFlags,
)


@dataclass(slots=True)
class Guid:
    """128-bit package GUID stored as four uint32 words."""
    a: int
    b: int
    c: int
    d: int

    def __str__(self) -> str:
        return f"{self.a:08X}-{self.b:08X}-{self.c:08X}-{self.d:08X}"


@dataclass(slots=True)
class GenerationInfo:
    """Export/name/net-object counts of one previous save of the package."""
    export_count: int
    name_count: int
    net_object_count: int


@dataclass(slots=True)
class UnknownSummaryEntry:
    """Unidentified summary record: five int32s and an int32 array."""
    values: tuple[int, int, int, int, int]
    array: list[int] = field(default_factory=list)


@dataclass(slots=True)
class CompressedChunkInfo:
    """Where a compressed region lives, in both compressed and uncompressed space."""
    uncompressed_offset: int   # int64 if licensee version >= 22
    uncompressed_size: int
    compressed_offset: int     # int64 if licensee version >= 22
    compressed_size: int


@dataclass(slots=True)
class CompressedChunkBlock:
    """Compressed/uncompressed size pair: a chunk total or one sub-block."""
    compressed_size: int
    uncompressed_size: int


@dataclass(slots=True)
class CompressedChunkHeader:
    """Header found at a chunk's compressed offset in the original file."""
    tag: int
    block_size: int              # nominal uncompressed size of one sub-block
    summary: CompressedChunkBlock  # totals over all sub-blocks

    @property
    def has_valid_tag(self) -> bool:
        return self.tag == PACKAGE_FILE_TAG


@dataclass(slots=True)
class PackageSummary:
    """Decoded package file header."""
    tag: int
    file_version: int
    licensee_version: int
    total_header_size: int
    folder_name: str | None
    package_flags: int
    name_count: int
    name_offset: int
    export_count: int
    export_offset: int
    import_count: int
    import_offset: int
    depends_offset: int
    unknown_offsets: tuple[int, int, int, int]  # first one mirrors depends_offset
    guid: Guid
    generations: list[GenerationInfo]
    engine_version: int
    cooker_version: int
    compression_flags: CompressionFlags
    compressed_chunks: list[CompressedChunkInfo]
    unknown_hash: int
    unknown_entries: list[UnknownSummaryEntry]
    garbage_size: int                  # trailing filler inside the decrypted header
    compressed_chunk_info_offset: int  # chunk table offset within the decrypted header
    last_block_size: int               # size of the final AES block's payload

    @property
    def uses_wide_offsets(self) -> bool:
        return self.licensee_version >= WIDE_OFFSET_LICENSEE_VERSION

    @property
    def is_zlib_compressed(self) -> bool:
        return bool(self.compression_flags & CompressionFlags.ZLIB)

    @property
    def encrypted_size(self) -> int:
        """Length of the encrypted header region before block rounding."""
        return self.total_header_size - self.garbage_size - self.name_offset

    @property
    def aligned_encrypted_size(self) -> int:
        size = self.encrypted_size
        return (size + AES_BLOCK_SIZE - 1) & ~(AES_BLOCK_SIZE - 1)


@dataclass(slots=True)
class ObjectExport:
    """An object the package exposes (export table entry)."""
    class_index: int
    super_index: int
    package_index: int
    object_name: int     # FName: name index + instance number as one int64
    archetype: int
    object_flags: int
    serial_size: int
    serial_offset: int   # int64 if licensee version >= 22
    export_flags: int
    net_objects: list[int]
    package_guid: Guid
    package_flags: int

    @property
    def name_index(self) -> int:
        return self.object_name & 0xFFFFFFFF

    @property
    def name_number(self) -> int:
        return self.object_name >> 32


@dataclass(slots=True)
class UnpackedPackage:
    """Result of unpacking one package."""
    summary: PackageSummary
    decrypted_header: bytes
    chunks: list[CompressedChunkInfo]  # authoritative table from the decrypted header
    data: bytes                        # reconstructed file contents
