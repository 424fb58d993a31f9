"""Tests for the package summary parser: synthetic headers."""

import struct

import pytest

from package_builder import build_summary, chunk_info, fstring_ascii, fstring_utf16
from rlupk.models.constants import PACKAGE_FILE_TAG, CompressionFlags
from rlupk.parser.binary_reader import BinaryReader
from rlupk.parser.errors import FormatError
from rlupk.parser.summary_parser import (
    read_compressed_chunk_header,
    read_compressed_chunk_info,
    read_compressed_chunk_table,
    read_package_summary,
)


def test_fixed_fields_decode():
    data = build_summary(
        file_version=868,
        licensee_version=32,
        total_header_size=0x1234,
        package_flags=0x00080009,
        name_count=7, name_offset=300,
        export_count=8, export_offset=400,
        import_count=9, import_offset=500,
        depends_offset=600,
        unknown_offsets=(600, 1, 2, 3),
        engine_version=12791,
        cooker_version=136,
        compression_flags=CompressionFlags.ZLIB,
        unknown_hash=-5,
        garbage_size=11,
        chunk_info_offset=96,
        last_block_size=13,
    )
    r = BinaryReader(data)
    s = read_package_summary(r)

    assert r.remaining == 0
    assert s.tag == PACKAGE_FILE_TAG
    assert (s.file_version, s.licensee_version) == (868, 32)
    assert s.total_header_size == 0x1234
    assert s.folder_name == "None"
    assert s.package_flags == 0x00080009
    assert (s.name_count, s.name_offset) == (7, 300)
    assert (s.export_count, s.export_offset) == (8, 400)
    assert (s.import_count, s.import_offset) == (9, 500)
    assert s.depends_offset == 600
    assert s.unknown_offsets == (600, 1, 2, 3)
    assert (s.engine_version, s.cooker_version) == (12791, 136)
    assert s.compression_flags == CompressionFlags.ZLIB
    assert s.is_zlib_compressed
    assert s.unknown_hash == -5
    assert s.garbage_size == 11
    assert s.compressed_chunk_info_offset == 96
    assert s.last_block_size == 13


def test_guid_and_generations():
    data = build_summary(
        guid=(0xDEADBEEF, 1, 2, 0xFFFFFFFF),
        generations=[(10, 20, 0), (11, 21, 3)],
    )
    s = read_package_summary(BinaryReader(data))
    assert (s.guid.a, s.guid.b, s.guid.c, s.guid.d) == (0xDEADBEEF, 1, 2, 0xFFFFFFFF)
    assert str(s.guid) == "DEADBEEF-00000001-00000002-FFFFFFFF"
    assert [(g.export_count, g.name_count, g.net_object_count) for g in s.generations] == [
        (10, 20, 0),
        (11, 21, 3),
    ]


def test_unicode_folder_name():
    s = read_package_summary(BinaryReader(build_summary(folder_name=fstring_utf16("Maps"))))
    assert s.folder_name == "Maps"


def test_empty_folder_name():
    s = read_package_summary(BinaryReader(build_summary(folder_name=struct.pack("<i", 0))))
    assert s.folder_name is None


def test_unknown_arrays_are_consumed():
    data = build_summary(
        strings=[fstring_ascii("one"), fstring_utf16("two")],
        unknown_entries=[
            ((0x100, 0x100, 1, 2, 0), [0xD]),
            ((0x40, 0x40, 7, 5, 1), [0xA, 0xC]),
        ],
        garbage_size=3,
    )
    r = BinaryReader(data)
    s = read_package_summary(r)
    assert r.remaining == 0
    assert s.garbage_size == 3
    assert [e.values for e in s.unknown_entries] == [(0x100, 0x100, 1, 2, 0), (0x40, 0x40, 7, 5, 1)]
    assert [e.array for e in s.unknown_entries] == [[0xD], [0xA, 0xC]]


def test_plaintext_chunk_list():
    data = build_summary(licensee_version=32, chunks=[(1000, 2000, 3000, 400)])
    s = read_package_summary(BinaryReader(data))
    assert len(s.compressed_chunks) == 1
    c = s.compressed_chunks[0]
    assert (c.uncompressed_offset, c.uncompressed_size, c.compressed_offset, c.compressed_size) == (
        1000, 2000, 3000, 400,
    )


def test_compression_flags_bitset():
    data = build_summary(compression_flags=CompressionFlags.ZLIB | CompressionFlags.BIAS_SPEED)
    s = read_package_summary(BinaryReader(data))
    assert s.compression_flags & CompressionFlags.ZLIB
    assert s.compression_flags & CompressionFlags.BIAS_SPEED
    assert not s.compression_flags & CompressionFlags.GZIP


def test_gzip_only_is_not_zlib():
    s = read_package_summary(BinaryReader(build_summary(compression_flags=CompressionFlags.GZIP)))
    assert not s.is_zlib_compressed


def test_bad_tag_consumes_only_tag():
    data = struct.pack("<I", 0x12345678) + build_summary()[4:]
    r = BinaryReader(data)
    with pytest.raises(FormatError, match="Not a valid Unreal Engine package") as exc_info:
        read_package_summary(r)
    assert r.position == 4
    assert exc_info.value.offset == 0


def test_encrypted_size_properties():
    data = build_summary(total_header_size=1000, garbage_size=7, name_offset=200)
    s = read_package_summary(BinaryReader(data))
    assert s.encrypted_size == 793
    assert s.aligned_encrypted_size == 800


# --- Offset width boundary ---

@pytest.mark.parametrize("licensee_version, entry_size, wide", [
    (21, 16, False),
    (22, 24, True),
    (0, 16, False),
    (32, 24, True),
])
def test_chunk_info_width(licensee_version, entry_size, wide):
    data = chunk_info(0x1000, 0x2000, 0x300, 0x400, licensee_version=licensee_version)
    assert len(data) == entry_size
    r = BinaryReader(data + b"trailing")
    info = read_compressed_chunk_info(r, licensee_version)
    assert r.position == entry_size
    assert info.uncompressed_offset == 0x1000
    assert info.uncompressed_size == 0x2000
    assert info.compressed_offset == 0x300
    assert info.compressed_size == 0x400


def test_wide_offsets_above_4gb():
    data = chunk_info(1 << 33, 10, (1 << 32) + 5, 20, licensee_version=22)
    info = read_compressed_chunk_info(BinaryReader(data), 22)
    assert info.uncompressed_offset == 1 << 33
    assert info.compressed_offset == (1 << 32) + 5


def test_chunk_table_byte_consumption_differs_by_version():
    entries = [(1, 2, 3, 4), (5, 6, 7, 8)]
    narrow = struct.pack("<i", 2) + b"".join(chunk_info(*e, licensee_version=21) for e in entries)
    wide = struct.pack("<i", 2) + b"".join(chunk_info(*e, licensee_version=22) for e in entries)

    r21 = BinaryReader(narrow)
    r22 = BinaryReader(wide)
    t21 = read_compressed_chunk_table(r21, 21)
    t22 = read_compressed_chunk_table(r22, 22)

    assert r21.position == 4 + 2 * 16
    assert r22.position == 4 + 2 * 24
    assert t21 == t22


def test_summary_version_controls_chunk_width():
    narrow = build_summary(licensee_version=21, chunks=[(1, 2, 3, 4)])
    wide = build_summary(licensee_version=22, chunks=[(1, 2, 3, 4)])
    assert len(wide) - len(narrow) == 8
    for data in (narrow, wide):
        r = BinaryReader(data)
        s = read_package_summary(r)
        assert r.remaining == 0
        assert s.compressed_chunks[0].compressed_offset == 3
    assert read_package_summary(BinaryReader(wide)).uses_wide_offsets
    assert not read_package_summary(BinaryReader(narrow)).uses_wide_offsets


def test_chunk_header():
    data = struct.pack("<Iiii", PACKAGE_FILE_TAG, 0x20000, 50, 100)
    header = read_compressed_chunk_header(BinaryReader(data))
    assert header.has_valid_tag
    assert header.block_size == 0x20000
    assert header.summary.compressed_size == 50
    assert header.summary.uncompressed_size == 100
