"""Dump a package's summary, chunk table and (optionally) export table.

Usage:
    python -m scripts.dump_package PATH [--exports] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path

from rlupk.engine import unpack_package
from rlupk.models.package import CompressedChunkInfo, PackageSummary
from rlupk.parser.errors import PackageError
from rlupk.parser.export_parser import read_export_table


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def format_summary(summary: PackageSummary) -> list[str]:
    return [
        f"Version:        {summary.file_version}/{summary.licensee_version}",
        f"Folder:         {summary.folder_name or ''}",
        f"Header size:    {summary.total_header_size}",
        f"Package flags:  0x{summary.package_flags:08X}",
        f"Names:          {summary.name_count} at {summary.name_offset}",
        f"Exports:        {summary.export_count} at {summary.export_offset}",
        f"Imports:        {summary.import_count} at {summary.import_offset}",
        f"Depends offset: {summary.depends_offset}",
        f"GUID:           {summary.guid}",
        f"Generations:    {len(summary.generations)}",
        f"Engine/cooker:  {summary.engine_version}/{summary.cooker_version}",
        f"Compression:    {summary.compression_flags!r}",
        f"Garbage size:   {summary.garbage_size}",
        f"Chunk table at: {summary.compressed_chunk_info_offset} (decrypted header)",
    ]


def format_chunk(index: int, chunk: CompressedChunkInfo) -> str:
    return (
        f"  [{index:>3}] {chunk.compressed_size:>10} @ {chunk.compressed_offset:>10}"
        f"  -> {chunk.uncompressed_size:>10} @ {chunk.uncompressed_offset:>10}"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump .upk package header information")
    parser.add_argument("path", type=Path, help="Package file to inspect")
    parser.add_argument("--exports", action="store_true",
                        help="Also decode and list the export table")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log each decoding step")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    try:
        package = unpack_package(args.path.read_bytes())
    except (PackageError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for line in format_summary(package.summary):
        print(line)

    print()
    print(f"Chunks: {len(package.chunks)}")
    for i, chunk in enumerate(package.chunks):
        print(format_chunk(i, chunk))

    if args.exports:
        try:
            exports = read_export_table(package.decrypted_header, package.summary)
        except PackageError as exc:
            print(f"Error reading exports: {exc}", file=sys.stderr)
            return 1
        print()
        print(f"Exports: {len(exports)}")
        for i, exp in enumerate(exports):
            print(
                f"  [{i:>5}] name={exp.name_index}_{exp.name_number} class={exp.class_index} "
                f"outer={exp.package_index} size={exp.serial_size} offset={exp.serial_offset}"
            )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
