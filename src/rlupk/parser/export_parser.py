"""Parse the export table from a decrypted package header.

The export table is not needed to rebuild the package; it is decoded for
inspection only. It sits at export_offset in the file, which is
export_offset - name_offset into the decrypted header, and holds
export_count records with no count prefix.
"""

from rlupk.models.package import ObjectExport, PackageSummary
from rlupk.parser.binary_reader import BinaryReader
from rlupk.parser.serialization import read_int32_array
from rlupk.parser.summary_parser import read_guid, read_offset


def read_object_export(reader: BinaryReader, licensee_version: int) -> ObjectExport:
    return ObjectExport(
        class_index=reader.int32(),
        super_index=reader.int32(),
        package_index=reader.int32(),
        object_name=reader.int64(),
        archetype=reader.int32(),
        object_flags=reader.uint64(),
        serial_size=reader.int32(),
        serial_offset=read_offset(reader, licensee_version),
        export_flags=reader.int32(),
        net_objects=read_int32_array(reader),
        package_guid=read_guid(reader),
        package_flags=reader.int32(),
    )


def read_export_table(decrypted: bytes, summary: PackageSummary) -> list[ObjectExport]:
    """Decode every export record from the decrypted header bytes."""
    reader = BinaryReader(decrypted)
    reader.seek(summary.export_offset - summary.name_offset)
    return [
        read_object_export(reader, summary.licensee_version)
        for _ in range(summary.export_count)
    ]
