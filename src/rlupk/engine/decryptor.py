"""Decrypt the encrypted tail of the package header.

Everything from name_offset up to total_header_size - garbage_size is
encrypted with AES-256 in ECB mode and no padding, using one key for every
package. The region is rounded up to whole AES blocks, so the decrypted
buffer may carry a few bytes of garbage at the end; they are kept as-is.
"""

import logging

from Crypto.Cipher import AES

from rlupk.models.constants import AES_BLOCK_SIZE, AES_KEY
from rlupk.models.package import PackageSummary
from rlupk.parser.binary_reader import BinaryReader
from rlupk.parser.errors import CryptographicError, FormatError


logger = logging.getLogger(__name__)


def encrypted_region_size(summary: PackageSummary) -> int:
    """Size of the encrypted header region, rounded up to the AES block size."""
    if summary.encrypted_size < 0:
        raise FormatError(
            f"Encrypted header size is negative ({summary.encrypted_size}): "
            f"header size {summary.total_header_size}, garbage {summary.garbage_size}, "
            f"name offset {summary.name_offset}",
            offset=summary.name_offset,
        )
    return summary.aligned_encrypted_size


def decrypt_header(data: bytes, key: bytes = AES_KEY) -> bytes:
    """AES-256-ECB decrypt *data* without removing any padding."""
    if len(data) % AES_BLOCK_SIZE:
        raise CryptographicError(
            f"Encrypted data length {len(data)} is not a multiple of {AES_BLOCK_SIZE}"
        )
    if not data:
        return b""
    try:
        cipher = AES.new(key, AES.MODE_ECB)
        return cipher.decrypt(data)
    except ValueError as exc:
        raise CryptographicError(f"AES decryption failed: {exc}") from exc


def read_encrypted_header(data: bytes, summary: PackageSummary) -> bytes:
    """Return the ciphertext span of the header from the original file bytes."""
    size = encrypted_region_size(summary)
    reader = BinaryReader(data)
    reader.seek(summary.name_offset)
    logger.debug("Encrypted header: %d bytes at offset %d", size, summary.name_offset)
    return reader.bytes(size)
