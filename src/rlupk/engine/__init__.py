"""Package decryption and decompression."""

from rlupk.engine.batch import ConversionResult, convert_file, convert_paths, output_path_for
from rlupk.engine.convert_config import ConvertConfig
from rlupk.engine.package_decompressor import decrypt_package, unpack_package

__all__ = [
    "ConversionResult",
    "ConvertConfig",
    "convert_file",
    "convert_paths",
    "decrypt_package",
    "output_path_for",
    "unpack_package",
]
