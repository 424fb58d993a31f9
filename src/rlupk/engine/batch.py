"""Convert package files on disk, one at a time.

Naming rules: only files ending in the input extension are converted, files
that already carry the output suffix are skipped, and the output is written
next to the input as <stem><suffix><extension>.

Whether a failed conversion aborts the batch is the caller's choice
(ConvertConfig.keep_going).
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from rlupk.engine.convert_config import ConvertConfig
from rlupk.engine.package_decompressor import decrypt_package


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConversionResult:
    """Outcome of converting (or skipping) one input path."""
    path: Path
    output_path: Path | None = None
    error: Exception | None = None
    skipped_reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.skipped_reason is None

    @property
    def error_kind(self) -> str | None:
        """Error category ("format", "crypto", "io", ...) of a failed conversion."""
        if self.error is None:
            return None
        return getattr(self.error, "kind", "os")


def output_path_for(path: Path, config: ConvertConfig | None = None) -> Path:
    """Derive the output path for *path*.

    Raises:
        ValueError: If *path* lacks the input extension or is already converted.
    """
    config = config or ConvertConfig()
    name = path.name
    if not name.lower().endswith(config.input_extension.lower()):
        raise ValueError(f"{str(path)!r} should have a {config.input_extension} extension.")
    if name.lower().endswith(config.output_ending.lower()):
        raise ValueError(f"{str(path)!r} is already decrypted.")
    # Keep the input's own spelling of the extension (Foo.UPK -> Foo_decrypted.UPK).
    split = len(name) - len(config.input_extension)
    stem, extension = name[:split], name[split:]
    return path.with_name(f"{stem}{config.output_suffix}{extension}")


def convert_file(path: Path, output_path: Path | None = None) -> Path:
    """Decrypt and decompress one package file. Returns the written path."""
    if output_path is None:
        output_path = output_path_for(path)
    data = path.read_bytes()
    logger.info("Converting %s (%d bytes)", path, len(data))
    output = decrypt_package(data)
    output_path.write_bytes(output)
    logger.info("Wrote %s (%d bytes)", output_path, len(output))
    return output_path


def convert_paths(
    paths: Iterable[Path],
    config: ConvertConfig | None = None,
) -> list[ConversionResult]:
    """Convert each path in order.

    Badly named paths are skipped. A failed conversion is re-raised unless
    config.keep_going is set, in which case it is recorded and the batch
    moves on to the next path.
    """
    config = config or ConvertConfig()
    results: list[ConversionResult] = []
    for path in paths:
        try:
            output_path = output_path_for(path, config)
        except ValueError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            results.append(ConversionResult(path=path, skipped_reason=str(exc)))
            continue

        try:
            convert_file(path, output_path)
        except (ValueError, OSError) as exc:
            if not config.keep_going:
                raise
            logger.error("Failed to convert %s: %s", path, exc)
            results.append(ConversionResult(path=path, error=exc))
            continue

        results.append(ConversionResult(path=path, output_path=output_path))
    return results
