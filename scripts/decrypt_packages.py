"""Decrypt and decompress Rocket League .upk packages.

Usage:
    python -m scripts.decrypt_packages PATH [PATH ...] [--keep-going] [--suffix S] [--verbose]

Each Foo.upk is written next to itself as Foo_decrypted.upk.
"""

import argparse
import logging
import sys
from pathlib import Path

from rlupk.engine import ConversionResult, ConvertConfig, convert_paths


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def format_result(result: ConversionResult) -> str:
    if result.skipped_reason:
        return f"Skipped: {result.skipped_reason}"
    if result.error is not None:
        return f"Failed ({result.error_kind}): {result.path}: {result.error}"
    return f"{result.path} -> {result.output_path}"


def main(argv: list[str] | None = None) -> int:
    defaults = ConvertConfig()
    parser = argparse.ArgumentParser(description="Decrypt and decompress .upk packages")
    parser.add_argument("paths", type=Path, nargs="+", help="Package files to convert")
    parser.add_argument("--keep-going", action="store_true",
                        help="Continue with the next file when one fails")
    parser.add_argument("--suffix", default=defaults.output_suffix,
                        help="Suffix added to output file names (default: %(default)s)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log each decoding step")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    config = ConvertConfig(output_suffix=args.suffix, keep_going=args.keep_going)
    try:
        results = convert_paths(args.paths, config)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for result in results:
        stream = sys.stdout if result.ok else sys.stderr
        print(format_result(result), file=stream)

    failed = [r for r in results if r.error is not None]
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
