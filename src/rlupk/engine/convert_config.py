"""Configuration knobs for converting package files on disk."""

from dataclasses import dataclass


@dataclass(slots=True)
class ConvertConfig:
    """File naming and batch policy for package conversion."""

    input_extension: str = ".upk"
    output_suffix: str = "_decrypted"   # Foo.upk -> Foo_decrypted.upk
    keep_going: bool = False            # Skip failed files instead of aborting the batch

    @property
    def output_ending(self) -> str:
        return f"{self.output_suffix}{self.input_extension}"
