"""Source generation for embedded resource bundles."""

from .writer import SourceWriter, declared_size, decode_literals

__all__ = ["SourceWriter", "declared_size", "decode_literals"]
