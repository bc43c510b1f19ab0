"""Renders a binary bundle as an embeddable Rust module."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import BinaryIO, Iterator, List

from jinja2 import Environment, FileSystemLoader

from ..errors import CodegenError
from ..logging import get_logger

DEFAULT_VALUES_PER_LINE = 8
DEFAULT_CHUNK_SIZE = 64 * 1024

# Continuation that starts each row of byte literals.
_ROW_BREAK = "\n           "
_LITERALS = [f" 0x{value:02x}," for value in range(256)]
_DATA_BLOCK = re.compile(r"data: \[(?P<body>.*?)\]", re.DOTALL)
_DECLARED_SIZE = re.compile(r"data: \[u8; (?P<size>\d+)\]")
_LITERAL = re.compile(r"0x([0-9a-fA-F]{2})")


class SourceWriter:
    """Streams bundle bytes into a Rust source file with a ``register()`` entrypoint."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        values_per_line: int = DEFAULT_VALUES_PER_LINE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if values_per_line <= 0:
            raise ValueError("values_per_line must be positive")
        self.templates_dir = templates_dir
        self.values_per_line = values_per_line
        self.chunk_size = chunk_size
        self._env = self._create_env(templates_dir)
        self.logger = get_logger("codegen")

    def render(self, stream: BinaryIO, size: int, *, include_name: str) -> Iterator[str]:
        """Yield the module text for ``size`` bytes read from ``stream``.

        Raises :class:`CodegenError` if the stream does not yield exactly
        ``size`` bytes, since the array length has already been declared.
        """
        preamble = self._env.get_template("register.rs.j2")
        yield preamble.render(size=size, include_name=include_name)
        yield _ROW_BREAK

        count = 0
        per_line = self.values_per_line
        for chunk in iter(lambda: stream.read(self.chunk_size), b""):
            pieces: List[str] = []
            for value in chunk:
                pieces.append(_LITERALS[value])
                count += 1
                if count % per_line == 0:
                    pieces.append(_ROW_BREAK)
            yield "".join(pieces)

        if count != size:
            raise CodegenError(
                f"bundle length changed while reading: declared {size} bytes, read {count}"
            )

        closing = self._env.get_template("closing.rs.j2")
        yield "\n" + closing.render() + "\n"

    def write(self, bundle_path: Path | str, output_path: Path | str) -> int:
        """Write the module for ``bundle_path`` to ``output_path`` and return the bundle size.

        Output goes to a temporary file beside ``output_path`` that replaces it
        only once the whole module has been written, so a failed run never
        leaves a truncated module behind.
        """
        bundle = Path(bundle_path)
        output = Path(output_path)
        with bundle.open("rb") as source:
            size = os.fstat(source.fileno()).st_size
            self.logger.debug("Embedding %d bytes from %s", size, bundle)
            handle = tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=output.parent,
                prefix=f".{output.name}.",
                suffix=".tmp",
                delete=False,
            )
            tmp_path = Path(handle.name)
            try:
                with handle:
                    for piece in self.render(source, size, include_name=output.name):
                        handle.write(piece)
                os.chmod(tmp_path, 0o666 & ~_current_umask())
                os.replace(tmp_path, output)
            finally:
                if tmp_path.exists():
                    tmp_path.unlink()
        return size

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def _current_umask() -> int:
    # os.umask can only be read by setting it.
    umask = os.umask(0)
    os.umask(umask)
    return umask


def declared_size(text: str) -> int:
    """Return the array length declared by a generated module."""
    match = _DECLARED_SIZE.search(text)
    if match is None:
        raise CodegenError("generated module does not declare a data array")
    return int(match.group("size"))


def decode_literals(text: str) -> bytes:
    """Recover the embedded bytes from a generated module, ignoring layout."""
    # The struct declaration comes first; the initialiser is the last block.
    blocks = [match.group("body") for match in _DATA_BLOCK.finditer(text)]
    if len(blocks) < 2:
        raise CodegenError("generated module does not contain a data initialiser")
    return bytes.fromhex("".join(_LITERAL.findall(blocks[-1])))


__all__ = ["SourceWriter", "declared_size", "decode_literals"]
