"""Core data models shared across resgen components."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class Position:
    """Location of a markup event inside the manifest stream."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Manifest:
    """Parsed resource manifest and the files it references."""

    path: Path
    files: Tuple[str, ...]

    def dependencies(self) -> List[str]:
        """Return every path the build should track, manifest first."""
        return [str(self.path), *self.files]


@dataclass
class CompileOutcome:
    """Artifacts produced by a successful compile."""

    manifest: Manifest
    bundle_path: Path
    source_path: Path
    size: int
