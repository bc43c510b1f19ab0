"""Build-dependency declarations for the host build system."""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

from .models import Manifest

DEFAULT_PREFIX = "cargo:rerun-if-changed="


class DependencyReporter:
    """Prints one rerun declaration per tracked path."""

    def __init__(self, prefix: str = DEFAULT_PREFIX, stream: TextIO | None = None) -> None:
        self.prefix = prefix
        self._stream = stream

    def report(self, paths: Iterable[str]) -> int:
        """Declare every path in order and return how many were written."""
        stream = self._stream or sys.stdout
        count = 0
        for path in paths:
            stream.write(f"{self.prefix}{path}\n")
            count += 1
        stream.flush()
        return count

    def report_manifest(self, manifest: Manifest) -> int:
        """Declare the manifest itself followed by every file it references."""
        return self.report(manifest.dependencies())


__all__ = ["DEFAULT_PREFIX", "DependencyReporter"]
