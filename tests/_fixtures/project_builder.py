"""Helper utilities for constructing temporary resource projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Sequence


class ProjectBuilder:
    """Writes manifests and resource files into a throwaway project directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self.out_dir = tmp_path / "out"
        self.out_dir.mkdir()

    def write_manifest(self, name: str, content: str) -> Path:
        """Write ``<name>.gresource.xml`` verbatim (dedented) and return its path."""
        path = self.root / f"{name}.gresource.xml"
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    def write_sections(self, name: str, sections: Iterable[Sequence[str]]) -> Path:
        """Write a well-formed manifest with one ``<gresource>`` per file list."""
        lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<gresources>"]
        for files in sections:
            lines.append('  <gresource prefix="/org/example/app">')
            lines.extend(f"    <file>{file}</file>" for file in files)
            lines.append("  </gresource>")
        lines.append("</gresources>")
        path = self.root / f"{name}.gresource.xml"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path


def manifest_xml(*sections: Sequence[str]) -> bytes:
    """Return manifest markup with one section per file list."""
    body = "".join(
        "<gresource>" + "".join(f"<file>{file}</file>" for file in files) + "</gresource>"
        for files in sections
    )
    return f"<gresources>{body}</gresources>".encode("utf-8")


__all__ = ["ProjectBuilder", "manifest_xml"]
