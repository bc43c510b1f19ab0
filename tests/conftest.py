from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ProjectBuilder:
    """Provide a project directory that is also the working directory."""
    builder = ProjectBuilder(tmp_path)
    monkeypatch.chdir(builder.root)
    return builder
