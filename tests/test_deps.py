"""Tests for resgen.deps."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from resgen.deps import DependencyReporter
from resgen.models import Manifest


def test_report_manifest_declares_manifest_first() -> None:
    stream = io.StringIO()
    manifest = Manifest(path=Path("app.gresource.xml"), files=("ui/main.ui", "ui/about.ui"))

    count = DependencyReporter(stream=stream).report_manifest(manifest)

    assert count == 3
    assert stream.getvalue().splitlines() == [
        "cargo:rerun-if-changed=app.gresource.xml",
        "cargo:rerun-if-changed=ui/main.ui",
        "cargo:rerun-if-changed=ui/about.ui",
    ]


def test_report_keeps_duplicates_and_custom_prefix() -> None:
    stream = io.StringIO()

    DependencyReporter("depends:", stream=stream).report(["a.css", "a.css"])

    assert stream.getvalue() == "depends:a.css\ndepends:a.css\n"


def test_report_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    DependencyReporter().report(["data.gresource.xml"])

    assert capsys.readouterr().out == "cargo:rerun-if-changed=data.gresource.xml\n"
