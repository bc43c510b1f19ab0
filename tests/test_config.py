"""Tests for resgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.config import ConfigError, ResgenConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ResgenConfig)
    assert config.root == tmp_path.resolve()
    assert config.manifest_dir is None
    assert config.manifest_suffix == ".gresource.xml"
    assert config.dependency_prefix == "cargo:rerun-if-changed="
    assert config.packer.executable == "glib-compile-resources"
    assert config.packer.extra_args == []
    assert config.output.env_var == "OUT_DIR"
    assert config.output.directory is None
    assert config.output.bundle_suffix == ".gresource"
    assert config.output.source_suffix == "_resources.rs"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".resgen.yml"
    config_file.write_text(
        """
manifest_dir: resources
manifest_suffix: .xml
dependency_prefix: "depends:"
templates_dir: templates
packer:
  executable: /opt/glib/bin/glib-compile-resources
  extra_args:
    - "--sourcedir=resources"
output:
  env_var: BUILD_DIR
  dir: build/generated
  bundle_suffix: .bundle
  source_suffix: _data.rs
""",
        encoding="utf-8",
    )

    config = load_config(config_file)
    root = tmp_path.resolve()

    assert config.manifest_dir == root / "resources"
    assert config.manifest_suffix == ".xml"
    assert config.dependency_prefix == "depends:"
    assert config.templates_dir == root / "templates"
    assert config.packer.executable == "/opt/glib/bin/glib-compile-resources"
    assert config.packer.extra_args == ["--sourcedir=resources"]
    assert config.output.env_var == "BUILD_DIR"
    assert config.output.directory == root / "build" / "generated"
    assert config.output.bundle_suffix == ".bundle"
    assert config.output.source_suffix == "_data.rs"


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.packer.executable == "glib-compile-resources"


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("packer: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)

    assert ".resgen.yml" in str(excinfo.value)
