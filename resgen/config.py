"""Configuration loading for resgen (.resgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .deps import DEFAULT_PREFIX
from .errors import ResgenError
from .packer import Packer

CONFIG_FILENAME = ".resgen.yml"


class ConfigError(ResgenError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PackerConfig:
    """External packer command settings."""

    executable: str = Packer.DEFAULT_EXECUTABLE
    extra_args: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """Where generated artifacts go and how they are named."""

    env_var: str = "OUT_DIR"
    directory: Optional[Path] = None
    bundle_suffix: str = ".gresource"
    source_suffix: str = "_resources.rs"


@dataclass
class ResgenConfig:
    """Represents the settings defined in .resgen.yml."""

    root: Path
    manifest_dir: Optional[Path] = None
    manifest_suffix: str = ".gresource.xml"
    dependency_prefix: str = DEFAULT_PREFIX
    templates_dir: Optional[Path] = None
    packer: PackerConfig = field(default_factory=PackerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> ResgenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ResgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ResgenConfig(root=root)
    config.manifest_dir = _as_path(root, data.get("manifest_dir"))
    config.templates_dir = _as_path(root, data.get("templates_dir"))
    config.manifest_suffix = _as_str(data.get("manifest_suffix")) or config.manifest_suffix
    config.dependency_prefix = (
        _as_str(data.get("dependency_prefix")) or config.dependency_prefix
    )

    packer_data = _as_dict(data.get("packer"))
    if packer_data:
        config.packer.executable = (
            _as_str(packer_data.get("executable")) or config.packer.executable
        )
        config.packer.extra_args = _as_str_list(packer_data.get("extra_args"))

    output_data = _as_dict(data.get("output"))
    if output_data:
        output = config.output
        output.env_var = _as_str(output_data.get("env_var")) or output.env_var
        output.directory = _as_path(root, output_data.get("dir"))
        output.bundle_suffix = _as_str(output_data.get("bundle_suffix")) or output.bundle_suffix
        output.source_suffix = _as_str(output_data.get("source_suffix")) or output.source_suffix

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    return root / Path(text).expanduser()


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["ConfigError", "OutputConfig", "PackerConfig", "ResgenConfig", "load_config"]
