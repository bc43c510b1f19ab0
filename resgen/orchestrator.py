"""Pipeline orchestration for compiling and embedding GResource bundles."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from .codegen import SourceWriter
from .config import ResgenConfig
from .deps import DependencyReporter
from .errors import CompileError, ResgenError
from .logging import get_logger
from .manifest import read_manifest
from .models import CompileOutcome, Manifest
from .packer import Packer


class Compiler:
    """Runs manifest validation, packing and code generation for one bundle."""

    def __init__(
        self,
        config: ResgenConfig | None = None,
        *,
        packer: Packer | None = None,
        reporter: DependencyReporter | None = None,
        writer: SourceWriter | None = None,
        environ: Mapping[str, str] | None = None,
        out_dir: Path | str | None = None,
    ) -> None:
        self.config = config or ResgenConfig(root=Path.cwd())
        self.packer = packer or Packer(
            self.config.packer.executable,
            extra_args=self.config.packer.extra_args,
        )
        self.reporter = reporter or DependencyReporter(self.config.dependency_prefix)
        self.writer = writer or SourceWriter(self.config.templates_dir)
        self._environ = environ if environ is not None else os.environ
        self._out_dir = Path(out_dir) if out_dir is not None else None
        self.logger = get_logger("orchestrator")

    def compile(self, name: str) -> CompileOutcome:
        """Compile ``<name>.gresource.xml`` and embed the result as a Rust module."""
        manifest_path = self.manifest_path(name)
        self.logger.info("Compiling resources from %s", manifest_path)

        manifest = self.check_inputs(manifest_path)

        out_dir = self.resolve_out_dir()
        output = self.config.output
        bundle_path = out_dir / f"{name}{output.bundle_suffix}"
        source_path = out_dir / f"{name}{output.source_suffix}"

        self.packer.run(bundle_path, manifest_path)
        self.logger.debug("Packed bundle written to %s", bundle_path)

        try:
            size = self.writer.write(bundle_path, source_path)
        except (OSError, ResgenError) as exc:
            raise CompileError(exc, f"writing rust module to `{source_path}`") from exc

        self.logger.info("Embedded %d bytes into %s", size, source_path)
        return CompileOutcome(
            manifest=manifest,
            bundle_path=bundle_path,
            source_path=source_path,
            size=size,
        )

    def check_inputs(self, manifest_path: Path) -> Manifest:
        """Parse the manifest and declare its dependencies once it is known to be valid."""
        try:
            manifest = read_manifest(manifest_path)
        except (OSError, ResgenError) as exc:
            raise CompileError(exc, f"reading resource manifest `{manifest_path}`") from exc
        self.reporter.report_manifest(manifest)
        return manifest

    def manifest_path(self, name: str) -> Path:
        filename = f"{name}{self.config.manifest_suffix}"
        if self.config.manifest_dir is None:
            return Path(filename)
        return self.config.manifest_dir / filename

    def resolve_out_dir(self) -> Path:
        """Return the directory generated artifacts are written to."""
        if self._out_dir is not None:
            out_dir = self._out_dir
        elif self.config.output.directory is not None:
            out_dir = self.config.output.directory
        else:
            env_var = self.config.output.env_var
            value = self._environ.get(env_var)
            if not value:
                raise CompileError(
                    ResgenError(f"environment variable `{env_var}` is not set"),
                    "resolving output directory",
                )
            out_dir = Path(value)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CompileError(exc, f"creating output directory `{out_dir}`") from exc
        return out_dir


def compile(name: str, *, config: ResgenConfig | None = None) -> CompileOutcome:
    """Compile and embed the resources declared by ``<name>.gresource.xml``."""
    return Compiler(config).compile(name)


__all__ = ["Compiler", "compile"]
