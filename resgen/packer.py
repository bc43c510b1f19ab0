"""Invocation of the external GResource packer."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence

from .errors import PackerError
from .logging import get_logger


@dataclass
class PackerResult:
    """Exit status and captured diagnostics of a packer run."""

    returncode: int
    stderr: str = ""


PackerRunner = Callable[[Sequence[str]], PackerResult]


class Packer:
    """Compiles a manifest and its referenced files into one binary bundle."""

    DEFAULT_EXECUTABLE = "glib-compile-resources"

    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        *,
        extra_args: Sequence[str] = (),
        runner: PackerRunner | None = None,
    ) -> None:
        self.executable = executable
        self.extra_args = list(extra_args)
        self._runner = runner or self._default_runner
        self.logger = get_logger("packer")

    def command(self, target_path: Path | str, manifest_path: Path | str) -> List[str]:
        """Return the argument vector used to pack ``manifest_path``."""
        return [
            self.executable,
            *self.extra_args,
            f"--target={target_path}",
            str(manifest_path),
        ]

    def run(self, target_path: Path | str, manifest_path: Path | str) -> None:
        """Pack the manifest into ``target_path``; raise :class:`PackerError` on failure."""
        args = self.command(target_path, manifest_path)
        description = shlex.join(args)
        self.logger.debug("Running %s", description)
        try:
            result = self._runner(args)
        except OSError as exc:
            raise PackerError(f"{exc} running `{description}`", command=description) from exc

        if result.returncode != 0:
            raise PackerError(
                f"Process didn't exit successfully: `{description}` "
                f"(exit status: {result.returncode})\n--- stderr\n{result.stderr}",
                command=description,
                returncode=result.returncode,
                stderr=result.stderr,
            )

    @staticmethod
    def _default_runner(args: Sequence[str]) -> PackerResult:
        completed = subprocess.run(
            list(args),
            check=False,
            capture_output=True,
        )
        return PackerResult(
            returncode=completed.returncode,
            stderr=completed.stderr.decode("utf-8", errors="replace"),
        )


__all__ = ["Packer", "PackerResult", "PackerRunner"]
