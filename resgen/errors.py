"""Exception types shared across resgen stages."""

from __future__ import annotations

from typing import Optional

from .models import Position


class ResgenError(RuntimeError):
    """Base class for every failure raised by resgen."""


class ManifestError(ResgenError):
    """Raised when a resource manifest does not have the expected shape."""

    def __init__(self, message: str, position: Optional[Position] = None) -> None:
        self.message = message
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.position} {self.message}"


class PackerError(ResgenError):
    """Raised when the external resource packer fails."""

    def __init__(
        self,
        message: str,
        *,
        command: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class CodegenError(ResgenError):
    """Raised when the embedded source module cannot be produced."""


class CompileError(ResgenError):
    """Wraps a stage failure with a note naming the stage and path involved."""

    def __init__(self, cause: BaseException, note: str) -> None:
        super().__init__(f"{cause} {note}")
        self.note = note
        self.cause: BaseException = cause
        self.__cause__ = cause


__all__ = ["CodegenError", "CompileError", "ManifestError", "PackerError", "ResgenError"]
