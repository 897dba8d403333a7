"""Raw file access used by the manifest loader and code generators."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Protocol

from .errors import RescomError


class FileReadError(RescomError):
    """Raised when a resource file cannot be opened or read."""

    def __init__(self, path: Path | str, reason: str | None = None) -> None:
        self.path = Path(path)
        message = f"unable to read '{self.path.as_posix()}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ByteLoader(Protocol):
    """Anything able to hand out the bytes of a resource file."""

    def read_bytes(self, path: Path) -> bytes:
        ...


class LocalFileSystem:
    """ByteLoader backed by the local disk."""

    def read_bytes(self, path: Path) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            raise FileReadError(path, exc.strerror) from exc

    def file_size(self, path: Path) -> int:
        try:
            result = os.stat(path)
        except OSError as exc:
            raise FileReadError(path, exc.strerror) from exc
        if not stat.S_ISREG(result.st_mode):
            raise FileReadError(path, "not a regular file")
        return result.st_size


__all__ = ["ByteLoader", "FileReadError", "LocalFileSystem"]
