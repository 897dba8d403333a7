"""Output targets that receive fully generated source text."""

from __future__ import annotations

import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import Protocol, TextIO

from .errors import RescomError


class SinkWriteError(RescomError):
    """Raised when the output target cannot be opened or written."""

    def __init__(self, path: Path | str, reason: str | None = None) -> None:
        self.path = Path(path)
        message = f"unable to open '{self.path.as_posix()}' for writing"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class Sink(Protocol):
    """Receives the complete generated text exactly once per run."""

    def commit(self, text: str) -> None:
        ...


class StreamSink:
    """Writes generated text to a stream, stdout unless told otherwise."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def commit(self, text: str) -> None:
        # Resolve stdout lazily so redirections made after construction apply.
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text)
        stream.flush()


class FileSink:
    """Replaces a file atomically with the generated text."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def commit(self, text: str) -> None:
        directory = self.path.parent
        try:
            handle = tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            )
        except OSError as exc:
            raise SinkWriteError(self.path, exc.strerror) from exc

        temp_path = Path(handle.name)
        try:
            with handle:
                handle.write(text)
            os.chmod(temp_path, self._target_mode())
            os.replace(temp_path, self.path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise SinkWriteError(self.path, exc.strerror) from exc

    def _target_mode(self) -> int:
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except OSError:
            return 0o644


def open_sink(output: Path | str | None) -> Sink:
    """Return the sink for a named output, falling back to stdout."""
    if output is None or str(output) == "-":
        return StreamSink()
    return FileSink(output)


__all__ = ["FileSink", "Sink", "SinkWriteError", "StreamSink", "open_sink"]
