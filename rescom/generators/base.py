"""Base classes for code generator plugins."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import TextIO

from ..errors import RescomError
from ..models import Configuration
from ..sinks import Sink


class GeneratorError(RescomError):
    """Raised when a generator cannot be selected or cannot run."""


class UnsortedInputsError(GeneratorError):
    """Raised when inputs are not sorted by key before index emission."""


class CodeGenerator(ABC):
    """Contract for generators turning a configuration into source text."""

    name: str = "generator"

    @abstractmethod
    def write(self, configuration: Configuration, output: TextIO) -> None:
        """Write the generated source for ``configuration`` into ``output``."""

    def render(self, configuration: Configuration) -> str:
        """Return the generated source as a string."""
        buffer = io.StringIO()
        self.write(configuration, buffer)
        return buffer.getvalue()

    def generate(self, configuration: Configuration, sink: Sink) -> str:
        """Generate into memory and hand the text to ``sink`` once complete."""
        text = self.render(configuration)
        sink.commit(text)
        return text


__all__ = ["CodeGenerator", "GeneratorError", "UnsortedInputsError"]
