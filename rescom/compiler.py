"""Top-level composition: manifest in, generated header out."""

from __future__ import annotations

from pathlib import Path

from .config import load_configuration
from .filesystem import LocalFileSystem
from .generators import GeneratorRegistry, build_default_registry
from .logging import get_logger
from .models import Configuration
from .sinks import Sink, open_sink


class ResourceCompiler:
    """Coordinates manifest loading, generator selection and output commit."""

    def __init__(
        self,
        registry: GeneratorRegistry | None = None,
        file_system: LocalFileSystem | None = None,
    ) -> None:
        self.registry = registry or build_default_registry()
        self.file_system = file_system or LocalFileSystem()
        self.logger = get_logger("compiler")

    def run(
        self,
        manifest: Path | str,
        *,
        output: Path | str | None = None,
        generator: str | None = None,
    ) -> str:
        """Compile ``manifest`` and commit the result to ``output`` (stdout when None)."""
        manifest_path = Path(manifest)
        self.logger.debug("Loading manifest %s", manifest_path)
        configuration = load_configuration(manifest_path, self.file_system)
        self.logger.debug(
            "Manifest lists %d resources (identity=%s)",
            len(configuration.inputs),
            configuration.identity,
        )
        return self.compile(configuration, open_sink(output), generator=generator)

    def compile(
        self, configuration: Configuration, sink: Sink, *, generator: str | None = None
    ) -> str:
        """Generate source for an already loaded configuration."""
        instance = self.registry.create(generator, loader=self.file_system)
        self.logger.debug("Using generator %s", instance.name)
        text = instance.generate(configuration, sink)
        self.logger.info(
            "Embedded %d resources (%d bytes of source)", len(configuration.inputs), len(text)
        )
        return text


__all__ = ["ResourceCompiler"]
