"""Code generator plugins and the registry used to select them."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, List, Optional

from ..filesystem import ByteLoader, LocalFileSystem
from .base import CodeGenerator, GeneratorError, UnsortedInputsError
from .legacy_cpp import LegacyCppGenerator

_ENTRY_POINT_GROUP = "rescom.generators"

GeneratorFactory = Callable[[ByteLoader], CodeGenerator]


class UnknownGeneratorError(GeneratorError):
    """Raised when a generator name has no registered factory."""


class GeneratorRegistry:
    """Maps generator names to factories; one entry may be the default."""

    def __init__(self) -> None:
        self._factories: Dict[str, GeneratorFactory] = {}
        self._default: Optional[str] = None

    def register(self, name: str, factory: GeneratorFactory, *, default: bool = False) -> None:
        key = name.lower()
        self._factories[key] = factory
        if default or self._default is None:
            self._default = key

    def names(self) -> List[str]:
        return sorted(self._factories)

    @property
    def default_name(self) -> Optional[str]:
        return self._default

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._factories

    def create(self, name: str | None = None, *, loader: ByteLoader | None = None) -> CodeGenerator:
        """Instantiate the named generator, or the default one when ``name`` is None."""
        key = name.lower() if name is not None else self._default
        if key is None:
            raise UnknownGeneratorError("no code generator registered")
        factory = self._factories.get(key)
        if factory is None:
            available = ", ".join(self.names()) or "none"
            raise UnknownGeneratorError(f"unknown generator '{name}' (available: {available})")
        instance = factory(loader or LocalFileSystem())
        if not isinstance(instance, CodeGenerator):
            raise TypeError(f"Generator factory for '{key}' did not return a CodeGenerator instance")
        return instance

    def load_entry_points(self, group: str = _ENTRY_POINT_GROUP) -> None:
        """Register third-party generators advertised through package entry points."""
        for entry in _iter_entry_points(group):
            if entry.name.lower() in self._factories:
                continue
            try:
                loaded = entry.load()
            except Exception as exc:
                raise GeneratorError(
                    f"Failed to load generator entry point '{entry.name}': {exc}"
                ) from exc
            if not callable(loaded):
                raise GeneratorError(f"Generator entry point '{entry.name}' is not callable")
            self.register(entry.name, loaded)


def build_default_registry(*, include_plugins: bool = True) -> GeneratorRegistry:
    """Return a registry holding the builtin generators, legacy as default."""
    registry = GeneratorRegistry()
    registry.register(LegacyCppGenerator.name, LegacyCppGenerator, default=True)
    if include_plugins:
        registry.load_entry_points()
    return registry


def _iter_entry_points(group: str) -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=group)


__all__ = [
    "CodeGenerator",
    "GeneratorError",
    "GeneratorRegistry",
    "LegacyCppGenerator",
    "UnknownGeneratorError",
    "UnsortedInputsError",
    "build_default_registry",
]
