"""C++17 header generator embedding resources behind a sorted lookup index.

The emitted header defines, inside ``namespace rescom::<identity>``:

* ``struct Resource {key, bytes, size}``;
* one ``char const R<i>[]`` per input and a ``ResourcesIndex`` sorted by key;
* ``getResource``, ``contains``, ``getText``, ``begin`` and ``end``.

Lookups are a lower-bound binary search over the index, so inputs must be
sorted by the UTF-8 bytes of their keys before generation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..filesystem import ByteLoader, LocalFileSystem
from ..logging import get_logger
from ..models import Configuration, Input
from .base import CodeGenerator, UnsortedInputsError
from .formatting import (
    array_name,
    byte_lines,
    guard_name,
    namespace_name,
    reindent,
    string_literal,
)

HEADER_GUARD_PREFIX = "RESCOM_GENERATED_FILE_"
_TEMPLATE_DIR = Path(__file__).with_name("templates") / "legacy_cpp"


class LegacyCppGenerator(CodeGenerator):
    """Writes header, resource data, lookup functions and footer in that order."""

    name = "legacy"

    def __init__(self, loader: ByteLoader | None = None) -> None:
        self._loader = loader or LocalFileSystem()
        self._env = _create_env()
        self.logger = get_logger("generators.legacy")

    def write(self, configuration: Configuration, output: TextIO) -> None:
        _ensure_sorted(configuration.inputs)
        names = self._names(configuration)

        self.logger.debug(
            "Generating %s with %d resources", names["guard"], len(configuration.inputs)
        )
        self._emit(output, configuration, "header.j2", **names)
        self._write_resources(configuration, output)
        self._write_lookup(configuration, output)
        self._emit(output, configuration, "footer.j2", **names)

    def _write_resources(self, configuration: Configuration, output: TextIO) -> None:
        inputs = configuration.inputs
        if not inputs:
            return

        storage = "inline constexpr" if configuration.compile_time else "inline"
        self._emit(
            output, configuration, "resources_begin.j2", storage=storage, count=len(inputs)
        )

        entries: List[str] = []
        for position, item in enumerate(inputs):
            # Only the current resource is held in memory.
            data = self._loader.read_bytes(item.path)
            if len(data) != item.size:
                self.logger.warning(
                    "Resource '%s' is %d bytes, manifest recorded %d",
                    item.key,
                    len(data),
                    item.size,
                )
            name = array_name(position)
            self.logger.debug("Embedding '%s' as %s (%d bytes)", item.key, name, len(data))
            self._emit(
                output,
                configuration,
                "resource.j2",
                storage=storage,
                name=name,
                lines=list(byte_lines(data)),
            )
            entries.append(f"{{{string_literal(item.key)}, {len(data)}, {name}}}")

        self._emit(
            output,
            configuration,
            "resources_end.j2",
            compile_time=configuration.compile_time,
            entries=entries,
        )

    def _write_lookup(self, configuration: Configuration, output: TextIO) -> None:
        if configuration.compile_time:
            context: Dict[str, object] = {
                "cx": "constexpr ",
                "less": "std::string_view(slot.key) < key",
                "differs": "std::string_view(it->key) != key",
                "first": "std::begin(details::ResourcesIndex)",
                "last": "std::end(details::ResourcesIndex)",
                "sentinel": "details::NullResource",
            }
        else:
            context = {
                "cx": "",
                "less": "std::strcmp(slot.key, key) < 0",
                "differs": "std::strcmp(it->key, key) != 0",
                "first": "details::resourcesIndex()",
                "last": "details::resourcesIndex() + details::ResourcesCount",
                "sentinel": "details::nullResource()",
            }
        self._emit(
            output,
            configuration,
            "lookup.j2",
            has_resources=bool(configuration.inputs),
            compile_time=configuration.compile_time,
            **context,
        )

    def _emit(
        self, output: TextIO, configuration: Configuration, template_name: str, **context: object
    ) -> None:
        text = self._env.get_template(template_name).render(**context)
        output.write(reindent(text, configuration.tabulation_size))

    @staticmethod
    def _names(configuration: Configuration) -> Dict[str, str]:
        return {
            "guard": guard_name(configuration.identity, HEADER_GUARD_PREFIX),
            "namespace": namespace_name(configuration.identity),
        }


def _ensure_sorted(inputs: Sequence[Input]) -> None:
    for previous, current in zip(inputs, inputs[1:]):
        if current.sort_key < previous.sort_key:
            raise UnsortedInputsError(
                f"resource keys must be sorted: '{current.key}' comes after '{previous.key}'"
            )


def _create_env() -> Environment:
    loader = FileSystemLoader(str(_TEMPLATE_DIR))
    return Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


__all__ = ["HEADER_GUARD_PREFIX", "LegacyCppGenerator"]
