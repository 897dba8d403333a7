"""Manifest loading for rescom (YAML resource lists)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple

import yaml

from .errors import RescomError
from .filesystem import LocalFileSystem
from .models import Configuration, Input

DEFAULT_TABULATION_SIZE = 4


class ConfigError(RescomError):
    """Raised when the manifest cannot be parsed or describes invalid inputs."""


class _SizedFileSystem(Protocol):
    def file_size(self, path: Path) -> int:
        ...


def load_configuration(
    manifest_path: Path | str, file_system: _SizedFileSystem | None = None
) -> Configuration:
    """Load a manifest from disk and return inputs sorted by key."""
    manifest = Path(manifest_path).expanduser()
    file_system = file_system or LocalFileSystem()
    root = manifest.parent

    data = _read_manifest(manifest)
    if not isinstance(data, dict):
        raise ConfigError(f"{manifest.name} must contain a mapping at the root")

    tabulation = _as_int(data.get("tabulation", DEFAULT_TABULATION_SIZE))
    if tabulation is None or tabulation < 0:
        raise ConfigError("'tabulation' must be a non-negative integer")

    compile_time = _as_bool(data.get("compile_time", True))
    if compile_time is None:
        raise ConfigError("'compile_time' must be a boolean")

    identity = _as_str(data.get("identity")) or manifest.stem
    if not identity.strip():
        raise ConfigError("'identity' must not be empty")

    inputs: List[Input] = []
    seen: Dict[str, Path] = {}
    for key, relative in _resource_entries(data.get("resources")):
        if key in seen:
            raise ConfigError(f"duplicate resource key '{key}'")
        path = root / relative
        size = file_system.file_size(path)
        seen[key] = path
        inputs.append(Input(key=key, path=path, size=size))

    inputs.sort(key=lambda item: item.sort_key)

    return Configuration(
        inputs=inputs,
        identity=identity,
        tabulation_size=tabulation,
        compile_time=compile_time,
        source=manifest,
    )


def _read_manifest(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"unable to read '{path.as_posix()}': {exc.strerror}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _resource_entries(value: Any) -> List[Tuple[str, str]]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [_entry(key, path) for key, path in value.items()]
    if not isinstance(value, list):
        raise ConfigError("'resources' must be a list or a mapping")

    entries: List[Tuple[str, str]] = []
    for item in value:
        if isinstance(item, str):
            entries.append(_entry(item, item))
        elif isinstance(item, dict):
            path = item.get("path")
            key = item.get("key", path)
            entries.append(_entry(key, path))
        else:
            raise ConfigError(f"unsupported resource entry: {item!r}")
    return entries


def _entry(key: Any, path: Any) -> Tuple[str, str]:
    key_str = _as_str(key)
    path_str = _as_str(path)
    if not key_str:
        raise ConfigError("resource keys must be non-empty strings")
    if "\x00" in key_str:
        raise ConfigError(f"resource key {key_str!r} must not contain NUL characters")
    if not path_str:
        raise ConfigError(f"resource '{key_str}' has no path")
    return key_str, path_str


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["ConfigError", "DEFAULT_TABULATION_SIZE", "load_configuration"]
