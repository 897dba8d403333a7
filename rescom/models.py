"""Core data models shared across rescom components."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Input:
    """A named resource file listed in a manifest."""

    key: str
    path: Path
    size: int

    @property
    def sort_key(self) -> bytes:
        """Byte-wise ordinal ordering used by the generated lookup."""
        return self.key.encode("utf-8")


@dataclass
class Configuration:
    """Everything a code generator needs for one run."""

    inputs: List[Input]
    identity: str
    tabulation_size: int = 4
    compile_time: bool = True
    source: Optional[Path] = None
