"""Error hierarchy shared by rescom components."""

from __future__ import annotations


class RescomError(RuntimeError):
    """Base class for failures reported to the rescom caller."""


__all__ = ["RescomError"]
