"""Resource compiler: embeds binary files into generated C++ headers."""

__version__ = "1.2.0"

__all__ = ["__version__"]
