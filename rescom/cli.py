"""CLI entrypoint for the rescom resource compiler."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .compiler import ResourceCompiler
from .errors import RescomError
from .logging import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rescom",
        description="Resources compiler: embed files into a generated C++ header.",
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Path to the resource manifest (YAML).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Header file to write (defaults to standard output).",
    )
    parser.add_argument(
        "-G",
        "--generator",
        default=None,
        help="Code generator to use (defaults to the registered default).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also append log records to this file.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"rescom version {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for rescom."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None

    try:
        configure_logging(verbose=bool(args.verbose), log_file=log_file)
        compiler = ResourceCompiler()
        compiler.run(args.input, output=args.output, generator=args.generator)
    except RescomError as exc:
        parser.exit(1, f"rescom error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
