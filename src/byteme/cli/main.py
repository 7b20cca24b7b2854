"""Main CLI entry point for byteme."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file
from ..exceptions import ByteMeError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the byteme CLI.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="byteme: fixed-size big-endian struct codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  byteme --analyze frames.py            Show the wire layout of every struct
  byteme --version                      Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze struct definitions and show their byte layout",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log schema compilation details",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"byteme {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except ByteMeError as e:
            print(f"Error: invalid struct: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
