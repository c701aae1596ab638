"""CLI entry point: ``warnmatch compare``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from warnmatch import __version__
from warnmatch.comparator import VersionInsensitiveComparator
from warnmatch.config import Settings
from warnmatch.errors import ComparisonError
from warnmatch.logging_config import setup_logging
from warnmatch.matching import match_warnings
from warnmatch.models import AnalysisWarning, WarningCollection

logger = logging.getLogger(__name__)


def main() -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.version:
        print(f"warnmatch {__version__}")
        return

    if args.command == "compare":
        _run_compare(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="warnmatch",
        description=(
            "Match static-analysis warnings across "
            "versions of a codebase."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    compare = sub.add_parser(
        "compare",
        help="Match the warnings of two analysis runs",
    )
    compare.add_argument(
        "previous",
        type=str,
        help="JSON warnings from the earlier run",
    )
    compare.add_argument(
        "current",
        type=str,
        help="JSON warnings from the later run",
    )
    compare.add_argument(
        "--renames",
        "-r",
        default=None,
        help="JSON class rename map (old name -> new name)",
    )
    compare.add_argument(
        "--inexact-patterns",
        action="store_true",
        help="Match on pattern abbreviation only",
    )
    compare.add_argument(
        "--compare-priorities",
        action="store_true",
        help="Treat differing priorities as different warnings",
    )
    compare.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {}
    if args.renames:
        overrides["renames_file"] = Path(args.renames)
    if args.inexact_patterns:
        overrides["exact_pattern_match"] = False
    if args.compare_priorities:
        overrides["compare_priorities"] = True
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return Settings(**overrides)


def _load_warnings(path: Path) -> list[AnalysisWarning]:
    return WarningCollection.from_json(
        path.read_text(encoding="utf-8")
    ).warnings


def _run_compare(args: argparse.Namespace) -> None:
    """Execute the compare command."""
    try:
        settings = _settings_from_args(args)
    except ValidationError as e:
        print(f"Error: invalid settings: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level)

    try:
        comparator = VersionInsensitiveComparator.from_settings(settings)
        previous = _load_warnings(Path(args.previous))
        current = _load_warnings(Path(args.current))
        report = match_warnings(previous, current, comparator)
    except (OSError, ValueError) as e:
        # ValidationError and JSONDecodeError are both ValueErrors
        logger.error("Could not read input: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ComparisonError as e:
        logger.error("Comparison failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(report.to_dict(), indent=2))
