"""Command line validation of team files against the bundled format table."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from core.errors import ConfigurationError
from core.logging_config import setup_logging
from dex.lookup import Dex

from .catalog import DEFAULT_FORMATS_PATH, FormatCatalog
from .team import team_from_payload

LOGGER = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate a team against a battle format")
    parser.add_argument(
        "team",
        nargs="?",
        help="Path to a JSON team (a list of sets or an object with a 'team' key)",
    )
    parser.add_argument(
        "--format",
        dest="format_id",
        default="ou",
        help="Format to validate against (default: ou)",
    )
    parser.add_argument(
        "--formats",
        default=os.environ.get("FORMATS_PATH", str(DEFAULT_FORMATS_PATH)),
        help="Format table JSON. Defaults to FORMATS_PATH or the bundled table.",
    )
    parser.add_argument(
        "--dex",
        default=os.environ.get("DEX_PATH"),
        help="Dex JSON with species, moves, items, abilities and types. Defaults to DEX_PATH.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the selectable formats and exit",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return parser


def _describe(exc: Exception) -> str:
    if isinstance(exc, ConfigurationError):
        return exc.describe()
    return str(exc)


def run_from_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    if not args.list and not args.team:
        parser.error("A team file is required unless --list is given.")
    if not args.dex:
        parser.error("A dex file must be provided via --dex or the DEX_PATH environment variable.")

    setup_logging(args.log_level)

    try:
        dex = Dex.load_from_json(args.dex)
        catalog = FormatCatalog.from_json(args.formats, dex)
    except (OSError, ValueError, ConfigurationError) as exc:
        LOGGER.error("Could not load configuration: %s", _describe(exc))
        return 2

    if args.list:
        for fmt in catalog.list_formats():
            print(f"{fmt.id}\t{fmt.name}")
        return 0

    try:
        payload = json.loads(Path(args.team).read_text(encoding="utf-8"))
        problems = catalog.validate_team(team_from_payload(payload), args.format_id)
    except (OSError, ValueError, ConfigurationError) as exc:
        LOGGER.error("Could not validate %s: %s", args.team, _describe(exc))
        return 2

    if not problems:
        print(f"Team is valid for {args.format_id}.")
        return 0
    for problem in problems:
        print(problem)
    return 1


__all__ = ["build_argument_parser", "run_from_cli"]
