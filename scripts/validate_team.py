"""Command line entry point for validating a team file."""

import sys

from rules.cli import run_from_cli


if __name__ == "__main__":
    sys.exit(run_from_cli())
