#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/cli/__init__.py
"""Command-line interface for doccompare.

Usage::

    doccompare [--log-level LEVEL] [--log-file PATH] [--trace] [--config PATH] COMMAND ...

Commands are ``diff``, ``format``, ``sort`` and ``validate``; run
``doccompare COMMAND --help`` for their options.
"""

from __future__ import annotations

import argparse
import sys

from doccompare import __version__
from doccompare.cli.commands import COMMANDS, dispatch_command
from doccompare.cli.commands.shared import EXIT_FILE_ERROR
from doccompare.config import load_config_with_priority, options_from_config
from doccompare.exceptions import ConfigError
from doccompare.logging_utils import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level parser holding the global options."""
    parser = argparse.ArgumentParser(
        prog="doccompare",
        description="Format, sort, validate and compare XML, JSON and text documents",
    )
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument(
        "--config",
        help="Configuration file (default: DOCCOMPARE_CONFIG, then .doccompare.* or pyproject.toml discovery)",
    )
    parser.add_argument("command", choices=COMMANDS, help="Command to run")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for the command")
    return parser


def main(args: list[str] | None = None) -> int:
    """Execute the doccompare CLI and return its exit status."""
    parser = create_parser()
    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    configure_logging(parsed.log_level, log_file=parsed.log_file, trace_mode=parsed.trace)

    try:
        config = load_config_with_priority(parsed.config)
        format_options, diff_options = options_from_config(config, parsed.config)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return dispatch_command(parsed.command, parsed.args, format_options, diff_options)
