#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/cli/commands/__init__.py
"""Command dispatch for the doccompare CLI."""

from __future__ import annotations

import logging

from doccompare.options import DiffOptions, FormatOptions

logger = logging.getLogger(__name__)

COMMANDS = ("diff", "format", "sort", "validate")


def dispatch_command(
    command: str,
    args: list[str],
    format_options: FormatOptions | None = None,
    diff_options: DiffOptions | None = None,
) -> int:
    """Run ``command`` with the arguments that follow it.

    Handlers are imported lazily so ``--help`` does not load the diff stack.

    Raises
    ------
    ValueError
        If ``command`` is not one of :data:`COMMANDS`

    """
    logger.debug(f"Dispatching '{command}' with {args}")
    if command == "diff":
        from doccompare.cli.commands.diff import handle_diff_command

        return handle_diff_command(args, diff_options, format_options)

    if command == "format":
        from doccompare.cli.commands.normalize import handle_format_command

        return handle_format_command(args, format_options)

    if command == "sort":
        from doccompare.cli.commands.normalize import handle_sort_command

        return handle_sort_command(args, format_options)

    if command == "validate":
        from doccompare.cli.commands.validate import handle_validate_command

        return handle_validate_command(args)

    raise ValueError(f"Unknown command: {command}")
