#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/logging_utils.py
"""Centralized logging setup for doccompare entry points."""

from __future__ import annotations

import logging
import sys
from typing import Optional


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optionally file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"DEBUG"``. Unknown
        names fall back to ``WARNING``.
    log_file : str, optional
        Also append log records to this file.
    trace_mode : bool, default False
        Include timestamps and logger names, and force ``DEBUG``.

    Returns
    -------
    logging.Logger
        The configured root logger.

    """
    if trace_mode:
        resolved_level = logging.DEBUG
    elif isinstance(log_level, int):
        resolved_level = log_level
    else:
        resolved_level = getattr(logging, str(log_level).upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.debug("Logging to file: %s", log_file)

    return root_logger
