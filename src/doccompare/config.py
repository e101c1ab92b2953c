#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/config.py
"""Configuration file discovery and loading.

Configuration files hold two optional tables, ``format`` and ``diff``,
whose keys are the fields of :class:`~doccompare.options.FormatOptions` and
:class:`~doccompare.options.DiffOptions`::

    [format]
    normalize_whitespace = true

    [diff]
    granularity = "words"
    ignore_comments = true

The same tables may live under ``[tool.doccompare]`` in ``pyproject.toml``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from doccompare.constants import CONFIG_DIRECTORY_FILENAMES, PYPROJECT_TOOL_SECTION
from doccompare.exceptions import ConfigError
from doccompare.options import DiffOptions, FormatOptions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOCCOMPARE_CONFIG"

_SECTIONS = {"format": FormatOptions, "diff": DiffOptions}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.doccompare]`` table of a pyproject.toml, or ``{}``.

    Raises
    ------
    ConfigError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or one of its parents.

    Each directory is checked for ``.doccompare.toml``, ``.doccompare.yaml``,
    ``.doccompare.yml`` and ``.doccompare.json`` in that order, then for a
    ``pyproject.toml`` with a ``[tool.doccompare]`` table. Unreadable
    pyproject files are skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_DIRECTORY_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                logger.debug(f"Skipping {pyproject_path}: {e.message}")

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(start_dir: Optional[Path] = None, home_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The directory tree is searched upwards from ``start_dir`` first (see
    :func:`find_config_in_parents`), then the user's home directory is
    checked for the dedicated file names.

    Returns
    -------
    Path or None
        Path to the discovered file, or None if there is none

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = home_dir or Path.home()
    for filename in CONFIG_DIRECTORY_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration file, choosing the reader by file name.

    Parameters
    ----------
    config_path : Path or str
        ``.toml``, ``.yaml``/``.yml`` or ``.json`` file; for
        ``pyproject.toml`` only the ``[tool.doccompare]`` table is read

    Returns
    -------
    dict
        Raw configuration mapping

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed or not a mapping

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))

    ext = config_path.suffix.lower()
    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path)
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}", str(config_path)
        )
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def load_config_with_priority(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from the highest-priority source available.

    Priority order:

    1. ``explicit_path`` (the ``--config`` flag)
    2. the ``DOCCOMPARE_CONFIG`` environment variable
    3. :func:`discover_config_file`

    Returns
    -------
    dict
        Raw configuration mapping, ``{}`` when no file exists

    """
    if explicit_path:
        return load_config_file(explicit_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config_file(env_path)

    discovered = discover_config_file()
    if discovered:
        return load_config_file(discovered)
    return {}


def options_from_config(
    config: Dict[str, Any], config_path: Optional[str] = None
) -> tuple[FormatOptions, DiffOptions]:
    """Build option objects from a raw configuration mapping.

    Parameters
    ----------
    config : dict
        Mapping with optional ``format`` and ``diff`` tables
    config_path : str, optional
        Source of the mapping, used in error messages

    Returns
    -------
    tuple of (FormatOptions, DiffOptions)
        Options with defaults for every key not given

    Raises
    ------
    ConfigError
        On unknown sections or keys, non-table sections or invalid values

    """
    unknown_sections = sorted(set(config) - set(_SECTIONS))
    if unknown_sections:
        raise ConfigError(f"Unknown configuration section(s): {', '.join(unknown_sections)}", config_path)

    built: dict[str, Any] = {}
    for section, options_class in _SECTIONS.items():
        values = config.get(section, {})
        if not isinstance(values, dict):
            raise ConfigError(f"[{section}] must be a table, got {type(values).__name__}", config_path)

        unknown_keys = sorted(set(values) - set(options_class.field_names()))
        if unknown_keys:
            raise ConfigError(f"Unknown key(s) in [{section}]: {', '.join(unknown_keys)}", config_path)

        for key, value in values.items():
            if key != "granularity" and not isinstance(value, bool):
                raise ConfigError(f"[{section}] {key} must be a boolean, got {value!r}", config_path)

        try:
            built[section] = options_class(**values)
        except ValueError as e:
            raise ConfigError(f"Invalid value in [{section}]: {e}", config_path, e) from e

    return built["format"], built["diff"]
