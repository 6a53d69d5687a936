# Copyright 2026 icecake0141
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# This file was created or modified with the assistance of an AI (Large Language Model).
# Review required for correctness, security, and licensing.

"""
Settings file for the rawline command.

``~/.rawline.conf`` holds defaults for the reader and for logging, either as
an INI ``[default]`` section or as a YAML ``default:`` mapping. Values given
on the command line win over the file.
"""

import configparser
import logging
import os
from typing import Any, Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.expanduser("~/.rawline.conf")
SECTION = "default"

_FIELDS: Dict[str, type] = {
    "read_timeout": float,
    "history_size": int,
    "encoding": str,
    "log_level": str,
    "log_file": str,
    "trace_file": str,
}


def _settings(items: Iterable[Tuple[str, Any]], path: str) -> Dict[str, Any]:
    """Check each key against the known fields and convert its value."""
    settings: Dict[str, Any] = {}
    for key, raw in items:
        kind = _FIELDS.get(key)
        if kind is None:
            logger.warning("Unknown config key '%s' in '%s'; ignoring.", key, path)
            continue
        try:
            value = kind(raw)
        except (ValueError, TypeError) as exc:
            raise ValueError(f"Config field '{key}' in '{path}' must be {kind.__name__}, got {raw!r}") from exc
        if kind is not str and value < 0:
            raise ValueError(f"Config field '{key}' in '{path}' must be non-negative, got {raw!r}")
        settings[key] = value
    return settings


def load_ini_config(path: str) -> Dict[str, Any]:
    """
    Read settings from the ``[default]`` section of an INI file.

    Raises:
        ValueError: If the file cannot be read or parsed, or a value is invalid.
    """
    parser = configparser.ConfigParser()
    try:
        if not parser.read(path, encoding="utf-8"):
            raise ValueError(f"Config file '{path}' could not be read.")
    except configparser.Error as exc:
        raise ValueError(f"Invalid config file '{path}': {exc}") from exc
    if not parser.has_section(SECTION):
        return {}
    return _settings(parser.items(SECTION), path)


def load_yaml_config(path: str) -> Dict[str, Any]:
    """
    Read settings from the ``default:`` mapping of a YAML file.

    Raises:
        ValueError: If the file cannot be read or parsed, or a value is invalid.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in config file '{path}': {exc}") from exc
    except OSError as exc:
        raise ValueError(f"Cannot read config file '{path}': {exc}") from exc

    if data is None:
        return {}
    section = data.get(SECTION) if isinstance(data, dict) else None
    if not isinstance(data, dict) or not isinstance(section or {}, dict):
        raise ValueError(f"Config file '{path}' must map '{SECTION}' to a mapping of settings.")
    return _settings((section or {}).items(), path)


def _is_yaml_file(path: str) -> bool:
    """INI files open with a ``[section]`` line; anything else is YAML."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                stripped = line.strip()
                if stripped and not stripped.startswith("#"):
                    return not stripped.startswith("[")
    except OSError:
        pass
    return False


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from ``path`` (``~/.rawline.conf`` by default).

    A missing file yields no settings.
    """
    path = path or DEFAULT_CONFIG_PATH
    if not os.path.exists(path):
        return {}
    loader = load_yaml_config if _is_yaml_file(path) else load_ini_config
    logger.debug("Loading config from '%s' with %s.", path, loader.__name__)
    return loader(path)
