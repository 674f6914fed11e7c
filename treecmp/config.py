# Copyright Red Hat
#
# treecmp/config.py - Directory tree comparison configuration
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Configuration file support.

The configuration file is a JSON object read from ``.treecmprc.json`` in
the current working directory::

    {
        "ignorePaths": ["^\\.git/", "node_modules", "\\.pyc$"]
    }

A missing or malformed file never fails a comparison: ``load_config()``
logs the problem and returns an empty configuration.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
import logging
import json
import os

from treecmp import TREECMP_CONFIG_FILE, TREECMP_SUBSYSTEM_CONFIG, TreecmpConfigError

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_config(msg, *args, **kwargs):
    """A wrapper for config subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": TREECMP_SUBSYSTEM_CONFIG}, **kwargs)


#: Configuration key holding the list of ignore patterns.
CONFIG_IGNORE_PATHS = "ignorePaths"


@dataclass(frozen=True)
class TreecmpConfig:
    """
    Settings read from the configuration file.
    """

    #: Regular expressions matched against root-relative paths
    ignore_paths: Tuple[str, ...] = field(default_factory=tuple)


def _read_config(path: str) -> Dict[str, Any]:
    """
    Read and parse the JSON configuration file at ``path``.

    :param path: The configuration file path.
    :type path: ``str``
    :returns: The decoded JSON value.
    :raises TreecmpConfigError: If the file cannot be read or is not valid
                                JSON.
    """
    try:
        with open(path, "r", encoding="utf8") as fp:
            return json.load(fp)
    except OSError as err:
        raise TreecmpConfigError(
            f"Error reading config from {path}: {err.strerror or err}"
        ) from err
    except ValueError as err:
        raise TreecmpConfigError(f"Error loading config from {path}: {err}") from err


def _parse_config(value: Any, path: str) -> TreecmpConfig:
    """
    Validate decoded configuration ``value`` and build a ``TreecmpConfig``.

    :raises TreecmpConfigError: If ``value`` does not have the expected
                                shape.
    """
    if not isinstance(value, dict):
        raise TreecmpConfigError(f"Invalid config format in {path}: not an object")
    ignore_paths = value.get(CONFIG_IGNORE_PATHS)
    if not isinstance(ignore_paths, list):
        raise TreecmpConfigError(
            f"Invalid config format in {path}: '{CONFIG_IGNORE_PATHS}' "
            "must be a list"
        )
    if not all(isinstance(pattern, str) for pattern in ignore_paths):
        raise TreecmpConfigError(
            f"Invalid config format in {path}: '{CONFIG_IGNORE_PATHS}' "
            "must only contain strings"
        )
    return TreecmpConfig(ignore_paths=tuple(ignore_paths))


def load_config(path: Optional[str] = None) -> TreecmpConfig:
    """
    Load the treecmp configuration.

    :param path: An optional path to the configuration file. Defaults to
                 ``.treecmprc.json`` in the current working directory.
    :type path: ``Optional[str]``
    :returns: The loaded configuration, or an empty configuration if the
              file is missing or invalid.
    :rtype: ``TreecmpConfig``
    """
    path = path or os.path.join(os.getcwd(), TREECMP_CONFIG_FILE)

    if not os.path.exists(path):
        _log_warn("%s not found, using empty ignore list.", path)
        return TreecmpConfig()

    try:
        value = _read_config(path)
    except TreecmpConfigError as err:
        _log_error("%s, using empty ignore list.", err)
        return TreecmpConfig()

    try:
        config = _parse_config(value, path)
    except TreecmpConfigError as err:
        _log_warn("%s, using empty ignore list.", err)
        return TreecmpConfig()

    _log_debug_config(
        "Loaded %d ignore patterns from %s", len(config.ignore_paths), path
    )
    return config
