# Copyright Red Hat
#
# treecmp/_treecmp.py - Directory tree comparison global definitions
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Global definitions for the top-level treecmp package.
"""
from typing import Optional, TextIO, TYPE_CHECKING
import logging
import weakref
import sys

if TYPE_CHECKING:
    from .progress import WalkProgress

_log = logging.getLogger("treecmp")

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

# Treecmp debugging subsystem mask
TREECMP_DEBUG_COLLECT = 1
TREECMP_DEBUG_COMPARE = 2
TREECMP_DEBUG_CONFIG = 4
TREECMP_DEBUG_COMMAND = 8
TREECMP_DEBUG_ALL = (
    TREECMP_DEBUG_COLLECT
    | TREECMP_DEBUG_COMPARE
    | TREECMP_DEBUG_CONFIG
    | TREECMP_DEBUG_COMMAND
)

# Treecmp debugging subsystem names
TREECMP_SUBSYSTEM_COLLECT = "treecmp.collect"
TREECMP_SUBSYSTEM_COMPARE = "treecmp.compare"
TREECMP_SUBSYSTEM_CONFIG = "treecmp.config"
TREECMP_SUBSYSTEM_COMMAND = "treecmp.command"

_DEBUG_MASK_TO_SUBSYSTEM = {
    TREECMP_DEBUG_COLLECT: TREECMP_SUBSYSTEM_COLLECT,
    TREECMP_DEBUG_COMPARE: TREECMP_SUBSYSTEM_COMPARE,
    TREECMP_DEBUG_CONFIG: TREECMP_SUBSYSTEM_CONFIG,
    TREECMP_DEBUG_COMMAND: TREECMP_SUBSYSTEM_COMMAND,
}

_debug_subsystems = set()

# Progress lines currently drawing on a terminal stream. A WeakSet so that
# one dropped without end() does not stay registered.
_active_progress: weakref.WeakSet = weakref.WeakSet()

#: Name of the per-directory configuration file.
TREECMP_CONFIG_FILE = ".treecmprc.json"


class SubsystemFilter(logging.Filter):
    """
    Filters DEBUG records based on a set of enabled subsystem names.
    Non-DEBUG records or DEBUG records without a 'subsystem' attribute
    are always passed through.
    """

    def __init__(self, name=""):
        super().__init__(name)
        self.enabled_subsystems = set(_debug_subsystems)

    def filter(self, record):
        if record.levelno != logging.DEBUG:
            return True

        if not hasattr(record, "subsystem"):
            return True

        return record.subsystem in self.enabled_subsystems

    def set_debug_subsystems(self, subsystems):
        """Sets the collection of subsystems to allow."""
        self.enabled_subsystems = set(subsystems)


def get_debug_mask():
    """
    Return the current debug mask for the ``treecmp`` package.

    :returns: The current debug mask value
    :rtype: int
    """
    enabled_subsystems = set(_debug_subsystems)
    treecmp_log = logging.getLogger("treecmp")

    for handler in treecmp_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                enabled_subsystems.update(f.enabled_subsystems)

    mask_map = {v: k for k, v in _DEBUG_MASK_TO_SUBSYSTEM.items()}
    mask = 0
    for subsystem_name in enabled_subsystems:
        mask |= mask_map.get(subsystem_name, 0)
    return mask


def set_debug_mask(mask):
    """
    Set the debug mask for the ``treecmp`` package.

    :param mask: the logical OR of the ``TREECMP_DEBUG_*``
                 values to log.
    :rtype: None
    """
    # pylint: disable=global-statement
    global _debug_subsystems

    if mask < 0 or mask > TREECMP_DEBUG_ALL:
        raise ValueError(f"Invalid treecmp debug mask: {mask}")

    enabled_subsystems = [
        subsystem_name
        for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items()
        if mask & flag
    ]

    treecmp_log = logging.getLogger("treecmp")
    for handler in treecmp_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                f.set_debug_subsystems(enabled_subsystems)

    _debug_subsystems = set(enabled_subsystems)


def register_progress(progress: "WalkProgress"):
    """Register a progress line for log coordination."""
    _active_progress.add(progress)
    progress.registered = True


def unregister_progress(progress: "WalkProgress"):
    """Unregister a progress line."""
    _active_progress.discard(progress)
    progress.registered = False


def notify_log_output(stream: TextIO):
    """
    Tell active progress lines that a log record was written to ``stream`` so
    that the next redraw starts on a fresh line.

    :param stream: The stream that received output.
    :type stream: ``TextIO``
    """
    if stream not in (sys.stdout, sys.stderr):
        return
    for progress in list(_active_progress):
        if hasattr(progress, "reset_position"):
            progress.reset_position()


class ProgressAwareHandler(logging.StreamHandler):
    """
    A logging handler that coordinates with active progress lines.

    Log records are written on a line of their own and any progress line sharing
    the stream is told to redraw below them.
    """

    def __init__(self, stream: Optional[TextIO] = None, **kwargs):
        super().__init__(stream=stream or sys.stderr, **kwargs)

    def emit(self, record):
        try:
            msg = self.format(record)
            self.stream.write(msg + "\n")
            self.stream.flush()
            notify_log_output(self.stream)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handleError(record)


#
# Treecmp exception types
#


class TreecmpError(Exception):
    """
    Base class for tree comparison errors.
    """


class TreecmpInvalidPatternError(TreecmpError):
    """
    An ignore pattern is not a valid regular expression.
    """


class TreecmpFilesystemError(TreecmpError):
    """
    A directory could not be listed or a path could not be examined while
    walking a tree.
    """


class TreecmpConfigError(TreecmpError):
    """
    The configuration file is missing, unreadable or malformed.
    """


class TreecmpArgumentError(TreecmpError):
    """
    An invalid argument was supplied to a treecmp command.
    """


__all__ = [
    "TREECMP_DEBUG_COLLECT",
    "TREECMP_DEBUG_COMPARE",
    "TREECMP_DEBUG_CONFIG",
    "TREECMP_DEBUG_COMMAND",
    "TREECMP_DEBUG_ALL",
    "TREECMP_SUBSYSTEM_COLLECT",
    "TREECMP_SUBSYSTEM_COMPARE",
    "TREECMP_SUBSYSTEM_CONFIG",
    "TREECMP_SUBSYSTEM_COMMAND",
    "TREECMP_CONFIG_FILE",
    "SubsystemFilter",
    "get_debug_mask",
    "set_debug_mask",
    "register_progress",
    "unregister_progress",
    "notify_log_output",
    "ProgressAwareHandler",
    "TreecmpError",
    "TreecmpInvalidPatternError",
    "TreecmpFilesystemError",
    "TreecmpConfigError",
    "TreecmpArgumentError",
]
