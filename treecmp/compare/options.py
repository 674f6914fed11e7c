# Copyright Red Hat
#
# treecmp/compare/options.py - Directory tree comparison options
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Tree comparison options.
"""
from dataclasses import dataclass, field, fields
from typing import Tuple, Union
from argparse import Namespace
import logging

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


@dataclass(frozen=True)
class CompareOptions:
    """
    Directory tree comparison options.
    """

    #: Root-relative path patterns to ignore (regular expressions)
    ignore_patterns: Tuple[str, ...] = field(default_factory=tuple)
    #: Do not output progress or status updates
    quiet: bool = False

    def __str__(self):
        """
        Return a human readable string representation of this
        ``CompareOptions`` instance.

        :returns: A human readable string.
        :rtype: ``str``
        """
        items = [
            (key, " ".join(val) if isinstance(val, tuple) else val)
            for key, val in self.__dict__.items()
        ]
        return "\n".join(f"{key}={val}" for key, val in items)

    @classmethod
    def from_cmd_args(cls, cmd_args: Namespace) -> "CompareOptions":
        """
        Construct a new ``CompareOptions`` object from the command line
        arguments in ``cmd_args``. Attributes of ``cmd_args`` that are not
        option fields are ignored.

        :param cmd_args: The command line arguments.
        :type cmd_args: ``Namespace``
        :returns: A new ``CompareOptions`` instance
        :rtype: ``CompareOptions``
        """

        def get_value(name: str) -> Union[bool, Tuple[str, ...]]:
            attr = getattr(cmd_args, name)
            if isinstance(attr, list):
                return tuple(attr)
            if attr is None and name == "ignore_patterns":
                return ()
            return attr

        field_names = {f.name for f in fields(cls)}
        kwargs = {
            name: get_value(name) for name in field_names if hasattr(cmd_args, name)
        }
        options = cls(**kwargs)
        _log_debug("Initialised CompareOptions from arguments: %s", repr(options))
        return options
