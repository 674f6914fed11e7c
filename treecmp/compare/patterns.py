# Copyright Red Hat
#
# treecmp/compare/patterns.py - Directory tree comparison ignore patterns
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Ignore pattern compilation.
"""
from typing import Iterable, List, Union
import logging
import re

from treecmp import TREECMP_SUBSYSTEM_COMPARE, TreecmpInvalidPatternError

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": TREECMP_SUBSYSTEM_COMPARE}, **kwargs)


#: An ignore pattern as accepted by ``compile_patterns()``.
PatternLike = Union[str, re.Pattern]


def compile_patterns(patterns: Iterable[PatternLike]) -> List[re.Pattern]:
    """
    Compile a sequence of ignore patterns into regular expression matchers.

    String patterns are compiled with ``re.compile()``. Pre-compiled
    ``re.Pattern`` objects are passed through unchanged. Matchers are applied
    with ``search()``, so a pattern matches anywhere in a root-relative path
    unless it is anchored with ``^`` or ``$``.

    :param patterns: The ignore patterns to compile.
    :type patterns: ``Iterable[Union[str, re.Pattern]]``
    :returns: A list of compiled matchers in the order given.
    :rtype: ``List[re.Pattern]``
    :raises TreecmpInvalidPatternError: If a string pattern is not a valid
                                        regular expression.
    :raises TypeError: If a pattern is neither a string nor a compiled
                       regular expression.
    """
    matchers = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            matchers.append(pattern)
            continue
        if not isinstance(pattern, str):
            raise TypeError(
                f"Ignore pattern must be str or re.Pattern, not "
                f"{type(pattern).__name__}"
            )
        try:
            matchers.append(re.compile(pattern))
        except re.error as err:
            raise TreecmpInvalidPatternError(
                f"Invalid ignore pattern '{pattern}': {err}"
            ) from err

    _log_debug_compare(
        "Compiled %d ignore patterns: %s",
        len(matchers),
        ", ".join(str(m.pattern) for m in matchers),
    )
    return matchers


def is_ignored(rel_path: str, matchers: Iterable[re.Pattern]) -> bool:
    """
    Return ``True`` if any matcher in ``matchers`` matches ``rel_path``.

    :param rel_path: A root-relative path.
    :type rel_path: ``str``
    :param matchers: Compiled ignore patterns.
    :type matchers: ``Iterable[re.Pattern]``
    :rtype: ``bool``
    """
    return any(matcher.search(rel_path) for matcher in matchers)
