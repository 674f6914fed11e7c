# Copyright Red Hat
#
# treecmp/compare/comparer.py - Directory tree comparer
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Top-level tree comparison interface.
"""
from typing import Iterable, List, Optional
import logging
import os
import sys

from treecmp import TREECMP_SUBSYSTEM_COMPARE
from treecmp.progress import TermControl

from .collector import TreeCollector
from .options import CompareOptions
from .patterns import PatternLike, compile_patterns
from .results import DiffResult

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": TREECMP_SUBSYSTEM_COMPARE}, **kwargs)


def _partition(paths_a: List[str], paths_b: List[str]):
    """
    Split two sorted path lists into paths only in ``paths_a``, paths only
    in ``paths_b`` and paths in both. Each bucket keeps the order of the
    list its paths are taken from; ``in_both`` follows ``paths_a``.
    Duplicate entries are kept.
    """
    set_a = set(paths_a)
    set_b = set(paths_b)
    only_a = [path for path in paths_a if path not in set_b]
    only_b = [path for path in paths_b if path not in set_a]
    both = [path for path in paths_a if path in set_b]
    return only_a, only_b, both


class TreeComparer:
    """
    Compare the file paths found below two directory roots.
    """

    def __init__(
        self,
        options: Optional[CompareOptions] = None,
        term_control: Optional[TermControl] = None,
    ):
        """
        Initialise a new ``TreeComparer``.

        :param options: Options to control this ``TreeComparer`` instance.
        :type options: ``Optional[CompareOptions]``
        :param term_control: An optional ``TermControl`` instance for
                             progress output. Defaults to one writing to
                             ``sys.stderr``.
        :type term_control: ``Optional[TermControl]``
        """
        self.options: CompareOptions = options or CompareOptions()
        self._term_control: TermControl = term_control or TermControl(
            term_stream=sys.stderr
        )

    def compare(
        self,
        dir1: str,
        dir2: str,
        ignore_patterns: Optional[Iterable[PatternLike]] = None,
    ) -> DiffResult:
        """
        Compare ``dir1`` with ``dir2`` and return the partitioned paths.

        The ignore patterns are the ones in ``self.options`` followed by
        ``ignore_patterns``. All patterns are compiled before either tree
        is walked.

        :param dir1: The first (left hand) root.
        :type dir1: ``str``
        :param dir2: The second (right hand) root.
        :type dir2: ``str``
        :param ignore_patterns: Additional patterns (strings or compiled
                                regular expressions) to ignore.
        :type ignore_patterns: ``Optional[Iterable[Union[str, re.Pattern]]]``
        :returns: The comparison result.
        :rtype: ``DiffResult``
        :raises TreecmpInvalidPatternError: If an ignore pattern is invalid.
        :raises TreecmpFilesystemError: If either tree cannot be walked.
        """
        patterns = list(self.options.ignore_patterns) + list(ignore_patterns or ())
        matchers = compile_patterns(patterns)

        collector = TreeCollector(
            matchers, quiet=self.options.quiet, term_control=self._term_control
        )
        paths1 = sorted(collector.collect(dir1))
        paths2 = sorted(collector.collect(dir2))

        only_in_first, only_in_second, in_both = _partition(paths1, paths2)

        _log_debug_compare(
            "Compared %s (%d paths) with %s (%d paths): "
            "%d only in first, %d only in second, %d in both",
            dir1,
            len(paths1),
            dir2,
            len(paths2),
            len(only_in_first),
            len(only_in_second),
            len(in_both),
        )

        return DiffResult(
            dir1,
            dir2,
            only_in_first=tuple(os.path.join(dir1, path) for path in only_in_first),
            only_in_second=tuple(
                os.path.join(dir2, path) for path in only_in_second
            ),
            in_both=tuple(os.path.join(dir1, path) for path in in_both),
        )


def compare_directories(
    dir1: str,
    dir2: str,
    ignore_patterns: Iterable[PatternLike] = (),
    quiet: bool = True,
) -> DiffResult:
    """
    Compare the file paths below ``dir1`` and ``dir2``.

    :param dir1: The first (left hand) root.
    :type dir1: ``str``
    :param dir2: The second (right hand) root.
    :type dir2: ``str``
    :param ignore_patterns: Patterns (strings or compiled regular
                            expressions) matched against root-relative paths.
    :type ignore_patterns: ``Iterable[Union[str, re.Pattern]]``
    :param quiet: Suppress progress output.
    :type quiet: ``bool``
    :returns: The comparison result.
    :rtype: ``DiffResult``
    """
    return TreeComparer(CompareOptions(quiet=quiet)).compare(
        dir1, dir2, ignore_patterns
    )
