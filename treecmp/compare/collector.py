# Copyright Red Hat
#
# treecmp/compare/collector.py - Directory tree comparison path collector
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Tree walking support for treecmp.
"""
from typing import Iterable, List, Optional
import logging
import os
import re

from treecmp import TREECMP_SUBSYSTEM_COLLECT, TreecmpFilesystemError
from treecmp.progress import TermControl, WalkProgress

from .patterns import is_ignored

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_collect(msg, *args, **kwargs):
    """A wrapper for collect subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": TREECMP_SUBSYSTEM_COLLECT}, **kwargs)


def _os_error_str(err: OSError) -> str:
    return err.strerror or str(err)


class TreeCollector:
    """
    Recursive collector of the file paths below a root directory.

    Directories are descended but never reported. Symbolic links are never
    followed: a link is reported as a leaf path whatever its target. Any
    entry whose root-relative path matches an ignore matcher is skipped, and
    a matching directory is not listed at all.
    """

    def __init__(
        self,
        matchers: Iterable[re.Pattern],
        quiet: bool = False,
        term_control: Optional[TermControl] = None,
    ):
        """
        Initialise a new ``TreeCollector`` object.

        :param matchers: Compiled ignore patterns.
        :type matchers: ``Iterable[re.Pattern]``
        :param quiet: Suppress progress output.
        :type quiet: ``bool``
        :param term_control: Optional pre-initialised terminal control object.
        :type term_control: ``Optional[TermControl]``
        """
        self.matchers: List[re.Pattern] = list(matchers)
        self.quiet: bool = quiet
        self.term_control: Optional[TermControl] = term_control
        #: Number of entries skipped by the last ``collect()`` call.
        self.excluded: int = 0
        #: The directory being listed by the walk in progress.
        self._current: Optional[str] = None

    def collect(self, root: str, current: Optional[str] = None) -> List[str]:
        """
        Collect the root-relative paths of all files below ``current``.

        :param root: The tree root that returned paths are relative to.
        :type root: ``str``
        :param current: The directory to start listing from. Defaults to
                        ``root``.
        :type current: ``Optional[str]``
        :returns: Root-relative file paths in traversal order.
        :rtype: ``List[str]``
        :raises TreecmpFilesystemError: If a directory cannot be listed, an
                                        entry cannot be examined or the tree
                                        is nested too deeply to walk.
        """
        current = root if current is None else current
        self.excluded = 0

        _log_info("Gathering paths from %s", current)

        progress = WalkProgress(
            f"Gathering paths from {current}",
            quiet=self.quiet,
            term_control=self.term_control,
        )
        progress.start()
        try:
            paths = self._collect(root, current, progress)
        except (KeyboardInterrupt, SystemExit):
            progress.end("Quit!")
            raise
        except TreecmpFilesystemError:
            progress.end("failed")
            raise
        except RecursionError as err:
            progress.end("failed")
            raise TreecmpFilesystemError(
                f"Directory tree too deep at '{self._current}'"
            ) from err

        progress.end(f"found {len(paths)} paths (excluded {self.excluded})")
        _log_debug_collect(
            "Collected %d paths from %s (excluded %d)",
            len(paths),
            current,
            self.excluded,
        )
        return paths

    def _list_dir(self, path: str) -> List[os.DirEntry]:
        """
        Return the entries of directory ``path`` in filesystem order.

        :param path: The directory to list.
        :type path: ``str``
        :raises TreecmpFilesystemError: If ``path`` cannot be listed.
        """
        try:
            with os.scandir(path) as it:
                return list(it)
        except OSError as err:
            raise TreecmpFilesystemError(
                f"Cannot list directory '{path}': {_os_error_str(err)}"
            ) from err

    def _collect(self, root: str, current: str, progress: WalkProgress) -> List[str]:
        self._current = current
        paths = []
        for entry in self._list_dir(current):
            progress.tick()
            rel_path = os.path.relpath(entry.path, root)

            if is_ignored(rel_path, self.matchers):
                self.excluded += 1
                _log_debug_collect("Excluding '%s'", rel_path)
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as err:
                raise TreecmpFilesystemError(
                    f"Cannot examine '{entry.path}': {_os_error_str(err)}"
                ) from err

            if is_dir:
                paths.extend(self._collect(root, entry.path, progress))
            else:
                paths.append(rel_path)
        return paths


def collect_paths(
    root: str,
    current: Optional[str],
    matchers: Iterable[re.Pattern],
    quiet: bool = True,
) -> List[str]:
    """
    Collect the root-relative file paths below ``current`` that do not match
    any of ``matchers``.

    :param root: The tree root that returned paths are relative to.
    :type root: ``str``
    :param current: The directory to start from, or ``None`` for ``root``.
    :type current: ``Optional[str]``
    :param matchers: Compiled ignore patterns.
    :type matchers: ``Iterable[re.Pattern]``
    :param quiet: Suppress progress output.
    :type quiet: ``bool``
    :returns: Unsorted root-relative file paths.
    :rtype: ``List[str]``
    """
    return TreeCollector(matchers, quiet=quiet).collect(root, current)
