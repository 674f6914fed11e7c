# Copyright Red Hat
#
# treecmp/report.py - Directory tree comparison console reports
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Human readable reports of ``DiffResult`` objects.
"""
from typing import Iterable, Optional, TextIO
import os
import sys

from treecmp.compare import DiffResult
from treecmp.progress import TermControl

DIFF_HEADER = "Directory Structure Comparison:"
COMMON_HEADER = "Common Directory Structure:"

IDENTICAL_MSG = "Directories are identical"
NO_COMMON_MSG = "No common files or directories found"

IDENTICAL_MARK = "✅"
NO_COMMON_MARK = "❌"


def _status(mark: str, msg: str, out: TextIO) -> str:
    """
    Prefix ``msg`` with ``mark`` unless the encoding of ``out`` cannot
    represent it.
    """
    encoding = getattr(out, "encoding", None)
    if encoding:
        try:
            mark.encode(encoding)
        except UnicodeEncodeError:
            return msg
    return f"{mark} {msg}"


def _print_header(header: str, out: TextIO, tc: TermControl):
    print(f"{tc.BOLD}{header}{tc.NORMAL}", file=out)
    print("=" * len(header), file=out)


def _print_paths(paths: Iterable[str], out: TextIO):
    for path in paths:
        print(f" - {path}", file=out)


def print_differences(
    result: DiffResult,
    out: Optional[TextIO] = None,
    color: str = "auto",
    term_control: Optional[TermControl] = None,
):
    """
    Print the paths that are present below only one of the compared roots.

    :param result: The comparison result to report.
    :type result: ``DiffResult``
    :param out: The stream to write to. Defaults to ``sys.stdout``.
    :type out: ``Optional[TextIO]``
    :param color: A string to control color rendering: "auto", "always", or
                  "never".
    :type color: ``str``
    :param term_control: An optional ``TermControl`` instance. Overrides
                         ``color`` if set.
    :type term_control: ``Optional[TermControl]``
    """
    out = out or sys.stdout
    tc = term_control or TermControl(term_stream=out, color=color)

    _print_header(DIFF_HEADER, out, tc)

    if result.identical:
        status = _status(IDENTICAL_MARK, IDENTICAL_MSG, out)
        print(f"{tc.GREEN}{status}{tc.NORMAL}", file=out)
    else:
        for root, paths, label_color in (
            (result.dir1, result.only_in_first, tc.RED),
            (result.dir2, result.only_in_second, tc.GREEN),
        ):
            if not paths:
                continue
            root = os.path.abspath(root)
            print(f'\nOnly in {label_color}"{root}"{tc.NORMAL}:', file=out)
            _print_paths(paths, out)

    print(
        f"\nFound {result.nr_common} identical paths, "
        f"{result.nr_differences} differences",
        file=out,
    )


def print_common(
    result: DiffResult,
    out: Optional[TextIO] = None,
    color: str = "auto",
    term_control: Optional[TermControl] = None,
):
    """
    Print the paths that are present below both compared roots.

    :param result: The comparison result to report.
    :type result: ``DiffResult``
    :param out: The stream to write to. Defaults to ``sys.stdout``.
    :type out: ``Optional[TextIO]``
    :param color: A string to control color rendering: "auto", "always", or
                  "never".
    :type color: ``str``
    :param term_control: An optional ``TermControl`` instance. Overrides
                         ``color`` if set.
    :type term_control: ``Optional[TermControl]``
    """
    out = out or sys.stdout
    tc = term_control or TermControl(term_stream=out, color=color)

    _print_header(COMMON_HEADER, out, tc)

    if not result.in_both:
        status = _status(NO_COMMON_MARK, NO_COMMON_MSG, out)
        print(f"{tc.RED}{status}{tc.NORMAL}", file=out)
        return

    dir1 = os.path.abspath(result.dir1)
    dir2 = os.path.abspath(result.dir2)
    print(f'\nFiles and directories in both "{dir1}" and "{dir2}":', file=out)
    _print_paths(result.in_both, out)

    print(f"\nFound {result.nr_common} common paths", file=out)
