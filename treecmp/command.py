# Copyright Red Hat
#
# treecmp/command.py - Directory tree comparison command interface
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""The ``treecmp.command`` module provides both the treecmp command line
interface infrastructure, and a simple procedural interface to the
``treecmp`` library modules.
"""
from argparse import ArgumentParser
from dataclasses import replace
from os.path import basename
from typing import Iterable, Optional
import logging
import sys
import os

from treecmp import (
    TreecmpArgumentError,
    TREECMP_DEBUG_COLLECT,
    TREECMP_DEBUG_COMPARE,
    TREECMP_DEBUG_CONFIG,
    TREECMP_DEBUG_COMMAND,
    TREECMP_DEBUG_ALL,
    TREECMP_SUBSYSTEM_COMMAND,
    SubsystemFilter,
    set_debug_mask,
    ProgressAwareHandler,
    __version__,
)
from treecmp.compare import CompareOptions, DiffResult, TreeComparer
from treecmp.compare.patterns import PatternLike
from treecmp.config import load_config
from treecmp.progress import TermControl
from treecmp.report import print_common, print_differences

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_command(msg, *args, **kwargs):
    """A wrapper for command subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": TREECMP_SUBSYSTEM_COMMAND}, **kwargs)


_DEFAULT_LOG_LEVEL = logging.WARNING
_CONSOLE_HANDLER = None

COLOR_MODES = ["auto", "never", "always"]


def _check_root(path: str):
    if not os.path.exists(path):
        raise TreecmpArgumentError(f"Directory '{path}' does not exist")
    if not os.path.isdir(path):
        raise TreecmpArgumentError(f"'{path}' is not a directory")


def compare_dirs(
    dir1: str,
    dir2: str,
    ignore_patterns: Iterable[PatternLike] = (),
    quiet: bool = False,
    color: str = "auto",
) -> DiffResult:
    """
    Compare the file paths below directories ``dir1`` and ``dir2``.

    :param dir1: The first (left hand) root.
    :type dir1: ``str``
    :param dir2: The second (right hand) root.
    :type dir2: ``str``
    :param ignore_patterns: Regular expressions (strings or compiled) for
                            root-relative paths to ignore.
    :type ignore_patterns: ``Iterable[Union[str, re.Pattern]]``
    :param quiet: Suppress progress output.
    :type quiet: ``bool``
    :param color: A string to control color rendering of progress output:
                  "auto", "always", or "never".
    :type color: ``str``
    :returns: The comparison result.
    :rtype: ``DiffResult``
    :raises TreecmpArgumentError: If either root is not an existing
                                  directory.
    """
    _check_root(dir1)
    _check_root(dir2)

    comparer = TreeComparer(
        CompareOptions(quiet=quiet),
        term_control=TermControl(term_stream=sys.stderr, color=color),
    )
    return comparer.compare(dir1, dir2, ignore_patterns)


def _options_from_args(cmd_args) -> CompareOptions:
    """
    Build ``CompareOptions`` from command line arguments, placing patterns
    from the configuration file before those given with ``--ignore-pattern``.
    """
    options = CompareOptions.from_cmd_args(cmd_args)
    if cmd_args.no_config:
        return options

    config = load_config(cmd_args.config)
    return replace(
        options, ignore_patterns=config.ignore_paths + options.ignore_patterns
    )


def _compare_cmd(cmd_args, print_fn):
    """
    Shared handler for the ``diff`` and ``common`` commands.

    :param cmd_args: Command line arguments for the command
    :param print_fn: The report function used for non-JSON output.
    :returns: integer status code returned from ``main()``
    """
    if cmd_args.pretty and not cmd_args.json:
        _log_error("Option --pretty only supported with --json")
        return 1

    try:
        _check_root(cmd_args.dir1)
        _check_root(cmd_args.dir2)
    except TreecmpArgumentError as err:
        _log_error("%s", err)
        return 1

    options = _options_from_args(cmd_args)
    _log_debug_command("Effective options:\n%s", options)

    comparer = TreeComparer(
        options, term_control=TermControl(term_stream=sys.stderr, color=cmd_args.color)
    )
    result = comparer.compare(cmd_args.dir1, cmd_args.dir2)

    if cmd_args.json:
        print(result.json(pretty=cmd_args.pretty))
    else:
        print_fn(result, color=cmd_args.color)
    return 0


def _diff_cmd(cmd_args):
    """
    Diff command handler.

    Report the paths present below only one of the two directories.

    :param cmd_args: Command line arguments for the command
    :returns: integer status code returned from ``main()``
    """
    return _compare_cmd(cmd_args, print_differences)


def _common_cmd(cmd_args):
    """
    Common command handler.

    Report the paths present below both directories.

    :param cmd_args: Command line arguments for the command
    :returns: integer status code returned from ``main()``
    """
    return _compare_cmd(cmd_args, print_common)


def setup_logging(cmd_args):
    """
    Set up treecmp logging.
    """
    # pylint: disable=global-statement
    global _CONSOLE_HANDLER
    level = _DEFAULT_LOG_LEVEL
    if cmd_args.verbose and cmd_args.verbose > 1:
        level = logging.DEBUG
    elif cmd_args.verbose and cmd_args.verbose > 0:
        level = logging.INFO

    treecmp_log = logging.getLogger("treecmp")
    formatter = logging.Formatter("%(levelname)s - %(message)s")
    treecmp_log.setLevel(level)
    if treecmp_log.hasHandlers():
        treecmp_log.handlers.clear()

    _CONSOLE_HANDLER = ProgressAwareHandler()
    _CONSOLE_HANDLER.setLevel(level)
    _CONSOLE_HANDLER.setFormatter(formatter)
    _CONSOLE_HANDLER.addFilter(SubsystemFilter("treecmp"))

    treecmp_log.addHandler(_CONSOLE_HANDLER)


def shutdown_logging():
    """
    Shut down treecmp logging.
    """
    logging.shutdown()


def set_debug(debug_arg: Optional[str]):
    """
    Set debugging mask from command line argument.
    """
    if not debug_arg:
        return

    mask_map = {
        "collect": TREECMP_DEBUG_COLLECT,
        "compare": TREECMP_DEBUG_COMPARE,
        "config": TREECMP_DEBUG_CONFIG,
        "command": TREECMP_DEBUG_COMMAND,
        "all": TREECMP_DEBUG_ALL,
    }

    mask = 0
    for name in debug_arg.split(","):
        if name not in mask_map:
            raise ValueError(f"Unknown debug option: {name}")
        mask |= mask_map[name]
    set_debug_mask(mask)


def _add_compare_args(parser):
    """
    Add arguments shared by the comparison commands.
    """
    parser.add_argument(
        "-x",
        "--ignore-pattern",
        type=str,
        action="append",
        metavar="PATTERN",
        dest="ignore_patterns",
        default=None,
        help="Regular expression for relative paths to ignore (repeatable)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        metavar="PATH",
        default=None,
        help="Read ignore patterns from PATH instead of ./.treecmprc.json",
    )
    parser.add_argument(
        "-n",
        "--no-config",
        action="store_true",
        help="Do not read a configuration file",
    )
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output the comparison result as JSON",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not output progress information",
    )
    parser.add_argument(
        "--color",
        type=str,
        choices=COLOR_MODES,
        default=COLOR_MODES[0],
        help=f"Enable colored output ({', '.join(COLOR_MODES)})",
    )
    parser.add_argument(
        "dir1",
        type=str,
        metavar="DIR1",
        help="The first directory to compare",
    )
    parser.add_argument(
        "dir2",
        type=str,
        metavar="DIR2",
        help="The second directory to compare",
    )


DIFF_CMD = "diff"
COMMON_CMD = "common"


def main(args):
    """
    Main entry point for treecmp.
    """
    parser = ArgumentParser(
        description="Directory tree comparison", prog=basename(args[0])
    )

    parser.add_argument(
        "-d",
        "--debug",
        metavar="DEBUGOPTS",
        type=str,
        help="A list of debug options to enable (collect,compare,config,command,all)",
    )
    parser.add_argument("-v", "--verbose", help="Enable verbose output", action="count")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        help="Report the version number of treecmp",
        version=__version__,
    )
    cmd_subparser = parser.add_subparsers(dest="command", help="Command")

    diff_parser = cmd_subparser.add_parser(
        DIFF_CMD, help="Show paths present in only one directory"
    )
    _add_compare_args(diff_parser)
    diff_parser.set_defaults(func=_diff_cmd)

    common_parser = cmd_subparser.add_parser(
        COMMON_CMD, help="Show paths present in both directories"
    )
    _add_compare_args(common_parser)
    common_parser.set_defaults(func=_common_cmd)

    cmd_args = parser.parse_args(args[1:])

    status = 1

    try:
        set_debug(cmd_args.debug)
    except ValueError as err:
        print(err)
        parser.print_help()
        return status

    setup_logging(cmd_args)

    _log_debug_command("Parsed %s", " ".join(args[1:]))

    if "func" not in cmd_args:
        parser.print_help()
        return status

    if cmd_args.debug:
        status = cmd_args.func(cmd_args)
    else:
        try:
            status = cmd_args.func(cmd_args)
        # pylint: disable=broad-except
        except KeyboardInterrupt:  # pragma: no cover
            _log_info("Exiting on user cancel")
        except Exception as err:
            _log_error("Command failed: %s", err)

    shutdown_logging()
    return status


# vim: set et ts=4 sw=4 :
