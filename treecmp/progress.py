# Copyright Red Hat
#
# treecmp/progress.py - Directory tree comparison terminal feedback
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Terminal colours and the progress line shown while a tree is walked.
"""
from typing import ClassVar, Dict, Optional, TextIO
import curses
import time
import sys

from treecmp import register_progress, unregister_progress

#: Minimum number of seconds between two redraws of a progress line.
REDRAW_INTERVAL = 0.1


def _is_tty(stream: TextIO) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


class TermControl:
    """
    Control strings for the terminal attached to ``term_stream``.

    Every attribute is the empty string when the stream is not a terminal
    or the terminal lacks the capability, so concatenating them into output
    is always safe::

        >>> tc = TermControl()
        >>> print(f'Only in {tc.RED}"left"{tc.NORMAL}:')
    """

    BOL: str = ""  #: Move the cursor to the beginning of the line
    UP: str = ""  #: Move the cursor up one line
    CLEAR_EOL: str = ""  #: Clear to the end of the line
    BOLD: str = ""  #: Turn on bold mode
    NORMAL: str = ""  #: Turn off all modes
    HIDE_CURSOR: str = ""  #: Make the cursor invisible
    SHOW_CURSOR: str = ""  #: Make the cursor visible
    RED: str = ""  #: Red foreground (only in the first tree)
    GREEN: str = ""  #: Green foreground (only in the second tree)

    _CAPABILITIES: ClassVar[Dict[str, str]] = {
        "BOL": "cr",
        "UP": "cuu1",
        "CLEAR_EOL": "el",
        "BOLD": "bold",
        "NORMAL": "sgr0",
        "HIDE_CURSOR": "civis",
        "SHOW_CURSOR": "cnorm",
    }

    #: ANSI color numbers for ``setaf``
    _COLORS: ClassVar[Dict[str, int]] = {"RED": 1, "GREEN": 2}

    def __init__(self, term_stream: Optional[TextIO] = None, color: str = "auto"):
        """
        Look up the control strings for ``term_stream``.

        :param term_stream: Output stream. Defaults to ``sys.stdout``.
        :type term_stream: ``Optional[TextIO]``
        :param color: A string to control color rendering: "auto", "always", or
                      "never".
        :type color: ``str``
        """
        self.term_stream = term_stream if term_stream is not None else sys.stdout

        if color != "always" and not _is_tty(self.term_stream):
            return

        try:
            curses.setupterm()
        # curses.error cannot be named in an except clause before setupterm()
        # has initialised the module on some builds.
        except BaseException as err:  # pylint: disable=broad-exception-caught
            if isinstance(err, (KeyboardInterrupt, SystemExit)):  # pragma: no cover
                raise
            if color == "always":
                self._use_ansi()
            return

        for attr, cap_name in self._CAPABILITIES.items():
            setattr(self, attr, self._capability(cap_name))

        if color != "never":
            set_fg = self._capability("setaf")
            for attr, number in self._COLORS.items():
                if set_fg:
                    value = curses.tparm(set_fg.encode("utf8"), number)
                    setattr(self, attr, value.decode("utf8"))

    def _use_ansi(self):
        """
        Fall back to plain ANSI sequences for forced colour output.
        """
        for attr, number in self._COLORS.items():
            setattr(self, attr, f"\033[0;3{number}m")
        self.BOLD = "\033[1m"
        self.NORMAL = "\033[0m"

    @staticmethod
    def _capability(cap_name: str) -> str:
        # Drop "$<n>" padding delays.
        cap = curses.tigetstr(cap_name)
        cap = cap.decode("utf8") if cap else ""
        return cap.split("$", maxsplit=1)[0]


class WalkProgress:
    """
    Progress line for a single tree walk.

    ``start()`` prints the header, ``tick()`` is called once per directory
    entry and ``end()`` prints the outcome. On a terminal the line shows a
    spinner and the number of entries seen so far and is redrawn in place.
    On other streams a dot is appended at most every ``REDRAW_INTERVAL``
    seconds. A quiet instance only counts.
    """

    FRAMES = "⣾⣽⣻⢿⡿⣟⣯⣷"
    ASCII_FRAMES = r"-\|/"

    def __init__(
        self,
        header: str,
        quiet: bool = False,
        term_control: Optional[TermControl] = None,
    ):
        """
        Initialise a new ``WalkProgress``.

        :param header: Text shown before the spinner or dots.
        :type header: ``str``
        :param quiet: Count entries without writing anything.
        :type quiet: ``bool``
        :param term_control: Terminal to draw on. Defaults to ``sys.stderr``.
        :type term_control: ``Optional[TermControl]``
        """
        self.header = header
        self.quiet = quiet
        self.term = term_control or TermControl(term_stream=sys.stderr)
        self.stream = self.term.term_stream
        self.interactive = not quiet and _is_tty(self.stream)
        self.frames = self._frames_for(self.stream)
        self.count = 0
        self.active = False
        self.registered = False
        self._frame = 0
        self._fresh_line = True
        self._next_draw = 0.0

    def _frames_for(self, stream: TextIO) -> str:
        encoding = getattr(stream, "encoding", None)
        try:
            if encoding:
                self.FRAMES.encode(encoding)
                return self.FRAMES
        except UnicodeEncodeError:
            pass
        return self.ASCII_FRAMES

    def reset_position(self):
        """Start the next redraw on a new line after foreign output."""
        self._fresh_line = True

    def start(self):
        """
        Show the header and begin counting.
        """
        self.active = True
        self.count = 0
        if self.quiet:
            return
        register_progress(self)
        if self.interactive:
            self._write(self.term.HIDE_CURSOR)
        else:
            self._write(f"{self.header}: ")
        self._draw()

    def tick(self):
        """
        Count one directory entry and redraw if the interval has passed.

        :raises ValueError: If called before ``start()``.
        """
        if not self.active:
            raise ValueError("WalkProgress.tick() called before start()")
        self.count += 1
        if not self.quiet and time.monotonic() >= self._next_draw:
            self._draw()

    def end(self, message: str):
        """
        Replace the progress line with ``message``.

        :param message: The outcome of the walk.
        :type message: ``str``
        :raises ValueError: If called before ``start()``.
        """
        if not self.active:
            raise ValueError("WalkProgress.end() called before start()")
        self.active = False
        if self.quiet:
            return
        if self.interactive:
            self._clear_line()
            self._write(f"{self.term.SHOW_CURSOR}{self.header}: {message}\n")
        else:
            self._write(f" {message}\n")
        unregister_progress(self)

    def _clear_line(self):
        if not self._fresh_line:
            self._write(self.term.BOL + self.term.UP + self.term.CLEAR_EOL)

    def _draw(self):
        if self.interactive:
            self._clear_line()
            frame = self.frames[self._frame]
            self._frame = (self._frame + 1) % len(self.frames)
            self._write(
                f"{self.header}: {self.term.GREEN}{frame}{self.term.NORMAL} "
                f"{self.count}\n"
            )
            self._fresh_line = False
        else:
            self._write(".")
        self._next_draw = time.monotonic() + REDRAW_INTERVAL

    def _write(self, text: str):
        self.stream.write(text)
        self.stream.flush()


__all__ = [
    "REDRAW_INTERVAL",
    "TermControl",
    "WalkProgress",
]
