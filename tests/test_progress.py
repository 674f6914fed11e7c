# Copyright Red Hat
#
# tests/test_progress.py - Terminal control and walk progress tests
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
from unittest.mock import MagicMock, patch
from io import StringIO
import curses

import treecmp._treecmp
from treecmp.progress import TermControl, WalkProgress


def _tty_stream(encoding="utf-8"):
    stream = MagicMock()
    stream.isatty.return_value = True
    stream.encoding = encoding
    return stream


def _written(stream):
    return "".join(call.args[0] for call in stream.write.call_args_list)


class TestTermControl(unittest.TestCase):
    def test_term_control_default_stdout(self):
        tc = TermControl()
        self.assertIsNotNone(tc.term_stream)

    def test_term_control_no_tty(self):
        mock_stream = MagicMock()
        mock_stream.isatty.return_value = False

        with patch("treecmp.progress.curses") as mock_curses:
            tc = TermControl(term_stream=mock_stream)
            mock_curses.setupterm.assert_not_called()

        self.assertEqual(tc.BOL, "")
        self.assertEqual(tc.GREEN, "")

    def test_term_control_curses_error(self):
        with patch("treecmp.progress.curses") as mock_curses:
            mock_curses.setupterm.side_effect = curses.error("Curses error")
            tc = TermControl(term_stream=_tty_stream())
        self.assertEqual(tc.BOL, "")
        self.assertEqual(tc.RED, "")

    def test_term_control_curses_error_always(self):
        """Plain ANSI colors are used if colors are forced."""
        with patch("treecmp.progress.curses") as mock_curses:
            mock_curses.setupterm.side_effect = curses.error("Curses error")
            tc = TermControl(term_stream=StringIO(), color="always")
        self.assertEqual(tc.RED, "\033[0;31m")
        self.assertEqual(tc.GREEN, "\033[0;32m")
        self.assertEqual(tc.NORMAL, "\033[0m")

    def test_term_control_terminfo(self):
        with patch("treecmp.progress.curses") as mock_curses:
            mock_curses.tigetstr.side_effect = lambda cap: (
                b"seq$<2>" if cap in ("cr", "setaf") else None
            )
            mock_curses.tparm.side_effect = lambda _cap, n: f"<{n}>".encode()
            tc = TermControl(term_stream=_tty_stream())

        self.assertEqual(tc.BOL, "seq")
        self.assertEqual(tc.UP, "")
        self.assertEqual(tc.RED, "<1>")
        self.assertEqual(tc.GREEN, "<2>")

    def test_term_control_never(self):
        with patch("treecmp.progress.curses") as mock_curses:
            mock_curses.tigetstr.return_value = b"x"
            mock_curses.tparm.return_value = b"\x1b[31m"
            tc = TermControl(term_stream=_tty_stream(), color="never")

        self.assertEqual(tc.BOL, "x")
        self.assertEqual(tc.RED, "")


class TestWalkProgress(unittest.TestCase):
    def test_defaults_to_stderr(self):
        with patch("sys.stderr", StringIO()) as mock_stderr:
            progress = WalkProgress("Walking")
        self.assertIs(progress.stream, mock_stderr)
        self.assertFalse(progress.interactive)

    def test_plain_stream(self):
        stream = StringIO()
        progress = WalkProgress("Walking", term_control=TermControl(stream))
        progress.start()
        self.assertIn(progress, treecmp._treecmp._active_progress)
        progress.tick()
        progress.tick()
        progress.end("found 2 paths")
        self.assertNotIn(progress, treecmp._treecmp._active_progress)
        self.assertEqual(progress.count, 2)

        output = stream.getvalue()
        self.assertTrue(output.startswith("Walking: ."))
        self.assertTrue(output.endswith(" found 2 paths\n"))

    def test_quiet(self):
        stream = StringIO()
        progress = WalkProgress(
            "Walking", quiet=True, term_control=TermControl(stream)
        )
        progress.start()
        progress.tick()
        progress.end("done")
        self.assertEqual(stream.getvalue(), "")
        self.assertEqual(progress.count, 1)
        self.assertFalse(progress.registered)

    def test_tick_before_start(self):
        progress = WalkProgress("Walking", term_control=TermControl(StringIO()))
        with self.assertRaises(ValueError):
            progress.tick()
        with self.assertRaises(ValueError):
            progress.end("done")

    def test_end_twice(self):
        progress = WalkProgress("Walking", term_control=TermControl(StringIO()))
        progress.start()
        progress.end("done")
        with self.assertRaises(ValueError):
            progress.end("done")

    def test_terminal_line(self):
        stream = _tty_stream()
        with patch("treecmp.progress.curses") as mock_curses:
            mock_curses.setupterm.side_effect = curses.error("no term")
            tc = TermControl(term_stream=stream)
        tc.UP = "<up>"
        progress = WalkProgress("Walking", term_control=tc)
        self.assertTrue(progress.interactive)

        progress.start()
        progress.end("found 0 paths")

        self.assertEqual(
            _written(stream),
            f"Walking: {WalkProgress.FRAMES[0]} 0\n<up>Walking: found 0 paths\n",
        )

    def test_terminal_line_after_log_output(self):
        """A line displaced by a log record is not cleared."""
        stream = _tty_stream()
        tc = TermControl(term_stream=StringIO())
        tc.term_stream = stream
        tc.UP = "<up>"
        progress = WalkProgress("Walking", term_control=tc)
        progress.start()
        with patch("sys.stderr", stream):
            treecmp._treecmp.notify_log_output(stream)
        progress.end("done")
        self.assertNotIn("<up>", _written(stream))

    def test_ascii_frames(self):
        tc = TermControl(term_stream=StringIO())
        tc.term_stream = _tty_stream(encoding="ascii")
        progress = WalkProgress("Walking", term_control=tc)
        self.assertEqual(progress.frames, WalkProgress.ASCII_FRAMES)

    def test_unicode_frames(self):
        tc = TermControl(term_stream=StringIO())
        tc.term_stream = _tty_stream(encoding="utf-8")
        progress = WalkProgress("Walking", term_control=tc)
        self.assertEqual(progress.frames, WalkProgress.FRAMES)
