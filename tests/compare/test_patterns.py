# Copyright Red Hat
#
# tests/compare/test_patterns.py - Ignore pattern tests.
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
import re

from treecmp import TreecmpError, TreecmpInvalidPatternError
from treecmp.compare.patterns import compile_patterns, is_ignored


class TestCompilePatterns(unittest.TestCase):
    def test_compile_patterns_empty(self):
        self.assertEqual(compile_patterns([]), [])

    def test_compile_patterns_strings(self):
        matchers = compile_patterns(["^b/", r"\.pyc$"])
        self.assertEqual(len(matchers), 2)
        self.assertTrue(all(isinstance(m, re.Pattern) for m in matchers))
        self.assertEqual(matchers[0].pattern, "^b/")
        self.assertEqual(matchers[1].pattern, r"\.pyc$")

    def test_compile_patterns_precompiled_passthrough(self):
        """Pre-compiled patterns are returned unchanged."""
        pre = re.compile("node_modules", re.IGNORECASE)
        matchers = compile_patterns([pre, "x"])
        self.assertIs(matchers[0], pre)
        self.assertEqual(matchers[1].pattern, "x")

    def test_compile_patterns_invalid(self):
        with self.assertRaises(TreecmpInvalidPatternError) as cm:
            compile_patterns(["ok", "("])
        self.assertIn("'('", str(cm.exception))
        self.assertIsInstance(cm.exception.__cause__, re.error)
        self.assertIsInstance(cm.exception, TreecmpError)

    def test_compile_patterns_bad_type(self):
        with self.assertRaises(TypeError):
            compile_patterns([42])

    def test_compile_patterns_generator(self):
        matchers = compile_patterns(p for p in ("a", "b"))
        self.assertEqual([m.pattern for m in matchers], ["a", "b"])


class TestIsIgnored(unittest.TestCase):
    def test_is_ignored_no_matchers(self):
        self.assertFalse(is_ignored("a.txt", []))

    def test_is_ignored_unanchored_search(self):
        """Patterns match anywhere in the path, like RegExp.test()."""
        matchers = compile_patterns(["modules"])
        self.assertTrue(is_ignored("web/node_modules/x.js", matchers))

    def test_is_ignored_anchored(self):
        matchers = compile_patterns(["^b/"])
        self.assertTrue(is_ignored("b/c.txt", matchers))
        self.assertFalse(is_ignored("a/b/c.txt", matchers))
        self.assertFalse(is_ignored("b", matchers))

    def test_is_ignored_any_matcher(self):
        matchers = compile_patterns(["^x$", r"\.log$"])
        self.assertTrue(is_ignored("debug.log", matchers))
        self.assertTrue(is_ignored("x", matchers))
        self.assertFalse(is_ignored("y.txt", matchers))
