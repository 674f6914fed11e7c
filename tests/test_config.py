# Copyright Red Hat
#
# tests/test_config.py - Configuration file tests
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
import tempfile
import json
import os

from treecmp import TREECMP_CONFIG_FILE
from treecmp.config import TreecmpConfig, load_config


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, TREECMP_CONFIG_FILE)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, content):
        with open(self.path, "w", encoding="utf8") as fp:
            fp.write(content)

    def test_load_config(self):
        self._write(json.dumps({"ignorePaths": ["^b/", r"\.pyc$"]}))
        config = load_config(self.path)
        self.assertEqual(config.ignore_paths, ("^b/", r"\.pyc$"))

    def test_load_config_extra_keys(self):
        self._write(json.dumps({"ignorePaths": [], "other": 1}))
        self.assertEqual(load_config(self.path), TreecmpConfig())

    def test_load_config_cwd_default(self):
        self._write(json.dumps({"ignorePaths": ["node_modules"]}))
        cwd = os.getcwd()
        os.chdir(self._tmp.name)
        try:
            config = load_config()
        finally:
            os.chdir(cwd)
        self.assertEqual(config.ignore_paths, ("node_modules",))

    def test_load_config_missing(self):
        with self.assertLogs("treecmp.config", level="WARNING") as cm:
            config = load_config(self.path)
        self.assertEqual(config.ignore_paths, ())
        self.assertIn("not found", cm.output[0])

    def test_load_config_malformed_json(self):
        self._write("{ignorePaths: [")
        with self.assertLogs("treecmp.config", level="ERROR") as cm:
            config = load_config(self.path)
        self.assertEqual(config.ignore_paths, ())
        self.assertIn(self.path, cm.output[0])

    def test_load_config_not_a_list(self):
        self._write(json.dumps({"ignorePaths": "^b/"}))
        with self.assertLogs("treecmp.config", level="WARNING") as cm:
            config = load_config(self.path)
        self.assertEqual(config.ignore_paths, ())
        self.assertIn("Invalid config format", cm.output[0])

    def test_load_config_missing_key(self):
        self._write(json.dumps({}))
        with self.assertLogs("treecmp.config", level="WARNING"):
            self.assertEqual(load_config(self.path).ignore_paths, ())

    def test_load_config_not_an_object(self):
        self._write(json.dumps(["^b/"]))
        with self.assertLogs("treecmp.config", level="WARNING"):
            self.assertEqual(load_config(self.path).ignore_paths, ())

    def test_load_config_non_string_pattern(self):
        self._write(json.dumps({"ignorePaths": ["ok", 3]}))
        with self.assertLogs("treecmp.config", level="WARNING"):
            self.assertEqual(load_config(self.path).ignore_paths, ())
