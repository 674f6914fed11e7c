# Copyright Red Hat
#
# treecmp/compare/__init__.py - Directory tree comparison package
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Directory tree comparison package.

Provides ignore pattern compilation, tree collection and the three-way
partition of two trees' file paths. The main entry points are
``TreeComparer`` and ``compare_directories()``.
"""
from .collector import TreeCollector, collect_paths
from .comparer import TreeComparer, compare_directories
from .options import CompareOptions
from .patterns import compile_patterns
from .results import DiffResult

__all__ = [
    "CompareOptions",
    "DiffResult",
    "TreeCollector",
    "TreeComparer",
    "collect_paths",
    "compare_directories",
    "compile_patterns",
]
