# Copyright Red Hat
#
# treecmp/__init__.py - Directory tree comparison package initialisation
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Treecmp top-level package.
"""
from ._treecmp import *  # noqa: F401, F403
from ._treecmp import __all__  # noqa: F401

__version__ = "0.1.0"
