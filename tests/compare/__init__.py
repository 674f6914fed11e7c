# Copyright Red Hat
#
# tests/compare/__init__.py - Tree comparison test package
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
