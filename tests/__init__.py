# Copyright Red Hat
#
# tests/__init__.py - Directory tree comparison test package
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
import logging
import os

log = logging.getLogger()
log.setLevel(logging.DEBUG)
formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
file_handler = logging.FileHandler("test.log")
file_handler.setFormatter(formatter)
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
log.addHandler(file_handler)
log.addHandler(console_handler)


def have_root():
    """Return ``True`` if the test suite is running as the root user,
    and ``False`` otherwise.
    """
    return os.geteuid() == 0 and os.getegid() == 0


def make_tree(root, paths):
    """
    Create empty files at each relative path in ``paths`` below ``root``.
    A path ending in ``/`` creates an empty directory instead.
    """
    for path in paths:
        full_path = os.path.join(root, path)
        if path.endswith("/"):
            os.makedirs(full_path, exist_ok=True)
            continue
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "w", encoding="utf8") as fp:
            fp.write(path)
