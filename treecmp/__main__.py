# Copyright Red Hat
#
# treecmp/__main__.py - Directory tree comparison CLI driver
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Command line driver: ``python -m treecmp`` and the ``treecmp`` script.
"""
import sys

from treecmp.command import main


def run():
    """
    Run ``treecmp`` with the process arguments and exit with its status.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    run()
