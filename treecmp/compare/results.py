# Copyright Red Hat
#
# treecmp/compare/results.py - Directory tree comparison results
#
# This file is part of the treecmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Tree comparison result container.
"""
from dataclasses import dataclass
from typing import Any, Dict, Tuple
import json


@dataclass(frozen=True)
class DiffResult:
    """
    Three-way partition of the file paths found below two roots.

    Every path is prefixed with the root it was found under: ``dir1`` for
    ``only_in_first`` and ``in_both``, ``dir2`` for ``only_in_second``.
    """

    #: The first (left hand) root.
    dir1: str
    #: The second (right hand) root.
    dir2: str
    #: Paths found only below ``dir1``.
    only_in_first: Tuple[str, ...] = ()
    #: Paths found only below ``dir2``.
    only_in_second: Tuple[str, ...] = ()
    #: Paths found below both roots, prefixed with ``dir1``.
    in_both: Tuple[str, ...] = ()

    @property
    def nr_differences(self) -> int:
        """
        The number of paths present below only one of the two roots.

        :rtype: ``int``
        """
        return len(self.only_in_first) + len(self.only_in_second)

    @property
    def nr_common(self) -> int:
        """
        The number of paths present below both roots.

        :rtype: ``int``
        """
        return len(self.in_both)

    @property
    def identical(self) -> bool:
        """
        ``True`` if neither root has a path the other lacks.

        :rtype: ``bool``
        """
        return not self.only_in_first and not self.only_in_second

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this ``DiffResult`` into a dictionary suitable for encoding
        as JSON.

        :returns: A dictionary mapping result keys to values.
        :rtype: ``Dict[str, Any]``
        """
        return {
            "dir1": self.dir1,
            "dir2": self.dir2,
            "onlyInFirst": list(self.only_in_first),
            "onlyInSecond": list(self.only_in_second),
            "inBoth": list(self.in_both),
        }

    def json(self, pretty: bool = False) -> str:
        """
        Return a JSON representation of this ``DiffResult``.

        :param pretty: Indent the output for human readers.
        :type pretty: ``bool``
        :returns: JSON string.
        :rtype: ``str``
        """
        return json.dumps(self.to_dict(), indent=4 if pretty else None)
