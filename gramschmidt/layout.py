# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Memory layout resolution and disjoint sub-views
"""

from enum import Enum
from typing import Tuple

import numpy as np

from .errors import IncompatibleLayoutsError, NonContiguousError


class MemoryLayout(Enum):
    ROW_MAJOR = "C"
    COLUMN_MAJOR = "F"

    @property
    def order(self) -> str:
        """numpy ``order=`` letter for this layout."""
        return self.value

    def matches(self, a: np.ndarray) -> bool:
        if self is MemoryLayout.ROW_MAJOR:
            return bool(a.flags.c_contiguous)
        return bool(a.flags.f_contiguous)


def resolve_layout(a: np.ndarray) -> MemoryLayout:
    """
    Return the layout in which ``a`` is one contiguous block.

    Arrays that are contiguous in both orders (a single row or column)
    resolve to ``ROW_MAJOR``.

    Raises
    ------
    NonContiguousError
        If ``a`` is neither C- nor F-contiguous, e.g. a strided slice.
    """
    if a.flags.c_contiguous:
        return MemoryLayout.ROW_MAJOR
    if a.flags.f_contiguous:
        return MemoryLayout.COLUMN_MAJOR
    raise NonContiguousError(
        f"array of shape {a.shape} with strides {a.strides} is not contiguous"
    )


def check_layout(a: np.ndarray, layout: MemoryLayout) -> None:
    """Raise unless ``a`` is contiguous in ``layout``."""
    if layout.matches(a):
        return
    # Resolving either raises NonContiguousError or yields the other layout.
    found = resolve_layout(a)
    raise IncompatibleLayoutsError(
        f"engine expects {layout.name} input, got {found.name}"
    )


def split_columns(matrix: np.ndarray, i: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split ``matrix`` into the block of columns ``0..i-1`` and column ``i``.

    Both results are views into ``matrix`` and never share an element, so
    one can be read while the other is written.
    """
    done, rest = matrix[:, :i], matrix[:, i:]
    return done, rest[:, 0]
