# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by the Gram-Schmidt engines.

All of them indicate a mistake in how the engine was called and are
never retried internally.
"""


class GramSchmidtError(ValueError):
    """Base class for every error raised by this package."""


class NonContiguousError(GramSchmidtError):
    """The matrix is not one contiguous row-major or column-major block."""


class IncompatibleLayoutsError(GramSchmidtError):
    """The matrix layout differs from the layout the engine was built for."""


class ShapeMismatchError(GramSchmidtError):
    """The matrix shape is not the one the engine was built for."""


class LinearlyDependentError(GramSchmidtError):
    """A column collapsed to (numerically) zero during orthogonalization."""
