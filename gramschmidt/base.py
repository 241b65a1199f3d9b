# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Common engine machinery: buffer allocation, input validation and the
read-only accessors for Q and R.
"""

import logging
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from .backends import NumericBackend, get_backend
from .errors import LinearlyDependentError, ShapeMismatchError
from .layout import MemoryLayout, check_layout, resolve_layout
from .utils import EPS

logger = logging.getLogger(__name__)


def _read_only(a: np.ndarray) -> np.ndarray:
    view = a.view()
    view.flags.writeable = False
    return view


class GramSchmidt(ABC):
    """
    A reusable QR factorization of M-by-N matrices (M ≥ N).

    The engine owns Q (M×N) and R (N×N), allocated once in the memory
    layout given at construction and overwritten by every ``compute``.

    Parameters
    ----------
    shape : (int, int)
        Shape (M, N) of the matrices that will be factorized.
    layout : MemoryLayout
        Layout of the input matrices and of Q and R.
    backend : NumericBackend, str or None
        Numeric primitives to use, numpy by default.
    """

    def __init__(
        self,
        shape: Tuple[int, int],
        layout: MemoryLayout = MemoryLayout.ROW_MAJOR,
        backend=None,
    ) -> None:
        shape = tuple(shape)
        if len(shape) != 2 or not all(isinstance(d, (int, np.integer)) for d in shape):
            raise ShapeMismatchError(f"expected a 2-d shape, got {shape!r}")
        m, n = int(shape[0]), int(shape[1])
        if n < 1 or m < n:
            raise ShapeMismatchError(f"expected M >= N >= 1, got shape {(m, n)}")
        if not isinstance(layout, MemoryLayout):
            raise TypeError(f"layout must be a MemoryLayout, got {layout!r}")

        self._shape = (m, n)
        self._layout = layout
        self._backend: NumericBackend = get_backend(backend)
        self._q = np.zeros((m, n), order=layout.order)
        self._r = np.zeros((n, n), order=layout.order)
        logger.debug(
            "%s allocated for shape %s, layout %s, backend %r",
            type(self).__name__,
            self._shape,
            layout.name,
            self._backend,
        )

    @classmethod
    def from_shape(cls, shape, layout=MemoryLayout.ROW_MAJOR, backend=None, **kwargs):
        return cls(shape, layout, backend=backend, **kwargs)

    @classmethod
    def from_matrix(cls, a: np.ndarray, backend=None, **kwargs):
        """Build an engine for matrices with the shape and layout of ``a``."""
        a = np.asarray(a)
        return cls(a.shape, resolve_layout(a), backend=backend, **kwargs)

    @property
    def shape(self) -> Tuple[int, int]:
        return self._shape

    @property
    def layout(self) -> MemoryLayout:
        return self._layout

    @property
    def backend(self) -> NumericBackend:
        return self._backend

    @property
    def q(self) -> np.ndarray:
        """Read-only view of Q from the last ``compute``."""
        return _read_only(self._q)

    @property
    def r(self) -> np.ndarray:
        """Read-only view of R from the last ``compute``."""
        return _read_only(self._r)

    def compute(self, a: np.ndarray):
        """
        Factorize ``a`` into the engine's Q and R.

        ``a`` must have exactly the shape and layout the engine was built
        for. All checks happen before Q or R are touched.

        Raises
        ------
        ShapeMismatchError, NonContiguousError, IncompatibleLayoutsError
            If ``a`` does not fit the engine.
        LinearlyDependentError
            If a column of ``a`` depends linearly on the previous ones.
        """
        a = np.asarray(a)
        if a.shape != self._shape:
            raise ShapeMismatchError(
                f"engine built for shape {self._shape}, got {a.shape}"
            )
        check_layout(a, self._layout)
        if np.iscomplexobj(a):
            raise TypeError("complex matrices are not supported")
        if a.dtype != np.float64:
            a = a.astype(np.float64, order=self._layout.order)

        logger.debug("%s.compute on %s matrix", type(self).__name__, self._shape)
        self._compute(a)
        return self

    @abstractmethod
    def _compute(self, a: np.ndarray) -> None:
        """Run the factorization of a validated float64 matrix."""

    def _check_norm(self, norm: float, a: np.ndarray, i: int) -> None:
        # `not >=` also rejects nan
        threshold = EPS * max(1.0, self._backend.norm(a[:, i]))
        if not norm >= threshold:
            raise LinearlyDependentError(
                f"column {i} is linearly dependent on the previous columns "
                f"(remaining norm {norm:.3e})"
            )

    def factors(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return owned copies of (Q, R)."""
        return self._q.copy(order="K"), self._r.copy(order="K")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(shape={self._shape}, "
            f"layout={self._layout.name}, backend={self._backend!r})"
        )
