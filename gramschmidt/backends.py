# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Numeric primitives used by the orthogonalization engines.

Every engine talks to a ``NumericBackend`` instead of calling numpy or
BLAS directly, so the primitives can be swapped without touching the
engines. All in-place operations write into the view they are given;
callers hand in views of the engine's Q and R buffers.
"""

from abc import ABC, abstractmethod

import numpy as np
from scipy.linalg import blas


class NumericBackend(ABC):
    @abstractmethod
    def norm(self, v: np.ndarray) -> float:
        """Euclidean norm of ``v``."""

    @abstractmethod
    def dot(self, v: np.ndarray, w: np.ndarray) -> float:
        """Dot product of ``v`` and ``w``."""

    @abstractmethod
    def axpy(self, alpha: float, x: np.ndarray, y: np.ndarray) -> None:
        """``y += alpha * x`` in place."""

    @abstractmethod
    def project(self, basis: np.ndarray, v: np.ndarray, out: np.ndarray) -> None:
        """``out[:] = basis.T @ v``, the projection coefficients of ``v``."""

    @abstractmethod
    def subtract_projection(
        self, basis: np.ndarray, coefficients: np.ndarray, v: np.ndarray
    ) -> None:
        """``v -= basis @ coefficients`` in place."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NumpyBackend(NumericBackend):
    """Portable backend built on plain numpy operations."""

    def norm(self, v):
        return float(np.linalg.norm(v))

    def dot(self, v, w):
        return float(np.dot(v, w))

    def axpy(self, alpha, x, y):
        y += alpha * x

    def project(self, basis, v, out):
        out[...] = basis.T @ v

    def subtract_projection(self, basis, coefficients, v):
        v -= basis @ coefficients


class BlasBackend(NumericBackend):
    """
    Backend calling the double precision BLAS routines shipped with scipy.

    f2py hands strided views to BLAS as contiguous copies, so results are
    always assigned back into the destination view. Only ``COLUMN_MAJOR``
    engines pass contiguous columns and blocks; under ``ROW_MAJOR`` every
    call copies its operands, and ``NumpyBackend`` is the better choice.
    """

    def norm(self, v):
        return float(blas.dnrm2(v))

    def dot(self, v, w):
        return float(blas.ddot(v, w))

    def axpy(self, alpha, x, y):
        y[...] = blas.daxpy(x, y, a=alpha)

    def project(self, basis, v, out):
        out[...] = blas.dgemv(1.0, basis, v, trans=1)

    def subtract_projection(self, basis, coefficients, v):
        v[...] = blas.dgemv(-1.0, basis, coefficients, beta=1.0, y=v)


_BACKENDS = {
    "numpy": NumpyBackend,
    "blas": BlasBackend,
}


def get_backend(backend=None) -> NumericBackend:
    """
    Resolve ``backend`` to a ``NumericBackend`` instance.

    Accepts ``None`` (numpy), a registered name (``"numpy"``, ``"blas"``)
    or an existing backend instance.
    """
    if backend is None:
        return NumpyBackend()
    if isinstance(backend, NumericBackend):
        return backend
    try:
        return _BACKENDS[backend]()
    except (KeyError, TypeError):
        raise ValueError(
            f"unknown backend {backend!r}, expected one of {sorted(_BACKENDS)}"
        ) from None
