# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Tuple

import numpy as np

from .cgs import ClassicalGramSchmidt
from .cgs2 import ReorthogonalizedGramSchmidt
from .mgs import ModifiedGramSchmidt
from .parallel import ParallelModifiedGramSchmidt

ENGINES = {
    "cgs": ClassicalGramSchmidt,
    "cgs2": ReorthogonalizedGramSchmidt,
    "mgs": ModifiedGramSchmidt,
    "parallel_mgs": ParallelModifiedGramSchmidt,
}


def _engine_class(method: str):
    try:
        return ENGINES[method]
    except KeyError:
        raise ValueError(
            f"unknown method {method!r}, expected one of {sorted(ENGINES)}"
        ) from None


def qr(A: np.ndarray, method: str = "mgs", backend=None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Thin QR decomposition of a contiguous m-by-n matrix (m ≥ n).

    Parameters:
    A : ndarray
        Full column rank input matrix, C- or F-contiguous.
    method : str
        One of ``"cgs"``, ``"cgs2"``, ``"mgs"``, ``"parallel_mgs"``.
    Returns:
    Q : ndarray
        Orthonormal column matrix
    R : ndarray
        Upper-triangular matrix
    """
    engine = _engine_class(method).from_matrix(A, backend=backend)
    return engine.compute(A).factors()


def least_squares(
    A: np.ndarray, b: np.ndarray, method: str = "mgs", backend=None
) -> np.ndarray:
    """
    Solve min ‖Ax – b‖₂ using a thin Gram-Schmidt QR factorisation (A = QR).

    Returns:
    x : (n, ) or (n, k) ndarray
        The least squares solution to Ax = b
    """
    A = np.asarray(A, dtype=float)
    if not (A.flags.c_contiguous or A.flags.f_contiguous):
        A = np.ascontiguousarray(A)
    Q, R = qr(A, method=method, backend=backend)
    y = Q.T @ np.asarray(b, dtype=float)
    return np.linalg.solve(R, y)
