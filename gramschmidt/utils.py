# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

EPS: float = 1e-12


def orthogonality_error(Q: np.ndarray) -> float:
    """Frobenius norm of I - QᵀQ."""
    n = Q.shape[1]
    return float(np.linalg.norm(np.eye(n) - Q.T @ Q, ord="fro"))


def reconstruction_error(A: np.ndarray, Q: np.ndarray, R: np.ndarray) -> float:
    """‖A - QR‖_F relative to ‖A‖_F (absolute for matrices smaller than 1)."""
    return float(
        np.linalg.norm(A - Q @ R, ord="fro") / max(1.0, np.linalg.norm(A, ord="fro"))
    )


def is_orthogonal(Q: np.ndarray, tol: float = EPS) -> bool:
    """True if every entry of QᵀQ is within ``tol`` of the identity."""
    n = Q.shape[1]
    return bool(np.allclose(Q.T @ Q, np.eye(n), rtol=0.0, atol=tol))

