# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Läuchli matrix stability demonstration.

The Läuchli matrix stacks a row of ones on top of ε·I. For small ε its
columns are nearly parallel, which exposes the loss of orthogonality of
classical Gram-Schmidt.

Run with ``python -m gramschmidt.lauchli``.
"""

import numpy as np
import pandas as pd

from .cgs import cgs
from .cgs2 import cgs2
from .mgs import mgs
from .utils import orthogonality_error, reconstruction_error


def lauchli(n: int, epsilon: float) -> np.ndarray:
    """Return the (n+1)-by-n Läuchli matrix."""
    A = np.zeros((n + 1, n))
    A[0, :] = 1.0
    A[1:, :][np.diag_indices(n)] = epsilon
    return A


def lauchli_report(n: int = 3, epsilon: float = 1e-4) -> pd.DataFrame:
    """
    Factorize the Läuchli matrix with every sequential method and report
    ‖I − QᵀQ‖_F and the relative reconstruction error.

    ``cgs repeated`` runs CGS a second time on the Q of the first run.
    """
    A = lauchli(n, epsilon)

    Q_cgs, R_cgs = cgs(A)
    Q_rep, R_rep = cgs(Q_cgs)
    runs = [
        ("cgs", A, Q_cgs, R_cgs),
        ("cgs repeated", Q_cgs, Q_rep, R_rep),
        ("cgs2", A, *cgs2(A)),
        ("mgs", A, *mgs(A)),
    ]

    records = [
        (name, orthogonality_error(Q), reconstruction_error(M, Q, R))
        for name, M, Q, R in runs
    ]
    return pd.DataFrame(records, columns=["method", "orth_err", "recon_err"])


if __name__ == "__main__":
    epsilon = 1e-4
    print(f"Epsilon used: {epsilon}\n")
    print(f"Lauchli matrix:\n{lauchli(3, epsilon)}\n")
    print(lauchli_report(3, epsilon).to_string(index=False))
