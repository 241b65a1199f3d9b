# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Tuple

import numpy as np

from .base import GramSchmidt
from .layout import split_columns


class ClassicalGramSchmidt(GramSchmidt):
    """
    Classical Gram-Schmidt (CGS) QR factorization.

    Each column of A is projected onto all previously finalized columns
    of Q in one batched matrix-vector product, the projection is removed
    in a second one, and the remainder is normalized.

    Because the projection coefficients are taken against the original
    column of A instead of the partially corrected vector, CGS loses
    orthogonality on ill-conditioned input. Use
    ``ReorthogonalizedGramSchmidt`` or ``ModifiedGramSchmidt`` there.

    Example
    -------
    >>> import numpy as np
    >>> A = np.random.randn(10, 4)
    >>> engine = ClassicalGramSchmidt.from_matrix(A)
    >>> np.allclose(engine.compute(A).q @ engine.r, A)
    True
    """

    def _compute(self, a: np.ndarray) -> None:
        backend = self._backend
        q, r = self._q, self._r

        for i in range(self._shape[1]):
            a_column = a[:, i]
            done, q_column = split_columns(q, i)
            q_column[:] = a_column

            if i > 0:
                # R[:i, i] is fully overwritten, so no clearing between calls
                r_column = r[:i, i]
                backend.project(done, a_column, r_column)
                backend.subtract_projection(done, r_column, q_column)

            norm = backend.norm(q_column)
            self._check_norm(norm, a, i)
            q_column /= norm
            r[i, i] = backend.dot(a_column, q_column)


def cgs(a: np.ndarray, backend=None) -> Tuple[np.ndarray, np.ndarray]:
    """
    One-shot classical Gram-Schmidt, returning copies of (Q, R).

    Prefer constructing a ``ClassicalGramSchmidt`` when factorizing many
    matrices of the same shape.
    """
    engine = ClassicalGramSchmidt.from_matrix(a, backend=backend)
    return engine.compute(a).factors()
