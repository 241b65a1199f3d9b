# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from gramschmidt.backends import BlasBackend, NumericBackend, NumpyBackend, get_backend

BACKENDS = [NumpyBackend(), BlasBackend()]


def _matrix(order):
    rng = np.random.default_rng(seed=3)
    return np.array(rng.standard_normal((7, 4)), order=order)


@pytest.mark.parametrize("backend", BACKENDS, ids=repr)
@pytest.mark.parametrize("order", ["C", "F"])
def test_norm_and_dot_on_column_views(backend, order):
    M = _matrix(order)
    v, w = M[:, 1], M[:, 3]

    assert backend.norm(v) == pytest.approx(np.linalg.norm(v), rel=1e-14)
    assert backend.dot(v, w) == pytest.approx(float(v @ w), rel=1e-14, abs=1e-14)


@pytest.mark.parametrize("backend", BACKENDS, ids=repr)
@pytest.mark.parametrize("order", ["C", "F"])
def test_axpy_writes_into_the_view(backend, order):
    M = _matrix(order)
    expected = M[:, 2] - 0.5 * M[:, 0]
    untouched = M[:, [0, 1, 3]].copy()

    backend.axpy(-0.5, M[:, 0], M[:, 2])

    np.testing.assert_allclose(M[:, 2], expected, rtol=1e-14, atol=1e-15)
    np.testing.assert_array_equal(M[:, [0, 1, 3]], untouched)


@pytest.mark.parametrize("backend", BACKENDS, ids=repr)
@pytest.mark.parametrize("order", ["C", "F"])
def test_project_and_subtract_projection(backend, order):
    M = _matrix(order)
    R = np.zeros((4, 4), order=order)
    basis, v = M[:, :3], M[:, 3]
    coefficients = R[:3, 3]

    expected_coefficients = basis.T @ v
    expected_v = v - basis @ expected_coefficients

    backend.project(basis, v, coefficients)
    np.testing.assert_allclose(R[:3, 3], expected_coefficients, rtol=1e-13)

    backend.subtract_projection(basis, coefficients, v)
    np.testing.assert_allclose(M[:, 3], expected_v, rtol=1e-13, atol=1e-14)
    # nothing but the target column of R was written
    assert np.count_nonzero(R[:, :3]) == 0


def test_get_backend():
    assert isinstance(get_backend(None), NumpyBackend)
    assert isinstance(get_backend("blas"), BlasBackend)
    backend = NumpyBackend()
    assert get_backend(backend) is backend
    with pytest.raises(ValueError):
        get_backend("cuda")


def test_custom_backend_is_used():
    class CountingBackend(NumpyBackend):
        def __init__(self):
            self.calls = 0

        def dot(self, v, w):
            self.calls += 1
            return super().dot(v, w)

    from gramschmidt import ModifiedGramSchmidt

    backend = CountingBackend()
    assert isinstance(backend, NumericBackend)
    A = np.eye(4)
    ModifiedGramSchmidt.from_matrix(A, backend=backend).compute(A)
    # one dot per pair j < i
    assert backend.calls == 6


@pytest.mark.parametrize("order", ["C", "F"])
def test_blas_backend_matches_numpy_backend_in_either_layout(order):
    from gramschmidt import ReorthogonalizedGramSchmidt

    A = _matrix(order)
    blas_engine = ReorthogonalizedGramSchmidt.from_matrix(A, backend=BlasBackend())
    numpy_engine = ReorthogonalizedGramSchmidt.from_matrix(A, backend=NumpyBackend())
    blas_engine.compute(A)
    numpy_engine.compute(A)

    assert blas_engine.layout is numpy_engine.layout
    np.testing.assert_allclose(blas_engine.q, numpy_engine.q, atol=1e-13)
    np.testing.assert_allclose(blas_engine.r, numpy_engine.r, atol=1e-13)
