# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
gramschmidt
===========

Reusable QR factorizations of dense real matrices by Gram-Schmidt
orthogonalization.

Public API
~~~~~~~~~~
- Engines (construct once, ``compute`` many times)
    - `ClassicalGramSchmidt` (CGS)
    - `ReorthogonalizedGramSchmidt` (CGS2)
    - `ModifiedGramSchmidt` (MGS)
    - `ParallelModifiedGramSchmidt`, configured by `ParallelConfig`
- One-shot functions
    - `cgs`, `cgs2`, `mgs`, `parallel_mgs`, `qr`, `least_squares`
- Layout and numeric backends
    - `MemoryLayout`, `resolve_layout`
    - `NumpyBackend`, `BlasBackend`
- Diagnostics
    - `orthogonality_error`, `reconstruction_error`, `lauchli`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import numpy as np, gramschmidt as gs
>>> A = np.random.randn(5, 3)
>>> engine = gs.ModifiedGramSchmidt.from_matrix(A)
>>> np.allclose(engine.compute(A).q @ engine.r, A)
True
"""

from importlib.metadata import version as _pkg_version

from .backends import BlasBackend, NumericBackend, NumpyBackend
from .base import GramSchmidt

# ---------------------------------------------------------------------
# Re-export the high-level names users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .cgs import ClassicalGramSchmidt, cgs
from .cgs2 import ReorthogonalizedGramSchmidt, cgs2
from .errors import (
    GramSchmidtError,
    IncompatibleLayoutsError,
    LinearlyDependentError,
    NonContiguousError,
    ShapeMismatchError,
)
from .lauchli import lauchli, lauchli_report
from .layout import MemoryLayout, resolve_layout
from .mgs import ModifiedGramSchmidt, early_projection_mgs, mgs
from .parallel import ParallelConfig, ParallelModifiedGramSchmidt, parallel_mgs
from .qr import least_squares, qr
from .utils import is_orthogonal, orthogonality_error, reconstruction_error

__all__ = [
    "GramSchmidt",
    "ClassicalGramSchmidt",
    "ReorthogonalizedGramSchmidt",
    "ModifiedGramSchmidt",
    "ParallelModifiedGramSchmidt",
    "ParallelConfig",
    "cgs",
    "cgs2",
    "mgs",
    "early_projection_mgs",
    "parallel_mgs",
    "qr",
    "least_squares",
    "MemoryLayout",
    "resolve_layout",
    "NumericBackend",
    "NumpyBackend",
    "BlasBackend",
    "GramSchmidtError",
    "NonContiguousError",
    "IncompatibleLayoutsError",
    "ShapeMismatchError",
    "LinearlyDependentError",
    "orthogonality_error",
    "reconstruction_error",
    "is_orthogonal",
    "lauchli",
    "lauchli_report",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show gramschmidt”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
