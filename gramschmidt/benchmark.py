#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Timing harness for the Gram-Schmidt engines.

Run with ``python -m gramschmidt.benchmark``. Each engine is built once
per matrix and only ``compute`` is timed.
"""

import logging
import time

import numpy as np
import pandas as pd

from .backends import get_backend
from .mgs import ModifiedGramSchmidt, early_projection_mgs
from .parallel import ParallelConfig, ParallelModifiedGramSchmidt
from .qr import ENGINES
from .utils import orthogonality_error

logger = logging.getLogger(__name__)

REPEATS = 5  # best of 5 runs leads to stable numbers
SIZES = [(64, 64), (256, 256), (1024, 256)]
COLUMNS = ["kernel", "size", "sec", "orth_err"]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def benchmark_sizes(sizes=SIZES, repeats=REPEATS, backend=None, seed=0) -> pd.DataFrame:
    """Time every engine on random matrices of each size."""
    rng = np.random.default_rng(seed)
    records = []
    for m, n in sizes:
        A = rng.standard_normal((m, n))
        for name, engine_class in ENGINES.items():
            engine = engine_class.from_matrix(A, backend=backend)
            t = min(wall(engine.compute, A) for _ in range(repeats))
            records.append((name, f"{m}×{n}", t, orthogonality_error(engine.q)))
            logger.debug("%s %dx%d: %.6f s", name, m, n, t)
    return pd.DataFrame(records, columns=COLUMNS)


def benchmark_projection_order(n=256, repeats=REPEATS, backend=None, seed=0) -> pd.DataFrame:
    """Compare late projection (the MGS engine) with early projection."""
    rng = np.random.default_rng(seed)
    A = rng.standard_normal((n, n))
    backend = get_backend(backend)

    engine = ModifiedGramSchmidt.from_matrix(A, backend=backend)
    t_late = min(wall(engine.compute, A) for _ in range(repeats))
    t_early = min(wall(early_projection_mgs, A, backend) for _ in range(repeats))
    Q_early, _ = early_projection_mgs(A, backend)

    records = [
        ("mgs late projection", f"{n}×{n}", t_late, orthogonality_error(engine.q)),
        ("mgs early projection", f"{n}×{n}", t_early, orthogonality_error(Q_early)),
    ]
    return pd.DataFrame(records, columns=COLUMNS)


def benchmark_parallel(
    n=256, configs=None, repeats=REPEATS, backend=None, seed=0
) -> pd.DataFrame:
    """Time the sequential MGS engine against the parallel one."""
    rng = np.random.default_rng(seed)
    A = rng.standard_normal((n, n))
    if configs is None:
        configs = [ParallelConfig(num_workers=w) for w in (1, 2, 4)]

    engine = ModifiedGramSchmidt.from_matrix(A, backend=backend)
    t = min(wall(engine.compute, A) for _ in range(repeats))
    records = [("mgs", f"{n}×{n}", t, orthogonality_error(engine.q))]

    for config in configs:
        engine = ParallelModifiedGramSchmidt.from_matrix(A, backend=backend, config=config)
        t = min(wall(engine.compute, A) for _ in range(repeats))
        records.append(
            (
                f"parallel_mgs[{config.num_workers}]",
                f"{n}×{n}",
                t,
                orthogonality_error(engine.q),
            )
        )
    return pd.DataFrame(records, columns=COLUMNS)


def main():
    for label, df in [
        ("sizes", benchmark_sizes()),
        ("projection_order", benchmark_projection_order()),
        ("parallel", benchmark_parallel()),
    ]:
        print(df.to_string(index=False))
        print()
        df.to_csv(f"bench_{label}.csv", index=False)


if __name__ == "__main__":
    main()
