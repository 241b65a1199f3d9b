# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Parallel modified Gram-Schmidt.

Uses the early projection ordering: once column i is normalized, removing
its projection from each outstanding column only reads column i and writes
that one column. The outstanding columns are split into disjoint index
ranges, one task per range, and every task is joined before column i+1 is
normalized.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .base import GramSchmidt
from .layout import MemoryLayout

logger = logging.getLogger(__name__)


def _default_workers() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class ParallelConfig:
    """
    Worker pool settings for ``ParallelModifiedGramSchmidt``.

    Attributes:
        num_workers: Number of threads in the pool of each ``compute`` call.
        min_chunk: Smallest number of target columns handed to one task.
    """

    num_workers: int = field(default_factory=_default_workers)
    min_chunk: int = 1

    def __post_init__(self) -> None:
        if self.num_workers < 1:
            raise ValueError(f"num_workers must be >= 1, got {self.num_workers}")
        if self.min_chunk < 1:
            raise ValueError(f"min_chunk must be >= 1, got {self.min_chunk}")

    def partition(self, start: int, stop: int) -> List[range]:
        """
        Split ``range(start, stop)`` into contiguous, disjoint, non-empty
        ranges, at most ``num_workers`` of them.
        """
        total = stop - start
        if total <= 0:
            return []
        chunks = max(1, min(self.num_workers, total // self.min_chunk))
        size, extra = divmod(total, chunks)
        ranges = []
        lo = start
        for k in range(chunks):
            hi = lo + size + (1 if k < extra else 0)
            ranges.append(range(lo, hi))
            lo = hi
        return ranges


class ParallelModifiedGramSchmidt(GramSchmidt):
    """
    Modified Gram-Schmidt with the projection removal spread over threads.

    Agrees with ``ModifiedGramSchmidt`` to working precision; no test
    should rely on bit-identical output between the two.

    Parameters
    ----------
    shape, layout, backend :
        As for every ``GramSchmidt`` engine.
    config : ParallelConfig, optional
        Worker pool settings, ``ParallelConfig()`` by default.
    """

    def __init__(
        self,
        shape,
        layout=MemoryLayout.ROW_MAJOR,
        backend=None,
        config: Optional[ParallelConfig] = None,
    ):
        super().__init__(shape, layout, backend=backend)
        self._config = config if config is not None else ParallelConfig()

    @property
    def config(self) -> ParallelConfig:
        return self._config

    def _compute(self, a: np.ndarray) -> None:
        backend = self._backend
        q, r = self._q, self._r
        n = self._shape[1]
        q[...] = a

        with ThreadPoolExecutor(max_workers=self._config.num_workers) as pool:
            for i in range(n):
                q_column = q[:, i]

                norm = backend.norm(q_column)
                self._check_norm(norm, a, i)
                r[i, i] = norm
                q_column /= norm

                ranges = self._config.partition(i + 1, n)
                if not ranges:
                    continue
                futures = [
                    pool.submit(self._remove_projection, i, span) for span in ranges
                ]
                # barrier: column i+1 may only be normalized after every task
                for future in futures:
                    future.result()

        logger.debug(
            "parallel MGS finished %d columns with %d workers",
            n,
            self._config.num_workers,
        )

    def _remove_projection(self, i: int, span: range) -> None:
        # Writes only columns span of Q and entries R[i, span], disjoint
        # from every other task of the same step.
        backend = self._backend
        q_column = self._q[:, i]
        targets = self._q[:, span.start : span.stop]
        r_row = self._r[i, span.start : span.stop]

        for k in range(targets.shape[1]):
            w = targets[:, k]
            projection = backend.dot(q_column, w)
            r_row[k] = projection
            backend.axpy(-projection, q_column, w)


def parallel_mgs(
    a: np.ndarray, config: Optional[ParallelConfig] = None, backend=None
) -> Tuple[np.ndarray, np.ndarray]:
    """One-shot parallel modified Gram-Schmidt, returning copies of (Q, R)."""
    engine = ParallelModifiedGramSchmidt.from_matrix(a, backend=backend, config=config)
    return engine.compute(a).factors()
