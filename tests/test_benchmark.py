# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from gramschmidt.benchmark import (
    COLUMNS,
    benchmark_parallel,
    benchmark_projection_order,
    benchmark_sizes,
)
from gramschmidt.parallel import ParallelConfig


def test_benchmark_sizes():
    df = benchmark_sizes(sizes=[(12, 6), (20, 20)], repeats=1)

    assert list(df.columns) == COLUMNS
    assert len(df) == 2 * 4
    assert (df["sec"] >= 0).all()
    assert set(df["size"]) == {"12×6", "20×20"}


def test_benchmark_projection_order():
    df = benchmark_projection_order(n=16, repeats=1)

    assert list(df["kernel"]) == ["mgs late projection", "mgs early projection"]
    assert (df["orth_err"] < 1e-12).all()


def test_benchmark_parallel():
    configs = [ParallelConfig(num_workers=1), ParallelConfig(num_workers=2)]
    df = benchmark_parallel(n=16, configs=configs, repeats=1)

    assert list(df["kernel"]) == ["mgs", "parallel_mgs[1]", "parallel_mgs[2]"]
    assert (df["orth_err"] < 1e-12).all()
