# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Smoke tests for the benchmark module."""

import pytest


def test_time_fn_stats():
    from odeplot.benchmark import _time_fn

    stats = _time_fn(sum, args=([1, 2, 3],), n_warmup=1, n_iter=5)
    assert stats["n_iter"] == 5
    assert stats["min_ms"] <= stats["median_ms"] <= stats["max_ms"]


@pytest.mark.slow
def test_run_all_benchmarks_smoke():
    """Smoke test: run_all_benchmarks returns expected keys with positive timings."""
    from odeplot.benchmark import run_all_benchmarks
    from odeplot.solvers.registry import METHODS

    results = run_all_benchmarks(h=1e-3, verbose=False)

    # Micro-benchmark keys
    for key in list(METHODS) + ["layout", "render"]:
        assert key in results, f"Missing micro-benchmark key: {key}"
        assert results[key]["median_ms"] > 0, f"{key} median_ms should be positive"

    # Macro-benchmark key
    assert "single_run" in results, "Missing single_run macro-benchmark"
    assert results["single_run"]["elapsed_s"] > 0, "single_run elapsed_s should be positive"
