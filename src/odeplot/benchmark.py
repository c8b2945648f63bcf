# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Benchmarking utilities for profiling odeplot hot paths.

Provides micro-benchmarks (each integrator kernel, chart layout) and a
macro-benchmark (integrate all methods + render) with timing and optional
cProfile output.
"""

import time
import cProfile
import pstats
import io
import numpy as np


def _time_fn(fn, args=(), kwargs=None, n_warmup=3, n_iter=100):
    """Time a function over n_iter calls, returning median and stats."""
    kwargs = kwargs or {}
    for _ in range(n_warmup):
        fn(*args, **kwargs)
    times = []
    for _ in range(n_iter):
        t0 = time.perf_counter_ns()
        fn(*args, **kwargs)
        t1 = time.perf_counter_ns()
        times.append((t1 - t0) * 1e-6)  # ms
    times = np.array(times)
    return {
        "median_ms": float(np.median(times)),
        "mean_ms": float(np.mean(times)),
        "std_ms": float(np.std(times)),
        "min_ms": float(np.min(times)),
        "max_ms": float(np.max(times)),
        "n_iter": n_iter,
    }


def bench_method(name, h=1e-4, n_iter=200):
    """Benchmark one integrator kernel on the demo equation."""
    from odeplot.grid import SampleGrid
    from odeplot.problems import log_rational_rhs
    from odeplot.solvers.registry import METHODS
    grid = SampleGrid(h)
    kernel = METHODS[name].kernel
    y = grid.new_solution(1.0)
    return _time_fn(kernel, args=(log_rational_rhs, grid.x, y, h), n_iter=n_iter)


def _make_plot(h=0.01):
    from odeplot.render import plot_run
    from odeplot.solvers.registry import METHODS
    from odeplot.study import single_run
    result = single_run(dict(h=h, methods=list(METHODS)))
    return plot_run(result)


def bench_layout(h=0.01, n_iter=50):
    """Benchmark compute_layout for all six curves."""
    plot = _make_plot(h)
    return _time_fn(plot.layout, n_iter=n_iter)


def bench_render(h=0.01, n_iter=20):
    """Benchmark layout + paint for all six curves."""
    plot = _make_plot(h)
    return _time_fn(plot.render, n_iter=n_iter)


def bench_single_run(h=1e-3):
    """Time integrate-all-methods + render (macro benchmark)."""
    from odeplot.render import plot_run
    from odeplot.solvers.registry import METHODS
    from odeplot.study import single_run
    t0 = time.perf_counter()
    result = single_run(dict(h=h, methods=list(METHODS)))
    plot_run(result).render()
    elapsed = time.perf_counter() - t0
    return {
        "elapsed_s": elapsed,
        "n": result["params"]["n"],
    }


def profile_single_run(h=1e-3):
    """Run cProfile on integrate + render, return stats as string."""
    pr = cProfile.Profile()
    pr.enable()
    bench_single_run(h)
    pr.disable()
    s = io.StringIO()
    ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
    ps.print_stats(30)
    return s.getvalue()


def run_all_benchmarks(h=1e-4, verbose=True):
    """Run all micro and macro benchmarks. Returns dict of results."""
    from odeplot.solvers.registry import METHODS
    results = {}

    for name in METHODS:
        if verbose:
            print(f"  {name}...", end="", flush=True)
        r = bench_method(name, h=h)
        results[name] = r
        if verbose:
            print(f" {r['median_ms']:.3f} ms (median, n={r['n_iter']})")

    for name, fn in [("layout", bench_layout), ("render", bench_render)]:
        if verbose:
            print(f"  {name}...", end="", flush=True)
        r = fn()
        results[name] = r
        if verbose:
            print(f" {r['median_ms']:.3f} ms (median, n={r['n_iter']})")

    if verbose:
        print(f"  single_run (h=1e-3, all methods + render)...", end="", flush=True)
    r = bench_single_run()
    results["single_run"] = r
    if verbose:
        print(f" {r['elapsed_s']:.2f} s")

    return results


def compare_results(before, after):
    """Print a comparison table of two benchmark result sets."""
    print(f"\n{'Benchmark':<22} {'Before':>10} {'After':>10} {'Speedup':>10}")
    print("-" * 55)
    for key in before:
        if key == "single_run":
            b = before[key]["elapsed_s"]
            a = after[key]["elapsed_s"]
            speedup = b / a if a > 0 else float("inf")
            print(f"{key:<22} {b:>9.2f}s {a:>9.2f}s {speedup:>9.1f}x")
        else:
            b = before[key]["median_ms"]
            a = after[key]["median_ms"]
            speedup = b / a if a > 0 else float("inf")
            print(f"{key:<22} {b:>8.3f}ms {a:>8.3f}ms {speedup:>9.1f}x")


if __name__ == "__main__":
    print("=" * 55)
    print("odeplot Benchmarks")
    print("=" * 55)
    print()

    print("cProfile of integrate + render (h=1e-3):")
    print(profile_single_run())

    print("Micro-benchmarks (h=1e-4):")
    run_all_benchmarks()
