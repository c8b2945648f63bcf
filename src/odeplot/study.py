# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

# src/odeplot/study.py
import logging
import math
import numpy as np
from concurrent.futures import ProcessPoolExecutor, as_completed
from odeplot.grid import SampleGrid
from odeplot.problems import get_problem
from odeplot.solvers.registry import METHODS, integrate

logger = logging.getLogger(__name__)


def single_run(params):
    """Integrate one problem on one grid with every requested method.

    Args:
        params: dict with h, methods, and optionally problem, x0, y0, span.

    Returns:
        dict with params, the grid ``x``, per-method ``solutions``, a
        per-method ``finite`` flag and, when the problem has a closed form,
        per-method ``max_error``.
    """
    h = params["h"]
    methods = params["methods"]
    problem = get_problem(
        params.get("problem", "log_rational"),
        x0=params.get("x0", 1.0),
        y0=params.get("y0", 1.0),
    )
    grid = SampleGrid(h, x0=problem.x0, span=params.get("span", 1.0))
    exact = problem.exact(grid.x)

    solutions = {}
    finite = {}
    max_error = {}
    for name in methods:
        # each method gets its own copy of the initial state
        y = integrate(name, grid.x, grid.new_solution(problem.y0), h, rhs=problem.rhs)
        solutions[name] = y
        finite[name] = bool(np.all(np.isfinite(y)))
        if not finite[name]:
            logger.warning(
                "Method %s produced non-finite values for %s (h=%s)",
                name, problem.name, h,
            )
        if exact is not None:
            max_error[name] = float(np.max(np.abs(y - exact)))
        else:
            max_error[name] = None

    return {
        "params": {
            "problem": problem.name,
            "h": h,
            "x0": problem.x0,
            "y0": problem.y0,
            "span": grid.span,
            "n": grid.n,
        },
        "x": grid.x,
        "solutions": solutions,
        "finite": finite,
        "max_error": max_error,
    }


def build_sweep_grid(h_vals, methods=None, problem="exponential", x0=1.0,
                     y0=1.0, span=1.0):
    """Build list of parameter dicts for a step-size sweep."""
    methods = list(methods) if methods else list(METHODS)
    grid = []
    for h in h_vals:
        grid.append(dict(
            h=h, methods=methods, problem=problem, x0=x0, y0=y0, span=span,
        ))
    return grid


def run_sweep(param_list, max_workers=None, progress=True):
    """Run a step-size sweep in parallel.

    Args:
        param_list: list of param dicts from build_sweep_grid.
        max_workers: number of parallel processes (None = cpu count).
        progress: show tqdm progress bar if available.

    Returns:
        list of result dicts, in the same order as param_list.
    """
    n = len(param_list)
    logger.info("Starting sweep: %d cases, max_workers=%s", n, max_workers)

    # Soft import of tqdm
    tqdm_bar = None
    if progress:
        try:
            from tqdm.auto import tqdm
            tqdm_bar = tqdm(total=n, desc="Sweep", unit="case")
        except ImportError:
            pass

    results = [None] * n

    with ProcessPoolExecutor(max_workers=max_workers) as pool:
        future_to_index = {}
        for i, params in enumerate(param_list):
            future = pool.submit(single_run, params)
            future_to_index[future] = i

        for future in as_completed(future_to_index):
            idx = future_to_index[future]
            results[idx] = future.result()
            p = results[idx]["params"]
            logger.debug(
                "Case %d/%d done: problem=%s h=%s n=%s",
                idx + 1, n, p["problem"], p["h"], p["n"],
            )
            if tqdm_bar is not None:
                tqdm_bar.update(1)

    if tqdm_bar is not None:
        tqdm_bar.close()

    logger.info("Sweep complete: %d cases finished", n)
    return results


def observed_orders(results):
    """Observed convergence order of each method between successive step sizes.

    order = log(e1 / e2) / log(h1 / h2) for consecutive runs sorted by
    decreasing h. Pairs where either error is zero, missing or non-finite
    are skipped.

    Returns:
        dict method -> list of (h2, order).
    """
    ordered = sorted(results, key=lambda r: r["params"]["h"], reverse=True)
    orders = {}
    for coarse, fine in zip(ordered, ordered[1:]):
        h1 = coarse["params"]["h"]
        h2 = fine["params"]["h"]
        for name, e1 in coarse["max_error"].items():
            e2 = fine["max_error"].get(name)
            if e1 is None or e2 is None:
                continue
            if not (e1 > 0 and e2 > 0 and math.isfinite(e1) and math.isfinite(e2)):
                continue
            orders.setdefault(name, []).append(
                (h2, math.log(e1 / e2) / math.log(h1 / h2))
            )
    return orders
