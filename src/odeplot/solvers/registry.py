# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

from collections import namedtuple

import numpy as np

from odeplot.problems import log_rational_rhs
from odeplot.solvers.adams import adams_bashforth4
from odeplot.solvers.explicit import (
    euler,
    euler_central,
    euler_modified,
    euler_recount,
    runge_kutta4,
)

MethodInfo = namedtuple("MethodInfo", ["kernel", "label", "order", "color"])

# Insertion order is the order methods are drawn and listed in the legend.
# order is the global convergence order as implemented: the forward Euler
# start step caps both multistep schemes (central, adams) at 2.
METHODS = {
    "euler": MethodInfo(euler, "RightD", 1, "black"),
    "central": MethodInfo(euler_central, "CentralD", 2, "cyan"),
    "modified": MethodInfo(euler_modified, "Mod", 2, "green"),
    "recount": MethodInfo(euler_recount, "Recount", 2, "orange"),
    "rk4": MethodInfo(runge_kutta4, "RungeKutta", 4, "pink"),
    "adams": MethodInfo(adams_bashforth4, "Adams", 2, "magenta"),
}


def get_method(name):
    try:
        return METHODS[name]
    except KeyError:
        raise ValueError(
            f"Unknown method: {name!r} (choose from {list(METHODS)})"
        ) from None


def integrate(method, x, y, h, rhs=log_rational_rhs):
    """Run one integrator over the grid x, filling y in place.

    Args:
        method: registry name, e.g. ``"rk4"``.
        x: sample grid, float array of length n >= 2.
        y: solution array of length n with y[0] set.
        h: step size.
        rhs: numba-compiled f(x, y). Defaults to the log-rational demo equation.

    Returns:
        y, mutated.
    """
    info = get_method(method)
    x = np.asarray(x, dtype=np.float64)
    if not isinstance(y, np.ndarray) or y.dtype != np.float64:
        raise ValueError("y must be a float64 numpy array (it is filled in place)")
    if x.ndim != 1 or y.ndim != 1:
        raise ValueError("x and y must be one-dimensional")
    if len(x) != len(y):
        raise ValueError(f"x and y lengths differ: {len(x)} != {len(y)}")
    if len(y) < 2:
        raise ValueError(f"need at least 2 points, got {len(y)}")
    return info.kernel(rhs, x, y, float(h))
