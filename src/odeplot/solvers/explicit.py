# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Single-step explicit integrators.

Every kernel has the signature ``kernel(f, x, y, h)`` where ``f`` is a
numba-compiled right-hand side f(x, y), ``x`` the sample grid and ``y`` the
solution array with ``y[0]`` set. ``y[1:]`` is overwritten in place and ``y``
is returned. Nothing is checked: a right-hand side that evaluates to NaN or
Inf (e.g. ln of a non-positive x) carries that value into the rest of the
solution.
"""

from numba import njit


@njit(error_model="numpy")
def euler(f, x, y, h):
    """Forward (explicit) Euler, first order."""
    for i in range(len(y) - 1):
        y[i + 1] = y[i] + h * f(x[i], y[i])
    return y


@njit(error_model="numpy")
def euler_central(f, x, y, h):
    """Central-difference (leapfrog) Euler.

    The first step is a forward Euler step; afterwards each point is reached
    from the point two steps back with the slope at the middle one.
    """
    n = len(y)
    if n < 2:
        return y
    y[1] = y[0] + h * f(x[0], y[0])
    for i in range(1, n - 1):
        y[i + 1] = y[i - 1] + 2.0 * h * f(x[i], y[i])
    return y


@njit(error_model="numpy")
def euler_modified(f, x, y, h):
    """Modified (midpoint) Euler, second order."""
    for i in range(len(y) - 1):
        yt = y[i] + h / 2.0 * f(x[i], y[i])
        y[i + 1] = y[i] + h * f(x[i] + h / 2.0, yt)
    return y


@njit(error_model="numpy")
def euler_recount(f, x, y, h):
    """Euler with recount (Heun predictor-corrector), second order."""
    for i in range(len(y) - 1):
        fi = f(x[i], y[i])
        yt = y[i] + h * fi
        y[i + 1] = y[i] + h / 2.0 * (fi + f(x[i] + h, yt))
    return y


@njit(error_model="numpy")
def runge_kutta4(f, x, y, h):
    """Classical fourth-order Runge-Kutta."""
    for i in range(len(y) - 1):
        k0 = f(x[i], y[i])
        k1 = f(x[i] + h / 2.0, y[i] + h / 2.0 * k0)
        k2 = f(x[i] + h / 2.0, y[i] + h / 2.0 * k1)
        k3 = f(x[i] + h, y[i] + h * k2)
        y[i + 1] = y[i] + h / 6.0 * (k0 + 2.0 * k1 + 2.0 * k2 + k3)
    return y
