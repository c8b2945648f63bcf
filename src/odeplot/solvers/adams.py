# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT


import numpy as np
from numba import njit


@njit(error_model="numpy")
def adams_bashforth4(f, x, y, h):
    """Four-step explicit Adams-Bashforth integrator.

    The method needs four past slopes, so the first three points are
    bootstrapped with the lower-order members of the same family:

        y[1] = y[0] + h * f0                                 (1-step, Euler)
        y[2] = y[1] + h/2  * (3 f1 - f0)                     (2-step)
        y[3] = y[2] + h/12 * (23 f2 - 16 f1 + 5 f0)          (3-step)

    and for i >= 3

        y[i+1] = y[i] + h/24 * (55 f_i - 59 f_{i-1} + 37 f_{i-2} - 9 f_{i-3})

    where f_k = f(x[k], y[k]) is kept in a derivative cache of length n.

    Args:
        f: numba-compiled right-hand side f(x, y).
        x: sample grid, length n.
        y: solution array, length n, y[0] set. Overwritten in place.
        h: step size.

    Returns:
        y
    """
    n = len(y)
    df = np.empty(n)
    if n < 2:
        return y

    df[0] = f(x[0], y[0])
    y[1] = y[0] + h * df[0]
    if n < 3:
        return y

    df[1] = f(x[1], y[1])
    y[2] = y[1] + h / 2.0 * (3.0 * df[1] - df[0])
    if n < 4:
        return y

    df[2] = f(x[2], y[2])
    y[3] = y[2] + h / 12.0 * (23.0 * df[2] - 16.0 * df[1] + 5.0 * df[0])

    for i in range(3, n - 1):
        df[i] = f(x[i], y[i])
        y[i + 1] = y[i] + h / 24.0 * (
            55.0 * df[i] - 59.0 * df[i - 1] + 37.0 * df[i - 2] - 9.0 * df[i - 3]
        )
    return y
