# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import math

import numpy as np


class SampleGrid:
    """Uniform 1D sample grid for fixed-step integration.

    x[0] = x0 and x[i+1] = x[i] + h, accumulated point by point so the
    abscissae carry the same rounding as a hand-written stepping loop.

    n = floor(span / h) + 1

    Attributes:
        h: step size
        x0: initial abscissa
        span: length of the integration interval
        n: number of grid points
        x: sample abscissae, shape (n,)
    """

    def __init__(self, h, x0=1.0, span=1.0):
        if not math.isfinite(h) or h <= 0:
            raise ValueError(f"h must be a positive finite number, got {h}")
        if not math.isfinite(span) or span < 0:
            raise ValueError(f"span must be non-negative, got {span}")

        n = int(span / h) + 1
        if n < 2:
            raise ValueError(f"grid needs at least 2 points (span={span}, h={h})")

        self.h = h
        self.x0 = x0
        self.span = span
        self.n = n

        self.x = np.empty(n)
        self.x[0] = x0
        for i in range(n - 1):
            self.x[i + 1] = self.x[i] + h

    def new_solution(self, y0):
        """Return a fresh solution array with y[0] = y0."""
        y = np.zeros(self.n)
        y[0] = y0
        return y
