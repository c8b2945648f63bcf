# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod

import numpy as np
from numba import njit


@njit(cache=True, error_model="numpy")
def log_rational_rhs(x, y):
    """dy/dx = y / (2x + y - 4 ln x). Undefined for x <= 0."""
    return y / (2.0 * x + y - 4.0 * np.log(x))


@njit(cache=True, error_model="numpy")
def exponential_rhs(x, y):
    return y


class ODEProblem(ABC):
    """First-order initial value problem dy/dx = f(x, y), y(x0) = y0."""

    name = None

    def __init__(self, x0=1.0, y0=1.0):
        self.x0 = x0
        self.y0 = y0

    @property
    @abstractmethod
    def rhs(self):
        """numba-compiled f(x, y)."""

    def exact(self, x):
        """Closed-form solution at x, or None when not known."""
        return None


class LogRationalProblem(ODEProblem):
    name = "log_rational"

    @property
    def rhs(self):
        return log_rational_rhs


class ExponentialProblem(ODEProblem):
    """dy/dx = y with exact solution y0 * exp(x - x0)."""

    name = "exponential"

    @property
    def rhs(self):
        return exponential_rhs

    def exact(self, x):
        return self.y0 * np.exp(np.asarray(x, dtype=float) - self.x0)


PROBLEMS = {
    LogRationalProblem.name: LogRationalProblem,
    ExponentialProblem.name: ExponentialProblem,
}


def get_problem(name, x0=1.0, y0=1.0):
    try:
        cls = PROBLEMS[name]
    except KeyError:
        raise ValueError(
            f"Unknown problem: {name!r} (choose from {sorted(PROBLEMS)})"
        ) from None
    return cls(x0=x0, y0=y0)
