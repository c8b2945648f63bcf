# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import math

import numpy as np
import pytest
from odeplot.grid import SampleGrid
from odeplot.problems import exponential_rhs, log_rational_rhs
from odeplot.solvers.registry import METHODS, integrate


def f(x, y):
    """Pure-Python copy of the demo right-hand side."""
    return y / (2 * x + y - 4 * math.log(x))


@pytest.mark.parametrize("method", list(METHODS))
def test_initial_value_unchanged(method):
    g = SampleGrid(h=0.1)
    y = g.new_solution(1.0)
    integrate(method, g.x, y, 0.1)
    assert y[0] == 1.0


@pytest.mark.parametrize("method", list(METHODS))
def test_fills_in_place_and_returns_same_array(method):
    g = SampleGrid(h=0.1)
    y = g.new_solution(1.0)
    out = integrate(method, g.x, y, 0.1)
    assert out is y
    assert np.all(np.isfinite(y))
    assert np.all(y[1:] != 0.0)


@pytest.mark.parametrize("method", list(METHODS))
def test_two_point_grid(method):
    """n = 2 is enough for every method: only the first step is taken."""
    x = np.array([1.0, 1.1])
    y = np.array([1.0, 0.0])
    integrate(method, x, y, 0.1)
    assert np.isfinite(y[1])


def test_rhs_matches_formula():
    assert np.isclose(log_rational_rhs(1.0, 1.0), 1.0 / 3.0)
    assert np.isclose(log_rational_rhs(1.5, 2.0), f(1.5, 2.0))


def test_forward_euler_first_step():
    """y[1] = y[0] + h f(x0, y0) with f(1, 1) = 1/3."""
    x = np.array([1.0, 1.1])
    y = np.array([1.0, 0.0])
    integrate("euler", x, y, 0.1)
    assert np.isclose(y[1], 1.0 + 0.1 * f(1.0, 1.0), rtol=1e-14)
    assert np.isclose(y[1], 1.0 + 0.1 / 3.0, rtol=1e-14)


def test_forward_euler_recurrence():
    g = SampleGrid(h=0.1)
    y = integrate("euler", g.x, g.new_solution(1.0), 0.1)
    for i in range(g.n - 1):
        assert np.isclose(y[i + 1], y[i] + 0.1 * f(g.x[i], y[i]), rtol=1e-13)


def test_central_difference_recurrence():
    g = SampleGrid(h=0.1)
    y = integrate("central", g.x, g.new_solution(1.0), 0.1)
    assert np.isclose(y[1], y[0] + 0.1 * f(g.x[0], y[0]), rtol=1e-13)
    for i in range(1, g.n - 1):
        assert np.isclose(y[i + 1], y[i - 1] + 0.2 * f(g.x[i], y[i]), rtol=1e-13)


def test_modified_euler_recurrence():
    h = 0.1
    g = SampleGrid(h=h)
    y = integrate("modified", g.x, g.new_solution(1.0), h)
    for i in range(g.n - 1):
        yt = y[i] + h / 2 * f(g.x[i], y[i])
        assert np.isclose(y[i + 1], y[i] + h * f(g.x[i] + h / 2, yt), rtol=1e-13)


def test_recount_is_heun():
    h = 0.1
    g = SampleGrid(h=h)
    y = integrate("recount", g.x, g.new_solution(1.0), h)
    for i in range(g.n - 1):
        yt = y[i] + h * f(g.x[i], y[i])
        expected = y[i] + h / 2 * (f(g.x[i], y[i]) + f(g.x[i] + h, yt))
        assert np.isclose(y[i + 1], expected, rtol=1e-13)


def test_rk4_single_step():
    h = 0.1
    x = np.array([1.0, 1.1])
    y = np.array([1.0, 0.0])
    integrate("rk4", x, y, h)
    k0 = f(1.0, 1.0)
    k1 = f(1.0 + h / 2, 1.0 + h / 2 * k0)
    k2 = f(1.0 + h / 2, 1.0 + h / 2 * k1)
    k3 = f(1.0 + h, 1.0 + h * k2)
    assert np.isclose(y[1], 1.0 + h / 6 * (k0 + 2 * k1 + 2 * k2 + k3), rtol=1e-14)


@pytest.mark.parametrize("method", list(METHODS))
def test_custom_rhs(method):
    """Any numba-compiled f(x, y) can be integrated; dy/dx = y grows."""
    g = SampleGrid(h=0.125)
    y = integrate(method, g.x, g.new_solution(1.0), 0.125, rhs=exponential_rhs)
    assert np.all(np.diff(y) > 0)
    assert np.isclose(y[-1], math.e, rtol=0.1)


@pytest.mark.parametrize("method", list(METHODS))
def test_domain_error_propagates_as_nan(method):
    """ln of a negative x poisons the curve silently instead of raising."""
    g = SampleGrid(h=0.25, x0=-1.0)
    y = integrate(method, g.x, g.new_solution(1.0), 0.25)
    assert y[0] == 1.0
    assert np.all(np.isnan(y[1:]))


def test_methods_do_not_share_state():
    g = SampleGrid(h=0.1)
    base = g.new_solution(1.0)
    a = integrate("euler", g.x, base.copy(), 0.1)
    b = integrate("rk4", g.x, base.copy(), 0.1)
    assert np.all(base[1:] == 0.0)
    assert not np.allclose(a, b)
