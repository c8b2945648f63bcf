# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import numpy as np
import pytest
from odeplot.grid import SampleGrid
from odeplot.problems import get_problem
from odeplot.solvers.registry import integrate

def test_grid_rejects_zero_step():
    with pytest.raises(ValueError):
        SampleGrid(h=0.0)

def test_grid_rejects_negative_step():
    with pytest.raises(ValueError):
        SampleGrid(h=-0.1)

def test_grid_rejects_nan_step():
    with pytest.raises(ValueError):
        SampleGrid(h=float("nan"))

def test_grid_rejects_step_larger_than_span():
    with pytest.raises(ValueError):
        SampleGrid(h=2.0, span=1.0)

def test_unknown_problem():
    with pytest.raises(ValueError):
        get_problem("lorenz")

def test_integrate_unknown_method():
    with pytest.raises(ValueError):
        integrate("euler_implicit", np.zeros(3), np.zeros(3), 0.1)

def test_integrate_rejects_length_mismatch():
    with pytest.raises(ValueError):
        integrate("euler", np.array([1.0, 1.1, 1.2]), np.zeros(2), 0.1)

def test_integrate_rejects_single_point():
    with pytest.raises(ValueError):
        integrate("rk4", np.array([1.0]), np.array([1.0]), 0.1)

def test_integrate_rejects_non_float_output():
    with pytest.raises(ValueError):
        integrate("euler", np.array([1.0, 1.1]), [1.0, 0.0], 0.1)
