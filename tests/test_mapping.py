# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import numpy as np
from odeplot.chart.mapping import to_int, x_to_pixel, y_to_pixel
from odeplot.chart.options import Range

DATA = Range(0.0, 10.0)
PIXELS = Range(100.0, 300.0)


def test_midpoint_maps_to_midpoint():
    assert x_to_pixel(5.0, DATA, PIXELS) == 200.0
    assert y_to_pixel(5.0, DATA, PIXELS) == 200.0


def test_x_mapping_endpoints():
    assert x_to_pixel(0.0, DATA, PIXELS) == 100.0
    assert x_to_pixel(10.0, DATA, PIXELS) == 300.0


def test_y_mapping_is_inverted():
    assert y_to_pixel(10.0, DATA, PIXELS) == 100.0
    assert y_to_pixel(0.0, DATA, PIXELS) == 300.0


def test_degenerate_range_maps_to_midpoint():
    flat = Range(3.0, 3.0)
    for v in (-1e9, 0.0, 3.0, 42.0):
        assert x_to_pixel(v, flat, PIXELS) == 200.0
        assert y_to_pixel(v, flat, PIXELS) == 200.0


def test_arrays():
    v = np.array([0.0, 2.5, 10.0])
    assert np.allclose(x_to_pixel(v, DATA, PIXELS), [100.0, 150.0, 300.0])
    assert np.allclose(y_to_pixel(v, DATA, PIXELS), [300.0, 250.0, 100.0])
    flat = y_to_pixel(v, Range(1.0, 1.0), PIXELS)
    assert flat.shape == (3,)
    assert np.all(flat == 200.0)


def test_nan_passes_through():
    assert np.isnan(x_to_pixel(float("nan"), DATA, PIXELS))


def test_to_int_rounds_half_up():
    assert to_int(2.5) == 3
    assert to_int(3.5) == 4
    assert to_int(-0.5) == 0
    assert to_int(1.49) == 1
