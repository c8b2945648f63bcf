# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Data-to-pixel coordinate mapping.

Both functions accept scalars or numpy arrays. A data range of zero width
maps every value to the middle of the pixel range.
"""

import math

import numpy as np


def x_to_pixel(v, data, pixels):
    if data.diff == 0.0:
        return np.zeros_like(np.asarray(v, dtype=float)) + (pixels.min + pixels.diff / 2)
    return pixels.min + (np.asarray(v, dtype=float) - data.min) / data.diff * pixels.diff


def y_to_pixel(v, data, pixels):
    # raster y grows downward: data max lands on pixels.min
    if data.diff == 0.0:
        return np.zeros_like(np.asarray(v, dtype=float)) + (pixels.min + pixels.diff / 2)
    return pixels.max - (np.asarray(v, dtype=float) - data.min) / data.diff * pixels.diff


def to_int(d):
    """Round half up to the nearest integer pixel."""
    return int(math.floor(d + 0.5))
