# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import json
import os

import numpy as np


class _NumpyEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.float32, np.float64)):
            return float(obj)
        if isinstance(obj, (np.int32, np.int64)):
            return int(obj)
        if isinstance(obj, np.bool_):
            return bool(obj)
        return super().default(obj)


def save_run(result, path):
    with open(path, "w") as f:
        json.dump(result, f, cls=_NumpyEncoder, indent=2)


def load_run(path):
    with open(path, "r") as f:
        return json.load(f)


def save_image(image, path, format=None):
    """Write a rendered chart to ``path``.

    The format follows the file extension; a path without one is written as PNG
    with ``.png`` appended.
    """
    root, ext = os.path.splitext(str(path))
    if format is None and not ext:
        path = root + ".png"
        format = "PNG"
    image.save(path, format=format)
    return path
