# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Chart configuration values.

All options are frozen dataclasses; derive variants with
``dataclasses.replace``.
"""

import enum
from dataclasses import dataclass, field

import numpy as np


class Line(enum.Enum):
    NONE = "none"
    SOLID = "solid"
    DASHED = "dashed"


class Marker(enum.Enum):
    NONE = "none"
    CIRCLE = "circle"
    SQUARE = "square"
    DIAMOND = "diamond"
    COLUMN = "column"
    BAR = "bar"


class AxisFormat(enum.Enum):
    NUMBER = "number"
    NUMBER_KGM = "number_kgm"
    NUMBER_INT = "number_int"
    TIME_HM = "time_hm"
    TIME_HMS = "time_hms"
    DATE = "date"
    DATETIME_HM = "datetime_hm"
    DATETIME_HMS = "datetime_hms"


class LegendFormat(enum.Enum):
    NONE = "none"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Range:
    min: float
    max: float

    @property
    def diff(self):
        return self.max - self.min

    def union(self, other):
        return Range(min(self.min, other.min), max(self.max, other.max))

    @classmethod
    def of(cls, values):
        """Extent of the finite entries of ``values``, or None if there are none."""
        a = np.asarray(values, dtype=float)
        a = a[np.isfinite(a)]
        if a.size == 0:
            return None
        return cls(float(a.min()), float(a.max()))


@dataclass(frozen=True)
class FontSpec:
    """Font size in pixels and an optional TrueType file (Pillow default font otherwise)."""
    size: int
    path: str = None


@dataclass(frozen=True)
class PlotOptions:
    title: str = ""
    width: int = 800
    height: int = 600
    background_color: object = "white"
    foreground_color: object = "black"
    title_font: FontSpec = FontSpec(16)
    padding: int = 10          # padding for the entire image
    plot_padding: int = 5      # keeps min and max values off the plot border
    label_padding: int = 10
    legend_sign_size: int = 10
    grids: tuple = (10, 10)    # grid divisions by x and y
    grid_color: object = "gray"
    grid_dash: tuple = (5, 5)
    tick_size: int = 5
    label_font: FontSpec = FontSpec(12)
    legend: LegendFormat = LegendFormat.NONE

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas must be non-empty, got {self.width}x{self.height}")
        if len(self.grids) != 2 or min(self.grids) < 1:
            raise ValueError(f"grids must be two positive counts, got {self.grids}")


@dataclass(frozen=True)
class AxisOptions:
    format: AxisFormat = AxisFormat.NUMBER
    range: Range = None        # None: fit to the data of bound series

    @property
    def dynamic(self):
        return self.range is None


@dataclass(frozen=True)
class SeriesOptions:
    color: object = "blue"
    line: Line = Line.SOLID
    line_width: int = 2
    line_dash: tuple = (3, 3)
    marker: Marker = Marker.NONE
    marker_size: int = 10
    marker_color: object = "white"
    area_color: object = None
    x_axis: str = None
    y_axis: str = None


@dataclass(frozen=True, eq=False)
class Series:
    """A named data series; axes are already resolved (None = default axis)."""
    name: str
    x: np.ndarray = field(repr=False)
    y: np.ndarray = field(repr=False)
    opts: SeriesOptions = SeriesOptions()

    def __len__(self):
        return len(self.x)


@dataclass(frozen=True)
class Axis:
    name: str
    opts: AxisOptions = AxisOptions()
