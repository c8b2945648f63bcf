# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT


import logging

import numpy as np
from PIL import Image

from odeplot.chart.layout import compute_layout
from odeplot.chart.metrics import PillowTextMeasurer, load_font
from odeplot.chart.options import Axis, AxisOptions, PlotOptions, Series, SeriesOptions
from odeplot.chart.paint import paint

logger = logging.getLogger(__name__)


class Plot:
    """Minimal 2-D line chart rendered to a raster image.

    Usage:
        plot = Plot(PlotOptions(title="PG", legend=LegendFormat.BOTTOM))
        plot.x_axis("x", AxisOptions(range=Range(1.0, 2.0)))
        plot.y_axis("y")
        plot.series("Mod", x, y, SeriesOptions(color="green"))
        image = plot.render()

    Axes and series keep their registration order. Registering a series
    under an existing name replaces its data and options in place.
    """

    def __init__(self, opts=None):
        self.opts = opts if opts is not None else PlotOptions()
        self._x_axes = {}
        self._y_axes = {}
        self._series = {}

    @property
    def x_axes(self):
        return list(self._x_axes.values())

    @property
    def y_axes(self):
        return list(self._y_axes.values())

    @property
    def series_list(self):
        return list(self._series.values())

    def x_axis(self, name, opts=None):
        self._x_axes[name] = Axis(name, opts if opts is not None else AxisOptions())
        return self

    def y_axis(self, name, opts=None):
        self._y_axes[name] = Axis(name, opts if opts is not None else AxisOptions())
        return self

    def series(self, name, x, y, opts=None):
        """Add or replace a data series.

        Args:
            name: series name, shown in the legend.
            x, y: equal-length sequences of coordinates.
            opts: SeriesOptions. Named axes must already be registered.

        Raises:
            KeyError: opts names an axis that is not registered.
            ValueError: x and y differ in shape.
        """
        opts = opts if opts is not None else SeriesOptions()
        self._check_axes(name, opts)
        x = np.asarray(x, dtype=float).ravel()
        y = np.asarray(y, dtype=float).ravel()
        if x.shape != y.shape:
            raise ValueError(f"series {name!r}: x and y lengths differ ({len(x)} != {len(y)})")
        self._series[name] = Series(name, x, y, opts)
        return self

    def series_options(self, name, opts):
        """Replace the options of an existing series; unknown names are ignored."""
        current = self._series.get(name)
        if current is None:
            return self
        self._check_axes(name, opts)
        self._series[name] = Series(name, current.x, current.y, opts)
        return self

    def _check_axes(self, name, opts):
        if opts.x_axis is not None and opts.x_axis not in self._x_axes:
            raise KeyError(f"series {name!r}: x axis {opts.x_axis!r} is not registered")
        if opts.y_axis is not None and opts.y_axis not in self._y_axes:
            raise KeyError(f"series {name!r}: y axis {opts.y_axis!r} is not registered")

    def layout(self, measurer=None):
        measurer = measurer if measurer is not None else PillowTextMeasurer()
        return compute_layout(self.opts, self.x_axes, self.y_axes,
                              self.series_list, measurer)

    def render(self, measurer=None):
        """Lay out and paint the chart.

        Returns:
            RGB PIL image of opts.width x opts.height.
        """
        layout = self.layout(measurer)
        logger.debug(
            "Rendering %dx%d plot: %d series, %d x axes, %d y axes",
            self.opts.width, self.opts.height, len(layout.series),
            len(layout.x_axes), len(layout.y_axes),
        )
        image = Image.new("RGB", (self.opts.width, self.opts.height),
                          self.opts.background_color)
        return paint(image, layout, fonts=load_font)
