# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Turn integrator runs into charts."""

from odeplot.chart.options import (
    AxisOptions,
    LegendFormat,
    Marker,
    PlotOptions,
    Range,
    SeriesOptions,
)
from odeplot.chart.plot import Plot
from odeplot.solvers.registry import METHODS


def plot_run(result, x_range=None, y_range=None, title="PG",
             legend=LegendFormat.BOTTOM, width=800, height=600):
    """Build a Plot with one curve per method of a single_run result.

    Args:
        result: dict from study.single_run.
        x_range, y_range: (min, max) tuples for fixed axes; None fits the data.
        title, legend, width, height: chart options.

    Returns:
        Plot, ready to render.
    """
    plot = Plot(PlotOptions(title=title, legend=legend, width=width, height=height))
    plot.x_axis("x", AxisOptions(range=Range(*x_range) if x_range else None))
    plot.y_axis("y", AxisOptions(range=Range(*y_range) if y_range else None))

    x = result["x"]
    for name, y in result["solutions"].items():
        info = METHODS[name]
        plot.series(info.label, x, y,
                    SeriesOptions(color=info.color, marker=Marker.NONE))
    return plot
