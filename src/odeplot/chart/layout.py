# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Chart geometry.

``compute_layout`` turns options, axes, series and a text measurer into an
immutable ``Layout``: every rectangle, tick, grid line, legend entry and
series pixel coordinate the paint pass needs. Nothing here draws.

Rectangles nest as

    bounds | title, axis labels, legend | border | plot_padding | plot

and the border is found by offsetting ``bounds`` inward by the measured
size of everything around it.
"""

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from odeplot.chart.formatting import format_value
from odeplot.chart.mapping import to_int, x_to_pixel, y_to_pixel
from odeplot.chart.options import Axis, LegendFormat, Marker, Range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

    def offset(self, dx, dy, dw, dh):
        """Move the top-left corner by (dx, dy) and shrink by dw, dh on the far sides."""
        return Rect(self.x + dx, self.y + dy,
                    self.width - dx - dw, self.height - dy - dh)

    def inset(self, pad):
        return Rect(self.x + pad, self.y + pad,
                    self.width - 2 * pad, self.height - 2 * pad)


@dataclass(frozen=True)
class Tick:
    pixel: int
    label: str


@dataclass(frozen=True)
class AxisLayout:
    name: str
    range: Range
    label_size: tuple      # widest and tallest tick label
    ticks: tuple           # Tick per grid line, in pixel order
    offset: int            # distance from the border for stacked axes


@dataclass(frozen=True)
class LegendEntry:
    name: str
    label: str
    x: int
    y: int


@dataclass(frozen=True)
class LegendLayout:
    format: LegendFormat
    rect: Rect
    label_size: tuple = (0.0, 0.0)
    sign_size: int = 0
    entry_width: int = 0
    entry_width_padded: int = 0
    entry_count: int = 0
    x_count: int = 0
    y_count: int = 0
    entries: tuple = ()


@dataclass(frozen=True, eq=False)
class SeriesLayout:
    name: str
    label: str
    opts: object
    px: np.ndarray = field(repr=False)
    py: np.ndarray = field(repr=False)
    visible: bool = True   # False when an axis of the series was dropped


@dataclass(frozen=True, eq=False)
class Layout:
    options: object
    bounds: Rect
    border: Rect
    plot: Rect
    clip: Rect
    title_size: tuple
    x_axes: tuple
    y_axes: tuple
    x_grid: tuple
    y_grid: tuple
    series: tuple
    legend: LegendLayout

    @property
    def x_pixels(self):
        return Range(self.plot.x, self.plot.right)

    @property
    def y_pixels(self):
        return Range(self.plot.y, self.plot.bottom)


def _half(v):
    # integer halving that truncates toward zero
    return int(v / 2)


def bind_axes(x_axes, y_axes, series):
    """Pair every series with one x and one y axis name.

    Series without an axis name use the first registered axis of that
    dimension; when none is registered an implicit ``x`` / ``y`` axis is
    added, but only if some series needs it.

    Returns:
        (x_axes, y_axes, bindings) where bindings is a list of
        (x_name, y_name) aligned with ``series``.
    """
    x_axes = list(x_axes)
    y_axes = list(y_axes)
    default_x = x_axes[0] if x_axes else Axis("x")
    default_y = y_axes[0] if y_axes else Axis("y")
    x_names = {a.name for a in x_axes}
    y_names = {a.name for a in y_axes}

    bindings = []
    need_x = need_y = False
    for s in series:
        x_name = s.opts.x_axis
        y_name = s.opts.y_axis
        if x_name is None:
            x_name = default_x.name
            need_x = need_x or not x_axes
        elif x_name not in x_names:
            raise KeyError(f"series {s.name!r} refers to unknown x axis {x_name!r}")
        if y_name is None:
            y_name = default_y.name
            need_y = need_y or not y_axes
        elif y_name not in y_names:
            raise KeyError(f"series {s.name!r} refers to unknown y axis {y_name!r}")
        bindings.append((x_name, y_name))

    if need_x:
        x_axes = [default_x]
    if need_y:
        y_axes = [default_y]
    return x_axes, y_axes, bindings


def resolve_ranges(axes, series, bindings, dim):
    """Fixed ranges are kept; dynamic ones span the finite data of bound series.

    Axes that end up without a range are dropped.

    Returns:
        list of (axis, range) in registration order.
    """
    resolved = []
    for axis in axes:
        rng = axis.opts.range
        if rng is None:
            for s, names in zip(series, bindings):
                if names[dim] != axis.name:
                    continue
                r = Range.of(s.x if dim == 0 else s.y)
                if r is not None:
                    rng = r if rng is None else rng.union(r)
        if rng is None:
            logger.debug("Dropping axis %r: dynamic range with no data", axis.name)
            continue
        resolved.append((axis, rng))
    return resolved


def _tick_labels(axis, rng, grids, measurer, font, reverse=False):
    step = rng.diff / grids
    if reverse:
        labels = [format_value(rng.max - step * j, axis.opts.format) for j in range(grids + 1)]
    else:
        labels = [format_value(rng.min + step * j, axis.opts.format) for j in range(grids + 1)]
    w, h = measurer.measure("", font)
    for label in labels:
        lw, lh = measurer.measure(label, font)
        w = max(w, lw)
        h = max(h, lh)
    return labels, (w, h)


def series_label(name, x_name, y_name):
    return f"{name} ({y_name}/{x_name})"


def compute_legend(options, bounds, border, series, labels, measurer):
    """Size and place the legend relative to a provisional border rectangle."""
    fmt = options.legend
    lp = options.label_padding
    if fmt == LegendFormat.NONE or not series:
        return LegendLayout(fmt, Rect(0, 0, 0, 0))

    size = len(series)
    label_w, label_h = 0.0, 0.0
    sign = options.legend_sign_size
    for s, label in zip(series, labels):
        w, h = measurer.measure(label, options.label_font)
        label_w = max(label_w, w)
        label_h = max(label_h, h)
        if s.opts.marker in (Marker.CIRCLE, Marker.SQUARE):
            sign = max(sign, s.opts.marker_size + options.legend_sign_size)

    entry_w = sign + lp + to_int(label_w)
    entry_w_padded = entry_w + lp
    row_h = lp + to_int(label_h)

    if fmt in (LegendFormat.TOP, LegendFormat.BOTTOM):
        entry_count = max(1, math.floor((border.width - lp) / entry_w_padded))
        x_count = min(size, entry_count)
        y_count = 1 if size <= entry_count else math.ceil(size / entry_count)
        width = lp + x_count * entry_w_padded
        height = lp + to_int(y_count * (lp + label_h))
        x = border.x + _half(border.width - width)
        if fmt == LegendFormat.TOP:
            y = border.y
        else:
            y = bounds.height - height - options.padding
        rect = Rect(x, y, width, height)

        entries = []
        ex = rect.x + lp
        ey = rect.y + lp + _half(to_int(label_h))
        for i, (s, label) in enumerate(zip(series, labels)):
            entries.append(LegendEntry(s.name, label, ex, ey))
            ex += entry_w_padded
            if (i + 1) % x_count == 0:
                ex = rect.x + lp
                ey += row_h
    else:
        entry_count = x_count = 1
        y_count = size
        width = lp * 3 + sign + to_int(label_w)
        height = lp * (size + 1) + to_int(label_h * size)
        x = bounds.width - width - options.padding
        y = border.y + _half(border.height) - _half(height)
        rect = Rect(x, y, width, height)

        entries = []
        ex = rect.x + lp
        ey = rect.y + lp + _half(to_int(label_h))
        for s, label in zip(series, labels):
            entries.append(LegendEntry(s.name, label, ex, ey))
            ey += row_h

    return LegendLayout(
        format=fmt,
        rect=rect,
        label_size=(label_w, label_h),
        sign_size=sign,
        entry_width=entry_w,
        entry_width_padded=entry_w_padded,
        entry_count=entry_count,
        x_count=x_count,
        y_count=y_count,
        entries=tuple(entries),
    )


def compute_layout(options, x_axes, y_axes, series, measurer):
    """Compute the full chart geometry.

    Args:
        options: PlotOptions.
        x_axes, y_axes: registered Axis objects, in registration order.
        series: Series objects, in drawing order.
        measurer: object with ``measure(text, font) -> (width, height)``.

    Returns:
        Layout
    """
    series = list(series)
    lp = options.label_padding
    gx, gy = options.grids
    bounds = Rect(0, 0, options.width, options.height)

    x_axes, y_axes, bindings = bind_axes(x_axes, y_axes, series)
    x_resolved = resolve_ranges(x_axes, series, bindings, 0)
    y_resolved = resolve_ranges(y_axes, series, bindings, 1)

    font = options.label_font
    x_labels = [_tick_labels(a, r, gx, measurer, font) for a, r in x_resolved]
    y_labels = [_tick_labels(a, r, gy, measurer, font, reverse=True) for a, r in y_resolved]

    title_size = measurer.measure(options.title, options.title_font)

    x_axes_height = 0
    x_axes_half_width = 0
    for _, (w, h) in x_labels:
        x_axes_height += to_int(h) + lp * 2
        x_axes_half_width = max(x_axes_half_width, to_int(w))
    y_axes_width = 0
    for _, (w, h) in y_labels:
        y_axes_width += to_int(w) + lp * 2

    dx = options.padding + y_axes_width
    dy = options.padding + to_int(title_size[1] + lp)
    dw = options.padding
    if options.legend != LegendFormat.RIGHT:
        # half of the last x label goes beyond the plot in the bottom right corner
        dw += x_axes_half_width
    dh = options.padding + x_axes_height

    labels = [series_label(s.name, xn, yn) for s, (xn, yn) in zip(series, bindings)]
    legend = compute_legend(options, bounds, bounds.offset(dx, dy, dw, dh),
                            series, labels, measurer)
    if legend.format == LegendFormat.TOP and legend.entries:
        dy += legend.rect.height + lp
    elif legend.format == LegendFormat.RIGHT and legend.entries:
        dw += legend.rect.width + lp
    elif legend.format == LegendFormat.BOTTOM and legend.entries:
        dh += legend.rect.height

    border = bounds.offset(dx, dy, dw, dh)
    plot = border.inset(options.plot_padding)
    clip = Rect(border.x + 1, border.y + 1, border.width - 1, border.height - 1)

    x_grid = tuple(to_int(plot.x + plot.width / gx * i) for i in range(gx + 1))
    y_grid = tuple(to_int(plot.y + plot.height / gy * i) for i in range(gy + 1))

    x_layouts = []
    offset = 0
    for (axis, rng), (tick_labels, size) in zip(x_resolved, x_labels):
        ticks = tuple(Tick(p, l) for p, l in zip(x_grid, tick_labels))
        x_layouts.append(AxisLayout(axis.name, rng, size, ticks, offset))
        offset += to_int(size[1] + lp * 2)
    y_layouts = []
    offset = 0
    for (axis, rng), (tick_labels, size) in zip(y_resolved, y_labels):
        ticks = tuple(Tick(p, l) for p, l in zip(y_grid, tick_labels))
        y_layouts.append(AxisLayout(axis.name, rng, size, ticks, offset))
        offset += to_int(size[0] + lp * 2)

    x_ranges = {a.name: r for a, r in x_resolved}
    y_ranges = {a.name: r for a, r in y_resolved}
    x_pixels = Range(plot.x, plot.right)
    y_pixels = Range(plot.y, plot.bottom)
    series_layouts = []
    for s, label, (xn, yn) in zip(series, labels, bindings):
        if xn in x_ranges and yn in y_ranges:
            px = x_to_pixel(s.x, x_ranges[xn], x_pixels)
            py = y_to_pixel(s.y, y_ranges[yn], y_pixels)
            series_layouts.append(SeriesLayout(s.name, label, s.opts, px, py))
        else:
            empty = np.empty(0)
            series_layouts.append(SeriesLayout(s.name, label, s.opts, empty, empty, visible=False))

    return Layout(
        options=options,
        bounds=bounds,
        border=border,
        plot=plot,
        clip=clip,
        title_size=title_size,
        x_axes=tuple(x_layouts),
        y_axes=tuple(y_layouts),
        x_grid=x_grid,
        y_grid=y_grid,
        series=tuple(series_layouts),
        legend=legend,
    )
