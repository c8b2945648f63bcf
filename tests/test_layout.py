# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import dataclasses

import numpy as np
import pytest

from odeplot.chart.layout import Rect, compute_layout, series_label
from odeplot.chart.metrics import FixedTextMeasurer
from odeplot.chart.options import (
    Axis,
    AxisOptions,
    LegendFormat,
    Marker,
    PlotOptions,
    Range,
    Series,
    SeriesOptions,
)

MEASURER = FixedTextMeasurer()
X = np.linspace(0.0, 10.0, 11)


def _series(name, y=None, **kw):
    return Series(name, X, X if y is None else y, SeriesOptions(**kw))


def _layout(options=None, x_axes=(), y_axes=(), series=()):
    return compute_layout(options or PlotOptions(), list(x_axes), list(y_axes),
                          list(series), MEASURER)


def test_rect_offset_and_inset():
    r = Rect(0, 0, 100, 50)
    assert r.offset(10, 5, 20, 15) == Rect(10, 5, 70, 30)
    assert r.inset(5) == Rect(5, 5, 90, 40)
    assert (r.right, r.bottom) == (100, 50)


def test_plot_sits_inside_border():
    layout = _layout(series=[_series("S")])
    b, p, c = layout.border, layout.plot, layout.clip
    opts = layout.options
    assert p == b.inset(opts.plot_padding)
    assert c == Rect(b.x + 1, b.y + 1, b.width - 1, b.height - 1)
    assert 0 < b.x and b.right < opts.width
    assert 0 < b.y and b.bottom < opts.height


def test_no_series_no_axes():
    layout = _layout()
    assert layout.x_axes == ()
    assert layout.y_axes == ()
    assert layout.series == ()
    assert layout.legend.entries == ()


def test_implicit_axes_and_label():
    layout = _layout(series=[_series("S")], options=PlotOptions(legend=LegendFormat.BOTTOM))
    assert [a.name for a in layout.x_axes] == ["x"]
    assert [a.name for a in layout.y_axes] == ["y"]
    assert layout.series[0].label == "S (y/x)"
    assert layout.legend.entries[0].label == "S (y/x)"
    assert series_label("S", "t", "v") == "S (v/t)"


def test_unnamed_series_use_first_registered_axis():
    axes = [Axis("t"), Axis("u")]
    layout = _layout(x_axes=axes, y_axes=[Axis("v")], series=[_series("S")])
    assert layout.series[0].label == "S (v/t)"
    # "u" has no bound series and a dynamic range
    assert [a.name for a in layout.x_axes] == ["t"]


def test_unknown_axis_name_raises():
    with pytest.raises(KeyError):
        _layout(x_axes=[Axis("x")], y_axes=[Axis("y")],
                series=[_series("S", x_axis="missing")])


def test_ticks_forward_for_x_and_reversed_for_y():
    layout = _layout(x_axes=[Axis("x")], y_axes=[Axis("y")], series=[_series("S")])
    x_axis, y_axis = layout.x_axes[0], layout.y_axes[0]
    assert len(x_axis.ticks) == 11
    assert x_axis.ticks[0].label == "0.00"
    assert x_axis.ticks[-1].label == "10.0"
    assert y_axis.ticks[0].label == "10.0"
    assert y_axis.ticks[-1].label == "0.00"
    assert [t.pixel for t in x_axis.ticks] == list(layout.x_grid)
    assert layout.x_grid[0] == layout.plot.x
    assert layout.x_grid[-1] == layout.plot.right
    assert layout.y_grid[0] == layout.plot.y
    assert layout.y_grid[-1] == layout.plot.bottom


def test_series_pixels_span_plot():
    layout = _layout(series=[_series("S")])
    s = layout.series[0]
    assert s.visible
    assert s.px[0] == pytest.approx(layout.plot.x)
    assert s.px[-1] == pytest.approx(layout.plot.right)
    # y = x, so the first point sits at the bottom and the last at the top
    assert s.py[0] == pytest.approx(layout.plot.bottom)
    assert s.py[-1] == pytest.approx(layout.plot.y)


def test_dynamic_axis_dropped_without_finite_data():
    nan = np.full_like(X, np.nan)
    layout = _layout(x_axes=[Axis("x")], y_axes=[Axis("y")],
                     series=[_series("S", y=nan)])
    assert [a.name for a in layout.x_axes] == ["x"]
    assert layout.y_axes == ()
    assert not layout.series[0].visible


def test_fixed_axis_kept_without_series():
    fixed = AxisOptions(range=Range(-1.0, 1.0))
    layout = _layout(x_axes=[Axis("x", fixed)], y_axes=[Axis("y")])
    assert [a.name for a in layout.x_axes] == ["x"]
    assert layout.x_axes[0].range == Range(-1.0, 1.0)
    assert layout.y_axes == ()


def test_dynamic_range_is_union_of_bound_series():
    layout = _layout(series=[_series("a", y=X - 5.0), _series("b", y=X * 2.0)])
    assert layout.y_axes[0].range == Range(-5.0, 20.0)


def test_dynamic_range_ignores_non_finite_points():
    y = X.copy()
    y[3] = np.inf
    y[4] = np.nan
    layout = _layout(series=[_series("S", y=y)])
    assert layout.y_axes[0].range == Range(0.0, 10.0)


def test_stacked_axes_offsets():
    layout = _layout(
        x_axes=[Axis("x")],
        y_axes=[Axis("y1"), Axis("y2")],
        series=[_series("a", y_axis="y1"), _series("b", y=X * 1000.0, y_axis="y2")],
    )
    y1, y2 = layout.y_axes
    assert y1.offset == 0
    assert y2.offset > y1.label_size[0]


def test_legend_none_has_no_entries():
    layout = _layout(series=[_series("S")])
    assert layout.legend.format == LegendFormat.NONE
    assert layout.legend.entries == ()


def test_top_legend_moves_border_down():
    series = [_series("a"), _series("b")]
    plain = _layout(series=series)
    top = _layout(options=PlotOptions(legend=LegendFormat.TOP), series=series)
    lp = top.options.label_padding
    assert top.legend.rect.y == plain.border.y
    assert top.border.y == plain.border.y + top.legend.rect.height + lp
    assert top.border.bottom == plain.border.bottom


def test_bottom_legend_sits_above_bottom_padding():
    series = [_series("a"), _series("b")]
    plain = _layout(series=series)
    bottom = _layout(options=PlotOptions(legend=LegendFormat.BOTTOM), series=series)
    legend = bottom.legend
    opts = bottom.options
    assert legend.rect.bottom == opts.height - opts.padding
    assert bottom.border.bottom == plain.border.bottom - legend.rect.height
    # centred under the border
    assert abs((legend.rect.x + legend.rect.width / 2)
               - (bottom.border.x + bottom.border.width / 2)) <= 1


def test_bottom_legend_wraps_rows():
    series = [_series(f"series{i}") for i in range(12)]
    layout = _layout(options=PlotOptions(legend=LegendFormat.BOTTOM), series=series)
    legend = layout.legend
    lp = layout.options.label_padding
    assert legend.entry_width_padded == legend.entry_width + lp
    assert legend.entry_count == (layout.border.width - lp) // legend.entry_width_padded
    assert legend.x_count < 12
    assert legend.y_count == -(-12 // legend.entry_count)
    entries = legend.entries
    assert len(entries) == 12
    first_row = entries[:legend.x_count]
    assert len({e.y for e in first_row}) == 1
    assert [e.x for e in first_row] == [
        legend.rect.x + layout.options.label_padding + i * legend.entry_width_padded
        for i in range(legend.x_count)
    ]
    wrapped = entries[legend.x_count]
    assert wrapped.x == first_row[0].x
    assert wrapped.y > first_row[0].y


def test_bottom_legend_keeps_one_entry_per_row_for_long_labels():
    series = [_series("n" * 200), _series("m" * 200)]
    layout = _layout(options=PlotOptions(legend=LegendFormat.BOTTOM), series=series)
    assert layout.legend.entry_count == 1
    assert layout.legend.x_count == 1
    assert layout.legend.y_count == 2


def test_right_legend_is_vertically_centred():
    series = [_series("a"), _series("b"), _series("c")]
    layout = _layout(options=PlotOptions(legend=LegendFormat.RIGHT), series=series)
    legend = layout.legend
    opts = layout.options
    assert legend.rect.right == opts.width - opts.padding
    assert layout.border.right == legend.rect.x - opts.label_padding
    centre = legend.rect.y + legend.rect.height / 2
    assert abs(centre - (layout.border.y + layout.border.height / 2)) <= 1
    assert legend.y_count == 3
    ys = [e.y for e in legend.entries]
    assert ys == sorted(ys)
    assert len({e.x for e in legend.entries}) == 1


def test_legend_sign_grows_for_circle_and_square_markers():
    opts = PlotOptions(legend=LegendFormat.BOTTOM)
    plain = _layout(options=opts, series=[_series("a"), _series("b")])
    marked = _layout(options=opts, series=[
        _series("a"), _series("b", marker=Marker.SQUARE, marker_size=8),
    ])
    assert plain.legend.sign_size == opts.legend_sign_size
    assert marked.legend.sign_size == 8 + opts.legend_sign_size


def test_layout_does_not_mutate_dynamic_axes():
    axis = Axis("y")
    series = [_series("S")]
    _layout(x_axes=[Axis("x")], y_axes=[axis], series=series)
    assert axis.opts.dynamic
    wider = _layout(x_axes=[Axis("x")], y_axes=[axis],
                    series=[_series("S", y=X * 3.0)])
    assert wider.y_axes[0].range == Range(0.0, 30.0)


def test_options_validate_canvas():
    with pytest.raises(ValueError):
        PlotOptions(width=0)
    with pytest.raises(ValueError):
        PlotOptions(grids=(0, 10))
    assert dataclasses.replace(PlotOptions(), title="T").title == "T"
