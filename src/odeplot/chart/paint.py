# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Paint pass: draws a computed Layout onto a Pillow image.

Series are drawn onto a transparent layer that is cropped to the clip
rectangle before being composited, so fills and markers never leak outside
the plot border. Line segments are additionally clipped geometrically, which
keeps far-away (or huge) coordinates out of Pillow's integer rasterizer.
"""

import math

from PIL import Image, ImageDraw

from odeplot.chart.mapping import to_int
from odeplot.chart.metrics import load_font
from odeplot.chart.options import Line, Marker

LEFT, CENTER, RIGHT = "left", "center", "right"
TOP, BOTTOM = "top", "bottom"

_PROBE = "Ag"


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------

def clip_segment(x1, y1, x2, y2, rect):
    """Liang-Barsky clip of a segment against ``rect``.

    Returns:
        (x1, y1, x2, y2) of the visible part, or None if nothing is visible.
    """
    dx = x2 - x1
    dy = y2 - y1
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x1 - rect.x), (dx, rect.right - x1),
                 (-dy, y1 - rect.y), (dy, rect.bottom - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    out = (x1 + t0 * dx, y1 + t0 * dy, x1 + t1 * dx, y1 + t1 * dy)
    if not all(math.isfinite(v) for v in out):
        return None
    return out


def clip_polygon(points, rect):
    """Sutherland-Hodgman clip of a polygon against ``rect``."""
    edges = (
        (lambda p: p[0] >= rect.x, 0, rect.x),
        (lambda p: p[0] <= rect.right, 0, rect.right),
        (lambda p: p[1] >= rect.y, 1, rect.y),
        (lambda p: p[1] <= rect.bottom, 1, rect.bottom),
    )
    out = list(points)
    for inside, axis, value in edges:
        if not out:
            break
        src, out = out, []
        prev = src[-1]
        for cur in src:
            if inside(cur):
                if not inside(prev):
                    out.append(_intersect(prev, cur, axis, value))
                out.append(cur)
            elif inside(prev):
                out.append(_intersect(prev, cur, axis, value))
            prev = cur
    return out


def _intersect(a, b, axis, value):
    t = (value - a[axis]) / (b[axis] - a[axis])
    if axis == 0:
        return (value, a[1] + t * (b[1] - a[1]))
    return (a[0] + t * (b[0] - a[0]), value)


def dash_segments(x1, y1, x2, y2, pattern):
    """Split a segment into the 'on' pieces of a dash pattern (restarted per segment)."""
    length = math.hypot(x2 - x1, y2 - y1)
    if length == 0 or sum(pattern) <= 0:
        yield (x1, y1, x2, y2)
        return
    ux = (x2 - x1) / length
    uy = (y2 - y1) / length
    pos = 0.0
    i = 0
    while pos < length:
        end = min(pos + pattern[i % len(pattern)], length)
        if i % 2 == 0:
            yield (x1 + ux * pos, y1 + uy * pos, x1 + ux * end, y1 + uy * end)
        pos = end
        i += 1


def _box(x0, y0, x1, y1):
    # Pillow wants top-left first
    return [min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1)]


def _clamp(v, lo, hi):
    return min(max(v, lo), hi)


def _outline(draw, rect, color):
    # a rect squeezed below zero size by labels on a tiny canvas is not drawn
    if rect.width < 0 or rect.height < 0:
        return
    draw.rectangle([rect.x, rect.y, rect.right, rect.bottom], outline=color)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def draw_label(draw, text, x, y, h_align, v_align, font, fill):
    """Draw ``text`` aligned to the point (x, y)."""
    w = font.getlength(text) if text else 0.0
    h = font.getbbox(_PROBE)[3]
    if h_align == RIGHT:
        x -= int(w)
    elif h_align == CENTER:
        x -= int(w / 2)
    if v_align == CENTER:
        y -= int(h / 2)
    elif v_align == BOTTOM:
        y -= int(h)
    draw.text((x, y), text, font=font, fill=fill)


# ---------------------------------------------------------------------------
# Series primitives (shared by the plot area and the legend)
# ---------------------------------------------------------------------------

def fill_area(draw, opts, ix1, iy1, ix2, iy2, iy3, clip=None):
    """Fill the quad between a segment and the baseline ``iy3``."""
    if opts.area_color is None:
        return
    points = [(ix1, iy1), (ix2, iy2), (ix2, iy3), (ix1, iy3)]
    if clip is not None:
        points = clip_polygon(points, clip)
        if len(points) < 3:
            return
    draw.polygon([(to_int(px), to_int(py)) for px, py in points], fill=opts.area_color)


def draw_segment(draw, opts, x1, y1, x2, y2, clip=None):
    if opts.line == Line.NONE:
        return
    if clip is not None:
        seg = clip_segment(x1, y1, x2, y2, clip)
        if seg is None:
            return
        x1, y1, x2, y2 = seg
    if opts.line == Line.DASHED:
        pieces = dash_segments(x1, y1, x2, y2, opts.line_dash)
    else:
        pieces = [(x1, y1, x2, y2)]
    for a, b, c, d in pieces:
        draw.line([(to_int(a), to_int(b)), (to_int(c), to_int(d))],
                  fill=opts.color, width=opts.line_width)


def draw_marker(draw, opts, x2, y2, x3, y3):
    """Draw one marker centred on (x2, y2).

    COLUMN markers drop to the baseline y3 and BAR markers extend left to x3.
    """
    size = opts.marker_size
    half = size // 2
    half_diag = to_int(math.sqrt(2 * size * size)) // 2
    fill = opts.marker_color
    outline = opts.color

    if opts.marker == Marker.CIRCLE:
        x, y = to_int(x2 - half), to_int(y2 - half)
        draw.ellipse([x, y, x + size, y + size], fill=fill, outline=outline, width=2)
    elif opts.marker == Marker.SQUARE:
        x, y = to_int(x2 - half), to_int(y2 - half)
        draw.rectangle([x, y, x + size, y + size], fill=fill, outline=outline, width=2)
    elif opts.marker == Marker.DIAMOND:
        pts = [
            (to_int(x2), to_int(y2 - half_diag)),
            (to_int(x2 + half_diag), to_int(y2)),
            (to_int(x2), to_int(y2 + half_diag)),
            (to_int(x2 - half_diag), to_int(y2)),
        ]
        draw.polygon(pts, fill=fill, outline=outline, width=2)
    elif opts.marker == Marker.COLUMN:
        draw.rectangle(_box(to_int(x2), to_int(y2), to_int(x2) + size, to_int(y3)),
                       fill=fill, outline=outline, width=2)
    elif opts.marker == Marker.BAR:
        draw.rectangle(_box(to_int(x3), to_int(y2), to_int(x2), to_int(y2) + size),
                       fill=fill, outline=outline, width=2)


# ---------------------------------------------------------------------------
# Paint pass
# ---------------------------------------------------------------------------

def paint(image, layout, fonts=load_font):
    """Draw ``layout`` onto ``image`` (an RGB Pillow image of the layout's size).

    Args:
        image: target image, mutated.
        layout: Layout from compute_layout.
        fonts: FontSpec -> Pillow font loader.

    Returns:
        image
    """
    opts = layout.options
    draw = ImageDraw.Draw(image)
    draw.rectangle([0, 0, opts.width, opts.height], fill=opts.background_color)

    _draw_plot_area(draw, layout, fonts)
    _draw_grid(draw, layout)
    _draw_axes(draw, layout, fonts)
    _draw_legend(draw, layout, fonts)
    _draw_series(image, layout)
    return image


def _draw_plot_area(draw, layout, fonts):
    opts = layout.options
    b = layout.border
    _outline(draw, b, opts.foreground_color)
    draw_label(draw, opts.title, b.x + to_int(b.width / 2), opts.padding,
               CENTER, TOP, fonts(opts.title_font), opts.foreground_color)


def _draw_grid(draw, layout):
    opts = layout.options
    b = layout.border
    top, bottom = b.y + 1, b.bottom - 1
    left, right = b.x + 1, b.right - 1
    lines = [(x, top, x, bottom) for x in layout.x_grid]
    lines += [(left, y, right, y) for y in layout.y_grid]
    for x1, y1, x2, y2 in lines:
        for a, c, e, d in dash_segments(x1, y1, x2, y2, opts.grid_dash):
            draw.line([(to_int(a), to_int(c)), (to_int(e), to_int(d))],
                      fill=opts.grid_color, width=1)


def _draw_axes(draw, layout, fonts):
    opts = layout.options
    font = fonts(opts.label_font)
    fg = opts.foreground_color
    lp = opts.label_padding
    b = layout.border
    p = layout.plot

    for axis in layout.x_axes:
        y = b.bottom + axis.offset
        draw_label(draw, axis.name, b.right + lp, y, LEFT, CENTER, font, fg)
        draw.line([(p.x, y), (p.right, y)], fill=fg)
        for tick in axis.ticks:
            draw_label(draw, tick.label, tick.pixel, y + lp, CENTER, TOP, font, fg)
            draw.line([(tick.pixel, y), (tick.pixel, y + opts.tick_size)], fill=fg)

    for axis in layout.y_axes:
        x = b.x - axis.offset
        draw_label(draw, axis.name, x - lp, b.y - to_int(axis.label_size[1] + lp),
                   RIGHT, CENTER, font, fg)
        draw.line([(x, p.bottom), (x, p.y)], fill=fg)
        for tick in axis.ticks:
            draw_label(draw, tick.label, x - lp, tick.pixel, RIGHT, CENTER, font, fg)
            draw.line([(x, tick.pixel), (x - opts.tick_size, tick.pixel)], fill=fg)


def _draw_legend(draw, layout, fonts):
    legend = layout.legend
    if not legend.entries:
        return
    opts = layout.options
    font = fonts(opts.label_font)
    r = legend.rect
    _outline(draw, r, opts.foreground_color)

    by_name = {s.name: s for s in layout.series}
    sign = legend.sign_size
    for entry in legend.entries:
        s_opts = by_name[entry.name].opts
        x, y = entry.x, entry.y
        fill_area(draw, s_opts, x, y, x + sign, y, y + sign // 2)
        draw_segment(draw, s_opts, x, y, x + sign, y)
        draw_marker(draw, s_opts, x + sign // 2, y, x, y + sign // 2)
        draw_label(draw, entry.label, x + sign + opts.label_padding, y,
                   LEFT, CENTER, font, opts.foreground_color)


def _draw_series(image, layout):
    clip = layout.clip
    if clip.width <= 0 or clip.height <= 0:
        return
    layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    baseline = layout.plot.bottom
    left = layout.plot.x

    for s in layout.series:
        if not s.visible or len(s.px) == 0:
            continue
        _draw_one_series(draw, s, clip, baseline, left)

    box = (clip.x, clip.y, clip.right, clip.bottom)
    visible = layer.crop(box)
    image.paste(visible, box[:2], mask=visible)


def _draw_one_series(draw, s, clip, baseline, left):
    opts = s.opts
    size = len(s.px)

    if opts.line != Line.NONE:
        x1 = y1 = None
        for j in range(size):
            x2, y2 = float(s.px[j]), float(s.py[j])
            if size == 1:
                x1, y1 = x2, y2
            if j != 0 or size == 1:
                if all(math.isfinite(v) for v in (x1, y1, x2, y2)):
                    fill_area(draw, opts, x1, y1, x2, y2, baseline, clip=clip)
                    draw_segment(draw, opts, x1, y1, x2, y2, clip=clip)
            x1, y1 = x2, y2

    if opts.marker != Marker.NONE:
        margin = 2 * opts.marker_size + 2
        for j in range(size):
            x2, y2 = float(s.px[j]), float(s.py[j])
            if not (math.isfinite(x2) and math.isfinite(y2)):
                continue
            # markers far outside the clip are invisible; keep them in integer range
            x2 = _clamp(x2, clip.x - margin, clip.right + margin)
            y2 = _clamp(y2, clip.y - margin, clip.bottom + margin)
            draw_marker(draw, opts, x2, y2, left, baseline)
