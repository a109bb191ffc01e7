#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/shapes/svg_shapes.py
"""Inline SVG bodies for presets whose outline is not a polygon.

Each generator takes the shape's :class:`~pptx2html.units.Position` and its
:class:`ShapePaint` and returns a complete ``<svg>`` element sized to fill the
shape container.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pptx2html.constants import DEFAULT_SHAPE_STROKE
from pptx2html.units import Position, format_number


@dataclass(frozen=True)
class ShapePaint:
    fill: str
    stroke: str = DEFAULT_SHAPE_STROKE
    stroke_width: float = 2.0


def _n(value: float) -> str:
    return format_number(value, 2)


def _svg(view_w: float, view_h: float, body: str, view_x: float = 0, view_y: float = 0) -> str:
    return (
        f'<svg width="100%" height="100%" viewBox="{_n(view_x)} {_n(view_y)} {_n(view_w)} {_n(view_h)}" '
        f'preserveAspectRatio="none" xmlns="http://www.w3.org/2000/svg" style="overflow: visible;">{body}</svg>'
    )


def _path(d: str, paint: ShapePaint, fill: str | None = None, width: float | None = None) -> str:
    stroke_width = paint.stroke_width if width is None else width
    return (
        f'<path d="{d}" fill="{paint.fill if fill is None else fill}" stroke="{paint.stroke}" '
        f'stroke-width="{_n(stroke_width)}" stroke-miterlimit="8" fill-rule="evenodd"/>'
    )


def heart(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    points = [
        (0.5, 0.9),
        (0.1, 0.6), (0.0, 0.35), (0.15, 0.2),
        (0.3, 0.05), (0.5, 0.15), (0.5, 0.25),
        (0.5, 0.15), (0.7, 0.05), (0.85, 0.2),
        (1.0, 0.35), (0.9, 0.6), (0.5, 0.9),
    ]
    xy = [f"{_n(px * w)},{_n(py * h)}" for px, py in points]
    d = (
        f"M{xy[0]} C{xy[1]} {xy[2]} {xy[3]} C{xy[4]} {xy[5]} {xy[6]} "
        f"C{xy[7]} {xy[8]} {xy[9]} C{xy[10]} {xy[11]} {xy[12]} Z"
    )
    return _svg(w, h, _path(d, paint, width=max(1.0, w * 0.02)))


def folded_corner(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    fold_y, fold_x = h - h * 0.15, w - w * 0.1
    d = (
        f"M0,0 L{_n(w)},0 L{_n(w)},{_n(fold_y)} L{_n(fold_x)},{_n(h)} L0,{_n(h)} Z "
        f"M{_n(w)},{_n(fold_y)} Q{_n(fold_x)},{_n(h - h * 0.1)} {_n(fold_x)},{_n(h)}"
    )
    return _svg(w, h, _path(d, paint, width=max(1.0, w * 0.02)))


def cloud(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    curves = [
        ((0.1, 0.9), (0.05, 0.65), (0.1, 0.5)),
        ((0.03, 0.42), (0.05, 0.2), (0.15, 0.2)),
        ((0.15, 0.05), (0.25, 0.02), (0.35, 0.15)),
        ((0.4, 0.0), (0.6, 0.0), (0.65, 0.15)),
        ((0.75, 0.05), (0.9, 0.15), (0.87, 0.35)),
        ((1.0, 0.4), (1.0, 0.7), (0.85, 0.75)),
        ((0.8, 0.9), (0.6, 0.9), (0.5, 0.8)),
        ((0.45, 0.95), (0.35, 0.95), (0.3, 0.8)),
    ]
    d = f"M{_n(0.3 * w)},{_n(0.8 * h)}"
    for curve in curves:
        d += " C" + " ".join(f"{_n(px * w)},{_n(py * h)}" for px, py in curve)
    d += " Z"
    return _svg(w, h, _path(d, paint, width=max(2.0, w * 0.015)))


def smiley_face(position: Position, paint: ShapePaint) -> str:
    body = (
        f'<circle cx="50" cy="50" r="48" fill="{paint.fill}" stroke="{paint.stroke}" stroke-width="2"/>'
        '<circle cx="35" cy="35" r="4" fill="#4B2C3E"/>'
        '<circle cx="65" cy="35" r="4" fill="#4B2C3E"/>'
        f'<path d="M35,65 Q50,80 65,65" stroke="{paint.stroke}" stroke-width="2" fill="none" stroke-linecap="round"/>'
    )
    return _svg(100, 100, body)


def snip_round_rect(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    radius = min(20.0, w / 2, h / 2)
    cut = w * 0.15
    d = (
        f"M {_n(radius)} 0 H {_n(w - cut)} L {_n(w)} {_n(cut)} V {_n(h)} H 0 "
        f"V {_n(radius)} Q 0 0 {_n(radius)} 0 Z"
    )
    return _svg(w, h, _path(d, paint))


def chord(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    d = (
        f"M{_n(w)} {_n(0.92 * h)} "
        f"C{_n(0.7 * w)} {_n(1.06 * h)}, {_n(0.3 * w)} {_n(0.98 * h)}, {_n(0.1 * w)} {_n(0.76 * h)} "
        f"C{_n(-0.08 * w)} {_n(0.52 * h)}, {_n(0.012 * w)} {_n(0.22 * h)}, {_n(0.34 * w)} {_n(0.07 * h)} "
        f"C{_n(0.42 * w)} {_n(0.02 * h)}, {_n(0.54 * w)} 0, {_n(0.66 * w)} 0 Z"
    )
    return _svg(w, h, _path(d, paint))


def teardrop(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    d = (
        f"M{_n(0.5 * w)},0 L{_n(w)},0 L{_n(w)},{_n(0.5 * h)} "
        f"C{_n(w)},{_n(0.85 * h)} {_n(0.85 * w)},{_n(h)} {_n(0.5 * w)},{_n(h)} "
        f"C{_n(0.15 * w)},{_n(h)} 0,{_n(0.85 * h)} 0,{_n(0.5 * h)} "
        f"C0,{_n(0.15 * h)} {_n(0.15 * w)},0 {_n(0.5 * w)},0 Z"
    )
    return _svg(w, h, _path(d, paint))


def cube(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    side, top = w * 0.3, h * 0.3
    fx, fy = side, top
    view_w, view_h = w + side * 2, h + top * 2
    right_face = (
        f"M{_n(fx + w)} {_n(fy)} L{_n(fx + w + side)} {_n(fy - top)} "
        f"L{_n(fx + w + side)} {_n(fy + h - top)} L{_n(fx + w)} {_n(fy + h)}Z"
    )
    top_face = (
        f"M{_n(fx)} {_n(fy)} L{_n(fx + side)} {_n(fy - top)} "
        f"L{_n(fx + w + side)} {_n(fy - top)} L{_n(fx + w)} {_n(fy)}Z"
    )
    body = (
        f'<rect x="{_n(fx)}" y="{_n(fy)}" width="{_n(w)}" height="{_n(h)}" fill="{paint.fill}" '
        f'stroke="{paint.stroke}" stroke-width="2"/>'
        + _path(right_face, paint, width=1)
        + _path(top_face, paint, width=1)
    )
    return _svg(view_w, view_h, body)


def can(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    ellipse_h = w * 0.3
    body_d = (
        f"M0 {_n(ellipse_h)} V{_n(h)} "
        f"C0 {_n(h + ellipse_h / 2)}, {_n(w)} {_n(h + ellipse_h / 2)}, {_n(w)} {_n(h)} "
        f"V{_n(ellipse_h)} Z"
    )
    body = (
        _path(body_d, paint)
        + f'<ellipse cx="{_n(w / 2)}" cy="{_n(ellipse_h)}" rx="{_n(w / 2)}" ry="{_n(ellipse_h / 2)}" '
        f'fill="{paint.fill}" stroke="{paint.stroke}" stroke-width="2"/>'
    )
    return _svg(w, h + ellipse_h * 2, body)


def pie(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    radius = min(w, h) / 2
    cx, cy = w / 2, h / 2
    d = (
        f"M {_n(cx)} {_n(cy)} L {_n(cx + radius)} {_n(cy)} "
        f"A {_n(radius)} {_n(radius)} 0 0 1 {_n(cx)} {_n(cy + radius)} "
        f"A {_n(radius)} {_n(radius)} 0 0 1 {_n(cx - radius)} {_n(cy)} "
        f"A {_n(radius)} {_n(radius)} 0 0 1 {_n(cx)} {_n(cy - radius)} Z"
    )
    return _svg(w, h, _path(d, paint))


def plaque(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    d = (
        f"M3 {_n(h * 0.16)} C{_n(w * 0.1)} {_n(h * 0.16)}, {_n(w * 0.2)} {_n(h * 0.07)}, {_n(w * 0.2)} 3 "
        f"L{_n(w * 0.8)} 3 C{_n(w * 0.8)} {_n(h * 0.07)}, {_n(w * 0.9)} {_n(h * 0.16)}, {_n(w - 3)} {_n(h * 0.16)} "
        f"L{_n(w - 3)} {_n(h * 0.84)} "
        f"C{_n(w * 0.9)} {_n(h * 0.84)}, {_n(w * 0.8)} {_n(h * 0.93)}, {_n(w * 0.8)} {_n(h - 3)} "
        f"L{_n(w * 0.2)} {_n(h - 3)} C{_n(w * 0.2)} {_n(h * 0.93)}, {_n(w * 0.1)} {_n(h * 0.84)}, 3 {_n(h * 0.84)} Z"
    )
    return _svg(w, h, _path(d, paint))


def _ring(w: float, h: float, inner_ratio: float) -> str:
    cx, cy = w / 2, h / 2
    rx, ry = w / 2, h / 2
    ix, iy = rx * inner_ratio, ry * inner_ratio
    return (
        f"M {_n(cx - rx)} {_n(cy)} A {_n(rx)} {_n(ry)} 0 1 0 {_n(cx + rx)} {_n(cy)} "
        f"A {_n(rx)} {_n(ry)} 0 1 0 {_n(cx - rx)} {_n(cy)} Z "
        f"M {_n(cx - ix)} {_n(cy)} A {_n(ix)} {_n(iy)} 0 1 0 {_n(cx + ix)} {_n(cy)} "
        f"A {_n(ix)} {_n(iy)} 0 1 0 {_n(cx - ix)} {_n(cy)} Z"
    )


def donut(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    return _svg(w, h, _path(_ring(w, h, 0.6), paint))


def no_smoking(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    bar = h * 0.15 / 2
    # Slash from top-left to bottom-right of the inner circle
    dx, dy = w * 0.4 * math.cos(math.radians(45)), h * 0.4 * math.sin(math.radians(45))
    cx, cy = w / 2, h / 2
    slash = (
        f"M {_n(cx - dx - bar)} {_n(cy - dy + bar)} L {_n(cx - dx + bar)} {_n(cy - dy - bar)} "
        f"L {_n(cx + dx + bar)} {_n(cy + dy - bar)} L {_n(cx + dx - bar)} {_n(cy + dy + bar)} Z"
    )
    return _svg(w, h, _path(_ring(w, h, 0.75), paint) + _path(slash, paint))


def block_arc(position: Position, paint: ShapePaint) -> str:
    w, h = position.width, position.height
    rx, ry = w / 2, h / 2
    ix, iy = rx * 0.6, ry * 0.6
    cx, cy = w / 2, h / 2
    d = (
        f"M 0 {_n(cy)} A {_n(rx)} {_n(ry)} 0 0 1 {_n(w)} {_n(cy)} "
        f"L {_n(cx + ix)} {_n(cy)} A {_n(ix)} {_n(iy)} 0 0 0 {_n(cx - ix)} {_n(cy)} Z"
    )
    return _svg(w, h, _path(d, paint))


def bent_arrow(position: Position, paint: ShapePaint) -> str:
    d = (
        "M408.5 2221.5 V1990.5 C408.5 1862.92 511.922 1759.5 639.499 1759.5 H840.5 V1693.5 "
        "L972.5 1825.5 L840.5 1957.5 V1891.5 H639.499 C584.823 1891.5 540.5 1935.82 540.5 1990.5 V2221.5 Z"
    )
    return _svg(573, 540, _path(d, paint), view_x=405, view_y=1685)


def uturn_arrow(position: Position, paint: ShapePaint) -> str:
    d = (
        "M1877.5 2090.5 1877.5 1425.5C1877.5 1355.91 1933.91 1299.5 2003.5 1299.5L2003.5 1299.5"
        "C2073.09 1299.5 2129.5 1355.91 2129.5 1425.5L2129.5 1820.75 2165.5 1820.75 2093.5 1892.75 "
        "2021.5 1820.75 2057.5 1820.75 2057.5 1425.5C2057.5 1395.68 2033.32 1371.5 2003.5 1371.5L2003.5 1371.5"
        "C1973.68 1371.5 1949.5 1395.68 1949.5 1425.5L1949.5 2090.5Z"
    )
    return _svg(300, 798, _path(d, paint), view_x=1874, view_y=1296)


def curved_right_arrow(position: Position, paint: ShapePaint) -> str:
    arrow = (
        "M2317.5 1032 C2317.5 1092.88 2413.75 1146.04 2551.5 1161.26 L2551.5 1122.26 L2629.5 1204.5 "
        "L2551.5 1278.26 L2551.5 1239.26 C2413.75 1224.04 2317.5 1170.88 2317.5 1110 Z"
    )
    upper = (
        "M2629.5 976.5 C2492.29 976.5 2371.19 1014.85 2331.11 1071 C2280.77 1000.49 2373.56 925.863 "
        "2538.35 904.324 C2567.89 900.463 2598.61 898.5 2629.5 898.5 Z"
    )
    outline = (
        "M2317.5 1032 C2317.5 1092.88 2413.75 1146.04 2551.5 1161.26 L2551.5 1122.26 L2629.5 1204.5 "
        "L2551.5 1278.26 L2551.5 1239.26 C2413.75 1224.04 2317.5 1170.88 2317.5 1110 L2317.5 1032 "
        "C2317.5 958.27 2457.19 898.5 2629.5 898.5 L2629.5 976.5 C2492.29 976.5 2371.19 1014.85 2331.11 1071"
    )
    body = (
        f'<path d="{arrow}" fill="{paint.fill}" fill-rule="evenodd"/>'
        f'<path d="{upper}" fill="{paint.fill}" fill-rule="evenodd"/>'
        + _path(outline, paint, fill="none")
    )
    return _svg(321, 392, body, view_x=2314, view_y=895)
