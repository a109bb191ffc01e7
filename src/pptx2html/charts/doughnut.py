#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/charts/doughnut.py
"""Doughnut (and pie) charts drawn with a CSS ``conic-gradient``.

Each slice is a color stop spanning ``value / total * 360`` degrees. When
the series has a line width, a gap in the border color is cut from the end
of every slice, so slices and gaps still add up to a full circle.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from pptx2html.charts.common import (
    ChartFrame,
    container_open,
    error_fragment,
    parse_category_cache,
    parse_number_cache,
    plot_area,
)
from pptx2html.colors import ColorContext, find_color_node, normalize_hex, resolve_color
from pptx2html.constants import (
    DOUGHNUT_DEFAULT_BORDER_COLOR,
    DOUGHNUT_DEFAULT_COLORS,
    DOUGHNUT_DEFAULT_HOLE,
    DOUGHNUT_MIN_BORDER_ANGLE,
    DOUGHNUT_SCHEME_COLORS,
    EMU_PER_PX,
)
from pptx2html.units import format_number, parse_float, parse_int
from pptx2html.xmltree import XmlNode, attr

logger = logging.getLogger(__name__)

_DOUGHNUT_TAGS = ("c:doughnutChart", "c:pieChart", "c:pie3DChart", "c:ofPieChart")


@dataclass(frozen=True)
class DoughnutData:
    values: tuple[float, ...]
    labels: tuple[str, ...]
    colors: tuple[str, ...]
    hole_size: float = DOUGHNUT_DEFAULT_HOLE
    first_slice_angle: float = 0.0
    border_color: str = DOUGHNUT_DEFAULT_BORDER_COLOR
    border_width: float = 0.0


@dataclass(frozen=True)
class SliceStop:
    """One ``conic-gradient`` color stop, in degrees."""

    color: str
    start: float
    end: float

    @property
    def span(self) -> float:
        return self.end - self.start

    def css(self) -> str:
        return f"{self.color} {self.start:.2f}deg {self.end:.2f}deg"


def border_angle(border_width_px: float, diameter: float) -> float:
    """Angular width of a ``border_width_px`` gap on a circle of ``diameter``.

    ``angle = width / radius * 180 / pi``, never below 0.5 degrees. Returns 0
    when there is no border.
    """
    if border_width_px <= 0:
        return 0.0
    radius = diameter / 2
    if radius <= 0:
        return DOUGHNUT_MIN_BORDER_ANGLE
    return max(math.degrees(border_width_px / radius), DOUGHNUT_MIN_BORDER_ANGLE)


def doughnut_slices(
    values: Sequence[float],
    colors: Sequence[str],
    gap_angle: float = 0.0,
    border_color: str = DOUGHNUT_DEFAULT_BORDER_COLOR,
) -> list[SliceStop]:
    """Build the color stops of a doughnut.

    Parameters
    ----------
    values : Sequence[float]
        Slice values; negative values count as 0.
    colors : Sequence[str]
        Slice colors, aligned with ``values``.
    gap_angle : float, default 0.0
        Border gap (degrees) cut from the end of each slice. A slice smaller
        than the gap becomes all gap.
    border_color : str
        Color of the gaps.

    Returns
    -------
    list[SliceStop]
        Empty when the total is not positive; otherwise spans sum to 360.

    Examples
    --------
    >>> [s.css() for s in doughnut_slices([30, 70], ["#4472C4", "#ED7D31"])]
    ['#4472C4 0.00deg 108.00deg', '#ED7D31 108.00deg 360.00deg']

    """
    cleaned = [max(0.0, v) if math.isfinite(v) else 0.0 for v in values]
    total = sum(cleaned)
    if total <= 0:
        return []

    stops: list[SliceStop] = []
    current = 0.0
    for index, value in enumerate(cleaned):
        color = colors[index] if index < len(colors) else DOUGHNUT_DEFAULT_COLORS[index % len(DOUGHNUT_DEFAULT_COLORS)]
        degrees = value / total * 360
        gap = min(gap_angle, degrees)
        end = current + degrees - gap
        stops.append(SliceStop(color, current, end))
        if gap > 0:
            stops.append(SliceStop(border_color, end, end + gap))
        current = end + gap
    return stops


def doughnut_node(chart_xml: XmlNode) -> XmlNode | None:
    area = plot_area(chart_xml)
    if area is None:
        return None
    for tag in _DOUGHNUT_TAGS:
        node = area.first(tag)
        if node is not None:
            return node
    return None


def _scheme_or_rgb(solid: XmlNode | None, ctx: ColorContext) -> str | None:
    node = find_color_node(solid)
    if node is None:
        return None
    if node.tag == "a:srgbClr":
        return normalize_hex(node.get("val"), DOUGHNUT_DEFAULT_COLORS[0])
    if node.tag == "a:schemeClr":
        slot = node.get("val", "")
        if ctx.color_map.get(slot, slot) in ctx.theme_colors or slot in ctx.theme_colors:
            return resolve_color(solid, ctx).hex
        return DOUGHNUT_SCHEME_COLORS.get(slot, DOUGHNUT_DEFAULT_COLORS[0])
    return resolve_color(solid, ctx).hex


def parse_doughnut_data(chart_xml: XmlNode, ctx: ColorContext) -> DoughnutData | None:
    """Read values, colors, hole size and slice borders of the first series."""
    node = doughnut_node(chart_xml)
    if node is None:
        return None
    ser = node.first("c:ser")
    if ser is None:
        return None
    values = parse_number_cache(ser.first("c:val"))
    if not values:
        return None

    series_fill = _scheme_or_rgb(ser.find("c:spPr/a:solidFill"), ctx)
    line = ser.find("c:spPr/a:ln")
    border_width = 0.0
    if line is not None and line.first("a:noFill") is None:
        border_width = parse_float(line.get("w")) / EMU_PER_PX
    border_color = _scheme_or_rgb(line.first("a:solidFill"), ctx) if line is not None else None

    colors: list[str | None] = [None] * len(values)
    for position, point in enumerate(ser.all("c:dPt")):
        idx = parse_int(attr(point, "c:idx", "val"), position)
        if 0 <= idx < len(colors):
            colors[idx] = _scheme_or_rgb(point.find("c:spPr/a:solidFill"), ctx)
    resolved = tuple(
        color or series_fill or DOUGHNUT_DEFAULT_COLORS[index % len(DOUGHNUT_DEFAULT_COLORS)]
        for index, color in enumerate(colors)
    )

    if node.tag == "c:doughnutChart":
        hole_attr = attr(node, "c:holeSize", "val")
        hole_size = parse_float(hole_attr) / 100 if hole_attr is not None else DOUGHNUT_DEFAULT_HOLE
    else:
        hole_size = 0.0
    return DoughnutData(
        values=values,
        labels=parse_category_cache(ser.first("c:cat")),
        colors=resolved,
        hole_size=min(0.9, max(0.0, hole_size)),
        first_slice_angle=parse_float(attr(node, "c:firstSliceAng", "val")),
        border_color=border_color or DOUGHNUT_DEFAULT_BORDER_COLOR,
        border_width=border_width,
    )


def render_doughnut_chart(frame: ChartFrame, chart_xml: XmlNode, ctx: ColorContext) -> str:
    """Render a doughnut or pie chart; degenerate data gives the error fragment."""
    data = parse_doughnut_data(chart_xml, ctx)
    if data is None:
        return error_fragment("No doughnut chart data found", frame)

    diameter = min(frame.position.width, frame.position.height) - 20
    gap = border_angle(data.border_width, diameter)
    stops = doughnut_slices(data.values, data.colors, gap, data.border_color)
    if not stops:
        logger.warning("Doughnut chart %s has no data (total is zero)", frame.name)
        return error_fragment("Chart has no data (total is zero)", frame)

    gradient = f"conic-gradient(from 0deg, {', '.join(stop.css() for stop in stops)})"
    hole_pct = data.hole_size * 100
    hole_offset = (100 - hole_pct) / 2
    hole = ""
    if hole_pct > 0:
        hole = (
            f'<div class="doughnut-hole" style="position: absolute; width: {format_number(hole_pct, 2)}%; '
            f"height: {format_number(hole_pct, 2)}%; top: {format_number(hole_offset, 2)}%; "
            f'left: {format_number(hole_offset, 2)}%; background: white; border-radius: 50%; z-index: 2;"></div>'
        )
    return (
        container_open(
            frame,
            "doughnut" if data.hole_size > 0 else "pie",
            [("margin", "0"), ("padding", "0"), ("background", "transparent"), ("overflow", "hidden")],
        )
        + '<div class="doughnut-wrapper" style="position: relative; width: 100%; height: 100%; display: flex; '
        'align-items: center; justify-content: center; padding: 10px; box-sizing: border-box;">'
        f'<div class="doughnut-chart" style="position: relative; width: 100%; height: 100%; '
        f"max-width: {format_number(diameter, 2)}px; max-height: {format_number(diameter, 2)}px; "
        f"aspect-ratio: 1; border-radius: 50%; background: {gradient}; "
        f'transform: rotate({format_number(data.first_slice_angle)}deg); margin: auto;">'
        f"{hole}</div></div></div>"
    )
