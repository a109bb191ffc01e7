#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/charts/area.py
"""2D area charts rendered as SVG paths over positioned axis labels."""

from __future__ import annotations

import logging
from typing import Sequence

from pptx2html.charts.common import (
    AxisConfig,
    ChartData,
    ChartFrame,
    SeriesData,
    axis_config,
    chart_title,
    container_open,
    error_fragment,
    gridlines,
    legend_config,
    legend_html,
    parse_category_cache,
    parse_number_cache,
    plot_area,
    plot_background,
    series_color,
    series_name,
    title_html,
)
from pptx2html.charts.ticks import TickInfo, compute_value_ticks, format_tick
from pptx2html.colors import ColorContext
from pptx2html.constants import (
    AREA_AXIS_COLOR,
    AREA_GRID_COLOR,
    AREA_PADDING,
    DOUGHNUT_DEFAULT_COLORS,
    DOUGHNUT_SCHEME_COLORS,
)
from pptx2html.options import RenderOptions
from pptx2html.units import format_number
from pptx2html.utils.html_utils import escape_html
from pptx2html.xmltree import XmlNode, attr

logger = logging.getLogger(__name__)

_AREA_TAGS = ("c:areaChart", "c:area3DChart")

# Space reserved around the plot area inside the container
_AREA_INSET = 120

Band = tuple[tuple[float, ...], tuple[float, ...]]


def area_chart_node(chart_xml: XmlNode) -> XmlNode | None:
    area = plot_area(chart_xml)
    if area is None:
        return None
    for tag in _AREA_TAGS:
        node = area.first(tag)
        if node is not None:
            return node
    return None


def parse_area_data(chart_xml: XmlNode, ctx: ColorContext) -> ChartData | None:
    """Extract area series, axes, gridlines and legend; None without series."""
    node = area_chart_node(chart_xml)
    if node is None:
        return None
    series = tuple(
        SeriesData(
            label=series_name(ser, index),
            categories=parse_category_cache(ser.first("c:cat")),
            values=parse_number_cache(ser.first("c:val")),
            color=series_color(ser, index, ctx, DOUGHNUT_DEFAULT_COLORS, DOUGHNUT_SCHEME_COLORS),
            index=index,
        )
        for index, ser in enumerate(node.all("c:ser"))
    )
    if not series:
        return None
    area = plot_area(chart_xml)
    value_axis = area.first("c:valAx")
    return ChartData(
        kind="area",
        series=series,
        categories=series[0].categories,
        title=chart_title(chart_xml),
        value_axis=axis_config(value_axis, AREA_AXIS_COLOR),
        category_axis=axis_config(area.first("c:catAx"), AREA_AXIS_COLOR),
        grouping=attr(node, "c:grouping", "val") or "standard",
        legend=legend_config(chart_xml),
        gridlines=gridlines(value_axis, AREA_GRID_COLOR),
        background=plot_background(area),
    )


def stack_series(values: Sequence[Sequence[float]], grouping: str = "standard") -> list[Band]:
    """Lower and upper edges of each series for a grouping.

    ``standard`` draws every series from zero. ``stacked`` accumulates the
    series per category, and ``percentStacked`` additionally divides by the
    category total so the top series ends at 1.
    """
    count = max((len(v) for v in values), default=0)
    padded = [tuple(v) + (0.0,) * (count - len(v)) for v in values]
    if grouping not in ("stacked", "percentStacked"):
        zeros = (0.0,) * count
        return [(zeros, row) for row in padded]

    totals = [sum(abs(row[i]) for row in padded) for i in range(count)]
    bands: list[Band] = []
    running = [0.0] * count
    for row in padded:
        lower = tuple(running)
        running = [running[i] + row[i] for i in range(count)]
        upper = tuple(running)
        if grouping == "percentStacked":
            lower = tuple(v / totals[i] if totals[i] else 0.0 for i, v in enumerate(lower))
            upper = tuple(v / totals[i] if totals[i] else 0.0 for i, v in enumerate(upper))
        bands.append((lower, upper))
    return bands


def _x_positions(count: int, width: float) -> list[float]:
    if count <= 1:
        return [width / 2] * count
    step = width / (count - 1)
    return [i * step for i in range(count)]


def _area_path(lower: Sequence[float], upper: Sequence[float], xs: Sequence[float], to_y) -> str:
    forward = " ".join(f"L {format_number(x, 2)} {format_number(to_y(v), 2)}" for x, v in zip(xs, upper))
    backward = " ".join(
        f"L {format_number(x, 2)} {format_number(to_y(v), 2)}" for x, v in reversed(list(zip(xs, lower)))
    )
    start = f"M {format_number(xs[0], 2)} {format_number(to_y(lower[0]), 2)}"
    return f"{start} {forward} {backward} Z"


def _svg_body(data: ChartData, bands: list[Band], width: float, height: float, ticks: TickInfo) -> str:
    count = len(bands[0][1]) if bands else 0
    if count == 0:
        return ""
    xs = _x_positions(count, width)

    def to_y(value: float) -> float:
        return height - (value - ticks.min) / ticks.span * height

    parts = ['<svg style="position: absolute; top: 0; left: 0; width: 100%; height: 100%; pointer-events: none;">']
    if data.gridlines.display:
        for tick in ticks.ticks:
            if tick == ticks.min:
                continue
            y = format_number(to_y(tick), 2)
            parts.append(
                f'<line x1="0" y1="{y}" x2="{format_number(width, 2)}" y2="{y}" '
                f'stroke="{data.gridlines.color}" stroke-width="1"/>'
            )

    clamp = min(max(0.0, ticks.min), ticks.max)
    for series, (lower, upper) in zip(data.series, bands):
        if data.grouping == "standard":
            lower = (clamp,) * count
        parts.append(
            f'<path class="area-series" data-series="{series.index}" d="{_area_path(lower, upper, xs, to_y)}" '
            f'fill="{series.color}" stroke="{series.color}" stroke-width="2" stroke-linejoin="round"/>'
        )
        for x, value in zip(xs, upper):
            parts.append(
                f'<circle cx="{format_number(x, 2)}" cy="{format_number(to_y(value), 2)}" r="1" '
                f'fill="{series.color}" stroke="white" stroke-width="0"/>'
            )
    parts.append("</svg>")
    return "".join(parts)


def _axes(data: ChartData, width: float, height: float, ticks: TickInfo) -> str:
    x_axis = data.category_axis or AxisConfig(color=AREA_AXIS_COLOR)
    y_axis = data.value_axis or AxisConfig(color=AREA_AXIS_COLOR)
    parts = []
    if data.categories and x_axis.display:
        parts.append(
            f'<div class="axis-line" style="position: absolute; bottom: -1px; left: 0; width: 100%; '
            f'height: 2px; background: {x_axis.color};"></div>'
        )
        skip = 2 if len(data.categories) > 15 else 1
        last = len(data.categories) - 1
        for index, (x, label) in enumerate(zip(_x_positions(len(data.categories), width), data.categories)):
            if index % skip and index != last:
                continue
            parts.append(
                f'<div class="category-label" style="position: absolute; bottom: -25px; left: {format_number(x, 2)}px; '
                f'transform: translateX(-50%); font-size: 11px; color: {x_axis.color}; white-space: nowrap;">'
                f"{escape_html(label)}</div>"
            )
    if not y_axis.display:
        return "".join(parts)
    parts.append(
        f'<div class="axis-line" style="position: absolute; left: -1px; top: 0; width: 2px; height: 100%; '
        f'background: {y_axis.color};"></div>'
    )
    format_code = ticks.format_code
    if data.grouping == "percentStacked" and format_code == "General":
        format_code = "0%"
    for tick in ticks.ticks:
        y = format_number(height - (tick - ticks.min) / ticks.span * height, 2)
        parts.append(
            f'<div class="tick-mark" style="position: absolute; left: -5px; top: {y}px; width: 5px; height: 1px; '
            f'background: {y_axis.color};"></div>'
            f'<div class="axis-label" style="position: absolute; right: {format_number(width + 10, 2)}px; top: {y}px; '
            f'transform: translateY(-50%); font-size: 11px; color: {y_axis.color}; text-align: right;">'
            f"{escape_html(format_tick(tick, format_code, ticks.step))}</div>"
        )
    return "".join(parts)


def render_area_chart(
    frame: ChartFrame,
    chart_xml: XmlNode,
    ctx: ColorContext,
    options: RenderOptions | None = None,
) -> str:
    """Render a standard, stacked or percent-stacked area chart."""
    options = options or RenderOptions()
    data = parse_area_data(chart_xml, ctx)
    if data is None:
        return error_fragment("Area chart data not found", frame)

    bands = stack_series([s.values for s in data.series], data.grouping)
    plotted = [v for lower, upper in bands for v in (*lower, *upper)]
    if data.grouping == "standard":
        plotted = data.all_values
    if not plotted:
        return error_fragment("No values in area chart", frame)

    ticks = compute_value_ticks(
        data.value_axis,
        min(plotted),
        max(plotted),
        desired=options.desired_ticks,
        values=plotted,
        padding=AREA_PADDING,
        integer_step_threshold=options.integer_step_threshold,
    )
    width = frame.position.width - _AREA_INSET
    height = frame.position.height - _AREA_INSET
    return (
        container_open(frame, "area", [("padding", "20px")])
        + title_html(data.title)
        + f'<div class="chart-area" style="position: relative; height: {format_number(height, 2)}px; '
        f'width: {format_number(width, 2)}px; margin-left: 60px; margin-top: 20px; background: {data.background};">'
        + _svg_body(data, bands, width, height, ticks)
        + _axes(data, width, height, ticks)
        + "</div>"
        + legend_html(data.series, data.legend)
        + "</div>"
    )
