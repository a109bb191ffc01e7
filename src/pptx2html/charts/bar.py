#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/charts/bar.py
"""Bar and column charts rendered as positioned ``div`` bars."""

from __future__ import annotations

import logging

from pptx2html.charts.common import (
    ChartData,
    ChartFrame,
    SeriesData,
    axis_config,
    chart_title,
    container_open,
    gridlines,
    legend_config,
    parse_category_cache,
    parse_number_cache,
    plot_area,
    series_color,
    series_name,
    title_html,
)
from pptx2html.charts.ticks import TickInfo, compute_value_ticks, format_tick
from pptx2html.colors import ColorContext
from pptx2html.constants import (
    BAR_DEFAULT_COLORS,
    BAR_FALLBACK_CATEGORIES,
    BAR_FALLBACK_SERIES,
    BAR_SCHEME_COLORS,
    BAR_SCHEME_FALLBACK,
)
from pptx2html.options import RenderOptions
from pptx2html.units import format_number, js_round
from pptx2html.utils.html_utils import escape_html
from pptx2html.xmltree import XmlNode, attr

logger = logging.getLogger(__name__)

BAR_CHART_TAGS = ("c:barChart", "c:bar3DChart", "c:columnChart", "c:col3DChart")

# Space reserved around the plot area inside the container
_AREA_INSET = 100
_AREA_MARGIN_LEFT = 60


def bar_chart_node(chart_xml: XmlNode) -> XmlNode | None:
    area = plot_area(chart_xml)
    if area is None:
        return None
    for tag in BAR_CHART_TAGS:
        node = area.first(tag)
        if node is not None:
            return node
    return None


def parse_bar_data(chart_xml: XmlNode, ctx: ColorContext) -> ChartData | None:
    """Extract series and axes of a bar chart, or None when it has no series."""
    node = bar_chart_node(chart_xml)
    if node is None:
        return None
    series = tuple(
        SeriesData(
            label=series_name(ser, index),
            categories=parse_category_cache(ser.first("c:cat")),
            values=parse_number_cache(ser.first("c:val")),
            color=series_color(ser, index, ctx, BAR_DEFAULT_COLORS, BAR_SCHEME_COLORS, BAR_SCHEME_FALLBACK),
            index=index,
        )
        for index, ser in enumerate(node.all("c:ser"))
    )
    if not series:
        return None
    area = plot_area(chart_xml)
    value_axis = area.first("c:valAx") if area is not None else None
    return ChartData(
        kind="bar",
        series=series,
        categories=series[0].categories,
        title=chart_title(chart_xml),
        value_axis=axis_config(value_axis),
        category_axis=axis_config(area.first("c:catAx") if area is not None else None),
        grouping=attr(node, "c:grouping", "val") or "clustered",
        horizontal=attr(node, "c:barDir", "val") == "bar",
        legend=legend_config(chart_xml),
        gridlines=gridlines(value_axis),
    )


def fallback_bar_data(title: str = "") -> ChartData:
    """The fixed three-series sample dataset shown for empty bar charts."""
    series = tuple(
        SeriesData(label=label, categories=BAR_FALLBACK_CATEGORIES, values=values, color=color, index=index)
        for index, (label, values, color) in enumerate(BAR_FALLBACK_SERIES)
    )
    return ChartData(kind="bar", series=series, categories=BAR_FALLBACK_CATEGORIES, title=title)


def _category_count(data: ChartData) -> int:
    return max([len(data.categories)] + [len(s.values) for s in data.series]) or 1


def _category_label(data: ChartData, index: int) -> str:
    return data.categories[index] if index < len(data.categories) else ""


def _vertical_bars(data: ChartData, width: float, height: float, ticks: TickInfo) -> str:
    parts = []
    count = _category_count(data)
    series_count = len(data.series) or 1
    category_width = width / count
    bar_width = js_round(category_width * 0.8 / series_count)
    spacing = category_width * 0.1
    inner = height - 40

    def value_to_y(value: float) -> float:
        return height - 20 - (value - ticks.min) / ticks.span * inner

    zero_y = value_to_y(min(max(0.0, ticks.min), ticks.max))
    for category in range(count):
        for series in data.series:
            value = series.values[category] if category < len(series.values) else 0.0
            y = value_to_y(value)
            top = js_round(min(y, zero_y))
            bar_height = js_round(max(1, abs(y - zero_y)))
            x = js_round(category * category_width + spacing + series.index * bar_width)
            parts.append(
                f'<div class="bar" id="bar_{series.index}_{category}" data-series="{series.index}" '
                f'data-category="{category}" data-value="{format_number(value, 10)}" '
                f'style="position: absolute; left: {x}px; top: {top}px; width: {max(1, bar_width - 2)}px; '
                f'height: {bar_height}px; background-color: {series.color}; border-radius: 2px; z-index: 2;" '
                f'title="{escape_html(series.label)}: {format_number(value, 10)}"></div>'
            )
        parts.append(
            '<div class="category-label" style="position: absolute; '
            f"left: {format_number(category * category_width + category_width / 2 - 30, 2)}px; "
            f'top: {format_number(height - 15, 2)}px; width: 60px; text-align: center; font-size: 12px; '
            f'color: #666; z-index: 4;">{escape_html(_category_label(data, category))}</div>'
        )
    return "".join(parts)


def _horizontal_bars(data: ChartData, width: float, height: float, ticks: TickInfo) -> str:
    parts = []
    count = _category_count(data)
    series_count = len(data.series) or 1
    category_height = height / count
    bar_height = js_round(category_height * 0.8 / series_count)
    spacing = category_height * 0.1
    inner = width - 60

    def value_to_x(value: float) -> float:
        return 40 + (value - ticks.min) / ticks.span * inner

    zero_x = value_to_x(min(max(0.0, ticks.min), ticks.max))
    for category in range(count):
        for series in data.series:
            value = series.values[category] if category < len(series.values) else 0.0
            x = value_to_x(value)
            left = js_round(min(x, zero_x))
            bar_width = js_round(max(1, abs(x - zero_x)))
            y = js_round(category * category_height + spacing + series.index * bar_height)
            parts.append(
                f'<div class="bar" id="bar_{series.index}_{category}" data-series="{series.index}" '
                f'data-category="{category}" data-value="{format_number(value, 10)}" '
                f'style="position: absolute; left: {left}px; top: {y}px; width: {bar_width}px; '
                f'height: {max(1, bar_height - 2)}px; background-color: {series.color}; border-radius: 2px; '
                f'z-index: 2;" title="{escape_html(series.label)}: {format_number(value, 10)}"></div>'
            )
        parts.append(
            '<div class="category-label" style="position: absolute; left: 5px; '
            f"top: {format_number(category * category_height + category_height / 2 - 8, 2)}px; width: 35px; "
            f'text-align: right; font-size: 12px; color: #666; z-index: 4;">'
            f"{escape_html(_category_label(data, category))}</div>"
        )
    return "".join(parts)


def _axes(data: ChartData, width: float, height: float, ticks: TickInfo) -> str:
    parts = []
    grid_color = data.gridlines.color if data.gridlines.display else "#eee"
    for tick in ticks.ticks:
        label = escape_html(format_tick(tick, ticks.format_code, ticks.step))
        if data.horizontal:
            x = format_number(40 + (tick - ticks.min) / ticks.span * (width - 60), 2)
            parts.append(
                f'<div class="gridline" style="position: absolute; left: {x}px; top: 0; width: 1px; '
                f'height: {format_number(height - 20, 2)}px; background: {grid_color}; z-index: 1;"></div>'
                f'<div class="axis-label" style="position: absolute; left: {x}px; '
                f"top: {format_number(height + 5, 2)}px; width: 30px; margin-left: -15px; text-align: center; "
                f'font-size: 10px; color: #666; z-index: 4;">{label}</div>'
            )
        else:
            y = height - 20 - (tick - ticks.min) / ticks.span * (height - 40)
            parts.append(
                f'<div class="gridline" style="position: absolute; left: 0; top: {format_number(y, 2)}px; '
                f'width: {format_number(width, 2)}px; height: 1px; background: {grid_color}; z-index: 1;"></div>'
                f'<div class="axis-label" style="position: absolute; left: -35px; top: {format_number(y - 8, 2)}px; '
                f'width: 30px; text-align: right; font-size: 10px; color: #666; z-index: 4;">{label}</div>'
            )
    return "".join(parts)


def render_bar_chart(
    frame: ChartFrame,
    chart_xml: XmlNode,
    ctx: ColorContext,
    options: RenderOptions | None = None,
) -> str:
    """Render a bar or column chart.

    Charts without series fall back to a fixed sample dataset so the frame
    still shows something editable.
    """
    options = options or RenderOptions()
    data = parse_bar_data(chart_xml, ctx)
    if data is None:
        logger.debug("Bar chart %s has no series, using sample data", frame.name)
        data = fallback_bar_data(chart_title(chart_xml) or frame.name)

    values = data.all_values
    ticks = compute_value_ticks(
        data.value_axis,
        min(values) if values else 0.0,
        max(values) if values else 5.0,
        desired=options.desired_ticks,
        values=values,
        integer_step_threshold=options.integer_step_threshold,
    )

    width = frame.position.width - _AREA_INSET
    height = frame.position.height - _AREA_INSET
    bars = _horizontal_bars if data.horizontal else _vertical_bars
    return (
        container_open(
            frame,
            "bar",
            [("padding", "20px"), ("border", "1px solid #ddd"), ("border-radius", "4px"), ("background", "white")],
        )
        + title_html(data.title)
        + f'<div class="chart-area" style="position: relative; height: {format_number(height, 2)}px; '
        f'width: {format_number(width, 2)}px; margin-left: {_AREA_MARGIN_LEFT}px; margin-top: 20px;">'
        + bars(data, width, height, ticks)
        + _axes(data, width, height, ticks)
        + "</div></div>"
    )
