#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/charts/common.py
"""Shared chart model and extraction helpers.

The extractors in this module read the cached values that PowerPoint stores
next to each series reference (``c:numCache``/``c:strCache``). They never
raise for malformed data: missing numbers become ``0`` and missing category
labels become ``""``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from pptx2html.colors import ColorContext, find_color_node, normalize_hex, resolve_color
from pptx2html.constants import (
    DEFAULT_CHART_HEIGHT_PX,
    DEFAULT_CHART_WIDTH_PX,
    LEGEND_POSITIONS,
    ChartType,
    LegendPosition,
)
from pptx2html.units import GroupTransform, Position, format_number, non_visual_props, parse_float, shape_position
from pptx2html.utils.html_utils import escape_html, style_attr
from pptx2html.xmltree import XmlNode, attr, parse_xml

logger = logging.getLogger(__name__)

# plotArea child tag -> chart family
_CHART_TAGS: dict[str, ChartType] = {
    "c:doughnutChart": "doughnut",
    "c:pieChart": "pie",
    "c:pie3DChart": "pie",
    "c:ofPieChart": "pie",
    "c:barChart": "bar",
    "c:bar3DChart": "bar",
    "c:columnChart": "bar",
    "c:col3DChart": "bar",
    "c:lineChart": "line",
    "c:line3DChart": "line",
    "c:areaChart": "area",
    "c:area3DChart": "area",
    "c:scatterChart": "scatter",
}


@dataclass(frozen=True)
class ChartFrame:
    """Placement and identity of the graphic frame hosting a chart."""

    name: str
    shape_id: str
    rel_id: str
    position: Position
    z_index: int = 0

    @property
    def chart_id(self) -> str:
        return f"chart_{self.shape_id}"


@dataclass(frozen=True)
class SeriesData:
    """One chart series.

    ``values`` is aligned positionally with ``categories`` and never contains
    NaN.
    """

    label: str
    categories: tuple[str, ...]
    values: tuple[float, ...]
    color: str
    index: int = 0


@dataclass(frozen=True)
class AxisConfig:
    """Value or category axis settings read from ``c:valAx``/``c:catAx``."""

    display: bool = True
    color: str = "#666666"
    min: float | None = None
    max: float | None = None
    major_unit: float | None = None
    minor_unit: float | None = None
    format_code: str = "General"
    crosses: str = "autoZero"
    orientation: str = "minMax"


@dataclass(frozen=True)
class LegendConfig:
    display: bool = False
    position: LegendPosition = "right"


@dataclass(frozen=True)
class GridlineConfig:
    display: bool = False
    color: str = "#E0E0E0"


@dataclass(frozen=True)
class ChartData:
    """Everything a chart renderer needs, extracted once from the chart part."""

    kind: ChartType
    series: tuple[SeriesData, ...]
    categories: tuple[str, ...] = ()
    title: str = ""
    value_axis: AxisConfig | None = None
    category_axis: AxisConfig | None = None
    grouping: str = "standard"
    horizontal: bool = False
    legend: LegendConfig = field(default_factory=LegendConfig)
    gridlines: GridlineConfig = field(default_factory=GridlineConfig)
    background: str = "transparent"

    @property
    def all_values(self) -> list[float]:
        return [value for series in self.series for value in series.values]


def ensure_tree(chart_xml: XmlNode | str | bytes) -> XmlNode:
    """Accept a parsed chart part or its raw XML."""
    if isinstance(chart_xml, XmlNode):
        return chart_xml
    return parse_xml(chart_xml)


def chart_element(chart_xml: XmlNode) -> XmlNode | None:
    """Return ``c:chart`` whether given the part root or ``c:chart`` itself."""
    if chart_xml.tag == "c:chart":
        return chart_xml
    return chart_xml.first("c:chart")


def plot_area(chart_xml: XmlNode) -> XmlNode | None:
    chart = chart_element(chart_xml)
    return chart.first("c:plotArea") if chart is not None else None


def detect_chart_type(chart_xml: XmlNode | str | bytes) -> ChartType:
    """Classify a chart part by the first chart-type element of its plot area."""
    area = plot_area(ensure_tree(chart_xml))
    if area is None:
        return "unknown"
    for child in area.children:
        kind = _CHART_TAGS.get(child.tag)
        if kind is not None:
            return kind
    return "unknown"


def chart_frame(
    graphic_frame: XmlNode,
    z_index: int = 0,
    group: GroupTransform | None = None,
    default_size: tuple[float, float] = (DEFAULT_CHART_WIDTH_PX, DEFAULT_CHART_HEIGHT_PX),
) -> ChartFrame:
    """Identity and placement of a chart's ``p:graphicFrame``.

    Frames without a transform are placed at the origin with ``default_size``.
    """
    nv = non_visual_props(graphic_frame)
    c_nv_pr = nv.first("p:cNvPr") if nv is not None else None
    name = (c_nv_pr.get("name") if c_nv_pr is not None else None) or "Chart"
    shape_id = (c_nv_pr.get("id") if c_nv_pr is not None else None) or "0"
    rel_id = attr(graphic_frame, "a:graphic/a:graphicData/c:chart", "r:id") or ""

    if graphic_frame.first("p:xfrm") is None:
        position = Position(width=default_size[0], height=default_size[1])
    else:
        position = shape_position(graphic_frame)
    if group is not None:
        position = group.apply(position)
    return ChartFrame(name=name, shape_id=shape_id, rel_id=rel_id, position=position, z_index=z_index)


def _cache_points(ref_parent: XmlNode | None, paths: Sequence[str]) -> list[XmlNode] | None:
    if ref_parent is None:
        return None
    for path in paths:
        cache = ref_parent.find(path)
        if cache is not None:
            return cache.all("c:pt")
    return None


def _point_text(point: XmlNode) -> str | None:
    value = point.first("c:v")
    return value.text_content() if value is not None else None


def parse_number_cache(val_node: XmlNode | None) -> tuple[float, ...]:
    """Read the numeric cache of a ``c:val``/``c:yVal`` element.

    Returns one value per ``c:pt``; unparseable or missing values become 0.
    """
    points = _cache_points(val_node, ("c:numRef/c:numCache", "c:numLit"))
    if not points:
        return ()
    return tuple(parse_float(_point_text(point), 0.0) for point in points)


def parse_category_cache(cat_node: XmlNode | None) -> tuple[str, ...]:
    """Read category labels from string, multi-level, literal or numeric caches."""
    points = _cache_points(
        cat_node,
        (
            "c:strRef/c:strCache",
            "c:multiLvlStrRef/c:multiLvlStrCache/c:lvl",
            "c:strLit",
            "c:numRef/c:numCache",
        ),
    )
    if not points:
        return ()
    return tuple(_point_text(point) or "" for point in points)


def _rich_text(rich: XmlNode | None) -> str:
    if rich is None:
        return ""
    for paragraph in rich.all("a:p"):
        text = "".join(run.text_content() for run in paragraph.find_all("a:r/a:t"))
        if text:
            return text
    return ""


def series_name(ser: XmlNode, index: int) -> str:
    """Series label from ``c:tx``, falling back to ``Series N``."""
    tx = ser.first("c:tx")
    if tx is not None:
        cached = tx.find("c:strRef/c:strCache/c:pt/c:v")
        if cached is not None and cached.text_content():
            return cached.text_content()
        direct = tx.first("c:v")
        if direct is not None and direct.text_content():
            return direct.text_content()
        rich = _rich_text(tx.first("c:rich"))
        if rich:
            return rich
    idx = attr(ser, "c:idx", "val")
    if idx is not None:
        return f"Series {int(parse_float(idx, index)) + 1}"
    return f"Series {index + 1}"


def chart_title(chart_xml: XmlNode) -> str:
    """Title text, or ``""`` when absent or auto-deleted."""
    chart = chart_element(chart_xml)
    if chart is None or attr(chart, "c:autoTitleDeleted", "val") == "1":
        return ""
    return _rich_text(chart.find("c:title/c:tx/c:rich"))


def _line_color(node: XmlNode | None, default: str) -> str:
    srgb = attr(node, "c:spPr/a:ln/a:solidFill/a:srgbClr", "val")
    return normalize_hex(srgb, default) if srgb else default


def axis_config(axis: XmlNode | None, default_color: str = "#666666") -> AxisConfig | None:
    """Bounds, units, number format and line color of an axis element."""
    if axis is None:
        return None

    def number(path: str) -> float | None:
        raw = attr(axis, path, "val")
        if raw is None:
            return None
        value = parse_float(raw, float("nan"))
        return value if value == value else None

    return AxisConfig(
        display=attr(axis, "c:delete", "val") not in ("1", "true"),
        color=_line_color(axis, default_color),
        min=number("c:scaling/c:min"),
        max=number("c:scaling/c:max"),
        major_unit=number("c:majorUnit"),
        minor_unit=number("c:minorUnit"),
        format_code=attr(axis, "c:numFmt", "formatCode") or "General",
        crosses=attr(axis, "c:crosses", "val") or "autoZero",
        orientation=attr(axis, "c:scaling/c:orientation", "val") or "minMax",
    )


def legend_config(chart_xml: XmlNode) -> LegendConfig:
    chart = chart_element(chart_xml)
    legend = chart.first("c:legend") if chart is not None else None
    if legend is None:
        return LegendConfig()
    position = attr(legend, "c:legendPos", "val") or "r"
    return LegendConfig(display=True, position=LEGEND_POSITIONS.get(position, "right"))


def gridlines(axis: XmlNode | None, default_color: str = "#DFDFDF") -> GridlineConfig:
    major = axis.first("c:majorGridlines") if axis is not None else None
    if major is None:
        return GridlineConfig()
    return GridlineConfig(display=True, color=_line_color(major, default_color))


def plot_background(area: XmlNode | None) -> str:
    srgb = attr(area, "c:spPr/a:solidFill/a:srgbClr", "val")
    return normalize_hex(srgb) if srgb else "transparent"


def series_color(
    ser: XmlNode,
    index: int,
    ctx: ColorContext,
    palette: Sequence[str],
    scheme_colors: dict[str, str] | None = None,
    scheme_fallback: str | None = None,
) -> str:
    """Color of a series (or data point) from its ``c:spPr`` fill.

    Scheme references resolve through the theme when it defines the slot,
    then through ``scheme_colors`` (unknown slots get ``scheme_fallback``). Without a solid fill the palette entry
    for ``index`` is used.
    """
    solid = ser.find("c:spPr/a:solidFill")
    node = find_color_node(solid)
    if node is None:
        return palette[index % len(palette)]
    if node.tag == "a:schemeClr":
        slot = node.get("val", "")
        mapped = ctx.color_map.get(slot, slot)
        if mapped in ctx.theme_colors or slot in ctx.theme_colors:
            return resolve_color(solid, ctx).hex
        scheme_colors = scheme_colors or {}
        return scheme_colors.get(slot, scheme_fallback or palette[0])
    if node.tag == "a:srgbClr":
        return normalize_hex(node.get("val"), palette[index % len(palette)])
    return resolve_color(solid, ctx).hex


def container_open(frame: ChartFrame, kind: str, extra: Sequence[tuple[str, object]] = ()) -> str:
    """Opening tag of the positioned chart container."""
    pos = frame.position
    style = style_attr(
        [
            ("position", "absolute"),
            ("left", f"{format_number(pos.x)}px"),
            ("top", f"{format_number(pos.y)}px"),
            ("width", f"{format_number(pos.width)}px"),
            ("height", f"{format_number(pos.height)}px"),
            *extra,
            ("font-family", "Arial, sans-serif"),
            ("z-index", frame.z_index),
            ("box-sizing", "border-box"),
        ]
    )
    return (
        f'<div class="chart-container" id="{escape_html(frame.chart_id)}" data-name="{escape_html(frame.name)}" '
        f'data-shape-id="{escape_html(frame.shape_id)}" data-rel-id="{escape_html(frame.rel_id)}" '
        f'data-chart-type="{kind}" style="{style}">'
    )


def title_html(title: str) -> str:
    if not title:
        return ""
    return (
        '<div class="chart-title" style="text-align: center; font-weight: bold; font-size: 16px; '
        f'margin-bottom: 20px; color: #333;">{escape_html(title)}</div>'
    )


def legend_html(series: Sequence[SeriesData], legend: LegendConfig) -> str:
    if not legend.display or not series:
        return ""
    items = "".join(
        '<div style="display: flex; align-items: center; gap: 5px;">'
        f'<div style="width: 16px; height: 16px; background: {s.color}; border-radius: 2px;"></div>'
        f'<span style="font-size: 12px; color: #333;">{escape_html(s.label)}</span></div>'
        for s in series
    )
    return (
        f'<div class="chart-legend" data-position="{legend.position}" style="display: flex; '
        'justify-content: center; align-items: center; margin-top: 15px; flex-wrap: wrap; gap: 15px;">'
        f"{items}</div>"
    )


def error_fragment(message: str, frame: ChartFrame | None = None) -> str:
    """The inline "chart could not be rendered" fragment."""
    if frame is not None:
        pos = frame.position
        placement = (
            f"position: absolute; left: {format_number(pos.x)}px; top: {format_number(pos.y)}px; "
            f"width: {format_number(pos.width)}px; height: {format_number(pos.height)}px; z-index: {frame.z_index};"
        )
        name = frame.name
    else:
        placement = f"width: {DEFAULT_CHART_WIDTH_PX}px; height: {DEFAULT_CHART_HEIGHT_PX}px;"
        name = ""
    return (
        f'<div class="chart-error" data-name="{escape_html(name)}" style="{placement} display: flex; '
        'align-items: center; justify-content: center; border: 2px dashed #ccc; color: #666; '
        'font-family: Arial, sans-serif; box-sizing: border-box;">'
        '<div style="text-align: center;"><div>Chart could not be rendered</div>'
        f'<div style="font-size: 12px; margin-top: 10px; color: #999;">{escape_html(message)}</div></div></div>'
    )
