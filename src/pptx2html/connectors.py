#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/connectors.py
"""Connector and line rendering.

Connectors (``p:cxnSp``) and line shapes (``p:sp`` with ``prst="line"``) are
drawn as absolutely positioned ``div`` segments rather than SVG so that each
segment can be picked individually by the consuming editor:

* straight lines are one rotated ``div``,
* bent connectors are two to five orthogonal segments,
* curved connectors are a polyline of short rotated segments that follows the
  Bezier curve.

Line-end markers are small rotated ``div``\\ s clipped to a triangle, diamond or
circle. Every connector wrapper carries a ``data-connector-info`` JSON
attribute describing its geometry.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from pptx2html.borders import effective_line, stroke_properties
from pptx2html.colors import ColorContext
from pptx2html.constants import (
    DASH_SEGMENTS,
    DEFAULT_CURVE_SEGMENTS,
    FALLBACK_COLOR,
    LINE_END_SIZES,
    MIN_MARKER_SIZE_PX,
    PERCENT_SCALE,
    TRANSPARENT,
    ConnectorKind,
)
from pptx2html.units import (
    GroupTransform,
    angle_to_degrees,
    emu_to_px,
    find_xfrm,
    format_number,
    non_visual_props,
    parse_float,
)
from pptx2html.utils.html_utils import escape_html, json_attr, style_attr
from pptx2html.xmltree import XmlNode, attr

logger = logging.getLogger(__name__)

Point = tuple[float, float]

_MARKER_CLIPS = {
    "triangle": "polygon(0% 0%, 100% 50%, 0% 100%)",
    "arrow": "polygon(0% 0%, 100% 50%, 0% 100%, 30% 50%)",
    "stealth": "polygon(0% 0%, 100% 50%, 0% 100%, 40% 50%)",
    "diamond": "polygon(50% 0%, 100% 50%, 50% 100%, 0% 50%)",
}


@dataclass(frozen=True)
class LineBox:
    """Unclamped bounding box of a line; width or height may be 0."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0
    flip_h: bool = False
    flip_v: bool = False


@dataclass(frozen=True)
class LineEnd:
    kind: str
    width: float
    length: float


@dataclass(frozen=True)
class LineStroke:
    color: str = FALLBACK_COLOR
    width: float = 1.0
    dash: str = "solid"
    opacity: float = 1.0
    head: LineEnd | None = None
    tail: LineEnd | None = None


def classify_connector(prst: str | None) -> ConnectorKind:
    """Classify a connector preset as ``straight``, ``bent`` or ``curved``."""
    if prst and prst.startswith("bentConnector"):
        return "bent"
    if prst and prst.startswith("curvedConnector"):
        return "curved"
    return "straight"


def line_box(shape: XmlNode, group: GroupTransform | None = None) -> LineBox:
    """Read a line's transform without clamping zero extents."""
    xfrm = find_xfrm(shape)
    if xfrm is None:
        return LineBox()
    x = emu_to_px(attr(xfrm, "a:off", "x"))
    y = emu_to_px(attr(xfrm, "a:off", "y"))
    width = emu_to_px(attr(xfrm, "a:ext", "cx"))
    height = emu_to_px(attr(xfrm, "a:ext", "cy"))
    if group is not None:
        x = group.off_x + (x - group.child_off_x) * group.scale_x
        y = group.off_y + (y - group.child_off_y) * group.scale_y
        width *= group.scale_x
        height *= group.scale_y
    return LineBox(
        x=x,
        y=y,
        width=width,
        height=height,
        rotation=angle_to_degrees(xfrm.get("rot")),
        flip_h=xfrm.get("flipH") == "1",
        flip_v=xfrm.get("flipV") == "1",
    )


def _rotate(point: Point, center: Point, degrees: float) -> Point:
    if not degrees:
        return point
    theta = math.radians(degrees)
    dx, dy = point[0] - center[0], point[1] - center[1]
    return (
        center[0] + dx * math.cos(theta) - dy * math.sin(theta),
        center[1] + dx * math.sin(theta) + dy * math.cos(theta),
    )


def connector_endpoints(box: LineBox) -> tuple[Point, Point]:
    """Start and end points after flips, rotated about the box centre."""
    x0, x1 = box.x, box.x + box.width
    y0, y1 = box.y, box.y + box.height
    if box.flip_h:
        x0, x1 = x1, x0
    if box.flip_v:
        y0, y1 = y1, y0
    center = (box.x + box.width / 2, box.y + box.height / 2)
    return _rotate((x0, y0), center, box.rotation), _rotate((x1, y1), center, box.rotation)


def _line_end(node: XmlNode | None, stroke_width: float) -> LineEnd | None:
    if node is None:
        return None
    kind = node.get("type", "none")
    if kind == "none":
        return None
    scale = max(stroke_width, 1.0)
    width = max(MIN_MARKER_SIZE_PX, LINE_END_SIZES.get(node.get("w", "med"), 3.0) * scale)
    length = max(MIN_MARKER_SIZE_PX, LINE_END_SIZES.get(node.get("len", "med"), 3.0) * scale)
    return LineEnd(kind=kind, width=width, length=length)


def line_stroke(shape: XmlNode, ctx: ColorContext) -> LineStroke | None:
    """Resolve the stroke of a line; None when the line is not drawn."""
    line, _ = effective_line(shape, ctx)
    if line is not None and line.first("a:noFill") is not None:
        return None
    stroke = stroke_properties(shape, ctx)
    color = stroke.color if stroke.color != TRANSPARENT else FALLBACK_COLOR
    width = stroke.width or 1.0
    dash = attr(line, "a:prstDash", "val", "solid") if line is not None else "solid"
    return LineStroke(
        color=color,
        width=width,
        dash=dash or "solid",
        opacity=stroke.opacity,
        head=_line_end(line.first("a:headEnd") if line is not None else None, width),
        tail=_line_end(line.first("a:tailEnd") if line is not None else None, width),
    )


def dash_background(color: str, dash: str, width: float) -> str:
    """CSS background for a dashed segment, scaled by the stroke width."""
    segments = DASH_SEGMENTS.get(dash, ())
    if not segments:
        return color
    stops = []
    offset = 0.0
    for i, length in enumerate(segments):
        paint = color if i % 2 == 0 else "transparent"
        end = offset + length * width
        stops.append(f"{paint} {format_number(offset, 2)}px {format_number(end, 2)}px")
        offset = end
    return f"repeating-linear-gradient(90deg, {', '.join(stops)})"


def _segment(start: Point, end: Point, stroke: LineStroke, z_index: int, css_class: str = "connector-segment") -> str:
    dx, dy = end[0] - start[0], end[1] - start[1]
    length = math.hypot(dx, dy)
    angle = math.degrees(math.atan2(dy, dx))
    height = max(stroke.width, 1.0)
    style = style_attr(
        {
            "position": "absolute",
            "left": f"{format_number(start[0], 2)}px",
            "top": f"{format_number(start[1] - height / 2, 2)}px",
            "width": f"{format_number(length, 2)}px",
            "height": f"{format_number(height, 2)}px",
            "background": dash_background(stroke.color, stroke.dash, stroke.width),
            "transform": f"rotate({format_number(angle, 4)}deg)",
            "transform-origin": "left center",
            "opacity": format_number(stroke.opacity, 3) if stroke.opacity < 1 else None,
            "z-index": z_index,
        }
    )
    return f'<div class="{css_class}" style="{style}"></div>'


def _marker(tip: Point, toward: Point, end: LineEnd, stroke: LineStroke, z_index: int) -> str:
    """Line-end marker at ``tip``, pointing away from ``toward``."""
    angle = math.degrees(math.atan2(tip[1] - toward[1], tip[0] - toward[0]))
    declarations = {
        "position": "absolute",
        "width": f"{format_number(end.length, 2)}px",
        "height": f"{format_number(end.width, 2)}px",
        "background": stroke.color,
        "opacity": format_number(stroke.opacity, 3) if stroke.opacity < 1 else None,
        "z-index": z_index,
    }
    if end.kind == "oval":
        declarations.update(
            left=f"{format_number(tip[0] - end.length / 2, 2)}px",
            top=f"{format_number(tip[1] - end.width / 2, 2)}px",
            transform=f"rotate({format_number(angle, 4)}deg)",
            **{"border-radius": "50%", "transform-origin": "center center"},
        )
    elif end.kind == "diamond":
        declarations.update(
            left=f"{format_number(tip[0] - end.length / 2, 2)}px",
            top=f"{format_number(tip[1] - end.width / 2, 2)}px",
            transform=f"rotate({format_number(angle, 4)}deg)",
            **{"clip-path": _MARKER_CLIPS["diamond"], "transform-origin": "center center"},
        )
    else:
        declarations.update(
            left=f"{format_number(tip[0] - end.length, 2)}px",
            top=f"{format_number(tip[1] - end.width / 2, 2)}px",
            transform=f"rotate({format_number(angle, 4)}deg)",
            **{
                "clip-path": _MARKER_CLIPS.get(end.kind, _MARKER_CLIPS["triangle"]),
                "transform-origin": "100% 50%",
            },
        )
    return f'<div class="line-marker line-marker-{escape_html(end.kind)}" style="{style_attr(declarations)}"></div>'


def _adjust(adjustments: dict[str, float], name: str, default: float = 50000) -> float:
    return adjustments.get(name, default) / PERCENT_SCALE


def _connector_adjustments(shape: XmlNode) -> dict[str, float]:
    values = {}
    for gd in shape.find_all("p:spPr/a:prstGeom/a:avLst/a:gd"):
        formula = gd.get("fmla") or ""
        if gd.get("name") and formula.startswith("val"):
            values[gd.get("name")] = parse_float(formula[3:])
    return values


def bent_points(start: Point, end: Point, segments: int, adjustments: dict[str, float] | None = None) -> list[Point]:
    """Vertices of an orthogonal connector with ``segments`` segments (2 to 5)."""
    adjustments = adjustments or {}
    (sx, sy), (ex, ey) = start, end
    dx, dy = ex - sx, ey - sy
    if segments <= 2:
        return [start, (ex, sy), end]
    x1 = sx + dx * _adjust(adjustments, "adj1")
    if segments == 3:
        return [start, (x1, sy), (x1, ey), end]
    y2 = sy + dy * _adjust(adjustments, "adj2")
    if segments == 4:
        return [start, (x1, sy), (x1, y2), (ex, y2), end]
    x3 = sx + dx * _adjust(adjustments, "adj3")
    return [start, (x1, sy), (x1, y2), (x3, y2), (x3, ey), end]


def curve_points(
    start: Point,
    end: Point,
    quadratic: bool,
    samples: int = DEFAULT_CURVE_SEGMENTS,
    adjustments: dict[str, float] | None = None,
) -> list[Point]:
    """Sample a connector Bezier into ``samples`` + 1 points."""
    adjustments = adjustments or {}
    (sx, sy), (ex, ey) = start, end
    samples = max(2, min(samples, DEFAULT_CURVE_SEGMENTS))
    points = []
    if quadratic:
        cx, cy = ex, sy
        for i in range(samples + 1):
            t = i / samples
            u = 1 - t
            points.append((u * u * sx + 2 * u * t * cx + t * t * ex, u * u * sy + 2 * u * t * cy + t * t * ey))
        return points
    xm = sx + (ex - sx) * _adjust(adjustments, "adj1")
    c1, c2 = (xm, sy), (xm, ey)
    for i in range(samples + 1):
        t = i / samples
        u = 1 - t
        points.append(
            (
                u**3 * sx + 3 * u * u * t * c1[0] + 3 * u * t * t * c2[0] + t**3 * ex,
                u**3 * sy + 3 * u * u * t * c1[1] + 3 * u * t * t * c2[1] + t**3 * ey,
            )
        )
    return points


def _shape_name(shape: XmlNode) -> tuple[str, str]:
    nv = non_visual_props(shape)
    c_nv_pr = nv.first("p:cNvPr") if nv is not None else None
    if c_nv_pr is None:
        return "", ""
    return c_nv_pr.get("name", ""), c_nv_pr.get("id", "")


def _point_dict(point: Point) -> dict[str, float]:
    return {"x": round(point[0], 2), "y": round(point[1], 2)}


def render_line_shape(
    shape: XmlNode, ctx: ColorContext, z_index: int = 0, group: GroupTransform | None = None
) -> str:
    """Render a ``p:sp`` with ``prst="line"`` as a single rotated ``div``."""
    stroke = line_stroke(shape, ctx)
    if stroke is None:
        return ""
    name, _ = _shape_name(shape)
    start, end = connector_endpoints(line_box(shape, group))
    dx, dy = end[0] - start[0], end[1] - start[1]
    style = style_attr(
        {
            "position": "absolute",
            "left": f"{format_number(start[0], 2)}px",
            "top": f"{format_number(start[1], 2)}px",
            "width": f"{format_number(math.hypot(dx, dy), 2)}px",
            "height": f"{format_number(stroke.width, 2)}px",
            "background": dash_background(stroke.color, stroke.dash, stroke.width),
            "transform": f"rotate({format_number(math.degrees(math.atan2(dy, dx)), 4)}deg)",
            "transform-origin": "left center",
            "opacity": format_number(stroke.opacity, 3),
            "border-radius": f"{math.ceil(stroke.width / 2)}px",
            "z-index": z_index,
        }
    )
    markers = ""
    if stroke.head is not None:
        markers += _marker(start, end, stroke.head, stroke, z_index)
    if stroke.tail is not None:
        markers += _marker(end, start, stroke.tail, stroke, z_index)
    return (
        f'<div class="shape line-lineheight" id="line-lineheight" data-shape-type="line" '
        f'data-name="{escape_html(name)}" style="{style}"></div>{markers}'
    )


def render_connector(
    shape: XmlNode,
    ctx: ColorContext,
    z_index: int = 0,
    group: GroupTransform | None = None,
    curve_segments: int = DEFAULT_CURVE_SEGMENTS,
) -> str:
    """Render a ``p:cxnSp`` as positioned segment ``div``\\ s.

    Parameters
    ----------
    shape : XmlNode
        The connector element.
    ctx : ColorContext
        Theme context for the line color.
    z_index : int
        Stacking order of the connector on its slide.
    group : GroupTransform, optional
        Mapping into slide space when the connector sits in a group.
    curve_segments : int
        Polyline resolution of curved connectors, at most 150.

    Returns
    -------
    str
        A wrapper ``div`` holding the segments and markers, or ``""`` when the
        line is not drawn.

    """
    stroke = line_stroke(shape, ctx)
    if stroke is None:
        logger.debug("Connector has no visible line, skipping")
        return ""
    prst = attr(shape, "p:spPr/a:prstGeom", "prst", "straightConnector1")
    kind = classify_connector(prst)
    start, end = connector_endpoints(line_box(shape, group))
    adjustments = _connector_adjustments(shape)

    if kind == "bent":
        segments = int(prst[-1]) if prst[-1].isdigit() else 3
        points = bent_points(start, end, segments, adjustments)
    elif kind == "curved":
        points = curve_points(start, end, prst == "curvedConnector2", curve_segments, adjustments)
    else:
        points = [start, end]

    body = [_segment(a, b, stroke, z_index) for a, b in zip(points, points[1:]) if a != b]
    if stroke.head is not None:
        body.append(_marker(points[0], points[1], stroke.head, stroke, z_index))
    if stroke.tail is not None:
        body.append(_marker(points[-1], points[-2], stroke.tail, stroke, z_index))

    name, shape_id = _shape_name(shape)
    info = {
        "type": prst,
        "kind": kind,
        "start": _point_dict(start),
        "end": _point_dict(end),
        "color": stroke.color,
        "width": stroke.width,
        "dash": stroke.dash,
        "head": stroke.head.kind if stroke.head else "none",
        "tail": stroke.tail.kind if stroke.tail else "none",
    }
    style = style_attr(
        {
            "position": "absolute",
            "left": "0px",
            "top": "0px",
            "width": "0px",
            "height": "0px",
            "overflow": "visible",
            "z-index": z_index,
        }
    )
    return (
        f'<div class="shape connector" id="{escape_html(prst)}" data-name="{escape_html(name)}" '
        f'data-shape-id="{escape_html(shape_id)}" data-connector-info="{json_attr(info)}" style="{style}">'
        f'{"".join(body)}</div>'
    )
