#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/shapes/hexagon.py
"""Hexagon preset with pseudo-3D extrusion.

A flat hexagon renders as one SVG polygon. When the shape carries an
``a:sp3d`` extrusion, a back copy of the outline is offset along a fixed 30
degree isometric direction, the three visible side faces are drawn between the
two outlines, and the front face is shaded with a diagonal gradient.

Rotation is read from the transform but is not applied here; the container div
already rotates the whole shape. TODO: drop ``ignore_rotation`` once the SVG
rotation path is verified against rotated extruded hexagons.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from pptx2html.colors import ColorContext, brighten, find_color_node, resolve_color
from pptx2html.constants import (
    DEFAULT_HEXAGON_ADJ,
    DEFAULT_HEXAGON_VF,
    HEXAGON_BACK_FACTOR,
    HEXAGON_FRONT_GRADIENT_FACTORS,
    HEXAGON_ISO_ANGLE_DEGREES,
    HEXAGON_SIDE_LIGHT_FACTORS,
    HEXAGON_VIEWBOX_PADDING,
    HEXAGON_VISIBLE_FACES,
    PERCENT_SCALE,
)
from pptx2html.units import angle_to_degrees, emu_to_px, format_number, parse_float
from pptx2html.xmltree import XmlNode, attr

logger = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass(frozen=True)
class Hexagon3D:
    """Extrusion and lighting properties read from a hexagon shape."""

    depth: float = 0.0
    contour_width: float = 0.0
    extrusion_color: str | None = None
    contour_color: str | None = None
    light_direction: str = "t"
    adj: float = DEFAULT_HEXAGON_ADJ
    vf: float = DEFAULT_HEXAGON_VF
    rotation: float = 0.0
    ignore_rotation: bool = True

    @property
    def effective_rotation(self) -> float:
        return 0.0 if self.ignore_rotation else self.rotation


def extract_hexagon_3d(shape: XmlNode, ctx: ColorContext, ignore_rotation: bool = True) -> Hexagon3D:
    """Read ``sp3d``, ``scene3d``, guide values and rotation from a hexagon ``p:sp``."""
    sp_pr = shape.first("p:spPr")
    if sp_pr is None:
        return Hexagon3D(ignore_rotation=ignore_rotation)

    values: dict = {"ignore_rotation": ignore_rotation}
    rot = attr(sp_pr, "a:xfrm", "rot")
    if rot is not None:
        values["rotation"] = angle_to_degrees(rot) % 360
        logger.debug("Hexagon rotation %.2f deg (%s)", values["rotation"], "ignored" if ignore_rotation else "applied")

    for gd in sp_pr.find_all("a:prstGeom/a:avLst/a:gd"):
        formula = gd.get("fmla") or ""
        if not formula.startswith("val "):
            continue
        if gd.get("name") == "adj":
            values["adj"] = parse_float(formula[4:], DEFAULT_HEXAGON_ADJ)
        elif gd.get("name") == "vf":
            values["vf"] = parse_float(formula[4:], DEFAULT_HEXAGON_VF)

    sp3d = sp_pr.first("a:sp3d")
    if sp3d is not None:
        values["depth"] = emu_to_px(sp3d.get("extrusionH"))
        values["contour_width"] = emu_to_px(sp3d.get("contourW"))
        extrusion = sp3d.first("a:extrusionClr")
        if find_color_node(extrusion) is not None:
            values["extrusion_color"] = resolve_color(extrusion, ctx).hex
        contour = sp3d.first("a:contourClr")
        if find_color_node(contour) is not None:
            values["contour_color"] = resolve_color(contour, ctx).hex

    direction = attr(sp_pr, "a:scene3d/a:lightRig", "dir")
    if direction:
        values["light_direction"] = direction
    return Hexagon3D(**values)


def hexagon_points(width: float, height: float, adj: float = DEFAULT_HEXAGON_ADJ) -> list[Point]:
    """Front outline clockwise from the top-left vertex."""
    a = adj / PERCENT_SCALE
    return [
        (a * width, 0.0),
        ((1 - a) * width, 0.0),
        (width, height / 2),
        ((1 - a) * width, height),
        (a * width, height),
        (0.0, height / 2),
    ]


def _points_attr(points: list[Point]) -> str:
    return " ".join(f"{format_number(x, 2)},{format_number(y, 2)}" for x, y in points)


def _rotated(body: str, degrees: float, cx: float, cy: float) -> str:
    return (
        f'<g transform="rotate({format_number(degrees, 2)} {format_number(cx, 2)} {format_number(cy, 2)})">'
        f"{body}</g>"
    )


def face_colors(fill: str, props: Hexagon3D) -> tuple[str, str]:
    """Side and back face colors under the configured light direction.

    An unfilled hexagon (``fill`` not a hex color) keeps see-through faces;
    only an explicit extrusion color paints its sides.
    """
    if not fill.startswith("#"):
        return props.extrusion_color or "none", "none"
    side_factor = HEXAGON_SIDE_LIGHT_FACTORS.get(props.light_direction, HEXAGON_SIDE_LIGHT_FACTORS["t"])
    side = props.extrusion_color or brighten(fill, side_factor)
    return side, brighten(fill, HEXAGON_BACK_FACTOR)


def extrusion_offset(depth: float) -> Point:
    angle = math.radians(HEXAGON_ISO_ANGLE_DEGREES)
    return depth * math.cos(angle) * 0.4, -depth * math.sin(angle) * 0.6


def hexagon_svg(
    width: float,
    height: float,
    fill: str,
    stroke: str = "#000000",
    stroke_width: float = 1.0,
    opacity: float = 1.0,
    props: Hexagon3D | None = None,
    gradient_id: str = "frontGradient",
) -> str:
    """Render a hexagon as inline SVG.

    Parameters
    ----------
    width, height : float
        Shape size in px.
    fill, stroke : str
        Hex colors of the front face and outlines.
    props : Hexagon3D, optional
        Extrusion settings; a flat hexagon is drawn without them.
    gradient_id : str
        Id of the front-face gradient, unique per slide.

    Returns
    -------
    str
        ``<svg>`` markup sized to fill its container.

    """
    props = props or Hexagon3D()
    front = hexagon_points(width, height, props.adj)
    rotation = props.effective_rotation
    stroke_attrs = f'stroke="{stroke}" stroke-width="{format_number(stroke_width, 2)}"'

    if props.depth <= 0:
        body = (
            f'<polygon points="{_points_attr(front)}" fill="{fill}" {stroke_attrs} '
            f'opacity="{format_number(opacity, 3)}"/>'
        )
        if rotation:
            body = _rotated(body, rotation, width / 2, height / 2)
        return (
            f'<svg width="100%" height="100%" viewBox="0 0 {format_number(width, 2)} {format_number(height, 2)}" '
            f'xmlns="http://www.w3.org/2000/svg" style="overflow: visible;">{body}</svg>'
        )

    dx, dy = extrusion_offset(props.depth)
    back = [(x + dx, y + dy) for x, y in front]
    xs = [x for x, _ in front + back]
    ys = [y for _, y in front + back]
    pad = HEXAGON_VIEWBOX_PADDING
    view_x, view_y = min(xs) - pad, min(ys) - pad
    view_w, view_h = max(xs) - min(xs) + pad * 2, max(ys) - min(ys) + pad * 2
    front = [(x - view_x, y - view_y) for x, y in front]
    back = [(x - view_x, y - view_y) for x, y in back]

    side_color, back_color = face_colors(fill, props)
    faces = [f'<polygon points="{_points_attr(back)}" fill="{back_color}" {stroke_attrs} opacity="0.95"/>']
    for i in HEXAGON_VISIBLE_FACES:
        j = (i + 1) % 6
        quad = [front[i], front[j], back[j], back[i]]
        faces.append(f'<polygon points="{_points_attr(quad)}" fill="{side_color}" {stroke_attrs} opacity="0.95"/>')

    defs = ""
    front_paint = fill
    if fill.startswith("#"):
        light, mid, dark = HEXAGON_FRONT_GRADIENT_FACTORS
        defs = (
            f'<defs><linearGradient id="{gradient_id}" x1="30%" y1="30%" x2="70%" y2="70%">'
            f'<stop offset="0%" style="stop-color:{brighten(fill, light)};stop-opacity:1"/>'
            f'<stop offset="60%" style="stop-color:{brighten(fill, mid)};stop-opacity:1"/>'
            f'<stop offset="100%" style="stop-color:{brighten(fill, dark)};stop-opacity:1"/>'
            "</linearGradient></defs>"
        )
        front_paint = f"url(#{gradient_id})"
    contour = ""
    if props.contour_color and props.contour_width > 0:
        contour = (
            f'<polygon points="{_points_attr(front)}" fill="none" stroke="{props.contour_color}" '
            f'stroke-width="{format_number(props.contour_width, 2)}" opacity="0.8"/>'
        )
    front_face = (
        f'<polygon points="{_points_attr(front)}" fill="{front_paint}" {stroke_attrs} '
        f'opacity="{format_number(opacity, 3)}"/>'
    )
    body = "".join(faces) + contour + front_face
    if rotation:
        body = _rotated(body, rotation, width / 2 - view_x, height / 2 - view_y)
    return (
        f'<svg width="100%" height="100%" viewBox="0 0 '
        f'{format_number(view_w, 2)} {format_number(view_h, 2)}" xmlns="http://www.w3.org/2000/svg" '
        f'style="overflow: visible;">{defs}{body}</svg>'
    )
