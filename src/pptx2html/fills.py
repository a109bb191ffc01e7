#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/fills.py
"""Shape fill and stroke paint resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pptx2html.colors import (
    ColorContext,
    ColorModifiers,
    apply_color_modifiers,
    find_color_node,
    normalize_hex,
    resolve_color,
    resolve_scheme_color,
    rgba,
)
from pptx2html.constants import FALLBACK_COLOR, TRANSPARENT
from pptx2html.units import angle_to_degrees, format_number, parse_float, percent_from_thousandths
from pptx2html.xmltree import XmlNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradientStop:
    position: float
    color: str
    alpha: float = 1.0

    def css(self) -> str:
        return f"{rgba(self.color, self.alpha)} {format_number(self.position)}%"


@dataclass(frozen=True)
class GradientFill:
    """A parsed ``a:gradFill``.

    ``kind`` is ``linear``, ``radial``, ``rectangular`` or ``path``. ``angle``
    is the CSS angle of linear gradients; ``center`` is the CSS position of
    the other kinds.
    """

    kind: str
    stops: tuple[GradientStop, ...]
    angle: float = 90.0
    center: str = "center"

    @property
    def opacity(self) -> float:
        if not self.stops:
            return 1.0
        return sum(stop.alpha for stop in self.stops) / len(self.stops)

    def css(self) -> str:
        stops = ", ".join(stop.css() for stop in self.stops)
        if self.kind == "linear":
            return f"linear-gradient({format_number(self.angle)}deg, {stops})"
        if self.kind == "rectangular":
            return f"radial-gradient(ellipse at {self.center}, {stops})"
        if self.kind == "path":
            return f"radial-gradient(circle closest-side at {self.center}, {stops})"
        return f"radial-gradient(circle at {self.center}, {stops})"


@dataclass(frozen=True)
class FillStyle:
    """Resolved paint of a shape.

    The ``original_*`` fields keep the theme linkage of solid fills so the
    resolved ``fill_color`` can be re-derived (see :func:`reproduce_fill_color`).
    """

    fill_color: str = TRANSPARENT
    opacity: float = 1.0
    stroke_color: str = TRANSPARENT
    stroke_opacity: float = 1.0
    original_theme_color: str = ""
    original_lum_mod: str = ""
    original_lum_off: str = ""
    original_alpha: str = ""
    original_modifiers: ColorModifiers = field(default_factory=ColorModifiers)
    gradient: GradientFill | None = None


def _radial_center(path: XmlNode) -> str:
    rect = path.first("a:fillToRect")
    if rect is None:
        return "center"

    def edge(name: str) -> int | None:
        value = rect.get(name)
        return int(parse_float(value)) if value is not None else None

    l, t, r, b = edge("l"), edge("t"), edge("r"), edge("b")
    full = 100000
    if l == t == r == b == 50000:
        return "center"
    if l == full and t == full:
        return "right bottom"
    if l == full and b == full:
        return "right top"
    if r == full and t == full:
        return "left bottom"
    if r == full and b == full:
        return "left top"
    if l == full:
        return "right center"
    if r == full:
        return "left center"
    if t == full:
        return "center bottom"
    if b == full:
        return "center top"
    return "center"


def parse_gradient(grad_fill: XmlNode, ctx: ColorContext, placeholder_color: str | None = None) -> GradientFill:
    """Parse an ``a:gradFill`` into stops, kind and direction.

    Linear angles map PowerPoint's ``ang`` to CSS with ``(ang + 90) % 360`` and
    then honour the ``flip`` attribute. Stops are sorted by position.
    """
    stops = []
    for gs in grad_fill.find_all("a:gsLst/a:gs"):
        color = resolve_color(gs, ctx, placeholder_color)
        stops.append(GradientStop(position=percent_from_thousandths(gs.get("pos")), color=color.hex, alpha=color.alpha))
    stops.sort(key=lambda stop: stop.position)

    path = grad_fill.first("a:path")
    if path is not None:
        kind = {"circle": "radial", "rect": "rectangular", "shape": "path"}.get(path.get("path", "circle"), "radial")
        return GradientFill(kind=kind, stops=tuple(stops), center=_radial_center(path))

    lin = grad_fill.first("a:lin")
    angle = (angle_to_degrees(lin.get("ang") if lin is not None else None) + 90) % 360
    flip = grad_fill.get("flip", "none")
    if flip == "x":
        angle = (180 - angle + 360) % 360
    elif flip == "y":
        angle = (360 - angle) % 360
    elif flip == "xy":
        angle = (angle + 180) % 360
    return GradientFill(kind="linear", stops=tuple(stops), angle=angle)


def _style_fill(shape: XmlNode, ctx: ColorContext) -> tuple[str, float] | None:
    fill_ref = shape.find("p:style/a:fillRef")
    if fill_ref is None or parse_float(fill_ref.get("idx")) <= 0:
        return None
    if find_color_node(fill_ref) is None:
        return None
    color = resolve_color(fill_ref, ctx)
    return color.hex, color.alpha


def shape_fill(shape: XmlNode, ctx: ColorContext) -> FillStyle:
    """Resolve the fill and stroke paint of a shape.

    Parameters
    ----------
    shape : XmlNode
        A ``p:sp`` (or any element with ``p:spPr``).
    ctx : ColorContext
        Theme and color-map context.

    Returns
    -------
    FillStyle
        Transparent fill and stroke when nothing is specified.

    """
    sp_pr = shape.first("p:spPr")
    values: dict = {}

    solid = sp_pr.first("a:solidFill") if sp_pr is not None else None
    grad = sp_pr.first("a:gradFill") if sp_pr is not None else None
    no_fill = sp_pr.first("a:noFill") if sp_pr is not None else None

    if solid is not None and find_color_node(solid) is not None:
        color = resolve_color(solid, ctx, rgb_lum_mod=True)
        node = find_color_node(solid)
        values.update(
            fill_color=color.hex,
            opacity=color.alpha,
            original_theme_color=node.get("val", "") if node.tag in ("a:srgbClr", "a:schemeClr") else "",
            original_lum_mod=_raw(node, "a:lumMod"),
            original_lum_off=_raw(node, "a:lumOff"),
            original_alpha=_raw(node, "a:alpha"),
            original_modifiers=color.modifiers,
        )
    elif grad is not None and grad.first("a:gsLst") is not None:
        gradient = parse_gradient(grad, ctx)
        values.update(fill_color=gradient.css(), opacity=gradient.opacity, gradient=gradient)
    elif no_fill is None:
        inherited = _style_fill(shape, ctx)
        if inherited is not None:
            values.update(fill_color=inherited[0], opacity=inherited[1])

    line = sp_pr.first("a:ln") if sp_pr is not None else None
    if line is not None:
        line_solid = line.first("a:solidFill")
        line_grad = line.first("a:gradFill")
        if line_solid is not None and find_color_node(line_solid) is not None:
            color = resolve_color(line_solid, ctx, rgb_lum_mod=True)
            values.update(stroke_color=color.hex, stroke_opacity=color.alpha)
        elif line_grad is not None and line_grad.first("a:gsLst") is not None:
            gradient = parse_gradient(line_grad, ctx)
            values.update(stroke_color=gradient.css(), stroke_opacity=gradient.opacity)

    return FillStyle(**values)


def _raw(node: XmlNode, name: str) -> str:
    child = node.first(name)
    return child.get("val", "") if child is not None else ""


def reproduce_fill_color(fill: FillStyle, ctx: ColorContext) -> str:
    """Re-derive a solid fill color from its ``original_*`` fields.

    Returns ``fill.fill_color`` unchanged for fills that carry no theme linkage
    (gradients, transparent fills).
    """
    original = fill.original_theme_color
    if not original:
        return fill.fill_color
    base = normalize_hex(original, default="")
    if not base:
        base = resolve_scheme_color(original, ctx, FALLBACK_COLOR) or FALLBACK_COLOR
    return apply_color_modifiers(base, fill.original_modifiers, rgb_lum_mod=True)
