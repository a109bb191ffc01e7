#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/borders.py
"""Shape outline resolution.

The effective outline of a shape is its own ``a:ln`` merged over the theme
line style selected by ``p:style/a:lnRef``. :func:`shape_border` turns it into
a CSS ``border`` shorthand for div-based shapes; :func:`stroke_properties`
gives the SVG stroke used by path-based shapes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pptx2html.colors import ColorContext, find_color_node, resolve_color
from pptx2html.constants import (
    EMU_PER_PX,
    FALLBACK_COLOR,
    LINE_CAPS,
    LN_REF_WIDTHS,
    MIN_BORDER_WIDTH_EMU,
    MIN_BORDER_WIDTH_PX,
    STROKE_DASH_ARRAYS,
    TRANSPARENT,
)
from pptx2html.units import parse_float
from pptx2html.xmltree import XmlNode, element

logger = logging.getLogger(__name__)

_CSS_DASH_STYLES = {"dot": "dotted", "sysDot": "dotted", "solid": "solid"}


@dataclass(frozen=True)
class BorderStyle:
    """CSS outline of a div-based shape."""

    border: str = "none"
    width: float = 0.0
    style: str = "none"
    color: str = FALLBACK_COLOR


@dataclass(frozen=True)
class StrokeStyle:
    """SVG stroke of a path-based shape."""

    color: str = TRANSPARENT
    width: float = 0.0
    dash_array: str = ""
    line_cap: str = "butt"
    opacity: float = 1.0

    def svg_attrs(self) -> str:
        attrs = f'stroke="{self.color}" stroke-width="{self.width:g}"'
        if self.dash_array:
            attrs += f' stroke-dasharray="{self.dash_array}"'
        if self.line_cap != "butt":
            attrs += f' stroke-linecap="{self.line_cap}"'
        if self.opacity < 1:
            attrs += f' stroke-opacity="{round(self.opacity, 3):g}"'
        return attrs


def theme_line_style(ctx: ColorContext, idx: int) -> XmlNode | None:
    """Return entry ``idx`` (1-based) of the theme's ``a:lnStyleLst``."""
    if ctx.theme is None or idx < 1:
        return None
    styles = ctx.theme.find_all("a:themeElements/a:fmtScheme/a:lnStyleLst/a:ln")
    return styles[idx - 1] if idx <= len(styles) else None


def effective_line(shape: XmlNode, ctx: ColorContext) -> tuple[XmlNode | None, XmlNode | None]:
    """Merge the shape's ``a:ln`` over its referenced theme line style.

    Returns
    -------
    tuple
        ``(line, ln_ref)`` where ``line`` is the merged line node (or None)
        and ``ln_ref`` the ``a:lnRef`` node used for ``phClr`` colors.

    """
    own = shape.find("p:spPr/a:ln")
    ln_ref = shape.find("p:style/a:lnRef")
    if ln_ref is None:
        return own, None

    themed = theme_line_style(ctx, int(parse_float(ln_ref.get("idx"))))
    if themed is None:
        return own, ln_ref

    if own is None:
        return themed, ln_ref
    overridden = {child.tag for child in own.children}
    kept = [child for child in themed.children if child.tag not in overridden]
    merged = element("a:ln", {**themed.attrs, **own.attrs}, *kept, *own.children)
    return merged, ln_ref


def _line_color(line: XmlNode, ln_ref: XmlNode | None, ctx: ColorContext) -> tuple[str, float]:
    placeholder = resolve_color(ln_ref, ctx).hex if find_color_node(ln_ref) is not None else None
    solid = line.first("a:solidFill")
    if solid is not None:
        color = resolve_color(solid, ctx, placeholder)
        return color.hex, color.alpha
    grad = line.find("a:gradFill/a:gsLst/a:gs")
    if grad is not None:
        color = resolve_color(grad, ctx, placeholder)
        return color.hex, color.alpha
    pattern = line.find("a:pattFill/a:fgClr")
    if pattern is not None:
        return resolve_color(pattern, ctx, placeholder).hex, 1.0
    if placeholder is not None:
        return placeholder, 1.0
    return FALLBACK_COLOR, 1.0


def shape_border(shape: XmlNode, ctx: ColorContext) -> BorderStyle:
    """Resolve the CSS border of a shape.

    The border is ``none`` when the line is ``noFill``, at most 3000 EMU wide,
    narrower than 0.2px, or carries neither a fill nor a width/dash.
    """
    line, ln_ref = effective_line(shape, ctx)
    if line is None or line.first("a:noFill") is not None:
        return BorderStyle()

    raw_width = line.get("w")
    if raw_width is not None and parse_float(raw_width) <= MIN_BORDER_WIDTH_EMU:
        return BorderStyle()

    has_fill = any(line.first(name) is not None for name in ("a:solidFill", "a:gradFill", "a:pattFill"))
    has_shape = (
        parse_float(raw_width) > 0
        or line.first("a:prstDash") is not None
        or line.first("a:custDash") is not None
        or line.get("cmpd") is not None
    )
    if not has_fill and not has_shape:
        return BorderStyle()

    width = parse_float(raw_width) / EMU_PER_PX if raw_width is not None else 1.0
    if width < MIN_BORDER_WIDTH_PX:
        return BorderStyle()

    style = "solid"
    dash = line.find("a:prstDash")
    if dash is not None:
        style = _CSS_DASH_STYLES.get(dash.get("val", "solid"), "dashed")
    if line.first("a:custDash") is not None:
        style = "dashed"

    compound = line.get("cmpd")
    if compound in ("dbl", "tri"):
        style = "double"
    elif compound in ("thickThin", "thinThick"):
        width *= 1.5

    color, _ = _line_color(line, ln_ref, ctx)
    return BorderStyle(border=f"{width:.2f}px {style} {color}", width=width, style=style, color=color)


def stroke_properties(shape: XmlNode, ctx: ColorContext) -> StrokeStyle:
    """Resolve the SVG stroke of a shape.

    Width comes from ``a:ln/@w``; without it, from the ``lnRef`` index table.
    """
    line, ln_ref = effective_line(shape, ctx)
    if line is None:
        if ln_ref is None:
            return StrokeStyle()
        color = resolve_color(ln_ref, ctx)
        return StrokeStyle(color=color.hex, width=LN_REF_WIDTHS.get(ln_ref.get("idx", "0"), 1.0))
    if line.first("a:noFill") is not None:
        return StrokeStyle()

    if line.get("w") is not None:
        width = parse_float(line.get("w")) / EMU_PER_PX
    elif ln_ref is not None:
        width = LN_REF_WIDTHS.get(ln_ref.get("idx", "0"), 1.0)
    else:
        width = 1.0

    color, opacity = _line_color(line, ln_ref, ctx)
    dash = line.find("a:prstDash")
    dash_array = STROKE_DASH_ARRAYS.get(dash.get("val", "solid"), "") if dash is not None else ""
    return StrokeStyle(
        color=color,
        width=round(width, 2),
        dash_array=dash_array,
        line_cap=LINE_CAPS.get(line.get("cap", "flat"), "butt"),
        opacity=opacity,
    )
