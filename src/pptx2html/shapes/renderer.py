#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/shapes/renderer.py
"""Render ``p:sp`` elements as absolutely positioned ``div`` containers.

Dispatch order:

1. ``prst="line"`` goes to the connector module's line renderer.
2. ``a:custGeom`` becomes an inline SVG path.
3. ``hexagon`` uses the extrusion-aware hexagon renderer.
4. Everything else is looked up in the preset table and drawn either with a
   CSS ``clip-path`` or an inline SVG body.
"""

from __future__ import annotations

import logging

from pptx2html.borders import shape_border, stroke_properties
from pptx2html.colors import ColorContext
from pptx2html.connectors import render_line_shape
from pptx2html.constants import DEFAULT_SHAPE_STROKE, TRANSPARENT
from pptx2html.fills import FillStyle, shape_fill
from pptx2html.options import RenderOptions
from pptx2html.shapes.freeform import custom_geometry_svg
from pptx2html.shapes.hexagon import extract_hexagon_3d, hexagon_svg
from pptx2html.shapes.presets import corner_radius, lookup_preset, read_adjustments
from pptx2html.shapes.svg_shapes import ShapePaint
from pptx2html.shapes.text import render_text_body, text_layout
from pptx2html.units import (
    GroupTransform,
    format_number,
    is_text_box,
    non_visual_props,
    shape_position,
    transform_css,
)
from pptx2html.utils.html_utils import escape_html, style_attr
from pptx2html.xmltree import XmlNode, attr

logger = logging.getLogger(__name__)


def _solid_paint(fill: FillStyle) -> str:
    """A single color usable as an SVG fill for ``fill``."""
    if fill.gradient is not None and fill.gradient.stops:
        return fill.gradient.stops[0].color
    if fill.fill_color.startswith("#"):
        return fill.fill_color
    return "none" if fill.fill_color == TRANSPARENT else fill.fill_color


def _scoped_id(base: str, scope: str, key: str) -> str:
    return f"{base}-{scope}-{key}" if scope else f"{base}-{key}"


def shape_identity(shape: XmlNode) -> tuple[str, str]:
    """Return ``(name, id)`` from the shape's ``p:cNvPr``."""
    nv = non_visual_props(shape)
    c_nv_pr = nv.first("p:cNvPr") if nv is not None else None
    if c_nv_pr is None:
        return "", ""
    return c_nv_pr.get("name", ""), c_nv_pr.get("id", "")


def render_shape(
    shape: XmlNode,
    ctx: ColorContext,
    options: RenderOptions | None = None,
    z_index: int = 0,
    group: GroupTransform | None = None,
    id_scope: str = "",
) -> str:
    """Render one ``p:sp``.

    Parameters
    ----------
    shape : XmlNode
        The shape element.
    ctx : ColorContext
        Theme, color map and the master and layout parts used for placeholder
        position fallback.
    options : RenderOptions, optional
        Rendering options; defaults are used when omitted.
    z_index : int
        Stacking order on the slide.
    group : GroupTransform, optional
        Mapping into slide space for shapes inside a ``p:grpSp``.
    id_scope : str
        Prefix for ids the shape defines (SVG gradients), such as
        ``"s2-layout"``. Shape ids are only unique within one part, so shapes
        from several slides or parts in one document need distinct scopes.

    Returns
    -------
    str
        The shape's HTML fragment.

    """
    options = options or RenderOptions()
    prst = attr(shape, "p:spPr/a:prstGeom", "prst")
    if prst == "line":
        return render_line_shape(shape, ctx, z_index, group)

    position = shape_position(shape, ctx.master, ctx.layout)
    if group is not None:
        position = group.apply(position)

    fill = shape_fill(shape, ctx)
    border = shape_border(shape, ctx)
    name, shape_id = shape_identity(shape)
    cust_geom = shape.find("p:spPr/a:custGeom")

    inner_svg = ""
    clip_path = None
    border_radius = "0px"
    case_name = prst or "rect"
    background = fill.fill_color

    if cust_geom is not None:
        case_name = "custGeom"
        stroke = stroke_properties(shape, ctx)
        inner_svg = custom_geometry_svg(
            cust_geom,
            position,
            _solid_paint(fill),
            stroke,
            gradient=fill.gradient,
            gradient_id=_scoped_id("custGeomGradient", id_scope, shape_id or str(z_index)),
        )
    elif prst == "hexagon":
        props = extract_hexagon_3d(shape, ctx, ignore_rotation=options.ignore_hexagon_rotation)
        stroke = stroke_properties(shape, ctx)
        inner_svg = hexagon_svg(
            position.width,
            position.height,
            _solid_paint(fill),
            stroke=stroke.color if stroke.color != TRANSPARENT else DEFAULT_SHAPE_STROKE,
            stroke_width=stroke.width or 1.0,
            opacity=fill.opacity,
            props=props,
            gradient_id=_scoped_id("frontGradient", id_scope, shape_id or str(z_index)),
        )
    else:
        preset = lookup_preset(prst)
        adjustments = read_adjustments(shape)
        if preset.kind == "svg":
            stroke = stroke_properties(shape, ctx)
            paint = ShapePaint(
                fill=_solid_paint(fill),
                stroke=stroke.color if stroke.color != TRANSPARENT else DEFAULT_SHAPE_STROKE,
                stroke_width=stroke.width or 2.0,
            )
            inner_svg = preset.svg(position, paint) or ""
        else:
            clip_path = preset.clip(adjustments, position)
        if preset.name == "roundRect":
            border_radius = f"{corner_radius(adjustments, position)}px"
        elif preset.border_radius:
            border_radius = preset.border_radius

    if inner_svg:
        background = TRANSPARENT
        border_css = "none"
    else:
        border_css = border.border

    text = render_text_body(shape, ctx)
    layout = text_layout(shape)
    style = style_attr(
        [
            ("position", "absolute"),
            ("left", f"{format_number(position.x)}px"),
            ("top", f"{format_number(position.y)}px"),
            ("width", f"{format_number(position.width)}px"),
            ("height", f"{format_number(position.height)}px"),
            ("background", background),
            ("opacity", format_number(fill.opacity, 3) if not inner_svg else None),
            ("border-radius", border_radius),
            ("border", border_css),
            ("display", "flex"),
            ("flex-direction", "column"),
            ("justify-content", layout.align_items),
            ("transform", transform_css(position, is_text_box(shape))),
            ("box-sizing", "border-box"),
            ("overflow", "visible" if inner_svg else "hidden"),
            ("z-index", z_index),
            ("clip-path", clip_path),
        ]
    )
    content = inner_svg
    if text:
        if inner_svg:
            content += (
                '<div class="shape-text-overlay" style="position: absolute; inset: 0; display: flex; '
                f'flex-direction: column; justify-content: {layout.align_items};">{text}</div>'
            )
        else:
            content += text

    return (
        f'<div class="shape" id="{escape_html(case_name)}" data-name="{escape_html(name)}" '
        f'data-shape-id="{escape_html(shape_id)}" '
        f'data-original-color="{escape_html(fill.original_theme_color)}" '
        f'originalLumMod="{escape_html(fill.original_lum_mod)}" '
        f'originalLumOff="{escape_html(fill.original_lum_off)}" '
        f'originalAlpha="{escape_html(fill.original_alpha)}" '
        f'style="{style}">{content}</div>'
    )
