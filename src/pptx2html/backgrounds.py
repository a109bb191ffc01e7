#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/backgrounds.py
"""Slide background resolution.

A slide's background comes from its own ``p:bg``, else its layout's, else its
master's. Within a ``p:bgPr`` the fills are tried in this order: pattern,
picture, solid, gradient. A ``p:bgRef`` points into the theme's background
fill styles.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Mapping

from pptx2html.colors import ColorContext, find_color_node, resolve_color, rgba
from pptx2html.constants import EMU_PER_PX, PATTERN_FILLS, TRANSPARENT
from pptx2html.fills import parse_gradient
from pptx2html.units import parse_float, percent_from_thousandths
from pptx2html.xmltree import XmlNode, attr, element

logger = logging.getLogger(__name__)

ImageResolver = Callable[[str], "str | None"]
"""Maps a relationship id to an image URL (usually a data URI)."""


@dataclass(frozen=True)
class BackgroundStyle:
    """Resolved slide background.

    ``transparency`` is a percentage (0 is opaque). ``insets`` holds the
    picture-fill ``fillRect`` insets in px as ``(top, right, bottom, left)``.
    """

    css: str = "#FFFFFF"
    transparency: float = 0.0
    insets: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    source: str = "default"
    image_url: str | None = None

    def style(self) -> str:
        """Inline style declarations for the slide container."""
        if self.image_url:
            top, right, bottom, left = self.insets
            declarations = [
                f"background-image: url('{self.image_url}')",
                "background-size: 100% 100%",
                "background-repeat: no-repeat",
            ]
            if any(self.insets):
                declarations.append(f"background-origin: content-box; padding: {top}px {right}px {bottom}px {left}px")
            return "; ".join(declarations) + ";"
        if self.transparency and self.css.startswith("#"):
            return f"background: {rgba(self.css, max(0.0, 1 - self.transparency / 100))};"
        return f"background: {self.css};"


def _transparency(color_parent: XmlNode | None) -> float:
    node = find_color_node(color_parent)
    alpha = node.first("a:alpha") if node is not None else None
    if alpha is None:
        return 0.0
    return 100 - percent_from_thousandths(alpha.get("val"), 100000)


def pattern_css(patt_fill: XmlNode, ctx: ColorContext) -> str:
    """Approximate an ``a:pattFill`` with layered CSS gradients."""
    fg = resolve_color(patt_fill.first("a:fgClr"), ctx).hex if patt_fill.first("a:fgClr") is not None else "#000000"
    bg = resolve_color(patt_fill.first("a:bgClr"), ctx).hex if patt_fill.first("a:bgClr") is not None else "#FFFFFF"
    kind, param = PATTERN_FILLS.get(patt_fill.get("prst", "pct5"), PATTERN_FILLS["pct5"])

    if kind == "dots":
        radius = max(1, round(math.sqrt(param / 100) * 56))
        return f"radial-gradient(circle, {fg} {radius}%, transparent {radius + 1}%) 0 0 / 8px 8px, {bg}"
    if kind in ("stripes", "thin-stripes"):
        line, period = (1, 4) if kind == "thin-stripes" else (2, 8)
        angle = (param + 90) % 360
        return f"repeating-linear-gradient({angle:g}deg, {fg} 0 {line}px, {bg} {line}px {period}px)"
    if kind == "grid":
        size = int(param)
        return (
            f"linear-gradient({fg} 1px, transparent 1px) 0 0 / {size}px {size}px, "
            f"linear-gradient(90deg, {fg} 1px, transparent 1px) 0 0 / {size}px {size}px, {bg}"
        )
    size = int(param)
    return (
        f"repeating-linear-gradient(45deg, {fg} 0 1px, transparent 1px {size}px), "
        f"repeating-linear-gradient(-45deg, {fg} 0 1px, transparent 1px {size}px), {bg}"
    )


def fill_background(
    fill_parent: XmlNode,
    ctx: ColorContext,
    resolve_image: ImageResolver | None = None,
    placeholder_color: str | None = None,
) -> BackgroundStyle | None:
    """Resolve the first usable fill under ``fill_parent`` (a ``p:bgPr`` or a style entry)."""
    patt = fill_parent.first("a:pattFill")
    if patt is not None:
        return BackgroundStyle(css=pattern_css(patt, ctx))

    blip_fill = fill_parent.first("a:blipFill")
    if blip_fill is not None:
        rel_id = attr(blip_fill, "a:blip", "r:embed")
        url = resolve_image(rel_id) if rel_id and resolve_image is not None else None
        if url:
            fill_rect = blip_fill.find("a:stretch/a:fillRect")
            insets = tuple(parse_float(attr(fill_rect, "", edge)) / EMU_PER_PX for edge in ("t", "r", "b", "l"))
            amount = attr(blip_fill, "a:blip/a:alphaModFix", "amt")
            transparency = 100 - percent_from_thousandths(amount) if amount is not None else 0.0
            return BackgroundStyle(css=TRANSPARENT, transparency=transparency, insets=insets, image_url=url)
        logger.debug("Background picture %s could not be resolved", rel_id)

    solid = fill_parent.first("a:solidFill")
    if solid is not None and find_color_node(solid) is not None:
        color = resolve_color(solid, ctx, placeholder_color)
        return BackgroundStyle(css=color.hex, transparency=_transparency(solid))

    grad = fill_parent.first("a:gradFill")
    if grad is not None and grad.first("a:gsLst") is not None:
        gradient = parse_gradient(grad, ctx, placeholder_color)
        transparency = max((100 - stop.alpha * 100 for stop in gradient.stops), default=0.0)
        return BackgroundStyle(css=gradient.css(), transparency=max(0.0, transparency))

    if fill_parent.first("a:noFill") is not None:
        return BackgroundStyle(css=TRANSPARENT)
    return None


def _background_reference(bg_ref: XmlNode, ctx: ColorContext) -> BackgroundStyle | None:
    idx = int(parse_float(bg_ref.get("idx")))
    placeholder = resolve_color(bg_ref, ctx).hex if find_color_node(bg_ref) is not None else None
    if ctx.theme is None or idx == 0:
        return BackgroundStyle(css=placeholder) if placeholder else None
    if idx >= 1001:
        styles = ctx.theme.find("a:themeElements/a:fmtScheme/a:bgFillStyleLst")
        position = idx - 1001
    else:
        styles = ctx.theme.find("a:themeElements/a:fmtScheme/a:fillStyleLst")
        position = idx - 1
    entries = styles.children if styles is not None else []
    if 0 <= position < len(entries):
        holder = element("p:bgPr", None, entries[position])
        resolved = fill_background(holder, ctx, placeholder_color=placeholder)
        if resolved is not None:
            return resolved
    return BackgroundStyle(css=placeholder) if placeholder else None


def part_background(
    part: XmlNode | None, ctx: ColorContext, resolve_image: ImageResolver | None = None
) -> BackgroundStyle | None:
    """Background declared directly on one slide, layout or master part."""
    if part is None:
        return None
    bg = part.find("p:cSld/p:bg")
    if bg is None:
        return None
    bg_pr = bg.first("p:bgPr")
    if bg_pr is not None:
        return fill_background(bg_pr, ctx, resolve_image)
    bg_ref = bg.first("p:bgRef")
    if bg_ref is not None:
        return _background_reference(bg_ref, ctx)
    return None


def slide_background(
    slide: XmlNode,
    layout: XmlNode | None,
    master: XmlNode | None,
    ctx: ColorContext,
    resolvers: Mapping[str, ImageResolver] | None = None,
) -> BackgroundStyle:
    """Resolve a slide's background with layout and master fallback.

    Parameters
    ----------
    slide, layout, master : XmlNode
        The slide and the parts it inherits from.
    ctx : ColorContext
        Theme and color-map context.
    resolvers : Mapping[str, ImageResolver], optional
        Image resolvers keyed ``"slide"``, ``"layout"`` and ``"master"``, since
        each part has its own relationships.

    Returns
    -------
    BackgroundStyle
        White when no part declares a background.

    """
    resolvers = resolvers or {}
    for source, part in (("slide", slide), ("layout", layout), ("master", master)):
        background = part_background(part, ctx, resolvers.get(source))
        if background is not None:
            logger.debug("Slide background taken from %s", source)
            return BackgroundStyle(
                css=background.css,
                transparency=background.transparency,
                insets=background.insets,
                source=source,
                image_url=background.image_url,
            )
    return BackgroundStyle()
