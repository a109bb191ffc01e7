#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/images.py
"""Picture (``p:pic``) rendering: cropping, opacity, flips, border and shadow."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from pptx2html.borders import shape_border
from pptx2html.colors import ColorContext, find_color_node, resolve_color, rgba
from pptx2html.units import (
    GroupTransform,
    alpha_to_opacity,
    angle_to_degrees,
    emu_to_px,
    format_number,
    non_visual_props,
    parse_float,
    shape_position,
    transform_css,
)
from pptx2html.utils.html_utils import escape_html, style_attr
from pptx2html.xmltree import XmlNode, attr

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CroppingSpec:
    """Crop (or extend) percentages of a picture.

    Positive values crop the source image; negative values extend it (the
    image is zoomed out inside its frame). ``raw_*`` keep the 1000ths of a
    percent from the XML.
    """

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    raw_left: int = 0
    raw_top: int = 0
    raw_right: int = 0
    raw_bottom: int = 0
    is_fill_rect: bool = False

    @property
    def has_left(self) -> bool:
        return self.raw_left != 0

    @property
    def has_top(self) -> bool:
        return self.raw_top != 0

    @property
    def has_right(self) -> bool:
        return self.raw_right != 0

    @property
    def has_bottom(self) -> bool:
        return self.raw_bottom != 0


@dataclass(frozen=True)
class CroppingStyles:
    container: str
    image: str


@dataclass(frozen=True)
class PictureStyle:
    opacity: float = 1.0
    transform: str = "none"
    border: str = "none"
    box_shadow: str | None = None
    border_radius: str | None = None


def _blip_fill(pic: XmlNode) -> XmlNode | None:
    return pic.first("p:blipFill") or pic.find("p:spPr/a:blipFill")


def extract_cropping(pic: XmlNode) -> CroppingSpec | None:
    """Read ``a:srcRect`` (or, failing that, ``a:stretch/a:fillRect``).

    Returns None when neither is present or all edges are zero.
    """
    blip_fill = _blip_fill(pic)
    if blip_fill is None:
        return None
    rect = blip_fill.first("a:srcRect")
    is_fill_rect = False
    if rect is None or not rect.attrs:
        rect = blip_fill.find("a:stretch/a:fillRect")
        is_fill_rect = True
    if rect is None:
        return None

    raw = {edge: int(parse_float(rect.get(edge))) for edge in ("l", "t", "r", "b")}
    if not any(raw.values()):
        return None
    return CroppingSpec(
        left=raw["l"] / 1000,
        top=raw["t"] / 1000,
        right=raw["r"] / 1000,
        bottom=raw["b"] / 1000,
        raw_left=raw["l"],
        raw_top=raw["t"],
        raw_right=raw["r"],
        raw_bottom=raw["b"],
        is_fill_rect=is_fill_rect,
    )


def _axis(start: float, end: float) -> tuple[float, float]:
    """Image size and offset (both %) along one axis."""
    visible = max(1.0, 100 - max(0.0, start) - max(0.0, end))
    if start < 0 or end < 0:
        total = 100 + abs(min(0.0, start)) + abs(min(0.0, end))
        return total / visible * 100, min(0.0, start)
    offset = max(0.0, start) / visible * 100
    return 100 / visible * 100, -offset if offset else 0.0


def cropping_styles(crop: CroppingSpec) -> CroppingStyles:
    """Container and ``img`` declarations that reproduce the crop.

    For ``srcRect`` crops the image is scaled up by ``100 / visible`` and
    shifted so only the visible window shows. ``fillRect`` insets place the
    image inside its frame instead.
    """
    container = "overflow: hidden; position: relative;"
    if crop.is_fill_rect:
        width = 100 - crop.left - crop.right
        height = 100 - crop.top - crop.bottom
        left, top = crop.left, crop.top
    else:
        width, left = _axis(crop.left, crop.right)
        height, top = _axis(crop.top, crop.bottom)
    image = (
        f"width: {width:.2f}%; height: {height:.2f}%; position: absolute; "
        f"left: {left:.2f}%; top: {top:.2f}%; object-fit: cover;"
    )
    return CroppingStyles(container=container, image=image)


def _shadow(pic: XmlNode, ctx: ColorContext) -> str | None:
    shadow = pic.find("p:spPr/a:effectLst/a:outerShdw")
    if shadow is None:
        return None
    distance = emu_to_px(shadow.get("dist"))
    direction = math.radians(angle_to_degrees(shadow.get("dir")))
    blur = emu_to_px(shadow.get("blurRad"))
    color = "rgba(0, 0, 0, 0.5)"
    if find_color_node(shadow) is not None:
        resolved = resolve_color(shadow, ctx)
        color = rgba(resolved.hex, resolved.alpha)
    dx, dy = math.cos(direction) * distance, math.sin(direction) * distance
    return f"{dx:.2f}px {dy:.2f}px {blur:.2f}px {color}"


def picture_style(pic: XmlNode, ctx: ColorContext) -> PictureStyle:
    """Opacity, flip/rotation transform, border and shadow of a picture."""
    blip_fill = _blip_fill(pic)
    amount = attr(blip_fill, "a:blip/a:alphaModFix", "amt")
    position = shape_position(pic)
    geometry = attr(pic, "p:spPr/a:prstGeom", "prst")
    return PictureStyle(
        opacity=alpha_to_opacity(amount),
        transform=transform_css(position),
        border=shape_border(pic, ctx).border,
        box_shadow=_shadow(pic, ctx),
        border_radius="50%" if geometry == "ellipse" else None,
    )


def picture_rel_id(pic: XmlNode) -> str | None:
    return attr(_blip_fill(pic), "a:blip", "r:embed")


def render_picture(
    pic: XmlNode,
    src: str | None,
    ctx: ColorContext,
    z_index: int = 0,
    group: GroupTransform | None = None,
) -> str:
    """Render a picture as a positioned ``div`` wrapping an ``img``.

    Parameters
    ----------
    pic : XmlNode
        The ``p:pic`` element.
    src : str or None
        Image URL (usually a data URI). When None an empty frame is rendered.
    ctx : ColorContext
        Theme context for border and shadow colors.
    z_index : int
        Stacking order on the slide.
    group : GroupTransform, optional
        Mapping into slide space for pictures inside a group.

    Returns
    -------
    str
        The picture's HTML fragment.

    """
    position = shape_position(pic, ctx.master, ctx.layout)
    if group is not None:
        position = group.apply(position)
    style = picture_style(pic, ctx)
    cropping = extract_cropping(pic)
    crop_css = cropping_styles(cropping) if cropping is not None else None

    nv = non_visual_props(pic)
    c_nv_pr = nv.first("p:cNvPr") if nv is not None else None
    name = c_nv_pr.get("name", "") if c_nv_pr is not None else ""
    shape_id = c_nv_pr.get("id", "") if c_nv_pr is not None else ""
    alt = c_nv_pr.get("descr", "") if c_nv_pr is not None else ""
    rel_id = picture_rel_id(pic) or ""

    container = style_attr(
        [
            ("position", "absolute"),
            ("left", f"{format_number(position.x)}px"),
            ("top", f"{format_number(position.y)}px"),
            ("width", f"{format_number(position.width)}px"),
            ("height", f"{format_number(position.height)}px"),
            ("opacity", format_number(style.opacity, 3) if style.opacity < 1 else None),
            ("transform", style.transform),
            ("border", style.border if style.border != "none" else None),
            ("border-radius", style.border_radius),
            ("box-shadow", style.box_shadow),
            ("box-sizing", "border-box"),
            ("overflow", "hidden"),
            ("z-index", z_index),
        ]
    )
    if src is None:
        logger.debug("No image data for picture %s (%s)", name, rel_id)
        inner = '<div class="image-placeholder" style="width: 100%; height: 100%;"></div>'
    elif crop_css is not None:
        inner = (
            f'<div class="image-crop" style="width: 100%; height: 100%; {crop_css.container}">'
            f'<img src="{escape_html(src)}" alt="{escape_html(alt)}" style="{crop_css.image}"/></div>'
        )
    else:
        inner = (
            f'<img src="{escape_html(src)}" alt="{escape_html(alt)}" '
            'style="width: 100%; height: 100%; object-fit: fill; display: block;"/>'
        )
    return (
        f'<div class="image" data-name="{escape_html(name)}" data-shape-id="{escape_html(shape_id)}" '
        f'data-rel-id="{escape_html(rel_id)}" style="{container}">{inner}</div>'
    )
