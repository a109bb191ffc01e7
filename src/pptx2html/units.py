#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/units.py
"""Unit conversion and shape placement helpers.

DrawingML lengths are English Metric Units (EMU). The renderer maps one point
(12700 EMU) to one CSS pixel. Angles are 60000ths of a degree and most
percentages are 1000ths of a percent.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace

from pptx2html.constants import (
    ANGLE_UNITS_PER_DEGREE,
    DEFAULT_EXTENT_EMU,
    EMU_PER_PX,
    PERCENT_SCALE,
)
from pptx2html.xmltree import XmlNode, attr

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Where each slide-tree element keeps its transform
_XFRM_PATHS = ("p:spPr/a:xfrm", "p:xfrm", "p:grpSpPr/a:xfrm", "a:xfrm")

_NV_PROPS = ("p:nvSpPr", "p:nvPicPr", "p:nvCxnSpPr", "p:nvGraphicFramePr", "p:nvGrpSpPr")


def parse_float(value: object, default: float = 0.0) -> float:
    """Parse the leading number of ``value``.

    Behaves like a lenient attribute reader: ``"12.5px"`` gives 12.5, while
    missing, unparseable and non-finite values give ``default``.
    """
    if value is None:
        return default
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else default
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return default
    number = float(match.group(0))
    return number if math.isfinite(number) else default


def parse_int(value: object, default: int = 0) -> int:
    return int(parse_float(value, float(default)))


def js_round(value: float) -> int:
    """Round half up (``2.5 -> 3``, ``-2.5 -> -2``)."""
    return math.floor(value + 0.5)


def format_number(value: float, digits: int = 4) -> str:
    """Format a number for CSS/SVG output.

    Integral values print without a decimal point and trailing zeros are
    stripped, so ``format_number(3.0) == "3"`` and ``format_number(2.50) == "2.5"``.
    """
    if not math.isfinite(value):
        return "0"
    text = f"{value:.{digits}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def emu_to_px(value: object, default: float = 0) -> float:
    """Convert an EMU value (or attribute string) to pixels.

    Parameters
    ----------
    value : object
        EMU as a number or attribute string. Missing or unparseable values
        fall back to ``default``.
    default : float, default 0
        Fallback, expressed in EMU.

    Returns
    -------
    float
        ``value / 12700``.

    """
    return parse_float(value, float(default)) / EMU_PER_PX


def angle_to_degrees(value: object, default: float = 0) -> float:
    """Convert 60000ths of a degree to degrees."""
    return parse_float(value, float(default)) / ANGLE_UNITS_PER_DEGREE


def percent_from_thousandths(value: object, default: float = 0) -> float:
    """Convert 1000ths of a percent to a percentage (``50000 -> 50.0``)."""
    return parse_float(value, float(default)) / 1000


def alpha_to_opacity(value: object, default: float = PERCENT_SCALE) -> float:
    """Map a 0-100000 alpha to a CSS opacity in ``[0, 1]``."""
    return min(1.0, max(0.0, parse_float(value, float(default)) / PERCENT_SCALE))


@dataclass(frozen=True)
class Position:
    """Pixel placement of a shape.

    Width and height are never below 1px.
    """

    x: float = 0
    y: float = 0
    width: float = 1
    height: float = 1
    rotation: float = 0.0
    flip_h: bool = False
    flip_v: bool = False

    def __post_init__(self) -> None:
        if self.width < 1:
            object.__setattr__(self, "width", 1)
        if self.height < 1:
            object.__setattr__(self, "height", 1)

    def css(self) -> str:
        """Absolute placement declarations for an inline style."""
        return (
            f"position: absolute; left: {format_number(self.x)}px; top: {format_number(self.y)}px; "
            f"width: {format_number(self.width)}px; height: {format_number(self.height)}px;"
        )


@dataclass(frozen=True)
class GroupTransform:
    """Maps child coordinates of a ``p:grpSp`` into the enclosing space."""

    off_x: float = 0.0
    off_y: float = 0.0
    child_off_x: float = 0.0
    child_off_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0

    def apply(self, position: Position) -> Position:
        return replace(
            position,
            x=js_round(self.off_x + (position.x - self.child_off_x) * self.scale_x),
            y=js_round(self.off_y + (position.y - self.child_off_y) * self.scale_y),
            width=max(1, js_round(position.width * self.scale_x)),
            height=max(1, js_round(position.height * self.scale_y)),
        )


def find_xfrm(shape: XmlNode) -> XmlNode | None:
    """Locate the transform node of any slide-tree element."""
    for path in _XFRM_PATHS:
        node = shape.find(path)
        if node is not None:
            return node
    return None


def non_visual_props(shape: XmlNode) -> XmlNode | None:
    """Return the ``p:nv*Pr`` block of a slide-tree element."""
    for name in _NV_PROPS:
        node = shape.first(name)
        if node is not None:
            return node
    return None


def placeholder(shape: XmlNode) -> XmlNode | None:
    nv = non_visual_props(shape)
    return nv.find("p:nvPr/p:ph") if nv is not None else None


def find_placeholder_shape(shape: XmlNode, source: XmlNode | None) -> XmlNode | None:
    """Find the shape in a layout or master that a placeholder inherits from.

    A candidate matches when its ``p:ph`` has the same ``type`` and the same
    ``idx`` (both may be absent).
    """
    ph = placeholder(shape)
    if ph is None or source is None:
        return None
    ph_type, ph_idx = ph.get("type"), ph.get("idx")
    for candidate in source.iter("p:sp"):
        candidate_ph = placeholder(candidate)
        if candidate_ph is None:
            continue
        if candidate_ph.get("type") == ph_type and candidate_ph.get("idx") == ph_idx:
            return candidate
    return None


def shape_position(shape: XmlNode, master: XmlNode | None = None, layout: XmlNode | None = None) -> Position:
    """Compute the pixel placement of a shape.

    Parameters
    ----------
    shape : XmlNode
        Any slide-tree element (``p:sp``, ``p:pic``, ``p:graphicFrame``...).
    master : XmlNode, optional
        Slide master consulted when the shape has no transform of its own.
    layout : XmlNode, optional
        Slide layout, consulted before the master.

    Returns
    -------
    Position
        Rounded offsets and extents, rotation in degrees and flip flags.

    """
    xfrm = find_xfrm(shape)
    if xfrm is None or xfrm.first("a:off") is None:
        for source in (layout, master):
            inherited = find_placeholder_shape(shape, source)
            inherited_xfrm = find_xfrm(inherited) if inherited is not None else None
            if inherited_xfrm is not None:
                logger.debug("Using inherited placeholder position for %s", shape.tag)
                xfrm = inherited_xfrm
                break

    if xfrm is None:
        return Position(width=1, height=1)

    return Position(
        x=js_round(emu_to_px(attr(xfrm, "a:off", "x"))),
        y=js_round(emu_to_px(attr(xfrm, "a:off", "y"))),
        width=js_round(emu_to_px(attr(xfrm, "a:ext", "cx"), DEFAULT_EXTENT_EMU)),
        height=js_round(emu_to_px(attr(xfrm, "a:ext", "cy"), DEFAULT_EXTENT_EMU)),
        rotation=angle_to_degrees(xfrm.get("rot")),
        flip_h=xfrm.get("flipH") == "1",
        flip_v=xfrm.get("flipV") == "1",
    )


def group_transform(group: XmlNode) -> GroupTransform:
    """Derive the child-to-parent mapping of a ``p:grpSp``."""
    xfrm = group.find("p:grpSpPr/a:xfrm")
    if xfrm is None:
        return GroupTransform()
    ext_w = emu_to_px(attr(xfrm, "a:ext", "cx"))
    ext_h = emu_to_px(attr(xfrm, "a:ext", "cy"))
    ch_w = emu_to_px(attr(xfrm, "a:chExt", "cx"))
    ch_h = emu_to_px(attr(xfrm, "a:chExt", "cy"))
    return GroupTransform(
        off_x=emu_to_px(attr(xfrm, "a:off", "x")),
        off_y=emu_to_px(attr(xfrm, "a:off", "y")),
        child_off_x=emu_to_px(attr(xfrm, "a:chOff", "x")),
        child_off_y=emu_to_px(attr(xfrm, "a:chOff", "y")),
        scale_x=ext_w / ch_w if ch_w else 1.0,
        scale_y=ext_h / ch_h if ch_h else 1.0,
    )


def is_text_box(shape: XmlNode) -> bool:
    return attr(shape, "p:nvSpPr/p:cNvSpPr", "txBox") == "1"


def transform_css(position: Position, text_box: bool = False) -> str:
    """Build the CSS ``transform`` value for a placed shape.

    Flips come first and are skipped for text boxes (their text must stay
    readable); rotation follows. Returns ``"none"`` when nothing applies.
    """
    parts = []
    if not text_box:
        if position.flip_h:
            parts.append("scaleX(-1)")
        if position.flip_v:
            parts.append("scaleY(-1)")
    if position.rotation:
        parts.append(f"rotate({format_number(position.rotation)}deg)")
    return " ".join(parts) if parts else "none"
