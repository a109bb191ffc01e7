#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/shapes/presets.py
"""Preset geometry table.

Every supported ``a:prstGeom`` name maps to a :class:`PresetShape`. An entry
is one of:

* a static CSS ``clip-path`` string,
* a clip-path generator ``(adjustments, position) -> str`` for presets whose
  outline depends on ``a:avLst`` guide values,
* an SVG generator ``(position, paint) -> str`` for silhouettes that a polygon
  cannot express.

Names missing from the table resolve to :data:`PASSTHROUGH`, a plain rectangle
with no clip-path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping

from pptx2html.constants import (
    DEFAULT_FRAME_ADJ,
    DEFAULT_RIGHT_ARROW_ADJ,
    DEFAULT_ROUND_RECT_ADJ,
    HOME_PLATE_ARROW_START,
    MIN_CORNER_RADIUS_PX,
    PERCENT_SCALE,
)
from pptx2html.shapes import svg_shapes
from pptx2html.shapes.svg_shapes import ShapePaint
from pptx2html.units import Position, format_number, js_round, parse_float
from pptx2html.xmltree import XmlNode

logger = logging.getLogger(__name__)

Adjustments = Mapping[str, float]
ClipGenerator = Callable[[Adjustments, Position], str]
SvgGenerator = Callable[[Position, ShapePaint], str]


@dataclass(frozen=True)
class PresetShape:
    """One entry of the preset geometry table."""

    name: str
    clip_path: str | None = None
    clip_generator: ClipGenerator | None = None
    svg_generator: SvgGenerator | None = None
    border_radius: str | None = None

    @property
    def kind(self) -> str:
        if self.svg_generator is not None:
            return "svg"
        if self.clip_generator is not None:
            return "parametric"
        if self.clip_path is not None:
            return "static"
        return "passthrough"

    def clip(self, adjustments: Adjustments, position: Position) -> str | None:
        """CSS clip-path for this preset, or None when the shape is unclipped."""
        if self.clip_generator is not None:
            return self.clip_generator(adjustments, position)
        return self.clip_path

    def svg(self, position: Position, paint: ShapePaint) -> str | None:
        if self.svg_generator is None:
            return None
        return self.svg_generator(position, paint)


def read_adjustments(shape: XmlNode) -> dict[str, float]:
    """Read the ``a:avLst`` guides of a preset shape as ``{name: value}``.

    Guide formulas have the form ``"val 50000"``; anything else is skipped.
    """
    values: dict[str, float] = {}
    av_lst = shape.find("p:spPr/a:prstGeom/a:avLst")
    if av_lst is None:
        return values
    for gd in av_lst.all("a:gd"):
        name = gd.get("name")
        formula = (gd.get("fmla") or "").strip()
        if not name or not formula.startswith("val"):
            continue
        values[name] = parse_float(formula[3:])
    return values


def _polygon(*points: str) -> str:
    return f"polygon({', '.join(points)})"


def _pct(value: float) -> str:
    return f"{format_number(value, 2)}%"


def right_arrow_clip(adjustments: Adjustments, position: Position) -> str:
    """Right arrow outline from ``adj1`` (shaft height) and ``adj2`` (head length).

    Zero or missing adjustments fall back to 50000.
    """
    adj1 = adjustments.get("adj1") or DEFAULT_RIGHT_ARROW_ADJ
    adj2 = adjustments.get("adj2") or DEFAULT_RIGHT_ARROW_ADJ
    shaft_height = adj1 / PERCENT_SCALE * 100
    head_width = adj2 / PERCENT_SCALE * 100

    shaft_top = js_round((100 - shaft_height) / 2)
    shaft_bottom = js_round(shaft_top + shaft_height)
    head_start = js_round(100 - head_width)
    return _polygon(
        f"0% {shaft_top}%",
        f"{head_start}% {shaft_top}%",
        f"{head_start}% 0%",
        "100% 50%",
        f"{head_start}% 100%",
        f"{head_start}% {shaft_bottom}%",
        f"0% {shaft_bottom}%",
    )


def home_plate_clip(adjustments: Adjustments, position: Position) -> str:
    """Pentagon arrow; ``adj`` is the point length relative to the shorter side."""
    adj = adjustments.get("adj")
    if adj:
        head = adj / PERCENT_SCALE * min(position.width, position.height)
        arrow_start = max(0.0, 100 - head / position.width * 100)
    else:
        arrow_start = HOME_PLATE_ARROW_START
    start = _pct(arrow_start)
    return _polygon("0% 0%", f"{start} 0%", "100% 50%", f"{start} 100%", "0% 100%")


def frame_clip(adjustments: Adjustments, position: Position) -> str:
    """Picture-frame outline with a hole of thickness ``adj``.

    ``adj`` is relative to the height; the horizontal inset is scaled so both
    bars render with the same pixel thickness.
    """
    thickness = (adjustments.get("adj1") or adjustments.get("adj") or DEFAULT_FRAME_ADJ) / PERCENT_SCALE
    top = thickness * 100
    bottom = 100 - top
    left = position.height * thickness / position.width * 100
    right = 100 - left
    return _polygon(
        "0% 0%",
        "100% 0%",
        "100% 100%",
        "0% 100%",
        "0% 0%",
        f"{_pct(left)} {_pct(top)}",
        f"{_pct(left)} {_pct(bottom)}",
        f"{_pct(right)} {_pct(bottom)}",
        f"{_pct(right)} {_pct(top)}",
        f"{_pct(left)} {_pct(top)}",
    )


def corner_radius(adjustments: Adjustments, position: Position) -> int:
    """Rounded-rectangle corner radius in px.

    ``max(5, adj/1000 * min(w, h)/100)`` capped at half the shorter side.
    """
    adj = adjustments.get("adj", DEFAULT_ROUND_RECT_ADJ)
    shorter = min(position.width, position.height)
    radius = js_round(max(MIN_CORNER_RADIUS_PX, adj / 1000 * shorter / 100))
    return max(0, min(radius, int(position.width // 2), int(position.height // 2)))


def round_rect_clip(adjustments: Adjustments, position: Position) -> str:
    radius = corner_radius(adjustments, position)
    return f"inset(0% round {radius}px {radius}px {radius}px {radius}px)"


def _static(name: str, *points: str, evenodd: bool = False) -> PresetShape:
    if evenodd:
        return PresetShape(name, clip_path=f"polygon(evenodd, {', '.join(points)})")
    return PresetShape(name, clip_path=_polygon(*points))


def _points(text: str) -> list[str]:
    return [point.strip() for point in text.split(",") if point.strip()]


_CROSS = "35% 0%, 65% 0%, 65% 35%, 100% 35%, 100% 60%, 65% 60%, 65% 100%, 35% 100%, 35% 60%, 0% 60%, 0% 35%, 35% 35%"

_POLYGONS: dict[str, str] = {
    "rect": "0% 0%, 100% 0%, 100% 100%, 0% 100%",
    "triangle": "50% 0%, 100% 100%, 0% 100%",
    "rtTriangle": "0% 0%, 100% 100%, 0% 100%",
    "parallelogram": "15% 0%, 100% 0%, 85% 100%, 0% 100%",
    "pentagon": "50% 0%, 100% 38%, 82% 100%, 18% 100%, 0% 38%",
    "trapezoid": "20% 0%, 80% 0%, 100% 100%, 0% 100%",
    "heptagon": "50% 0%, 90% 20%, 100% 60%, 75% 100%, 25% 100%, 0% 60%, 10% 20%",
    "octagon": "30% 0%, 70% 0%, 100% 30%, 100% 70%, 70% 100%, 30% 100%, 0% 70%, 0% 30%",
    "nonagon": "50% 0%, 83% 12%, 100% 43%, 94% 78%, 68% 100%, 32% 100%, 6% 78%, 0% 43%, 17% 12%",
    "decagon": "50% 0%, 80% 10%, 100% 35%, 100% 70%, 80% 90%, 50% 100%, 20% 90%, 0% 70%, 0% 35%, 20% 10%",
    "star": "50% 0%, 61% 35%, 98% 35%, 68% 57%, 79% 91%, 50% 70%, 21% 91%, 32% 57%, 2% 35%, 39% 35%",
    "star5": "50% 0%, 61% 35%, 98% 35%, 68% 57%, 79% 91%, 50% 70%, 21% 91%, 32% 57%, 2% 35%, 39% 35%",
    "diamond": "50% 0%, 100% 50%, 50% 100%, 0% 50%",
    "flowChartDecision": "50% 0%, 100% 50%, 50% 100%, 0% 50%",
    "leftArrow": "40% 0%, 40% 20%, 100% 20%, 100% 80%, 40% 80%, 40% 100%, 0% 50%",
    "upArrow": "40% 100%, 40% 30%, 20% 30%, 50% 0%, 80% 30%, 60% 30%, 60% 100%",
    "downArrow": "40% 0%, 40% 70%, 20% 70%, 50% 100%, 80% 70%, 60% 70%, 60% 0%",
    "leftRightArrow": "0% 50%, 20% 30%, 20% 40%, 80% 40%, 80% 30%, 100% 50%, 80% 70%, 80% 60%, 20% 60%, 20% 70%",
    "quadArrow": (
        "0% 50%, 25% 30%, 25% 40%, 40% 40%, 40% 20%, 30% 20%, 50% 0%, 70% 20%, 60% 20%, 60% 40%, "
        "75% 40%, 75% 30%, 100% 50%, 75% 70%, 75% 60%, 60% 60%, 60% 80%, 70% 80%, 50% 100%, "
        "30% 80%, 40% 80%, 40% 60%, 25% 60%, 25% 70%"
    ),
    "quadArrowCallout": (
        "0% 50%, 25% 30%, 25% 40%, 31.67% 40%, 31.67% 30%, 40% 30%, 40% 20%, 30% 20%, 50% 0%, "
        "70% 20%, 60% 20%, 60% 30%, 67.5% 30%, 67.5% 40%, 75% 40%, 75% 30%, 100% 50%, 75% 70%, "
        "75% 60%, 67.5% 60%, 67.5% 70%, 60% 70%, 60% 80%, 70% 80%, 50% 100%, 30% 80%, 40% 80%, "
        "40% 70%, 32.5% 70%, 32.5% 60%, 25% 60%, 25% 70%"
    ),
    "leftRightArrowCallout": (
        "0% 50%, 25% 30%, 25% 40%, 31.67% 40%, 31.67% 15.25%, 67.5% 15.25%, 67.5% 40%, 75% 40%, "
        "75% 30%, 100% 50%, 75% 70%, 75% 60%, 67.5% 60%, 67.5% 84.17%, 32.5% 84.17%, 32.5% 60%, "
        "25% 60%, 25% 70%"
    ),
    "upDownArrow": (
        "50% 0%, 70% 20%, 60% 20%, 60% 45%, 80% 45%, 50% 75%, 20% 45%, 40% 45%, 40% 20%, 30% 20%, "
        "50% 0%, 50% 75%, 80% 45%, 60% 45%, 60% 80%, 70% 80%, 50% 100%, 30% 80%, 40% 80%, 40% 45%, "
        "20% 45%, 50% 75%"
    ),
    "chevron": "75% 0%, 100% 50%, 75% 100%, 0% 100%, 25% 50%, 0% 0%",
    "rightArrowCallout": (
        "82% 45.93%, 82% 37.51%, 100% 50%, 82% 62.49%, 82% 54.36%, 69.44% 54.36%, 69.44% 69.74%, "
        "33.94% 69.74%, 33.94% 31.94%, 69.44% 31.94%, 69.44% 45.93%"
    ),
    "notchedRightArrow": (
        "28.76% 60.98%, 37.43% 69.65%, 28.76% 78.32%, 78.1% 78.05%, 78.98% 86.06%, 88.94% 68.99%, "
        "78.98% 53.31%, 78.1% 60.98%"
    ),
    "leftRightUpArrow": (
        "28.54% 53.31%, 18.58% 69.5%, 28.76% 86.06%, 29.42% 78.05%, 78.1% 78.05%, 78.98% 86.06%, "
        "88.94% 69.5%, 78.98% 53.31%, 78.1% 60.98%, 59.29% 60.98%, 59.29% 39.02%, 64.38% 37.98%, "
        "53.76% 21.95%, 43.14% 38.33%, 48.23% 39.02%, 48.23% 60.98%, 29.42% 60.98%"
    ),
    "leftUpArrow": (
        "37.58% 51.64%, 25.26% 70.3%, 37.78% 88.96%, 38.6% 80%, 69.82% 80%, 69.82% 34.93%, "
        "75.98% 34.63%, 63.04% 15.82%, 50.1% 34.03%, 56.26% 34.93%, 56.26% 60.6%, 38.6% 60.6%"
    ),
    "bentUpArrow": (
        "15.94% 65.33%, 15.7% 84.67%, 16.18% 85.33%, 44.69% 84.67%, 68.12% 85.33%, 68.6% 84.67%, "
        "68.6% 29.33%, 75.12% 29.33%, 75.6% 29%, 75.6% 28.33%, 61.84% 9.33%, 60.87% 9.33%, "
        "47.34% 28%, 47.58% 29.33%, 54.35% 29.33%, 54.11% 65.33%, 15.94% 65.33%"
    ),
    "halfFrame": "0% 0%, 80% 0%, 70% 20%, 40% 20%, 40% 80%, 0% 100%, 0% 80%",
    "corner": "10% 10%, 35.75% 10%, 35.75% 67.25%, 90% 67.25%, 90% 90%, 10% 90%",
    "plus": _CROSS,
    "mathPlus": _CROSS,
    "mathMinus": "100% 35%, 100% 60%, 0% 60%, 0% 35%",
    "mathMultiply": (
        "20% 0%, 0% 20%, 30% 50%, 0% 80%, 20% 100%, 50% 70%, 80% 100%, 100% 80%, 70% 50%, 100% 20%, 80% 0%, 50% 30%"
    ),
    "snip1Rect": "0% 0%, 90% 0%, 100% 10%, 100% 100%, 0% 100%, 0% 0%",
    "snip2SameRect": "10% 0%, 90% 0%, 100% 10%, 100% 100%, 0% 100%, 0% 10%",
    "snip2DiagRect": "0% 40.5%, 0% 0%, 88.75% 0%, 100% 11.25%, 100% 100%, 11.25% 100%, 0% 86%",
}

_INSETS: dict[str, str] = {
    "round2SameRect": "inset(0% 0% 0% 0% round 20% 20% 0% 0%)",
    "round1Rect": "inset(0% 0% 0% 0% round 0% 20% 0% 0%)",
    "round2DiagRect": "inset(0% 0% 0% 0% round 25px 0 25px 0)",
}

_SVG_SHAPES: dict[str, SvgGenerator] = {
    "heart": svg_shapes.heart,
    "cloud": svg_shapes.cloud,
    "teardrop": svg_shapes.teardrop,
    "smileyFace": svg_shapes.smiley_face,
    "cube": svg_shapes.cube,
    "can": svg_shapes.can,
    "pie": svg_shapes.pie,
    "chord": svg_shapes.chord,
    "plaque": svg_shapes.plaque,
    "foldedCorner": svg_shapes.folded_corner,
    "snipRoundRect": svg_shapes.snip_round_rect,
    "bentArrow": svg_shapes.bent_arrow,
    "uturnArrow": svg_shapes.uturn_arrow,
    "curvedRightArrow": svg_shapes.curved_right_arrow,
    "donut": svg_shapes.donut,
    "noSmoking": svg_shapes.no_smoking,
    "blockArc": svg_shapes.block_arc,
}


def _build_table() -> dict[str, PresetShape]:
    table: dict[str, PresetShape] = {}
    for name, points in _POLYGONS.items():
        table[name] = _static(name, *_points(points))
    for name, inset in _INSETS.items():
        table[name] = PresetShape(name, clip_path=inset)
    for name, generator in _SVG_SHAPES.items():
        table[name] = PresetShape(name, svg_generator=generator)

    for name in ("ellipse", "flowChartConnector"):
        table[name] = PresetShape(name, clip_path="ellipse(50% 50% at 50% 50%)", border_radius="50%")
    table["diagStripe"] = _static("diagStripe", "67% 0%", "100% 0%", "0% 100%", "0% 67%", evenodd=True)
    table["rightArrow"] = PresetShape("rightArrow", clip_generator=right_arrow_clip)
    table["homePlate"] = PresetShape("homePlate", clip_generator=home_plate_clip)
    table["frame"] = PresetShape("frame", clip_generator=frame_clip)
    table["roundRect"] = PresetShape("roundRect", clip_generator=round_rect_clip)
    return table


PRESET_SHAPES: dict[str, PresetShape] = _build_table()

PASSTHROUGH = PresetShape("default")


def lookup_preset(name: str | None) -> PresetShape:
    """Return the table entry for ``name``, or the passthrough rectangle."""
    if name and name in PRESET_SHAPES:
        return PRESET_SHAPES[name]
    logger.debug("No preset geometry for %r, rendering as rectangle", name)
    return PASSTHROUGH
