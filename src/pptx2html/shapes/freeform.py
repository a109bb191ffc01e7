#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/shapes/freeform.py
"""Custom geometry (``a:custGeom``) to SVG.

Guides are evaluated with the DrawingML formula language, then each
``a:path`` is walked in document order and its points are scaled from the
path's native coordinate space to the shape's pixel size.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

from pptx2html.borders import StrokeStyle
from pptx2html.constants import ANGLE_UNITS_PER_DEGREE
from pptx2html.fills import GradientFill
from pptx2html.units import Position, format_number, parse_float
from pptx2html.xmltree import XmlNode

logger = logging.getLogger(__name__)


def builtin_guides(w: float, h: float) -> dict[str, float]:
    """Predefined DrawingML variables for a ``w`` x ``h`` coordinate space."""
    ss, ls = min(w, h), max(w, h)
    values = {
        "w": w,
        "h": h,
        "l": 0.0,
        "t": 0.0,
        "r": w,
        "b": h,
        "hc": w / 2,
        "vc": h / 2,
        "ss": ss,
        "ls": ls,
        "cd2": 10800000.0,
        "cd4": 5400000.0,
        "cd8": 2700000.0,
        "3cd4": 16200000.0,
        "3cd8": 8100000.0,
        "5cd8": 13500000.0,
        "7cd8": 18900000.0,
    }
    for divisor in (2, 3, 4, 5, 6, 8, 10, 12, 16, 32):
        values[f"wd{divisor}"] = w / divisor
        values[f"hd{divisor}"] = h / divisor
        values[f"ssd{divisor}"] = ss / divisor
    return values


def _radians(value: float) -> float:
    return math.radians(value / ANGLE_UNITS_PER_DEGREE)


def _degrees60k(value: float) -> float:
    return math.degrees(value) * ANGLE_UNITS_PER_DEGREE


def _div(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def evaluate_formula(formula: str | None, variables: Mapping[str, float]) -> float:
    """Evaluate one guide formula such as ``"*/ w adj 100000"``.

    Arguments are variable names or numeric literals; unknown names resolve to
    0. Angles are in 60000ths of a degree.
    """
    if not formula:
        return 0.0
    parts = formula.split()
    op, raw_args = parts[0], parts[1:]

    def arg(i: int) -> float:
        if i >= len(raw_args):
            return 0.0
        token = raw_args[i]
        if token in variables:
            return variables[token]
        return parse_float(token)

    x, y, z = arg(0), arg(1), arg(2)
    if op == "val":
        return x
    if op == "*/":
        return _div(x * y, z)
    if op == "+-":
        return x + y - z
    if op == "+/":
        return _div(x + y, z)
    if op == "*":
        return x * y
    if op == "/":
        return _div(x, y)
    if op == "+":
        return x + y
    if op == "-":
        return x - y
    if op == "abs":
        return abs(x)
    if op == "max":
        return max(x, y)
    if op == "min":
        return min(x, y)
    if op == "sqrt":
        return math.sqrt(x) if x > 0 else 0.0
    if op == "sin":
        return x * math.sin(_radians(y))
    if op == "cos":
        return x * math.cos(_radians(y))
    if op == "tan":
        return x * math.tan(_radians(y))
    if op == "at2":
        return _degrees60k(math.atan2(y, x))
    if op == "cat2":
        return x * math.cos(math.atan2(z, y))
    if op == "sat2":
        return x * math.sin(math.atan2(z, y))
    if op == "mod":
        return math.sqrt(x * x + y * y + z * z)
    if op == "pin":
        return y if x <= y <= z else (x if y < x else z)
    if op == "?:":
        return y if x > 0 else z
    logger.debug("Unknown guide operator %r", op)
    return parse_float(formula)


def evaluate_guides(
    gd_nodes: Iterable[XmlNode], w: float, h: float, seed: Mapping[str, float] | None = None
) -> dict[str, float]:
    """Evaluate guides in declaration order.

    Parameters
    ----------
    gd_nodes : iterable of XmlNode
        ``a:gd`` elements with ``name`` and ``fmla``.
    w, h : float
        Size of the coordinate space the guides refer to.
    seed : Mapping[str, float], optional
        Values known up front, such as adjust values from ``a:avLst``.

    Returns
    -------
    dict[str, float]
        Builtin variables, seed values and every evaluated guide.

    """
    variables = builtin_guides(w, h)
    if seed:
        variables.update(seed)
    for gd in gd_nodes:
        name = gd.get("name")
        if not name:
            continue
        try:
            variables[name] = evaluate_formula(gd.get("fmla"), variables)
        except (ValueError, OverflowError) as e:
            logger.debug("Guide %s could not be evaluated: %s", name, e)
            variables[name] = 0.0
    return variables


def _value(token: str | None, guides: Mapping[str, float]) -> float:
    if token is None:
        return 0.0
    if token in guides:
        return guides[token]
    return parse_float(token)


def rectangle_path(width: float, height: float) -> str:
    w, h = format_number(width, 2), format_number(height, 2)
    return f"M0,0 L{w},0 L{w},{h} L0,{h} Z"


def path_to_svg_d(
    path_node: XmlNode,
    guides: Mapping[str, float],
    native_w: float,
    native_h: float,
    target_w: float,
    target_h: float,
) -> str:
    """Convert one ``a:path`` into SVG path data.

    Commands are emitted in the order they appear in the document. Points are
    scaled with ``raw / native * target``.
    """
    sx = target_w / native_w if native_w else 1.0
    sy = target_h / native_h if native_h else 1.0
    current = (0.0, 0.0)
    commands: list[str] = []

    def point(pt: XmlNode | None) -> tuple[float, float]:
        if pt is None:
            raise ValueError(f"{path_node.tag} command is missing a point")
        return _value(pt.get("x"), guides), _value(pt.get("y"), guides)

    def fmt(p: tuple[float, float]) -> str:
        return f"{format_number(p[0] * sx, 2)},{format_number(p[1] * sy, 2)}"

    for child in path_node.children:
        name = child.local
        if name == "moveTo":
            current = point(child.first("a:pt"))
            commands.append(f"M{fmt(current)}")
        elif name == "lnTo":
            current = point(child.first("a:pt"))
            commands.append(f"L{fmt(current)}")
        elif name == "cubicBezTo":
            pts = [point(pt) for pt in child.all("a:pt")]
            if len(pts) != 3:
                raise ValueError("cubicBezTo needs three points")
            commands.append("C" + " ".join(fmt(p) for p in pts))
            current = pts[-1]
        elif name == "quadBezTo":
            pts = [point(pt) for pt in child.all("a:pt")]
            if len(pts) != 2:
                raise ValueError("quadBezTo needs two points")
            commands.append("Q" + " ".join(fmt(p) for p in pts))
            current = pts[-1]
        elif name == "arcTo":
            w_r = _value(child.get("wR"), guides)
            h_r = _value(child.get("hR"), guides)
            start = _radians(_value(child.get("stAng"), guides))
            swing_units = _value(child.get("swAng"), guides)
            end = start + _radians(swing_units)
            cx = current[0] - w_r * math.cos(start)
            cy = current[1] - h_r * math.sin(start)
            current = (cx + w_r * math.cos(end), cy + h_r * math.sin(end))
            large_arc = 1 if abs(swing_units) > 180 * ANGLE_UNITS_PER_DEGREE else 0
            sweep = 1 if swing_units > 0 else 0
            commands.append(
                f"A{format_number(w_r * sx, 2)},{format_number(h_r * sy, 2)} 0 {large_arc} {sweep} {fmt(current)}"
            )
        elif name == "close":
            commands.append("Z")
    return " ".join(commands)


def _gradient_defs(gradient: GradientFill, gradient_id: str) -> str:
    angle = math.radians(gradient.angle)
    dx, dy = math.sin(angle) * 50, -math.cos(angle) * 50
    coords = (
        f'x1="{format_number(50 - dx, 2)}%" y1="{format_number(50 - dy, 2)}%" '
        f'x2="{format_number(50 + dx, 2)}%" y2="{format_number(50 + dy, 2)}%"'
    )
    stops = "".join(
        f'<stop offset="{format_number(stop.position, 2)}%" '
        f'style="stop-color:{stop.color}; stop-opacity:{format_number(stop.alpha, 3)}"/>'
        for stop in gradient.stops
    )
    return f'<defs><linearGradient id="{gradient_id}" {coords}>{stops}</linearGradient></defs>'


def custom_geometry_svg(
    cust_geom: XmlNode | None,
    position: Position,
    fill: str,
    stroke: StrokeStyle,
    gradient: GradientFill | None = None,
    gradient_id: str = "custGeomGradient",
    adjustments: Mapping[str, float] | None = None,
) -> str:
    """Render a ``a:custGeom`` as an inline ``<svg>``.

    A geometry without ``a:pathLst`` renders as a full-bounds rectangle. A path
    that fails to convert is replaced by the same rectangle so the shape is
    never dropped.
    """
    width, height = position.width, position.height
    view = f'viewBox="0 0 {format_number(width, 2)} {format_number(height, 2)}"'
    stroke_attrs = stroke.svg_attrs()

    paths = cust_geom.find_all("a:pathLst/a:path") if cust_geom is not None else []
    segments = []
    if not paths:
        segments.append(rectangle_path(width, height))
    gd_nodes = cust_geom.find_all("a:gdLst/a:gd") if cust_geom is not None else []
    seed = dict(adjustments or {})
    if cust_geom is not None:
        for gd in cust_geom.find_all("a:avLst/a:gd"):
            if gd.get("name"):
                seed.setdefault(gd.get("name"), evaluate_formula(gd.get("fmla"), {}))

    for path in paths:
        native_w = parse_float(path.get("w"), width) or width
        native_h = parse_float(path.get("h"), height) or height
        try:
            guides = evaluate_guides(gd_nodes, native_w, native_h, seed)
            d = path_to_svg_d(path, guides, native_w, native_h, width, height)
            segments.append(d or rectangle_path(width, height))
        except (ValueError, ZeroDivisionError, OverflowError, TypeError) as e:
            logger.warning("Custom path could not be built, using bounding rectangle: %s", e)
            segments.append(rectangle_path(width, height))

    defs = ""
    paint = fill
    if gradient is not None and gradient.kind == "linear" and len(gradient.stops) >= 2:
        defs = _gradient_defs(gradient, gradient_id)
        paint = f"url(#{gradient_id})"

    d = " ".join(segments)
    rect = ""
    if not paths:
        rect = (
            f'<rect x="0" y="0" width="{format_number(width, 2)}" height="{format_number(height, 2)}" '
            f'fill="{paint}" {stroke_attrs}/>'
        )
    return (
        f'<svg {view} width="100%" height="100%" preserveAspectRatio="none" '
        f'xmlns="http://www.w3.org/2000/svg" style="overflow: visible;">{defs}{rect}'
        f'<path d="{d}" fill="{paint}" {stroke_attrs}/></svg>'
    )
