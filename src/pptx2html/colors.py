#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/colors.py
"""DrawingML color resolution.

A color choice (``a:srgbClr``, ``a:schemeClr``, ``a:sysClr``, ``a:prstClr``,
``a:scrgbClr`` or ``a:hslClr``) resolves to a ``#RRGGBB`` hex string plus an
opacity. Scheme colors are looked up through the master's color map and the
theme palette, both carried by an explicit :class:`ColorContext`.

Modifiers are applied in a fixed order: ``lumMod``/``lumOff`` in HSL space
first, then ``shade``, ``tint`` and ``satMod`` in RGB space. Changing the order
changes the result. Shape fills and outlines scale RGB channels instead when
``lumMod`` appears without ``lumOff``.

Nothing here raises for bad input; unresolvable colors become ``#000000``.
"""

from __future__ import annotations

import colorsys
import logging
import re
from dataclasses import dataclass, field
from typing import Mapping

from pptx2html.constants import DEFAULT_COLOR_MAP, FALLBACK_COLOR, PERCENT_SCALE, PRESET_COLORS
from pptx2html.units import parse_float
from pptx2html.xmltree import XmlNode

logger = logging.getLogger(__name__)

COLOR_TAGS = ("a:srgbClr", "a:schemeClr", "a:sysClr", "a:prstClr", "a:scrgbClr", "a:hslClr")

_HEX = re.compile(r"^#?([0-9A-Fa-f]{6})$")

_SYSTEM_COLORS = {"windowText": "#000000", "window": "#FFFFFF", "btnFace": "#F0F0F0", "btnText": "#000000"}


@dataclass(frozen=True, eq=False)
class ColorContext:
    """Read-only theme context passed to every renderer.

    Parameters
    ----------
    theme_colors : Mapping[str, str]
        Theme palette slot (``dk1``, ``accent1``...) to ``#RRGGBB``.
    color_map : Mapping[str, str]
        Master ``p:clrMap`` aliases (``bg1 -> lt1``...).
    theme, master, layout : XmlNode, optional
        Raw parts, for renderers that need more than the palette
        (line styles, placeholder inheritance, backgrounds).

    """

    theme_colors: Mapping[str, str] = field(default_factory=dict)
    color_map: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_COLOR_MAP))
    theme: XmlNode | None = None
    master: XmlNode | None = None
    layout: XmlNode | None = None

    @classmethod
    def from_parts(
        cls,
        theme: XmlNode | None = None,
        master: XmlNode | None = None,
        layout: XmlNode | None = None,
    ) -> ColorContext:
        return cls(
            theme_colors=theme_palette(theme),
            color_map=color_map_from_master(master),
            theme=theme,
            master=master,
            layout=layout,
        )


@dataclass(frozen=True)
class ColorModifiers:
    """Raw modifier values (0-100000 scale) read from a color node."""

    lum_mod: float | None = None
    lum_off: float | None = None
    shade: float | None = None
    tint: float | None = None
    sat_mod: float | None = None
    alpha: float | None = None
    alpha_mod: float | None = None
    alpha_off: float | None = None

    @classmethod
    def from_node(cls, node: XmlNode) -> ColorModifiers:
        def value(name: str) -> float | None:
            child = node.first(name)
            if child is None or child.get("val") is None:
                return None
            return parse_float(child.get("val"))

        return cls(
            lum_mod=value("a:lumMod"),
            lum_off=value("a:lumOff"),
            shade=value("a:shade"),
            tint=value("a:tint"),
            sat_mod=value("a:satMod"),
            alpha=value("a:alpha"),
            alpha_mod=value("a:alphaMod"),
            alpha_off=value("a:alphaOff"),
        )

    def opacity(self) -> float:
        alpha = self.alpha if self.alpha is not None else PERCENT_SCALE
        if self.alpha_mod is not None:
            alpha = alpha * self.alpha_mod / PERCENT_SCALE
        if self.alpha_off is not None:
            alpha += self.alpha_off
        return min(1.0, max(0.0, alpha / PERCENT_SCALE))


@dataclass(frozen=True)
class ResolvedColor:
    """A resolved color and where it came from."""

    hex: str = FALLBACK_COLOR
    alpha: float = 1.0
    scheme: str | None = None
    modifiers: ColorModifiers = field(default_factory=ColorModifiers)

    def css(self) -> str:
        """``#RRGGBB`` when opaque, ``rgba(...)`` otherwise."""
        if self.alpha >= 1.0:
            return self.hex
        return rgba(self.hex, self.alpha)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    match = _HEX.match(value.strip()) if value else None
    if not match:
        return (0, 0, 0)
    digits = match.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    channels = (max(0, min(255, int(round(c)))) for c in (r, g, b))
    return "#" + "".join(f"{c:02X}" for c in channels)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """RGB (0-255) to HSL, each component in ``[0, 1]``."""
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    return h, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[float, float, float]:
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return r * 255, g * 255, b * 255


def rgba(hex_color: str, alpha: float) -> str:
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {round(alpha, 3):g})"


def normalize_hex(value: str | None, default: str = FALLBACK_COLOR, keep_case: bool = False) -> str:
    """Return ``#RRGGBB`` for a 6-digit hex value, else ``default``.

    Digits are uppercased unless ``keep_case`` is set, in which case they are
    returned exactly as written.
    """
    match = _HEX.match(value.strip()) if value else None
    if not match:
        return default
    return f"#{match.group(1)}" if keep_case else f"#{match.group(1).upper()}"


def apply_lum_mod(hex_color: str, lum_mod: float) -> str:
    """Scale RGB channels by ``lum_mod / 100000`` (a plain darken/brighten)."""
    r, g, b = hex_to_rgb(hex_color)
    factor = lum_mod / PERCENT_SCALE
    return rgb_to_hex(min(255, r * factor), min(255, g * factor), min(255, b * factor))


def apply_luminance(hex_color: str, lum_mod: float | None, lum_off: float | None) -> str:
    """Apply ``lumMod`` then ``lumOff`` to the HSL lightness."""
    h, s, l = rgb_to_hsl(*hex_to_rgb(hex_color))
    if lum_mod is not None:
        l *= lum_mod / PERCENT_SCALE
    if lum_off is not None:
        l += lum_off / PERCENT_SCALE
    l = min(1.0, max(0.0, l))
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def apply_color_modifiers(hex_color: str, modifiers: ColorModifiers, rgb_lum_mod: bool = False) -> str:
    """Apply DrawingML color modifiers in their fixed order.

    Parameters
    ----------
    hex_color : str
        Base ``#RRGGBB`` color.
    modifiers : ColorModifiers
        Modifier values on the 0-100000 scale.
    rgb_lum_mod : bool
        Use the plain RGB scaling of :func:`apply_lum_mod` when ``lumMod``
        appears without ``lumOff``, as shape fills and outlines do.

    Returns
    -------
    str
        The modified ``#RRGGBB`` color.

    Notes
    -----
    ``lumMod``/``lumOff`` act on HSL lightness and always run first. ``shade``
    (``c * s``), ``tint`` (``c + (255 - c) * t``) and ``satMod`` (distance from
    the luma grey scaled by ``m``) follow in RGB space.

    """
    color = hex_color
    color_changes = (modifiers.lum_mod, modifiers.lum_off, modifiers.shade, modifiers.tint, modifiers.sat_mod)
    if all(v is None for v in color_changes):
        return color
    if rgb_lum_mod and modifiers.lum_mod is not None and modifiers.lum_off is None:
        color = apply_lum_mod(color, modifiers.lum_mod)
    elif modifiers.lum_mod is not None or modifiers.lum_off is not None:
        color = apply_luminance(color, modifiers.lum_mod, modifiers.lum_off)

    r, g, b = hex_to_rgb(color)
    if modifiers.shade is not None:
        factor = modifiers.shade / PERCENT_SCALE
        r, g, b = r * factor, g * factor, b * factor
    if modifiers.tint is not None:
        factor = modifiers.tint / PERCENT_SCALE
        r, g, b = (c + (255 - c) * factor for c in (r, g, b))
    if modifiers.sat_mod is not None:
        factor = modifiers.sat_mod / PERCENT_SCALE
        grey = 0.299 * r + 0.587 * g + 0.114 * b
        r, g, b = (grey + (c - grey) * factor for c in (r, g, b))
    return rgb_to_hex(r, g, b)


def theme_palette(theme: XmlNode | None) -> dict[str, str]:
    """Read ``a:clrScheme`` into a slot -> hex mapping."""
    palette: dict[str, str] = {}
    if theme is None:
        return palette
    scheme = theme.find("a:themeElements/a:clrScheme")
    if scheme is None:
        return palette
    for slot in scheme.children:
        srgb = slot.first("a:srgbClr")
        system = slot.first("a:sysClr")
        if srgb is not None:
            palette[slot.local] = normalize_hex(srgb.get("val"), keep_case=True)
        elif system is not None:
            palette[slot.local] = normalize_hex(system.get("lastClr"), "#FFFFFF")
    return palette


def color_map_from_master(master: XmlNode | None) -> dict[str, str]:
    """Return the master's ``p:clrMap`` merged over the default aliases."""
    mapping = dict(DEFAULT_COLOR_MAP)
    clr_map = master.first("p:clrMap") if master is not None else None
    if clr_map is not None:
        mapping.update(clr_map.attrs)
    return mapping


def resolve_scheme_color(name: str, ctx: ColorContext, default: str | None = None) -> str | None:
    """Resolve a scheme slot (``accent1``, ``bg1``, ``tx1``...) to hex."""
    mapped = ctx.color_map.get(name, name)
    color = ctx.theme_colors.get(mapped) or ctx.theme_colors.get(name)
    if color is None:
        logger.debug("Scheme color %s not found in theme", name)
        return default
    return color


def find_color_node(parent: XmlNode | None) -> XmlNode | None:
    """Return the color choice element of ``parent`` (or ``parent`` itself)."""
    if parent is None:
        return None
    if parent.tag in COLOR_TAGS:
        return parent
    for child in parent.children:
        if child.tag in COLOR_TAGS:
            return child
    return None


def _base_color(node: XmlNode, ctx: ColorContext, placeholder_color: str | None) -> str:
    kind = node.tag
    if kind == "a:srgbClr":
        return normalize_hex(node.get("val"), keep_case=True)
    if kind == "a:schemeClr":
        val = node.get("val", "")
        if val == "phClr":
            return placeholder_color or FALLBACK_COLOR
        return resolve_scheme_color(val, ctx, FALLBACK_COLOR) or FALLBACK_COLOR
    if kind == "a:sysClr":
        last = node.get("lastClr")
        if last:
            return normalize_hex(last)
        return _SYSTEM_COLORS.get(node.get("val", ""), FALLBACK_COLOR)
    if kind == "a:prstClr":
        return PRESET_COLORS.get((node.get("val") or "").lower(), FALLBACK_COLOR)
    if kind == "a:scrgbClr":
        channels = [_linear_to_srgb(parse_float(node.get(c)) / PERCENT_SCALE) for c in ("r", "g", "b")]
        return rgb_to_hex(*channels)
    if kind == "a:hslClr":
        hue = parse_float(node.get("hue")) / 60000 / 360
        sat = parse_float(node.get("sat")) / PERCENT_SCALE
        lum = parse_float(node.get("lum")) / PERCENT_SCALE
        return rgb_to_hex(*hsl_to_rgb(hue % 1.0, min(1.0, sat), min(1.0, lum)))
    return FALLBACK_COLOR


def _linear_to_srgb(value: float) -> float:
    value = min(1.0, max(0.0, value))
    if value <= 0.0031308:
        return value * 12.92 * 255
    return (1.055 * value ** (1 / 2.4) - 0.055) * 255


def resolve_color(
    parent: XmlNode | None,
    ctx: ColorContext,
    placeholder_color: str | None = None,
    rgb_lum_mod: bool = False,
) -> ResolvedColor:
    """Resolve the color choice inside ``parent``.

    Parameters
    ----------
    parent : XmlNode or None
        A fill/line node holding a color choice, or the color node itself.
    ctx : ColorContext
        Theme and color-map context.
    placeholder_color : str, optional
        Value used for ``phClr`` (the color of the referencing style).
    rgb_lum_mod : bool
        Passed through to :func:`apply_color_modifiers`.

    Returns
    -------
    ResolvedColor
        ``#000000`` at full opacity when no color can be resolved.

    """
    node = find_color_node(parent)
    if node is None:
        return ResolvedColor()
    modifiers = ColorModifiers.from_node(node)
    base = _base_color(node, ctx, placeholder_color)
    scheme = node.get("val") if node.tag == "a:schemeClr" else None
    return ResolvedColor(
        hex=apply_color_modifiers(base, modifiers, rgb_lum_mod),
        alpha=modifiers.opacity(),
        scheme=scheme,
        modifiers=modifiers,
    )


def brighten(hex_color: str, factor: float) -> str:
    """Multiply each channel by ``factor``, clamped to 0-255."""
    r, g, b = hex_to_rgb(hex_color)
    return rgb_to_hex(r * factor, g * factor, b * factor)
