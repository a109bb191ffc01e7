#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/shapes/text.py
"""Basic shape text: paragraphs, runs, theme fonts and body insets."""

from __future__ import annotations

from dataclasses import dataclass

from pptx2html.colors import ColorContext, find_color_node, resolve_color
from pptx2html.constants import (
    CSS_FONT_KEYWORDS,
    DEFAULT_FONT_FALLBACK,
    DEFAULT_MAJOR_FONT,
    DEFAULT_MINOR_FONT,
    FONT_FALLBACKS,
    FONT_KEYWORD_FALLBACKS,
    THEME_FONT_REFERENCES,
)
from pptx2html.units import emu_to_px, format_number, parse_float
from pptx2html.utils.html_utils import escape_html, style_attr
from pptx2html.xmltree import XmlNode, attr

_ANCHORS = {"t": "flex-start", "ctr": "center", "b": "flex-end", "just": "space-between", "dist": "space-around"}
_ALIGNMENTS = {"l": "left", "ctr": "center", "r": "right", "just": "justify", "dist": "justify"}

# Default bodyPr insets: 0.1in left/right, 0.05in top/bottom
_DEFAULT_INSETS = {"lIns": 91440, "tIns": 45720, "rIns": 91440, "bIns": 45720}


@dataclass(frozen=True)
class TextLayout:
    """Flex alignment and padding of a shape's text box."""

    align_items: str = "flex-start"
    padding: str = "0px"


def text_layout(shape: XmlNode) -> TextLayout:
    body_pr = shape.find("p:txBody/a:bodyPr")
    anchor = body_pr.get("anchor") if body_pr is not None else None
    insets = [
        format_number(emu_to_px(attr(body_pr, "", name), _DEFAULT_INSETS[name]), 2)
        for name in ("tIns", "rIns", "bIns", "lIns")
    ]
    return TextLayout(
        align_items=_ANCHORS.get(anchor or "t", "flex-start"),
        padding=" ".join(f"{value}px" for value in insets),
    )


def resolve_theme_font(typeface: str | None, theme: XmlNode | None) -> str | None:
    """Map a theme font reference (``+mn-lt``, ``+mj-ea``...) to a family name.

    Parameters
    ----------
    typeface : str or None
        The ``typeface`` attribute of an ``a:latin`` run property.
    theme : XmlNode or None
        The theme part holding ``a:fontScheme``.

    Returns
    -------
    str or None
        Concrete names are returned unchanged and a missing typeface gives
        None. References resolve through the theme's major or minor font,
        falling back to Calibri Light or Calibri when the theme leaves the
        slot empty. Unknown references, or a theme without a font scheme,
        give Calibri.

    """
    typeface = (typeface or "").strip()
    if not typeface:
        return None
    if not typeface.startswith("+"):
        return typeface
    slot = THEME_FONT_REFERENCES.get(typeface)
    scheme = theme.find("a:themeElements/a:fontScheme") if theme is not None else None
    if slot is None or scheme is None:
        return DEFAULT_MINOR_FONT
    font, script = slot
    default = DEFAULT_MAJOR_FONT if font == "a:majorFont" else DEFAULT_MINOR_FONT
    return attr(scheme, f"{font}/{script}", "typeface") or default


def font_stack(family: str) -> str:
    """CSS ``font-family`` value for ``family`` with web-safe fallbacks."""
    clean = family.replace("'", "").replace('"', "").strip()
    stack = FONT_FALLBACKS.get(clean)
    if stack is None:
        lower = clean.lower()
        tail = next((fallback for words, fallback in FONT_KEYWORD_FALLBACKS if any(w in lower for w in words)), None)
        stack = f"{clean}, {tail or DEFAULT_FONT_FALLBACK}"
    names = (name.strip() for name in stack.split(","))
    return ", ".join(name if name in CSS_FONT_KEYWORDS else f"'{escape_html(name)}'" for name in names)


def _run_style(r_pr: XmlNode | None, ctx: ColorContext) -> str:
    if r_pr is None:
        return ""
    declarations: dict[str, str | None] = {}
    size = r_pr.get("sz")
    if size is not None:
        declarations["font-size"] = f"{format_number(parse_float(size) / 100, 2)}pt"
    if r_pr.get("b") == "1":
        declarations["font-weight"] = "bold"
    if r_pr.get("i") == "1":
        declarations["font-style"] = "italic"
    underline = r_pr.get("u")
    if underline and underline != "none":
        declarations["text-decoration"] = "underline"
    solid = r_pr.first("a:solidFill")
    if find_color_node(solid) is not None:
        declarations["color"] = resolve_color(solid, ctx).css()
    typeface = resolve_theme_font(attr(r_pr, "a:latin", "typeface"), ctx.theme)
    if typeface:
        declarations["font-family"] = font_stack(typeface)
    return style_attr(declarations)


def render_paragraph(paragraph: XmlNode, ctx: ColorContext) -> str:
    """Render one ``a:p`` as a ``<p>`` with a ``<span>`` per run."""
    align = _ALIGNMENTS.get(attr(paragraph, "a:pPr", "algn") or "", None)
    spans = []
    for child in paragraph.children:
        if child.local == "r":
            style = _run_style(child.first("a:rPr"), ctx)
            text = escape_html(child.first("a:t").text_content() if child.first("a:t") is not None else "")
            spans.append(f'<span style="{style}">{text}</span>' if style else f"<span>{text}</span>")
        elif child.local == "br":
            spans.append("<br/>")
        elif child.local == "fld":
            text = child.first("a:t")
            spans.append(f"<span>{escape_html(text.text_content() if text is not None else '')}</span>")
    style = style_attr({"margin": "0", "text-align": align})
    return f'<p style="{style}">{"".join(spans) or "&#8203;"}</p>'


def render_text_body(shape: XmlNode, ctx: ColorContext) -> str:
    """Render the ``p:txBody`` of a shape, or ``""`` when it has no text."""
    body = shape.first("p:txBody")
    if body is None:
        return ""
    paragraphs = body.all("a:p")
    if not any(p.find("a:r/a:t") is not None for p in paragraphs):
        return ""
    layout = text_layout(shape)
    inner = "".join(render_paragraph(p, ctx) for p in paragraphs)
    style = style_attr({"width": "100%", "padding": layout.padding, "box-sizing": "border-box"})
    return f'<div class="shape-text" style="{style}">{inner}</div>'
