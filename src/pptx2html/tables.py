#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/tables.py
"""``a:tbl`` graphic frames rendered as positioned HTML tables."""

from __future__ import annotations

import logging

from pptx2html.colors import ColorContext, find_color_node, resolve_color
from pptx2html.constants import EMU_PER_PX
from pptx2html.shapes.text import render_paragraph
from pptx2html.units import GroupTransform, format_number, non_visual_props, parse_float, shape_position
from pptx2html.utils.html_utils import escape_html, style_attr
from pptx2html.xmltree import XmlNode

logger = logging.getLogger(__name__)

_CELL_BORDERS = {"a:lnT": "border-top", "a:lnB": "border-bottom", "a:lnL": "border-left", "a:lnR": "border-right"}
_VERTICAL_ALIGN = {"t": "top", "ctr": "middle", "b": "bottom"}


def table_node(graphic_frame: XmlNode) -> XmlNode | None:
    return graphic_frame.find("a:graphic/a:graphicData/a:tbl")


def _cell_border(line: XmlNode, ctx: ColorContext) -> str | None:
    if line.first("a:noFill") is not None:
        return "none"
    solid = line.first("a:solidFill")
    if find_color_node(solid) is None:
        return None
    width = parse_float(line.get("w"), 12700) / EMU_PER_PX
    return f"{format_number(width, 2)}px solid {resolve_color(solid, ctx).hex}"


def _cell_style(cell: XmlNode, row_height: float, ctx: ColorContext) -> str:
    tc_pr = cell.first("a:tcPr")
    declarations: dict[str, object] = {"height": f"{format_number(row_height)}px", "padding": "4px 7px"}
    if tc_pr is None:
        return style_attr(declarations)
    solid = tc_pr.first("a:solidFill")
    if find_color_node(solid) is not None:
        declarations["background"] = resolve_color(solid, ctx).css()
    elif tc_pr.first("a:noFill") is not None:
        declarations["background"] = "transparent"
    for tag, css in _CELL_BORDERS.items():
        line = tc_pr.first(tag)
        if line is not None:
            declarations[css] = _cell_border(line, ctx)
    declarations["vertical-align"] = _VERTICAL_ALIGN.get(tc_pr.get("anchor", "t"), "top")
    return style_attr(declarations)


def render_table(
    graphic_frame: XmlNode, ctx: ColorContext, z_index: int = 0, group: GroupTransform | None = None
) -> str:
    """Render a table graphic frame.

    Merged continuation cells (``hMerge``/``vMerge``) are skipped; their
    origin cell carries ``colspan``/``rowspan`` from ``gridSpan``/``rowSpan``.
    Column widths are proportional to the ``a:gridCol`` widths.
    """
    tbl = table_node(graphic_frame)
    if tbl is None:
        return ""
    position = shape_position(graphic_frame, ctx.master, ctx.layout)
    if group is not None:
        position = group.apply(position)

    grid = [parse_float(col.get("w")) for col in tbl.find_all("a:tblGrid/a:gridCol")]
    total = sum(grid)
    cols = "".join(
        f'<col style="width: {format_number(w / total * 100 if total else 100 / len(grid), 2)}%;"/>' for w in grid
    )

    rows = []
    for tr in tbl.all("a:tr"):
        height = parse_float(tr.get("h")) / EMU_PER_PX
        cells = []
        for tc in tr.all("a:tc"):
            if tc.get("hMerge") == "1" or tc.get("vMerge") == "1":
                continue
            spans = ""
            if int(parse_float(tc.get("gridSpan"), 1)) > 1:
                spans += f' colspan="{int(parse_float(tc.get("gridSpan")))}"'
            if int(parse_float(tc.get("rowSpan"), 1)) > 1:
                spans += f' rowspan="{int(parse_float(tc.get("rowSpan")))}"'
            text = "".join(render_paragraph(p, ctx) for p in tc.find_all("a:txBody/a:p"))
            cells.append(f'<td{spans} style="{_cell_style(tc, height, ctx)}">{text}</td>')
        rows.append(f"<tr>{''.join(cells)}</tr>")

    nv = non_visual_props(graphic_frame)
    c_nv_pr = nv.first("p:cNvPr") if nv is not None else None
    name = c_nv_pr.get("name", "") if c_nv_pr is not None else ""
    shape_id = c_nv_pr.get("id", "") if c_nv_pr is not None else ""
    style = style_attr(
        [
            ("position", "absolute"),
            ("left", f"{format_number(position.x)}px"),
            ("top", f"{format_number(position.y)}px"),
            ("width", f"{format_number(position.width)}px"),
            ("border-collapse", "collapse"),
            ("table-layout", "fixed"),
            ("z-index", z_index),
        ]
    )
    logger.debug("Rendered table %s with %d rows", name, len(rows))
    return (
        f'<table class="table" data-name="{escape_html(name)}" data-shape-id="{escape_html(shape_id)}" '
        f'style="{style}"><colgroup>{cols}</colgroup><tbody>{"".join(rows)}</tbody></table>'
    )
