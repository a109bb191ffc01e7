#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_tables.py
"""Tests for table graphic frames."""
import pytest
from utils import graphic_frame_xml

from pptx2html.tables import render_table, table_node


def cell(text: str = "", attrs: str = "", tc_pr: str = "") -> str:
    body = f"<a:txBody><a:bodyPr/><a:p><a:r><a:t>{text}</a:t></a:r></a:p></a:txBody>" if text else ""
    return f"<a:tc{attrs}>{body}{tc_pr}</a:tc>"


def table_frame(*rows: str, widths=(1270000, 3810000)) -> str:
    grid = "".join(f'<a:gridCol w="{w}"/>' for w in widths)
    trs = "".join(f'<a:tr h="381000">{row}</a:tr>' for row in rows)
    return (
        '<p:graphicFrame><p:nvGraphicFramePr><p:cNvPr id="6" name="Table 1"/><p:cNvGraphicFramePr/><p:nvPr/>'
        '</p:nvGraphicFramePr><p:xfrm><a:off x="127000" y="254000"/><a:ext cx="5080000" cy="762000"/></p:xfrm>'
        '<a:graphic><a:graphicData uri="http://schemas.openxmlformats.org/drawingml/2006/table">'
        f"<a:tbl><a:tblPr/><a:tblGrid>{grid}</a:tblGrid>{trs}</a:tbl></a:graphicData></a:graphic></p:graphicFrame>"
    )


@pytest.mark.unit
class TestRenderTable:
    """Test table HTML."""

    def test_structure(self, fragment, ctx) -> None:
        """Test placement, proportional columns and cell text."""
        frame = fragment(table_frame(cell("Name") + cell("Value"), cell("Alpha") + cell("1")))
        html = render_table(frame, ctx, z_index=5)
        assert html.startswith('<table class="table" data-name="Table 1" data-shape-id="6"')
        assert "left: 10px; top: 20px; width: 400px;" in html
        assert "z-index: 5;" in html
        assert '<colgroup><col style="width: 25%;"/><col style="width: 75%;"/></colgroup>' in html
        assert html.count("<tr>") == 2
        assert html.count("<td") == 4
        assert "<span>Alpha</span>" in html
        assert 'style="height: 30px; padding: 4px 7px;"' in html

    def test_merged_cells(self, fragment, ctx) -> None:
        """Test continuation cells are skipped and spans are kept."""
        frame = fragment(
            table_frame(
                cell("Header", ' gridSpan="2"') + cell(attrs=' hMerge="1"'),
                cell("Tall", ' rowSpan="2"') + cell("x"),
                cell(attrs=' vMerge="1"') + cell("y"),
            )
        )
        html = render_table(frame, ctx)
        assert '<td colspan="2"' in html
        assert '<td rowspan="2"' in html
        assert html.count("<td") == 4

    def test_cell_properties(self, fragment, ctx) -> None:
        """Test cell fill, borders and anchoring."""
        tc_pr = (
            '<a:tcPr anchor="ctr"><a:lnL><a:noFill/></a:lnL>'
            '<a:lnB w="25400"><a:solidFill><a:srgbClr val="FF0000"/></a:solidFill></a:lnB>'
            '<a:solidFill><a:schemeClr val="accent1"/></a:solidFill></a:tcPr>'
        )
        html = render_table(fragment(table_frame(cell("A", tc_pr=tc_pr) + cell("B"))), ctx)
        assert "background: #4472C4;" in html
        assert "border-left: none;" in html
        assert "border-bottom: 2px solid #FF0000;" in html
        assert "vertical-align: middle;" in html

    def test_chart_frame_is_not_a_table(self, fragment, ctx) -> None:
        """Test a graphic frame without a table renders nothing."""
        frame = fragment(graphic_frame_xml())
        assert table_node(frame) is None
        assert render_table(frame, ctx) == ""
