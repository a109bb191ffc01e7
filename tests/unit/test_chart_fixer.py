#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_chart_fixer.py
"""Tests for the chart styling fixer."""
import pytest
from utils import NS_DECLS

from pptx2html.chart_fixer import ChartFixResult, fix_chart_file, fix_chart_styling, fix_chart_xml
from pptx2html.exceptions import ChartFixError, MalformedFileError
from pptx2html.options import ChartFixOptions
from pptx2html.xmltree import attr, parse_xml

GENERATED_CHART = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<c:chartSpace {NS_DECLS}>
  <c:date1904 val="0"/>
  <c:lang val="en-US"/>
  <c:chart>
    <c:plotArea>
      <c:barChart>
        <c:barDir val="col"/>
        <c:ser>
          <c:idx val="0"/>
          <c:spPr><a:solidFill><a:srgbClr val="4472C4"/></a:solidFill>
            <a:ln w="12700" cap="flat"><a:solidFill><a:srgbClr val="000000"/></a:solidFill><a:prstDash val="solid"/>
              <a:round/></a:ln></c:spPr>
        </c:ser>
        <c:gapWidth val="150"/>
        <c:overlap val="0"/>
      </c:barChart>
      <c:catAx><c:majorTickMark val="out"/>
        <c:spPr><a:ln w="12700"><a:solidFill><a:srgbClr val="888888"/></a:solidFill></a:ln></c:spPr></c:catAx>
      <c:valAx>
        <c:majorGridlines><c:spPr><a:ln w="12700"><a:solidFill><a:srgbClr val="000000"/></a:solidFill></a:ln>
        </c:spPr></c:majorGridlines>
        <c:majorTickMark val="out"/>
      </c:valAx>
    </c:plotArea>
    <c:legend><c:legendPos val="r"/></c:legend>
  </c:chart>
</c:chartSpace>"""

CLEAN_CHART = f'<c:chartSpace {NS_DECLS}><c:roundedCorners val="0"/><c:chart><c:plotArea/></c:chart></c:chartSpace>'


@pytest.mark.unit
class TestFixChartXml:
    """Test the in-memory fixes."""

    def test_all_fixes(self) -> None:
        """Test every known defect is rewritten."""
        fixed, applied = fix_chart_xml(GENERATED_CHART)
        root = parse_xml(fixed)
        assert attr(root, "c:chart/c:plotArea/c:barChart/c:gapWidth", "val") == "219"
        assert attr(root, "c:chart/c:plotArea/c:barChart/c:overlap", "val") == "-27"
        assert attr(root, "c:chart/c:legend/c:legendPos", "val") == "b"
        assert attr(root, "c:chart/c:plotArea/c:catAx/c:majorTickMark", "val") == "none"
        grid_line = root.find("c:chart/c:plotArea/c:valAx/c:majorGridlines/c:spPr/a:ln")
        assert grid_line.get("w") == "9525"
        assert attr(grid_line, "a:solidFill/a:srgbClr", "val") == "D9D9D9"
        series_line = root.find("c:chart/c:plotArea/c:barChart/c:ser/c:spPr/a:ln")
        assert series_line.first("a:noFill") is not None
        assert series_line.get("w") is None
        assert root.children[2].tag == "c:roundedCorners"
        assert "Fixed bar gap width" in applied
        assert "Fixed rounded corners" in applied
        assert fixed.startswith('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>')

    def test_idempotent(self) -> None:
        """Test the fixer reports nothing on its own output."""
        fixed, _ = fix_chart_xml(GENERATED_CHART)
        again, applied = fix_chart_xml(fixed)
        assert applied == []
        assert again == fixed

    def test_clean_chart_unchanged(self) -> None:
        """Test a chart without defects is returned as is."""
        assert fix_chart_xml(CLEAN_CHART) == (CLEAN_CHART, [])
        assert fix_chart_xml(CLEAN_CHART.encode("utf-8")) == (CLEAN_CHART, [])

    def test_custom_targets(self) -> None:
        """Test options change the written values."""
        options = ChartFixOptions(gap_width="100", legend_position="t")
        fixed, _ = fix_chart_xml(GENERATED_CHART, options)
        root = parse_xml(fixed)
        assert attr(root, "c:chart/c:plotArea/c:barChart/c:gapWidth", "val") == "100"
        assert attr(root, "c:chart/c:legend/c:legendPos", "val") == "t"

    def test_line_chart_series_keep_their_stroke(self) -> None:
        """Test series outside bar charts keep their solid line."""
        chart = (
            f'<c:chartSpace {NS_DECLS}><c:roundedCorners val="0"/><c:chart><c:plotArea><c:lineChart><c:ser>'
            '<c:spPr><a:ln w="28575" cap="rnd"><a:solidFill><a:srgbClr val="FF0000"/></a:solidFill>'
            '<a:round/></a:ln></c:spPr></c:ser></c:lineChart></c:plotArea></c:chart></c:chartSpace>'
        )
        assert fix_chart_xml(chart) == (chart, [])

    def test_bar_lines_without_generated_shape_are_kept(self) -> None:
        """Test a custom bar outline (no solid dash) is left alone."""
        chart = (
            f'<c:chartSpace {NS_DECLS}><c:roundedCorners val="0"/><c:chart><c:plotArea><c:barChart><c:ser>'
            '<c:spPr><a:ln w="19050" cap="flat"><a:solidFill><a:srgbClr val="FFFFFF"/></a:solidFill>'
            '<a:prstDash val="dash"/><a:round/></a:ln></c:spPr></c:ser></c:barChart></c:plotArea></c:chart>'
            "</c:chartSpace>"
        )
        assert fix_chart_xml(chart) == (chart, [])

    def test_data_point_border_and_comments(self) -> None:
        """Test data point outlines are stripped and untouched markup survives."""
        chart = (
            f'<c:chartSpace {NS_DECLS}><!-- generated --><c:roundedCorners val="0"/><c:chart><c:plotArea>'
            '<c:bar3DChart><c:ser><c:dPt><c:idx val="1"/><c:spPr><a:ln w="9525" cap="flat"><a:solidFill>'
            '<a:srgbClr val="F2F2F2"/></a:solidFill><a:prstDash val="solid"/><a:round/></a:ln></c:spPr></c:dPt>'
            "</c:ser></c:bar3DChart></c:plotArea></c:chart></c:chartSpace>"
        )
        fixed, applied = fix_chart_xml(chart)
        assert applied == ["Removed series borders"]
        assert "<!-- generated -->" in fixed
        line = parse_xml(fixed).find("c:chart/c:plotArea/c:bar3DChart/c:ser/c:dPt/c:spPr/a:ln")
        assert [child.tag for child in line.children] == ["a:noFill", "a:round"]
        assert line.get("cap") == "flat"
        assert line.get("w") is None

    def test_malformed(self) -> None:
        """Test malformed chart XML raises."""
        with pytest.raises(MalformedFileError):
            fix_chart_xml("<c:chartSpace")


@pytest.mark.unit
class TestFixChartStyling:
    """Test the directory-level fixer."""

    def test_fixes_chart_files(self, tmp_path) -> None:
        """Test matching chart files are fixed and counted."""
        charts = tmp_path / "charts"
        charts.mkdir()
        (charts / "chart1.xml").write_text(GENERATED_CHART, encoding="utf-8")
        (charts / "chart2.xml").write_text(CLEAN_CHART, encoding="utf-8")
        (charts / "colors1.xml").write_text(GENERATED_CHART, encoding="utf-8")

        result = fix_chart_styling(tmp_path)
        assert result == ChartFixResult(success=True, charts_fixed=1, total_charts=2)
        assert result.to_dict() == {"success": True, "chartsFixed": 1, "totalCharts": 2}
        assert 'val="219"' in (charts / "chart1.xml").read_text(encoding="utf-8")
        assert (charts / "chart2.xml").read_text(encoding="utf-8") == CLEAN_CHART
        assert (charts / "colors1.xml").read_text(encoding="utf-8") == GENERATED_CHART

        second = fix_chart_styling(str(tmp_path))
        assert second.charts_fixed == 0
        assert second.total_charts == 2

    def test_missing_directory(self, tmp_path) -> None:
        """Test a directory without charts succeeds with nothing fixed."""
        result = fix_chart_styling(tmp_path / "nowhere")
        assert result.success
        assert result.to_dict() == {"success": True, "chartsFixed": 0, "totalCharts": 0}

    def test_malformed_file_is_skipped(self, tmp_path) -> None:
        """Test one broken chart does not stop the others."""
        charts = tmp_path / "charts"
        charts.mkdir()
        (charts / "chart1.xml").write_text("<c:chartSpace", encoding="utf-8")
        (charts / "chart2.xml").write_text(GENERATED_CHART, encoding="utf-8")

        result = fix_chart_styling(tmp_path)
        assert result.success
        assert result.charts_fixed == 1
        assert result.total_charts == 2

    def test_fix_chart_file_error(self, tmp_path) -> None:
        """Test file-level failures are wrapped with the chart path."""
        path = tmp_path / "chart1.xml"
        path.write_text("<broken", encoding="utf-8")
        with pytest.raises(ChartFixError) as exc_info:
            fix_chart_file(path)
        assert exc_info.value.chart_path == str(path)

    def test_error_result(self) -> None:
        """Test the failure dictionary shape."""
        assert ChartFixResult(success=False, error="boom").to_dict() == {"success": False, "error": "boom"}
