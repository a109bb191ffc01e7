"""Test utilities for the pptx2html test suite.

This module provides namespaced XML builders for DrawingML fragments, a
minimal Office theme, and python-pptx generators for whole presentations.
"""

import base64
import io
import re

from pptx import Presentation
from pptx.chart.data import CategoryChartData
from pptx.dml.color import RGBColor
from pptx.enum.chart import XL_CHART_TYPE
from pptx.enum.shapes import MSO_SHAPE
from pptx.util import Inches, Pt

from pptx2html.xmltree import XmlNode, parse_xml

# Base64 encoded 1x1 pixel PNG for testing
MINIMAL_PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/w8AAn8B9FpQHLwAAAAASUVORK5CYII="
MINIMAL_PNG_BYTES = base64.b64decode(MINIMAL_PNG_B64)

NS_A = "http://schemas.openxmlformats.org/drawingml/2006/main"
NS_P = "http://schemas.openxmlformats.org/presentationml/2006/main"
NS_R = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
NS_C = "http://schemas.openxmlformats.org/drawingml/2006/chart"

NS_DECLS = f'xmlns:a="{NS_A}" xmlns:p="{NS_P}" xmlns:r="{NS_R}" xmlns:c="{NS_C}"'

_FIRST_TAG = re.compile(r"<([A-Za-z][\w.-]*:[\w.-]+)")

THEME_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<a:theme xmlns:a="{NS_A}" name="Office Theme">
  <a:themeElements>
    <a:clrScheme name="Office">
      <a:dk1><a:sysClr val="windowText" lastClr="000000"/></a:dk1>
      <a:lt1><a:sysClr val="window" lastClr="FFFFFF"/></a:lt1>
      <a:dk2><a:srgbClr val="44546A"/></a:dk2>
      <a:lt2><a:srgbClr val="E7E6E6"/></a:lt2>
      <a:accent1><a:srgbClr val="4472C4"/></a:accent1>
      <a:accent2><a:srgbClr val="ED7D31"/></a:accent2>
      <a:accent3><a:srgbClr val="A5A5A5"/></a:accent3>
      <a:accent4><a:srgbClr val="FFC000"/></a:accent4>
      <a:accent5><a:srgbClr val="5B9BD5"/></a:accent5>
      <a:accent6><a:srgbClr val="70AD47"/></a:accent6>
      <a:hlink><a:srgbClr val="0563C1"/></a:hlink>
      <a:folHlink><a:srgbClr val="954F72"/></a:folHlink>
    </a:clrScheme>
    <a:fontScheme name="Office">
      <a:majorFont><a:latin typeface="Calibri Light"/></a:majorFont>
      <a:minorFont><a:latin typeface="Calibri"/></a:minorFont>
    </a:fontScheme>
    <a:fmtScheme name="Office">
      <a:fillStyleLst>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"><a:tint val="50000"/></a:schemeClr></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"><a:shade val="50000"/></a:schemeClr></a:solidFill>
      </a:fillStyleLst>
      <a:lnStyleLst>
        <a:ln w="6350"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill><a:prstDash val="solid"/></a:ln>
        <a:ln w="12700"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill><a:prstDash val="solid"/></a:ln>
        <a:ln w="19050"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill><a:prstDash val="solid"/></a:ln>
      </a:lnStyleLst>
      <a:effectStyleLst><a:effectStyle><a:effectLst/></a:effectStyle></a:effectStyleLst>
      <a:bgFillStyleLst>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"><a:shade val="50000"/></a:schemeClr></a:solidFill>
        <a:solidFill><a:srgbClr val="112233"/></a:solidFill>
      </a:bgFillStyleLst>
    </a:fmtScheme>
  </a:themeElements>
</a:theme>"""


def parse_fragment(xml: str) -> XmlNode:
    """Parse a fragment, declaring the a/p/r/c namespaces on its root element."""
    xml = xml.strip()
    if NS_DECLS in xml.split(">", 1)[0]:
        return parse_xml(xml)
    return parse_xml(_FIRST_TAG.sub(lambda m: f"<{m.group(1)} {NS_DECLS}", xml, count=1))


def xfrm(x: int = 0, y: int = 0, cx: int = 1270000, cy: int = 635000, extra: str = "") -> str:
    """An ``a:xfrm`` with offsets and extents in EMU."""
    return f'<a:xfrm{extra}><a:off x="{x}" y="{y}"/><a:ext cx="{cx}" cy="{cy}"/></a:xfrm>'


def sp_xml(
    prst: str = "rect",
    body: str = "",
    name: str = "Shape 1",
    shape_id: int = 2,
    geometry: str | None = None,
    transform: str | None = None,
    style: str = "",
    text: str = "",
) -> str:
    """A ``p:sp`` with a preset (or custom) geometry and optional fill/line body."""
    geom = geometry if geometry is not None else f'<a:prstGeom prst="{prst}"><a:avLst/></a:prstGeom>'
    return (
        f'<p:sp><p:nvSpPr><p:cNvPr id="{shape_id}" name="{name}"/><p:cNvSpPr/><p:nvPr/></p:nvSpPr>'
        f"<p:spPr>{transform if transform is not None else xfrm()}{geom}{body}</p:spPr>{style}{text}</p:sp>"
    )


def slide_xml(*shapes: str, background: str = "") -> str:
    """A ``p:sld`` whose shape tree holds ``shapes`` in order."""
    return (
        f'<p:sld {NS_DECLS}><p:cSld>{background}<p:spTree>'
        '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
        f'<p:grpSpPr/>{"".join(shapes)}</p:spTree></p:cSld></p:sld>'
    )


def chart_space(plot: str, extra: str = "", legend: str = "") -> str:
    """A ``c:chartSpace`` whose plot area holds ``plot``."""
    return (
        f'<c:chartSpace {NS_DECLS}>{extra}<c:chart><c:autoTitleDeleted val="1"/>'
        f"<c:plotArea><c:layout/>{plot}</c:plotArea>{legend}</c:chart></c:chartSpace>"
    )


def num_cache(values, format_code: str = "General") -> str:
    points = "".join(f'<c:pt idx="{i}"><c:v>{v}</c:v></c:pt>' for i, v in enumerate(values))
    return (
        f"<c:val><c:numRef><c:f>Sheet1!$B$2</c:f><c:numCache><c:formatCode>{format_code}</c:formatCode>"
        f'<c:ptCount val="{len(values)}"/>{points}</c:numCache></c:numRef></c:val>'
    )


def str_cache(labels) -> str:
    points = "".join(f'<c:pt idx="{i}"><c:v>{label}</c:v></c:pt>' for i, label in enumerate(labels))
    return (
        f'<c:cat><c:strRef><c:f>Sheet1!$A$2</c:f><c:strCache><c:ptCount val="{len(labels)}"/>'
        f"{points}</c:strCache></c:strRef></c:cat>"
    )


def series(index: int, values, labels=(), name: str = "", sp_pr: str = "", extra: str = "") -> str:
    tx = f"<c:tx><c:v>{name}</c:v></c:tx>" if name else ""
    cat = str_cache(labels) if labels else ""
    return (
        f'<c:ser><c:idx val="{index}"/><c:order val="{index}"/>{tx}{sp_pr}{extra}{cat}{num_cache(values)}</c:ser>'
    )


def graphic_frame_xml(rel_id: str = "rId2", name: str = "Chart 1", shape_id: int = 4, with_xfrm: bool = True) -> str:
    """A ``p:graphicFrame`` referencing a chart part."""
    frame_xfrm = ""
    if with_xfrm:
        frame_xfrm = '<p:xfrm><a:off x="635000" y="635000"/><a:ext cx="6350000" cy="3810000"/></p:xfrm>'
    return (
        f'<p:graphicFrame><p:nvGraphicFramePr><p:cNvPr id="{shape_id}" name="{name}"/><p:cNvGraphicFramePr/>'
        f"<p:nvPr/></p:nvGraphicFramePr>{frame_xfrm}"
        f'<a:graphic><a:graphicData uri="{NS_C}"><c:chart r:id="{rel_id}"/></a:graphicData></a:graphic>'
        "</p:graphicFrame>"
    )


def create_chart_presentation(
    chart_type=XL_CHART_TYPE.COLUMN_CLUSTERED,
    categories=("Q1", "Q2", "Q3", "Q4"),
    series_values=(("Sales", (4.3, 2.5, 3.5, 4.5)),),
) -> Presentation:
    """Create a one-slide presentation holding a single chart."""
    prs = Presentation()
    slide = prs.slides.add_slide(prs.slide_layouts[6])
    chart_data = CategoryChartData()
    chart_data.categories = list(categories)
    for name, values in series_values:
        chart_data.add_series(name, values)
    slide.shapes.add_chart(chart_type, Inches(1), Inches(1), Inches(6), Inches(4), chart_data)
    return prs


def create_basic_presentation() -> Presentation:
    """Create a presentation with a filled shape, a text box, a picture and a table."""
    prs = Presentation()
    slide = prs.slides.add_slide(prs.slide_layouts[6])

    shape = slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, Inches(1), Inches(1), Inches(2), Inches(1))
    shape.name = "Blue Box"
    shape.fill.solid()
    shape.fill.fore_color.rgb = RGBColor(0x44, 0x72, 0xC4)

    textbox = slide.shapes.add_textbox(Inches(1), Inches(3), Inches(4), Inches(1))
    run = textbox.text_frame.paragraphs[0].add_run()
    run.text = "Hello & welcome"
    run.font.size = Pt(24)
    run.font.bold = True

    slide.shapes.add_picture(io.BytesIO(MINIMAL_PNG_BYTES), Inches(6), Inches(1), Inches(1), Inches(1))

    table = slide.shapes.add_table(2, 2, Inches(1), Inches(4.5), Inches(4), Inches(1)).table
    table.cell(0, 0).text = "Name"
    table.cell(0, 1).text = "Value"
    table.cell(1, 0).text = "Alpha"
    table.cell(1, 1).text = "1"
    return prs
