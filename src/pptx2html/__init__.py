"""pptx2html - render PowerPoint slides as absolutely positioned HTML.

pptx2html turns the parts of a PPTX package into inline-styled HTML: preset
and custom shapes become ``div`` and ``svg`` elements, bar, doughnut, pie and
area charts are drawn from their cached series data, connectors become
positioned line segments, and pictures are embedded as data URIs. Every
element carries ``data-*`` attributes (name, shape id, relationship id,
connector geometry) so a client can map it back to the source shape.

A second tool rewrites the styling of chart parts produced by HTML-to-PPTX
generators (series borders, gap width, gridlines, tick marks, legend
position and rounded corners).

Examples
--------
Convert a presentation:

    >>> from pptx2html import convert_pptx
    >>> html = convert_pptx("deck.pptx")  # doctest: +SKIP

Convert one slide from raw XML parts:

    >>> from pptx2html import convert_slide_xml
    >>> html = convert_slide_xml(slide_xml, theme_xml=theme_xml)  # doctest: +SKIP

Fix generated charts in an extracted package:

    >>> from pptx2html import fix_chart_styling
    >>> fix_chart_styling("extracted/ppt").to_dict()  # doctest: +SKIP
    {'success': True, 'chartsFixed': 2, 'totalCharts': 2}

"""

from pptx2html.chart_fixer import ChartFixResult, fix_chart_styling, fix_chart_xml
from pptx2html.charts import detect_chart_type, render_chart
from pptx2html.colors import ColorContext
from pptx2html.converter import convert_pptx
from pptx2html.exceptions import (
    ChartFixError,
    FileError,
    MalformedFileError,
    ParsingError,
    Pptx2HtmlError,
    RenderingError,
    ValidationError,
)
from pptx2html.options import ChartFixOptions, RenderOptions
from pptx2html.slides import SlideConverter, SlideParts, convert_slide_xml

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Conversion
    "convert_pptx",
    "convert_slide_xml",
    "SlideConverter",
    "SlideParts",
    "ColorContext",
    "render_chart",
    "detect_chart_type",
    # Chart fixing
    "fix_chart_styling",
    "fix_chart_xml",
    "ChartFixResult",
    # Options
    "RenderOptions",
    "ChartFixOptions",
    # Exceptions
    "Pptx2HtmlError",
    "ValidationError",
    "FileError",
    "MalformedFileError",
    "ParsingError",
    "RenderingError",
    "ChartFixError",
]
