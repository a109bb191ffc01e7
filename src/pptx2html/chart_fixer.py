#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/chart_fixer.py
"""Post-process generated chart XML to fix known styling defects.

Chart parts written by HTML-to-PPTX generators tend to carry borders around
every bar, a default gap width, dark gridlines and tick marks, a right-hand
legend and rounded corners. The fixes below rewrite those settings in place.
They operate on the parsed tree, so attribute order or whitespace in the
source never causes a missed or partial match.

Every fix is idempotent: running the fixer on its own output reports no
fixes and returns the text unchanged.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterator

from pptx2html.constants import (
    CHART_FILE_PATTERN,
    FIX_BAR_CHART_TAGS,
    FIX_BORDER_CHILDREN,
    FIX_DARK_AXIS_COLOR,
    FIX_GAP_WIDTH_FROM,
    FIX_LEGEND_POSITION_FROM,
    FIX_LINE_WIDTH_FROM,
    FIX_OVERLAP_FROM,
)
from pptx2html.exceptions import ChartFixError, MalformedFileError
from pptx2html.options import ChartFixOptions
from pptx2html.xmltree import XmlNode, attr, element, parse_xml

logger = logging.getLogger(__name__)

_CHART_FILE = re.compile(CHART_FILE_PATTERN)

Fix = Callable[[XmlNode, ChartFixOptions], int]


@dataclass(frozen=True)
class ChartFixResult:
    """Outcome of fixing every chart in a slide XML directory."""

    success: bool
    charts_fixed: int = 0
    total_charts: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {"success": True, "chartsFixed": self.charts_fixed, "totalCharts": self.total_charts}


def _strip_border(line: XmlNode) -> None:
    """Turn an ``a:ln`` into a borderless ``noFill`` line."""
    line.attrs.pop("w", None)
    line.replace_children(element("a:noFill"), element("a:round"))


def _srgb(line: XmlNode) -> str | None:
    return attr(line, "a:solidFill/a:srgbClr", "val")


def _is_generated_border(line: XmlNode | None) -> bool:
    """Match the flat-capped solid RGB outline generators write around bars."""
    if line is None or line.get("w") is None or line.get("cap") != "flat":
        return False
    if tuple(child.tag for child in line.children) != FIX_BORDER_CHILDREN:
        return False
    return _srgb(line) is not None and attr(line, "a:prstDash", "val") == "solid"


def _series_lines(root: XmlNode) -> Iterator[XmlNode]:
    """Yield the outline of every bar series and its data points."""
    for tag in FIX_BAR_CHART_TAGS:
        for plot in root.iter(tag):
            for ser in plot.all("c:ser"):
                for owner in [ser, *ser.all("c:dPt")]:
                    line = owner.find("c:spPr/a:ln")
                    if line is not None:
                        yield line


def fix_series_borders(root: XmlNode, options: ChartFixOptions) -> int:
    """Remove generated solid outlines from bar series and data points."""
    count = 0
    for line in _series_lines(root):
        if _is_generated_border(line):
            _strip_border(line)
            count += 1
    return count


def fix_light_borders(root: XmlNode, options: ChartFixOptions) -> int:
    """Remove generated near-white outlines (``F?????``) anywhere in the chart."""
    count = 0
    for line in root.iter("a:ln"):
        if _is_generated_border(line) and (_srgb(line) or "").upper().startswith("F"):
            _strip_border(line)
            count += 1
    return count


def _replace_values(root: XmlNode, tag: str, old: str, new: str) -> int:
    count = 0
    for node in root.iter(tag):
        if node.get("val") == old and old != new:
            node.attrs["val"] = new
            count += 1
    return count


def fix_gap_width(root: XmlNode, options: ChartFixOptions) -> int:
    return _replace_values(root, "c:gapWidth", FIX_GAP_WIDTH_FROM, options.gap_width)


def fix_overlap(root: XmlNode, options: ChartFixOptions) -> int:
    return _replace_values(root, "c:overlap", FIX_OVERLAP_FROM, options.overlap)


def fix_gridlines(root: XmlNode, options: ChartFixOptions) -> int:
    """Lighten major gridlines and thin them from 1pt to 0.75pt."""
    count = 0
    for grid in root.iter("c:majorGridlines"):
        line = grid.find("c:spPr/a:ln")
        if line is None:
            continue
        srgb = line.find("a:solidFill/a:srgbClr")
        if srgb is not None and (srgb.get("val") or "").upper() != options.grid_color.upper():
            srgb.attrs["val"] = options.grid_color
            count += 1
        if line.get("w") == FIX_LINE_WIDTH_FROM:
            line.attrs["w"] = options.line_width
            count += 1
    return count


def fix_axis_lines(root: XmlNode, options: ChartFixOptions) -> int:
    """Replace dark grey lines and thin category/value axis lines."""
    count = _replace_values(root, "a:srgbClr", FIX_DARK_AXIS_COLOR, options.grid_color)
    for tag in ("c:catAx", "c:valAx"):
        for axis in root.iter(tag):
            line = axis.find("c:spPr/a:ln")
            if line is not None and line.get("w") == FIX_LINE_WIDTH_FROM:
                line.attrs["w"] = options.line_width
                count += 1
    return count


def fix_tick_marks(root: XmlNode, options: ChartFixOptions) -> int:
    return _replace_values(root, "c:majorTickMark", "out", "none")


def fix_legend_position(root: XmlNode, options: ChartFixOptions) -> int:
    return _replace_values(root, "c:legendPos", FIX_LEGEND_POSITION_FROM, options.legend_position)


def fix_rounded_corners(root: XmlNode, options: ChartFixOptions) -> int:
    """Force square corners, adding ``c:roundedCorners`` when it is missing."""
    existing = list(root.iter("c:roundedCorners"))
    if existing:
        return _replace_values(root, "c:roundedCorners", "1", "0")

    corners = element("c:roundedCorners", {"val": "0"})
    anchor = root.first("c:lang") or root.first("c:date1904")
    if anchor is not None:
        root.insert_after(anchor, corners)
    else:
        root.insert(0, corners)
    return 1


# Applied in this order; later fixes see the output of earlier ones
FIXES: tuple[tuple[str, Fix], ...] = (
    ("Removed series borders", fix_series_borders),
    ("Removed light-colored borders", fix_light_borders),
    ("Fixed bar gap width", fix_gap_width),
    ("Fixed bar overlap", fix_overlap),
    ("Fixed gridline color and width", fix_gridlines),
    ("Fixed axis line colors and widths", fix_axis_lines),
    ("Removed tick marks", fix_tick_marks),
    ("Fixed legend position", fix_legend_position),
    ("Fixed rounded corners", fix_rounded_corners),
)


def fix_chart_xml(text: str | bytes, options: ChartFixOptions | None = None) -> tuple[str, list[str]]:
    """Apply the styling fixes to one chart part.

    Parameters
    ----------
    text : str or bytes
        Serialized chart XML (``chartN.xml``).
    options : ChartFixOptions, optional
        Target values; defaults are used when omitted.

    Returns
    -------
    tuple[str, list[str]]
        The fixed XML and a description of each fix that changed something.
        When nothing changed the input text is returned as is.

    Raises
    ------
    MalformedFileError
        If ``text`` is not well-formed XML.

    """
    options = options or ChartFixOptions()
    root = parse_xml(text)
    applied = []
    for description, fix in FIXES:
        changes = fix(root, options)
        if changes:
            logger.info("%s (%d change%s)", description, changes, "" if changes == 1 else "s")
            applied.append(description)
    if not applied:
        return (text.decode("utf-8") if isinstance(text, bytes) else text), []
    return root.to_xml(), applied


def fix_chart_file(path: Path, options: ChartFixOptions | None = None) -> bool:
    """Fix one chart file in place; returns True when it was rewritten.

    The whole file is read and transformed before anything is written.
    """
    try:
        original = path.read_text(encoding="utf-8")
        fixed, applied = fix_chart_xml(original, options)
        if not applied or fixed == original:
            logger.debug("No styling issues found in %s", path.name)
            return False
        path.write_text(fixed, encoding="utf-8")
    except (OSError, MalformedFileError) as e:
        raise ChartFixError(f"Error fixing {path.name}: {e}", chart_path=str(path), original_error=e) from e
    logger.info("Fixed chart styling in %s", path.name)
    return True


def fix_chart_styling(slide_xml_dir: str | Path, options: ChartFixOptions | None = None) -> ChartFixResult:
    """Fix every ``charts/chartN.xml`` under an extracted slide XML directory.

    Files that cannot be read, parsed or written are logged and skipped; the
    result still counts the charts that were fixed.
    """
    charts_dir = Path(slide_xml_dir) / "charts"
    if not charts_dir.is_dir():
        logger.info("No charts directory found in %s", slide_xml_dir)
        return ChartFixResult(success=True)
    try:
        chart_files = sorted(p for p in charts_dir.iterdir() if _CHART_FILE.match(p.name))
    except OSError as e:
        logger.error("Error in fix_chart_styling: %s", e)
        return ChartFixResult(success=False, error=str(e))

    if not chart_files:
        logger.info("No chart XML files found in %s", charts_dir)
        return ChartFixResult(success=True)

    fixed = 0
    for chart_file in chart_files:
        logger.debug("Processing %s", chart_file.name)
        try:
            if fix_chart_file(chart_file, options):
                fixed += 1
        except ChartFixError as e:
            logger.error(str(e))
    return ChartFixResult(success=True, charts_fixed=fixed, total_charts=len(chart_files))
