#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/charts/__init__.py
"""Chart rendering.

``render_chart`` classifies a chart part and hands it to the bar, doughnut
(and pie) or area renderer. Chart types without a renderer, and any failure
while rendering, produce the inline error fragment instead of raising.
"""

from __future__ import annotations

import logging

from pptx2html.charts.area import render_area_chart
from pptx2html.charts.bar import render_bar_chart
from pptx2html.charts.common import chart_frame, detect_chart_type, ensure_tree, error_fragment
from pptx2html.charts.doughnut import render_doughnut_chart
from pptx2html.colors import ColorContext
from pptx2html.constants import DOUGHNUT_DEFAULT_HEIGHT_EMU, DOUGHNUT_DEFAULT_WIDTH_EMU, EMU_PER_PX
from pptx2html.options import RenderOptions
from pptx2html.units import GroupTransform
from pptx2html.xmltree import XmlNode

logger = logging.getLogger(__name__)

__all__ = ["detect_chart_type", "render_chart"]


def render_chart(
    graphic_frame: XmlNode,
    chart_xml: XmlNode | str | bytes,
    ctx: ColorContext,
    options: RenderOptions | None = None,
    z_index: int = 0,
    group: GroupTransform | None = None,
) -> str:
    """Render the chart referenced by a ``p:graphicFrame``.

    Parameters
    ----------
    graphic_frame : XmlNode
        The slide's graphic frame (placement, name, relationship id).
    chart_xml : XmlNode, str or bytes
        The chart part, parsed or raw.
    ctx : ColorContext
        Theme context for scheme colors.
    options : RenderOptions, optional
        Tick and threshold settings.
    z_index : int
        Stacking order on the slide.
    group : GroupTransform, optional
        Mapping into slide space for charts inside a group.

    Returns
    -------
    str
        The chart's HTML, or the error fragment.

    """
    options = options or RenderOptions()
    frame = chart_frame(graphic_frame, z_index, group)
    try:
        tree = ensure_tree(chart_xml)
        kind = detect_chart_type(tree)
        logger.debug("Rendering %s chart %s", kind, frame.name)
        if kind == "bar":
            return render_bar_chart(frame, tree, ctx, options)
        if kind in ("doughnut", "pie"):
            frame = chart_frame(
                graphic_frame,
                z_index,
                group,
                (DOUGHNUT_DEFAULT_WIDTH_EMU / EMU_PER_PX, DOUGHNUT_DEFAULT_HEIGHT_EMU / EMU_PER_PX),
            )
            return render_doughnut_chart(frame, tree, ctx)
        if kind == "area":
            return render_area_chart(frame, tree, ctx, options)
        logger.warning("Unsupported chart type %r in %s", kind, frame.name)
        return error_fragment(f"Unsupported chart type: {kind}", frame)
    except Exception as e:
        logger.warning("Failed to render chart %s: %s", frame.name, e)
        return error_fragment(str(e), frame)
