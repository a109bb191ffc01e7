#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/slides.py
"""Slide orchestration.

A :class:`SlideConverter` walks a slide's shape tree in document order and
hands every child to the renderer for its kind. Document order is stacking
order, so each rendered element gets the next z-index. A child that fails to
render is logged and replaced by the "could not render" placeholder; it
never aborts the rest of the slide.

Decorative shapes on the master and layout (anything that is not a
placeholder) are drawn underneath the slide's own shapes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from pptx2html.backgrounds import slide_background
from pptx2html.charts import render_chart
from pptx2html.colors import ColorContext
from pptx2html.connectors import render_connector
from pptx2html.constants import DEFAULT_SLIDE_HEIGHT_EMU, DEFAULT_SLIDE_WIDTH_EMU, EMU_PER_PX
from pptx2html.exceptions import RenderingError
from pptx2html.images import picture_rel_id, render_picture
from pptx2html.options import RenderOptions
from pptx2html.shapes import render_shape
from pptx2html.tables import render_table, table_node
from pptx2html.units import (
    GroupTransform,
    format_number,
    group_transform,
    non_visual_props,
    placeholder,
    shape_position,
)
from pptx2html.utils.html_utils import error_placeholder, style_attr
from pptx2html.xmltree import XmlNode, attr, element, parse_xml

logger = logging.getLogger(__name__)

ChartSource = XmlNode | str | bytes


@dataclass(frozen=True)
class SlideParts:
    """Related parts of one slide, keyed by relationship id.

    Parameters
    ----------
    charts : Mapping[str, XmlNode | str | bytes]
        Chart parts referenced from the slide's graphic frames.
    images : Mapping[str, str]
        Image URLs (usually data URIs) for the slide's relationships.
    layout_images, master_images : Mapping[str, str]
        Image URLs for the layout's and master's own relationships.

    """

    charts: Mapping[str, ChartSource] = field(default_factory=dict)
    images: Mapping[str, str] = field(default_factory=dict)
    layout_images: Mapping[str, str] = field(default_factory=dict)
    master_images: Mapping[str, str] = field(default_factory=dict)

    def images_for(self, source: str) -> Mapping[str, str]:
        if source == "layout":
            return self.layout_images
        if source == "master":
            return self.master_images
        return self.images


def compose_groups(outer: GroupTransform | None, inner: GroupTransform) -> GroupTransform:
    """Combine a nested group's mapping with its parent's into one mapping."""
    if outer is None:
        return inner
    return GroupTransform(
        off_x=outer.off_x + (inner.off_x - outer.child_off_x) * outer.scale_x,
        off_y=outer.off_y + (inner.off_y - outer.child_off_y) * outer.scale_y,
        child_off_x=inner.child_off_x,
        child_off_y=inner.child_off_y,
        scale_x=inner.scale_x * outer.scale_x,
        scale_y=inner.scale_y * outer.scale_y,
    )


def shape_tree(part: XmlNode | None) -> XmlNode | None:
    if part is None:
        return None
    return part.find("p:cSld/p:spTree")


class SlideConverter:
    """Render the shapes and background of slides sharing one theme context.

    Parameters
    ----------
    ctx : ColorContext
        Theme palette, color map and the master and layout parts.
    options : RenderOptions, optional
        Rendering options.
    parts : SlideParts, optional
        Charts and images reachable from the slide.

    """

    def __init__(
        self,
        ctx: ColorContext,
        options: RenderOptions | None = None,
        parts: SlideParts | None = None,
    ):
        self.ctx = ctx
        self.options = options or RenderOptions()
        self.parts = parts or SlideParts()
        self._z_index = 0
        self._source = "slide"
        self._number: int | None = None

    def _next_z(self) -> int:
        self._z_index += 1
        return self._z_index

    def _id_scope(self) -> str:
        """Prefix keeping SVG ids unique across slides and source parts."""
        return self._source if self._number is None else f"s{self._number}-{self._source}"

    def render_element(self, node: XmlNode, group: GroupTransform | None = None) -> str:
        """Render one child of a shape tree; groups render their children inline."""
        local = node.local
        if local == "grpSp":
            mapping = compose_groups(group, group_transform(node))
            return "".join(self.render_tree(node, mapping))
        if local == "sp":
            return render_shape(node, self.ctx, self.options, self._next_z(), group, self._id_scope())
        if local == "cxnSp":
            return render_connector(node, self.ctx, self._next_z(), group, self.options.curve_segments)
        if local == "pic":
            return self._render_picture(node, group)
        if local == "graphicFrame":
            return self._render_graphic_frame(node, group)
        return ""

    def _render_picture(self, pic: XmlNode, group: GroupTransform | None) -> str:
        src = None
        if self.options.embed_images:
            rel_id = picture_rel_id(pic)
            src = self.parts.images_for(self._source).get(rel_id) if rel_id else None
            if rel_id and src is None:
                logger.debug("Picture relationship %s has no image data", rel_id)
        return render_picture(pic, src, self.ctx, self._next_z(), group)

    def _render_graphic_frame(self, frame: XmlNode, group: GroupTransform | None) -> str:
        chart_rel = attr(frame, "a:graphic/a:graphicData/c:chart", "r:id")
        if chart_rel is not None:
            chart_xml = self.parts.charts.get(chart_rel)
            if chart_xml is None:
                logger.warning("Chart part %s referenced by the slide was not found", chart_rel)
                chart_xml = element("c:chartSpace")
            return render_chart(frame, chart_xml, self.ctx, self.options, self._next_z(), group)
        if table_node(frame) is not None:
            return render_table(frame, self.ctx, self._next_z(), group)
        uri = attr(frame, "a:graphic/a:graphicData", "uri")
        logger.debug("Skipping graphic frame with unsupported content %s", uri)
        return ""

    def _failure(self, node: XmlNode, group: GroupTransform | None, error: Exception) -> str:
        nv = non_visual_props(node)
        c_nv_pr = nv.first("p:cNvPr") if nv is not None else None
        name = c_nv_pr.get("name", "") if c_nv_pr is not None else ""
        logger.warning("Could not render %s %r: %s", node.local, name, error)
        if not self.options.include_placeholder_on_error:
            return ""
        position = shape_position(node, self.ctx.master, self.ctx.layout)
        if group is not None:
            position = group.apply(position)
        return error_placeholder(str(error), name, position.css() + f" z-index: {self._next_z()};")

    def render_tree(
        self,
        tree: XmlNode | None,
        group: GroupTransform | None = None,
        skip_placeholders: bool = False,
    ) -> list[str]:
        """Render the children of a ``p:spTree`` or ``p:grpSp`` in document order."""
        if tree is None:
            return []
        fragments = []
        for child in tree.children:
            if skip_placeholders and placeholder(child) is not None:
                continue
            try:
                fragments.append(self.render_element(child, group))
            except Exception as e:
                fragments.append(self._failure(child, group, e))
        return fragments

    def render_decorations(self, slide: XmlNode) -> str:
        """Non-placeholder shapes inherited from the master and layout."""
        layout = self.ctx.layout
        show_master = slide.get("showMasterSp") != "0" and (layout is None or layout.get("showMasterSp") != "0")
        show_layout = slide.get("showMasterSp") != "0"
        html = []
        for source, part, shown in (("master", self.ctx.master, show_master), ("layout", layout, show_layout)):
            if not shown:
                continue
            self._source = source
            try:
                fragments = self.render_tree(shape_tree(part), skip_placeholders=True)
            finally:
                self._source = "slide"
            if any(fragments):
                html.append(f'<div class="sli-{source}">{"".join(fragments)}</div>')
        return "".join(html)

    def convert(
        self,
        slide: XmlNode,
        width: float = DEFAULT_SLIDE_WIDTH_EMU / EMU_PER_PX,
        height: float = DEFAULT_SLIDE_HEIGHT_EMU / EMU_PER_PX,
        number: int | None = None,
    ) -> str:
        """Render a whole slide as a ``div.slide``.

        Parameters
        ----------
        slide : XmlNode
            The ``p:sld`` root.
        width, height : float
            Slide size in px.
        number : int, optional
            1-based slide number, used for the container id.

        Returns
        -------
        str
            The slide container with its background and every shape.

        Raises
        ------
        RenderingError
            If ``slide`` is not a slide part.

        """
        if slide.local != "sld":
            raise RenderingError(f"Expected a slide part, got {slide.tag}")
        self._z_index = 0
        self._number = number
        resolvers = {source: self.parts.images_for(source).get for source in ("slide", "layout", "master")}
        background = slide_background(slide, self.ctx.layout, self.ctx.master, self.ctx, resolvers)
        logger.debug("Slide %s background from %s", number, background.source)

        decorations = self.render_decorations(slide)
        shapes = "".join(self.render_tree(shape_tree(slide)))
        style = style_attr(
            [
                ("position", "relative"),
                ("width", f"{format_number(width, 2)}px"),
                ("height", f"{format_number(height, 2)}px"),
                ("overflow", "hidden"),
            ]
        )
        slide_id = f' id="slide-{number}"' if number is not None and self.options.slide_numbers_as_ids else ""
        return f'<div class="slide"{slide_id} style="{style} {background.style()}">{decorations}{shapes}</div>'


def _tree(source: XmlNode | str | bytes | None) -> XmlNode | None:
    if source is None or isinstance(source, XmlNode):
        return source
    return parse_xml(source)


def convert_slide_xml(
    slide_xml: XmlNode | str | bytes,
    theme_xml: XmlNode | str | bytes | None = None,
    master_xml: XmlNode | str | bytes | None = None,
    layout_xml: XmlNode | str | bytes | None = None,
    charts: Mapping[str, ChartSource] | None = None,
    images: Mapping[str, str] | None = None,
    options: RenderOptions | None = None,
    width: float = DEFAULT_SLIDE_WIDTH_EMU / EMU_PER_PX,
    height: float = DEFAULT_SLIDE_HEIGHT_EMU / EMU_PER_PX,
    number: int | None = None,
) -> str:
    """Convert one slide from raw XML parts, without opening a package.

    Parameters
    ----------
    slide_xml : XmlNode, str or bytes
        The slide part.
    theme_xml, master_xml, layout_xml : XmlNode, str or bytes, optional
        The theme, slide master and slide layout the slide inherits from.
    charts : Mapping[str, XmlNode | str | bytes], optional
        Chart parts keyed by the slide's relationship ids.
    images : Mapping[str, str], optional
        Image URLs keyed by the slide's relationship ids.
    options : RenderOptions, optional
        Rendering options.
    width, height : float
        Slide size in px.
    number : int, optional
        Slide number for the container id.

    Returns
    -------
    str
        The ``div.slide`` fragment.

    Raises
    ------
    MalformedFileError
        If any of the XML parts is not well-formed.
    RenderingError
        If ``slide_xml`` is not a slide part.

    """
    ctx = ColorContext.from_parts(_tree(theme_xml), _tree(master_xml), _tree(layout_xml))
    parts = SlideParts(charts=dict(charts or {}), images=dict(images or {}))
    return SlideConverter(ctx, options, parts).convert(_tree(slide_xml), width, height, number)
