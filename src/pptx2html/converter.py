#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/converter.py
"""Presentation-level conversion built on python-pptx.

python-pptx opens the package and resolves relationships; every part the
renderers need (slide, layout, master, theme, charts and images) is then
taken as raw XML or bytes and handed to :class:`~pptx2html.slides.SlideConverter`.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Union

from pptx2html.colors import ColorContext
from pptx2html.constants import DEFAULT_SLIDE_HEIGHT_EMU, DEFAULT_SLIDE_WIDTH_EMU, EMU_PER_PX
from pptx2html.exceptions import FileError, MalformedFileError, ParsingError, RenderingError
from pptx2html.options import RenderOptions
from pptx2html.slides import SlideConverter, SlideParts
from pptx2html.utils.html_utils import error_placeholder, escape_html
from pptx2html.utils.images import encode_data_uri
from pptx2html.xmltree import XmlNode, parse_xml

if TYPE_CHECKING:
    from pptx.opc.package import Part
    from pptx.presentation import Presentation

logger = logging.getLogger(__name__)

PptxInput = Union[str, Path, IO[bytes], bytes]

_DOCUMENT_CSS = (
    "body { margin: 0; padding: 20px; background: #F0F0F0; font-family: Calibri, Arial, sans-serif; }\n"
    ".slide { margin: 0 auto 20px auto; box-shadow: 0 2px 8px rgba(0, 0, 0, 0.2); }\n"
    ".render-error, .chart-error { color: #A00; font-size: 11px; border: 1px dashed #A00; box-sizing: border-box; }"
)


def open_presentation(source: PptxInput) -> "Presentation":
    """Open a PPTX package from a path, a binary stream or raw bytes.

    Raises
    ------
    FileError
        If a path is given that does not exist or cannot be read.
    MalformedFileError
        If python-pptx cannot open the package.

    """
    from pptx import Presentation

    file_path = None
    if isinstance(source, (str, Path)):
        file_path = str(source)
        if not Path(source).is_file():
            raise FileError(f"File not found: {source}", file_path=file_path)
        source = file_path
    elif isinstance(source, bytes):
        source = io.BytesIO(source)

    try:
        return Presentation(source)
    except OSError as e:
        raise FileError(f"Could not read presentation: {e}", file_path=file_path, original_error=e) from e
    except Exception as e:
        raise MalformedFileError(
            f"Failed to open PPTX presentation: {e!r}", file_path=file_path, original_error=e
        ) from e


def _related_part(part: "Part", reltype: str) -> "Part | None":
    for rel in part.rels.values():
        if not rel.is_external and rel.reltype == reltype:
            return rel.target_part
    return None


def _xml(part: "Part | None") -> XmlNode | None:
    if part is None:
        return None
    try:
        return parse_xml(part.blob)
    except MalformedFileError as e:
        raise ParsingError(
            f"Could not parse {part.partname}: {e}", part_name=str(part.partname), original_error=e
        ) from e


def _image_uris(part: "Part", options: RenderOptions) -> dict[str, str]:
    """Data URIs for every image related to ``part``, keyed by relationship id."""
    from pptx.opc.constants import RELATIONSHIP_TYPE as RT

    if not options.embed_images:
        return {}
    uris = {}
    for rel_id, rel in part.rels.items():
        if rel.is_external or rel.reltype != RT.IMAGE:
            continue
        image = rel.target_part
        blob = image.blob
        if len(blob) > options.max_image_bytes:
            logger.warning(
                "Image %s is %d bytes, over the %d byte limit; not embedded",
                image.partname,
                len(blob),
                options.max_image_bytes,
            )
            continue
        uris[rel_id] = encode_data_uri(blob, getattr(image, "content_type", None))
    return uris


def _chart_parts(part: "Part") -> dict[str, bytes]:
    from pptx.opc.constants import RELATIONSHIP_TYPE as RT

    return {
        rel_id: rel.target_part.blob
        for rel_id, rel in part.rels.items()
        if not rel.is_external and rel.reltype == RT.CHART
    }


def slide_size(prs: "Presentation") -> tuple[float, float]:
    """Slide width and height in px; python-pptx reports None for a missing ``p:sldSz``."""
    width = prs.slide_width if prs.slide_width is not None else DEFAULT_SLIDE_WIDTH_EMU
    height = prs.slide_height if prs.slide_height is not None else DEFAULT_SLIDE_HEIGHT_EMU
    return int(width) / EMU_PER_PX, int(height) / EMU_PER_PX


def convert_slide(slide: Any, number: int, size: tuple[float, float], options: RenderOptions) -> str:
    """Convert one python-pptx slide, resolving its layout, master and theme."""
    from pptx.opc.constants import RELATIONSHIP_TYPE as RT

    layout_part = slide.slide_layout.part
    master_part = slide.slide_layout.slide_master.part
    ctx = ColorContext.from_parts(
        theme=_xml(_related_part(master_part, RT.THEME)),
        master=_xml(master_part),
        layout=_xml(layout_part),
    )
    parts = SlideParts(
        charts=_chart_parts(slide.part),
        images=_image_uris(slide.part, options),
        layout_images=_image_uris(layout_part, options),
        master_images=_image_uris(master_part, options),
    )
    return SlideConverter(ctx, options, parts).convert(_xml(slide.part), size[0], size[1], number)


def presentation_slides(prs: "Presentation", options: RenderOptions | None = None) -> list[str]:
    """Render every slide of an open presentation.

    A slide whose parts cannot be read is replaced by an empty slide holding
    the error placeholder; the remaining slides are still converted.
    """
    options = options or RenderOptions()
    size = slide_size(prs)
    html = []
    for number, slide in enumerate(prs.slides, start=1):
        logger.debug("Converting slide %d", number)
        try:
            html.append(convert_slide(slide, number, size, options))
        except (ParsingError, RenderingError, KeyError) as e:
            logger.warning("Slide %d could not be converted: %s", number, e)
            html.append(
                f'<div class="slide" id="slide-{number}" style="position: relative; '
                f'width: {size[0]:g}px; height: {size[1]:g}px;">{error_placeholder(str(e), f"Slide {number}")}</div>'
            )
    return html


def html_document(slides: list[str], title: str = "Presentation") -> str:
    """Wrap rendered slides in a standalone HTML document."""
    body = "\n".join(slides)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{escape_html(title)}</title>\n<style>\n{_DOCUMENT_CSS}\n</style>\n</head>\n"
        f'<body>\n<div class="presentation">\n{body}\n</div>\n</body>\n</html>\n'
    )


def document_title(prs: "Presentation", source: PptxInput) -> str:
    title = prs.core_properties.title
    if title:
        return title
    if isinstance(source, (str, Path)):
        return Path(source).stem
    return "Presentation"


def convert_pptx(source: PptxInput, options: RenderOptions | None = None) -> str:
    """Convert a PPTX presentation into one HTML document.

    Parameters
    ----------
    source : str, Path, IO[bytes] or bytes
        Path to a ``.pptx`` file, a binary stream, or the raw package bytes.
    options : RenderOptions, optional
        Rendering options.

    Returns
    -------
    str
        A standalone HTML document with one ``div.slide`` per slide, sized
        from the presentation's slide size.

    Raises
    ------
    FileError
        If the file cannot be found or read.
    MalformedFileError
        If the package cannot be opened as a presentation.

    """
    prs = open_presentation(source)
    slides = presentation_slides(prs, options)
    logger.info("Converted %d slide%s", len(slides), "" if len(slides) == 1 else "s")
    return html_document(slides, document_title(prs, source))
