#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_backgrounds.py
"""Tests for slide background resolution."""
import pytest
from utils import slide_xml

from pptx2html.backgrounds import BackgroundStyle, part_background, pattern_css, slide_background


def solid_bg(hex_value: str, alpha: str = "") -> str:
    return f'<p:bg><p:bgPr><a:solidFill><a:srgbClr val="{hex_value}">{alpha}</a:srgbClr></a:solidFill></p:bgPr></p:bg>'


def part(tag: str, background: str = "") -> str:
    return f"<p:{tag}><p:cSld>{background}<p:spTree/></p:cSld></p:{tag}>"


@pytest.mark.unit
class TestBackgroundInheritance:
    """Test the slide, layout, master fallback chain."""

    def test_slide_background_wins(self, fragment, ctx) -> None:
        """Test a slide's own background is used first."""
        slide = fragment(slide_xml(background=solid_bg("FF0000")))
        layout = fragment(part("sldLayout", solid_bg("00FF00")))
        background = slide_background(slide, layout, None, ctx)
        assert background.css == "#FF0000"
        assert background.source == "slide"
        assert background.style() == "background: #FF0000;"

    def test_layout_then_master(self, fragment, ctx) -> None:
        """Test the layout is consulted before the master."""
        slide = fragment(slide_xml())
        layout = fragment(part("sldLayout", solid_bg("00FF00")))
        master = fragment(part("sldMaster", solid_bg("0000FF")))
        assert slide_background(slide, layout, master, ctx).source == "layout"
        assert slide_background(slide, fragment(part("sldLayout")), master, ctx).css == "#0000FF"

    def test_white_default(self, fragment, ctx) -> None:
        """Test no background anywhere gives white."""
        background = slide_background(fragment(slide_xml()), None, None, ctx)
        assert background == BackgroundStyle()
        assert background.style() == "background: #FFFFFF;"

    def test_transparency(self, fragment, ctx) -> None:
        """Test alpha becomes transparency and an rgba background."""
        slide = fragment(slide_xml(background=solid_bg("FF0000", '<a:alpha val="40000"/>')))
        background = slide_background(slide, None, None, ctx)
        assert background.transparency == 60
        assert background.style() == "background: rgba(255, 0, 0, 0.4);"


@pytest.mark.unit
class TestBackgroundFills:
    """Test the individual background fill kinds."""

    def test_theme_background_reference(self, fragment, ctx) -> None:
        """Test bgRef 1003 selects the third background fill style."""
        slide = fragment(part("sld", '<p:bg><p:bgRef idx="1003"><a:schemeClr val="bg1"/></p:bgRef></p:bg>'))
        assert part_background(slide, ctx).css == "#112233"

    def test_reference_placeholder_color(self, fragment, ctx) -> None:
        """Test phClr in the referenced style takes the bgRef color."""
        slide = fragment(part("sld", '<p:bg><p:bgRef idx="1001"><a:schemeClr val="accent2"/></p:bgRef></p:bg>'))
        assert part_background(slide, ctx).css == "#ED7D31"

    def test_picture_background(self, fragment, ctx) -> None:
        """Test a picture fill resolved through the part's relationships."""
        slide = fragment(
            part("sld", '<p:bg><p:bgPr><a:blipFill><a:blip r:embed="rId5"/><a:stretch><a:fillRect/></a:stretch>'
                 "</a:blipFill></p:bgPr></p:bg>")
        )
        uris = {"rId5": "data:image/png;base64,AAAA"}
        background = slide_background(slide, None, None, ctx, {"slide": uris.get})
        assert background.image_url == "data:image/png;base64,AAAA"
        assert "background-image: url('data:image/png;base64,AAAA')" in background.style()
        assert "background-size: 100% 100%" in background.style()

    def test_unresolvable_picture_falls_through(self, fragment, ctx) -> None:
        """Test a picture without image data falls back to the solid fill."""
        slide = fragment(
            part("sld", '<p:bg><p:bgPr><a:blipFill><a:blip r:embed="rId9"/></a:blipFill>'
                 '<a:solidFill><a:srgbClr val="ABCDEF"/></a:solidFill></p:bgPr></p:bg>')
        )
        assert part_background(slide, ctx).css == "#ABCDEF"

    def test_gradient_background(self, fragment, ctx) -> None:
        """Test a gradient background."""
        slide = fragment(
            part("sld", '<p:bg><p:bgPr><a:gradFill><a:gsLst><a:gs pos="0"><a:srgbClr val="FFFFFF"/></a:gs>'
                 '<a:gs pos="100000"><a:srgbClr val="000000"/></a:gs></a:gsLst><a:lin ang="5400000"/>'
                 "</a:gradFill></p:bgPr></p:bg>")
        )
        assert part_background(slide, ctx).css.startswith("linear-gradient(180deg, ")

    def test_pattern_background(self, fragment, ctx) -> None:
        """Test a pattern takes precedence over the other fills."""
        patt = fragment(
            '<a:pattFill prst="dkGrid"><a:fgClr><a:srgbClr val="FF0000"/></a:fgClr>'
            '<a:bgClr><a:srgbClr val="FFFFFF"/></a:bgClr></a:pattFill>'
        )
        css = pattern_css(patt, ctx)
        assert css.startswith("linear-gradient(#FF0000 1px, transparent 1px) 0 0 / 8px 8px")
        assert css.endswith("#FFFFFF")

    def test_part_without_background(self, fragment, ctx) -> None:
        """Test a part without p:bg."""
        assert part_background(fragment(part("sldMaster")), ctx) is None
        assert part_background(None, ctx) is None
