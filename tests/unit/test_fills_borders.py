#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_fills_borders.py
"""Tests for shape fill and outline resolution."""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import THEME_XML, parse_fragment, sp_xml

from pptx2html.borders import StrokeStyle, shape_border, stroke_properties
from pptx2html.colors import ColorContext
from pptx2html.fills import FillStyle, parse_gradient, reproduce_fill_color, shape_fill
from pptx2html.xmltree import parse_xml

OFFICE_CTX = ColorContext.from_parts(theme=parse_xml(THEME_XML))

RED_FILL = '<a:solidFill><a:srgbClr val="FF0000"/></a:solidFill>'


def line(width: int | None = 12700, body: str = RED_FILL, extra: str = "") -> str:
    w = f' w="{width}"' if width is not None else ""
    return f"<a:ln{w}{extra}>{body}</a:ln>"


@pytest.mark.unit
class TestShapeFill:
    """Test fill resolution of shapes."""

    def test_solid_scheme_fill_keeps_theme_linkage(self, fragment, ctx) -> None:
        """Test a modified scheme fill records its original values."""
        shape = fragment(
            sp_xml(body='<a:solidFill><a:schemeClr val="accent1"><a:lumMod val="75000"/></a:schemeClr></a:solidFill>')
        )
        fill = shape_fill(shape, ctx)
        assert fill.original_theme_color == "accent1"
        assert fill.original_lum_mod == "75000"
        assert fill.original_lum_off == ""
        assert fill.fill_color.startswith("#")
        assert fill.fill_color != "#4472C4"
        assert reproduce_fill_color(fill, ctx) == fill.fill_color

    def test_lum_mod_alone_scales_rgb(self, fragment, ctx) -> None:
        """Test a fill with lumMod and no lumOff darkens each channel."""
        body = '<a:solidFill><a:srgbClr val="8040C0"><a:lumMod val="50000"/></a:srgbClr></a:solidFill>'
        fill = shape_fill(fragment(sp_xml(body=body)), ctx)
        assert fill.fill_color == "#402060"
        assert reproduce_fill_color(fill, ctx) == "#402060"

    def test_srgb_fill_with_alpha(self, fragment, ctx) -> None:
        """Test a literal fill with transparency."""
        body = '<a:solidFill><a:srgbClr val="00FF00"><a:alpha val="25000"/></a:srgbClr></a:solidFill>'
        shape = fragment(sp_xml(body=body))
        fill = shape_fill(shape, ctx)
        assert fill.fill_color == "#00FF00"
        assert fill.opacity == 0.25
        assert fill.original_alpha == "25000"

    def test_no_fill_is_transparent(self, fragment, ctx) -> None:
        """Test noFill wins over a style reference."""
        style = '<p:style><a:fillRef idx="1"><a:schemeClr val="accent2"/></a:fillRef></p:style>'
        fill = shape_fill(fragment(sp_xml(body="<a:noFill/>", style=style)), ctx)
        assert fill.fill_color == "transparent"

    def test_style_fill_reference(self, fragment, ctx) -> None:
        """Test a shape without a fill takes its style's fillRef color."""
        style = '<p:style><a:fillRef idx="1"><a:schemeClr val="accent2"/></a:fillRef></p:style>'
        fill = shape_fill(fragment(sp_xml(style=style)), ctx)
        assert fill.fill_color == "#ED7D31"

    def test_nothing_specified(self, fragment, ctx) -> None:
        """Test the transparent default."""
        assert shape_fill(fragment(sp_xml()), ctx) == FillStyle()

    def test_linear_gradient_sorted_stops(self, fragment, ctx) -> None:
        """Test stops are sorted and the angle mapped to CSS."""
        shape = fragment(
            sp_xml(
                body='<a:gradFill><a:gsLst><a:gs pos="100000"><a:srgbClr val="0000FF"/></a:gs>'
                '<a:gs pos="0"><a:srgbClr val="FF0000"/></a:gs></a:gsLst><a:lin ang="0"/></a:gradFill>'
            )
        )
        fill = shape_fill(shape, ctx)
        assert fill.gradient is not None
        assert fill.fill_color == "linear-gradient(90deg, rgba(255, 0, 0, 1) 0%, rgba(0, 0, 255, 1) 100%)"
        assert reproduce_fill_color(fill, ctx) == fill.fill_color

    def test_radial_gradient(self, fragment, ctx) -> None:
        """Test a circular path gradient centered on the shape."""
        grad = fragment(
            '<a:gradFill><a:gsLst><a:gs pos="0"><a:srgbClr val="FFFFFF"/></a:gs>'
            '<a:gs pos="100000"><a:srgbClr val="000000"/></a:gs></a:gsLst>'
            '<a:path path="circle"><a:fillToRect l="50000" t="50000" r="50000" b="50000"/></a:path></a:gradFill>'
        )
        gradient = parse_gradient(grad, ctx)
        assert gradient.kind == "radial"
        assert gradient.css().startswith("radial-gradient(circle at center, ")

    def test_flipped_linear_gradient(self, fragment, ctx) -> None:
        """Test a horizontal flip mirrors the CSS angle."""
        grad = fragment(
            '<a:gradFill flip="x"><a:gsLst><a:gs pos="0"><a:srgbClr val="FFFFFF"/></a:gs></a:gsLst>'
            '<a:lin ang="2700000"/></a:gradFill>'
        )
        assert parse_gradient(grad, ctx).angle == 45

    def test_stroke_color(self, fragment, ctx) -> None:
        """Test the line paint is recorded with the fill."""
        fill = shape_fill(fragment(sp_xml(body=line())), ctx)
        assert fill.stroke_color == "#FF0000"

    @given(
        st.sampled_from(["accent1", "accent2", "accent3", "accent4", "accent5", "accent6", "tx1", "bg2"]),
        st.integers(min_value=0, max_value=100000),
        st.integers(min_value=0, max_value=100000),
    )
    def test_fill_color_reproducible(self, scheme: str, lum_mod: int, lum_off: int) -> None:
        """Test the resolved fill can always be re-derived from its original values."""
        shape = parse_fragment(
            sp_xml(
                body=f'<a:solidFill><a:schemeClr val="{scheme}"><a:lumMod val="{lum_mod}"/>'
                f'<a:lumOff val="{lum_off}"/></a:schemeClr></a:solidFill>'
            )
        )
        fill = shape_fill(shape, OFFICE_CTX)
        assert reproduce_fill_color(fill, OFFICE_CTX) == fill.fill_color


@pytest.mark.unit
class TestShapeBorder:
    """Test CSS borders."""

    def test_solid_border(self, fragment, ctx) -> None:
        """Test a 1pt red outline."""
        border = shape_border(fragment(sp_xml(body=line())), ctx)
        assert border.border == "1.00px solid #FF0000"
        assert border.width == 1.0

    @pytest.mark.parametrize("width", [0, 1000, 3000])
    def test_hairlines_are_dropped(self, fragment, ctx, width) -> None:
        """Test outlines at or under 3000 EMU are not drawn."""
        assert shape_border(fragment(sp_xml(body=line(width))), ctx).border == "none"

    def test_no_fill_line(self, fragment, ctx) -> None:
        """Test a noFill outline."""
        assert shape_border(fragment(sp_xml(body=line(body="<a:noFill/>"))), ctx).border == "none"

    @pytest.mark.parametrize(
        "dash,style", [("dash", "dashed"), ("dot", "dotted"), ("sysDot", "dotted"), ("lgDashDot", "dashed")]
    )
    def test_dash_styles(self, fragment, ctx, dash, style) -> None:
        """Test preset dashes map to CSS border styles."""
        shape = fragment(sp_xml(body=line(25400, RED_FILL + f'<a:prstDash val="{dash}"/>')))
        assert shape_border(shape, ctx).border == f"2.00px {style} #FF0000"

    def test_double_compound_line(self, fragment, ctx) -> None:
        """Test a double compound line."""
        shape = fragment(sp_xml(body=line(25400, extra=' cmpd="dbl"')))
        assert shape_border(shape, ctx).style == "double"

    def test_theme_line_reference(self, fragment, ctx) -> None:
        """Test lnRef pulls the theme line style and substitutes phClr."""
        style = '<p:style><a:lnRef idx="2"><a:schemeClr val="accent1"/></a:lnRef></p:style>'
        border = shape_border(fragment(sp_xml(style=style)), ctx)
        assert border.border == "1.00px solid #4472C4"

    def test_own_line_overrides_theme_line(self, fragment, ctx) -> None:
        """Test the shape's own line attributes win over the theme's."""
        style = '<p:style><a:lnRef idx="1"><a:schemeClr val="accent1"/></a:lnRef></p:style>'
        shape = fragment(sp_xml(body='<a:ln w="38100"/>', style=style))
        assert shape_border(shape, ctx).border == "3.00px solid #4472C4"


@pytest.mark.unit
class TestStrokeProperties:
    """Test SVG strokes."""

    def test_full_stroke(self, fragment, ctx) -> None:
        """Test width, dash, cap and opacity together."""
        body = line(
            25400,
            '<a:solidFill><a:srgbClr val="FF0000"><a:alpha val="50000"/></a:srgbClr></a:solidFill>'
            '<a:prstDash val="sysDash"/>',
            extra=' cap="rnd"',
        )
        stroke = stroke_properties(fragment(sp_xml(body=body)), ctx)
        assert stroke == StrokeStyle(color="#FF0000", width=2.0, dash_array="3, 3", line_cap="round", opacity=0.5)
        assert stroke.svg_attrs() == (
            'stroke="#FF0000" stroke-width="2" stroke-dasharray="3, 3" '
            'stroke-linecap="round" stroke-opacity="0.5"'
        )

    def test_no_line(self, fragment, ctx) -> None:
        """Test a shape without any outline."""
        assert stroke_properties(fragment(sp_xml()), ctx) == StrokeStyle()

    def test_reference_width_table(self, fragment, empty_ctx) -> None:
        """Test lnRef widths when the theme has no line styles."""
        style = '<p:style><a:lnRef idx="3"><a:srgbClr val="123456"/></a:lnRef></p:style>'
        stroke = stroke_properties(fragment(sp_xml(style=style)), empty_ctx)
        assert stroke.width == 3.0
        assert stroke.color == "#123456"
