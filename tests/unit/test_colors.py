#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_colors.py
"""Tests for DrawingML color resolution."""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import parse_fragment

from pptx2html.colors import (
    ColorContext,
    ColorModifiers,
    ResolvedColor,
    apply_color_modifiers,
    apply_lum_mod,
    apply_luminance,
    hex_to_rgb,
    normalize_hex,
    resolve_color,
    rgb_to_hex,
)


@pytest.mark.unit
class TestBaseColors:
    """Test each color choice element."""

    @given(st.from_regex(r"[0-9a-fA-F]{6}", fullmatch=True))
    def test_srgb_keeps_its_digits(self, value: str) -> None:
        """Test any six-digit srgbClr resolves to its value as written."""
        node = parse_fragment(f'<a:solidFill><a:srgbClr val="{value}"/></a:solidFill>')
        resolved = resolve_color(node, ColorContext())
        assert resolved.hex == f"#{value}"
        assert resolved.alpha == 1.0

    def test_lowercase_srgb(self, fragment) -> None:
        """Test lowercase digits pass through unmodified and modifiers still apply."""
        plain = fragment('<a:solidFill><a:srgbClr val="aabbcc"/></a:solidFill>')
        assert resolve_color(plain, ColorContext()).hex == "#aabbcc"
        shaded = fragment('<a:solidFill><a:srgbClr val="ff0000"><a:shade val="50000"/></a:srgbClr></a:solidFill>')
        assert resolve_color(shaded, ColorContext()).hex == "#800000"

    def test_scheme_color_from_theme(self, fragment, ctx) -> None:
        """Test accent slots come from the theme palette."""
        node = fragment('<a:solidFill><a:schemeClr val="accent1"/></a:solidFill>')
        resolved = resolve_color(node, ctx)
        assert resolved.hex == "#4472C4"
        assert resolved.scheme == "accent1"

    def test_scheme_alias_through_color_map(self, fragment, ctx) -> None:
        """Test bg1 and tx1 go through the color map to lt1 and dk1."""
        assert resolve_color(fragment('<a:schemeClr val="bg1"/>'), ctx).hex == "#FFFFFF"
        assert resolve_color(fragment('<a:schemeClr val="tx1"/>'), ctx).hex == "#000000"

    def test_master_color_map_overrides(self, fragment, theme) -> None:
        """Test a master clrMap that swaps the background to dark."""
        master = fragment('<p:sldMaster><p:clrMap bg1="dk1" tx1="lt1"/></p:sldMaster>')
        ctx = ColorContext.from_parts(theme=theme, master=master)
        assert resolve_color(fragment('<a:schemeClr val="bg1"/>'), ctx).hex == "#000000"

    def test_scheme_without_theme_is_black(self, fragment, empty_ctx) -> None:
        """Test a missing theme falls back to black."""
        assert resolve_color(fragment('<a:schemeClr val="accent2"/>'), empty_ctx).hex == "#000000"

    def test_placeholder_color(self, fragment, ctx) -> None:
        """Test phClr takes the referencing style's color."""
        node = fragment('<a:schemeClr val="phClr"/>')
        assert resolve_color(node, ctx, placeholder_color="#ED7D31").hex == "#ED7D31"
        assert resolve_color(node, ctx).hex == "#000000"

    @pytest.mark.parametrize("name,expected", [("red", "#FF0000"), ("White", "#FFFFFF"), ("notAColor", "#000000")])
    def test_preset_colors(self, fragment, empty_ctx, name, expected) -> None:
        """Test named preset colors with the black fallback."""
        assert resolve_color(fragment(f'<a:prstClr val="{name}"/>'), empty_ctx).hex == expected

    def test_system_color(self, fragment, empty_ctx) -> None:
        """Test sysClr prefers lastClr, then the known system names."""
        assert resolve_color(fragment('<a:sysClr val="window" lastClr="EEEEEE"/>'), empty_ctx).hex == "#EEEEEE"
        assert resolve_color(fragment('<a:sysClr val="window"/>'), empty_ctx).hex == "#FFFFFF"

    def test_hsl_and_scrgb(self, fragment, empty_ctx) -> None:
        """Test the HSL and linear RGB forms."""
        hsl = fragment('<a:hslClr hue="0" sat="100000" lum="50000"/>')
        scrgb = fragment('<a:scrgbClr r="100000" g="0" b="0"/>')
        assert resolve_color(hsl, empty_ctx).hex == "#FF0000"
        assert resolve_color(scrgb, empty_ctx).hex == "#FF0000"

    def test_no_color_is_black(self, fragment, ctx) -> None:
        """Test a parent without a color choice."""
        assert resolve_color(fragment("<a:solidFill/>"), ctx) == ResolvedColor()
        assert resolve_color(None, ctx).hex == "#000000"


@pytest.mark.unit
class TestModifiers:
    """Test modifier math and ordering."""

    def test_luminance_runs_before_tint(self) -> None:
        """Test lumMod is applied before tint regardless of element order."""
        combined = apply_color_modifiers("#FF0000", ColorModifiers(lum_mod=50000, tint=50000))
        assert combined == "#C08080"

        tint_first = apply_color_modifiers("#FF0000", ColorModifiers(tint=50000))
        reversed_order = apply_luminance(tint_first, 50000, None)
        assert reversed_order != combined

    def test_modifier_order_ignores_document_order(self, fragment, empty_ctx) -> None:
        """Test tint written before lumMod still resolves lumMod first."""
        node = fragment('<a:srgbClr val="FF0000"><a:tint val="50000"/><a:lumMod val="50000"/></a:srgbClr>')
        assert resolve_color(node, empty_ctx).hex == "#C08080"

    def test_shade(self) -> None:
        """Test shade scales channels toward black."""
        assert apply_color_modifiers("#FF0000", ColorModifiers(shade=50000)) == "#800000"

    def test_lum_off_brightens(self) -> None:
        """Test lumOff raises lightness and clamps at white."""
        assert apply_luminance("#000000", None, 100000) == "#FFFFFF"

    def test_alpha_to_rgba(self, fragment, ctx) -> None:
        """Test alpha becomes an rgba() CSS value."""
        node = fragment('<a:schemeClr val="accent1"><a:alpha val="50000"/></a:schemeClr>')
        resolved = resolve_color(node, ctx)
        assert resolved.alpha == 0.5
        assert resolved.css() == "rgba(68, 114, 196, 0.5)"

    def test_opaque_css_is_hex(self) -> None:
        """Test an opaque color prints as hex."""
        assert ResolvedColor(hex="#123456").css() == "#123456"

    def test_no_modifiers_is_identity(self) -> None:
        """Test an empty modifier set leaves the color alone."""
        assert apply_color_modifiers("#4472C4", ColorModifiers()) == "#4472C4"

    def test_plain_lum_mod_scales_channels(self) -> None:
        """Test the RGB lumMod used by shape fills."""
        assert apply_lum_mod("#808080", 50000) == "#404040"
        assert apply_color_modifiers("#8040C0", ColorModifiers(lum_mod=50000), rgb_lum_mod=True) == "#402060"

    def test_rgb_lum_mod_needs_lum_mod_alone(self) -> None:
        """Test a lumOff next to lumMod keeps the HSL path."""
        modifiers = ColorModifiers(lum_mod=50000, lum_off=100000)
        assert apply_color_modifiers("#000000", modifiers, rgb_lum_mod=True) == "#FFFFFF"


@pytest.mark.unit
class TestHexHelpers:
    """Test hex parsing helpers."""

    def test_normalize_hex(self) -> None:
        """Test normalization with a fallback."""
        assert normalize_hex("abcdef") == "#ABCDEF"
        assert normalize_hex("#abcdef") == "#ABCDEF"
        assert normalize_hex("xyz") == "#000000"
        assert normalize_hex(None, "#FFFFFF") == "#FFFFFF"

    @given(st.tuples(*(st.integers(min_value=0, max_value=255),) * 3))
    def test_hex_round_trip(self, rgb) -> None:
        """Test integer channels survive hex conversion."""
        assert hex_to_rgb(rgb_to_hex(*rgb)) == rgb
