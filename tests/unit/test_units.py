#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_units.py
"""Tests for unit conversion and shape placement."""
import math

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import sp_xml, xfrm

from pptx2html.units import (
    GroupTransform,
    Position,
    angle_to_degrees,
    emu_to_px,
    format_number,
    group_transform,
    js_round,
    parse_float,
    percent_from_thousandths,
    shape_position,
    transform_css,
)


@pytest.mark.unit
class TestNumberParsing:
    """Test lenient number parsing and formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("12.5px", 12.5),
            ("-3", -3.0),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("abc", 0.0),
            (None, 0.0),
            (float("nan"), 0.0),
            (float("inf"), 0.0),
            (7, 7.0),
        ],
    )
    def test_parse_float(self, value, expected) -> None:
        """Test leading-number parsing with the default fallback."""
        assert parse_float(value) == expected

    def test_parse_float_custom_default(self) -> None:
        """Test the caller's default is used for unparseable input."""
        assert parse_float("", 42.0) == 42.0

    @pytest.mark.parametrize("value,expected", [(2.5, 3), (-2.5, -2), (2.4999, 2), (0.5, 1)])
    def test_js_round_half_up(self, value, expected) -> None:
        """Test rounding half toward positive infinity."""
        assert js_round(value) == expected

    @pytest.mark.parametrize(
        "value,expected", [(3.0, "3"), (2.50, "2.5"), (-0.0, "0"), (1 / 3, "0.3333"), (float("nan"), "0")]
    )
    def test_format_number(self, value, expected) -> None:
        """Test compact number formatting for CSS."""
        assert format_number(value) == expected


@pytest.mark.unit
class TestEmuConversion:
    """Test EMU and angle conversions."""

    @given(st.integers(min_value=0, max_value=10**9))
    def test_emu_to_px_divides_by_12700(self, emu: int) -> None:
        """Test that any non-negative EMU converts by the fixed divisor."""
        assert emu_to_px(emu) == emu / 12700
        assert emu_to_px(str(emu)) == emu / 12700

    def test_missing_value_uses_default(self) -> None:
        """Test that a missing attribute falls back to the default EMU."""
        assert emu_to_px(None) == 0
        assert emu_to_px(None, 100) == 100 / 12700
        assert emu_to_px("garbage", 12700) == 1.0

    def test_angle_units(self) -> None:
        """Test 60000ths of a degree."""
        assert angle_to_degrees("5400000") == 90.0
        assert angle_to_degrees(None) == 0.0

    def test_thousandths_of_a_percent(self) -> None:
        """Test 1000ths of a percent become percentages."""
        assert percent_from_thousandths("50000") == 50.0
        assert percent_from_thousandths(None, 100000) == 100.0


@pytest.mark.unit
class TestShapePosition:
    """Test shape placement."""

    def test_position_from_xfrm(self, fragment) -> None:
        """Test offsets, extents, rotation and flips."""
        shape = fragment(
            sp_xml(transform=xfrm(x=127000, y=254000, cx=1270000, cy=635000, extra=' rot="2700000" flipH="1"'))
        )
        position = shape_position(shape)
        assert (position.x, position.y, position.width, position.height) == (10, 20, 100, 50)
        assert position.rotation == 45.0
        assert position.flip_h is True
        assert position.flip_v is False

    def test_missing_extent_is_clamped(self, fragment) -> None:
        """Test that the 100 EMU default extent is clamped to 1px."""
        shape = fragment(sp_xml(transform='<a:xfrm><a:off x="0" y="0"/></a:xfrm>'))
        position = shape_position(shape)
        assert position.width == 1
        assert position.height == 1

    def test_placeholder_position_from_layout(self, fragment) -> None:
        """Test that a placeholder without a transform inherits from the layout."""
        shape = fragment(
            '<p:sp><p:nvSpPr><p:cNvPr id="2" name="Title"/><p:cNvSpPr/><p:nvPr><p:ph type="title"/></p:nvPr>'
            "</p:nvSpPr><p:spPr/></p:sp>"
        )
        layout = fragment(
            '<p:sldLayout><p:cSld><p:spTree><p:sp><p:nvSpPr><p:cNvPr id="2" name="Title"/><p:cNvSpPr/>'
            '<p:nvPr><p:ph type="title"/></p:nvPr></p:nvSpPr><p:spPr>'
            '<a:xfrm><a:off x="1270000" y="635000"/><a:ext cx="2540000" cy="1270000"/></a:xfrm>'
            "</p:spPr></p:sp></p:spTree></p:cSld></p:sldLayout>"
        )
        position = shape_position(shape, layout=layout)
        assert (position.x, position.y, position.width, position.height) == (100, 50, 200, 100)

    def test_no_transform_anywhere(self, fragment) -> None:
        """Test the 1x1 placement when nothing can be found."""
        shape = fragment('<p:sp><p:nvSpPr><p:cNvPr id="2" name="x"/><p:cNvSpPr/><p:nvPr/></p:nvSpPr></p:sp>')
        assert shape_position(shape) == Position()


@pytest.mark.unit
class TestTransforms:
    """Test CSS transforms and group mapping."""

    def test_transform_css_order(self) -> None:
        """Test flips come before rotation."""
        position = Position(width=10, height=10, rotation=30, flip_h=True, flip_v=True)
        assert transform_css(position) == "scaleX(-1) scaleY(-1) rotate(30deg)"

    def test_text_box_skips_flips(self) -> None:
        """Test text boxes keep readable text."""
        position = Position(width=10, height=10, rotation=0, flip_h=True)
        assert transform_css(position, text_box=True) == "none"

    def test_group_transform_scales_children(self, fragment) -> None:
        """Test chOff/chExt mapping into the group's frame."""
        group = fragment(
            "<p:grpSp><p:grpSpPr><a:xfrm>"
            '<a:off x="1270000" y="1270000"/><a:ext cx="2540000" cy="2540000"/>'
            '<a:chOff x="0" y="0"/><a:chExt cx="1270000" cy="1270000"/>'
            "</a:xfrm></p:grpSpPr></p:grpSp>"
        )
        mapping = group_transform(group)
        assert mapping.scale_x == 2.0
        placed = mapping.apply(Position(x=10, y=5, width=20, height=10))
        assert (placed.x, placed.y, placed.width, placed.height) == (120, 110, 40, 20)

    def test_identity_group(self) -> None:
        """Test the default mapping leaves positions alone."""
        position = Position(x=3, y=4, width=5, height=6)
        assert GroupTransform().apply(position) == position

    @given(st.floats(min_value=-360, max_value=360, allow_nan=False))
    def test_rotation_always_finite(self, degrees: float) -> None:
        """Test any rotation formats to a finite CSS value."""
        css = transform_css(Position(rotation=degrees))
        assert css == "none" or "rotate(" in css
        assert not math.isnan(float(format_number(degrees)))
