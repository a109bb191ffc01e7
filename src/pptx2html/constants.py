#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/constants.py
"""Constants and default values for the pptx2html library.

This module centralizes the lookup tables, magic numbers and default
configuration values used across the rendering pipeline. Keeping them in one
place makes the (large) DrawingML mapping tables easy to audit and extend.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Units - EMU, angle and percentage scales
3. Colors - preset colors, scheme defaults and chart palettes
4. Lines and Fills - dash tables, caps, pattern fills
5. Charts - tick generation and chart rendering defaults
6. Shapes and Connectors - hexagon lighting, marker sizes
7. Text and Fonts - theme font references and CSS fallback stacks
8. Chart Styling Fixer - target values for generated chart XML
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

ChartType = Literal["bar", "doughnut", "pie", "line", "area", "scatter", "unknown"]
AreaGrouping = Literal["standard", "stacked", "percentStacked"]
LegendPosition = Literal["right", "left", "top", "bottom"]
ConnectorKind = Literal["straight", "bent", "curved"]
GradientKind = Literal["linear", "radial", "rectangular", "path"]
LightDirection = Literal["t", "tr", "r", "br", "b", "bl", "l", "tl"]
LineEndType = Literal["none", "triangle", "arrow", "stealth", "oval", "diamond"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Units
# =============================================================================

# 12700 EMU per CSS pixel (EMU per point, rendered 1pt -> 1px)
EMU_PER_PX = 12700

# DrawingML angles are expressed in 60000ths of a degree
ANGLE_UNITS_PER_DEGREE = 60000

# Percentages, alpha and color modifiers are expressed in 1/1000ths of a percent
PERCENT_SCALE = 100000

# Fallback extent for shapes without an a:ext node
DEFAULT_EXTENT_EMU = 100

# Chart frames without a transform render at this size
DEFAULT_CHART_WIDTH_PX = 400
DEFAULT_CHART_HEIGHT_PX = 300

# Slide size fallback (16:9, 13.333in x 7.5in)
DEFAULT_SLIDE_WIDTH_EMU = 12192000
DEFAULT_SLIDE_HEIGHT_EMU = 6858000

# =============================================================================
# Colors
# =============================================================================

FALLBACK_COLOR = "#000000"
TRANSPARENT = "transparent"

PRESET_COLORS: dict[str, str] = {
    "white": "#FFFFFF",
    "black": "#000000",
    "red": "#FF0000",
    "blue": "#0000FF",
    "green": "#008000",
    "yellow": "#FFFF00",
    "gray": "#808080",
    "orange": "#FFA500",
    "purple": "#800080",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "brown": "#A52A2A",
    "pink": "#FFC0CB",
    "lime": "#00FF00",
    "navy": "#000080",
    "maroon": "#800000",
    "olive": "#808000",
    "silver": "#C0C0C0",
    "teal": "#008080",
}

# Master clrMap defaults when the master omits p:clrMap
DEFAULT_COLOR_MAP: dict[str, str] = {
    "bg1": "lt1",
    "tx1": "dk1",
    "bg2": "lt2",
    "tx2": "dk2",
    "accent1": "accent1",
    "accent2": "accent2",
    "accent3": "accent3",
    "accent4": "accent4",
    "accent5": "accent5",
    "accent6": "accent6",
    "hlink": "hlink",
    "folHlink": "folHlink",
}

# Bar charts: palette by series index, and scheme fallback without a theme
BAR_DEFAULT_COLORS: tuple[str, ...] = (
    "#A5C249",
    "#7CCA62",
    "#10CF9B",
    "#5B9BD5",
    "#70AD47",
    "#FFC000",
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
)
BAR_SCHEME_COLORS: dict[str, str] = {
    "accent1": "#5B9BD5",
    "accent2": "#70AD47",
    "accent3": "#FFC000",
    "accent4": "#10CF9B",
    "accent5": "#7CCA62",
    "accent6": "#A5C249",
}
BAR_SCHEME_FALLBACK = "#5B9BD5"

# Sample dataset rendered when a bar chart carries no series
BAR_FALLBACK_CATEGORIES: tuple[str, ...] = ("Category 1", "Category 2", "Category 3", "Category 4")
BAR_FALLBACK_SERIES: tuple[tuple[str, tuple[float, ...], str], ...] = (
    ("Series 1", (4.3, 2.5, 3.5, 4.5), "#A5C249"),
    ("Series 2", (2.4, 4.4, 1.8, 2.8), "#7CCA62"),
    ("Series 3", (2.0, 2.0, 3.0, 5.0), "#10CF9B"),
)

# Doughnut charts: Office default accent palette
DOUGHNUT_DEFAULT_COLORS: tuple[str, ...] = ("#4472C4", "#ED7D31", "#A5A5A5", "#FFC000", "#5B9BD5", "#70AD47")
DOUGHNUT_SCHEME_COLORS: dict[str, str] = {
    "accent1": "#4472C4",
    "accent2": "#ED7D31",
    "accent3": "#A5A5A5",
    "accent4": "#FFC000",
    "accent5": "#5B9BD5",
    "accent6": "#70AD47",
}
DOUGHNUT_DEFAULT_BORDER_COLOR = "#FFFFFF"
DOUGHNUT_DEFAULT_HOLE = 0.6
DOUGHNUT_MIN_BORDER_ANGLE = 0.5
DOUGHNUT_DEFAULT_WIDTH_EMU = 2000000
DOUGHNUT_DEFAULT_HEIGHT_EMU = 1500000

# Area charts
AREA_AXIS_COLOR = "#8F9298"
AREA_GRID_COLOR = "#DFDFDF"
AREA_PADDING = 0.05

# =============================================================================
# Lines and Fills
# =============================================================================

# SVG stroke-dasharray per a:prstDash value
STROKE_DASH_ARRAYS: dict[str, str] = {
    "solid": "",
    "dash": "5, 5",
    "dot": "2, 5",
    "dashDot": "5, 5, 2, 5",
    "lgDash": "10, 5",
    "lgDashDot": "10, 5, 2, 5",
    "lgDashDotDot": "10, 5, 2, 5, 2, 5",
    "sysDash": "3, 3",
    "sysDot": "1, 3",
    "sysDashDot": "3, 3, 1, 3",
    "sysDashDotDot": "3, 3, 1, 3, 1, 3",
}

# Dash pattern segments (on, off, ...) in multiples of the stroke width
DASH_SEGMENTS: dict[str, tuple[float, ...]] = {
    "solid": (),
    "dash": (4.0, 3.0),
    "dot": (1.0, 3.0),
    "dashDot": (4.0, 3.0, 1.0, 3.0),
    "lgDash": (8.0, 3.0),
    "lgDashDot": (8.0, 3.0, 1.0, 3.0),
    "lgDashDotDot": (8.0, 3.0, 1.0, 3.0, 1.0, 3.0),
    "sysDash": (3.0, 1.0),
    "sysDot": (1.0, 1.0),
    "sysDashDot": (3.0, 1.0, 1.0, 1.0),
    "sysDashDotDot": (3.0, 1.0, 1.0, 1.0, 1.0, 1.0),
}

LINE_CAPS: dict[str, str] = {"rnd": "round", "sq": "square", "flat": "butt"}

# p:style/a:lnRef idx -> stroke width in px
LN_REF_WIDTHS: dict[str, float] = {"0": 0.5, "1": 1.0, "2": 2.0, "3": 3.0, "4": 4.5, "5": 6.0}

# Borders at or under this width (EMU) are not drawn
MIN_BORDER_WIDTH_EMU = 3000
MIN_BORDER_WIDTH_PX = 0.2

# Pattern fills: prst -> (kind, parameter); percentages use a dot density
PATTERN_FILLS: dict[str, tuple[str, float]] = {
    "pct5": ("dots", 5),
    "pct10": ("dots", 10),
    "pct20": ("dots", 20),
    "pct25": ("dots", 25),
    "pct30": ("dots", 30),
    "pct40": ("dots", 40),
    "pct50": ("dots", 50),
    "pct60": ("dots", 60),
    "pct70": ("dots", 70),
    "pct75": ("dots", 75),
    "pct80": ("dots", 80),
    "pct90": ("dots", 90),
    "horzStripe": ("stripes", 0),
    "thinHorzStripe": ("thin-stripes", 0),
    "vertStripe": ("stripes", 90),
    "thinVertStripe": ("thin-stripes", 90),
    "diagStripe": ("stripes", 45),
    "thinDiagStripe": ("thin-stripes", 45),
    "zigZag": ("stripes", 135),
    "dkGrid": ("grid", 8),
    "ltGrid": ("grid", 4),
    "smGrid": ("grid", 4),
    "lgGrid": ("grid", 12),
    "dotGrid": ("grid", 6),
    "dkDiagCross": ("cross", 8),
    "ltDiagCross": ("cross", 4),
    "solidCross": ("grid", 8),
}

# =============================================================================
# Charts
# =============================================================================

DEFAULT_DESIRED_TICKS = 10
MAX_TICK_ITERATIONS = 100

# A value is "truly decimal" when its fractional part exceeds this
SIGNIFICANT_DECIMAL = 0.15

# Integer steps are preferred when fewer than this share of values are decimal
DEFAULT_INTEGER_STEP_THRESHOLD = 0.5

# Integer-step override is only considered for ranges up to this size
INTEGER_STEP_MAX_RANGE = 10
INTEGER_STEP_MIN_TICKS = 4
INTEGER_STEP_MAX_TICKS = 15

LEGEND_POSITIONS: dict[str, LegendPosition] = {"r": "right", "l": "left", "t": "top", "b": "bottom"}

# =============================================================================
# Shapes and Connectors
# =============================================================================

DEFAULT_HEXAGON_ADJ = 25000
DEFAULT_HEXAGON_VF = 100000
HEXAGON_ISO_ANGLE_DEGREES = 30
HEXAGON_VIEWBOX_PADDING = 5
HEXAGON_BACK_FACTOR = 0.3
HEXAGON_VISIBLE_FACES: tuple[int, ...] = (0, 1, 5)
HEXAGON_SIDE_LIGHT_FACTORS: dict[str, float] = {
    "t": 0.85,
    "tr": 0.80,
    "br": 0.75,
    "b": 0.80,
    "bl": 0.75,
    "tl": 0.85,
}
HEXAGON_FRONT_GRADIENT_FACTORS: tuple[float, float, float] = (1.15, 1.0, 0.85)

DEFAULT_RIGHT_ARROW_ADJ = 50000
DEFAULT_FRAME_ADJ = 4278
DEFAULT_ROUND_RECT_ADJ = 16667
MIN_CORNER_RADIUS_PX = 5
HOME_PLATE_ARROW_START = 95

DEFAULT_SHAPE_STROKE = "#042433"

# Curved connectors are approximated with at most this many segments
DEFAULT_CURVE_SEGMENTS = 150

# Line-end marker size (multiples of stroke width) for a:headEnd w/len
LINE_END_SIZES: dict[str, float] = {"sm": 2.0, "med": 3.0, "lg": 5.0}
MIN_MARKER_SIZE_PX = 6.0

# =============================================================================
# Text and Fonts
# =============================================================================

# Theme font references: typeface -> (a:fontScheme child, script element)
THEME_FONT_REFERENCES: dict[str, tuple[str, str]] = {
    "+mj-lt": ("a:majorFont", "a:latin"),
    "+mj": ("a:majorFont", "a:latin"),
    "+head": ("a:majorFont", "a:latin"),
    "+mn-lt": ("a:minorFont", "a:latin"),
    "+mn": ("a:minorFont", "a:latin"),
    "+body": ("a:minorFont", "a:latin"),
    "+mj-ea": ("a:majorFont", "a:ea"),
    "+mn-ea": ("a:minorFont", "a:ea"),
    "+mj-cs": ("a:majorFont", "a:cs"),
    "+mn-cs": ("a:minorFont", "a:cs"),
}
DEFAULT_MAJOR_FONT = "Calibri Light"
DEFAULT_MINOR_FONT = "Calibri"

# CSS font stacks for common Office and web fonts
FONT_FALLBACKS: dict[str, str] = {
    "Calibri": "Calibri, Carlito, Helvetica Neue, Helvetica, Arial, sans-serif",
    "Aptos": "Poppins, sans-serif",
    "Cambria": "Cambria, Georgia, Times New Roman, serif",
    "Corbel": "Corbel, Lucida Grande, Lucida Sans Unicode, sans-serif",
    "Candara": "Candara, Optima, Segoe UI, sans-serif",
    "Constantia": "Constantia, Georgia, Times New Roman, serif",
    "Consolas": "Consolas, Courier New, Monaco, monospace",
    "Poppins": "Poppins, -apple-system, BlinkMacSystemFont, Segoe UI, Roboto, sans-serif",
    "Roboto": "Roboto, -apple-system, BlinkMacSystemFont, Segoe UI, Arial, sans-serif",
    "Open Sans": "Open Sans, Helvetica Neue, Helvetica, Arial, sans-serif",
    "Montserrat": "Montserrat, Helvetica Neue, Helvetica, Arial, sans-serif",
    "Lato": "Lato, Helvetica Neue, Helvetica, Arial, sans-serif",
    "Inter": "Inter, -apple-system, BlinkMacSystemFont, Segoe UI, Roboto, sans-serif",
    "Nunito": "Nunito, Segoe UI, Verdana, Arial, sans-serif",
    "Raleway": "Raleway, Helvetica Neue, Helvetica, sans-serif",
    "Source Sans Pro": "Source Sans Pro, Segoe UI, Arial, sans-serif",
    "PT Sans": "PT Sans, Arial, sans-serif",
    "Merriweather": "Merriweather, Georgia, Times New Roman, serif",
    "Playfair Display": "Playfair Display, Georgia, serif",
    "Oswald": "Oswald, Impact, Arial Narrow, sans-serif",
    "Quicksand": "Quicksand, Verdana, Segoe UI, sans-serif",
    "Arial": "Arial, Helvetica, Nimbus Sans L, sans-serif",
    "Arial Black": "Arial Black, Arial Bold, Gadget, sans-serif",
    "Arial Narrow": "Arial Narrow, Arial, sans-serif",
    "Times New Roman": "Times New Roman, Times, Georgia, serif",
    "Helvetica": "Helvetica, Helvetica Neue, Arial, sans-serif",
    "Helvetica Neue": "Helvetica Neue, Helvetica, Arial, sans-serif",
    "Verdana": "Verdana, Geneva, DejaVu Sans, sans-serif",
    "Georgia": "Georgia, Times New Roman, Times, serif",
    "Courier New": "Courier New, Courier, Lucida Sans Typewriter, monospace",
    "Tahoma": "Tahoma, Verdana, Geneva, sans-serif",
    "Trebuchet MS": "Trebuchet MS, Lucida Grande, sans-serif",
    "Impact": "Impact, Arial Black, Helvetica Inserat, sans-serif",
    "Comic Sans MS": "Comic Sans MS, Comic Sans, Chalkboard SE, cursive",
    "Palatino": "Palatino, Palatino Linotype, Book Antiqua, Georgia, serif",
    "Garamond": "Garamond, Times New Roman, serif",
    "Bookman": "Bookman, Bookman Old Style, Georgia, serif",
    "Century Gothic": "Century Gothic, Apple Gothic, sans-serif",
    "Lucida Sans": "Lucida Sans, Lucida Grande, sans-serif",
    "Franklin Gothic": "Franklin Gothic Medium, Franklin Gothic, Arial, sans-serif",
    "Segoe UI": "Segoe UI, -apple-system, BlinkMacSystemFont, Arial, sans-serif",
}

# Fonts outside the table: first keyword found in the lowercased name picks the tail
FONT_KEYWORD_FALLBACKS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("condensed", "narrow"), "Arial Narrow, Helvetica Condensed, Arial, sans-serif"),
    (("light", "thin"), "Helvetica Neue Light, Segoe UI Light, Arial, sans-serif"),
    (("bold", "heavy", "black"), "Arial Black, Helvetica Bold, sans-serif"),
    (("display",), "Impact, Arial Black, sans-serif"),
    (("serif", "times", "garamond", "baskerville", "palatino", "bookman"), "Georgia, Times New Roman, serif"),
    (("mono", "code", "courier", "consolas", "terminal"), "Courier New, Courier, Monaco, monospace"),
    (("script", "handwriting", "brush", "cursive"), "cursive"),
    (("rounded", "round"), "Verdana, Segoe UI, sans-serif"),
)
DEFAULT_FONT_FALLBACK = "-apple-system, BlinkMacSystemFont, Segoe UI, Roboto, Helvetica Neue, Arial, sans-serif"

# Stack entries written without quotes in CSS
CSS_FONT_KEYWORDS = frozenset(
    {"serif", "sans-serif", "monospace", "cursive", "fantasy", "system-ui", "-apple-system", "BlinkMacSystemFont"}
)

# =============================================================================
# Chart Styling Fixer
# =============================================================================

CHART_FILE_PATTERN = r"^chart\d+\.xml$"

FIX_GAP_WIDTH_FROM = "150"
FIX_GAP_WIDTH_TO = "219"
FIX_OVERLAP_FROM = "0"
FIX_OVERLAP_TO = "-27"
FIX_GRID_COLOR = "D9D9D9"
FIX_DARK_AXIS_COLOR = "888888"
FIX_LINE_WIDTH_FROM = "12700"
FIX_LINE_WIDTH_TO = "9525"
FIX_LEGEND_POSITION_FROM = "r"
FIX_LEGEND_POSITION_TO = "b"

# Plot types whose series carry the generated per-bar outline
FIX_BAR_CHART_TAGS = ("c:barChart", "c:bar3DChart", "c:col3DChart")
# Child layout of that outline: solid fill, solid dash, round join
FIX_BORDER_CHILDREN = ("a:solidFill", "a:prstDash", "a:round")
