#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/shapes/__init__.py
"""Shape rendering: preset geometry, custom paths, hexagons and shape text."""

from pptx2html.shapes.presets import PRESET_SHAPES, PresetShape, lookup_preset
from pptx2html.shapes.renderer import render_shape

__all__ = ["PRESET_SHAPES", "PresetShape", "lookup_preset", "render_shape"]
