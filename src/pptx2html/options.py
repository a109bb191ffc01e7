#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/options.py
"""Configuration options for rendering and chart fixing.

Options are immutable dataclasses. Use ``create_updated`` to derive a modified
copy instead of mutating an instance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Self

from pptx2html.constants import (
    DEFAULT_CURVE_SEGMENTS,
    DEFAULT_DESIRED_TICKS,
    DEFAULT_INTEGER_STEP_THRESHOLD,
    FIX_GAP_WIDTH_TO,
    FIX_GRID_COLOR,
    FIX_LEGEND_POSITION_TO,
    FIX_LINE_WIDTH_TO,
    FIX_OVERLAP_TO,
    LEGEND_POSITIONS,
)

DEFAULT_MAX_IMAGE_BYTES = 20 * 1024 * 1024

_HEX_COLOR = re.compile(r"^[0-9A-Fa-f]{6}$")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class RenderOptions(CloneFrozenMixin):
    """Options controlling PPTX to HTML rendering.

    Parameters
    ----------
    desired_ticks : int, default 10
        Target number of value-axis intervals for bar and area charts.
    integer_step_threshold : float, default 0.5
        Share of data values allowed to carry a significant fractional part
        before an integer tick step is no longer preferred over a decimal one.
    curve_segments : int, default 150
        Maximum number of segments used to approximate curved connectors.
    ignore_hexagon_rotation : bool, default True
        Skip the rotation extracted from hexagon shapes when drawing them.
    embed_images : bool, default True
        Embed pictures as base64 data URIs. When False, images are replaced by
        an empty placeholder box.
    include_placeholder_on_error : bool, default True
        Emit a visible "could not render" fragment for shapes that fail.
        When False, failed shapes are dropped silently (a warning is still logged).
    slide_numbers_as_ids : bool, default True
        Give each slide container an ``id="slide-N"`` attribute.
    max_image_bytes : int
        Images larger than this are not embedded.

    """

    desired_ticks: int = field(
        default=DEFAULT_DESIRED_TICKS,
        metadata={"help": "Target number of value-axis intervals for charts", "type": int, "importance": "advanced"},
    )
    integer_step_threshold: float = field(
        default=DEFAULT_INTEGER_STEP_THRESHOLD,
        metadata={
            "help": "Maximum share of decimal data values for which an integer tick step is still preferred",
            "type": float,
            "importance": "advanced",
        },
    )
    curve_segments: int = field(
        default=DEFAULT_CURVE_SEGMENTS,
        metadata={"help": "Maximum segments used for curved connectors", "type": int, "importance": "advanced"},
    )
    ignore_hexagon_rotation: bool = field(
        default=True,
        metadata={"help": "Ignore the rotation of hexagon shapes", "importance": "advanced"},
    )
    embed_images: bool = field(
        default=True,
        metadata={"help": "Embed images as base64 data URIs", "importance": "core"},
    )
    include_placeholder_on_error: bool = field(
        default=True,
        metadata={"help": "Render a placeholder for shapes that fail to convert", "importance": "core"},
    )
    slide_numbers_as_ids: bool = field(
        default=True,
        metadata={"help": "Add slide-N ids to slide containers", "importance": "advanced"},
    )
    max_image_bytes: int = field(
        default=DEFAULT_MAX_IMAGE_BYTES,
        metadata={"help": "Largest image size in bytes that will be embedded", "type": int, "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.desired_ticks < 1:
            raise ValueError(f"desired_ticks must be at least 1, got {self.desired_ticks}")
        if not 0.0 <= self.integer_step_threshold <= 1.0:
            raise ValueError(f"integer_step_threshold must be between 0 and 1, got {self.integer_step_threshold}")
        if self.curve_segments < 2:
            raise ValueError(f"curve_segments must be at least 2, got {self.curve_segments}")
        if self.max_image_bytes <= 0:
            raise ValueError(f"max_image_bytes must be positive, got {self.max_image_bytes}")


@dataclass(frozen=True)
class ChartFixOptions(CloneFrozenMixin):
    """Target values written by the chart styling fixer.

    Parameters
    ----------
    gap_width : str, default "219"
        Replacement for the generator's ``gapWidth`` of 150.
    overlap : str, default "-27"
        Replacement for the generator's ``overlap`` of 0.
    grid_color : str, default "D9D9D9"
        Gridline and axis line color (hex, no ``#``).
    line_width : str, default "9525"
        Gridline and axis line width in EMU.
    legend_position : str, default "b"
        Replacement for a right-hand legend.

    """

    gap_width: str = field(
        default=FIX_GAP_WIDTH_TO,
        metadata={"help": "Bar gap width written in place of 150", "importance": "core"},
    )
    overlap: str = field(
        default=FIX_OVERLAP_TO,
        metadata={"help": "Bar overlap written in place of 0", "importance": "core"},
    )
    grid_color: str = field(
        default=FIX_GRID_COLOR,
        metadata={"help": "Gridline and axis color (hex without #)", "importance": "core"},
    )
    line_width: str = field(
        default=FIX_LINE_WIDTH_TO,
        metadata={"help": "Gridline and axis width in EMU", "importance": "advanced"},
    )
    legend_position: str = field(
        default=FIX_LEGEND_POSITION_TO,
        metadata={"help": "Legend position written in place of 'r'", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate the fixer targets.

        Raises
        ------
        ValueError
            If a color, width or position is not valid chart XML.

        """
        if not _HEX_COLOR.match(self.grid_color):
            raise ValueError(f"grid_color must be six hex digits, got {self.grid_color!r}")
        if self.legend_position not in LEGEND_POSITIONS:
            raise ValueError(f"legend_position must be one of {sorted(LEGEND_POSITIONS)}, got {self.legend_position!r}")
        for name in ("gap_width", "overlap", "line_width"):
            value = getattr(self, name)
            try:
                int(value)
            except ValueError as exc:
                raise ValueError(f"{name} must be an integer string, got {value!r}") from exc
