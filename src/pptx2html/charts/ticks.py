#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/charts/ticks.py
"""Value-axis tick generation for bar and area charts.

Explicit axis settings (``c:min``, ``c:max``, ``c:majorUnit``) always win.
Otherwise bounds come from the data and the step is a "nice" number: one of
1, 2, 2.5, 5 or 10 times a power of ten, so that roughly ``desired`` intervals
cover the range.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from pptx2html.charts.common import AxisConfig
from pptx2html.constants import (
    DEFAULT_DESIRED_TICKS,
    DEFAULT_INTEGER_STEP_THRESHOLD,
    INTEGER_STEP_MAX_RANGE,
    INTEGER_STEP_MAX_TICKS,
    INTEGER_STEP_MIN_TICKS,
    MAX_TICK_ITERATIONS,
    SIGNIFICANT_DECIMAL,
)
from pptx2html.units import format_number, js_round

logger = logging.getLogger(__name__)

_PERCENT_DECIMALS = re.compile(r"0\.(0+)%")
_FIXED_FORMAT = re.compile(r"^0(\.0+)?$")


@dataclass(frozen=True)
class TickInfo:
    """Axis bounds and tick values for one render."""

    min: float
    max: float
    step: float
    ticks: tuple[float, ...]
    span: float
    format_code: str = "General"


@dataclass(frozen=True)
class StepPreference:
    prefer_integer: bool
    suggested_step: float
    reason: str


def nice_step(raw_step: float) -> float:
    """Round ``raw_step`` up to 1, 2, 2.5, 5 or 10 times a power of ten.

    Examples
    --------
    >>> nice_step(0.2)
    0.2
    >>> nice_step(3.7)
    5.0

    """
    if not math.isfinite(raw_step) or raw_step <= 0:
        return 1.0
    power = 10 ** math.floor(math.log10(raw_step))
    fraction = raw_step / power
    for candidate in (1, 2, 2.5, 5):
        if fraction <= candidate:
            return float(Decimal(str(candidate)) * Decimal(str(power)))
    return float(Decimal(10) * Decimal(str(power)))


def decimals_for(step: float) -> int:
    """Number of decimal places needed to print multiples of ``step``."""
    if float(step).is_integer():
        return 0
    exponent = Decimal(repr(float(step))).normalize().as_tuple().exponent
    return max(0, -int(exponent))


def detect_step_preference(
    values: Sequence[float],
    calculated_step: float,
    value_range: float,
    threshold: float = DEFAULT_INTEGER_STEP_THRESHOLD,
) -> StepPreference:
    """Decide whether an integer step reads better than ``calculated_step``.

    Integer steps are preferred for small ranges when fewer than
    ``threshold`` of the values carry a significant fractional part, provided
    the integer step still yields a reasonable number of ticks.
    """
    if not values or float(calculated_step).is_integer():
        return StepPreference(False, calculated_step, "step is already integral")

    decimal_values = sum(1 for v in values if abs(v - js_round(v)) > SIGNIFICANT_DECIMAL)
    share = decimal_values / len(values)

    if value_range <= INTEGER_STEP_MAX_RANGE and share < threshold:
        integer_step = max(1, js_round(calculated_step))
        tick_count = math.ceil(value_range / integer_step) + 1
        if INTEGER_STEP_MIN_TICKS <= tick_count <= INTEGER_STEP_MAX_TICKS:
            return StepPreference(
                True,
                float(integer_step),
                f"{share:.0%} of values are decimal, integer step gives {tick_count} ticks",
            )
    return StepPreference(False, calculated_step, f"{share:.0%} of values are decimal")


def _auto_bounds(axis: AxisConfig | None, data_min: float, data_max: float, padding: float) -> tuple[float, float]:
    explicit_min = axis.min if axis is not None else None
    explicit_max = axis.max if axis is not None else None

    if explicit_min is not None:
        low = explicit_min
    elif axis is not None and axis.crosses == "autoZero" and data_min > 0:
        low = 0.0
    else:
        low = data_min
    high = explicit_max if explicit_max is not None else data_max
    if high < low:
        low, high = high, low

    if low == high:
        if high > 0:
            low = 0.0
        elif high < 0:
            high = 0.0
        else:
            high = 1.0

    if padding > 0:
        extent = high - low
        if explicit_min is None:
            low -= extent * padding
            if data_min >= 0 and low < 0:
                low = 0.0
        if explicit_max is None:
            high += extent * padding
    return low, high


def compute_value_ticks(
    axis: AxisConfig | None,
    data_min: float,
    data_max: float,
    desired: int = DEFAULT_DESIRED_TICKS,
    values: Sequence[float] = (),
    padding: float = 0.0,
    integer_step_threshold: float = DEFAULT_INTEGER_STEP_THRESHOLD,
) -> TickInfo:
    """Compute axis bounds, step and tick values.

    Parameters
    ----------
    axis : AxisConfig or None
        Value axis settings; None when the chart has no ``c:valAx``.
    data_min, data_max : float
        Extremes of the plotted data.
    desired : int, default 10
        Target number of intervals for the automatic step.
    values : Sequence[float], optional
        All plotted values, used to prefer integer steps for integer data.
    padding : float, default 0.0
        Fraction of the range added above and below automatic bounds.
    integer_step_threshold : float, default 0.5
        See :func:`detect_step_preference`.

    Returns
    -------
    TickInfo
        At least two finite ticks; the first is at or below the data minimum
        and the last at or above the data maximum.

    """
    if not (math.isfinite(data_min) and math.isfinite(data_max)):
        data_min, data_max = 0.0, 0.0
    if data_min > data_max:
        data_min, data_max = data_max, data_min

    low, high = _auto_bounds(axis, data_min, data_max, padding)
    explicit_min = axis is not None and axis.min is not None
    explicit_max = axis is not None and axis.max is not None

    major_unit = axis.major_unit if axis is not None else None
    if major_unit is not None and major_unit > 0:
        step = float(major_unit)
    else:
        step = nice_step((high - low) / max(1, desired))
        preference = detect_step_preference(values, step, high - low, integer_step_threshold)
        if preference.prefer_integer:
            logger.debug("Using integer tick step %s: %s", preference.suggested_step, preference.reason)
            step = preference.suggested_step

    if (high - low) / step > MAX_TICK_ITERATIONS - 1:
        logger.debug("Tick step %s too small for range %s, recomputing", step, high - low)
        step = nice_step((high - low) / (MAX_TICK_ITERATIONS - 1))

    decimals = decimals_for(step)
    # Float-noise tolerance; never larger than the data itself
    tolerance = min(step, abs(high)) * 1e-9
    start = round(math.floor(low / step) * step, decimals)
    if not explicit_max:
        rounded = math.ceil((high - tolerance) / step) * step
        high = rounded if rounded >= high else rounded + step
    if start > low:
        start = round(start - step, decimals)

    ticks: list[float] = []
    for index in range(MAX_TICK_ITERATIONS):
        value = start + index * step
        if value > high + tolerance:
            break
        ticks.append(round(value, decimals))
    if not ticks or ticks[-1] < high - tolerance:
        ticks.append(round(start + len(ticks) * step, decimals))
    if len(ticks) < 2:
        ticks.append(round(ticks[0] + step, decimals))

    minimum = ticks[0] if not explicit_min else min(low, ticks[0])
    maximum = max(high, ticks[-1])
    span = (maximum - minimum) or step
    return TickInfo(
        min=minimum,
        max=maximum,
        step=step,
        ticks=tuple(ticks),
        span=span,
        format_code=axis.format_code if axis is not None else "General",
    )


def format_tick(value: float, format_code: str = "General", step: float = 1.0) -> str:
    """Format a tick label the way the axis number format would.

    Percent formats multiply by 100 and keep the format's decimals, ``0``
    and ``0.00``-style formats fix the decimals, anything else prints with
    as many decimals as the step needs.
    """
    if "%" in format_code or "percent" in format_code.lower():
        percent = value * 100
        match = _PERCENT_DECIMALS.search(format_code)
        if match:
            decimals = len(match.group(1))
        elif "." in format_code:
            decimals = format_code.split(".", 1)[1].count("0")
        else:
            decimals = 0
        if decimals == 0:
            return f"{js_round(percent)}%"
        return f"{format_number(percent, decimals)}%"

    if _FIXED_FORMAT.match(format_code):
        decimals = len(format_code.split(".", 1)[1]) if "." in format_code else 0
        return f"{value:.{decimals}f}"
    return format_number(value, decimals_for(step) or 10)
