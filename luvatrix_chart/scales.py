from __future__ import annotations

import bisect
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import logging
import math
from typing import Any

import numpy as np

from luvatrix_chart.errors import ChartDataError


LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_TICKS = 10
CONSTANT_RANGE_RATIO = 0.05

NICE_FRACTIONS = (1.0, 2.0, 5.0, 10.0)
_ROUNDING_CUTS = (1.5, 3.0, 7.0)


@dataclass(frozen=True)
class NiceScale:
    min: float
    max: float
    tick_size: float
    ticks: tuple[float, ...]

    @property
    def span(self) -> float:
        return self.max - self.min


def nice_scale(min_value: float, max_value: float, max_ticks: int = DEFAULT_MAX_TICKS) -> NiceScale:
    """Round ``[min_value, max_value]`` out to human-friendly bounds and ticks.

    The returned range always encloses the input range and ``ticks`` run in
    ascending order from ``min`` to ``max`` in steps of ``tick_size``.
    """

    if not (math.isfinite(min_value) and math.isfinite(max_value)):
        raise ChartDataError(f"scale bounds must be finite, got [{min_value}, {max_value}]")
    if min_value > max_value:
        min_value, max_value = max_value, min_value
    if min_value == max_value:
        delta = max(1.0, abs(min_value) * CONSTANT_RANGE_RATIO)
        LOGGER.debug("constant range at %s; widening by %s", min_value, delta)
        return nice_scale(min_value - delta, max_value + delta, max_ticks)

    span = nice_number(max_value - min_value, round_result=False)
    step = nice_number(span / max(max_ticks - 1, 1), round_result=True)
    first = math.floor(min_value / step)
    last = math.ceil(max_value / step)

    ticks = (first + np.arange(last - first + 1, dtype=np.float64)) * step
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return NiceScale(
        min=float(ticks[0]),
        max=float(ticks[-1]),
        tick_size=float(step),
        ticks=tuple(float(t) for t in ticks),
    )


def nice_number(value: float, *, round_result: bool) -> float:
    """Snap a positive value onto 1, 2, 5 or 10 times a power of ten.

    With ``round_result`` the nearest candidate wins; otherwise the smallest
    candidate that is not below ``value``.
    """

    if not (value > 0 and math.isfinite(value)):
        raise ChartDataError(f"nice numbers need a positive finite value, got {value}")
    magnitude = 10.0 ** math.floor(math.log10(value))
    fraction = value / magnitude
    if round_result:
        index = bisect.bisect_right(_ROUNDING_CUTS, fraction)
    else:
        index = bisect.bisect_left(NICE_FRACTIONS, fraction)
    return NICE_FRACTIONS[min(index, len(NICE_FRACTIONS) - 1)] * magnitude


def closest_decimal(value: float) -> float:
    """Round to the nearest multiple of the value's leading power of ten."""

    if value == 0:
        return 0.0
    magnitude = 10 ** math.floor(math.log10(abs(value)))
    return float(_round_half_away(value / magnitude) * magnitude)


def ratio_to_max(value: float, max_value: float) -> float:
    """``value / max_value``; a zero maximum gives 0.0 instead of raising."""

    if max_value == 0:
        return 0.0
    return value / max_value


def format_value(value: Any, rounding: int = 0, suffix: str = "", prefix: str = "") -> Any:
    """Fixed-decimal label text; non-numeric input is returned unchanged."""

    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, np.integer, np.floating)):
        return value
    if isinstance(value, (float, np.floating)) and not np.isfinite(value):
        return value
    quant = Decimal("1").scaleb(-max(0, int(rounding)))
    try:
        q = Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return value
    out = format(q, "f")
    if out.startswith("-") and Decimal(out) == 0:
        out = out[1:]
    return f"{prefix}{out}{suffix}"


def format_ticks_for_axis(scale: NiceScale) -> list[str]:
    """Label every tick of ``scale`` with the decimals its tick size needs."""

    decimals = tick_decimals(scale.tick_size)
    return [format_value(tick, decimals) for tick in scale.ticks]


def tick_decimals(step: float) -> int:
    if not (step > 0 and math.isfinite(step)):
        return 0
    # Nice steps are 1/2/5 x 10^k, so the leading digit sets the precision.
    return max(0, -math.floor(math.log10(step) + 1e-9))


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)
