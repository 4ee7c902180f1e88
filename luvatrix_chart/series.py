from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import math
from typing import Any, Union

import numpy as np

from luvatrix_chart.coerce import coerce_series


@dataclass(frozen=True)
class ZoomWindow:
    """Inclusive ``[start, end]`` index bounds narrowing the visible datapoints."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("ZoomWindow.start must be >= 0")
        if self.end < self.start:
            raise ValueError("ZoomWindow.end must be >= start")

    @classmethod
    def select(cls, a: int, b: int, series_length: int) -> "ZoomWindow":
        """Build a window from two picked indexes, in either order.

        Picking the same index twice resets to the full series.
        """

        if a == b:
            return cls(start=0, end=max(0, series_length - 1))
        lo, hi = (a, b) if a < b else (b, a)
        return cls(start=max(0, int(lo)), end=int(hi))

    def size(self, series_length: int) -> int:
        hi = min(self.end, series_length - 1)
        return max(0, hi - self.start + 1)


@dataclass(frozen=True)
class DataSeries:
    values: tuple[float | None, ...]
    name: str = ""

    @classmethod
    def from_values(cls, values: Any, name: str = "", *, strict: bool = False) -> "DataSeries":
        return cls(values=coerce_series(values, strict=strict), name=name)

    @property
    def length(self) -> int:
        return len(self.values)

    def windowed(self, window: ZoomWindow | None) -> "DataSeries":
        if window is None:
            return self
        return DataSeries(values=self.values[window.start : window.end + 1], name=self.name)


@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float

    @property
    def is_empty(self) -> bool:
        """True for the ``(inf, -inf)`` result of a series with no values."""

        return not (math.isfinite(self.min) and math.isfinite(self.max))


SeriesInput = Union[DataSeries, Mapping[str, Any], Sequence[Any]]


def min_max(
    series: Sequence[SeriesInput],
    window: ZoomWindow | None = None,
    *,
    clamp_zero: bool = True,
) -> ValueRange:
    """Extremes across every series, ignoring gaps.

    The minimum is clamped to ``<= 0`` so a zero baseline is always in range.
    Series without any value give ``ValueRange(inf, -inf)``; check
    ``is_empty`` before building a scale from it.
    """

    flat = _flatten(series, window)
    finite = flat[np.isfinite(flat)]
    if finite.size == 0:
        return ValueRange(min=math.inf, max=-math.inf)
    vmin = float(np.min(finite))
    vmax = float(np.max(finite))
    if clamp_zero and vmin > 0.0:
        vmin = 0.0
    return ValueRange(min=vmin, max=vmax)


def max_series_length(series: Sequence[SeriesInput], window: ZoomWindow | None = None) -> int:
    lengths = [_as_series(s).windowed(window).length for s in series]
    return max(lengths, default=0)


def _flatten(series: Sequence[SeriesInput], window: ZoomWindow | None) -> np.ndarray:
    chunks = [
        np.asarray([np.nan if v is None else v for v in _as_series(s).windowed(window).values], dtype=np.float64)
        for s in series
    ]
    if not chunks:
        return np.empty(0, dtype=np.float64)
    return np.concatenate(chunks)


def _as_series(item: SeriesInput) -> DataSeries:
    if isinstance(item, DataSeries):
        return item
    if isinstance(item, Mapping):
        return DataSeries.from_values(item.get("values", ()), name=str(item.get("name", "")))
    return DataSeries.from_values(item)
