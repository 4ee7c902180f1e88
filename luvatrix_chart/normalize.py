from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from luvatrix_chart.area import DrawingArea
from luvatrix_chart.errors import ChartDataError
from luvatrix_chart.scales import NiceScale


@dataclass(frozen=True)
class BarRect:
    x: float
    y: float
    width: float
    height: float
    negative: bool


@dataclass(frozen=True)
class Normalizer:
    """Maps data values onto pixel coordinates of one drawing area.

    ``normalize`` is a decreasing affine map sending ``scale.min`` to
    ``area.bottom`` and ``scale.max`` to ``area.top``.
    """

    scale: NiceScale
    area: DrawingArea
    series_length: int

    def __post_init__(self) -> None:
        if self.series_length <= 0:
            raise ChartDataError("series_length must be > 0 to compute a slot width")
        if not self.scale.span > 0:
            raise ChartDataError("scale span must be > 0")

    @property
    def absolute_min(self) -> float:
        return abs(self.scale.min)

    @property
    def absolute_max(self) -> float:
        # Whole span as one non-negative magnitude shared by both signs.
        return abs(self.scale.max - self.scale.min)

    @property
    def slot(self) -> float:
        return self.area.width / self.series_length

    @property
    def zero_y(self) -> float:
        return self.normalize(0.0)

    def normalize(self, value: float) -> float:
        return self.area.bottom - self.area.height * ((value - self.scale.min) / self.absolute_max)

    def normalize_many(self, values: Sequence[float] | np.ndarray) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        return self.area.bottom - self.area.height * ((arr - self.scale.min) / self.absolute_max)

    def x_for_index(self, index: int) -> float:
        return self.area.left + self.slot * index + self.slot / 2.0

    def plot_points(self, values: Sequence[float | None]) -> list[tuple[float, float | None]]:
        return [
            (self.x_for_index(i), None if v is None else self.normalize(v))
            for i, v in enumerate(values)
        ]

    def tick_positions(self) -> list[tuple[float, float]]:
        return [(tick, self.normalize(tick)) for tick in self.scale.ticks]

    def bar_rect(
        self,
        value: float | None,
        *,
        index: int,
        series_index: int = 0,
        bar_series_count: int = 1,
        spacing: float = 0.0,
    ) -> BarRect:
        """Rectangle for one bar, standing on (or hanging from) the zero line.

        Each index slot is split evenly between the bar series, in series order.
        """

        if bar_series_count <= 0:
            raise ValueError("bar_series_count must be > 0")
        v = 0.0 if value is None else float(value)
        sub_slot = self.slot / bar_series_count
        x = self.area.left + sub_slot * series_index + sub_slot * index * bar_series_count + spacing
        y_value = self.normalize(v)
        zero = self.zero_y
        if v < 0:
            return BarRect(x=x, y=zero, width=max(0.0, sub_slot - spacing * 2), height=y_value - zero, negative=True)
        return BarRect(x=x, y=y_value, width=max(0.0, sub_slot - spacing * 2), height=zero - y_value, negative=False)
