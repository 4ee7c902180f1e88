from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import math
from typing import Any, Mapping

from luvatrix_chart.area import parse_view_box


@dataclass(frozen=True)
class DonutOptions:
    view_box: str = "0 0 450 450"
    padding_top: float = 96.0
    padding_right: float = 0.0
    padding_bottom: float = 36.0
    padding_left: float = 0.0
    donut_thickness: float = 56.0
    radius_ratio: float = 0.2
    arc_amplitude: float = 1.45
    start_rotation: float = -math.pi / 2
    ring_slice: bool = False
    sort_descending: bool = True
    label_font_size: float = 12.0
    label_dead_zone: float = 12.0
    label_nudge: float = 12.0
    label_band_offset: float = 24.0
    marker_offset_ratio: float = 0.2

    def __post_init__(self) -> None:
        parse_view_box(self.view_box)
        _require_non_negative(self, "padding_top", "padding_right", "padding_bottom", "padding_left")
        _require_positive(self, "donut_thickness", "radius_ratio", "arc_amplitude", "label_font_size")


@dataclass(frozen=True)
class GaugeOptions:
    view_box: str = "0 0 450 300"
    padding_top: float = 0.0
    padding_right: float = 0.0
    padding_bottom: float = 0.0
    padding_left: float = 0.0
    arc_thickness: float = 58.0
    radius_ratio: float = 0.25
    arc_amplitude: float = 1.4
    ring_slice: bool = False
    pointer_length_ratio: float = 0.65
    label_dead_zone: float = 12.0

    def __post_init__(self) -> None:
        parse_view_box(self.view_box)
        _require_non_negative(self, "padding_top", "padding_right", "padding_bottom", "padding_left")
        _require_positive(self, "arc_thickness", "radius_ratio", "arc_amplitude", "pointer_length_ratio")


@dataclass(frozen=True)
class SparklineOptions:
    view_box: str = "0 0 192 64"
    padding_right: float = 3.0
    padding_bottom: float = 3.0
    padding_left: float = 3.0
    show_title: bool = True
    title_font_size: float = 8.0
    smooth: bool = True
    smoothing: float = 0.2
    show_area: bool = True
    max_ticks: int = 10

    def __post_init__(self) -> None:
        parse_view_box(self.view_box)
        _require_non_negative(self, "padding_right", "padding_bottom", "padding_left", "smoothing")
        _require_positive(self, "title_font_size")
        if self.max_ticks < 2:
            raise ValueError("max_ticks must be >= 2")

    @property
    def padding_top(self) -> float:
        return self.title_font_size + 3.0 if self.show_title else 3.0


@dataclass(frozen=True)
class XYOptions:
    view_box: str = "0 0 512 341"
    padding_top: float = 48.0
    padding_right: float = 24.0
    padding_bottom: float = 48.0
    padding_left: float = 48.0
    max_ticks: int = 10
    bar_spacing: float = 0.0
    smoothing: float = 0.2

    def __post_init__(self) -> None:
        parse_view_box(self.view_box)
        _require_non_negative(
            self, "padding_top", "padding_right", "padding_bottom", "padding_left", "bar_spacing", "smoothing"
        )
        if self.max_ticks < 2:
            raise ValueError("max_ticks must be >= 2")


OPTION_TYPES: dict[str, type] = {
    "donut": DonutOptions,
    "gauge": GaugeOptions,
    "sparkline": SparklineOptions,
    "xy": XYOptions,
}


def resolve_options(kind: str, overrides: Mapping[str, Any] | None = None) -> Any:
    """Merge user overrides onto the defaults for one chart type.

    Unknown keys and wrongly typed values are rejected so the geometry code
    only ever sees complete, validated parameters.
    """

    if kind not in OPTION_TYPES:
        raise ValueError(f"Unknown chart type: {kind}")
    cls = OPTION_TYPES[kind]
    raw: dict[str, Any] = asdict(cls())
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown {kind} option: {key}")
            raw[key] = value

    for f in fields(cls):
        default = getattr(cls, f.name)
        raw[f.name] = _checked(kind, f.name, raw[f.name], default)
    return cls(**raw)


def _checked(kind: str, name: str, value: Any, default: Any) -> Any:
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"Option `{kind}.{name}` must be a boolean")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Option `{kind}.{name}` must be an integer")
        return value
    if isinstance(default, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ValueError(f"Option `{kind}.{name}` must be a finite number")
        return float(value)
    if isinstance(default, str):
        if not isinstance(value, str):
            raise ValueError(f"Option `{kind}.{name}` must be a string")
        return value
    return value


def _require_non_negative(options: Any, *names: str) -> None:
    for name in names:
        if getattr(options, name) < 0:
            raise ValueError(f"{name} must be >= 0")


def _require_positive(options: Any, *names: str) -> None:
    for name in names:
        if getattr(options, name) <= 0:
            raise ValueError(f"{name} must be > 0")
