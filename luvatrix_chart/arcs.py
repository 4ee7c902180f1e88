from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging
import math
from typing import Any, Union

from luvatrix_chart.coerce import force_num
from luvatrix_chart.errors import ChartDataError
from luvatrix_chart.geometry import Point, rotate_about, rotation_matrix, svg_number


LOGGER = logging.getLogger(__name__)

PointLike = Union[Point, tuple[float, float]]


@dataclass(frozen=True)
class ArcLayout:
    """Fully-resolved angular parameters for a family of arcs.

    ``pi_proportion`` is the total sweep in multiples of pi. A full donut stays
    just under 2 so a single 100% segment still has distinct end points.
    ``units_per_turn`` (in multiples of pi) and ``total_degrees`` convert the
    rotation into the path's x-axis-rotation field.
    """

    pi_proportion: float = 1.99999
    units_per_turn: float = 2.0
    total_degrees: float = 360.0
    rotation: float = -math.pi / 2
    amplitude: float = 1.45

    def __post_init__(self) -> None:
        if self.pi_proportion <= 0 or self.pi_proportion > 2:
            raise ValueError("pi_proportion must be in (0, 2]")
        if self.units_per_turn <= 0:
            raise ValueError("units_per_turn must be > 0")
        if self.amplitude <= 0:
            raise ValueError("amplitude must be > 0")

    @property
    def total_sweep(self) -> float:
        return math.pi * self.pi_proportion


DONUT_LAYOUT = ArcLayout()
GAUGE_LAYOUT = ArcLayout(pi_proportion=1.0, units_per_turn=1.0, total_degrees=180.0, rotation=math.pi, amplitude=1.4)


@dataclass(frozen=True)
class ArcPath:
    start: Point
    end: Point
    path: str
    command: str


@dataclass(frozen=True)
class ArcSegment:
    value: float
    proportion: float
    start_angle: float
    sweep_angle: float
    outer: ArcPath
    center_arc: ArcPath
    inner: ArcPath | None = None
    arc_slice_path: str | None = None
    name: str = ""
    transparent: bool = False

    @property
    def outer_path(self) -> str:
        return self.outer.path

    @property
    def inner_path(self) -> str | None:
        return None if self.inner is None else self.inner.path

    @property
    def start_point(self) -> Point:
        return self.outer.start

    @property
    def end_point(self) -> Point:
        return self.outer.end

    @property
    def mid_offset_point(self) -> Point:
        return self.center_arc.end


def create_arc(
    center: PointLike,
    radii: tuple[float, float],
    start_angle: float,
    sweep_angle: float,
    rotation: float = 0.0,
    total_degrees: float = 360.0,
    units_per_turn: float = 2.0,
    *,
    reverse: bool = False,
) -> ArcPath:
    """Elliptical arc from ``start_angle`` over ``sweep_angle`` radians.

    With ``reverse`` the arc is traced from its end back to its start.
    """

    cx, cy = _xy(center)
    rx, ry = radii
    sweep = math.fmod(sweep_angle, 2 * math.pi)
    matrix = rotation_matrix(rotation)
    s = rotate_about((rx * math.cos(start_angle), ry * math.sin(start_angle)), matrix, (cx, cy))
    e = rotate_about(
        (rx * math.cos(start_angle + sweep), ry * math.sin(start_angle + sweep)),
        matrix,
        (cx, cy),
    )
    large_arc = 1 if sweep > math.pi else 0
    sweep_flag = 1 if sweep > 0 else 0
    if reverse:
        s, e = e, s
        sweep_flag = 1 - sweep_flag
    x_rotation = (rotation / (units_per_turn * math.pi)) * total_degrees
    command = " ".join(
        [
            "A",
            svg_number(rx),
            svg_number(ry),
            svg_number(x_rotation),
            str(large_arc),
            str(sweep_flag),
            svg_number(e.x),
            svg_number(e.y),
        ]
    )
    return ArcPath(start=s, end=e, path=f"M{svg_number(s.x)} {svg_number(s.y)} {command}", command=command)


def build_segments(
    series: Sequence[Any],
    center: PointLike,
    radii: tuple[float, float],
    layout: ArcLayout = DONUT_LAYOUT,
    *,
    thickness: float | None = None,
) -> list[ArcSegment]:
    """Lay proportional arc segments end to end, in input order.

    ``series`` items are numbers or mappings with a ``value`` (and optional
    ``name``). When ``thickness`` is given each segment also gets an inner arc
    and a closed ring-slice path. The total weight must be > 0.
    """

    weights = [_weight(item) for item in series]
    total = sum(w for w, _ in weights)
    if not total > 0:
        raise ChartDataError(f"arc segments need a positive total weight, got {total}")
    return _lay_out(weights, total, center, radii, layout, thickness)


@dataclass(frozen=True)
class GaugeBand:
    start: float
    end: float
    name: str = ""


def build_gauge_segments(
    bands: Sequence[GaugeBand | Mapping[str, Any]],
    center: PointLike,
    radii: tuple[float, float],
    layout: ArcLayout = GAUGE_LAYOUT,
    *,
    thickness: float | None = None,
) -> list[ArcSegment]:
    """Half-circle bands placed at their absolute position on the dial.

    Each band starts at the same angle ``gauge_pointer`` gives its ``start``
    value. Uncovered stretches between bands become transparent segments, and
    a transparent terminator always closes the sweep on the maximum. Bands
    must be in ascending order and must not overlap.
    """

    resolved = [as_gauge_band(b) for b in bands]
    if not resolved:
        raise ChartDataError("gauge needs at least one band")
    minimum = min(min(b.start, b.end) for b in resolved)
    maximum = max(max(b.start, b.end) for b in resolved)
    total = maximum - minimum
    if not total > 0:
        raise ChartDataError("gauge bands must span a positive range")

    def angle_at(value: float) -> float:
        return (value - minimum) / total * layout.total_sweep

    def piece(start: float, end: float, name: str, transparent: bool) -> ArcSegment:
        return _segment(
            value=end - start,
            proportion=(end - start) / total,
            start=angle_at(start),
            sweep=angle_at(end) - angle_at(start),
            center=center,
            radii=radii,
            layout=layout,
            thickness=thickness,
            name=name,
            transparent=transparent,
        )

    segments: list[ArcSegment] = []
    cursor = minimum
    for band in resolved:
        if band.end < band.start:
            raise ChartDataError(f"gauge band end {band.end} is below its start {band.start}")
        if band.start < cursor:
            raise ChartDataError(
                f"gauge band starting at {band.start} overlaps the previous band ending at {cursor}"
            )
        if band.start > cursor:
            segments.append(piece(cursor, band.start, "", True))
        segments.append(piece(band.start, band.end, band.name, False))
        cursor = band.end

    start = angle_at(cursor)
    remainder = max(0.0, layout.total_sweep - start)
    LOGGER.debug("gauge terminator sweep %s", remainder)
    segments.append(
        _segment(
            value=maximum - cursor,
            proportion=(maximum - cursor) / total,
            start=start,
            sweep=remainder,
            center=center,
            radii=radii,
            layout=layout,
            thickness=thickness,
            name="",
            transparent=True,
        )
    )
    return segments


def gauge_pointer(
    center: PointLike,
    length: float,
    value: float,
    minimum: float,
    maximum: float,
) -> tuple[Point, Point]:
    """Needle from ``center``; ``minimum`` points left, ``maximum`` right."""

    if not maximum > minimum:
        raise ChartDataError("gauge maximum must be greater than its minimum")
    v = force_num(value)
    if v < minimum or v > maximum:
        LOGGER.warning("gauge value %s outside [%s, %s]; clamping", v, minimum, maximum)
        v = min(max(v, minimum), maximum)
    cx, cy = _xy(center)
    angle = math.pi + math.pi * ((v - minimum) / (maximum - minimum))
    return Point(cx, cy), Point(cx + length * math.cos(angle), cy + length * math.sin(angle))


def polygon_points(center: PointLike, radius: float, sides: int, rotation: float = 0.0) -> list[Point]:
    if sides < 3:
        raise ValueError("polygon needs at least 3 sides")
    cx, cy = _xy(center)
    step = 2 * math.pi / sides
    return [
        Point(cx + math.cos(i * step + rotation) * radius, cy + math.sin(i * step + rotation) * radius)
        for i in range(sides)
    ]


def _lay_out(
    weights: Sequence[tuple[float, str]],
    total: float,
    center: PointLike,
    radii: tuple[float, float],
    layout: ArcLayout,
    thickness: float | None,
) -> list[ArcSegment]:
    segments: list[ArcSegment] = []
    acc = 0.0
    for value, name in weights:
        proportion = value / total
        sweep = proportion * layout.total_sweep
        segments.append(
            _segment(
                value=value,
                proportion=proportion,
                start=acc,
                sweep=sweep,
                center=center,
                radii=radii,
                layout=layout,
                thickness=thickness,
                name=name,
            )
        )
        acc += sweep
    return segments


def _segment(
    *,
    value: float,
    proportion: float,
    start: float,
    sweep: float,
    center: PointLike,
    radii: tuple[float, float],
    layout: ArcLayout,
    thickness: float | None,
    name: str,
    transparent: bool = False,
) -> ArcSegment:
    rx, ry = radii
    outer = create_arc(center, radii, start, sweep, layout.rotation, layout.total_degrees, layout.units_per_turn)
    center_arc = create_arc(
        center,
        (rx * layout.amplitude, ry * layout.amplitude),
        start,
        sweep / 2.0,
        layout.rotation,
        layout.total_degrees,
        layout.units_per_turn,
    )
    inner: ArcPath | None = None
    arc_slice: str | None = None
    if thickness is not None:
        inner = create_arc(
            center,
            (max(0.0, rx - thickness), max(0.0, ry - thickness)),
            start,
            sweep,
            layout.rotation,
            layout.total_degrees,
            layout.units_per_turn,
            reverse=True,
        )
        arc_slice = (
            f"{outer.path} L {svg_number(inner.start.x)} {svg_number(inner.start.y)} {inner.command} "
            f"L {svg_number(outer.start.x)} {svg_number(outer.start.y)} Z"
        )
    return ArcSegment(
        value=value,
        proportion=proportion,
        start_angle=start,
        sweep_angle=sweep,
        outer=outer,
        center_arc=center_arc,
        inner=inner,
        arc_slice_path=arc_slice,
        name=name,
        transparent=transparent,
    )


def _weight(item: Any) -> tuple[float, str]:
    if isinstance(item, Mapping):
        return force_num(item.get("value")), str(item.get("name", ""))
    return force_num(item), ""


def as_gauge_band(item: GaugeBand | Mapping[str, Any]) -> GaugeBand:
    if isinstance(item, GaugeBand):
        return item
    return GaugeBand(
        start=force_num(item.get("from")),
        end=force_num(item.get("to")),
        name=str(item.get("name", "")),
    )


def _xy(point: PointLike) -> tuple[float, float]:
    if isinstance(point, Point):
        return point.x, point.y
    return float(point[0]), float(point[1])
