from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Literal

from luvatrix_chart.arcs import (
    ArcLayout,
    ArcSegment,
    GAUGE_LAYOUT,
    as_gauge_band,
    build_gauge_segments,
    build_segments,
    gauge_pointer,
)
from luvatrix_chart.area import DrawingArea, parse_view_box
from luvatrix_chart.coerce import force_num
from luvatrix_chart.errors import ChartDataError
from luvatrix_chart.geometry import Point
from luvatrix_chart.labels import LabelPlacement, TextAnchor, leader_line, place_label, text_anchor_from_center
from luvatrix_chart.normalize import BarRect, Normalizer
from luvatrix_chart.options import DonutOptions, GaugeOptions, OPTION_TYPES, SparklineOptions, XYOptions, resolve_options
from luvatrix_chart.scales import NiceScale, format_ticks_for_axis, nice_scale
from luvatrix_chart.series import DataSeries, ZoomWindow, max_series_length, min_max
from luvatrix_chart.smoothing import area_path, line_path, smooth_path


SeriesKind = Literal["line", "bar", "area", "plot"]


@dataclass(frozen=True)
class DonutSlice:
    segment: ArcSegment
    source_index: int
    name_label: LabelPlacement
    value_label: LabelPlacement
    leader_line: tuple[Point, Point]


@dataclass(frozen=True)
class DonutLayout:
    area: DrawingArea
    center: Point
    radius: float
    total: float
    slices: tuple[DonutSlice, ...]


@dataclass(frozen=True)
class GaugeLabel:
    value: float
    x: float
    y: float
    anchor: TextAnchor


@dataclass(frozen=True)
class GaugeLayout:
    area: DrawingArea
    center: Point
    radius: float
    minimum: float
    maximum: float
    value: float
    segments: tuple[ArcSegment, ...]
    pointer: tuple[Point, Point]
    labels: tuple[GaugeLabel, ...]


@dataclass(frozen=True)
class SparklineLayout:
    area: DrawingArea
    scale: NiceScale
    normalizer: Normalizer
    points: tuple[tuple[float, float | None], ...]
    line_path: str
    area_path: str | None

    @property
    def zero_y(self) -> float:
        return self.normalizer.zero_y


@dataclass(frozen=True)
class AxisTick:
    value: float
    y: float
    label: str


@dataclass(frozen=True)
class XYSeriesGeometry:
    name: str
    kind: SeriesKind
    points: tuple[tuple[float, float | None], ...]
    path: str | None = None
    area_path: str | None = None
    bars: tuple[BarRect, ...] = ()


@dataclass(frozen=True)
class XYLayout:
    area: DrawingArea
    scale: NiceScale
    normalizer: Normalizer
    window: ZoomWindow | None
    ticks: tuple[AxisTick, ...]
    series: tuple[XYSeriesGeometry, ...]

    @property
    def zero_y(self) -> float:
        return self.normalizer.zero_y

    @property
    def slot(self) -> float:
        return self.normalizer.slot


def donut_layout(dataset: Sequence[Any], options: DonutOptions | Mapping[str, Any] | None = None) -> DonutLayout:
    opts: DonutOptions = _resolve("donut", options)
    vb = parse_view_box(opts.view_box)
    area = DrawingArea.from_view_box(
        vb,
        padding_top=opts.padding_top,
        padding_right=opts.padding_right,
        padding_bottom=opts.padding_bottom,
        padding_left=opts.padding_left,
        center_on_view_box=True,
    )
    items = [_donut_item(i, item) for i, item in enumerate(dataset)]
    total = sum(value for _, value, _ in items)
    if not total > 0:
        raise ChartDataError("donut values must add up to more than 0")
    if opts.sort_descending:
        items.sort(key=lambda item: item[1] / total, reverse=True)

    center = Point(area.center_x, area.center_y)
    radius = vb.width * opts.radius_ratio
    segments = build_segments(
        [{"value": value, "name": name} for _, value, name in items],
        center,
        (radius, radius),
        ArcLayout(rotation=opts.start_rotation, amplitude=opts.arc_amplitude),
        thickness=opts.donut_thickness if opts.ring_slice else None,
    )
    label_kwargs = {
        "dead_zone": opts.label_dead_zone,
        "nudge": opts.label_nudge,
        "band_offset": opts.label_band_offset,
    }
    slices = tuple(
        DonutSlice(
            segment=segment,
            source_index=source_index,
            name_label=place_label(area, segment, 0.0, **label_kwargs),
            value_label=place_label(area, segment, 3.0 + opts.label_font_size, **label_kwargs),
            leader_line=leader_line(area, segment, vb.width * opts.marker_offset_ratio),
        )
        for (source_index, _, _), segment in zip(items, segments)
    )
    return DonutLayout(area=area, center=center, radius=radius, total=total, slices=slices)


def gauge_layout(dataset: Mapping[str, Any], options: GaugeOptions | Mapping[str, Any] | None = None) -> GaugeLayout:
    opts: GaugeOptions = _resolve("gauge", options)
    vb = parse_view_box(opts.view_box)
    area = DrawingArea.from_view_box(
        vb,
        padding_top=opts.padding_top,
        padding_right=opts.padding_right,
        padding_bottom=opts.padding_bottom,
        padding_left=opts.padding_left,
        center_on_view_box=True,
    )
    bands = [as_gauge_band(b) for b in dataset.get("segments", ())]
    if not bands:
        raise ChartDataError("gauge needs at least one segment")
    center = Point(area.center_x, area.center_y + vb.height / 4.0)
    radius = vb.width * opts.radius_ratio
    layout = replace(GAUGE_LAYOUT, amplitude=opts.arc_amplitude)
    segments = build_gauge_segments(
        bands,
        center,
        (radius, radius),
        layout,
        thickness=opts.arc_thickness if opts.ring_slice else None,
    )
    minimum = min(min(b.start, b.end) for b in bands)
    maximum = max(max(b.start, b.end) for b in bands)
    value = force_num(dataset.get("value"))
    pointer = gauge_pointer(center, radius * opts.pointer_length_ratio, value, minimum, maximum)

    labels: list[GaugeLabel] = []
    visible = [s for s in segments if not s.transparent]
    for band, segment in zip(bands, visible):
        start = segment.center_arc.start
        labels.append(
            GaugeLabel(
                value=band.start,
                x=start.x,
                y=start.y,
                anchor=text_anchor_from_center(start.x, area.center_x, opts.label_dead_zone),
            )
        )
    last = visible[-1].end_point
    labels.append(
        GaugeLabel(
            value=bands[-1].end,
            x=last.x + opts.arc_thickness / 1.3,
            y=last.y,
            anchor=text_anchor_from_center(last.x, area.center_x, opts.label_dead_zone),
        )
    )
    return GaugeLayout(
        area=area,
        center=center,
        radius=radius,
        minimum=minimum,
        maximum=maximum,
        value=value,
        segments=tuple(segments),
        pointer=pointer,
        labels=tuple(labels),
    )


def sparkline_layout(values: Any, options: SparklineOptions | Mapping[str, Any] | None = None) -> SparklineLayout:
    opts: SparklineOptions = _resolve("sparkline", options)
    series = DataSeries.from_values(values)
    if series.length == 0:
        raise ChartDataError("sparkline needs at least one value")
    area = DrawingArea.from_view_box(
        opts.view_box,
        padding_top=opts.padding_top,
        padding_right=opts.padding_right,
        padding_bottom=opts.padding_bottom,
        padding_left=opts.padding_left,
    )
    scale = _scale_for([series], None, opts.max_ticks)
    normalizer = Normalizer(scale=scale, area=area, series_length=series.length)
    points = tuple(normalizer.plot_points(series.values))
    if opts.smooth:
        d = smooth_path(points, smoothing=opts.smoothing)
    else:
        d = line_path(points)
    filled = area_path(points, area.bottom, smooth=opts.smooth, smoothing=opts.smoothing) if opts.show_area else None
    return SparklineLayout(area=area, scale=scale, normalizer=normalizer, points=points, line_path=d, area_path=filled)


def xy_layout(
    dataset: Sequence[Mapping[str, Any]],
    options: XYOptions | Mapping[str, Any] | None = None,
    window: ZoomWindow | None = None,
) -> XYLayout:
    """Scale, ticks and per-series paths/bars for a mixed line/bar/area chart."""

    opts: XYOptions = _resolve("xy", options)
    specs = [_xy_spec(item) for item in dataset]
    if not specs:
        raise ChartDataError("xy chart needs at least one series")
    series = [s for s, _, _ in specs]
    length = max_series_length(series, window)
    if length == 0:
        raise ChartDataError("no datapoints inside the zoom window")
    area = DrawingArea.from_view_box(
        opts.view_box,
        padding_top=opts.padding_top,
        padding_right=opts.padding_right,
        padding_bottom=opts.padding_bottom,
        padding_left=opts.padding_left,
    )
    scale = _scale_for(series, window, opts.max_ticks)
    normalizer = Normalizer(scale=scale, area=area, series_length=length)
    tick_labels = format_ticks_for_axis(scale)
    ticks = tuple(
        AxisTick(value=tick, y=y, label=label)
        for (tick, y), label in zip(normalizer.tick_positions(), tick_labels)
    )

    bar_count = sum(1 for _, kind, _ in specs if kind == "bar")
    bar_index = 0
    out: list[XYSeriesGeometry] = []
    for data, kind, smooth in specs:
        values = data.windowed(window).values
        points = tuple(normalizer.plot_points(values))
        if kind == "bar":
            bars = tuple(
                normalizer.bar_rect(
                    v,
                    index=j,
                    series_index=bar_index,
                    bar_series_count=bar_count,
                    spacing=opts.bar_spacing,
                )
                for j, v in enumerate(values)
            )
            bar_index += 1
            out.append(XYSeriesGeometry(name=data.name, kind=kind, points=points, bars=bars))
            continue
        if kind == "plot":
            out.append(XYSeriesGeometry(name=data.name, kind=kind, points=points))
            continue
        d = smooth_path(points, smoothing=opts.smoothing) if smooth else line_path(points)
        filled = area_path(points, area.bottom, smooth=smooth, smoothing=opts.smoothing) if kind == "area" else None
        out.append(XYSeriesGeometry(name=data.name, kind=kind, points=points, path=d, area_path=filled))

    return XYLayout(
        area=area,
        scale=scale,
        normalizer=normalizer,
        window=window,
        ticks=ticks,
        series=tuple(out),
    )


def _scale_for(series: Sequence[DataSeries], window: ZoomWindow | None, max_ticks: int) -> NiceScale:
    rng = min_max(series, window)
    if rng.is_empty:
        raise ChartDataError("series contain no values to scale")
    return nice_scale(rng.min, rng.max, max_ticks)


def _resolve(kind: str, options: Any) -> Any:
    if isinstance(options, OPTION_TYPES[kind]):
        return options
    return resolve_options(kind, options)


def _donut_item(index: int, item: Any) -> tuple[int, float, str]:
    if isinstance(item, Mapping):
        return index, force_num(item.get("value")), str(item.get("name", ""))
    return index, force_num(item), ""


def _xy_spec(item: Mapping[str, Any]) -> tuple[DataSeries, SeriesKind, bool]:
    kind = item.get("type", "line")
    if kind not in ("line", "bar", "area", "plot"):
        raise ValueError(f"Unsupported series type: {kind}")
    series = DataSeries.from_values(item.get("values", ()), name=str(item.get("name", "")))
    return series, kind, bool(item.get("smooth", False))
