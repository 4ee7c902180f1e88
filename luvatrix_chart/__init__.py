from luvatrix_chart.arcs import (
    ArcLayout,
    ArcPath,
    ArcSegment,
    DONUT_LAYOUT,
    GAUGE_LAYOUT,
    GaugeBand,
    build_gauge_segments,
    build_segments,
    create_arc,
    gauge_pointer,
    polygon_points,
)
from luvatrix_chart.area import DrawingArea, ViewBox, parse_view_box
from luvatrix_chart.coerce import coerce_series, force_num
from luvatrix_chart.errors import ChartDataError
from luvatrix_chart.geometry import Point
from luvatrix_chart.labels import LabelPlacement, leader_line, offset_from_center_point, place_label, text_anchor_from_center
from luvatrix_chart.layouts import donut_layout, gauge_layout, sparkline_layout, xy_layout
from luvatrix_chart.normalize import BarRect, Normalizer
from luvatrix_chart.options import DonutOptions, GaugeOptions, SparklineOptions, XYOptions, resolve_options
from luvatrix_chart.scales import (
    NiceScale,
    closest_decimal,
    format_ticks_for_axis,
    format_value,
    nice_number,
    nice_scale,
    ratio_to_max,
    tick_decimals,
)
from luvatrix_chart.series import DataSeries, ValueRange, ZoomWindow, max_series_length, min_max
from luvatrix_chart.smoothing import SmoothedPath, area_path, line_path, smooth_path

__all__ = [
    "ArcLayout",
    "ArcPath",
    "ArcSegment",
    "BarRect",
    "ChartDataError",
    "DONUT_LAYOUT",
    "DataSeries",
    "DonutOptions",
    "DrawingArea",
    "GAUGE_LAYOUT",
    "GaugeBand",
    "GaugeOptions",
    "LabelPlacement",
    "NiceScale",
    "Normalizer",
    "Point",
    "SmoothedPath",
    "SparklineOptions",
    "ValueRange",
    "ViewBox",
    "XYOptions",
    "ZoomWindow",
    "area_path",
    "build_gauge_segments",
    "build_segments",
    "closest_decimal",
    "coerce_series",
    "create_arc",
    "donut_layout",
    "force_num",
    "format_ticks_for_axis",
    "format_value",
    "gauge_layout",
    "gauge_pointer",
    "leader_line",
    "line_path",
    "max_series_length",
    "min_max",
    "nice_number",
    "nice_scale",
    "offset_from_center_point",
    "parse_view_box",
    "place_label",
    "polygon_points",
    "ratio_to_max",
    "resolve_options",
    "smooth_path",
    "sparkline_layout",
    "text_anchor_from_center",
    "tick_decimals",
    "xy_layout",
]
