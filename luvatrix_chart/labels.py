from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Literal

from luvatrix_chart.arcs import ArcSegment
from luvatrix_chart.area import DrawingArea
from luvatrix_chart.geometry import Point


TextAnchor = Literal["start", "middle", "end"]

DEFAULT_DEAD_ZONE = 12.0
DEFAULT_NUDGE = 12.0
DEFAULT_BAND_OFFSET = 24.0


@dataclass(frozen=True)
class LabelPlacement:
    x: float
    y: float
    anchor: TextAnchor


def text_anchor_from_center(x: float, center_x: float, middle_range: float = 0.0) -> TextAnchor:
    if x > center_x + middle_range:
        return "start"
    if x < center_x - middle_range:
        return "end"
    return "middle"


def offset_from_center_point(point: Point, center: Point, offset: float) -> Point:
    """Move ``point`` by ``offset`` along the ray from ``center`` through it."""

    angle = math.atan2(point.y - center.y, point.x - center.x)
    return Point(point.x + offset * math.cos(angle), point.y + offset * math.sin(angle))


def in_outer_band(area: DrawingArea, y: float) -> bool:
    """True when ``y`` falls in the top or bottom quarter of the area."""

    quarter = area.height / 4.0
    return y < area.top + quarter or y > area.bottom - quarter


def place_label(
    area: DrawingArea,
    segment: ArcSegment,
    offset: float = 0.0,
    *,
    dead_zone: float = DEFAULT_DEAD_ZONE,
    nudge: float = DEFAULT_NUDGE,
    band_offset: float = DEFAULT_BAND_OFFSET,
) -> LabelPlacement:
    """Position the external label of one arc segment.

    ``offset`` shifts the label down, so stacked lines (name, then value) can
    share one anchor point.
    """

    center = Point(area.center_x, area.center_y)
    point = segment.mid_offset_point
    anchor = text_anchor_from_center(point.x, area.center_x, dead_zone)
    if in_outer_band(area, point.y):
        # Labels near the top/bottom of the ring sit on it; push them outward.
        point = offset_from_center_point(point, center, band_offset)

    x, y = point.x, point.y
    if anchor == "start":
        x += nudge
    elif anchor == "end":
        x -= nudge
    elif y < area.center_y:
        y -= nudge
    else:
        y += nudge
    return LabelPlacement(x=x, y=y + offset, anchor=anchor)


def leader_line(area: DrawingArea, segment: ArcSegment, offset: float) -> tuple[Point, Point]:
    start = segment.mid_offset_point
    return start, offset_from_center_point(start, Point(area.center_x, area.center_y), offset)
