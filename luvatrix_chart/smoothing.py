from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math
from typing import Any, Optional

from luvatrix_chart.geometry import svg_point


DEFAULT_SMOOTHING = 0.2

Sample = tuple[float, Optional[float]]


@dataclass(frozen=True)
class SmoothedPath:
    samples: tuple[Sample, ...]
    path: str

    @classmethod
    def from_points(cls, points: Sequence[Any], smoothing: float = DEFAULT_SMOOTHING) -> "SmoothedPath":
        samples = tuple(_sample(p) for p in points)
        return cls(samples=samples, path=smooth_path(samples, smoothing=smoothing))


def smooth_path(points: Sequence[Any], smoothing: float = DEFAULT_SMOOTHING) -> str:
    """Cubic Bezier path through the points.

    A sample whose ``y`` is ``None`` ends the current curve; the next present
    sample starts a new ``M`` subpath instead of bridging the gap.
    """

    parts: list[str] = []
    for run in _runs(points):
        x0, y0 = run[0]
        parts.append(" ".join([f"M{svg_point(x0, y0)}", *_bezier_commands(run, smoothing)]))
    return " ".join(parts)


def line_path(points: Sequence[Any]) -> str:
    parts: list[str] = []
    for run in _runs(points):
        x0, y0 = run[0]
        parts.append(" ".join([f"M{svg_point(x0, y0)}", *(f"L {svg_point(x, y)}" for x, y in run[1:])]))
    return " ".join(parts)


def area_path(points: Sequence[Any], baseline_y: float, *, smooth: bool = True, smoothing: float = DEFAULT_SMOOTHING) -> str:
    """Closed region under each contiguous run, down to ``baseline_y``."""

    parts: list[str] = []
    for run in _runs(points):
        x0, y0 = run[0]
        xn, _ = run[-1]
        if smooth:
            body = _bezier_commands(run, smoothing)
        else:
            body = [f"L {svg_point(x, y)}" for x, y in run[1:]]
        parts.append(
            " ".join(
                [
                    f"M{svg_point(x0, baseline_y)}",
                    f"L {svg_point(x0, y0)}",
                    *body,
                    f"L {svg_point(xn, baseline_y)}",
                    "Z",
                ]
            )
        )
    return " ".join(parts)


def control_point(
    current: tuple[float, float],
    previous: tuple[float, float] | None,
    following: tuple[float, float] | None,
    *,
    reverse: bool = False,
    smoothing: float = DEFAULT_SMOOTHING,
) -> tuple[float, float]:
    """Control point for ``current`` along the tangent between its neighbours.

    A missing neighbour is replaced by ``current`` itself, which flattens the
    tangent at the ends of a run.
    """

    p = previous or current
    n = following or current
    dx = n[0] - p[0]
    dy = n[1] - p[1]
    angle = math.atan2(dy, dx) + (math.pi if reverse else 0.0)
    length = math.hypot(dx, dy) * smoothing
    return (current[0] + math.cos(angle) * length, current[1] + math.sin(angle) * length)


def _bezier_commands(run: Sequence[tuple[float, float]], smoothing: float) -> list[str]:
    commands: list[str] = []
    for i in range(1, len(run)):
        point = run[i]
        before_prev = run[i - 2] if i >= 2 else None
        after = run[i + 1] if i + 1 < len(run) else None
        cps = control_point(run[i - 1], before_prev, point, smoothing=smoothing)
        cpe = control_point(point, run[i - 1], after, reverse=True, smoothing=smoothing)
        commands.append(f"C {svg_point(*cps)} {svg_point(*cpe)} {svg_point(*point)}")
    return commands


def _runs(points: Sequence[Any]) -> list[list[tuple[float, float]]]:
    runs: list[list[tuple[float, float]]] = []
    current: list[tuple[float, float]] = []
    for raw in points:
        x, y = _sample(raw)
        if y is None or not math.isfinite(y):
            if current:
                runs.append(current)
                current = []
            continue
        current.append((x, y))
    if current:
        runs.append(current)
    return runs


def _sample(raw: Any) -> Sample:
    if raw is None:
        raise ValueError("path samples need an x coordinate")
    if hasattr(raw, "x") and hasattr(raw, "y"):
        x, y = raw.x, raw.y
    else:
        x, y = raw
    return (float(x), None if y is None else float(y))
