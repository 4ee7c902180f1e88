from __future__ import annotations

from dataclasses import dataclass
import math


PATH_DECIMALS = 4


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def svg_number(value: float, decimals: int = PATH_DECIMALS) -> str:
    """Format a coordinate for a path string; identical inputs give identical text."""

    if not math.isfinite(value):
        return str(value)
    out = f"{value:.{decimals}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def svg_point(x: float, y: float, sep: str = ",") -> str:
    return f"{svg_number(x)}{sep}{svg_number(y)}"


def rotation_matrix(phi: float) -> tuple[tuple[float, float], tuple[float, float]]:
    c = math.cos(phi)
    s = math.sin(phi)
    return ((c, -s), (s, c))


def rotate_about(
    vector: tuple[float, float],
    matrix: tuple[tuple[float, float], tuple[float, float]],
    origin: tuple[float, float],
) -> Point:
    (a, b), (c, d) = matrix
    x, y = vector
    return Point(x=a * x + b * y + origin[0], y=c * x + d * y + origin[1])
