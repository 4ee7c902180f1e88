from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ViewBox:
    start_x: float
    start_y: float
    width: float
    height: float


def parse_view_box(value: str) -> ViewBox:
    """Parse an SVG ``viewBox`` attribute such as ``"0 0 450 300"``."""

    parts = value.replace(",", " ").split()
    if len(parts) != 4:
        raise ValueError(f"viewBox must have 4 numbers, got {value!r}")
    try:
        start_x, start_y, width, height = (float(p) for p in parts)
    except ValueError as exc:
        raise ValueError(f"viewBox must be numeric, got {value!r}") from exc
    if width <= 0 or height <= 0:
        raise ValueError("viewBox width/height must be > 0")
    return ViewBox(start_x=start_x, start_y=start_y, width=width, height=height)


@dataclass(frozen=True)
class DrawingArea:
    """Pixel rectangle inside the chart padding where data is plotted."""

    left: float
    top: float
    right: float
    bottom: float
    center_x: float
    center_y: float

    def __post_init__(self) -> None:
        if self.right <= self.left or self.bottom <= self.top:
            raise ValueError("DrawingArea must have positive width and height")

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @classmethod
    def from_bounds(cls, left: float, top: float, right: float, bottom: float) -> "DrawingArea":
        return cls(
            left=left,
            top=top,
            right=right,
            bottom=bottom,
            center_x=(left + right) / 2.0,
            center_y=(top + bottom) / 2.0,
        )

    @classmethod
    def from_view_box(
        cls,
        view_box: ViewBox | str,
        *,
        padding_top: float = 0.0,
        padding_right: float = 0.0,
        padding_bottom: float = 0.0,
        padding_left: float = 0.0,
        center_on_view_box: bool = False,
    ) -> "DrawingArea":
        """Inset a viewBox by its padding.

        Radial charts center on the whole viewBox rather than on the padded
        rectangle; pass ``center_on_view_box=True`` for those.
        """

        vb = parse_view_box(view_box) if isinstance(view_box, str) else view_box
        left = vb.start_x + padding_left
        top = vb.start_y + padding_top
        right = vb.start_x + vb.width - padding_right
        bottom = vb.start_y + vb.height - padding_bottom
        if right <= left or bottom <= top:
            raise ValueError("padding leaves no drawing area inside the viewBox")
        if center_on_view_box:
            return cls(
                left=left,
                top=top,
                right=right,
                bottom=bottom,
                center_x=vb.start_x + vb.width / 2.0,
                center_y=vb.start_y + vb.height / 2.0,
            )
        return cls.from_bounds(left, top, right, bottom)
