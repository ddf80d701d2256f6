from __future__ import annotations

from typing import Sequence


class SurfacePainterAdapter:
    """Drawing primitives the grid and shape painters are written against.

    Text anchors sit at the left edge and vertical middle of the string;
    ``rotation`` is in degrees, counter-clockwise about the anchor.
    """

    def set_pen(self, color: str, *, width: int = 1, dash: Sequence[float] = ()) -> None: ...
    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...
    def set_font(self, family: str, pixel_size: int) -> None: ...
    def draw_text(self, x: float, y: float, text: str, color: str, *, rotation: float = 0.0) -> None: ...
    def fill_circle(self, cx: float, cy: float, radius: float, color: str) -> None: ...
    def stroke_circle(self, cx: float, cy: float, radius: float) -> None: ...
    def clip_rect(self, left: float, top: float, width: float, height: float) -> None: ...
    def save(self) -> None: ...
    def restore(self) -> None: ...
