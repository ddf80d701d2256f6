"""QPainter implementation of the surface painter adapter."""
from __future__ import annotations

import logging
import re
from typing import Optional, Sequence, Set

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPen

from grid_field.painter_adapter import SurfacePainterAdapter

_LOGGER = logging.getLogger("GridField.Qt")

_RGB_FUNC = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)
_CSS_HEX_ALPHA = re.compile(r"^#([0-9a-f]{8})$", re.IGNORECASE)
_GENERIC_FAMILIES = {
    "sans-serif": QFont.StyleHint.SansSerif,
    "serif": QFont.StyleHint.Serif,
    "monospace": QFont.StyleHint.Monospace,
}
_reported_colors: Set[str] = set()


def parse_color(value: Optional[str], fallback: str = "#000000") -> QColor:
    """Parse CSS-style colours (names, #rgb, #rrggbb, #rrggbbaa, rgb(), rgba())."""
    text = (value or "").strip()
    match = _RGB_FUNC.match(text)
    if match:
        parts = [part.strip() for part in match.group(1).split(",")]
        try:
            channels = [int(round(float(part))) for part in parts[:3]]
            alpha = float(parts[3]) if len(parts) > 3 else 1.0
        except (ValueError, IndexError):
            channels = []
            alpha = 1.0
        if len(channels) == 3:
            red, green, blue = (max(0, min(255, channel)) for channel in channels)
            return QColor(red, green, blue, int(round(255 * max(0.0, min(1.0, alpha)))))
    hex_alpha = _CSS_HEX_ALPHA.match(text)
    if hex_alpha:
        digits = hex_alpha.group(1)
        return QColor(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16), int(digits[6:8], 16))
    color = QColor(text)
    if color.isValid():
        return color
    if text not in _reported_colors:
        _reported_colors.add(text)
        _LOGGER.warning("Unrecognised colour %r; using %s", value, fallback)
    return QColor(fallback)


class QtSurfacePainterAdapter(SurfacePainterAdapter):
    def __init__(self, painter: QPainter) -> None:
        self._painter = painter
        self._font_metrics: Optional[QFontMetricsF] = None

    def set_pen(self, color: str, *, width: int = 1, dash: Sequence[float] = ()) -> None:
        pen = QPen(parse_color(color))
        pen_width = max(1, int(width))
        pen.setWidth(pen_width)
        if dash:
            # Qt dash lengths are multiples of the pen width; host patterns are in pixels.
            pen.setDashPattern([max(0.01, float(length) / pen_width) for length in dash])
            pen.setCapStyle(Qt.PenCapStyle.FlatCap)
        else:
            pen.setStyle(Qt.PenStyle.SolidLine)
        self._painter.setPen(pen)
        self._painter.setBrush(Qt.BrushStyle.NoBrush)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

    def set_font(self, family: str, pixel_size: int) -> None:
        font = QFont(family)
        hint = _GENERIC_FAMILIES.get(family.strip().lower())
        if hint is not None:
            font.setStyleHint(hint)
        font.setPixelSize(max(1, int(pixel_size)))
        self._painter.setFont(font)
        self._font_metrics = QFontMetricsF(font)

    def draw_text(self, x: float, y: float, text: str, color: str, *, rotation: float = 0.0) -> None:
        metrics = self._font_metrics or QFontMetricsF(self._painter.font())
        baseline_shift = (metrics.ascent() - metrics.descent()) / 2.0
        self._painter.save()
        self._painter.setPen(QPen(parse_color(color)))
        self._painter.translate(x, y)
        if rotation:
            self._painter.rotate(-rotation)
        self._painter.drawText(QPointF(0.0, baseline_shift), text)
        self._painter.restore()

    def fill_circle(self, cx: float, cy: float, radius: float, color: str) -> None:
        self._painter.save()
        self._painter.setPen(Qt.PenStyle.NoPen)
        self._painter.setBrush(QBrush(parse_color(color)))
        self._painter.drawEllipse(QPointF(cx, cy), radius, radius)
        self._painter.restore()

    def stroke_circle(self, cx: float, cy: float, radius: float) -> None:
        self._painter.setBrush(Qt.BrushStyle.NoBrush)
        self._painter.drawEllipse(QPointF(cx, cy), radius, radius)

    def clip_rect(self, left: float, top: float, width: float, height: float) -> None:
        self._painter.setClipRect(QRectF(left, top, width, height))

    def save(self) -> None:
        self._painter.save()

    def restore(self) -> None:
        self._painter.restore()
