from __future__ import annotations

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QImage, QPainter

from grid_field.qt_painter import QtSurfacePainterAdapter, parse_color


@pytest.mark.parametrize(
    "text, rgba",
    [
        ("#ff0000", (255, 0, 0, 255)),
        ("red", (255, 0, 0, 255)),
        ("rgb(10, 20, 30)", (10, 20, 30, 255)),
        ("rgba(0, 0, 0, 0.5)", (0, 0, 0, 128)),
        ("#11223380", (17, 34, 51, 128)),
    ],
)
def test_parse_color_accepts_css_forms(text: str, rgba) -> None:
    color = parse_color(text)

    assert (color.red(), color.green(), color.blue(), color.alpha()) == rgba


def test_parse_color_falls_back_for_unknown_values() -> None:
    assert parse_color("not-a-colour", fallback="#00ff00") == QColor("#00ff00")
    assert parse_color(None) == QColor("#000000")


@pytest.mark.pyqt_required
def test_adapter_clips_fills_and_strokes_on_image(qt_app) -> None:
    image = QImage(100, 100, QImage.Format.Format_ARGB32)
    image.fill(Qt.GlobalColor.transparent)
    painter = QPainter(image)
    adapter = QtSurfacePainterAdapter(painter)

    adapter.save()
    adapter.clip_rect(0, 0, 50, 100)
    adapter.set_pen("#0000ff", width=2, dash=(5, 3))
    adapter.fill_circle(50, 50, 30, "#ff0000")
    adapter.stroke_circle(50, 50, 30)
    adapter.restore()
    adapter.set_font("sans-serif", 10)
    adapter.draw_text(5, 5, "0.00", "#000000", rotation=90.0)
    painter.end()

    assert QColor(image.pixel(40, 50)).red() == 255
    assert QColor.fromRgba(image.pixel(60, 50)).alpha() == 0
