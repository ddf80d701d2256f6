"""PyQt6 host surface: layered pixmaps, tooltip label and pointer hooks."""
from __future__ import annotations

import logging
from typing import List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QLabel, QWidget

from grid_field.delayed_task import QtTimerScheduler
from grid_field.field_config import FieldConfig, FieldStyle
from grid_field.field_engine import ClickHandler, FieldEngine, FieldSurface, PaintFn
from grid_field.interaction_controller import MoveListener
from grid_field.qt_painter import QtSurfacePainterAdapter, parse_color

_LOGGER = logging.getLogger("GridField.Widget")


def _tooltip_stylesheet(style: FieldStyle) -> str:
    return (
        "QLabel {"
        f" background: {style.tooltip_background};"
        f" color: {style.tooltip_text_color};"
        " padding: 5px;"
        " border-radius: 4px;"
        f" font-size: {style.tooltip_font_px}px;"
        " }"
    )


class FieldWidget(QWidget, FieldSurface):
    """Grid layer below, shape layer above, tooltip on top."""

    def __init__(self, config: FieldConfig, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._style = config.style
        self._grid_pixmap: Optional[QPixmap] = None
        self._shape_pixmap: Optional[QPixmap] = None
        self._click_handler: Optional[ClickHandler] = None
        self._move_listeners: List[MoveListener] = []
        self.setMouseTracking(True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)

        self._tooltip = QLabel(self)
        self._tooltip.setStyleSheet(_tooltip_stylesheet(self._style))
        self._tooltip.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._tooltip.hide()
        self.resize_surface(config.default_surface_size, config.default_surface_size)

    # FieldSurface --------------------------------------------------

    def resize_surface(self, width: int, height: int) -> None:
        self.setFixedSize(width, height)
        self._grid_pixmap = self._blank_layer(width, height)
        self._shape_pixmap = self._blank_layer(width, height)
        _LOGGER.debug("Surface resized to %dx%d", width, height)
        self.update()

    def paint_grid_layer(self, paint_fn: PaintFn) -> None:
        self._grid_pixmap = self._paint_layer(paint_fn)
        self.update()

    def paint_shape_layer(self, paint_fn: PaintFn) -> None:
        self._shape_pixmap = self._paint_layer(paint_fn)
        self.update()

    def show_tooltip(self, x: float, y: float, text: str) -> None:
        self._tooltip.setText(text)
        self._tooltip.adjustSize()
        self._tooltip.move(int(round(x)), int(round(y)))
        self._tooltip.show()
        self._tooltip.raise_()

    def hide_tooltip(self) -> None:
        self._tooltip.hide()

    def set_click_handler(self, handler: Optional[ClickHandler]) -> None:
        self._click_handler = handler

    def add_move_listener(self, listener: MoveListener) -> None:
        self._move_listeners.append(listener)

    def remove_move_listener(self, listener: MoveListener) -> None:
        try:
            self._move_listeners.remove(listener)
        except ValueError:
            pass

    @property
    def tooltip_label(self) -> QLabel:
        return self._tooltip

    # Qt events -----------------------------------------------------

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        if self._grid_pixmap is not None:
            painter.drawPixmap(0, 0, self._grid_pixmap)
        if self._shape_pixmap is not None:
            painter.drawPixmap(0, 0, self._shape_pixmap)
        border = QPen(parse_color(self._style.surface_border_color))
        border.setWidth(1)
        painter.setPen(border)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(self.rect().adjusted(0, 0, -1, -1))
        painter.end()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton and self._click_handler is not None:
            position = event.position()
            self._click_handler(position.x(), position.y())
            event.accept()
            return
        QWidget.mousePressEvent(self, event)

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        if self._move_listeners:
            position = event.position()
            for listener in list(self._move_listeners):
                listener(position.x(), position.y())
        QWidget.mouseMoveEvent(self, event)

    # Helpers -------------------------------------------------------

    @staticmethod
    def _blank_layer(width: int, height: int) -> QPixmap:
        pixmap = QPixmap(max(1, width), max(1, height))
        pixmap.fill(Qt.GlobalColor.transparent)
        return pixmap

    def _paint_layer(self, paint_fn: PaintFn) -> QPixmap:
        pixmap = self._blank_layer(self.width(), self.height())
        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        try:
            paint_fn(QtSurfacePainterAdapter(painter))
        finally:
            painter.end()
        return pixmap


def create_qt_engine(config: FieldConfig, parent: Optional[QWidget] = None) -> FieldEngine:
    """Engine whose tooltip expiry runs on a QTimer."""
    scheduler = QtTimerScheduler(parent)
    return FieldEngine(config, after=scheduler.after, after_cancel=scheduler.cancel)
