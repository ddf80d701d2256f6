from __future__ import annotations

import os
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pytest
from PyQt6.QtWidgets import QApplication

from grid_field.field_engine import ClickHandler, FieldSurface, PaintFn
from grid_field.interaction_controller import MoveListener
from grid_field.painter_adapter import SurfacePainterAdapter


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


class RecordingAdapter(SurfacePainterAdapter):
    def __init__(self) -> None:
        self.operations: List[Tuple[str, Tuple]] = []
        self.current_pen: Optional[Tuple[str, int, Tuple[float, ...]]] = None

    def set_pen(self, color: str, *, width: int = 1, dash: Sequence[float] = ()) -> None:
        self.current_pen = (color, width, tuple(dash))
        self.operations.append(("pen", self.current_pen))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.operations.append(("line", (x1, y1, x2, y2, self.current_pen)))

    def set_font(self, family: str, pixel_size: int) -> None:
        self.operations.append(("font", (family, pixel_size)))

    def draw_text(self, x: float, y: float, text: str, color: str, *, rotation: float = 0.0) -> None:
        self.operations.append(("text", (x, y, text, color, rotation)))

    def fill_circle(self, cx: float, cy: float, radius: float, color: str) -> None:
        self.operations.append(("fill", (cx, cy, radius, color)))

    def stroke_circle(self, cx: float, cy: float, radius: float) -> None:
        self.operations.append(("stroke", (cx, cy, radius, self.current_pen)))

    def clip_rect(self, left: float, top: float, width: float, height: float) -> None:
        self.operations.append(("clip", (left, top, width, height)))

    def save(self) -> None:
        self.operations.append(("save", ()))

    def restore(self) -> None:
        self.operations.append(("restore", ()))

    def of_kind(self, kind: str) -> List[Tuple]:
        return [args for op, args in self.operations if op == kind]


class FakeScheduler:
    """after/after_cancel pair whose callbacks fire only when the test says so."""

    def __init__(self) -> None:
        self._next = 0
        self.pending: Dict[int, Tuple[int, Callable[[], None]]] = {}
        self.cancelled: List[int] = []

    def after(self, delay_ms: int, callback: Callable[[], None]) -> object:
        self._next += 1
        self.pending[self._next] = (delay_ms, callback)
        return self._next

    def after_cancel(self, handle: object) -> None:
        self.cancelled.append(handle)  # type: ignore[arg-type]
        self.pending.pop(handle, None)  # type: ignore[arg-type]

    def fire_all(self) -> int:
        fired = 0
        for handle in sorted(self.pending):
            _, callback = self.pending.pop(handle)
            callback()
            fired += 1
        return fired


class FakeSurface(FieldSurface):
    def __init__(self) -> None:
        self.sizes: List[Tuple[int, int]] = []
        self.grid_layers: List[RecordingAdapter] = []
        self.shape_layers: List[RecordingAdapter] = []
        self.tooltip: Optional[Tuple[float, float, str]] = None
        self.tooltip_events: List[str] = []
        self.click_handler: Optional[ClickHandler] = None
        self.move_listeners: List[MoveListener] = []

    def resize_surface(self, width: int, height: int) -> None:
        self.sizes.append((width, height))

    def paint_grid_layer(self, paint_fn: PaintFn) -> None:
        adapter = RecordingAdapter()
        paint_fn(adapter)
        self.grid_layers.append(adapter)

    def paint_shape_layer(self, paint_fn: PaintFn) -> None:
        adapter = RecordingAdapter()
        paint_fn(adapter)
        self.shape_layers.append(adapter)

    def show_tooltip(self, x: float, y: float, text: str) -> None:
        self.tooltip = (x, y, text)
        self.tooltip_events.append("show")

    def hide_tooltip(self) -> None:
        self.tooltip = None
        self.tooltip_events.append("hide")

    def set_click_handler(self, handler: Optional[ClickHandler]) -> None:
        self.click_handler = handler

    def add_move_listener(self, listener: MoveListener) -> None:
        self.move_listeners.append(listener)

    def remove_move_listener(self, listener: MoveListener) -> None:
        self.move_listeners.remove(listener)

    def click(self, x: float, y: float) -> None:
        assert self.click_handler is not None
        self.click_handler(x, y)

    def move(self, x: float, y: float) -> None:
        for listener in list(self.move_listeners):
            listener(x, y)


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def qt_app(monkeypatch):
    monkeypatch.setenv("QT_QPA_PLATFORM", os.getenv("QT_QPA_PLATFORM", "offscreen"))
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
