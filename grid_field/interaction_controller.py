from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from grid_field.coordinate_transform import CoordinateTransform, format_coordinates
from grid_field.delayed_task import DelayedTask
from grid_field.grid_metrics import GridMetrics

MoveListener = Callable[[float, float], None]


@dataclass(frozen=True)
class TooltipState:
    x: float
    y: float
    text: str


def _noop_log(message: str, *args: object) -> None:
    return None


class InteractionController:
    """Click-to-read-out coordinates with a self-expiring tooltip."""

    def __init__(
        self,
        *,
        metrics_fn: Callable[[], Optional[GridMetrics]],
        show_tooltip_fn: Callable[[float, float, str], None],
        hide_tooltip_fn: Callable[[], None],
        add_move_listener_fn: Callable[[MoveListener], None],
        remove_move_listener_fn: Callable[[MoveListener], None],
        delayed_task: DelayedTask,
        timeout_ms: int = 2000,
        tooltip_offset: int = 10,
        log_fn: Optional[Callable[..., None]] = None,
    ) -> None:
        self._metrics = metrics_fn
        self._show_tooltip = show_tooltip_fn
        self._hide_tooltip = hide_tooltip_fn
        self._add_move_listener = add_move_listener_fn
        self._remove_move_listener = remove_move_listener_fn
        self._expiry = delayed_task
        self._timeout_ms = timeout_ms
        self._offset = tooltip_offset
        self._log = log_fn or _noop_log
        self._tooltip: Optional[TooltipState] = None
        self._move_listener_registered = False

    @property
    def tooltip(self) -> Optional[TooltipState]:
        return self._tooltip

    @property
    def expiry_pending(self) -> bool:
        return self._expiry.pending

    def handle_click(self, x: float, y: float) -> Optional[TooltipState]:
        metrics = self._metrics()
        if metrics is None or not metrics.contains(x, y):
            self.hide_tooltip()
            return None

        data_x, data_y = CoordinateTransform(metrics).to_data(x, y)
        state = TooltipState(x + self._offset, y + self._offset, format_coordinates(data_x, data_y))
        self._tooltip = state
        self._show_tooltip(state.x, state.y, state.text)
        self._expiry.arm(self._timeout_ms, self._on_expired)
        if not self._move_listener_registered:
            self._add_move_listener(self._on_pointer_move)
            self._move_listener_registered = True
        self._log("Click at (%s, %s) -> %s", x, y, state.text)
        return state

    def hide_tooltip(self) -> None:
        self._expiry.cancel()
        self._detach_move_listener()
        if self._tooltip is not None:
            self._tooltip = None
            self._hide_tooltip()

    def teardown(self) -> None:
        self.hide_tooltip()

    def _on_pointer_move(self, x: float, y: float) -> None:
        self.hide_tooltip()

    def _on_expired(self) -> None:
        self._detach_move_listener()
        if self._tooltip is not None:
            self._tooltip = None
            self._hide_tooltip()

    def _detach_move_listener(self) -> None:
        if not self._move_listener_registered:
            return
        self._move_listener_registered = False
        self._remove_move_listener(self._on_pointer_move)
