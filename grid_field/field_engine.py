"""Host-lifecycle engine: keeps the grid layer and shape layer in sync with host inputs."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from grid_field.delayed_task import AfterCancelFn, AfterFn, DelayedTask
from grid_field.field_config import FieldConfig
from grid_field.grid_metrics import GridMetrics, compute_grid_metrics
from grid_field.grid_painter import paint_grid
from grid_field.host_inputs import HostContext, read_axis_limits, read_circle_input, read_surface_size
from grid_field.interaction_controller import InteractionController, MoveListener
from grid_field.painter_adapter import SurfacePainterAdapter
from grid_field.shape_model import STATIC_CIRCLES, Circle, CircleSet, load_circles
from grid_field.shape_renderer import render_circles

_LOGGER = logging.getLogger("GridField.Engine")

PaintFn = Callable[[SurfacePainterAdapter], None]
ClickHandler = Callable[[float, float], None]


class FieldSurface:
    """Mount point contract: two paint layers, a tooltip, and pointer hooks."""

    def resize_surface(self, width: int, height: int) -> None: ...
    def paint_grid_layer(self, paint_fn: PaintFn) -> None: ...
    def paint_shape_layer(self, paint_fn: PaintFn) -> None: ...
    def show_tooltip(self, x: float, y: float, text: str) -> None: ...
    def hide_tooltip(self) -> None: ...
    def set_click_handler(self, handler: Optional[ClickHandler]) -> None: ...
    def add_move_listener(self, listener: MoveListener) -> None: ...
    def remove_move_listener(self, listener: MoveListener) -> None: ...


@dataclass
class RenderStats:
    grid_recomputes: int = 0
    grid_paints: int = 0
    shape_paints: int = 0


class FieldEngine:
    """Implements initialize/refresh/get_outputs/teardown for a host."""

    def __init__(self, config: FieldConfig, *, after: AfterFn, after_cancel: AfterCancelFn) -> None:
        self._config = config
        self._delayed_task = DelayedTask(after, after_cancel)
        self._surface: Optional[FieldSurface] = None
        self._interaction: Optional[InteractionController] = None
        self._rerender_callback: Optional[Callable[[], None]] = None
        self._persisted_state: Dict[str, Any] = {}
        self._metrics: Optional[GridMetrics] = None
        self._layout_params: Optional[Tuple[int, int, float, float]] = None
        self._surface_size: Optional[Tuple[int, int]] = None
        self._circles = CircleSet()
        self.stats = RenderStats()

    @property
    def config(self) -> FieldConfig:
        return self._config

    @property
    def metrics(self) -> Optional[GridMetrics]:
        return self._metrics

    @property
    def circles(self) -> Tuple[Circle, ...]:
        return self._circles.circles

    @property
    def interaction(self) -> Optional[InteractionController]:
        return self._interaction

    def initialize(
        self,
        host_context: HostContext,
        rerender_callback: Optional[Callable[[], None]],
        persisted_state: Optional[Mapping[str, Any]],
        mount_point: FieldSurface,
    ) -> None:
        self._surface = mount_point
        self._rerender_callback = rerender_callback
        self._persisted_state = dict(persisted_state or {})
        self._interaction = InteractionController(
            metrics_fn=lambda: self._metrics,
            show_tooltip_fn=mount_point.show_tooltip,
            hide_tooltip_fn=mount_point.hide_tooltip,
            add_move_listener_fn=mount_point.add_move_listener,
            remove_move_listener_fn=mount_point.remove_move_listener,
            delayed_task=self._delayed_task,
            timeout_ms=self._config.tooltip_timeout_ms,
            tooltip_offset=self._config.tooltip_offset,
            log_fn=_LOGGER.debug,
        )
        mount_point.set_click_handler(self._interaction.handle_click)
        _LOGGER.debug("Engine initialised: variant=%s margin=%d", self._config.variant, self._config.margin)

    def refresh(self, host_context: HostContext) -> None:
        surface = self._surface
        if surface is None:
            _LOGGER.debug("Refresh ignored; engine not initialised")
            return
        config = self._config
        width, height = read_surface_size(host_context, config)
        limit_x, limit_y = read_axis_limits(host_context, config)

        params = (width, height, limit_x, limit_y)
        if params != self._layout_params:
            if (width, height) != self._surface_size:
                surface.resize_surface(width, height)
                self._surface_size = (width, height)
            self._metrics = compute_grid_metrics(
                width,
                height,
                limit_x,
                limit_y,
                margin=config.margin,
                min_surface_size=config.min_surface_size,
                default_axis_limit=config.default_axis_limit,
            )
            self._layout_params = params
            self.stats.grid_recomputes += 1
            if self._interaction is not None:
                self._interaction.hide_tooltip()
            self._repaint_grid()

        if config.is_static:
            circles: Tuple[Circle, ...] = STATIC_CIRCLES
        else:
            circles = load_circles(read_circle_input(host_context))
        if self._circles.replace(circles):
            _LOGGER.debug("Circle set replaced (%d circles)", len(circles))
        self._repaint_shapes()

    def get_outputs(self) -> Dict[str, Any]:
        return {}

    def teardown(self) -> None:
        if self._interaction is not None:
            self._interaction.teardown()
        self._delayed_task.cancel()
        if self._surface is not None:
            self._surface.set_click_handler(None)
            _LOGGER.debug("Engine torn down")
        self._surface = None
        self._interaction = None
        self._rerender_callback = None

    def _repaint_grid(self) -> None:
        metrics = self._metrics
        surface = self._surface
        if metrics is None or surface is None:
            return
        style = self._config.style
        drawn: list[int] = []
        surface.paint_grid_layer(lambda adapter: drawn.append(paint_grid(adapter, metrics, style)))
        self.stats.grid_paints += 1
        _LOGGER.debug(
            "Grid repainted: surface=%dx%d unit=%d bounds=(%.1f, %.1f)-(%.1f, %.1f) primitives=%s",
            metrics.surface_width,
            metrics.surface_height,
            metrics.unit_size,
            metrics.grid_left,
            metrics.grid_top,
            metrics.grid_right,
            metrics.grid_bottom,
            drawn[0] if drawn else 0,
        )

    def _repaint_shapes(self) -> None:
        metrics = self._metrics
        surface = self._surface
        if metrics is None or surface is None:
            return
        circles = self._circles.circles
        style = self._config.style
        variant = self._config.variant
        surface.paint_shape_layer(lambda adapter: render_circles(adapter, circles, metrics, style, variant=variant))
        self.stats.shape_paints += 1
