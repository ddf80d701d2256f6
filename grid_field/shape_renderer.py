from __future__ import annotations

from typing import Sequence

from grid_field.coordinate_transform import CoordinateTransform
from grid_field.field_config import FieldStyle
from grid_field.grid_metrics import GridMetrics
from grid_field.painter_adapter import SurfacePainterAdapter
from grid_field.shape_model import Circle, paint_order


def _render_pivot(
    adapter: SurfacePainterAdapter,
    circle: Circle,
    cx: float,
    cy: float,
    parent_radius: float,
    style: FieldStyle,
) -> None:
    radius = parent_radius * style.pivot_ratio
    if circle.dashed:
        adapter.set_pen(circle.outline_color, width=style.circle_line_width, dash=style.pivot_dash)
    else:
        adapter.set_pen(circle.outline_color, width=style.circle_line_width)
        adapter.fill_circle(cx, cy, radius, style.pivot_fill_color)
    adapter.stroke_circle(cx, cy, radius)


def render_circles(
    adapter: SurfacePainterAdapter,
    circles: Sequence[Circle],
    metrics: GridMetrics,
    style: FieldStyle,
    *,
    variant: str = "dynamic",
) -> int:
    """Paint circles clipped to the grid bounds; returns how many were painted."""
    transform = CoordinateTransform(metrics)
    ordered = paint_order(circles, variant)

    adapter.save()
    adapter.clip_rect(metrics.grid_left, metrics.grid_top, metrics.grid_width, metrics.grid_height)
    try:
        for circle in ordered:
            cx, cy = transform.to_pixel(circle.x, circle.y)
            radius = transform.radius_to_pixels(circle.radius)
            adapter.set_pen(
                circle.outline_color,
                width=style.circle_line_width,
                dash=style.circle_dash if circle.dashed else (),
            )
            if circle.fill_color:
                adapter.fill_circle(cx, cy, radius, circle.fill_color)
            adapter.stroke_circle(cx, cy, radius)
            if variant == "static":
                _render_pivot(adapter, circle, cx, cy, radius, style)
    finally:
        adapter.restore()
    return len(ordered)
