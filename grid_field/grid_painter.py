"""Grid layer painting: minor gridlines, axes and tick labels."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from grid_field.coordinate_transform import format_fixed
from grid_field.field_config import FieldStyle
from grid_field.grid_metrics import GridMetrics
from grid_field.painter_adapter import SurfacePainterAdapter

LABEL_STEP = 0.5
# Half a pixel puts 1 px lines on pixel centres.
LINE_ALIGN = 0.5


@dataclass(frozen=True)
class GridLine:
    orientation: str  # "vertical" or "horizontal"
    position: float
    start: float
    end: float
    solid: bool


def _minor_offsets(span: float, step: float, half_unit: float) -> List[Tuple[float, bool]]:
    # The offset accumulates by repeated addition; near-boundary lines may
    # classify as dashed when the float sum drifts off an exact half unit.
    offsets: List[Tuple[float, bool]] = []
    offset = 0.0
    while offset <= span:
        offsets.append((offset, offset % half_unit == 0))
        offset += step
    return offsets


def grid_lines(metrics: GridMetrics) -> List[GridLine]:
    """Minor gridlines for both axes, vertical lines first."""
    half_unit = metrics.unit_size * 0.5
    lines: List[GridLine] = []
    for offset, solid in _minor_offsets(metrics.grid_width, metrics.grid_step, half_unit):
        lines.append(
            GridLine(
                orientation="vertical",
                position=metrics.grid_left + offset + LINE_ALIGN,
                start=metrics.grid_top,
                end=metrics.grid_bottom,
                solid=solid,
            )
        )
    for offset, solid in _minor_offsets(metrics.grid_height, metrics.grid_step, half_unit):
        lines.append(
            GridLine(
                orientation="horizontal",
                position=metrics.grid_top + offset + LINE_ALIGN,
                start=metrics.grid_left,
                end=metrics.grid_right,
                solid=solid,
            )
        )
    return lines


def tick_values(axis_limit: float) -> List[float]:
    values: List[float] = []
    value = -axis_limit
    while value <= axis_limit:
        values.append(value)
        value += LABEL_STEP
    return values


def paint_grid(adapter: SurfacePainterAdapter, metrics: GridMetrics, style: FieldStyle) -> int:
    """Paint the whole grid layer and return the number of primitives drawn."""
    drawn = 0
    for line in grid_lines(metrics):
        adapter.set_pen(
            style.grid_line_color,
            width=style.grid_line_width,
            dash=() if line.solid else style.minor_dash,
        )
        if line.orientation == "vertical":
            adapter.draw_line(line.position, line.start, line.position, line.end)
        else:
            adapter.draw_line(line.start, line.position, line.end, line.position)
        drawn += 1

    adapter.set_pen(style.axis_color, width=style.axis_line_width)
    adapter.draw_line(metrics.grid_left, metrics.center_y, metrics.grid_right, metrics.center_y)
    adapter.draw_line(metrics.center_x, metrics.grid_bottom, metrics.center_x, metrics.grid_top)
    drawn += 2

    adapter.set_font(style.label_font_family, style.label_font_px)
    unit = metrics.unit_size
    label_y = metrics.grid_top - style.label_offset
    for value in tick_values(metrics.axis_limit_x):
        adapter.draw_text(
            metrics.center_x + value * unit,
            label_y,
            format_fixed(value),
            style.label_color,
            rotation=90.0,
        )
        drawn += 1
    label_x = metrics.grid_right + style.label_offset
    for value in tick_values(metrics.axis_limit_y):
        adapter.draw_text(label_x, metrics.center_y - value * unit, format_fixed(value), style.label_color)
        drawn += 1
    return drawn
