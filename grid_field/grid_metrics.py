"""Pixel layout of the grid derived from the surface size and axis limits."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

_LOGGER = logging.getLogger("GridField.Metrics")

DEFAULT_MARGIN = 30
MIN_SURFACE_SIZE = 200
DEFAULT_AXIS_LIMIT = 1.0
MIN_UNIT_SIZE = 10
UNIT_QUANTUM = 10


@dataclass(frozen=True)
class GridMetrics:
    surface_width: int
    surface_height: int
    margin: int
    axis_limit_x: float
    axis_limit_y: float
    unit_size: int
    grid_left: float
    grid_top: float
    grid_width: float
    grid_height: float
    center_x: float
    center_y: float
    grid_step: float

    @property
    def grid_right(self) -> float:
        return self.grid_left + self.grid_width

    @property
    def grid_bottom(self) -> float:
        return self.grid_top + self.grid_height

    def contains(self, x: float, y: float) -> bool:
        """Return True when the pixel lies on or inside the grid bounds."""
        return self.grid_left <= x <= self.grid_right and self.grid_top <= y <= self.grid_bottom


def _normalise_limit(value: Optional[float], default: float) -> float:
    try:
        numeric = float(value) if value is not None else 0.0
    except (TypeError, ValueError, OverflowError):
        numeric = 0.0
    if not math.isfinite(numeric) or numeric <= 0.0:
        _LOGGER.debug("Axis limit %r is not positive; using %s", value, default)
        return float(default)
    return numeric


def _normalise_size(value: Optional[int], minimum: int) -> int:
    try:
        numeric = int(value) if value is not None else 0
    except (TypeError, ValueError, OverflowError):
        numeric = 0
    if numeric < minimum:
        _LOGGER.debug("Surface size %r below minimum; clamping to %d", value, minimum)
        return minimum
    return numeric


def quantize_unit_size(raw_unit: float) -> int:
    """Floor to a multiple of 10, then clamp to at least 10."""
    return max(int(math.floor(raw_unit / UNIT_QUANTUM)) * UNIT_QUANTUM, MIN_UNIT_SIZE)


def compute_grid_metrics(
    surface_width: Optional[int],
    surface_height: Optional[int],
    axis_limit_x: Optional[float],
    axis_limit_y: Optional[float],
    *,
    margin: int = DEFAULT_MARGIN,
    min_surface_size: int = MIN_SURFACE_SIZE,
    default_axis_limit: float = DEFAULT_AXIS_LIMIT,
) -> GridMetrics:
    """Compute where the grid sits in pixel space.

    One unit size applies to both axes: the smaller of the per-axis raw sizes,
    quantized so gridlines land on round pixel multiples. The quantized grid is
    centred inside the surface even when it ends up smaller than the usable
    area.
    """
    width = _normalise_size(surface_width, min_surface_size)
    height = _normalise_size(surface_height, min_surface_size)
    limit_x = _normalise_limit(axis_limit_x, default_axis_limit)
    limit_y = _normalise_limit(axis_limit_y, default_axis_limit)

    usable_width = width - 2 * margin
    usable_height = height - 2 * margin
    raw_unit = min(usable_width / (limit_x * 2), usable_height / (limit_y * 2))
    unit_size = quantize_unit_size(raw_unit)

    grid_width = unit_size * limit_x * 2
    grid_height = unit_size * limit_y * 2
    grid_left = (width - grid_width) * 0.5
    grid_top = (height - grid_height) * 0.5

    return GridMetrics(
        surface_width=width,
        surface_height=height,
        margin=margin,
        axis_limit_x=limit_x,
        axis_limit_y=limit_y,
        unit_size=unit_size,
        grid_left=grid_left,
        grid_top=grid_top,
        grid_width=grid_width,
        grid_height=grid_height,
        center_x=grid_left + grid_width * 0.5,
        center_y=grid_top + grid_height * 0.5,
        grid_step=unit_size * 0.1,
    )


def compute_square_metrics(
    surface_size: Optional[int],
    axis_limit: Optional[float],
    *,
    margin: int = DEFAULT_MARGIN,
    min_surface_size: int = MIN_SURFACE_SIZE,
    default_axis_limit: float = DEFAULT_AXIS_LIMIT,
) -> GridMetrics:
    return compute_grid_metrics(
        surface_size,
        surface_size,
        axis_limit,
        axis_limit,
        margin=margin,
        min_surface_size=min_surface_size,
        default_axis_limit=default_axis_limit,
    )
