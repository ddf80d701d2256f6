"""Bidirectional mapping between data coordinates and surface pixels."""
from __future__ import annotations

from typing import Tuple

from grid_field.grid_metrics import GridMetrics


def format_fixed(value: float) -> str:
    # Adding 0.0 folds -0.0 into 0.0 so it never prints as "-0.00".
    return f"{value + 0.0:.2f}"


def format_coordinates(x: float, y: float) -> str:
    return f"(x: {format_fixed(x)}, y: {format_fixed(y)})"


class CoordinateTransform:
    """Data <-> pixel conversion for one GridMetrics value. Data Y grows upwards."""

    def __init__(self, metrics: GridMetrics) -> None:
        self._metrics = metrics
        self._unit = float(metrics.unit_size)

    @property
    def metrics(self) -> GridMetrics:
        return self._metrics

    def to_pixel(self, data_x: float, data_y: float) -> Tuple[float, float]:
        metrics = self._metrics
        return (
            metrics.center_x + data_x * self._unit,
            metrics.center_y - data_y * self._unit,
        )

    def to_data(self, pixel_x: float, pixel_y: float) -> Tuple[float, float]:
        metrics = self._metrics
        return (
            (pixel_x - metrics.center_x) / self._unit,
            (metrics.center_y - pixel_y) / self._unit,
        )

    def radius_to_pixels(self, radius: float) -> float:
        return radius * self._unit
