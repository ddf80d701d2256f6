"""Boundary inputs supplied by the host: surface size, axis limits, circle JSON."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from grid_field.field_config import FieldConfig


@dataclass
class HostContext:
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def raw(self, name: str) -> Any:
        return self.parameters.get(name)

    @classmethod
    def from_values(cls, **values: Any) -> "HostContext":
        parameters: Dict[str, Any] = {key: value for key, value in values.items() if value is not None}
        return cls(parameters)


def _positive_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        numeric = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return None
    return numeric if numeric > 0 else None


def _positive_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(numeric) or numeric <= 0.0:
        return None
    return numeric


def read_surface_size(context: HostContext, config: FieldConfig) -> Tuple[int, int]:
    shared = _positive_int(context.raw("control_size"))
    width = _positive_int(context.raw("control_width")) or shared or config.default_surface_size
    height = _positive_int(context.raw("control_height")) or shared or config.default_surface_size
    return (max(width, config.min_surface_size), max(height, config.min_surface_size))


def read_axis_limits(context: HostContext, config: FieldConfig) -> Tuple[float, float]:
    shared = _positive_float(context.raw("axis_limit"))
    limit_x = _positive_float(context.raw("axis_limit_x")) or shared or config.default_axis_limit
    limit_y = _positive_float(context.raw("axis_limit_y")) or shared or config.default_axis_limit
    return (limit_x, limit_y)


def read_circle_input(context: HostContext) -> Any:
    """Raw JSON text, an already decoded record list, or None."""
    return context.raw("circle_json")
