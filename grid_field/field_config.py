"""Configuration helpers for the grid field engine."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

_LOGGER = logging.getLogger("GridField.Config")

DEBUG_ENV_VAR = "GRID_FIELD_DEBUG"
VARIANTS = ("dynamic", "static")


@dataclass(frozen=True)
class FieldStyle:
    """Colours, widths and dash patterns used by the painters."""

    grid_line_color: str = "#000000"
    grid_line_width: int = 1
    minor_dash: Tuple[float, ...] = (1, 1)
    axis_color: str = "#000000"
    axis_line_width: int = 2
    label_color: str = "#000000"
    label_font_family: str = "sans-serif"
    label_font_px: int = 10
    label_offset: int = 5
    circle_line_width: int = 2
    circle_dash: Tuple[float, ...] = (5, 3)
    pivot_ratio: float = 0.06
    pivot_fill_color: str = "#808080"
    pivot_dash: Tuple[float, ...] = (6, 4)
    tooltip_background: str = "rgba(0, 0, 0, 0.7)"
    tooltip_text_color: str = "#ffffff"
    tooltip_font_px: int = 12
    surface_border_color: str = "#000000"


@dataclass(frozen=True)
class FieldConfig:
    """Engine-wide settings; every value has a named default."""

    variant: str = "dynamic"
    margin: int = 30
    default_surface_size: int = 400
    min_surface_size: int = 200
    default_axis_limit: float = 1.0
    tooltip_timeout_ms: int = 2000
    tooltip_offset: int = 10
    debug: bool = False
    style: FieldStyle = field(default_factory=FieldStyle)

    @property
    def is_static(self) -> bool:
        return self.variant == "static"


def env_flag(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    source = os.environ if environ is None else environ
    value = source.get(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _coerce_int(key: str, value: Any, fallback: int) -> int:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        _LOGGER.warning("Ignoring invalid value for '%s': %r", key, value)
        return fallback


def _coerce_float(key: str, value: Any, fallback: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        _LOGGER.warning("Ignoring invalid value for '%s': %r", key, value)
        return fallback


def _coerce_dash(key: str, value: Any, fallback: Tuple[float, ...]) -> Tuple[float, ...]:
    if not isinstance(value, (list, tuple)):
        _LOGGER.warning("Ignoring invalid dash pattern for '%s': %r", key, value)
        return fallback
    try:
        pattern = tuple(float(item) for item in value)
    except (TypeError, ValueError):
        _LOGGER.warning("Ignoring invalid dash pattern for '%s': %r", key, value)
        return fallback
    if any(item <= 0 for item in pattern) or len(pattern) % 2:
        _LOGGER.warning("Dash pattern for '%s' needs an even number of positive lengths: %r", key, value)
        return fallback
    return pattern


def _style_from_mapping(data: Mapping[str, Any]) -> FieldStyle:
    defaults = FieldStyle()
    values: Dict[str, Any] = {}
    for style_field in fields(FieldStyle):
        key = style_field.name
        if key not in data:
            continue
        default_value = getattr(defaults, key)
        raw = data[key]
        if isinstance(default_value, tuple):
            values[key] = _coerce_dash(key, raw, default_value)
        elif isinstance(default_value, int):
            values[key] = max(0, _coerce_int(key, raw, default_value))
        elif isinstance(default_value, float):
            values[key] = max(0.0, _coerce_float(key, raw, default_value))
        else:
            values[key] = str(raw)
    return replace(defaults, **values)


def config_from_mapping(data: Mapping[str, Any], *, environ: Optional[Mapping[str, str]] = None) -> FieldConfig:
    """Build a FieldConfig from a decoded JSON object, falling back to defaults per key."""
    defaults = FieldConfig()

    variant = str(data.get("variant", defaults.variant)).strip().lower()
    if variant not in VARIANTS:
        _LOGGER.warning("Unknown variant %r; using '%s'", data.get("variant"), defaults.variant)
        variant = defaults.variant

    margin = max(0, _coerce_int("margin", data.get("margin", defaults.margin), defaults.margin))
    min_size = _coerce_int(
        "min_surface_size",
        data.get("min_surface_size", defaults.min_surface_size),
        defaults.min_surface_size,
    )
    min_size = max(min_size, 2 * margin + 1)
    default_size = _coerce_int(
        "default_surface_size",
        data.get("default_surface_size", defaults.default_surface_size),
        defaults.default_surface_size,
    )
    default_limit = _coerce_float(
        "default_axis_limit",
        data.get("default_axis_limit", defaults.default_axis_limit),
        defaults.default_axis_limit,
    )
    if default_limit <= 0:
        _LOGGER.warning("default_axis_limit must be positive; using %s", defaults.default_axis_limit)
        default_limit = defaults.default_axis_limit
    timeout = _coerce_int(
        "tooltip_timeout_ms",
        data.get("tooltip_timeout_ms", defaults.tooltip_timeout_ms),
        defaults.tooltip_timeout_ms,
    )
    offset = _coerce_int(
        "tooltip_offset",
        data.get("tooltip_offset", defaults.tooltip_offset),
        defaults.tooltip_offset,
    )

    style_block = data.get("style")
    if style_block is None:
        style = FieldStyle()
    elif isinstance(style_block, Mapping):
        style = _style_from_mapping(style_block)
    else:
        _LOGGER.warning("Style block is not a JSON object; using default style")
        style = FieldStyle()

    debug = bool(data.get("debug", defaults.debug)) or env_flag(DEBUG_ENV_VAR, environ)

    return FieldConfig(
        variant=variant,
        margin=margin,
        default_surface_size=max(min_size, default_size),
        min_surface_size=min_size,
        default_axis_limit=default_limit,
        tooltip_timeout_ms=max(0, timeout),
        tooltip_offset=offset,
        debug=debug,
        style=style,
    )


def load_field_config(path: Optional[Path], *, environ: Optional[Mapping[str, str]] = None) -> FieldConfig:
    """Read settings from a JSON file, returning defaults when it is absent or unusable."""
    if path is None:
        return config_from_mapping({}, environ=environ)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _LOGGER.debug("Field config not found at %s; using defaults", path)
        return config_from_mapping({}, environ=environ)
    except OSError as exc:
        _LOGGER.warning("Failed to read %s; using defaults (%s)", path, exc)
        return config_from_mapping({}, environ=environ)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        _LOGGER.warning("Failed to parse %s; using defaults (%s)", path, exc)
        return config_from_mapping({}, environ=environ)
    if not isinstance(data, dict):
        _LOGGER.warning("Field config at %s is not a JSON object; using defaults", path)
        return config_from_mapping({}, environ=environ)
    return config_from_mapping(data, environ=environ)
