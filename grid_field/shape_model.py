"""Circle records, decoding from host JSON, and paint ordering."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

_LOGGER = logging.getLogger("GridField.Shapes")

DEFAULT_OUTLINE_COLOR = "#000000"


class CircleFormatError(ValueError):
    """Raised when a record cannot be turned into a Circle."""


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    outline_color: str = DEFAULT_OUTLINE_COLOR
    fill_color: Optional[str] = None
    dashed: bool = False
    z_index: float = 0

    @classmethod
    def from_record(cls, record: Any) -> "Circle":
        if not isinstance(record, Mapping):
            raise CircleFormatError(f"circle record must be an object, got {type(record).__name__}")

        def _lookup(*keys: str) -> Any:
            for key in keys:
                if key in record:
                    return record[key]
            return None

        def _number(name: str, *keys: str, required: bool = True, default: float = 0.0) -> float:
            value = _lookup(*keys)
            if value is None:
                if required:
                    raise CircleFormatError(f"missing '{name}'")
                return default
            if isinstance(value, bool):
                raise CircleFormatError(f"'{name}' must be a number, got {value!r}")
            try:
                numeric = float(value)
            except OverflowError:
                raise CircleFormatError(f"'{name}' is out of range") from None
            except (TypeError, ValueError):
                raise CircleFormatError(f"'{name}' must be a number, got {value!r}") from None
            if not math.isfinite(numeric):
                raise CircleFormatError(f"'{name}' must be finite, got {value!r}")
            return numeric

        x = _number("x", "x")
        y = _number("y", "y")
        radius = _number("radius", "radius", "r")
        if radius <= 0:
            raise CircleFormatError(f"'radius' must be positive, got {radius!r}")
        z_index = _number("zIndex", "zIndex", "z_index", required=False)

        outline = _lookup("outlineColor", "outline_color")
        if outline is None or outline == "":
            outline = DEFAULT_OUTLINE_COLOR
        elif not isinstance(outline, str):
            raise CircleFormatError(f"'outlineColor' must be a string, got {outline!r}")

        fill = _lookup("fillColor", "fill_color")
        if fill == "":
            fill = None
        elif fill is not None and not isinstance(fill, str):
            raise CircleFormatError(f"'fillColor' must be a string or null, got {fill!r}")

        dashed = _lookup("dashed")
        if dashed is not None and not isinstance(dashed, bool):
            raise CircleFormatError(f"'dashed' must be a boolean, got {dashed!r}")

        return cls(
            x=x,
            y=y,
            radius=radius,
            outline_color=outline,
            fill_color=fill,
            dashed=bool(dashed),
            z_index=z_index,
        )


def circles_from_records(records: Any) -> Tuple[Circle, ...]:
    """Convert a decoded sequence; any invalid record rejects the whole set."""
    if not isinstance(records, (list, tuple)):
        raise CircleFormatError(f"circle data must be a list, got {type(records).__name__}")
    circles = []
    for index, record in enumerate(records):
        try:
            circles.append(Circle.from_record(record))
        except CircleFormatError as exc:
            raise CircleFormatError(f"record {index}: {exc}") from exc
    return tuple(circles)


def decode_circles(text: Optional[str]) -> Tuple[Circle, ...]:
    """Decode host JSON into circles; malformed input yields an empty tuple."""
    if not text or not text.strip():
        return ()
    try:
        records = json.loads(text)
    except (ValueError, RecursionError) as exc:
        _LOGGER.warning("Invalid JSON in circle data: %s", exc)
        return ()
    try:
        return circles_from_records(records)
    except CircleFormatError as exc:
        _LOGGER.warning("Ignoring circle data: %s", exc)
        return ()


def paint_order(circles: Sequence[Circle], variant: str) -> list[Circle]:
    if variant == "static":
        return list(circles)
    # sorted() is stable, so equal z-indices keep their input order.
    return sorted(circles, key=lambda circle: circle.z_index)


STATIC_CIRCLES: Tuple[Circle, ...] = (
    Circle(x=0.0, y=0.0, radius=0.75, outline_color="#1f4e79"),
    Circle(x=0.0, y=0.0, radius=0.5, outline_color="#2e75b6", fill_color="#ddebf7"),
    Circle(x=0.35, y=0.35, radius=0.2, outline_color="#c00000", dashed=True),
    Circle(x=-0.4, y=-0.3, radius=0.25, outline_color="#548235", fill_color="#e2efda"),
    Circle(x=0.5, y=-0.5, radius=0.15, outline_color="#bf8f00", dashed=True),
)


class CircleSet:
    """Current circles owned by the shape layer; replaced wholesale, never patched."""

    def __init__(self, circles: Iterable[Circle] = ()) -> None:
        self._circles: Tuple[Circle, ...] = tuple(circles)

    @property
    def circles(self) -> Tuple[Circle, ...]:
        return self._circles

    def replace(self, circles: Iterable[Circle]) -> bool:
        """Swap in a new set; returns True if it differs from the previous one."""
        new_circles = tuple(circles)
        changed = new_circles != self._circles
        self._circles = new_circles
        return changed

    def __iter__(self):
        return iter(self._circles)

    def __len__(self) -> int:
        return len(self._circles)


def load_circles(source: Any) -> Tuple[Circle, ...]:
    """Accept raw JSON text or an already decoded record list."""
    if source is None or isinstance(source, (str, bytes)):
        text = source.decode("utf-8", "replace") if isinstance(source, bytes) else source
        return decode_circles(text)
    try:
        return circles_from_records(source)
    except CircleFormatError as exc:
        _LOGGER.warning("Ignoring circle data: %s", exc)
        return ()
