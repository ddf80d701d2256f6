from __future__ import annotations

import json
import logging

import pytest

from grid_field.shape_model import (
    STATIC_CIRCLES,
    Circle,
    CircleFormatError,
    CircleSet,
    decode_circles,
    load_circles,
    paint_order,
)


def test_decode_reads_host_keys() -> None:
    text = json.dumps(
        [
            {"x": 0.5, "y": -0.25, "radius": 0.3, "outlineColor": "red", "fillColor": "#00ff00", "dashed": True, "zIndex": 2},
            {"x": 0, "y": 0, "radius": 1, "outlineColor": "blue", "fillColor": None, "dashed": False, "zIndex": 0},
        ]
    )

    circles = decode_circles(text)

    assert circles == (
        Circle(x=0.5, y=-0.25, radius=0.3, outline_color="red", fill_color="#00ff00", dashed=True, z_index=2),
        Circle(x=0.0, y=0.0, radius=1.0, outline_color="blue", fill_color=None, dashed=False, z_index=0),
    )


def test_optional_fields_take_defaults() -> None:
    (circle,) = decode_circles('[{"x": 1, "y": 2, "radius": 0.5}]')

    assert circle.outline_color == "#000000"
    assert circle.fill_color is None
    assert circle.dashed is False
    assert circle.z_index == 0


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "{broken",
        '{"x": 1}',
        '"circle"',
        "42",
        '[{"x": 1' + "0" * 400 + ', "y": 0, "radius": 1}]',
        '[{"x": ' + "1" * 5001 + ', "y": 0, "radius": 1}]',
        "[" * 100000,
    ],
    ids=["text", "truncated", "object", "string", "number", "float-overflow", "long-integer", "deep-nesting"],
)
def test_malformed_input_yields_empty_set(text: str, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="GridField.Shapes")

    assert decode_circles(text) == ()
    assert caplog.records


@pytest.mark.parametrize("text", [None, "", "   "])
def test_absent_input_is_empty_without_warning(text, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="GridField.Shapes")

    assert decode_circles(text) == ()
    assert not caplog.records


@pytest.mark.parametrize(
    "record",
    [
        {"y": 0, "radius": 1},
        {"x": "left", "y": 0, "radius": 1},
        {"x": 0, "y": 0, "radius": 0},
        {"x": 0, "y": 0, "radius": -1},
        {"x": True, "y": 0, "radius": 1},
        {"x": 0, "y": 0, "radius": 1, "dashed": "yes"},
        {"x": 0, "y": 0, "radius": 1, "outlineColor": 5},
        ["x", 0],
    ],
)
def test_invalid_record_rejected(record) -> None:
    with pytest.raises(CircleFormatError):
        Circle.from_record(record)


def test_one_invalid_record_empties_the_whole_set() -> None:
    text = json.dumps([{"x": 0, "y": 0, "radius": 1}, {"x": 0, "y": 0}])

    assert decode_circles(text) == ()


def test_load_circles_accepts_decoded_records() -> None:
    circles = load_circles([{"x": 1, "y": 1, "radius": 0.2, "zIndex": 4}])

    assert circles == (Circle(x=1, y=1, radius=0.2, z_index=4),)
    assert load_circles({"x": 1}) == ()
    assert load_circles([{"x": 10**400, "y": 0, "radius": 1}]) == ()
    assert load_circles(b'[{"x": 0, "y": 0, "radius": 1}]') == (Circle(x=0, y=0, radius=1),)


def test_dynamic_order_sorts_by_z_index_and_keeps_ties_stable() -> None:
    a = Circle(x=0, y=0, radius=1, outline_color="a", z_index=3)
    b = Circle(x=0, y=0, radius=1, outline_color="b", z_index=1)
    c = Circle(x=0, y=0, radius=1, outline_color="c", z_index=2)
    d = Circle(x=0, y=0, radius=1, outline_color="d", z_index=1)

    ordered = paint_order([a, b, c, d], "dynamic")

    assert [circle.outline_color for circle in ordered] == ["b", "d", "c", "a"]


def test_static_order_is_declaration_order() -> None:
    ordered = paint_order(STATIC_CIRCLES, "static")

    assert ordered == list(STATIC_CIRCLES)


def test_circle_set_replaces_wholesale() -> None:
    circle_set = CircleSet()
    first = (Circle(x=0, y=0, radius=1),)
    second = (Circle(x=1, y=1, radius=0.5), Circle(x=-1, y=-1, radius=0.5))

    assert circle_set.replace(first) is True
    assert circle_set.replace(first) is False
    assert circle_set.replace(second) is True
    assert circle_set.circles == second
    assert len(circle_set) == 2
