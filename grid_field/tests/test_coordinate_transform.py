from __future__ import annotations

import pytest

from grid_field.coordinate_transform import CoordinateTransform, format_coordinates, format_fixed
from grid_field.grid_metrics import compute_grid_metrics, compute_square_metrics


def test_center_maps_to_origin() -> None:
    transform = CoordinateTransform(compute_square_metrics(400, 1))

    assert transform.to_data(200, 200) == (0.0, 0.0)
    assert transform.to_pixel(0, 0) == (200.0, 200.0)


def test_y_axis_is_inverted() -> None:
    transform = CoordinateTransform(compute_square_metrics(400, 1))

    assert transform.to_pixel(1, 1) == (370.0, 30.0)
    assert transform.to_pixel(-1, -1) == (30.0, 370.0)
    assert transform.to_data(30, 30) == (-1.0, 1.0)


def test_round_trip_within_tolerance() -> None:
    layouts = [
        compute_square_metrics(400, 1),
        compute_square_metrics(777, 2.5),
        compute_grid_metrics(640, 300, 3, 0.75),
        compute_square_metrics(200, 10),
    ]
    points = [(0.0, 0.0), (0.123456789, -0.987654321), (-3.5, 2.25), (1e6, -1e-6), (17.3, 0.1)]
    for metrics in layouts:
        transform = CoordinateTransform(metrics)
        for x, y in points:
            back_x, back_y = transform.to_data(*transform.to_pixel(x, y))
            assert back_x == pytest.approx(x, abs=1e-9, rel=1e-12)
            assert back_y == pytest.approx(y, abs=1e-9, rel=1e-12)


def test_radius_scales_by_unit_size() -> None:
    transform = CoordinateTransform(compute_square_metrics(400, 1))

    assert transform.radius_to_pixels(0.5) == 85.0


def test_format_coordinates_uses_two_decimals() -> None:
    assert format_coordinates(0.0, 0.0) == "(x: 0.00, y: 0.00)"
    assert format_coordinates(0.5, -0.25) == "(x: 0.50, y: -0.25)"
    assert format_coordinates(1 / 3, 2 / 3) == "(x: 0.33, y: 0.67)"


def test_negative_zero_prints_as_zero() -> None:
    assert format_fixed(-0.0) == "0.00"
