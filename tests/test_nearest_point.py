from __future__ import annotations

import pytest

from function_plotter import CoordinateTransform, Viewport, find_nearest_point


@pytest.fixture
def transform() -> CoordinateTransform:
    return CoordinateTransform(Viewport(-10, 10, -10, 10), 800, 600)


def test_cursor_on_curve_returns_that_point(transform, make_equation) -> None:
    cursor = transform.to_pixel(2.0, 2.0)
    result = find_nearest_point([make_equation("x")], transform, cursor)
    assert result is not None
    assert result.distance_pixels == pytest.approx(0.0, abs=1e-6)
    assert result.point.x == pytest.approx(2.0)
    assert result.point.y == pytest.approx(2.0)
    assert result.equation_index == 0
    assert result.expression == "x"


def test_cursor_far_from_any_curve_returns_none(transform, make_equation) -> None:
    cursor = transform.to_pixel(2.0, 2.0)
    far_cursor = (cursor[0], cursor[1] + 1000.0)
    assert find_nearest_point([make_equation("x")], transform, far_cursor) is None


def test_threshold_is_strict(transform, make_equation) -> None:
    # y = 0 sits at pixel row 300; a cursor 10 px away is rejected, 9 px accepted.
    eq = make_equation("0")
    assert find_nearest_point([eq], transform, (400.0, 310.0)) is None
    hit = find_nearest_point([eq], transform, (400.0, 309.0))
    assert hit is not None
    assert hit.distance_pixels == pytest.approx(9.0)


def test_closest_equation_wins(transform, make_equation) -> None:
    cursor = transform.to_pixel(1.0, 1.1)
    result = find_nearest_point([make_equation("1"), make_equation("x + 0.1")], transform, cursor)
    assert result is not None
    assert result.equation_index == 1


def test_ties_go_to_the_earlier_equation(transform, make_equation) -> None:
    cursor = transform.to_pixel(0.0, 1.0)
    result = find_nearest_point([make_equation("1"), make_equation("1")], transform, cursor)
    assert result is not None
    assert result.equation_index == 0


def test_undefined_samples_are_skipped(transform, make_equation) -> None:
    cursor = transform.to_pixel(-1.0, 0.0)
    assert find_nearest_point([make_equation("sqrt(x)")], transform, cursor) is None
    assert find_nearest_point([], transform, cursor) is None
