from __future__ import annotations

import logging
import math

import pytest

from function_plotter import (
    FilledCircle,
    FunctionPlotter,
    PlotterConfig,
    QueryStatus,
    StrokePolylines,
    Viewport,
    WheelEvent,
    ZoomDirection,
)


def _curves(commands):
    return [c for c in commands if isinstance(c, StrokePolylines)]


def test_two_equations_render_and_point_query(plotter) -> None:
    assert plotter.set_equations(["x^2", "sin(x)"]) == []
    curves = _curves(plotter.draw())
    assert [c.expression for c in curves] == ["x^2", "sin(x)"]
    assert all(c.polylines and all(len(p) > 1 for p in c.polylines) for c in curves)
    assert curves[0].color != curves[1].color

    results = plotter.query_point(3)
    assert [r.text for r in results] == ["x^2 -> 9.00", "sin(x) -> 0.14"]
    assert results[1].y == pytest.approx(math.sin(3))


def test_compile_failures_do_not_stop_other_equations(plotter) -> None:
    failures = plotter.set_equations(["x +", "x"])
    assert [f.source_index for f in failures] == [0]
    assert [c.expression for c in _curves(plotter.draw())] == ["x"]


def test_point_query_reports_undefined_and_skips_hidden(plotter) -> None:
    plotter.set_equations([("1/x", True), ("x", False), ("sqrt(x)", True)])
    results = plotter.query_point("0")
    assert [r.expression for r in results] == ["1/x", "sqrt(x)"]
    assert results[0].status is QueryStatus.UNDEFINED
    assert results[0].y is None
    assert results[0].text == "1/x: undefined at x = 0.00"
    assert results[1].status is QueryStatus.OK


def test_point_query_rejects_non_numeric_x(plotter) -> None:
    plotter.set_equations(["x"])
    with pytest.raises(ValueError):
        plotter.query_point("abc")


def test_point_query_can_recenter_view(plotter) -> None:
    plotter.set_equations(["x^2"])
    plotter.query_point(3, recenter=True)
    assert plotter.viewport.center == pytest.approx((3.0, 9.0))
    assert plotter.viewport.x_span == pytest.approx(20.0)


def test_wheel_zooms_about_cursor_and_redraws(plotter) -> None:
    plotter.set_equations(["x"])
    cursor = (200.0, 150.0)
    before = plotter.controller.transform().to_math(*cursor)
    commands = plotter.handle_wheel(WheelEvent(cursor, ZoomDirection.IN))
    assert plotter.controller.transform().to_math(*cursor) == pytest.approx(before)
    assert plotter.viewport.x_span < 20.0
    assert _curves(commands)


def test_drag_pans_and_pointer_up_stops(plotter) -> None:
    plotter.set_equations(["x"])
    assert plotter.cursor_style == "grab"
    plotter.handle_pointer_down((100.0, 100.0))
    assert plotter.is_panning and plotter.cursor_style == "grabbing"
    plotter.handle_pointer_move((140.0, 100.0))
    assert plotter.viewport.x_min == pytest.approx(-11.0)
    plotter.handle_pointer_move((180.0, 100.0))
    assert plotter.viewport.x_min == pytest.approx(-12.0)
    assert plotter.viewport.x_span == pytest.approx(20.0)

    plotter.handle_pointer_up()
    plotter.handle_pointer_move((300.0, 100.0))
    assert plotter.viewport.x_min == pytest.approx(-12.0)


def test_pointer_leave_ends_drag(plotter) -> None:
    plotter.handle_pointer_down((0.0, 0.0))
    plotter.handle_pointer_leave()
    assert not plotter.is_panning


def test_hover_near_curve_overlays_marker(plotter) -> None:
    plotter.set_equations(["x"])
    on_curve = plotter.controller.transform().to_pixel(1.0, 1.0)
    commands = plotter.handle_pointer_move(on_curve)
    assert isinstance(commands[-2], FilledCircle)
    assert commands[-1].text == "(1.00, 1.00)"

    far = (on_curve[0], on_curve[1] + 200.0)
    assert not any(isinstance(c, FilledCircle) for c in plotter.handle_pointer_move(far))


def test_reset_view_restores_default_viewport(plotter) -> None:
    plotter.handle_wheel(WheelEvent((10.0, 10.0), ZoomDirection.OUT))
    plotter.reset_view()
    assert plotter.viewport == Viewport(-10, 10, -10, 10)


def test_draw_is_not_reentrant(plotter) -> None:
    plotter._drawing = True
    with pytest.raises(RuntimeError):
        plotter.draw()


def test_custom_config_and_resize() -> None:
    config = PlotterConfig(default_viewport=Viewport(0, 4, 0, 3), samples_per_pixel=2)
    plotter = FunctionPlotter(width=40, height=30, config=config)
    plotter.set_equations(["1"])
    line = _curves(plotter.draw())[0].polylines[0]
    assert len(line) == 40 * 2 + 1
    plotter.resize(80, 30)
    assert plotter.width == 80.0
    assert len(_curves(plotter.draw())[0].polylines[0]) == 80 * 2 + 1


def test_render_logging_is_rate_limited(plotter, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="function_plotter.plotter"):
        plotter.draw()
        plotter.draw()
    assert len([r for r in caplog.records if "render(reason=" in r.getMessage()]) == 1


@pytest.mark.parametrize("text", ["gamma(x)", "x!", "Max(x,1)"])
def test_math_module_functions_draw_and_query(plotter, text: str) -> None:
    assert plotter.set_equations([text]) == []
    curves = _curves(plotter.draw())
    assert curves and sum(len(p) for p in curves[0].polylines) > 0
    plotter.handle_pointer_move((400.0, 300.0))

    [result] = plotter.query_point(2)
    assert result.status is QueryStatus.OK
    assert result.y == pytest.approx({"gamma(x)": 1.0, "x!": 2.0, "Max(x,1)": 2.0}[text])


def test_raising_evaluation_is_an_error_status_and_breaks_the_curve(plotter) -> None:
    plotter.set_equations(["gamma(x)", "x!"])
    gamma, factorial = plotter.query_point(0)
    assert gamma.status is QueryStatus.ERROR
    assert gamma.y is None
    assert gamma.text == "gamma(x): error evaluating at x = 0.00"
    assert factorial.status is QueryStatus.OK

    [at_pole] = plotter.query_point(-1)[1:]
    assert at_pole.status is QueryStatus.ERROR
    assert at_pole.text == "x!: error evaluating at x = -1.00"

    curve = _curves(plotter.draw())[0]
    assert len(curve.polylines) > 1
