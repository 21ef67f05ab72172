"""Property-based checks for the transform, grid spacing and viewport gestures."""

from __future__ import annotations

import pytest

from function_plotter import (
    CoordinateTransform,
    PointerDelta,
    Viewport,
    ViewportController,
    WheelEvent,
    ZoomDirection,
    grid_spacing,
)

try:
    from hypothesis import given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


CENTERS = st.floats(min_value=-1e4, max_value=1e4, allow_nan=False, allow_infinity=False)
SPANS = st.floats(min_value=1e-3, max_value=1e4, allow_nan=False, allow_infinity=False)
UNIT = st.floats(min_value=0.0, max_value=1.0, allow_nan=False, allow_infinity=False)


@st.composite
def viewports(draw) -> Viewport:
    cx, cy = draw(CENTERS), draw(CENTERS)
    sx, sy = draw(SPANS), draw(SPANS)
    return Viewport(cx - sx / 2, cx + sx / 2, cy - sy / 2, cy + sy / 2)


@given(vp=viewports(), fx=UNIT, fy=UNIT)
def test_to_pixel_inverts_to_math(vp: Viewport, fx: float, fy: float) -> None:
    t = CoordinateTransform(vp, 800, 600)
    px, py = fx * 800, fy * 600
    back = t.to_pixel(*t.to_math(px, py))
    assert back == pytest.approx((px, py), abs=1e-4)


@given(lo=CENTERS, span=SPANS)
def test_grid_spacing_depends_only_on_span(lo: float, span: float) -> None:
    hi = lo + span
    spacing = grid_spacing(lo, hi)
    assert grid_spacing(hi, lo) == spacing
    assert grid_spacing(-hi, -lo) == spacing
    assert (hi - lo) / spacing <= 12.000001


@given(vp=viewports(), fx=UNIT, fy=UNIT, zoom_in=st.booleans())
def test_zoom_fixed_point(vp: Viewport, fx: float, fy: float, zoom_in: bool) -> None:
    controller = ViewportController(vp, 800, 600)
    cursor = (fx * 800, fy * 600)
    before = controller.transform().to_math(*cursor)
    direction = ZoomDirection.IN if zoom_in else ZoomDirection.OUT
    controller.zoom(WheelEvent(cursor, direction))
    after = controller.transform().to_math(*cursor)
    assert after[0] == pytest.approx(before[0], abs=1e-9 * max(1.0, abs(before[0])) + 1e-9 * vp.x_span)
    assert after[1] == pytest.approx(before[1], abs=1e-9 * max(1.0, abs(before[1])) + 1e-9 * vp.y_span)


@given(vp=viewports(), dx=st.floats(-500, 500), dy=st.floats(-500, 500))
def test_pan_preserves_spans(vp: Viewport, dx: float, dy: float) -> None:
    controller = ViewportController(vp, 800, 600)
    controller.pan(PointerDelta(dx, dy))
    assert controller.viewport.x_span == pytest.approx(vp.x_span, rel=1e-6)
    assert controller.viewport.y_span == pytest.approx(vp.y_span, rel=1e-6)
