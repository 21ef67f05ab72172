"""Viewport state and the math <-> pixel coordinate transform.

Purpose
-------
``Viewport`` is the visible mathematical rectangle ``[x_min, x_max] x
[y_min, y_max]``. ``CoordinateTransform`` maps that rectangle onto a
``width x height`` pixel surface whose origin is the top-left corner, so the
pixel y axis grows downward.

Important gotchas
-----------------
- ``Viewport`` is immutable; the controller replaces it rather than mutating
  it, so a transform built from one snapshot stays consistent for the whole
  render pass.
- Both transform directions accept scalars or NumPy arrays.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class Viewport:
    """Visible mathematical rectangle.

    Parameters
    ----------
    x_min, x_max : float
        Horizontal bounds, ``x_min < x_max``.
    y_min, y_max : float
        Vertical bounds, ``y_min < y_max``.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        for name in ("x_min", "x_max", "y_min", "y_max"):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ValueError(f"Viewport {name} must be finite, got {value!r}")
            object.__setattr__(self, name, value)
        if not self.x_min < self.x_max:
            raise ValueError(f"Viewport requires x_min < x_max, got ({self.x_min}, {self.x_max})")
        if not self.y_min < self.y_max:
            raise ValueError(f"Viewport requires y_min < y_max, got ({self.y_min}, {self.y_max})")

    @property
    def x_span(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_span(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.x_min + self.x_max) / 2.0, (self.y_min + self.y_max) / 2.0)

    def shifted(self, dx: float, dy: float) -> "Viewport":
        """Return a viewport moved by ``(dx, dy)`` in math units."""
        return Viewport(self.x_min + dx, self.x_max + dx, self.y_min + dy, self.y_max + dy)

    def centered_on(self, x: float, y: float) -> "Viewport":
        """Return a viewport with the same spans centred on ``(x, y)``."""
        half_x = self.x_span / 2.0
        half_y = self.y_span / 2.0
        return Viewport(x - half_x, x + half_x, y - half_y, y + half_y)


class CoordinateTransform:
    """Bidirectional mapping between math space and pixel space.

    ``to_pixel`` and ``to_math`` are exact inverses (up to floating-point
    rounding) for the same viewport snapshot and surface size. A zero-sized
    surface is a caller error and is not checked here.
    """

    __slots__ = ("viewport", "width", "height", "scale_x", "scale_y")

    def __init__(self, viewport: Viewport, width: float, height: float) -> None:
        self.viewport = viewport
        self.width = float(width)
        self.height = float(height)
        self.scale_x = self.width / viewport.x_span
        self.scale_y = self.height / viewport.y_span

    def to_pixel(self, x: Any, y: Any) -> Tuple[Any, Any]:
        vp = self.viewport
        px = (x - vp.x_min) * self.scale_x
        py = self.height - (y - vp.y_min) * self.scale_y
        return px, py

    def to_math(self, px: Any, py: Any) -> Tuple[Any, Any]:
        vp = self.viewport
        x = vp.x_min + (px / self.width) * vp.x_span
        y = vp.y_max - (py / self.height) * vp.y_span
        return x, y

    def x_to_pixel(self, x: Any) -> Any:
        return (x - self.viewport.x_min) * self.scale_x

    def y_to_pixel(self, y: Any) -> Any:
        return self.height - (y - self.viewport.y_min) * self.scale_y

    def __repr__(self) -> str:
        return f"CoordinateTransform({self.viewport!r}, width={self.width:g}, height={self.height:g})"
