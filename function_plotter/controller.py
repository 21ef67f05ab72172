"""Viewport ownership and the zoom/pan gestures.

Purpose
-------
``ViewportController`` is the single owner of the current :class:`Viewport`.
Gestures arrive as typed events (:class:`WheelEvent`, :class:`PointerDelta`)
from whatever event loop hosts the plotter; the controller only does the
arithmetic and never triggers drawing itself.

Important gotchas
-----------------
- Zooming is about the math point under the cursor, computed from the
  viewport *before* the zoom, so that point stays under the same pixel.
- A zoom that would shrink either span below ``min_span`` or grow it beyond
  ``max_span`` is rejected outright (the viewport is unchanged), so every
  applied zoom keeps the cursor point fixed.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .viewport import CoordinateTransform, Viewport

__all__ = ["ZoomDirection", "WheelEvent", "PointerDelta", "ViewportController"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ZoomDirection(enum.Enum):
    IN = "in"
    OUT = "out"


@dataclass(frozen=True)
class WheelEvent:
    """Wheel gesture at a cursor position (pixels)."""

    cursor_pixel: Tuple[float, float]
    direction: ZoomDirection

    @classmethod
    def from_delta(cls, cursor_pixel: Tuple[float, float], delta_y: float) -> "WheelEvent":
        """Build an event from a raw wheel delta; negative deltas zoom in."""
        return cls(cursor_pixel, ZoomDirection.IN if delta_y < 0 else ZoomDirection.OUT)


@dataclass(frozen=True)
class PointerDelta:
    """Pointer movement in pixels since the previous pointer sample."""

    dx: float
    dy: float


class ViewportController:
    """Own the viewport and apply zoom-about-cursor and pan-by-drag."""

    def __init__(
        self,
        viewport: Viewport,
        width: float,
        height: float,
        *,
        zoom_factor: float = 1.1,
        min_span: float = 1e-9,
        max_span: float = 1e12,
    ) -> None:
        if zoom_factor <= 1.0:
            raise ValueError("zoom_factor must be > 1")
        self._default = viewport
        self._viewport = viewport
        self.zoom_factor = float(zoom_factor)
        self.min_span = float(min_span)
        self.max_span = float(max_span)
        self.resize(width, height)

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def resize(self, width: float, height: float) -> None:
        if not (width > 0 and height > 0):
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._width = float(width)
        self._height = float(height)

    def transform(self) -> CoordinateTransform:
        """Return a transform for the current viewport snapshot."""
        return CoordinateTransform(self._viewport, self._width, self._height)

    def zoom(self, event: WheelEvent) -> bool:
        """Zoom about ``event.cursor_pixel``.

        Returns
        -------
        bool
            ``True`` if the viewport changed, ``False`` if the zoom was
            rejected by the span limits.
        """
        vp = self._viewport
        mouse_x, mouse_y = self.transform().to_math(*event.cursor_pixel)
        if event.direction is ZoomDirection.IN:
            scale = 1.0 / self.zoom_factor
        else:
            scale = self.zoom_factor

        candidate = self._scaled(vp, mouse_x, mouse_y, scale)
        if candidate is None:
            logger.debug("zoom %s at %r rejected by span limits", event.direction.value, event.cursor_pixel)
            return False
        self._viewport = candidate
        return True

    def _scaled(self, vp: Viewport, cx: float, cy: float, scale: float) -> Optional[Viewport]:
        x_min = cx + (vp.x_min - cx) * scale
        x_max = cx + (vp.x_max - cx) * scale
        y_min = cy + (vp.y_min - cy) * scale
        y_max = cy + (vp.y_max - cy) * scale
        for span in (x_max - x_min, y_max - y_min):
            if not self.min_span <= span <= self.max_span:
                return None
        try:
            return Viewport(x_min, x_max, y_min, y_max)
        except ValueError:
            return None

    def pan(self, delta: PointerDelta) -> None:
        """Drag the content by ``delta`` pixels; spans are preserved."""
        vp = self._viewport
        shift_x = -delta.dx * vp.x_span / self._width
        shift_y = delta.dy * vp.y_span / self._height
        self._viewport = vp.shifted(shift_x, shift_y)

    def center_on(self, x: float, y: float) -> None:
        """Move the viewport so ``(x, y)`` is at its centre."""
        self._viewport = self._viewport.centered_on(x, y)

    def reset(self) -> None:
        self._viewport = self._default

    def __repr__(self) -> str:
        return f"ViewportController({self._viewport!r}, {self._width:g}x{self._height:g})"
