"""Nearest curve point to the cursor, for coordinate readout.

A brute-force local search: for each visible equation, sample a narrow
x-window centred on the cursor's math x, convert the finite samples to pixels,
and keep the global minimum of the Euclidean pixel distance to the cursor.

Tie-breaking is defined: when distances are equal, the earlier equation in
the list wins, and within one equation the smaller x wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .equations import Equation
from .sampling import SamplePoint
from .viewport import CoordinateTransform

__all__ = [
    "DEFAULT_WINDOW_FRACTION",
    "DEFAULT_NUM_SAMPLES",
    "DEFAULT_THRESHOLD",
    "ClosestPointResult",
    "find_nearest_point",
]

DEFAULT_WINDOW_FRACTION = 0.005
DEFAULT_NUM_SAMPLES = 100
DEFAULT_THRESHOLD = 10.0


@dataclass(frozen=True)
class ClosestPointResult:
    """Closest sampled curve point and the equation it belongs to.

    ``equation_index`` is the position within the sequence passed to
    :func:`find_nearest_point`.
    """

    point: SamplePoint
    equation_index: int
    distance_pixels: float
    expression: str = ""


def find_nearest_point(
    equations: Sequence[Equation],
    transform: CoordinateTransform,
    cursor: Tuple[float, float],
    *,
    window_fraction: float = DEFAULT_WINDOW_FRACTION,
    num_samples: int = DEFAULT_NUM_SAMPLES,
    threshold: float = DEFAULT_THRESHOLD,
) -> Optional[ClosestPointResult]:
    """Return the sampled point closest to ``cursor``, or ``None``.

    Parameters
    ----------
    equations : sequence of Equation
        Equations to search, in priority order. Callers pass visible ones.
    transform : CoordinateTransform
        Current viewport snapshot and surface size.
    cursor : tuple[float, float]
        Cursor position in pixels.
    window_fraction : float
        Search window width as a fraction of the viewport's x span.
    num_samples : int
        The window is split into this many intervals; ``num_samples + 1``
        points are evaluated so the cursor's own x is always one of them.
    threshold : float
        A match is reported only when its distance is strictly below this.
    """
    cursor_px, cursor_py = float(cursor[0]), float(cursor[1])
    x_mouse, _ = transform.to_math(cursor_px, cursor_py)
    x_range = transform.viewport.x_span * window_fraction
    xs = np.linspace(x_mouse - x_range / 2.0, x_mouse + x_range / 2.0, int(num_samples) + 1)
    pixel_x = transform.x_to_pixel(xs)

    best: Optional[ClosestPointResult] = None
    for index, equation in enumerate(equations):
        ys = equation.evaluate.evaluate_many(xs)
        with np.errstate(all="ignore"):
            pixel_y = transform.y_to_pixel(ys)
            distances = np.hypot(pixel_x - cursor_px, pixel_y - cursor_py)
        finite = np.isfinite(ys) & np.isfinite(distances)
        if not finite.any():
            continue
        candidates = np.where(finite, distances, np.inf)
        i = int(np.argmin(candidates))
        distance = float(candidates[i])
        if best is None or distance < best.distance_pixels:
            best = ClosestPointResult(
                point=SamplePoint(float(xs[i]), float(ys[i]), float(pixel_x[i]), float(pixel_y[i])),
                equation_index=index,
                distance_pixels=distance,
                expression=equation.expression,
            )

    if best is None or not best.distance_pixels < threshold:
        return None
    return best
