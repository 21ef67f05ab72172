"""Curve sampling with pen-up breaks at discontinuities.

Purpose
-------
Walks one equation across the visible x-range at a fixed density and splits
the result into polylines. A sample is dropped, ending the current polyline,
when the equation is undefined there, the value is not finite, or the point
falls outside the surface vertically. This keeps poles such as ``1/x`` from
being joined by a vertical line through the asymptote.

Concepts and structure
----------------------
Sampling is vectorised: one ``evaluate_many`` call per equation, a boolean
validity mask, and run detection on that mask. Each run of consecutive valid
samples becomes a :class:`Polyline`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .equations import Equation
from .viewport import CoordinateTransform

__all__ = ["DEFAULT_DENSITY", "SamplePoint", "Polyline", "sample_curve"]

DEFAULT_DENSITY = 10


@dataclass(frozen=True)
class SamplePoint:
    """One evaluated point in both coordinate systems."""

    x: float
    y: float
    pixel_x: float
    pixel_y: float


class Polyline:
    """A contiguous run of samples drawn as one connected stroke.

    The coordinate arrays are read-only views.
    """

    __slots__ = ("x", "y", "pixel_x", "pixel_y")

    def __init__(self, x: np.ndarray, y: np.ndarray, pixel_x: np.ndarray, pixel_y: np.ndarray) -> None:
        for arr in (x, y, pixel_x, pixel_y):
            arr.flags.writeable = False
        self.x = x
        self.y = y
        self.pixel_x = pixel_x
        self.pixel_y = pixel_y

    def __len__(self) -> int:
        return int(self.x.shape[0])

    def __iter__(self) -> Iterator[SamplePoint]:
        for x, y, px, py in zip(self.x, self.y, self.pixel_x, self.pixel_y):
            yield SamplePoint(float(x), float(y), float(px), float(py))

    def pixel_points(self) -> tuple[tuple[float, float], ...]:
        return tuple(zip(self.pixel_x.tolist(), self.pixel_y.tolist()))

    def __repr__(self) -> str:
        if not len(self):
            return "Polyline([])"
        return f"Polyline(n={len(self)}, x=[{self.x[0]:g}, {self.x[-1]:g}])"


def _runs(mask: np.ndarray) -> list[tuple[int, int]]:
    """Return ``[start, stop)`` index pairs of consecutive ``True`` runs."""
    padded = np.concatenate(([False], mask, [False])).astype(np.int8)
    edges = np.flatnonzero(np.diff(padded))
    return list(zip(edges[0::2].tolist(), edges[1::2].tolist()))


def sample_curve(
    equation: Equation,
    transform: CoordinateTransform,
    density: int = DEFAULT_DENSITY,
) -> list[Polyline]:
    """Sample ``equation`` across the transform's viewport.

    Parameters
    ----------
    equation : Equation
        Compiled equation to sample.
    transform : CoordinateTransform
        Viewport snapshot plus surface size.
    density : int
        Samples per pixel of surface width.

    Returns
    -------
    list[Polyline]
        Disjoint polylines in ascending x order. Identical inputs always give
        identical output.
    """
    vp = transform.viewport
    steps = max(int(round(transform.width * density)), 1)
    xs = np.linspace(vp.x_min, vp.x_max, steps + 1)
    ys = equation.evaluate.evaluate_many(xs)

    with np.errstate(all="ignore"):
        pixel_x = transform.x_to_pixel(xs)
        pixel_y = transform.y_to_pixel(ys)
        valid = np.isfinite(ys) & (pixel_y >= 0.0) & (pixel_y <= transform.height)

    return [
        Polyline(xs[start:stop], ys[start:stop], pixel_x[start:stop], pixel_y[start:stop])
        for start, stop in _runs(valid)
    ]
