"""Grid-line spacing on a 1/2/5 x 10^k "nice number" ladder."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

__all__ = ["TARGET_INTERVALS", "grid_spacing", "grid_positions"]

TARGET_INTERVALS = 10

# A ladder step is accepted while it yields at most ~12 intervals.
_LADDER = (1.0, 2.0, 5.0, 10.0)
_TOLERANCE = 1.2

# Relative slack for multiples whose quotient rounds just off an integer.
_SNAP = 1e-9


def grid_spacing(min_value: float, max_value: float) -> float:
    """Return the distance between adjacent grid lines for ``[min, max]``.

    Depends only on ``|max - min|``.

    Examples
    --------
    >>> grid_spacing(0, 100)
    10.0
    >>> grid_spacing(0, 47)
    5.0
    >>> grid_spacing(0, 23)
    2.0

    Raises
    ------
    ValueError
        If the range is zero or not finite.
    """
    span = abs(float(max_value) - float(min_value))
    if not math.isfinite(span) or span <= 0.0:
        raise ValueError(f"grid_spacing requires a finite, non-empty range, got ({min_value}, {max_value})")

    rough = span / TARGET_INTERVALS
    magnitude = 10.0 ** math.floor(math.log10(rough))
    residual = rough / magnitude
    for step in _LADDER:
        if residual <= step * _TOLERANCE:
            return step * magnitude
    return 10.0 * magnitude


def grid_positions(min_value: float, max_value: float, spacing: Optional[float] = None) -> np.ndarray:
    """Return every multiple of ``spacing`` inside ``[min, max]``.

    Positions start at ``ceil(min / spacing) * spacing`` and are computed from
    integer multiples rather than by repeated addition.
    """
    lo, hi = float(min_value), float(max_value)
    if spacing is None:
        spacing = grid_spacing(lo, hi)
    first = math.ceil(lo / spacing - _SNAP)
    last = math.floor(hi / spacing + _SNAP)
    if last < first:
        return np.empty(0, dtype=float)
    return np.arange(first, last + 1, dtype=float) * spacing
