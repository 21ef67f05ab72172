"""Draw command vocabulary produced by the renderer.

All coordinates are in pixels, origin top-left. Commands are immutable and
carry no reference to the rendering backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

Point = Tuple[float, float]
Segment = Tuple[Point, Point]


@dataclass(frozen=True)
class Clear:
    width: float
    height: float


@dataclass(frozen=True)
class StrokeSegments:
    """Independent straight segments sharing one style (grid lines, axes)."""

    role: str
    segments: Tuple[Segment, ...]
    color: str
    line_width: float


@dataclass(frozen=True)
class StrokePolylines:
    """The polylines of one equation's curve."""

    expression: str
    polylines: Tuple[Tuple[Point, ...], ...]
    color: str
    line_width: float


@dataclass(frozen=True)
class Label:
    """Text anchored at its bottom-left corner."""

    text: str
    x: float
    y: float
    font_size: float
    color: str


@dataclass(frozen=True)
class FilledCircle:
    x: float
    y: float
    radius: float
    color: str


DrawCommand = Union[Clear, StrokeSegments, StrokePolylines, Label, FilledCircle]

__all__ = [
    "Point",
    "Segment",
    "Clear",
    "StrokeSegments",
    "StrokePolylines",
    "Label",
    "FilledCircle",
    "DrawCommand",
]
