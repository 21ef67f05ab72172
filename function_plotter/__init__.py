"""Top-level public API for the ``function_plotter`` package.

This module re-exports the host-facing surface so callers can import from a
single namespace, for example:

>>> from function_plotter import FunctionPlotter, WheelEvent  # doctest: +SKIP

It exposes both the ``FunctionPlotter`` facade and the lower-level building
blocks (transform, grid spacing, sampler, nearest-point search) for hosts that
want to drive rendering themselves.
"""

from .config import PLOTTER_CONFIG_OPTIONS, PlotterConfig
from .controller import PointerDelta, ViewportController, WheelEvent, ZoomDirection
from .draw_commands import (
    Clear,
    DrawCommand,
    FilledCircle,
    Label,
    StrokePolylines,
    StrokeSegments,
)
from .equations import (
    ColorPalette,
    CompileFailure,
    Equation,
    EquationInput,
    EquationRegistry,
)
from .expression import (
    CompileError,
    CompiledExpression,
    EvaluationError,
    compile_expression,
)
from .grid import grid_positions, grid_spacing
from .InputConvert import InputConvert
from .nearest import ClosestPointResult, find_nearest_point
from .numpify import NumpifiedFunction, numpify
from .plotly_surface import PlotlySurface
from .plotter import FunctionPlotter, PointQueryResult, QueryStatus
from .render import RenderOrchestrator, format_coordinate
from .sampling import Polyline, SamplePoint, sample_curve
from .viewport import CoordinateTransform, Viewport

__all__ = [
    "PLOTTER_CONFIG_OPTIONS",
    "PlotterConfig",
    "PointerDelta",
    "ViewportController",
    "WheelEvent",
    "ZoomDirection",
    "Clear",
    "DrawCommand",
    "FilledCircle",
    "Label",
    "StrokePolylines",
    "StrokeSegments",
    "ColorPalette",
    "CompileFailure",
    "Equation",
    "EquationInput",
    "EquationRegistry",
    "CompileError",
    "CompiledExpression",
    "EvaluationError",
    "compile_expression",
    "grid_positions",
    "grid_spacing",
    "InputConvert",
    "ClosestPointResult",
    "find_nearest_point",
    "NumpifiedFunction",
    "numpify",
    "PlotlySurface",
    "FunctionPlotter",
    "PointQueryResult",
    "QueryStatus",
    "RenderOrchestrator",
    "format_coordinate",
    "Polyline",
    "SamplePoint",
    "sample_curve",
    "CoordinateTransform",
    "Viewport",
]
