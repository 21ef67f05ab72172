"""Frame sequencing: grid, axes, curves, then the cursor highlight.

``RenderOrchestrator.render`` turns one viewport snapshot and the current
equations into a complete list of draw commands. Every frame is a full
redraw; a hover highlight is drawn on top of a freshly rendered frame rather
than patched into the previous one.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .config import PlotterConfig
from .draw_commands import (
    Clear,
    DrawCommand,
    FilledCircle,
    Label,
    StrokePolylines,
    StrokeSegments,
)
from .equations import Equation
from .grid import grid_positions, grid_spacing
from .nearest import ClosestPointResult
from .sampling import sample_curve
from .viewport import CoordinateTransform, Viewport

__all__ = ["RenderOrchestrator", "format_coordinate"]


def format_coordinate(x: float, y: float, decimals: int = 2) -> str:
    """Return ``"(x, y)"`` with fixed decimals."""
    return f"({x:.{decimals}f}, {y:.{decimals}f})"


class RenderOrchestrator:
    """Build the draw commands for one frame."""

    def __init__(self, config: Optional[PlotterConfig] = None) -> None:
        self.config = config or PlotterConfig()

    def render(
        self,
        viewport: Viewport,
        equations: Sequence[Equation],
        width: float,
        height: float,
        highlight: Optional[ClosestPointResult] = None,
    ) -> List[DrawCommand]:
        """Return the commands for a full frame.

        Only visible equations are drawn, in input order.
        """
        transform = CoordinateTransform(viewport, width, height)
        commands: List[DrawCommand] = [Clear(transform.width, transform.height)]
        commands.append(self._gridlines(transform))
        commands.extend(self._axes(transform))
        for equation in equations:
            if equation.visible:
                commands.append(self._curve(equation, transform))
        if highlight is not None:
            commands.extend(self._highlight(highlight))
        return commands

    def _gridlines(self, transform: CoordinateTransform) -> StrokeSegments:
        vp = transform.viewport
        segments = []
        for px in transform.x_to_pixel(grid_positions(vp.x_min, vp.x_max)).tolist():
            segments.append(((px, 0.0), (px, transform.height)))
        for py in transform.y_to_pixel(grid_positions(vp.y_min, vp.y_max)).tolist():
            segments.append(((0.0, py), (transform.width, py)))
        cfg = self.config
        return StrokeSegments("grid", tuple(segments), cfg.grid_color, cfg.grid_width)

    def _axes(self, transform: CoordinateTransform) -> List[DrawCommand]:
        cfg = self.config
        vp = transform.viewport
        y_zero = float(transform.y_to_pixel(0.0))
        x_zero = float(transform.x_to_pixel(0.0))
        out: List[DrawCommand] = [
            StrokeSegments(
                "axes",
                (
                    ((0.0, y_zero), (transform.width, y_zero)),
                    ((x_zero, 0.0), (x_zero, transform.height)),
                ),
                cfg.axis_color,
                cfg.axis_width,
            )
        ]

        # Labels sit just above the x axis and just right of the y axis.
        decimals = cfg.label_decimals
        x_spacing = grid_spacing(vp.x_min, vp.x_max)
        for x in grid_positions(vp.x_min, vp.x_max, x_spacing).tolist():
            px = float(transform.x_to_pixel(x))
            out.append(Label(f"{x:.{decimals}f}", px + 2.0, y_zero - 2.0, cfg.label_font_size, cfg.axis_color))
        y_spacing = grid_spacing(vp.y_min, vp.y_max)
        for y in grid_positions(vp.y_min, vp.y_max, y_spacing).tolist():
            py = float(transform.y_to_pixel(y))
            out.append(Label(f"{y:.{decimals}f}", x_zero + 2.0, py - 2.0, cfg.label_font_size, cfg.axis_color))
        return out

    def _curve(self, equation: Equation, transform: CoordinateTransform) -> StrokePolylines:
        polylines = sample_curve(equation, transform, self.config.samples_per_pixel)
        return StrokePolylines(
            expression=equation.expression,
            polylines=tuple(p.pixel_points() for p in polylines),
            color=equation.color,
            line_width=self.config.curve_width,
        )

    def _highlight(self, result: ClosestPointResult) -> List[DrawCommand]:
        cfg = self.config
        point = result.point
        return [
            FilledCircle(point.pixel_x, point.pixel_y, cfg.highlight_radius, cfg.highlight_color),
            Label(
                format_coordinate(point.x, point.y, cfg.label_decimals),
                point.pixel_x + 10.0,
                point.pixel_y - 10.0,
                cfg.highlight_font_size,
                cfg.highlight_label_color,
            ),
        ]
