"""Plotly rendering surface for draw commands.

Purpose
-------
Replays a frame's draw commands onto a ``plotly.graph_objects.Figure`` laid
out in pixel space: the x axis spans ``[0, width]`` and the y axis is
reversed so pixel ``y = 0`` is the top edge.

Concepts and structure
----------------------
- Segments and polylines become line traces; separate pieces are joined into
  a single trace with ``None`` breaks, which Plotly renders as pen-up gaps.
- Labels become annotations anchored bottom-left.
- The highlight circle becomes a filled layout shape.

Examples
--------
>>> from function_plotter import FunctionPlotter, PlotlySurface
>>> plotter = FunctionPlotter(width=800, height=600)
>>> plotter.set_equations(["sin(x)"])
[]
>>> fig = PlotlySurface(800, 600).draw(plotter.draw())  # doctest: +SKIP
>>> fig.show()  # doctest: +SKIP
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

import plotly.graph_objects as go

from .draw_commands import (
    Clear,
    DrawCommand,
    FilledCircle,
    Label,
    StrokePolylines,
    StrokeSegments,
)

__all__ = ["PlotlySurface"]


def _join_with_breaks(pieces: Iterable[Sequence[tuple[float, float]]]) -> tuple[List[Optional[float]], List[Optional[float]]]:
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    for piece in pieces:
        if not piece:
            continue
        if xs:
            xs.append(None)
            ys.append(None)
        for px, py in piece:
            xs.append(px)
            ys.append(py)
    return xs, ys


class PlotlySurface:
    """Turn draw commands into a pixel-space Plotly figure."""

    def __init__(self, width: float, height: float, *, font_family: str = "Arial") -> None:
        self.width = float(width)
        self.height = float(height)
        self.font_family = font_family

    def _layout(self) -> Dict[str, Any]:
        hidden_axis = dict(
            showgrid=False,
            zeroline=False,
            showticklabels=False,
            visible=False,
            fixedrange=True,
        )
        return dict(
            width=self.width,
            height=self.height,
            margin=dict(l=0, r=0, t=0, b=0),
            paper_bgcolor="#ffffff",
            plot_bgcolor="#ffffff",
            showlegend=False,
            xaxis=dict(range=[0.0, self.width], **hidden_axis),
            yaxis=dict(range=[self.height, 0.0], **hidden_axis),
        )

    def draw(self, commands: Iterable[DrawCommand], figure: Optional[go.Figure] = None) -> go.Figure:
        """Replay ``commands`` and return the figure.

        A :class:`Clear` command resets the figure (or starts a new one when
        ``figure`` is not given), so a full frame always begins from blank.
        """
        fig = figure if figure is not None else go.Figure()
        for command in commands:
            if isinstance(command, Clear):
                self.width, self.height = command.width, command.height
                fig.data = ()
                fig.layout = go.Layout(**self._layout())
            elif isinstance(command, StrokeSegments):
                xs, ys = _join_with_breaks(command.segments)
                fig.add_scatter(
                    x=xs,
                    y=ys,
                    mode="lines",
                    name=command.role,
                    hoverinfo="skip",
                    line=dict(color=command.color, width=command.line_width),
                )
            elif isinstance(command, StrokePolylines):
                xs, ys = _join_with_breaks(command.polylines)
                fig.add_scatter(
                    x=xs,
                    y=ys,
                    mode="lines",
                    name=command.expression,
                    connectgaps=False,
                    line=dict(color=command.color, width=command.line_width),
                )
            elif isinstance(command, Label):
                fig.add_annotation(
                    x=command.x,
                    y=command.y,
                    text=command.text,
                    showarrow=False,
                    xanchor="left",
                    yanchor="bottom",
                    font=dict(family=self.font_family, size=command.font_size, color=command.color),
                )
            elif isinstance(command, FilledCircle):
                fig.add_shape(
                    type="circle",
                    x0=command.x - command.radius,
                    x1=command.x + command.radius,
                    y0=command.y - command.radius,
                    y1=command.y + command.radius,
                    fillcolor=command.color,
                    line=dict(color=command.color, width=0),
                )
            else:
                raise TypeError(f"Unsupported draw command: {type(command).__name__}")
        return fig
