"""Tunable constants for sampling, interaction and drawing.

``PlotterConfig`` gathers every number and colour the core uses so hosts can
override them in one place. ``PLOTTER_CONFIG_OPTIONS`` documents each field
for discoverability, mirroring how plot-style keywords are documented.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

import plotly.colors

from .InputConvert import InputConvert
from .viewport import Viewport

PLOTTER_CONFIG_OPTIONS: dict[str, str] = {
    "samples_per_pixel": "Curve samples per horizontal pixel.",
    "zoom_factor": "Scale applied per wheel step; must be > 1.",
    "min_span": "Smallest x/y span a zoom-in may produce.",
    "max_span": "Largest x/y span a zoom-out may produce.",
    "nearest_window_fraction": "Width of the cursor search window as a fraction of the x span.",
    "nearest_samples": "Samples taken inside the cursor search window, per equation.",
    "nearest_threshold": "Maximum pixel distance for a cursor match.",
    "default_viewport": "Viewport used at start-up and by reset.",
    "palette": "Ordered equation colours, assigned by position.",
    "curve_width": "Curve stroke width in pixels.",
    "grid_color": "Grid-line colour.",
    "grid_width": "Grid-line width in pixels.",
    "axis_color": "Axis and axis-label colour.",
    "axis_width": "Axis width in pixels.",
    "label_font_size": "Axis label font size in pixels.",
    "label_decimals": "Decimals shown in axis labels and coordinate readouts.",
    "highlight_color": "Fill colour of the nearest-point marker.",
    "highlight_radius": "Radius of the nearest-point marker in pixels.",
    "highlight_label_color": "Colour of the nearest-point coordinate text.",
    "highlight_font_size": "Font size of the nearest-point coordinate text.",
}

_FLOAT_FIELDS = (
    "zoom_factor",
    "min_span",
    "max_span",
    "nearest_window_fraction",
    "nearest_threshold",
    "curve_width",
    "grid_width",
    "axis_width",
    "label_font_size",
    "highlight_radius",
    "highlight_font_size",
)
_INT_FIELDS = ("samples_per_pixel", "nearest_samples", "label_decimals")


@dataclass(frozen=True)
class PlotterConfig:
    """Immutable configuration for a :class:`~function_plotter.plotter.FunctionPlotter`."""

    samples_per_pixel: int = 10
    zoom_factor: float = 1.1
    min_span: float = 1e-9
    max_span: float = 1e12
    nearest_window_fraction: float = 0.005
    nearest_samples: int = 100
    nearest_threshold: float = 10.0
    default_viewport: Viewport = field(default_factory=lambda: Viewport(-10.0, 10.0, -10.0, 10.0))
    palette: tuple[str, ...] = tuple(plotly.colors.qualitative.Plotly)
    curve_width: float = 2.0
    grid_color: str = "#e0e0e0"
    grid_width: float = 1.0
    axis_color: str = "#000000"
    axis_width: float = 2.0
    label_font_size: float = 10.0
    label_decimals: int = 2
    highlight_color: str = "red"
    highlight_radius: float = 5.0
    highlight_label_color: str = "black"
    highlight_font_size: float = 12.0

    def __post_init__(self) -> None:
        for name in _FLOAT_FIELDS:
            object.__setattr__(self, name, InputConvert(getattr(self, name), float))
        for name in _INT_FIELDS:
            object.__setattr__(self, name, InputConvert(getattr(self, name), int))

        if self.samples_per_pixel <= 0:
            raise ValueError("samples_per_pixel must be > 0")
        if self.zoom_factor <= 1.0:
            raise ValueError("zoom_factor must be > 1")
        if not 0.0 < self.min_span < self.max_span:
            raise ValueError("min_span and max_span must satisfy 0 < min_span < max_span")
        if not 0.0 < self.nearest_window_fraction <= 1.0:
            raise ValueError("nearest_window_fraction must be in (0, 1]")
        if self.nearest_samples <= 0:
            raise ValueError("nearest_samples must be > 0")
        if self.nearest_threshold <= 0.0:
            raise ValueError("nearest_threshold must be > 0")
        if self.label_decimals < 0:
            raise ValueError("label_decimals must be >= 0")
        if not isinstance(self.default_viewport, Viewport):
            raise TypeError("default_viewport must be a Viewport")
        palette = tuple(self.palette)
        if not palette:
            raise ValueError("palette must contain at least one colour")
        object.__setattr__(self, "palette", palette)

    def replace(self, **overrides: Any) -> "PlotterConfig":
        """Return a copy with ``overrides`` applied and validated.

        Raises
        ------
        TypeError
            If an override names an unknown option.
        """
        unknown = sorted(set(overrides) - set(PLOTTER_CONFIG_OPTIONS))
        if unknown:
            raise TypeError(f"Unknown PlotterConfig option(s): {', '.join(unknown)}")
        return dataclasses.replace(self, **overrides)


__all__ = ["PLOTTER_CONFIG_OPTIONS", "PlotterConfig"]
