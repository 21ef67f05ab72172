"""Interactive function plotter core.

Purpose
-------
``FunctionPlotter`` is the entry point a host UI talks to. It owns the
viewport controller, the equation registry, the surface size and the drag
state, and turns host events into frames of draw commands.

Concepts and structure
----------------------
The host calls:

- :meth:`FunctionPlotter.set_equations` whenever the equation text boxes or
  their visibility toggles change, and shows the returned compile failures;
- :meth:`FunctionPlotter.handle_wheel` and the ``handle_pointer_*`` methods
  for gestures;
- :meth:`FunctionPlotter.query_point` for the "y at x" box;
- :meth:`FunctionPlotter.draw` for an explicit redraw.

Every gesture handler that changes what is on screen returns a complete frame
(a list of draw commands) for the host to hand to its rendering surface, for
example :class:`function_plotter.plotly_surface.PlotlySurface`.

Important gotchas
-----------------
- Everything runs synchronously on the caller's thread. A draw in progress
  must finish before another starts; a nested draw from the same call chain
  raises ``RuntimeError``.
- Pointer moves are not debounced: each one costs a full resample of every
  visible equation.

Logging
-------
Uses the standard ``logging`` framework with a ``NullHandler``; render logs are
rate-limited (info at most once per second, debug at most twice per second).

Examples
--------
>>> plotter = FunctionPlotter(width=800, height=600)
>>> plotter.set_equations(["x^2", "sin(x)"])
[]
>>> [r.text for r in plotter.query_point(3)]
['x^2 -> 9.00', 'sin(x) -> 0.14']
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from .config import PlotterConfig
from .controller import PointerDelta, ViewportController, WheelEvent
from .draw_commands import DrawCommand
from .equations import ColorPalette, CompileFailure, Equation, EquationEntry, EquationRegistry
from .expression import EvaluationError
from .InputConvert import InputConvert
from .nearest import ClosestPointResult, find_nearest_point
from .render import RenderOrchestrator
from .viewport import Viewport

__all__ = ["QueryStatus", "PointQueryResult", "FunctionPlotter"]

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class QueryStatus(enum.Enum):
    OK = "ok"
    UNDEFINED = "undefined"
    ERROR = "error"


@dataclass(frozen=True)
class PointQueryResult:
    """Outcome of evaluating one visible equation at a queried x.

    Parameters
    ----------
    expression : str
        Equation text.
    x : float
        Queried x.
    status : QueryStatus
        ``OK`` with a finite ``y``, ``UNDEFINED`` when the value is not a
        finite real number, ``ERROR`` when evaluation itself failed.
    y : float or None
        The value when ``status`` is ``OK``.
    text : str
        Display string, e.g. ``"x^2 -> 9.00"``.
    """

    expression: str
    x: float
    status: QueryStatus
    y: Optional[float]
    text: str


class FunctionPlotter:
    """Single owner of viewport, equations and interaction state.

    Parameters
    ----------
    width, height : float
        Rendering surface size in pixels.
    config : PlotterConfig, optional
        Tunables; defaults to :class:`PlotterConfig`.
    """

    def __init__(self, width: float = 800, height: float = 600, config: Optional[PlotterConfig] = None) -> None:
        self.config = config or PlotterConfig()
        self.controller = ViewportController(
            self.config.default_viewport,
            width,
            height,
            zoom_factor=self.config.zoom_factor,
            min_span=self.config.min_span,
            max_span=self.config.max_span,
        )
        self.equations = EquationRegistry(ColorPalette(self.config.palette))
        self.renderer = RenderOrchestrator(self.config)

        self._panning = False
        self._last_pointer: Optional[Tuple[float, float]] = None
        self._drawing = False
        self._render_info_last_log_t = 0.0
        self._render_debug_last_log_t = 0.0

    # --- state -----------------------------------------------------------

    @property
    def viewport(self) -> Viewport:
        return self.controller.viewport

    @property
    def width(self) -> float:
        return self.controller.width

    @property
    def height(self) -> float:
        return self.controller.height

    @property
    def is_panning(self) -> bool:
        return self._panning

    @property
    def cursor_style(self) -> str:
        """CSS-style cursor name the host should show over the surface."""
        return "grabbing" if self._panning else "grab"

    def set_equations(self, entries: Iterable[EquationEntry]) -> List[CompileFailure]:
        """Replace the equation set from the host's ordered ``(text, visible)`` list.

        Returns
        -------
        list[CompileFailure]
            Entries that did not compile; the rest are active.
        """
        return self.equations.sync(entries)

    def resize(self, width: float, height: float) -> None:
        self.controller.resize(width, height)

    def reset_view(self) -> List[DrawCommand]:
        self.controller.reset()
        return self.draw()

    # --- drawing ---------------------------------------------------------

    def nearest_point(self, cursor: Tuple[float, float]) -> Optional[ClosestPointResult]:
        """Return the visible curve point nearest to ``cursor`` (pixels), if close enough."""
        cfg = self.config
        return find_nearest_point(
            self.equations.visible(),
            self.controller.transform(),
            cursor,
            window_fraction=cfg.nearest_window_fraction,
            num_samples=cfg.nearest_samples,
            threshold=cfg.nearest_threshold,
        )

    def draw(self, cursor: Optional[Tuple[float, float]] = None, *, reason: str = "manual") -> List[DrawCommand]:
        """Render a full frame, with the nearest-point marker when ``cursor`` is given.

        Raises
        ------
        RuntimeError
            If called while another draw is still running.
        """
        if self._drawing:
            raise RuntimeError("FunctionPlotter.draw() is not re-entrant")
        self._drawing = True
        try:
            self._log_render(reason)
            highlight = self.nearest_point(cursor) if cursor is not None else None
            return self.renderer.render(
                self.controller.viewport,
                self.equations.equations,
                self.controller.width,
                self.controller.height,
                highlight=highlight,
            )
        finally:
            self._drawing = False

    def _log_render(self, reason: str) -> None:
        """Log render information with rate-limiting."""
        now = time.monotonic()
        if logger.isEnabledFor(logging.INFO) and (now - self._render_info_last_log_t) > 1.0:
            self._render_info_last_log_t = now
            logger.info(f"render(reason={reason}) equations={len(self.equations.equations)}")

        if logger.isEnabledFor(logging.DEBUG) and (now - self._render_debug_last_log_t) > 0.5:
            self._render_debug_last_log_t = now
            logger.debug(f"viewport={self.controller.viewport}")

    # --- gestures --------------------------------------------------------

    def handle_wheel(self, event: WheelEvent) -> List[DrawCommand]:
        """Zoom about the cursor and redraw."""
        self.controller.zoom(event)
        return self.draw(event.cursor_pixel, reason="zoom")

    def handle_pointer_down(self, position: Tuple[float, float]) -> None:
        self._panning = True
        self._last_pointer = (float(position[0]), float(position[1]))

    def handle_pointer_move(self, position: Tuple[float, float]) -> List[DrawCommand]:
        """Pan by the movement since the last pointer sample (while dragging) and redraw with hover."""
        current = (float(position[0]), float(position[1]))
        reason = "hover"
        if self._panning and self._last_pointer is not None:
            delta = PointerDelta(current[0] - self._last_pointer[0], current[1] - self._last_pointer[1])
            self.controller.pan(delta)
            self._last_pointer = current
            reason = "pan"
        return self.draw(current, reason=reason)

    def handle_pointer_up(self) -> None:
        self._panning = False
        self._last_pointer = None

    def handle_pointer_leave(self) -> None:
        self._panning = False
        self._last_pointer = None

    # --- point query -----------------------------------------------------

    def query_point(self, x: Any, *, recenter: bool = False) -> List[PointQueryResult]:
        """Evaluate every visible equation at ``x``.

        Parameters
        ----------
        x : float or str
            The queried x; strings such as ``"3"`` or ``"pi/2"`` are accepted.
        recenter : bool
            When true, centre the viewport on the first successfully
            evaluated point, keeping the current spans.

        Raises
        ------
        ValueError
            If ``x`` is not a finite number.
        """
        x_value = InputConvert(x, float)
        decimals = self.config.label_decimals
        results: List[PointQueryResult] = []
        for equation in self.equations.visible():
            results.append(self._query_one(equation, x_value, decimals))

        if recenter:
            for result in results:
                if result.status is QueryStatus.OK and result.y is not None:
                    self.controller.center_on(result.x, result.y)
                    break
        return results

    @staticmethod
    def _query_one(equation: Equation, x: float, decimals: int) -> PointQueryResult:
        try:
            y = equation.evaluate.evaluate(x)
        except EvaluationError as e:
            status = QueryStatus.UNDEFINED if e.undefined else QueryStatus.ERROR
            if status is QueryStatus.ERROR:
                text = f"{equation.expression}: error evaluating at x = {x:.{decimals}f}"
            else:
                text = f"{equation.expression}: undefined at x = {x:.{decimals}f}"
            return PointQueryResult(equation.expression, x, status, None, text)
        return PointQueryResult(equation.expression, x, QueryStatus.OK, y, f"{equation.expression} -> {y:.{decimals}f}")
