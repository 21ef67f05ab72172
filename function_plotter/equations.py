"""Equation list management: inputs, colours and the active equation set.

Purpose
-------
The host UI owns the text boxes; on every redraw it hands the core an ordered
list of ``(text, visible)`` entries. ``EquationRegistry.sync`` rebuilds the
active set from scratch each time: blank entries are skipped, entries that
fail to compile are reported back and left out, and colours are assigned by
position among the entries that compiled.

Important gotchas
-----------------
- No equation identity survives a sync. Deleting the first of three
  equations shifts the colours of the other two.
- Hidden equations still consume a palette slot so toggling visibility never
  recolours the others.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Union

from .expression import CompileError, CompiledExpression, compile_expression

__all__ = [
    "EquationInput",
    "ColorPalette",
    "Equation",
    "CompileFailure",
    "EquationRegistry",
]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

EquationEntry = Union["EquationInput", str, Sequence[Any]]


@dataclass(frozen=True)
class EquationInput:
    """One row of the host's equation list."""

    text: str
    visible: bool = True

    @classmethod
    def coerce(cls, entry: EquationEntry) -> "EquationInput":
        """Normalize a plain string, a ``(text, visible)`` pair, or an ``EquationInput``."""
        if isinstance(entry, EquationInput):
            return entry
        if isinstance(entry, str):
            return cls(entry)
        if isinstance(entry, Sequence) and len(entry) == 2:
            text, visible = entry
            if not isinstance(visible, bool):
                raise TypeError(f"Equation visibility must be a bool, got {type(visible).__name__}")
            return cls(str(text), visible)
        raise TypeError(
            f"Equation entries must be str, (text, visible) or EquationInput, got {type(entry).__name__}"
        )


class ColorPalette:
    """Fixed ordered sequence of colours assigned by position."""

    def __init__(self, colors: Iterable[str]) -> None:
        self._colors = tuple(colors)
        if not self._colors:
            raise ValueError("ColorPalette requires at least one colour")

    def color_for(self, index: int) -> str:
        return self._colors[index % len(self._colors)]

    def __len__(self) -> int:
        return len(self._colors)

    def __repr__(self) -> str:
        return f"ColorPalette({list(self._colors)!r})"


@dataclass(frozen=True)
class Equation:
    """A compiled, coloured equation ready for sampling.

    Parameters
    ----------
    expression : str
        The text as typed (stripped).
    evaluate : CompiledExpression
        Callable ``x -> float`` that raises ``EvaluationError`` when undefined;
        also offers ``evaluate_many`` for arrays.
    color : str
        Colour assigned from the palette.
    visible : bool
        Whether the curve is drawn and searched.
    source_index : int
        Position of the entry in the host's input list.
    """

    expression: str
    evaluate: CompiledExpression
    color: str
    visible: bool
    source_index: int


@dataclass(frozen=True)
class CompileFailure:
    """An input entry that could not be compiled."""

    source_index: int
    text: str
    message: str


class EquationRegistry:
    """Single owner of the active equation set."""

    def __init__(self, palette: ColorPalette) -> None:
        self._palette = palette
        self._equations: tuple[Equation, ...] = ()
        self._failures: tuple[CompileFailure, ...] = ()

    @property
    def equations(self) -> tuple[Equation, ...]:
        """Return every compiled equation, visible or not, in input order."""
        return self._equations

    @property
    def failures(self) -> tuple[CompileFailure, ...]:
        """Return the compile failures reported by the last sync."""
        return self._failures

    def visible(self) -> tuple[Equation, ...]:
        return tuple(eq for eq in self._equations if eq.visible)

    def sync(self, entries: Iterable[EquationEntry]) -> list[CompileFailure]:
        """Rebuild the active set from the host's current input list.

        Returns
        -------
        list[CompileFailure]
            One entry per non-blank input that failed to compile, in input order.
        """
        equations: list[Equation] = []
        failures: list[CompileFailure] = []

        for source_index, raw in enumerate(entries):
            entry = EquationInput.coerce(raw)
            if not entry.text.strip():
                continue
            try:
                compiled = compile_expression(entry.text)
            except CompileError as e:
                logger.info("equation %d rejected: %s", source_index, e)
                failures.append(CompileFailure(source_index, entry.text, str(e)))
                continue
            equations.append(
                Equation(
                    expression=compiled.text,
                    evaluate=compiled,
                    color=self._palette.color_for(len(equations)),
                    visible=entry.visible,
                    source_index=source_index,
                )
            )

        self._equations = tuple(equations)
        self._failures = tuple(failures)
        logger.debug("equation sync: %d active, %d failed", len(equations), len(failures))
        return failures

