"""Expression compilation service for typed-in equations.

Purpose
-------
Turns the text a user types (``"x^2"``, ``"sin(x)"``, ``"2x + 1"``) into a
:class:`CompiledExpression` that can be evaluated at a single x or across a
NumPy array of x-values.

Concepts and structure
----------------------
Parsing uses SymPy's ``parse_expr`` with calculator-style transformations
(``^`` as power, implicit multiplication). Compilation to NumPy goes through
:func:`function_plotter.numpify.numpify`. Factorials are compiled as
``gamma(n + 1)`` so ``x!`` has a value between the integers.

Two error kinds exist:

- :class:`CompileError`: the text cannot become an expression in ``x``.
  Raised once, by :func:`compile_expression`.
- :class:`EvaluationError`: the expression has no finite real value at a
  given x (poles, domain gaps). Raised only by the scalar
  :meth:`CompiledExpression.evaluate`; the vectorised path reports such points
  as ``nan``.

Examples
--------
>>> f = compile_expression("x^2")
>>> f.evaluate(3.0)
9.0
>>> compile_expression("1/x").evaluate_many([1.0, 0.0])  # doctest: +SKIP
array([ 1., nan])
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import sympy as sp
from sympy.logic.boolalg import Boolean
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from .numpify import NumpifiedFunction, numpify

__all__ = [
    "X",
    "CompileError",
    "EvaluationError",
    "CompiledExpression",
    "compile_expression",
]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

X = sp.Symbol("x", real=True)

_TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

_LOCAL_NAMES: dict[str, Any] = {
    "x": X,
    "e": sp.E,
    "ln": sp.log,
}


class CompileError(ValueError):
    """Raised when an expression string cannot be compiled."""

    def __init__(self, text: str, message: str) -> None:
        super().__init__(message)
        self.text = text


class EvaluationError(ArithmeticError):
    """Raised when a compiled expression has no finite real value at ``x``.

    ``undefined`` is true when evaluation succeeded but produced a non-finite
    or non-real value, and false when evaluation itself failed.
    """

    def __init__(self, x: float, message: str, *, undefined: bool = False) -> None:
        super().__init__(message)
        self.x = x
        self.undefined = undefined


def _as_real(values: Any) -> np.ndarray:
    """Return ``values`` as a float array, mapping non-real entries to ``nan``."""
    arr = np.asarray(values)
    if np.iscomplexobj(arr):
        real = np.where(arr.imag == 0, arr.real, np.nan)
        return np.asarray(real, dtype=float)
    return arr.astype(float, copy=False)


class CompiledExpression:
    """A successfully compiled equation in the variable ``x``."""

    __slots__ = ("text", "symbolic", "_numeric")

    def __init__(self, text: str, symbolic: sp.Expr, numeric: NumpifiedFunction) -> None:
        self.text = text
        self.symbolic = symbolic
        self._numeric = numeric

    def evaluate(self, x: float) -> float:
        """Evaluate at a single ``x``.

        Raises
        ------
        EvaluationError
            If evaluation fails or the value is not a finite real number.
        """
        x = float(x)
        try:
            with np.errstate(all="ignore"):
                raw = self._numeric(x)
            value = complex(np.asarray(raw).reshape(()))
        except Exception as e:
            raise EvaluationError(x, f"Error evaluating {self.text!r} at x = {x}: {e}") from e
        if value.imag != 0 or not np.isfinite(value.real):
            raise EvaluationError(x, f"{self.text!r} is undefined at x = {x}", undefined=True)
        return float(value.real)

    __call__ = evaluate

    def evaluate_many(self, xs: Any) -> np.ndarray:
        """Evaluate across an array of x-values.

        Points where the expression is undefined come back as ``nan`` (or
        ``±inf`` for overflow); this never raises for per-point failures.
        """
        xs = np.asarray(xs, dtype=float)
        try:
            with np.errstate(all="ignore"):
                ys = _as_real(self._numeric(xs))
            return np.broadcast_to(ys, xs.shape).copy()
        except Exception as e:
            logger.debug("vectorised evaluation of %r failed (%s); evaluating pointwise", self.text, e)

        out = np.empty(xs.shape, dtype=float)
        for i, x in enumerate(xs.flat):
            try:
                out.flat[i] = self.evaluate(x)
            except EvaluationError:
                out.flat[i] = np.nan
        return out

    def __repr__(self) -> str:
        return f"CompiledExpression({self.text!r})"


def compile_expression(text: str) -> CompiledExpression:
    """Parse and compile ``text`` as a function of ``x``.

    Parameters
    ----------
    text : str
        Calculator-style expression, e.g. ``"x^2 - 3x + sin(x)"``.

    Returns
    -------
    CompiledExpression

    Raises
    ------
    CompileError
        If the text is blank, malformed, uses symbols other than ``x``, calls
        unknown functions, or is not a numeric expression.
    """
    if not isinstance(text, str):
        raise CompileError(str(text), f"Expression must be a string, got {type(text).__name__}")
    source = text.strip()
    if not source:
        raise CompileError(text, "Expression is empty")

    try:
        expr = parse_expr(source, local_dict=dict(_LOCAL_NAMES), transformations=_TRANSFORMATIONS)
    except Exception as e:
        raise CompileError(text, f"Invalid expression {text!r}: {e}") from e

    if isinstance(expr, Boolean) or not isinstance(expr, sp.Expr):
        raise CompileError(text, f"Invalid expression {text!r}: not a numeric expression")

    try:
        numeric = numpify(expr.replace(sp.factorial, lambda n: sp.gamma(n + 1)), X)
    except Exception as e:
        raise CompileError(text, f"Invalid expression {text!r}: {e}") from e
    _trial_evaluate(text, numeric)

    return CompiledExpression(source, expr, numeric)


def _trial_evaluate(text: str, numeric: NumpifiedFunction) -> None:
    """Run ``numeric`` once so names the generated code cannot resolve fail here."""
    try:
        with np.errstate(all="ignore"):
            numeric(0.5)
    except NameError as e:
        raise CompileError(text, f"Invalid expression {text!r}: {e}") from e
    except Exception as e:
        # Scalar-only and domain failures are per-point; evaluate_many handles them.
        logger.debug("trial evaluation of %r raised %s: %s", text, type(e).__name__, e)
