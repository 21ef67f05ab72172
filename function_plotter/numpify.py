"""
numpify: Compile a SymPy expression in one variable to a NumPy callable
=======================================================================

Purpose
-------
The curve sampler evaluates every equation at thousands of x-values per frame.
:func:`numpify` turns a SymPy expression in a single symbol into generated
Python source that evaluates with NumPy broadcasting, so a whole frame costs a
single call.

Namespace
---------
SymPy's ``NumPyPrinter`` does not only print ``numpy.*`` calls: functions NumPy
lacks come out as ``math.gamma(x)``, and ``Max``/``Min`` as
``functools.reduce(numpy.maximum, ...)``. The printer records every module it
referenced in ``module_imports``; the generated function's globals are built
from that record, so each printed name resolves.

Calls into :mod:`math` only accept scalars. Evaluating such a function on an
array raises ``TypeError``; callers that need arrays fall back to evaluating
point by point (see :meth:`function_plotter.expression.CompiledExpression.evaluate_many`).

Unknown functions
-----------------
Undefined functions such as ``G(x)`` are rejected before code generation, so a
typo like ``sinn(x)`` surfaces as a compile-time ``ValueError``.

Examples
--------
>>> import numpy as np
>>> import sympy as sp
>>> x = sp.Symbol("x")
>>> f = numpify(5, x)
>>> f(np.array([1, 2, 3]))
array([5., 5., 5.])

Logging
-------
Silent by default. Compile timings go to ``function_plotter.numpify`` at
``DEBUG`` level.
"""

from __future__ import annotations

from functools import lru_cache
import importlib
import logging
import textwrap
import time
from typing import Any, Callable, Dict, cast

import numpy as np
import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.printing.numpy import NumPyPrinter


__all__ = [
    "numpify",
    "NumpifiedFunction",
]


logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class NumpifiedFunction:
    """Generated one-argument NumPy callable with its expression and source."""

    __slots__ = ("_fn", "symbolic", "var", "source")

    def __init__(self, fn: Callable[[Any], Any], symbolic: sp.Basic, var: sp.Symbol, source: str) -> None:
        self._fn = fn
        self.symbolic = symbolic
        self.var = var
        self.source = source

    def __call__(self, x: Any) -> Any:
        return self._fn(x)

    def __repr__(self) -> str:
        return f"NumpifiedFunction({self.symbolic!r}, var={self.var.name})"


def numpify(expr: Any, var: sp.Symbol) -> NumpifiedFunction:
    """Compile ``expr`` into a function of ``var`` evaluating with NumPy.

    Compilations are cached on ``(expr, var)``; recompiling the same equation
    text on every edit costs a parse but not a code generation.

    Raises
    ------
    TypeError
        If ``expr`` is not SymPy-compatible or ``var`` is not a Symbol.
    ValueError
        If ``expr`` contains symbols other than ``var`` or unknown functions.

    Notes
    -----
    The generated function is defined with ``exec``.
    """
    try:
        expr_sym = sp.sympify(expr)
    except Exception as e:
        raise TypeError(f"numpify expects a SymPy-compatible expression, got {type(expr)}") from e
    if not isinstance(expr_sym, sp.Basic):
        raise TypeError(f"numpify expects a SymPy expression, got {type(expr_sym)}")
    if not isinstance(var, sp.Symbol):
        raise TypeError(f"numpify expects a Symbol as its variable, got {type(var)}")
    return _numpify_cached(expr_sym, var)


@lru_cache(maxsize=256)
def _numpify_cached(expr: sp.Basic, var: sp.Symbol) -> NumpifiedFunction:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("numpify: cache miss for %r", expr)
    return _compile(expr, var)


def _check_symbols(expr: sp.Basic, var: sp.Symbol) -> None:
    unbound = sorted(s.name for s in expr.free_symbols if s != var)
    if unbound:
        raise ValueError(
            f"Expression contains unbound symbols: {', '.join(unbound)}. Only {var.name} may appear."
        )
    unknown = sorted({str(f.func) for f in expr.atoms(AppliedUndef)})
    if unknown:
        raise ValueError("Expression contains unknown function(s): " + ", ".join(unknown))


def _module_namespace(printer: NumPyPrinter) -> Dict[str, Any]:
    """Globals binding the top-level name of every module the printer used."""
    namespace: Dict[str, Any] = {"numpy": np}
    for module in printer.module_imports:
        importlib.import_module(module)
        top = module.split(".")[0]
        namespace[top] = importlib.import_module(top)
    return namespace


def _compile(expr: sp.Basic, var: sp.Symbol) -> NumpifiedFunction:
    _check_symbols(expr, var)
    arg = var.name
    if not arg.isidentifier():
        raise ValueError(f"Variable name {arg!r} is not a valid Python identifier")

    log_debug = logger.isEnabledFor(logging.DEBUG)
    t0 = time.perf_counter() if log_debug else 0.0

    printer = NumPyPrinter(settings={"user_functions": {}})
    expr_code = printer.doprint(expr)

    lines = [
        f"def _generated({arg}):",
        f"    {arg} = numpy.asarray({arg}, dtype=float)",
    ]
    if expr.free_symbols:
        lines.append(f"    return {expr_code}")
    else:
        lines.append(f"    return ({expr_code}) + numpy.zeros(numpy.shape({arg}))")
    src = "\n".join(lines)

    namespace = _module_namespace(printer)
    t1 = time.perf_counter() if log_debug else 0.0
    loc: Dict[str, Any] = {}
    exec(src, namespace, loc)
    fn = cast(Callable[[Any], Any], loc["_generated"])
    fn.__doc__ = textwrap.dedent(
        f"""
        Auto-generated NumPy function from SymPy expression.

        expr: {expr!r}
        var: {arg}
        """
    ).strip()

    if log_debug:
        t2 = time.perf_counter()
        logger.debug(
            "numpify timings (ms): codegen=%.2f exec=%.2f modules=%s",
            1000.0 * (t1 - t0),
            1000.0 * (t2 - t1),
            sorted(printer.module_imports),
        )

    return NumpifiedFunction(fn=fn, symbolic=expr, var=var, source=src)
