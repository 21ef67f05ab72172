from __future__ import annotations

import sys
from pathlib import Path

import pytest

_START = Path(__file__).resolve().parent
_repo_root = _START
while _repo_root != _repo_root.parent and not (_repo_root / "function_plotter" / "__init__.py").exists():
    _repo_root = _repo_root.parent

sys.path.insert(0, str(_repo_root))


@pytest.fixture
def plotter():
    from function_plotter import FunctionPlotter

    return FunctionPlotter(width=800, height=600)


@pytest.fixture
def make_equation():
    """Build a visible ``Equation`` from expression text."""
    from function_plotter import Equation, compile_expression

    def _make(text: str, *, color: str = "blue", visible: bool = True, index: int = 0) -> Equation:
        compiled = compile_expression(text)
        return Equation(
            expression=compiled.text,
            evaluate=compiled,
            color=color,
            visible=visible,
            source_index=index,
        )

    return _make
