# === SECTION: InputConvert [id: InputConvert]===
from __future__ import annotations

import math
from typing import Any, Type, TypeVar

import sympy as sp

T = TypeVar("T", int, float)


def InputConvert(obj: Any, dest_type: Type[T] = float, finite: bool = True) -> T:
    """
    Convert user-supplied `obj` (a typed-in x value, a viewport bound, a config
    override) to `dest_type`.

    Supported destination types:
    - float
    - int (only exact integers are accepted, e.g. 3.0 -> 3, 3.5 -> Error)

    Rules:
    - If `obj` is a real number: cast via dest_type(obj).
    - If `obj` is a string:
        1) try float(s)
        2) else parse as a SymPy expression (``"pi/2"``, ``"sqrt(2)"``) and evaluate.
    - Booleans are rejected; ``True`` is not a coordinate.

    When `finite` is true, ``nan`` and infinities are rejected.

    Raises
    ------
    NotImplementedError
        If dest_type is unsupported.
    ValueError
        If conversion fails.
    """
    if dest_type not in (float, int):
        raise NotImplementedError(
            f"Unsupported destination type: {dest_type!r}. Only float and int are supported."
        )

    def _coerce(value: float) -> T:
        if finite and not math.isfinite(value):
            raise ValueError(f"Expected a finite number, got {obj!r}.")
        if dest_type is float:
            return float(value)  # type: ignore[return-value]
        if not float(value).is_integer():
            raise ValueError(f"Could not convert {obj!r} to int: value is not an exact integer.")
        return int(value)  # type: ignore[return-value]

    if isinstance(obj, bool):
        raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}.")

    # Fast path: real numeric types (numpy scalars included)
    if isinstance(obj, (int, float)) or (hasattr(obj, "__float__") and not isinstance(obj, (str, complex))):
        try:
            value = float(obj)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}.") from e
        return _coerce(value)

    if isinstance(obj, str):
        s = obj.strip()
        if s == "":
            raise ValueError(f"Cannot convert empty string to {dest_type.__name__}.")

        try:
            plain = float(s)
        except ValueError:
            plain = None
        if plain is not None:
            return _coerce(plain)

        try:
            expr = sp.sympify(s)
            val = complex(expr.evalf())
        except Exception as e:
            raise ValueError(
                f"Could not convert {obj!r} to {dest_type.__name__} (neither directly nor via SymPy)."
            ) from e
        if val.imag != 0:
            raise ValueError(f"Could not convert non-real {obj!r} to {dest_type.__name__}.")
        return _coerce(val.real)

    raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}.")

# === END OF SECTION: InputConvert [id: InputConvert]===
