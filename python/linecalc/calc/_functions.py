"""Evaluation error values and builtin function implementations."""

from __future__ import annotations

import math
from typing import Callable

# ---------------------------------------------------------------------------
# Error messages: stable strings the display layer matches on
# ---------------------------------------------------------------------------

INFINITY = "∞"
NEG_INFINITY = "-∞"
NAN = "NaN"
UNKNOWN = "?"


def undefined_variable(name: str) -> str:
    return f"? ${name}"


def undefined_line(line_number: int) -> str:
    return f"? ${line_number}"


class EvalError(Exception):
    """Raised during a tree walk; the evaluator turns it into an Error result."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def non_finite_error(value: float) -> EvalError:
    """The EvalError describing a NaN or infinite *value*."""
    if math.isnan(value):
        return EvalError(NAN)
    return EvalError(NEG_INFINITY if value < 0 else INFINITY)


# ---------------------------------------------------------------------------
# Builtins
# ---------------------------------------------------------------------------


def _builtin_sqrt(arg: float) -> float:
    if arg < 0:
        raise EvalError(NAN)
    return math.sqrt(arg)


_BUILTINS: dict[str, Callable[[float], float]] = {
    "SQRT": _builtin_sqrt,
}


def get_function(name: str) -> Callable[[float], float] | None:
    """Look up a builtin by name (case-insensitive)."""
    return _BUILTINS.get(name.upper())


def is_supported(name: str) -> bool:
    return name.upper() in _BUILTINS
