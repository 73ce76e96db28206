"""Tree-walking evaluator for parsed calculator lines.

Evaluation is a pure function of ``(node, scope)``: the walk threads the
scope through every node and hands the final one back, so assignments are
visible to the caller without any evaluator state surviving the call::

    result, scope = evaluate(node, scope)

Failures never raise; they come back as :class:`Error` results carrying the
messages defined in :mod:`linecalc.calc._functions`.
"""

from __future__ import annotations

import logging
import math

from linecalc.calc._ast import (
    AssignmentNode,
    BinaryOp,
    BinaryOpNode,
    FunctionNode,
    LineRefNode,
    Node,
    NumberNode,
    PercentNode,
    UnaryMinusNode,
    VariableNode,
)
from linecalc.calc._functions import (
    INFINITY,
    NAN,
    NEG_INFINITY,
    UNKNOWN,
    EvalError,
    get_function,
    non_finite_error,
    undefined_line,
    undefined_variable,
)
from linecalc.calc._parser import (
    ParseEmpty,
    ParseError,
    ParseResult,
    ParseSuccess,
    parse_expression,
)
from linecalc.calc._protocol import EMPTY, Error, Result, Scope, Success

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0:
            raise EvalError(NAN)
        raise EvalError(NEG_INFINITY if left < 0 else INFINITY)
    return left / right


def _power(base: float, exponent: float) -> float:
    """Real-valued power; ``0^0`` is 1."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd = float(exponent).is_integer() and exponent % 2 == 1
        raise EvalError(NEG_INFINITY if base < 0 and odd else INFINITY) from None
    except ValueError:
        # 0 to a negative power diverges; a negative base to a
        # fractional power has no real result.
        raise EvalError(INFINITY if base == 0 else NAN) from None


_BINARY = {
    BinaryOp.ADD: lambda a, b: a + b,
    BinaryOp.SUBTRACT: lambda a, b: a - b,
    BinaryOp.MULTIPLY: lambda a, b: a * b,
    BinaryOp.DIVIDE: _divide,
    BinaryOp.POWER: _power,
}


# ---------------------------------------------------------------------------
# Tree walk
# ---------------------------------------------------------------------------


def _eval(node: Node, scope: Scope) -> tuple[float, Scope]:
    if isinstance(node, NumberNode):
        return node.value, scope

    if isinstance(node, BinaryOpNode):
        left, scope = _eval(node.left, scope)
        right, scope = _eval(node.right, scope)
        return _BINARY[node.op](left, right), scope

    if isinstance(node, UnaryMinusNode):
        value, scope = _eval(node.operand, scope)
        return -value, scope

    if isinstance(node, PercentNode):
        value, scope = _eval(node.operand, scope)
        fraction = value / 100.0
        if node.base is None:
            return fraction, scope
        base, scope = _eval(node.base, scope)
        return base * fraction, scope

    if isinstance(node, VariableNode):
        value = scope.resolve_variable(node.name)
        if value is None:
            raise EvalError(undefined_variable(node.name))
        return value, scope

    if isinstance(node, LineRefNode):
        value = scope.resolve_line_ref(node.line_number)
        if value is None:
            raise EvalError(undefined_line(node.line_number))
        return value, scope

    if isinstance(node, AssignmentNode):
        value, scope = _eval(node.expression, scope)
        return value, scope.with_variable(node.name, value)

    if isinstance(node, FunctionNode):
        func = get_function(node.name)
        if func is None:
            raise EvalError(f"Unknown function: {node.name}")
        arg, scope = _eval(node.argument, scope)
        return func(arg), scope

    raise TypeError(f"Unknown AST node: {type(node).__name__}")


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def evaluate(node: Node, scope: Scope) -> tuple[Result, Scope]:
    """Evaluate *node* against *scope*.

    Returns the line's result and the scope for the next line. On failure
    the input scope is returned unchanged, so a failing assignment binds
    nothing.
    """
    try:
        value, new_scope = _eval(node, scope)
        if not math.isfinite(value):
            raise non_finite_error(value)
    except EvalError as e:
        logger.debug("Evaluation failed: %s", e.message)
        return Error(e.message), scope
    except RecursionError:
        logger.debug("Evaluation failed: expression nested too deeply")
        return Error(UNKNOWN), scope
    return Success(value), new_scope


def evaluate_parse_result(parse_result: ParseResult, scope: Scope) -> tuple[Result, Scope]:
    """Evaluate the outcome of :func:`parse`, passing parse failures through."""
    if isinstance(parse_result, ParseSuccess):
        return evaluate(parse_result.node, scope)
    if isinstance(parse_result, ParseError):
        return Error(parse_result.message), scope
    if isinstance(parse_result, ParseEmpty):
        return EMPTY, scope
    raise TypeError(f"Unknown parse result: {type(parse_result).__name__}")


def evaluate_expression(text: str, scope: Scope | None = None) -> tuple[Result, Scope]:
    """Lex, parse and evaluate one line of text."""
    return evaluate_parse_result(parse_expression(text), scope if scope is not None else Scope())
