"""Expression tree nodes produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class BinaryOp(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"


@dataclass(frozen=True)
class NumberNode:
    value: float


@dataclass(frozen=True)
class BinaryOpNode:
    left: Node
    op: BinaryOp
    right: Node


@dataclass(frozen=True)
class UnaryMinusNode:
    operand: Node


@dataclass(frozen=True)
class PercentNode:
    """``operand%``.

    ``base`` is set when the percentage is relative to the left side of an
    enclosing ``+``/``-`` (``100 + 10%``); a bare ``10%`` has no base and
    evaluates to ``0.1``.
    """

    operand: Node
    base: Node | None = None


@dataclass(frozen=True)
class VariableNode:
    name: str


@dataclass(frozen=True)
class LineRefNode:
    line_number: int  # 1-based


@dataclass(frozen=True)
class AssignmentNode:
    name: str
    expression: Node


@dataclass(frozen=True)
class FunctionNode:
    name: str
    argument: Node


Node = Union[
    NumberNode,
    BinaryOpNode,
    UnaryMinusNode,
    PercentNode,
    VariableNode,
    LineRefNode,
    AssignmentNode,
    FunctionNode,
]
