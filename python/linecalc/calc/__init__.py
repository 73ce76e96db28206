"""linecalc.calc - Lexer, parser and evaluator for calculator lines."""

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
from linecalc.calc._classifier import LineType, classify, is_comment, is_empty, should_evaluate
from linecalc.calc._evaluator import evaluate, evaluate_expression, evaluate_parse_result
from linecalc.calc._lexer import Token, TokenType, scan, tokenize
from linecalc.calc._parser import (
    PARSE_EMPTY,
    ParseEmpty,
    ParseError,
    ParseResult,
    Parser,
    ParseSuccess,
    parse,
    parse_expression,
)
from linecalc.calc._protocol import (
    EMPTY,
    Empty,
    Error,
    Line,
    Result,
    Scope,
    Success,
)
from linecalc.calc._references import (
    line_references,
    rewrite_line_references,
    shift_after_insert,
    shift_after_remove,
)

__all__ = [
    "AssignmentNode",
    "BinaryOp",
    "BinaryOpNode",
    "EMPTY",
    "Empty",
    "Error",
    "FunctionNode",
    "Line",
    "LineRefNode",
    "LineType",
    "Node",
    "NumberNode",
    "PARSE_EMPTY",
    "ParseEmpty",
    "ParseError",
    "ParseResult",
    "ParseSuccess",
    "Parser",
    "PercentNode",
    "Result",
    "Scope",
    "Success",
    "Token",
    "TokenType",
    "UnaryMinusNode",
    "VariableNode",
    "classify",
    "evaluate",
    "evaluate_expression",
    "evaluate_parse_result",
    "is_comment",
    "is_empty",
    "line_references",
    "parse",
    "parse_expression",
    "rewrite_line_references",
    "scan",
    "shift_after_insert",
    "shift_after_remove",
    "should_evaluate",
    "tokenize",
]
