"""Recursive descent parser for calculator lines.

Grammar (lowest to highest precedence)::

    expression  -> assignment | computation
    assignment  -> VARIABLE "=" computation
    computation -> term (("+" | "-") term)*
    term        -> factor (("*" | "/") factor)*
    factor      -> power ("%")?
    power       -> unary ("^" power)?
    unary       -> "-" unary | primary
    primary     -> NUMBER | VARIABLE | LINE_REF
                 | "(" computation ")" | SQRT "(" computation ")"

``%`` is a postfix modifier, not modulo. When the right operand of ``+`` or
``-`` is a bare percentage it takes the whole left operand as its base, so
``100 + 10%`` parses as ``100 + (10% of 100)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

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
from linecalc.calc._lexer import Token, TokenType, tokenize

logger = logging.getLogger(__name__)

# Largest ``$n`` accepted; anything past a signed 32-bit int is rejected.
MAX_LINE_REF = 2**31 - 1


# ---------------------------------------------------------------------------
# Parse results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParseSuccess:
    node: Node


@dataclass(frozen=True)
class ParseError:
    message: str
    position: int


@dataclass(frozen=True)
class ParseEmpty:
    """Nothing to parse (the token stream was only EOF)."""


PARSE_EMPTY = ParseEmpty()

ParseResult = Union[ParseSuccess, ParseError, ParseEmpty]


class ParseException(Exception):
    """Raised inside the parser; converted to :class:`ParseError` by ``parse``."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.message = message
        self.position = position


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class Parser:
    """Parses one token list. Instances are single-use."""

    __slots__ = ("_tokens", "_pos")

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    @property
    def _current(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    @property
    def _current_type(self) -> TokenType | None:
        tok = self._current
        return tok.type if tok is not None else None

    def _current_position(self) -> int:
        tok = self._current
        if tok is not None:
            return tok.position
        if self._tokens:
            return self._tokens[-1].position
        return 0

    def parse(self) -> ParseResult:
        tokens = self._tokens
        if not tokens or (len(tokens) == 1 and tokens[0].type is TokenType.EOF):
            return PARSE_EMPTY

        try:
            node = self._parse_expression()
            tok = self._current
            # Any leftover token, valid or not, is unexpected here.
            if tok is not None and tok.type is not TokenType.EOF:
                raise ParseException(f"Unexpected token: {tok.value}", tok.position)
        except ParseException as e:
            logger.debug("Parse error at %d: %s", e.position, e.message)
            return ParseError(e.message, e.position)
        except RecursionError:
            logger.debug("Parse error: nesting too deep")
            return ParseError("Expression too deeply nested", self._current_position())
        return ParseSuccess(node)

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Node:
        tok = self._current
        if tok is not None and tok.type is TokenType.VARIABLE:
            nxt = self._pos + 1
            if nxt < len(self._tokens) and self._tokens[nxt].type is TokenType.EQUALS:
                self._pos += 2  # variable, '='
                return AssignmentNode(tok.value, self._parse_computation())
        return self._parse_computation()

    def _parse_computation(self) -> Node:
        left = self._parse_term()
        while self._current_type in (TokenType.PLUS, TokenType.MINUS):
            op = BinaryOp.ADD if self._current_type is TokenType.PLUS else BinaryOp.SUBTRACT
            self._pos += 1
            right = _with_percent_base(self._parse_term(), left)
            left = BinaryOpNode(left, op, right)
        return left

    def _parse_term(self) -> Node:
        left = self._parse_factor()
        while self._current_type in (TokenType.MULTIPLY, TokenType.DIVIDE):
            op = BinaryOp.MULTIPLY if self._current_type is TokenType.MULTIPLY else BinaryOp.DIVIDE
            self._pos += 1
            left = BinaryOpNode(left, op, self._parse_factor())
        return left

    def _parse_factor(self) -> Node:
        node = self._parse_power()
        if self._current_type is TokenType.PERCENT:
            self._pos += 1
            return PercentNode(node)
        return node

    def _parse_power(self) -> Node:
        base = self._parse_unary()
        if self._current_type is TokenType.POWER:
            self._pos += 1
            # Right-recursive: 2^3^2 == 2^(3^2)
            return BinaryOpNode(base, BinaryOp.POWER, self._parse_power())
        return base

    def _parse_unary(self) -> Node:
        if self._current_type is TokenType.MINUS:
            self._pos += 1
            return UnaryMinusNode(self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> Node:
        tok = self._current
        if tok is None:
            raise ParseException("Unexpected end of input", self._current_position())

        if tok.type is TokenType.NUMBER:
            self._pos += 1
            return NumberNode(float(tok.value))

        if tok.type is TokenType.VARIABLE:
            self._pos += 1
            return VariableNode(tok.value)

        if tok.type is TokenType.LINE_REF:
            self._pos += 1
            try:
                number = int(tok.value)
            except ValueError:  # more digits than int() will convert
                number = 0
            if number < 1 or number > MAX_LINE_REF:
                raise ParseException(f"Invalid line reference: ${tok.value}", tok.position)
            return LineRefNode(number)

        if tok.type is TokenType.LPAREN:
            self._pos += 1
            expr = self._parse_computation()
            self._expect_rparen()
            return expr

        if tok.type is TokenType.SQRT:
            self._pos += 1
            if self._current_type is not TokenType.LPAREN:
                raise ParseException("Expected '(' after sqrt", self._current_position())
            self._pos += 1
            arg = self._parse_computation()
            self._expect_rparen()
            return FunctionNode("sqrt", arg)

        if tok.type is TokenType.EOF:
            raise ParseException("Unexpected end of input", tok.position)
        if tok.type is TokenType.ERROR:
            raise ParseException(f"Invalid token: {tok.value}", tok.position)
        raise ParseException(f"Unexpected token: {tok.value}", tok.position)

    def _expect_rparen(self) -> None:
        if self._current_type is not TokenType.RPAREN:
            raise ParseException("Expected ')'", self._current_position())
        self._pos += 1


def _with_percent_base(node: Node, base: Node) -> Node:
    """Bind a bare percentage to *base*; anything else is returned unchanged."""
    if isinstance(node, PercentNode) and node.base is None:
        return PercentNode(node.operand, base)
    return node


# ---------------------------------------------------------------------------
# Convenience
# ---------------------------------------------------------------------------


def parse(tokens: list[Token]) -> ParseResult:
    """Parse a token list into a :data:`ParseResult`."""
    return Parser(tokens).parse()


def parse_expression(text: str) -> ParseResult:
    """Tokenize and parse a single line of text."""
    return parse(tokenize(text))
