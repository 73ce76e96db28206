"""Lexer: turns one line of input into a token list for the parser."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Every token kind the lexer can produce."""

    NUMBER = "NUMBER"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    PERCENT = "PERCENT"
    POWER = "POWER"
    EQUALS = "EQUALS"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    VARIABLE = "VARIABLE"  # $name
    LINE_REF = "LINE_REF"  # $1, $2
    SQRT = "SQRT"
    EOF = "EOF"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Token:
    """A single token.

    ``value`` is the literal text, minus the ``$`` sigil for variables and
    line references. ``position`` is the offset of the first character.
    """

    type: TokenType
    value: str
    position: int


# Single-character operators, including the Unicode aliases the keyboard emits
_SINGLE_CHAR: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "−": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "×": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "÷": TokenType.DIVIDE,
    "%": TokenType.PERCENT,
    "^": TokenType.POWER,
    "=": TokenType.EQUALS,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

_FUNCTIONS: dict[str, TokenType] = {
    "sqrt": TokenType.SQRT,
}


def _is_digit(ch: str | None) -> bool:
    return ch is not None and ch.isdecimal()


def _is_word(ch: str | None) -> bool:
    return ch is not None and (ch.isalnum() or ch == "_")


class Lexer:
    """Single-pass scanner over one line of text."""

    __slots__ = ("_text", "_pos")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def tokens(self) -> Iterator[Token]:
        """Yield tokens up to (not including) EOF, continuing past errors."""
        while True:
            tok = self._next_token()
            if tok.type is TokenType.EOF:
                return
            yield tok

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str | None:
        idx = self._pos + offset
        if idx < len(self._text):
            return self._text[idx]
        return None

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos].isspace():
            self._pos += 1

    def _next_token(self) -> Token:
        self._skip_whitespace()
        ch = self._peek()
        start = self._pos
        if ch is None:
            return Token(TokenType.EOF, "", start)

        if _is_digit(ch) or (ch == "." and _is_digit(self._peek(1))):
            return self._read_number()
        if ch == "$":
            return self._read_dollar()
        if ch in _SINGLE_CHAR:
            self._pos += 1
            return Token(_SINGLE_CHAR[ch], ch, start)
        if ch.isalpha():
            return self._read_identifier()

        self._pos += 1
        return Token(TokenType.ERROR, ch, start)

    def _read_number(self) -> Token:
        start = self._pos
        seen_dot = False
        while True:
            ch = self._peek()
            if _is_digit(ch):
                self._pos += 1
            elif ch == "." and not seen_dot:
                seen_dot = True
                self._pos += 1
            else:
                break
        return Token(TokenType.NUMBER, self._text[start:self._pos], start)

    def _read_dollar(self) -> Token:
        start = self._pos
        self._pos += 1  # skip '$'
        ch = self._peek()
        body = self._pos
        if _is_digit(ch):
            while _is_digit(self._peek()):
                self._pos += 1
            return Token(TokenType.LINE_REF, self._text[body:self._pos], start)
        if ch is not None and ch.isalpha():
            while _is_word(self._peek()):
                self._pos += 1
            return Token(TokenType.VARIABLE, self._text[body:self._pos], start)
        return Token(TokenType.ERROR, "$", start)

    def _read_identifier(self) -> Token:
        start = self._pos
        while _is_word(self._peek()):
            self._pos += 1
        word = self._text[start:self._pos]
        return Token(_FUNCTIONS.get(word.lower(), TokenType.ERROR), word, start)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def tokenize(text: str) -> list[Token]:
    """Tokenize *text* for parsing.

    The list always ends with an EOF token. The first unrecognised
    character becomes an ERROR token and nothing after it is scanned.
    """
    tokens: list[Token] = []
    for tok in Lexer(text).tokens():
        tokens.append(tok)
        if tok.type is TokenType.ERROR:
            tokens.append(Token(TokenType.EOF, "", token_end(tok)))
            return tokens
    tokens.append(Token(TokenType.EOF, "", len(text)))
    return tokens


def scan(text: str) -> Iterator[Token]:
    """Yield every token in *text*, including ones after an ERROR.

    Used for structural rewriting where the whole line matters, such as
    renumbering ``$n`` references inside comments.
    """
    return Lexer(text).tokens()


def token_end(tok: Token) -> int:
    """Offset one past the last source character of *tok*."""
    if tok.type in (TokenType.VARIABLE, TokenType.LINE_REF):
        return tok.position + 1 + len(tok.value)
    return tok.position + len(tok.value)
