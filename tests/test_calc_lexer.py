"""Tests for linecalc.calc lexer."""

from __future__ import annotations

import pytest
from linecalc.calc._lexer import Token, TokenType, scan, token_end, tokenize


def _types(text: str) -> list[TokenType]:
    return [t.type for t in tokenize(text)]


class TestNumbers:
    def test_integer(self) -> None:
        assert tokenize("42") == [
            Token(TokenType.NUMBER, "42", 0),
            Token(TokenType.EOF, "", 2),
        ]

    def test_decimal(self) -> None:
        assert tokenize("3.14")[0] == Token(TokenType.NUMBER, "3.14", 0)

    def test_leading_dot(self) -> None:
        assert tokenize(".5")[0] == Token(TokenType.NUMBER, ".5", 0)

    def test_trailing_dot(self) -> None:
        assert tokenize("5.")[0] == Token(TokenType.NUMBER, "5.", 0)

    def test_second_dot_starts_new_number(self) -> None:
        toks = tokenize("1.2.3")
        assert toks[0] == Token(TokenType.NUMBER, "1.2", 0)
        assert toks[1] == Token(TokenType.NUMBER, ".3", 3)

    def test_lone_dot_is_error(self) -> None:
        assert _types(".") == [TokenType.ERROR, TokenType.EOF]


class TestOperators:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("+", TokenType.PLUS),
            ("-", TokenType.MINUS),
            ("−", TokenType.MINUS),
            ("*", TokenType.MULTIPLY),
            ("×", TokenType.MULTIPLY),
            ("/", TokenType.DIVIDE),
            ("÷", TokenType.DIVIDE),
            ("%", TokenType.PERCENT),
            ("^", TokenType.POWER),
            ("=", TokenType.EQUALS),
            ("(", TokenType.LPAREN),
            (")", TokenType.RPAREN),
        ],
    )
    def test_single_char(self, text: str, expected: TokenType) -> None:
        assert _types(text) == [expected, TokenType.EOF]

    def test_expression_with_whitespace(self) -> None:
        toks = tokenize("  10 +  2")
        assert toks == [
            Token(TokenType.NUMBER, "10", 2),
            Token(TokenType.PLUS, "+", 5),
            Token(TokenType.NUMBER, "2", 8),
            Token(TokenType.EOF, "", 9),
        ]

    def test_unicode_expression(self) -> None:
        assert _types("6 × 7 ÷ 2 − 1") == [
            TokenType.NUMBER, TokenType.MULTIPLY, TokenType.NUMBER,
            TokenType.DIVIDE, TokenType.NUMBER, TokenType.MINUS,
            TokenType.NUMBER, TokenType.EOF,
        ]


class TestDollarTokens:
    def test_line_ref(self) -> None:
        assert tokenize("$12")[0] == Token(TokenType.LINE_REF, "12", 0)

    def test_variable(self) -> None:
        assert tokenize("$tax_rate2")[0] == Token(TokenType.VARIABLE, "tax_rate2", 0)

    def test_line_ref_stops_at_letter(self) -> None:
        toks = tokenize("$1abc")
        assert toks[0] == Token(TokenType.LINE_REF, "1", 0)
        assert toks[1] == Token(TokenType.ERROR, "abc", 2)

    def test_bare_dollar_is_error(self) -> None:
        assert tokenize("$") == [
            Token(TokenType.ERROR, "$", 0),
            Token(TokenType.EOF, "", 1),
        ]

    def test_dollar_followed_by_symbol_is_error(self) -> None:
        assert tokenize("$+1")[0] == Token(TokenType.ERROR, "$", 0)

    def test_variable_then_assignment(self) -> None:
        assert _types("$x = 5") == [
            TokenType.VARIABLE, TokenType.EQUALS, TokenType.NUMBER, TokenType.EOF,
        ]


class TestIdentifiers:
    @pytest.mark.parametrize("word", ["sqrt", "SQRT", "Sqrt"])
    def test_sqrt_case_insensitive(self, word: str) -> None:
        tok = tokenize(word)[0]
        assert tok.type is TokenType.SQRT
        assert tok.value == word

    def test_other_identifier_is_error(self) -> None:
        assert tokenize("sin(1)")[0] == Token(TokenType.ERROR, "sin", 0)


class TestErrors:
    def test_stops_after_first_error(self) -> None:
        toks = tokenize("1 + @ 2 + 3")
        assert toks == [
            Token(TokenType.NUMBER, "1", 0),
            Token(TokenType.PLUS, "+", 2),
            Token(TokenType.ERROR, "@", 4),
            Token(TokenType.EOF, "", 5),
        ]

    def test_always_ends_with_eof(self) -> None:
        for text in ["", "   ", "1+", "#", "abc def"]:
            assert tokenize(text)[-1].type is TokenType.EOF

    def test_empty_input(self) -> None:
        assert tokenize("") == [Token(TokenType.EOF, "", 0)]


class TestScan:
    def test_continues_past_errors(self) -> None:
        types = [t.type for t in scan("# total of $1 and $2")]
        assert types.count(TokenType.LINE_REF) == 2
        assert TokenType.EOF not in types

    def test_token_end(self) -> None:
        toks = list(scan("$12 + $ab"))
        assert token_end(toks[0]) == 3
        assert token_end(toks[1]) == 5
        assert token_end(toks[2]) == 9
