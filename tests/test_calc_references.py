"""Tests for linecalc.calc line reference extraction and renumbering."""

from __future__ import annotations

import pytest
from linecalc.calc._references import (
    line_references,
    rewrite_line_references,
    shift_after_insert,
    shift_after_remove,
)


class TestLineReferences:
    def test_in_order(self) -> None:
        assert line_references("$3 + $1 * $3") == [3, 1, 3]

    def test_variables_ignored(self) -> None:
        assert line_references("$a1 + $b") == []

    def test_inside_comment(self) -> None:
        assert line_references("# see $2") == [2]

    def test_after_invalid_character(self) -> None:
        assert line_references("1 @ $4") == [4]

    def test_none(self) -> None:
        assert line_references("100 + 2") == []


class TestShiftAfterInsert:
    @pytest.mark.parametrize(
        ("text", "inserted", "expected"),
        [
            ("$1 + $2", 2, "$1 + $3"),
            ("$1 + $2", 1, "$2 + $3"),
            ("$1 + $2", 3, "$1 + $2"),
            ("$10*$9", 10, "$11*$9"),
        ],
    )
    def test_renumbers_at_or_after(self, text: str, inserted: int, expected: str) -> None:
        assert shift_after_insert(text, inserted) == expected

    def test_preserves_spacing_and_variables(self) -> None:
        assert shift_after_insert("  $total =  $2  +  $rate%", 1) == "  $total =  $3  +  $rate%"

    def test_comment_references_follow(self) -> None:
        assert shift_after_insert("# half of $3", 2) == "# half of $4"

    def test_unchanged_text_is_same_object(self) -> None:
        text = "1 + 2"
        assert shift_after_insert(text, 1) is text


class TestShiftAfterRemove:
    def test_later_references_shift_down(self) -> None:
        assert shift_after_remove("$1 + $3", 2) == "$1 + $2"

    def test_reference_to_removed_line_kept(self) -> None:
        assert shift_after_remove("$1 + $2", 2) == "$1 + $2"

    def test_earlier_references_kept(self) -> None:
        assert shift_after_remove("$1 * 2", 3) == "$1 * 2"

    def test_mixed(self) -> None:
        assert shift_after_remove("$2 + $3 + $4", 2) == "$2 + $2 + $3"

    def test_after_lex_error(self) -> None:
        assert shift_after_remove("abc $5", 1) == "abc $4"


class TestRewrite:
    def test_custom_mapping(self) -> None:
        assert rewrite_line_references("$1+$2", lambda k: k * 10) == "$10+$20"

    def test_leading_zeros_normalized_when_changed(self) -> None:
        assert rewrite_line_references("$01", lambda k: k + 1) == "$2"
