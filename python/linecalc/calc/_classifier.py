"""Line classification ahead of parsing."""

from __future__ import annotations

from enum import Enum


class LineType(Enum):
    EMPTY = "empty"  # blank or whitespace only
    COMMENT = "comment"  # first non-blank character is '#'
    EXPRESSION = "expression"


def classify(text: str) -> LineType:
    """Classify a raw input line. Only EXPRESSION lines reach the parser."""
    stripped = text.strip()
    if not stripped:
        return LineType.EMPTY
    if stripped.startswith("#"):
        return LineType.COMMENT
    return LineType.EXPRESSION


def should_evaluate(text: str) -> bool:
    return classify(text) is LineType.EXPRESSION


def is_comment(text: str) -> bool:
    return classify(text) is LineType.COMMENT


def is_empty(text: str) -> bool:
    return classify(text) is LineType.EMPTY
