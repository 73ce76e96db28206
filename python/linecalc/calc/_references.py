"""Line reference extraction and renumbering.

Rewrites operate on LINE_REF tokens found by :func:`scan`, splicing new
numbers back into the original text so spacing, comments and anything the
lexer rejects are preserved byte for byte.
"""

from __future__ import annotations

from typing import Callable

from linecalc.calc._lexer import TokenType, scan, token_end


def _ref_number(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:  # more digits than int() will convert
        return None


def line_references(text: str) -> list[int]:
    """Line numbers referenced by ``$n`` tokens in *text*, in order of appearance."""
    refs: list[int] = []
    for tok in scan(text):
        if tok.type is TokenType.LINE_REF:
            number = _ref_number(tok.value)
            if number is not None:
                refs.append(number)
    return refs


def rewrite_line_references(text: str, renumber: Callable[[int], int]) -> str:
    """Return *text* with every ``$n`` replaced by ``$renumber(n)``."""
    parts: list[str] = []
    last = 0
    for tok in scan(text):
        if tok.type is not TokenType.LINE_REF:
            continue
        old = _ref_number(tok.value)
        if old is None:
            continue
        new = renumber(old)
        if new == old:
            continue
        parts.append(text[last:tok.position])
        parts.append(f"${new}")
        last = token_end(tok)
    if not parts:
        return text
    parts.append(text[last:])
    return "".join(parts)


def shift_after_insert(text: str, inserted: int) -> str:
    """Renumber references after a line is inserted at 1-based *inserted*.

    ``$k`` with ``k >= inserted`` becomes ``$(k+1)``.
    """
    return rewrite_line_references(text, lambda k: k + 1 if k >= inserted else k)


def shift_after_remove(text: str, removed: int) -> str:
    """Renumber references after 1-based line *removed* is deleted.

    ``$k`` with ``k > removed`` becomes ``$(k-1)``. References to the removed
    line itself are left alone and stop resolving.
    """
    return rewrite_line_references(text, lambda k: k - 1 if k > removed else k)
