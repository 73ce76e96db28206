"""Display helpers: render results and sheets as text."""

from __future__ import annotations

import math
import re

from linecalc.calc._classifier import is_comment, is_empty
from linecalc.calc._functions import INFINITY, NAN, NEG_INFINITY, UNKNOWN
from linecalc.calc._protocol import Empty, Error, Line, Result, Success


def format_number(value: float) -> str:
    """Render a number for display.

    Integral values below 1e15 print without a decimal point; everything
    else uses 10 significant digits without trailing zeros.
    """
    value = float(value)
    if math.isnan(value):
        return NAN
    if math.isinf(value):
        return INFINITY if value > 0 else NEG_INFINITY
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.10g}"


_VARIABLE_RE = re.compile(r"\$\w+")
_LINE_REF_RE = re.compile(r"\$\d+")


def format_error(message: str) -> str:
    """Map an error message to its display text.

    Infinities, ``NaN`` and ``? ...`` messages pass through. Undefined
    variables and invalid line references show as ``? $name``; any other
    failure is a bare ``?``.
    """
    if message in (INFINITY, NEG_INFINITY, NAN):
        return message
    lowered = message.lower()
    if "undefined variable" in lowered:
        match = _VARIABLE_RE.search(message)
        return f"{UNKNOWN} {match.group() if match else ''}"
    if "invalid line reference" in lowered:
        match = _LINE_REF_RE.search(message)
        return f"{UNKNOWN} {match.group() if match else ''}"
    if message.startswith("?"):
        return message
    return UNKNOWN


def format_result(result: Result) -> str:
    if isinstance(result, Success):
        return format_number(result.value)
    if isinstance(result, Error):
        return format_error(result.message)
    if isinstance(result, Empty):
        return ""
    raise TypeError(f"Unknown result: {type(result).__name__}")


def format_sheet(lines: list[Line]) -> str:
    """Plain-text rendering of a whole sheet, one line per row.

    Blank lines are dropped, comments are kept verbatim, and evaluated lines
    are written as ``input = result``.
    """
    rows: list[str] = []
    for line in lines:
        if is_empty(line.input):
            continue
        text = format_result(line.result)
        if is_comment(line.input) or not text:
            rows.append(line.input)
        else:
            rows.append(f"{line.input} = {text}")
    return "\n".join(rows)


def result_for_clipboard(lines: list[Line], index: int) -> str | None:
    """Formatted value of the line at 0-based *index*, or None if it has none."""
    if index < 0 or index >= len(lines):
        return None
    result = lines[index].result
    if not isinstance(result, Success):
        return None
    return format_number(result.value)
