"""linecalc — a live, line-oriented calculator engine.

Usage::

    from linecalc import SheetEngine, format_result

    engine = SheetEngine()
    lines = engine.evaluate([
        "# groceries",
        "$tax = 8%",
        "42.50 + 17.25",
        "$3 + $3 * $tax",
    ])
    print(format_result(lines[3].result))  # 64.53

    # Editing a line re-evaluates everything below it
    lines = engine.update_line(2, "50")
    print(format_result(lines[3].result))  # 54
"""

from linecalc._format import (
    format_error,
    format_number,
    format_result,
    format_sheet,
    result_for_clipboard,
)
from linecalc._sheet import SheetEngine
from linecalc.calc import (
    EMPTY,
    Empty,
    Error,
    Line,
    Result,
    Scope,
    Success,
    evaluate_expression,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "EMPTY",
    "Empty",
    "Error",
    "Line",
    "Result",
    "Scope",
    "SheetEngine",
    "Success",
    "evaluate_expression",
    "format_error",
    "format_number",
    "format_result",
    "format_sheet",
    "result_for_clipboard",
]
