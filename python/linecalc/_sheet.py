"""SheetEngine: evaluates a sheet of lines top to bottom with a running scope."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from linecalc.calc._classifier import should_evaluate
from linecalc.calc._evaluator import evaluate_parse_result
from linecalc.calc._parser import parse_expression
from linecalc.calc._protocol import EMPTY, Line, Result, Scope, Success
from linecalc.calc._references import shift_after_insert, shift_after_remove

logger = logging.getLogger(__name__)


class SheetEngine:
    """Coordinates multi-line evaluation with scope management.

    Lines are evaluated in a single top-to-bottom pass. Variables assigned
    on earlier lines are visible to later ones, and every successful line
    is recorded so later lines can reference it as ``$n``. A line's own
    result is recorded only after it evaluates, so references to the same
    or a later line never resolve and cycles cannot form.

    Any edit re-runs the whole pass. Every public method holds the engine
    lock for its full duration, and the returned lines and scope are
    immutable snapshots.

    Usage::

        engine = SheetEngine()
        engine.evaluate(["$rate = 8%", "250", "$2 + $2 * $rate"])
        lines = engine.update_line(1, "300")
        lines[2].result  # Success(value=324.0)
    """

    def __init__(self, inputs: Iterable[str] | None = None) -> None:
        self._lock = threading.RLock()
        self._lines: list[Line] = []
        self._scope = Scope()
        if inputs is not None:
            self.evaluate(list(inputs))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def lines(self) -> list[Line]:
        with self._lock:
            return list(self._lines)

    @property
    def scope(self) -> Scope:
        with self._lock:
            return self._scope

    @property
    def inputs(self) -> list[str]:
        with self._lock:
            return [line.input for line in self._lines]

    def variable_names(self) -> list[str]:
        """Sorted names of the variables bound by the last pass."""
        with self._lock:
            return sorted(self._scope.variables)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def evaluate(self, inputs: list[str]) -> list[Line]:
        """Evaluate *inputs* from an empty scope and return the new lines."""
        with self._lock:
            return self._evaluate(inputs)

    def update_line(self, index: int, text: str) -> list[Line]:
        """Replace the input at 0-based *index* and re-evaluate.

        The sheet grows with blank lines when *index* is past the end; a
        negative index leaves the sheet untouched.
        """
        with self._lock:
            if index < 0:
                return list(self._lines)
            inputs = [line.input for line in self._lines]
            if index >= len(inputs):
                inputs.extend([""] * (index + 1 - len(inputs)))
            inputs[index] = text
            return self._evaluate(inputs)

    def insert_line(self, index: int, text: str) -> list[Line]:
        """Insert *text* at 0-based *index* (clamped to the sheet bounds).

        Existing ``$n`` references are renumbered so they keep pointing at
        the same lines.
        """
        with self._lock:
            index = max(0, min(index, len(self._lines)))
            inserted = index + 1
            inputs = [shift_after_insert(line.input, inserted) for line in self._lines]
            inputs.insert(index, text)
            logger.debug("Inserted line %d", inserted)
            return self._evaluate(inputs)

    def remove_line(self, index: int) -> list[Line]:
        """Remove the line at 0-based *index* and re-evaluate.

        References past the removed line shift down by one. References to
        the removed line itself are kept as written and no longer resolve.
        Out-of-range indexes leave the sheet untouched.
        """
        with self._lock:
            if index < 0 or index >= len(self._lines):
                return list(self._lines)
            removed = index + 1
            inputs = [
                shift_after_remove(line.input, removed)
                for i, line in enumerate(self._lines)
                if i != index
            ]
            logger.debug("Removed line %d", removed)
            return self._evaluate(inputs)

    def append_line(self, text: str) -> list[Line]:
        """Add *text* as the last line and re-evaluate."""
        with self._lock:
            inputs = [line.input for line in self._lines]
            inputs.append(text)
            return self._evaluate(inputs)

    def clear(self) -> list[Line]:
        """Reset to a single blank line and an empty scope."""
        with self._lock:
            self._scope = Scope()
            self._lines = [Line(id=0, position=0, input="", result=EMPTY)]
            return list(self._lines)

    # ------------------------------------------------------------------
    # Evaluation pass
    # ------------------------------------------------------------------

    def _evaluate(self, inputs: list[str]) -> list[Line]:
        """Full pass; the caller must hold the lock."""
        scope = Scope()
        lines: list[Line] = []

        for index, text in enumerate(inputs):
            result: Result = EMPTY
            if should_evaluate(text):
                result, scope = evaluate_parse_result(parse_expression(text), scope)
                if isinstance(result, Success):
                    scope = scope.with_line_result(index + 1, result.value)
                else:
                    logger.debug("Line %d failed: %r -> %s", index + 1, text, result)
            lines.append(Line(id=index, position=index, input=text, result=result))

        self._lines = lines
        self._scope = scope
        return list(lines)

    def __repr__(self) -> str:
        return f"<SheetEngine lines={len(self)}>"

