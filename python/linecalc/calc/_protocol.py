"""Result, scope and line value types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

# ---------------------------------------------------------------------------
# Line results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Success:
    """Line evaluated to a number."""

    value: float


@dataclass(frozen=True)
class Error:
    """Line failed to lex, parse or evaluate.

    ``message`` is a stable user-facing string such as ``"∞"``, ``"NaN"``
    or ``"? $tax"``; parse failures carry the parser's message.
    """

    message: str


@dataclass(frozen=True)
class Empty:
    """Blank or comment line; nothing to display."""


EMPTY = Empty()

Result = Union[Success, Error, Empty]


# ---------------------------------------------------------------------------
# Scope
# ---------------------------------------------------------------------------


def _frozen(mapping: Mapping | None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Scope:
    """Variable bindings and line results visible to a line.

    Immutable: ``with_variable`` / ``with_line_result`` return new scopes and
    never touch the receiver. ``line_results`` is keyed by 1-based line
    number and only holds lines that evaluated successfully.
    """

    variables: Mapping[str, float] = field(default_factory=dict)
    line_results: Mapping[int, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", _frozen(self.variables))
        object.__setattr__(self, "line_results", _frozen(self.line_results))

    def with_variable(self, name: str, value: float) -> Scope:
        variables = dict(self.variables)
        variables[name] = value
        return Scope(variables, self.line_results)

    def with_line_result(self, line_number: int, value: float) -> Scope:
        results = dict(self.line_results)
        results[line_number] = value
        return Scope(self.variables, results)

    def resolve_variable(self, name: str) -> float | None:
        return self.variables.get(name)

    def resolve_line_ref(self, line_number: int) -> float | None:
        return self.line_results.get(line_number)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return (
            dict(self.variables) == dict(other.variables)
            and dict(self.line_results) == dict(other.line_results)
        )

    def __hash__(self) -> int:
        return hash((frozenset(self.variables.items()), frozenset(self.line_results.items())))

    def __repr__(self) -> str:
        return f"Scope(variables={dict(self.variables)}, line_results={dict(self.line_results)})"


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Line:
    """One evaluated line of a sheet.

    ``position`` is 0-based; ``number`` is the 1-based value used for
    display and ``$n`` references.
    """

    id: int
    position: int
    input: str
    result: Result = EMPTY

    @property
    def number(self) -> int:
        return self.position + 1

