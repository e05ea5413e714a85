"""Syntax faults raised while parsing and runtime codes raised while evaluating.

Both exceptions are internal: ``parse()`` and ``evaluate()`` catch them and
hand the caller a result object instead.
"""
import enum
from dataclasses import dataclass

from parsetree.utils import PrintableEnum


class SyntaxFault(PrintableEnum):
    UNEXPECTED_SYMBOL = enum.auto()
    MISMATCHED_PARENTHESIS = enum.auto()
    MISSING_PARENTHESIS = enum.auto()
    NOT_A_FUNCTION = enum.auto()
    NESTING_TOO_DEEP = enum.auto()

    @property
    def description(self) -> str:
        return _FAULT_DESCRIPTIONS[self]


_FAULT_DESCRIPTIONS = {
    SyntaxFault.UNEXPECTED_SYMBOL: "unexpected symbol",
    SyntaxFault.MISMATCHED_PARENTHESIS: "Mis-matched parenthesis",
    SyntaxFault.MISSING_PARENTHESIS: "Missing parenthesis",
    SyntaxFault.NOT_A_FUNCTION: "Not a function",
    SyntaxFault.NESTING_TOO_DEEP: "expression nested too deeply",
}


def format_diagnostic(source: str, position: int, description: str) -> str:
    """Two-line diagnostic: the source, then a dash for every character
    before ``position`` and a caret under the offending column."""
    return "\n".join([source.rstrip("\n"), "-" * position + "^ " + description])


@dataclass
class ParserError(Exception):
    fault: SyntaxFault
    source: str
    position: int

    def __str__(self) -> str:
        return format_diagnostic(self.source, self.position, self.fault.description)


class EvalError(PrintableEnum):
    NONE = 0
    INVALID_BINARY_OPERATOR = 1
    DIVISION_BY_ZERO = 2
    UNKNOWN_BINARY_OPERATOR = 3
    TAN_UNDEFINED = 4
    LOG10_DOMAIN = 5
    LN_DOMAIN = 6
    SQRT_DOMAIN = 7
    UNKNOWN_UNARY_OPERATOR = 8
    UNRESOLVED_NODE = 9
    NESTING_TOO_DEEP = 10
    BAD_TREE = 99


@dataclass
class CalcRuntimeError(Exception):
    code: EvalError

    def __str__(self) -> str:
        return f"Runtime error #{self.code.value}: {self.code}"
