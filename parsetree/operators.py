"""Operator catalog shared by the parser and the evaluator.

Numeric values are stable identities: callers may store or log them, so
never renumber a member.
"""
from typing import Optional

from parsetree.utils import PrintableEnum


class BinaryOperator(PrintableEnum):
    AND = 1
    OR = 2
    LE = 3
    LT = 4
    GE = 5
    GT = 6
    EQ = 7
    NE = 8
    ADD = 9
    SUB = 10
    MUL = 11
    MOD = 12
    DIV = 13
    POW = 14


class UnaryOperator(PrintableEnum):
    NOT = 0
    NEG = 10  # shares its id with SUB
    SIN = 15
    COS = 16
    TAN = 17
    EXP = 18
    LOG = 19
    LN = 20
    SQRT = 21
    STEP = 22


BINARY_SYMBOLS: dict[BinaryOperator, str] = {
    BinaryOperator.AND: "&&",
    BinaryOperator.OR: "||",
    BinaryOperator.LE: "<=",
    BinaryOperator.LT: "<",
    BinaryOperator.GE: ">=",
    BinaryOperator.GT: ">",
    BinaryOperator.EQ: "==",
    BinaryOperator.NE: "!=",
    BinaryOperator.ADD: "+",
    BinaryOperator.SUB: "-",
    BinaryOperator.MUL: "*",
    BinaryOperator.MOD: "%",
    BinaryOperator.DIV: "/",
    BinaryOperator.POW: "^",
}

FUNCTION_NAMES: dict[str, UnaryOperator] = {
    "sin": UnaryOperator.SIN,
    "cos": UnaryOperator.COS,
    "tan": UnaryOperator.TAN,
    "exp": UnaryOperator.EXP,
    "log": UnaryOperator.LOG,
    "ln": UnaryOperator.LN,
    "sqrt": UnaryOperator.SQRT,
    "step": UnaryOperator.STEP,
}

PREFIX_SYMBOLS: dict[UnaryOperator, str] = {
    UnaryOperator.NOT: "!",
    UnaryOperator.NEG: "-",
}


def _symbol_table(*operators: BinaryOperator) -> dict[str, BinaryOperator]:
    # insertion order is match order
    return {BINARY_SYMBOLS[op]: op for op in operators}


# Grammar layers, lowest precedence first. Two-character symbols are listed
# before the one-character symbols they start with.
LOGICAL_OPERATORS = _symbol_table(BinaryOperator.AND, BinaryOperator.OR)
COMPARISON_OPERATORS = _symbol_table(
    BinaryOperator.LE,
    BinaryOperator.LT,
    BinaryOperator.GE,
    BinaryOperator.GT,
    BinaryOperator.EQ,
    BinaryOperator.NE,
)
ADDITIVE_OPERATORS = _symbol_table(BinaryOperator.ADD, BinaryOperator.SUB)
MULTIPLICATIVE_OPERATORS = _symbol_table(BinaryOperator.MUL, BinaryOperator.MOD)
DIVISION_SYMBOL = BINARY_SYMBOLS[BinaryOperator.DIV]
POWER_SYMBOL = BINARY_SYMBOLS[BinaryOperator.POW]

# "+" is accepted as a prefix but builds no node
PREFIX_OPERATORS: dict[str, Optional[UnaryOperator]] = {
    "+": None,
    PREFIX_SYMBOLS[UnaryOperator.NEG]: UnaryOperator.NEG,
    PREFIX_SYMBOLS[UnaryOperator.NOT]: UnaryOperator.NOT,
}


def function_name(op: UnaryOperator) -> Optional[str]:
    for name, candidate in FUNCTION_NAMES.items():
        if candidate is op:
            return name
    return None
