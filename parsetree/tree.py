from dataclasses import dataclass
from typing import Iterator, Optional

from parsetree.operators import (
    BINARY_SYMBOLS,
    PREFIX_SYMBOLS,
    BinaryOperator,
    UnaryOperator,
    function_name,
)


@dataclass(frozen=True)
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class UnaryOperation:
    operator: UnaryOperator
    operand: "Expression"


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class VariableRef:
    """Slot index resolved at parse time; the value is read on every evaluation"""

    index: int
    name: str = ""


Expression = BinaryOperation | UnaryOperation | Literal | VariableRef


def dispose_tree(tree: Optional[Expression]) -> None:
    """Kept for callers that manage trees explicitly. Nodes are reclaimed by the
    garbage collector once the root is dropped, so there is nothing to free and
    disposing ``None`` or the same tree twice is fine."""
    return None


def iter_nodes(tree: Optional[Expression]) -> Iterator[Expression]:
    """Pre-order walk over every node reachable from ``tree``"""
    stack: list[Expression] = [tree] if tree is not None else []
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, BinaryOperation):
            stack.append(node.right)
            stack.append(node.left)
        elif isinstance(node, UnaryOperation):
            stack.append(node.operand)


def _format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def unparse(tree: Optional[Expression]) -> str:
    """Renders ``tree`` with every binary operation parenthesized,
    e.g. ``2-3-1`` => ``(2 - (3 - 1))``"""
    if tree is None:
        return ""
    elif isinstance(tree, Literal):
        return _format_number(tree.value)
    elif isinstance(tree, VariableRef):
        return tree.name or f"${tree.index}"
    elif isinstance(tree, UnaryOperation):
        operand = unparse(tree.operand)
        if tree.operator in PREFIX_SYMBOLS:
            return PREFIX_SYMBOLS[tree.operator] + operand
        name = function_name(tree.operator)
        return f"{name or tree.operator}({operand})"
    elif isinstance(tree, BinaryOperation):
        return f"({unparse(tree.left)} {BINARY_SYMBOLS[tree.operator]} {unparse(tree.right)})"
    else:
        raise TypeError(f"Unexpected expression type: {tree!r}")
