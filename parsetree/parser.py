"""Recursive-descent parser producing an expression tree.

Precedence, lowest first::

    expr   := term (("&&" | "||") expr)?
    term   := fact (("<=" | "<" | ">=" | ">" | "==" | "!=") term)?
    fact   := part (("+" | "-") fact)?
    part   := part2 (("*" | "%") part | ("/" part2)+ (("*" | "%") part)?)
    part2  := atom ("^" part2)?
    atom   := ("+" | "-" | "!") atom | primary
    primary:= "(" expr ")" | function "(" expr ")" | variable | number

Every layer is right-recursive, so ``2-3-1`` groups as ``2-(3-1)``. Division
chains are the one exception and group left to right: ``8/2/2`` is ``(8/2)/2``.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from parsetree.errors import ParserError, SyntaxFault, format_diagnostic
from parsetree.operators import (
    ADDITIVE_OPERATORS,
    COMPARISON_OPERATORS,
    DIVISION_SYMBOL,
    FUNCTION_NAMES,
    LOGICAL_OPERATORS,
    MULTIPLICATIVE_OPERATORS,
    POWER_SYMBOL,
    PREFIX_OPERATORS,
    BinaryOperator,
)
from parsetree.scanner import ParseContext, scan_number
from parsetree.tree import BinaryOperation, Expression, Literal, UnaryOperation, VariableRef
from parsetree.utils import WHITESPACE
from parsetree.variables import DEFAULT_VARIABLES, VariableTable

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    tree: Optional[Expression]
    error: bool = False
    message: str = ""
    fault: Optional[SyntaxFault] = None
    position: Optional[int] = None

    @property
    def ok(self) -> bool:
        return not self.error


def parse(source: str, variables: Optional[VariableTable] = None) -> ParseResult:
    """Parses ``source`` into a tree. Identifiers are resolved against
    ``variables`` (the process-wide table by default); evaluate the tree against
    the same table.

    Never raises on bad input: a syntax fault comes back as a result with
    ``tree=None``, ``error=True`` and a two-line diagnostic in ``message``.
    """
    ctx = ParseContext(source, variables=variables if variables is not None else DEFAULT_VARIABLES)

    if not source.strip(WHITESPACE):
        return ParseResult(
            tree=None,
            error=True,
            message=format_diagnostic(source, 0, SyntaxFault.NOT_A_FUNCTION.description),
            fault=SyntaxFault.NOT_A_FUNCTION,
            position=0,
        )

    try:
        try:
            tree = _consume_expression(ctx)
        except RecursionError:
            ctx.fault(SyntaxFault.NESTING_TOO_DEEP)

        # a valid prefix followed by anything else is still an error, e.g. "2 3"
        ctx.skip_whitespace()
        if not ctx.at_end():
            ctx.fault(SyntaxFault.UNEXPECTED_SYMBOL)
    except ParserError as e:
        return ParseResult(tree=None, error=True, message=str(e), fault=e.fault, position=e.position)

    return ParseResult(tree=tree)


def _consume_binary_layer(
    ctx: ParseContext, operators: dict[str, BinaryOperator]
) -> Optional[BinaryOperator]:
    for symbol, operator in operators.items():
        if ctx.match(symbol):
            ctx.advance(len(symbol))
            return operator
    return None


def _consume_expression(ctx: ParseContext) -> Expression:
    left = _consume_comparison(ctx)
    operator = _consume_binary_layer(ctx, LOGICAL_OPERATORS)
    if operator is None:
        return left
    return BinaryOperation(operator=operator, left=left, right=_consume_expression(ctx))


def _consume_comparison(ctx: ParseContext) -> Expression:
    left = _consume_additive(ctx)
    operator = _consume_binary_layer(ctx, COMPARISON_OPERATORS)
    if operator is None:
        return left
    return BinaryOperation(operator=operator, left=left, right=_consume_comparison(ctx))


def _consume_additive(ctx: ParseContext) -> Expression:
    left = _consume_multiplicative(ctx)
    operator = _consume_binary_layer(ctx, ADDITIVE_OPERATORS)
    if operator is None:
        return left
    return BinaryOperation(operator=operator, left=left, right=_consume_additive(ctx))


def _consume_multiplicative(ctx: ParseContext) -> Expression:
    left = _consume_power(ctx)
    operator = _consume_binary_layer(ctx, MULTIPLICATIVE_OPERATORS)
    if operator is not None:
        return BinaryOperation(operator=operator, left=left, right=_consume_multiplicative(ctx))

    if not ctx.match(DIVISION_SYMBOL):
        return left

    # a division chain folds to the left: 2/3/2 => (2/3)/2
    while ctx.match(DIVISION_SYMBOL):
        ctx.advance(len(DIVISION_SYMBOL))
        left = BinaryOperation(operator=BinaryOperator.DIV, left=left, right=_consume_power(ctx))

    operator = _consume_binary_layer(ctx, MULTIPLICATIVE_OPERATORS)
    if operator is None:
        return left
    return BinaryOperation(operator=operator, left=left, right=_consume_multiplicative(ctx))


def _consume_power(ctx: ParseContext) -> Expression:
    left = _consume_unary(ctx)
    if not ctx.match(POWER_SYMBOL):
        return left
    ctx.advance(len(POWER_SYMBOL))
    return BinaryOperation(operator=BinaryOperator.POW, left=left, right=_consume_power(ctx))


def _consume_unary(ctx: ParseContext) -> Expression:
    for symbol, operator in PREFIX_OPERATORS.items():
        if ctx.match(symbol):
            ctx.advance(len(symbol))
            operand = _consume_unary(ctx)
            if operator is None:
                return operand
            return UnaryOperation(operator=operator, operand=operand)
    return _consume_primary(ctx)


def _consume_closing_bracket(ctx: ParseContext) -> None:
    if not ctx.match(")"):
        ctx.fault(SyntaxFault.MISMATCHED_PARENTHESIS)
    ctx.advance(1)


def _consume_primary(ctx: ParseContext) -> Expression:
    if ctx.match("("):
        ctx.advance(1)
        inner = _consume_expression(ctx)
        _consume_closing_bracket(ctx)
        return inner

    identifier = ctx.peek_identifier()
    if not identifier:
        return Literal(scan_number(ctx))

    if identifier in FUNCTION_NAMES:
        ctx.advance(len(identifier))
        if not ctx.match("("):
            ctx.fault(SyntaxFault.MISSING_PARENTHESIS)
        ctx.advance(1)
        argument = _consume_expression(ctx)
        _consume_closing_bracket(ctx)
        return UnaryOperation(operator=FUNCTION_NAMES[identifier], operand=argument)

    index = ctx.variables.lookup(identifier)
    if index is None:
        logger.debug("Unknown identifier %r", identifier)
        ctx.fault(SyntaxFault.UNEXPECTED_SYMBOL)
    ctx.advance(len(identifier))
    return VariableRef(index=index, name=identifier)
