import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from parsetree.builtins import BUILTIN_FUNCS
from parsetree.errors import CalcRuntimeError, EvalError
from parsetree.operators import BinaryOperator, UnaryOperator
from parsetree.tree import BinaryOperation, Expression, Literal, UnaryOperation, VariableRef
from parsetree.variables import DEFAULT_VARIABLES, VariableTable

logger = logging.getLogger(__name__)


@dataclass
class EvalResult:
    value: float
    error: EvalError = EvalError.NONE

    @property
    def ok(self) -> bool:
        return self.error is EvalError.NONE


def evaluate(tree: Optional[Expression], variables: Optional[VariableTable] = None) -> EvalResult:
    """Evaluates ``tree`` against the current values in ``variables``.

    The first runtime fault stops the walk; the result is then ``0.0`` with the
    fault's code. A ``None`` tree (e.g. from a failed parse) gives ``BAD_TREE``.
    """
    if tree is None:
        return EvalResult(value=0.0, error=EvalError.BAD_TREE)
    table = variables if variables is not None else DEFAULT_VARIABLES
    try:
        return EvalResult(value=evaluate_expression(tree, table))
    except CalcRuntimeError as e:
        logger.debug("Evaluation stopped: %s", e)
        return EvalResult(value=0.0, error=e.code)
    except RecursionError:
        return EvalResult(value=0.0, error=EvalError.NESTING_TOO_DEEP)


def evaluate_expression(expression: Expression, variables: VariableTable) -> float:
    if isinstance(expression, Literal):
        return expression.value
    elif isinstance(expression, VariableRef):
        value = variables.value_at(expression.index)
        if value is None:
            raise CalcRuntimeError(EvalError.UNRESOLVED_NODE)
        return value
    elif isinstance(expression, BinaryOperation):
        # both sides are always evaluated, && and || do not short-circuit
        left = evaluate_expression(expression.left, variables)
        right = evaluate_expression(expression.right, variables)
        impl = binary_impls.get(expression.operator)
        if impl is None:
            if isinstance(expression.operator, UnaryOperator):
                raise CalcRuntimeError(EvalError.INVALID_BINARY_OPERATOR)
            raise CalcRuntimeError(EvalError.UNKNOWN_BINARY_OPERATOR)
        return impl(left, right)
    elif isinstance(expression, UnaryOperation):
        operand = evaluate_expression(expression.operand, variables)
        if expression.operator in unary_impls:
            return unary_impls[expression.operator](operand)
        elif expression.operator in BUILTIN_FUNCS:
            return BUILTIN_FUNCS[expression.operator](operand, variables)
        else:
            raise CalcRuntimeError(EvalError.UNKNOWN_UNARY_OPERATOR)
    else:
        raise CalcRuntimeError(EvalError.UNRESOLVED_NODE)


def _truth(condition: bool) -> float:
    return 1.0 if condition else 0.0


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        raise CalcRuntimeError(EvalError.DIVISION_BY_ZERO)
    return a / b


def _truncating_mod(a: float, b: float) -> float:
    """Remainder of the operands truncated to integers, signed like the dividend: -7 % 3 => -1"""
    if not (math.isfinite(a) and math.isfinite(b)):
        return math.nan
    dividend, divisor = int(a), int(b)
    if divisor == 0:
        raise CalcRuntimeError(EvalError.DIVISION_BY_ZERO)
    remainder = abs(dividend) % abs(divisor)
    return float(remainder if dividend >= 0 else -remainder)


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def _real_pow(a: float, b: float) -> float:
    if a == 0.0 and b < 0.0:
        return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0.0 and _is_odd_integer(b) else math.inf
    except ValueError:
        # negative base, fractional exponent
        return math.nan


BinaryOperationImpl = Callable[[float, float], float]

binary_impls: dict[BinaryOperator, BinaryOperationImpl] = {
    BinaryOperator.AND: lambda a, b: _truth(bool(a) and bool(b)),
    BinaryOperator.OR: lambda a, b: _truth(bool(a) or bool(b)),
    BinaryOperator.LE: lambda a, b: _truth(a <= b),
    BinaryOperator.LT: lambda a, b: _truth(a < b),
    BinaryOperator.GE: lambda a, b: _truth(a >= b),
    BinaryOperator.GT: lambda a, b: _truth(a > b),
    BinaryOperator.EQ: lambda a, b: _truth(a == b),
    BinaryOperator.NE: lambda a, b: _truth(a != b),
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.MOD: _truncating_mod,
    BinaryOperator.DIV: _divide,
    BinaryOperator.POW: _real_pow,
}

UnaryOperationImpl = Callable[[float], float]

unary_impls: dict[UnaryOperator, UnaryOperationImpl] = {
    UnaryOperator.NOT: lambda a: _truth(not a),
    UnaryOperator.NEG: lambda a: -a,
}
