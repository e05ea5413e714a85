import math
from typing import Callable

from parsetree.errors import CalcRuntimeError, EvalError
from parsetree.operators import UnaryOperator
from parsetree.variables import VariableTable

TAN_POLE_EPSILON = 5e-16

BuiltinFunc = Callable[[float, VariableTable], float]

BUILTIN_FUNCS: dict[UnaryOperator, BuiltinFunc] = dict()


def register_builtin_func(operator: UnaryOperator):
    """Registers the implementation of a named function. Math errors the
    implementation does not handle itself turn into IEEE results, the way a
    C math library reports them: overflow gives ``inf``, anything else ``nan``."""

    def decorator(fn: BuiltinFunc) -> BuiltinFunc:
        def decorated(arg: float, variables: VariableTable) -> float:
            try:
                return fn(arg, variables)
            except OverflowError:
                return math.inf
            except ValueError:
                return math.nan

        BUILTIN_FUNCS[operator] = decorated
        return decorated

    return decorator


@register_builtin_func(UnaryOperator.SIN)
def sin_(arg: float, variables: VariableTable) -> float:
    return math.sin(arg)


@register_builtin_func(UnaryOperator.COS)
def cos_(arg: float, variables: VariableTable) -> float:
    return math.cos(arg)


@register_builtin_func(UnaryOperator.TAN)
def tan_(arg: float, variables: VariableTable) -> float:
    if abs(abs(math.fmod(arg, math.pi)) - math.pi / 2) < TAN_POLE_EPSILON:
        raise CalcRuntimeError(EvalError.TAN_UNDEFINED)
    return math.tan(arg)


@register_builtin_func(UnaryOperator.EXP)
def exp_(arg: float, variables: VariableTable) -> float:
    return math.exp(arg)


# ``arg >= 0.0`` is false for nan, so nan is a domain error too


@register_builtin_func(UnaryOperator.LOG)
def log_(arg: float, variables: VariableTable) -> float:
    if not arg >= 0.0:
        raise CalcRuntimeError(EvalError.LOG10_DOMAIN)
    return math.log10(arg) if arg > 0.0 else -math.inf


@register_builtin_func(UnaryOperator.LN)
def ln_(arg: float, variables: VariableTable) -> float:
    if not arg >= 0.0:
        raise CalcRuntimeError(EvalError.LN_DOMAIN)
    return math.log(arg) if arg > 0.0 else -math.inf


@register_builtin_func(UnaryOperator.SQRT)
def sqrt_(arg: float, variables: VariableTable) -> float:
    if not arg >= 0.0:
        raise CalcRuntimeError(EvalError.SQRT_DOMAIN)
    return math.sqrt(arg)


@register_builtin_func(UnaryOperator.STEP)
def step_(arg: float, variables: VariableTable) -> float:
    """1 while ``arg`` is below the time variable (slot 0), 0 afterwards"""
    time = variables.value_at(0)
    if time is None:
        raise CalcRuntimeError(EvalError.UNRESOLVED_NODE)
    return 1.0 if arg < time else 0.0
