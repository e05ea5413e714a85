import math

import pytest

from parsetree.errors import EvalError
from parsetree.operators import BinaryOperator, UnaryOperator
from parsetree.parser import parse
from parsetree.runtime import evaluate
from parsetree.tree import BinaryOperation, Expression, Literal, UnaryOperation, VariableRef
from parsetree.variables import DEFAULT_VARIABLES, VariableTable, set_variable


@pytest.mark.parametrize(
    "code, error",
    [
        pytest.param("1/0", EvalError.DIVISION_BY_ZERO),
        pytest.param("1/(2-2)", EvalError.DIVISION_BY_ZERO),
        pytest.param("5%0", EvalError.DIVISION_BY_ZERO),
        pytest.param("5%0.5", EvalError.DIVISION_BY_ZERO, id="divisor truncates to zero"),
        pytest.param("tan(pi/2)", EvalError.TAN_UNDEFINED),
        pytest.param("tan(-pi/2)", EvalError.TAN_UNDEFINED),
        pytest.param("log(-1)", EvalError.LOG10_DOMAIN),
        pytest.param("ln(-1)", EvalError.LN_DOMAIN),
        pytest.param("sqrt(-1)", EvalError.SQRT_DOMAIN),
        pytest.param("sqrt(1e400-1e400)", EvalError.SQRT_DOMAIN, id="nan is outside the domain"),
        pytest.param("1/0 + sqrt(-1)", EvalError.DIVISION_BY_ZERO, id="left operand fails first"),
        pytest.param("sqrt(-1) + 1/0", EvalError.SQRT_DOMAIN),
        pytest.param("0 && 1/0", EvalError.DIVISION_BY_ZERO, id="&& does not short-circuit"),
        pytest.param("1 || ln(-2)", EvalError.LN_DOMAIN, id="|| does not short-circuit"),
        pytest.param("-sqrt(-4)", EvalError.SQRT_DOMAIN),
        pytest.param("sin(log(-1))", EvalError.LOG10_DOMAIN),
    ],
)
def test_eval_runtime_error(code: str, error: EvalError) -> None:
    parsed = parse(code)
    assert parsed.ok, parsed.message
    result = evaluate(parsed.tree)
    assert result.error is error
    assert not result.ok
    assert result.value == 0.0


def test_runtime_error_codes_are_stable() -> None:
    assert EvalError.NONE.value == 0
    assert EvalError.DIVISION_BY_ZERO.value == 2
    assert EvalError.TAN_UNDEFINED.value == 4
    assert EvalError.LOG10_DOMAIN.value == 5
    assert EvalError.LN_DOMAIN.value == 6
    assert EvalError.SQRT_DOMAIN.value == 7
    assert EvalError.BAD_TREE.value == 99


def test_eval_none_tree() -> None:
    result = evaluate(None)
    assert result.error is EvalError.BAD_TREE
    assert result.value == 0.0


def test_eval_failed_parse() -> None:
    assert evaluate(parse("(1+2").tree).error is EvalError.BAD_TREE


def test_reevaluate_after_variable_change() -> None:
    assert set_variable("t", 5) == 0
    tree = parse("t").tree
    assert evaluate(tree).value == 5.0
    set_variable("t", 9)
    assert evaluate(tree).value == 9.0


def test_reevaluate_expression_of_time() -> None:
    tree = parse("t^2 - 2*t").tree
    values = []
    for t in range(4):
        set_variable("t", t)
        values.append(evaluate(tree).value)
    assert values == [0.0, -1.0, 0.0, 3.0]


@pytest.mark.parametrize(
    "t, x, expected",
    [
        pytest.param(0.0, 1.0, 0.0),
        pytest.param(5.0, 1.0, 1.0),
        pytest.param(5.0, 5.0, 0.0),
        pytest.param(-1.0, -2.0, 1.0),
    ],
)
def test_step_follows_time_variable(t: float, x: float, expected: float) -> None:
    set_variable("t", t)
    assert evaluate(parse(f"step({x})").tree).value == expected


def test_step_reads_slot_zero_of_evaluating_table() -> None:
    variables = VariableTable([("x", 10.0)])
    tree = parse("step(3)", variables).tree
    assert evaluate(tree, variables).value == 1.0
    variables.update("x", 2.0)
    assert evaluate(tree, variables).value == 0.0


def test_variable_out_of_active_range() -> None:
    result = evaluate(VariableRef(index=7, name="blank"))
    assert result.error is EvalError.UNRESOLVED_NODE


def test_reserved_slot_in_active_range_reads_zero() -> None:
    assert evaluate(VariableRef(index=4)).value == 0.0


def test_tree_evaluated_against_other_table() -> None:
    tree = parse("pi").tree
    assert evaluate(tree).value == pytest.approx(math.pi)
    assert evaluate(tree, VariableTable([("a", 1.0)])).error is EvalError.UNRESOLVED_NODE


@pytest.mark.parametrize(
    "tree, error",
    [
        pytest.param(
            BinaryOperation(UnaryOperator.NOT, Literal(1.0), Literal(2.0)),  # type: ignore
            EvalError.INVALID_BINARY_OPERATOR,
        ),
        pytest.param(
            BinaryOperation("?", Literal(1.0), Literal(2.0)),  # type: ignore
            EvalError.UNKNOWN_BINARY_OPERATOR,
        ),
        pytest.param(
            UnaryOperation(BinaryOperator.ADD, Literal(1.0)),  # type: ignore
            EvalError.UNKNOWN_UNARY_OPERATOR,
        ),
        pytest.param(
            BinaryOperation(BinaryOperator.ADD, Literal(1.0), "x"),  # type: ignore
            EvalError.UNRESOLVED_NODE,
        ),
    ],
)
def test_eval_malformed_tree(tree: Expression, error: EvalError) -> None:
    assert evaluate(tree).error is error


def test_eval_deep_tree() -> None:
    tree: Expression = Literal(1.0)
    for _ in range(10000):
        tree = UnaryOperation(UnaryOperator.NEG, tree)
    assert evaluate(tree).error is EvalError.NESTING_TOO_DEEP


def test_default_table_is_used() -> None:
    DEFAULT_VARIABLES.update("t", 3.0)
    assert evaluate(parse("t * 2").tree).value == 6.0


def test_upper_case_slot_is_only_reachable_by_index() -> None:
    DEFAULT_VARIABLES.update("T", 3.0)
    assert parse("T").error
    assert evaluate(VariableRef(index=1)).value == 3.0
