import math

import pytest

from datahandler.formula import (
    FormulaError,
    Name,
    Number,
    Operation,
    Program,
    Signed,
    evaluate,
    evaluate_formula,
    parse,
)
from datahandler.manager import Manager, UnknownVariableError
from datahandler.variable import Naming, Variable


@pytest.fixture
def manager():
    m = Manager()
    m.add_variable(Variable([5, 4, 3, 2, 1], Naming("Bar")))
    m.add_variable(Variable([1, 2, 3, 4, 5], Naming("Var")))
    return m


def test_simple_source_case(manager):
    assert evaluate_formula("Var^3 + Bar^2", manager) == [26, 24, 36, 68, 126]


def test_parse_structure():
    assert parse("Var + 1") == Program(Name("Var"), (Operation("+", Number(1.0)),))


def test_parse_unary_minus_on_name():
    assert parse("-Var") == Signed("-", Name("Var"))


def test_parse_signed_number_is_a_number():
    assert parse("-3") == Number(-3.0)


def test_parse_evaluate_matches_evaluate_formula(manager):
    assert evaluate(parse("Bar * Var"), manager) == evaluate_formula("Bar*Var", manager)


def test_multiplication_binds_tighter_than_addition(manager):
    assert evaluate_formula("Bar + Var * 2", manager) == evaluate_formula(
        "Bar + (Var * 2)", manager
    )


def test_power_is_left_associative(manager):
    assert evaluate_formula("2^3^2", manager) == evaluate_formula("(2^3)^2", manager)


def test_negation(manager):
    assert evaluate_formula("-Var", manager) == [-1, -2, -3, -4, -5]


def test_unary_plus_keeps_values(manager):
    assert evaluate_formula("+Var", manager) == manager.find("Var").measurements


def test_number_is_broadcast(manager):
    result = evaluate_formula("1.5e1", manager)
    assert result == [15.0] * manager.measurements_count()


def test_whitespace_is_ignored(manager):
    assert evaluate_formula("  Var  ", manager) == manager.find("Var").measurements


def test_subtraction_of_itself_is_zero(manager):
    assert evaluate_formula("Bar - Bar", manager) == [0.0] * 5


def test_names_with_digits_and_underscore():
    m = Manager()
    m.add_variable(Variable([1, 2], Naming("x_1")))
    assert evaluate_formula("x_1 * x_1", m) == [1.0, 4.0]


def test_division_by_zero_gives_infinity(manager):
    result = evaluate_formula("Var / 0", manager)
    assert len(result) == 5
    assert [math.isinf(v) and v > 0 for v in result] == [True] * 5


def test_zero_over_zero_gives_nan(manager):
    result = evaluate_formula("0 / 0", manager)
    assert len(result) == 5
    assert [math.isnan(v) for v in result] == [True] * 5


def test_negative_base_fractional_power_gives_nan(manager):
    result = evaluate_formula("-Var ^ 0.5", manager)
    assert len(result) == 5
    assert [math.isnan(v) for v in result] == [True] * 5


def test_unknown_name_raises(manager):
    with pytest.raises(UnknownVariableError):
        evaluate_formula("Foo + 1", manager)


@pytest.mark.parametrize(
    "text", ["", "1 +", "(1", "1 2", "Var Bar", "*2", "- -Var", "Var ^", "()"]
)
def test_incorrect_formulas_raise(text):
    with pytest.raises(FormulaError):
        parse(text)


def test_empty_manager_gives_empty_result():
    assert evaluate_formula("1 + 2", Manager()) == []