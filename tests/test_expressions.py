from __future__ import annotations

from fractions import Fraction

import pytest

import expressions
from pydantic import ValidationError

from config import Settings
from contracts import DivisionByZero, InvalidOperator, InvalidVariableName, UnboundVariable
from expressions import (
    approximate,
    default_arena,
    eval_expr,
    evaluate,
    make_constant,
    make_function,
    make_operator,
    make_variable,
    release,
    render,
)


@pytest.fixture(autouse=True)
def _fresh_defaults(monkeypatch):
    for name in (
        "EXPR_TREE_MAX_DENOMINATOR",
        "EXPR_TREE_DIVISION_POLICY",
        "EXPR_TREE_UNBOUND_POLICY",
        "EXPR_TREE_MAX_DEPTH",
        "EXPR_TREE_DECIMAL_PLACES",
    ):
        monkeypatch.delenv(name, raising=False)
    expressions.reset_defaults()
    yield
    expressions.reset_defaults()


def test_build_evaluate_render_release():
    root = make_operator("/", make_constant(5), make_variable("x"))

    assert evaluate(root, {"x": 78}) == pytest.approx(0.0641, abs=1e-4)
    assert render(root) == "(5.00 / x)"
    assert render(make_constant(0.5), "fraction") == "1/2"
    assert default_arena().live_count == 4
    assert release(root) == 3
    assert default_arena().live_count == 1


def test_construction_errors_surface_from_facade():
    with pytest.raises(InvalidVariableName):
        make_variable("A")
    with pytest.raises(InvalidOperator):
        make_operator("%", make_constant(1), make_constant(2))


def test_division_by_zero_suppressed_by_default():
    root = make_operator("/", make_constant(5), make_constant(0))

    assert evaluate(root) == 0.0
    with pytest.raises(DivisionByZero):
        evaluate(root, division_policy="raise")


def test_policies_from_environment(monkeypatch):
    monkeypatch.setenv("EXPR_TREE_DIVISION_POLICY", "raise")
    monkeypatch.setenv("EXPR_TREE_UNBOUND_POLICY", "raise")
    expressions.reset_defaults()

    with pytest.raises(DivisionByZero):
        evaluate(make_operator("/", make_constant(5), make_constant(0)))
    with pytest.raises(UnboundVariable):
        evaluate(make_variable("q"))


def test_max_denominator_from_environment(monkeypatch):
    assert render(make_constant(0.3), "fraction") == "3/10"

    monkeypatch.setenv("EXPR_TREE_MAX_DENOMINATOR", "5")
    expressions.reset_defaults()

    assert render(make_constant(0.3), "fraction") == "1/3"
    assert approximate(0.3) == Fraction(1, 3)
    assert approximate(0.3, 10) == Fraction(3, 10)


def test_approximate_defaults():
    assert approximate(0.0) == Fraction(0, 1)
    assert approximate(0.5) == Fraction(1, 2)
    assert approximate(-0.75, 100) == Fraction(-3, 4)


def test_eval_expr_and_functions():
    root = make_function("log", make_operator("*", make_variable("x"), make_constant(10)))

    result = eval_expr(root, {"x": 10})

    assert result.value == pytest.approx(2.0)
    assert result.steps[0] == "x = 10"
    assert render(root) == "log((x * 10.00), 10.00)"


def test_settings_defaults_and_env(monkeypatch):
    settings = Settings()
    assert settings.max_denominator == 10_000
    assert settings.decimal_places == 2
    assert settings.division_policy == "suppress"
    assert settings.unbound_policy == "zero"
    assert settings.max_depth is None

    monkeypatch.setenv("EXPR_TREE_MAX_DEPTH", "3")
    monkeypatch.setenv("EXPR_TREE_DECIMAL_PLACES", "3")
    expressions.reset_defaults()

    assert Settings().max_depth == 3
    assert render(make_constant(0.1285548112)) == "0.129"
    assert default_arena().max_depth == 3


@pytest.mark.parametrize(
    "name, value",
    [
        ("EXPR_TREE_MAX_DENOMINATOR", "0"),
        ("EXPR_TREE_DECIMAL_PLACES", "-1"),
        ("EXPR_TREE_MAX_DEPTH", "0"),
    ],
)
def test_settings_reject_out_of_range_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings()
