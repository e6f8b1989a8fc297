import math

import pytest

from examplekit.expr import (
    Binary,
    ExprError,
    Literal,
    Unary,
    Var,
    format_expr,
    parse,
)


def _parse_and_check(text):
    e = parse(text)
    e.check(set())
    return e


EVAL_CASES = [
    ("sqrt(A / pi)", {"A": 87616, "pi": math.pi}, "167"),
    ("pow(x, 3) + pow(y, 3)", {"x": 12, "y": 1}, "1729"),
    ("pow(x, 3) + pow(y, 3)", {"x": 9, "y": 10}, "1729"),
    ("5 / 9 * (F - 32)", {"F": -40}, "-40"),
    ("5 / 9 * (F - 32)", {"F": 32}, "0"),
    ("5 / 9 * (F - 32)", {"F": 212}, "100"),
    ("-1 + -x", {"x": 1}, "-2"),
    ("-1 - x", {"x": 1}, "-2"),
]

ERROR_CASES = [
    ("x % 2", "unexpected '%'"),
    ("math.Pi", "unexpected '.'"),
    ("!true", "unexpected '!'"),
    ('"hello"', "unexpected '\"'"),
    ("log(10)", 'unknown function "log"'),
    ("sqrt(1, 2)", "call to sqrt has 2 args, want 1"),
]


@pytest.mark.parametrize("text, env, want", EVAL_CASES)
def test_eval(text, env, want):
    assert "%.6g" % parse(text).eval(env) == want


@pytest.mark.parametrize("text, env, want", EVAL_CASES)
def test_eval_after_check(text, env, want):
    assert "%.6g" % _parse_and_check(text).eval(env) == want


@pytest.mark.parametrize("text, want", ERROR_CASES)
def test_errors(text, want):
    with pytest.raises(ExprError) as info:
        _parse_and_check(text)
    assert str(info.value) == want


@pytest.mark.parametrize("text, env, want", EVAL_CASES)
def test_format_round_trip(text, env, want):
    e = parse(text)
    again = parse(format_expr(e))
    assert again == e
    assert "%.6g" % again.eval(env) == want


def test_format_shapes():
    assert format_expr(parse("-1 + -x")) == "((-1) + (-x))"
    assert format_expr(parse("sqrt(A / pi)")) == "sqrt((A / pi))"
    assert format_expr(parse("pow(x, 3)")) == "pow(x, 3)"
    assert format_expr(parse("1000000")) == "1e+06"
    assert format_expr(parse("0.5")) == "0.5"


def test_parse_structure():
    assert parse("-1 + -x") == Binary("+", Unary("-", Literal(1.0)), Unary("-", Var("x")))


def test_precedence_and_associativity():
    assert parse("1 - 2 - 3").eval(None) == -4
    assert parse("2 + 3 * 4").eval(None) == 14
    assert parse("(2 + 3) * 4").eval(None) == 20


def test_check_collects_vars():
    found = set()
    parse("pow(x, 3) + pow(y, 3)").check(found)
    assert found == {"x", "y"}


def test_missing_variable_is_zero():
    assert parse("x + 1").eval({}) == 1
    assert parse("x + 1").eval(None) == 1


@pytest.mark.parametrize(
    "text, want",
    [
        ("(1", "got end of file, want ')'"),
        ("f(1", "got end of file, want ')'"),
        ("1 2", "unexpected number 2"),
        ("x y", "unexpected identifier y"),
        ("", "unexpected end of file"),
        ("1e", 'parsing "1e": invalid syntax'),
    ],
)
def test_parse_errors(text, want):
    with pytest.raises(ExprError) as info:
        parse(text)
    assert str(info.value) == want


def test_bad_operators_rejected_by_check():
    with pytest.raises(ExprError, match="unexpected unary op '\\*'"):
        Unary("*", Literal(1.0)).check(set())
    with pytest.raises(ExprError, match="unexpected binary op '%'"):
        Binary("%", Literal(1.0), Literal(2.0)).check(set())


def test_float_edge_cases():
    assert parse("1 / 0").eval({}) == math.inf
    assert parse("-1 / 0").eval({}) == -math.inf
    assert math.isnan(parse("0 / 0").eval({}))
    assert parse("pow(0, -1)").eval({}) == math.inf
    assert math.isnan(parse("sqrt(-1)").eval({}))


def test_call_with_no_args_fails_check():
    with pytest.raises(ExprError, match="call to sin has 0 args, want 1"):
        _parse_and_check("sin()")