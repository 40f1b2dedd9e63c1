import pytest  # type: ignore

import math

from typing import Optional

from knit.parser import ParseError, is_failure

from knit.expression import (
    Operator,
    Expression,
    Number,
    BinaryOperation,
    FunctionCall,
    Reference,
    number,
    addition,
    expression,
    parse_expression,
)


def bin_op(operator: str, left: Expression, right: Expression) -> BinaryOperation:
    return BinaryOperation(Operator(operator), left, right)


N = Number


@pytest.mark.parametrize(
    "a, b, exp",
    [
        (1.0, 2.0, {"+": 3.0, "-": -1.0, "*": 2.0, "/": 0.5, "**": 1.0, "^": 1.0}),
        (2.0, 10.0, {"+": 12.0, "-": -8.0, "*": 20.0, "/": 0.2, "**": 1024.0}),
    ],
)
def test_operator_apply(a: float, b: float, exp: dict) -> None:
    for operator, value in exp.items():
        assert Operator(operator).apply(a, b) == value


@pytest.mark.parametrize(
    "operator, a, b, exp",
    [
        # Division by zero
        ("/", 1.0, 0.0, math.inf),
        ("/", -1.0, 0.0, -math.inf),
        ("/", 1.0, -0.0, -math.inf),
        # Overflow
        ("**", 10.0, 400.0, math.inf),
        ("**", -10.0, 401.0, -math.inf),
        ("*", 1e200, 1e200, math.inf),
        # Zero to a negative power
        ("**", 0.0, -1.0, math.inf),
        ("**", -0.0, -1.0, -math.inf),
        ("**", 0.0, -2.0, math.inf),
    ],
)
def test_operator_ieee_infinities(
    operator: str, a: float, b: float, exp: float
) -> None:
    assert Operator(operator).apply(a, b) == exp


@pytest.mark.parametrize(
    "operator, a, b",
    [
        ("/", 0.0, 0.0),
        ("/", math.nan, 0.0),
        # Negative base, fractional exponent
        ("**", -8.0, 1 / 3),
        ("^", -1.0, 0.5),
    ],
)
def test_operator_ieee_nan(operator: str, a: float, b: float) -> None:
    assert math.isnan(Operator(operator).apply(a, b))


@pytest.mark.parametrize(
    "string, exp",
    [
        ("1", (N(1), "")),
        ("-1", (N(-1), "")),
        ("+1", (N(1), "")),
        ("1.5", (N(1.5), "")),
        ("-1.5", (N(-1.5), "")),
        ("+1.5", (N(1.5), "")),
        # Multi-digit fractions are scaled by their length
        ("1.25", (N(1.25), "")),
        ("3.05", (N(3.05), "")),
        ("-0.5", (N(-0.5), "")),
        ("12.75x", (N(12.75), "x")),
        # Too large for a float
        ("1" + "0" * 400, (N(math.inf), "")),
        ("-1" + "0" * 400, (N(-math.inf), "")),
        ("+1" + "0" * 400 + "x", (N(math.inf), "x")),
        ("1" + "0" * 400 + ".5", (N(math.inf), "")),
        # Not decimals
        ("1.", (N(1), ".")),
        ("1.x", (N(1), ".x")),
        (".5", None),
        ("x", None),
        ("", None),
    ],
)
def test_number(string: str, exp: Optional[tuple]) -> None:
    outcome, remaining = number(string)
    if exp is None:
        assert is_failure(outcome)
    else:
        assert (outcome, remaining) == exp


@pytest.mark.parametrize(
    "string, exp",
    [
        # Numbers
        ("1", N(1)),
        ("-1", N(-1)),
        ("1.5", N(1.5)),
        ("-1.5", N(-1.5)),
        # References
        ("A1", Reference("A1")),
        ("AB123", Reference("AB123")),
        # Each operator
        ("1+2", bin_op("+", N(1), N(2))),
        ("1-2", bin_op("-", N(1), N(2))),
        ("1*2", bin_op("*", N(1), N(2))),
        ("1/2", bin_op("/", N(1), N(2))),
        ("1**2", bin_op("**", N(1), N(2))),
        ("1^2", bin_op("^", N(1), N(2))),
        # Negative operands
        ("1--2", bin_op("-", N(1), N(-2))),
        ("2*-3", bin_op("*", N(2), N(-3))),
        # Left associativity
        ("1+3-2", bin_op("-", bin_op("+", N(1), N(3)), N(2))),
        ("8/4/2", bin_op("/", bin_op("/", N(8), N(4)), N(2))),
        (
            "1-2-3-4",
            bin_op("-", bin_op("-", bin_op("-", N(1), N(2)), N(3)), N(4)),
        ),
        # Right associativity
        ("2**3", bin_op("**", N(2), N(3))),
        ("2**3**4", bin_op("**", N(2), bin_op("**", N(3), N(4)))),
        ("2^3**4", bin_op("^", N(2), bin_op("**", N(3), N(4)))),
        (
            "2**3**4**5",
            bin_op("**", N(2), bin_op("**", N(3), bin_op("**", N(4), N(5)))),
        ),
        # Precedence
        ("1+3*2", bin_op("+", N(1), bin_op("*", N(3), N(2)))),
        ("1*3+2", bin_op("+", bin_op("*", N(1), N(3)), N(2))),
        (
            "1+3**2*4",
            bin_op("+", N(1), bin_op("*", bin_op("**", N(3), N(2)), N(4))),
        ),
        # Grouping
        (
            "(1+3)**(2*4)",
            bin_op("**", bin_op("+", N(1), N(3)), bin_op("*", N(2), N(4))),
        ),
        ("(1+3)*2", bin_op("*", bin_op("+", N(1), N(3)), N(2))),
        ("((1))", N(1)),
        # Function calls
        ("SUM(1,2)", FunctionCall("SUM", (N(1), N(2)))),
        ("NOW()", FunctionCall("NOW", ())),
        ("F1(3)", FunctionCall("F1", (N(3),))),
        (
            "SUM(1+2,(2+3)*4)",
            FunctionCall(
                "SUM",
                (
                    bin_op("+", N(1), N(2)),
                    bin_op("*", bin_op("+", N(2), N(3)), N(4)),
                ),
            ),
        ),
        (
            "SUM(A1,MAX(B2,3))",
            FunctionCall(
                "SUM", (Reference("A1"), FunctionCall("MAX", (Reference("B2"), N(3))))
            ),
        ),
    ],
)
def test_expression(string: str, exp: Expression) -> None:
    assert expression(string) == (exp, "")


@pytest.mark.parametrize(
    "string, exp, exp_remaining",
    [
        # Trailing input is left unconsumed
        ("1+2)", bin_op("+", N(1), N(2)), ")"),
        ("1+", N(1), "+"),
        ("1 + 2", N(1), " + 2"),
        # References and function calls are only recognised at the top level
        ("A1+1", Reference("A1"), "+1"),
        ("SUM(1)*2", FunctionCall("SUM", (N(1),)), "*2"),
    ],
)
def test_expression_partial(string: str, exp: Expression, exp_remaining: str) -> None:
    assert expression(string) == (exp, exp_remaining)


@pytest.mark.parametrize("string", ["", "+", "(1+2", "A", "SUM(1,2", "()"])
def test_expression_failure(string: str) -> None:
    outcome, _remaining = expression(string)
    assert is_failure(outcome)


def test_addition_alone_rejects_references() -> None:
    assert is_failure(addition("A1")[0])


def test_parse_expression() -> None:
    assert parse_expression("1+2") == bin_op("+", N(1), N(2))
    with pytest.raises(ParseError):
        parse_expression("(")


def test_trees_are_immutable() -> None:
    tree = parse_expression("1+2")
    with pytest.raises(AttributeError):
        tree.left = N(3)  # type: ignore


def test_iter_children() -> None:
    tree = parse_expression("SUM(1,A1)+2")
    # NB: Only the function call is parsed (see test_expression_partial)
    assert list(tree.iter_children()) == [N(1), Reference("A1")]
    assert list(bin_op("+", N(1), N(2)).iter_children()) == [N(1), N(2)]
    assert list(N(1).iter_children()) == []
