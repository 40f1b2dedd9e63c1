import pytest  # type: ignore

import math

from typing import Any, List

from knit.parser import ParseError

from knit.expression import (
    Operator,
    Expression,
    Number,
    BinaryOperation,
    FunctionCall,
    Reference,
    parse_expression,
)

from knit.transformer import (
    ExpressionTransformer,
    Evaluator,
    evaluate,
)


@pytest.mark.parametrize(
    "tree, exp_out",
    [
        # Leaves have no children
        (Number(1), []),
        (Reference("A1"), []),
        # Without custom methods, nodes become lists of their children
        (BinaryOperation(Operator.add, Number(1), Number(2)), [[], []]),
        (
            FunctionCall("F", (Number(1), FunctionCall("G", ()), Number(3))),
            [[], [], []],
        ),
    ],
)
def test_default_transformation(tree: Expression, exp_out: Any) -> None:
    t = ExpressionTransformer()
    assert t.transform(tree) == exp_out


def test_custom_transformers() -> None:
    class Formatter(ExpressionTransformer):
        def number(self, tree: Number, transformed_children: List[str]) -> str:
            return "{:g}".format(tree.value)

        def reference(self, tree: Reference, transformed_children: List[str]) -> str:
            return tree.address

        def binary_operation(
            self, tree: BinaryOperation, transformed_children: List[str]
        ) -> str:
            left, right = transformed_children
            return "({} {} {})".format(left, tree.operator.value, right)

        def function_call(self, tree: FunctionCall, args: List[str]) -> str:
            return "{}({})".format(tree.name, ", ".join(args))

    t = Formatter()
    assert t.transform(parse_expression("1+2*3-4")) == "((1 + (2 * 3)) - 4)"
    assert t.transform(parse_expression("2^3^4")) == "(2 ^ (3 ^ 4))"
    assert t.transform(parse_expression("SUM(A1,2.5)")) == "SUM(A1, 2.5)"


def test_enter_methods() -> None:
    entered: List[str] = []

    class Tracer(ExpressionTransformer):
        def binary_operation_enter(self, tree: BinaryOperation) -> None:
            entered.append(tree.operator.value)

        def number_enter(self, tree: Number) -> None:
            entered.append(str(int(tree.value)))

    Tracer().transform(parse_expression("1+2*3"))

    # NB: Visited before children, i.e. in pre-order
    assert entered == ["+", "1", "*", "2", "3"]


@pytest.mark.parametrize(
    "string, exp",
    [
        ("2*3+4", 10.0),
        ("2^2^3", 256.0),
        ("2**3**2", 512.0),
        ("1+3-2", 2.0),
        ("8/4/2", 1.0),
        ("(1+3)**(2*4)", 65536.0),
        ("-1.5*2", -3.0),
        ("1.25+1.75", 3.0),
        ("10/4", 2.5),
        # References and function calls evaluate to zero
        ("A1", 0.0),
        ("NOW()", 0.0),
        ("SUM(1,2)", 0.0),
        # Trailing input is ignored
        ("1+2 and some junk", 3.0),
    ],
)
def test_evaluate(string: str, exp: float) -> None:
    assert evaluate(string) == exp


def test_evaluate_ieee_semantics() -> None:
    assert evaluate("1/0") == math.inf
    assert evaluate("-1/0") == -math.inf
    assert math.isnan(evaluate("0/0"))
    assert evaluate("10**400") == math.inf
    assert math.isnan(evaluate("(-8)**0.5"))
    assert evaluate("1" + "0" * 400 + "*2") == math.inf
    assert math.isnan(evaluate("1" + "0" * 400 + "-1" + "0" * 400))


def test_evaluate_failure() -> None:
    with pytest.raises(ParseError):
        evaluate("*")


def test_evaluator_subclass_resolves_references() -> None:
    class CellEvaluator(Evaluator):
        def reference(self, tree: Reference, transformed_children: List[float]) -> float:
            return {"A1": 10.0, "B2": 5.0}[tree.address]

        def function_call(self, tree: FunctionCall, args: List[float]) -> float:
            assert tree.name == "SUM"
            return sum(args)

    assert CellEvaluator().transform(parse_expression("SUM(A1,B2,1+1)")) == 17.0
