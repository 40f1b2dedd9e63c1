"""
A grammar for spreadsheet-style arithmetic expressions such as
``SUM(A1, 2) * (3 + 4) ** 2``.

The grammar is layered by precedence, loosest binding first:

* :py:data:`addition`: left-associative ``+`` and ``-``
* :py:data:`multiplication`: left-associative ``*`` and ``/``
* :py:data:`exponentiation`: right-associative ``**`` (or its synonym ``^``)
* :py:data:`operand`: a parenthesised :py:data:`expression` or a
  :py:data:`number`

At the top level, :py:data:`expression` also accepts function calls (e.g.
``NOW()``) and cell references (e.g. ``A1``). Whitespace is not permitted.
"""

import math

from enum import Enum

from dataclasses import dataclass

from typing import (
    ClassVar,
    Iterable,
    List,
    Sequence,
    Tuple,
)

from knit.parser import Parser, parse

from knit.combinators import (
    map_,
    any_,
    tuple_,
    tuple3,
    many0,
    many1,
    maybe,
    preceded,
    delimited,
    separated0,
    concat,
    lazy,
)

from knit.primitives import (
    char,
    token,
    letter,
    digit,
    alpha,
)


__all__ = [
    "Operator",
    "Expression",
    "Number",
    "BinaryOperation",
    "FunctionCall",
    "Reference",
    "number",
    "operand",
    "exponentiation",
    "multiplication",
    "addition",
    "function_call",
    "reference",
    "expression",
    "parse_expression",
]


def _divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _is_odd_integer(x: float) -> bool:
    return float(x).is_integer() and x % 2 == 1


def _power(base: float, exponent: float) -> float:
    # NB: math.pow raises where IEEE 754 pow() returns an infinity or NaN
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            # Zero raised to a negative power
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # Negative base raised to a non-integer power
        return math.nan


class Operator(Enum):
    """A binary arithmetic operator. ``^`` is a synonym for ``**``."""

    add = "+"
    subtract = "-"
    multiply = "*"
    divide = "/"
    power = "**"
    caret = "^"

    def apply(self, a: float, b: float) -> float:
        """
        Apply this operator to a pair of values using IEEE 754 semantics:
        division by zero and overflow produce infinities or NaN rather than
        raising.
        """
        if self == Operator.add:
            return a + b
        elif self == Operator.subtract:
            return a - b
        elif self == Operator.multiply:
            return a * b
        elif self == Operator.divide:
            return _divide(a, b)
        elif self in (Operator.power, Operator.caret):
            return _power(a, b)
        else:
            # Should be unreachable!
            raise NotImplementedError(self)


@dataclass(frozen=True)
class Expression:
    """An expression syntax tree node. Base class."""

    kind: ClassVar[str]
    """
    The name of this kind of node, used by
    :py:class:`~knit.transformer.ExpressionTransformer` to select a method.
    """

    def iter_children(self) -> Iterable["Expression"]:
        """Iterate over child expressions."""
        raise NotImplementedError()


@dataclass(frozen=True)
class Number(Expression):
    """A numeric literal."""

    kind: ClassVar[str] = "number"

    value: float

    def iter_children(self) -> Iterable[Expression]:
        return iter(())


@dataclass(frozen=True)
class BinaryOperation(Expression):
    """A binary operator applied to two sub-expressions."""

    kind: ClassVar[str] = "binary_operation"

    operator: Operator
    left: Expression
    right: Expression

    def iter_children(self) -> Iterable[Expression]:
        return iter((self.left, self.right))


@dataclass(frozen=True)
class FunctionCall(Expression):
    """A call to a named function, e.g. ``SUM(1, 2)``."""

    kind: ClassVar[str] = "function_call"

    name: str
    args: Tuple[Expression, ...]

    def iter_children(self) -> Iterable[Expression]:
        return iter(self.args)


@dataclass(frozen=True)
class Reference(Expression):
    """A reference to a cell, e.g. ``A1``."""

    kind: ClassVar[str] = "reference"

    address: str

    def iter_children(self) -> Iterable[Expression]:
        return iter(())


def _operator(operators: Sequence[Operator]) -> Parser[Operator]:
    return any_(
        [map_(token(op.value), lambda _text, op=op: op) for op in operators]
    ).named(" or ".join(repr(op.value) for op in operators))


def _fold_left(
    values: Tuple[Expression, List[Tuple[Operator, Expression]]]
) -> Expression:
    left, rights = values
    for operator, right in rights:
        left = BinaryOperation(operator, left, right)
    return left


def _fold_right(
    values: Tuple[Expression, List[Tuple[Operator, Expression]]]
) -> Expression:
    first, rights = values
    if not rights:
        return first

    operators = [operator for operator, _right in rights]
    operands = [first] + [right for _operator, right in rights]

    result = operands[-1]
    for operator, left in zip(reversed(operators), reversed(operands[:-1])):
        result = BinaryOperation(operator, left, result)
    return result


def _left_associative(
    operators: Sequence[Operator], precedent: Parser[Expression]
) -> Parser[Expression]:
    """
    Match a chain of ``precedent`` separated by ``operators``, folded so that
    ``a - b - c`` means ``(a - b) - c``.
    """
    return map_(
        tuple_(precedent, many0(tuple_(_operator(operators), precedent))), _fold_left,
    )


def _right_associative(
    operators: Sequence[Operator], precedent: Parser[Expression]
) -> Parser[Expression]:
    """
    Match a chain of ``precedent`` separated by ``operators``, folded so that
    ``a ** b ** c`` means ``a ** (b ** c)``.
    """
    return map_(
        tuple_(precedent, many0(tuple_(_operator(operators), precedent))), _fold_right,
    )


_digits: Parser[str] = concat(many1(digit))

_decimal: Parser[float] = map_(
    tuple3(_digits, char("."), _digits),
    lambda parts: float("{}.{}".format(parts[0], parts[2])),
)

_signed_decimal: Parser[float] = any_(
    [map_(preceded(char("-"), _decimal), lambda n: -n), preceded(char("+"), _decimal)]
)

# NB: Converted from the digit text so that literals too large for a float
# become infinite rather than raising OverflowError
_integer: Parser[float] = map_(
    tuple_(maybe(any_([char("-"), char("+")])), _digits),
    lambda parts: float((parts[0] or "") + parts[1]),
)

number: Parser[Expression] = map_(
    any_([_decimal, _signed_decimal, _integer]), Number
).named("number")
"""A decimal number such as ``12``, ``-3`` or ``+1.25``."""

operand: Parser[Expression] = any_(
    [
        delimited(char("("), lazy(lambda: expression, "expression"), char(")")),
        number,
    ]
).named("operand")

exponentiation: Parser[Expression] = _right_associative(
    [Operator.power, Operator.caret], operand
).named("exponentiation")

multiplication: Parser[Expression] = _left_associative(
    [Operator.multiply, Operator.divide], exponentiation
).named("multiplication")

addition: Parser[Expression] = _left_associative(
    [Operator.add, Operator.subtract], multiplication
).named("addition")

function_call: Parser[Expression] = map_(
    tuple_(
        concat(many1(alpha)),
        delimited(
            char("("),
            separated0(char(","), lazy(lambda: expression, "expression")),
            char(")"),
        ),
    ),
    lambda parts: FunctionCall(parts[0], tuple(parts[1])),
).named("function_call")

reference: Parser[Expression] = map_(
    tuple_(concat(many1(letter)), concat(many1(digit))),
    lambda parts: Reference(parts[0] + parts[1]),
).named("reference")

# NB: The order of alternatives matters. Inputs which do not start with a
# digit, sign or parenthesis fail to match 'addition' and fall through to
# the later alternatives.
expression: Parser[Expression] = any_(
    [addition, function_call, reference, number]
).named("expression")
"""
A complete expression. Note that this parser does not require all input to be
consumed.
"""


def parse_expression(source: str) -> Expression:
    """
    Parse an expression, returning its syntax tree or raising
    :py:exc:`~knit.parser.ParseError`. Unconsumed input is ignored.
    """
    return parse(expression, source)
