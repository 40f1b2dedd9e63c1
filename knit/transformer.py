"""A base for building expression tree transformers, and an evaluator."""

from typing import Any, List

from knit.parser import parse

from knit.expression import (
    Expression,
    Number,
    BinaryOperation,
    FunctionCall,
    Reference,
    expression,
)

__all__ = [
    "ExpressionTransformer",
    "Evaluator",
    "evaluate",
]


class ExpressionTransformer:
    """
    Transforms an :py:class:`~knit.expression.Expression` tree bottom-up.

    Transformations are defined by methods named after the kind of node to be
    transformed: ``number``, ``binary_operation``, ``function_call`` and
    ``reference``. These will be called with the node along with a list of
    the transformed values of its children (in the order given by
    :py:meth:`~knit.expression.Expression.iter_children`). Methods should
    return the transformed node. If no matching method is defined, the
    :py:meth:`_default` method will be called.

    Methods named ``<kind>_enter`` will be called (if defined) with the node
    before its children are transformed.
    """

    def transform(self, tree: Expression) -> Any:
        """
        Transform the provided expression tree with this transformer.
        """
        enter_fn = getattr(self, "{}_enter".format(tree.kind), None)
        if enter_fn is not None:
            enter_fn(tree)

        processed_children = [self.transform(child) for child in tree.iter_children()]

        process_fn = getattr(self, tree.kind, self._default)
        return process_fn(tree, processed_children)

    def _default(self, tree: Expression, transformed_children: List[Any]) -> Any:
        """The default transformation: the list of transformed children."""
        return transformed_children


class Evaluator(ExpressionTransformer):
    """
    Evaluates an expression tree to a float.

    Arithmetic follows IEEE 754 floating point semantics so, for example,
    division by zero produces an infinity or NaN rather than raising.

    Cell references and function calls are not resolved: both evaluate to
    zero. Subclasses may override :py:meth:`reference` and
    :py:meth:`function_call` to supply values.
    """

    def number(self, tree: Number, transformed_children: List[float]) -> float:
        return float(tree.value)

    def binary_operation(
        self, tree: BinaryOperation, transformed_children: List[float]
    ) -> float:
        left, right = transformed_children
        return tree.operator.apply(left, right)

    def function_call(self, tree: FunctionCall, args: List[float]) -> float:
        return 0.0

    def reference(self, tree: Reference, transformed_children: List[float]) -> float:
        return 0.0


def evaluate(source: str) -> float:
    """
    Parse and evaluate an expression such as ``"2*3+4"``, raising
    :py:exc:`~knit.parser.ParseError` if it cannot be parsed.

    Unconsumed input is ignored.
    """
    return Evaluator().transform(parse(expression, source))
