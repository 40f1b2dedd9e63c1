r"""
Knit is a small parser combinator library: parsers are ordinary values which
are combined by ordinary functions into larger parsers, all the way up to a
complete grammar.

Basic usage
===========

A parser is called with a string and returns a pair: the parsed value and the
input which was left unconsumed::

    >>> from knit import char, many0
    >>> many0(char("a"))("aaab")
    (['a', 'a', 'a'], 'b')

When a parser does not match, the value is a :py:class:`.ParseFailure`
carrying a short reason::

    >>> char("a")("b")
    (ParseFailure(reason="doesn't satisfy condition"), 'b')

.. note::

    When a parser fails, the unconsumed input it returns is unspecified and
    should not be relied upon.

Since success values may be anything at all (including ``None``, ``False``
or ``0``), failures should always be detected with :py:func:`.is_failure`
rather than by testing the truthiness of the value.

Most of the time the :py:func:`.parse` function is more convenient. It returns
just the parsed value, or raises a :py:exc:`.ParseError`::

    >>> from knit import parse, token
    >>> parse(token("hello"), "hello world")
    'hello'
    >>> parse(token("hello"), "help")
    Traceback (most recent call last):
    ...
    knit.parser.ParseError: doesn't satisfy condition

Note that :py:func:`.parse` does not require the whole input to be consumed.
Where this is required, use :py:data:`.end_of_input`.


Building grammars
=================

Primitive parsers such as :py:func:`.char`, :py:func:`.token`,
:py:data:`.digit` and :py:data:`.nat` match small pieces of input. Combinators
such as :py:func:`.tuple_`, :py:func:`.any_` and :py:func:`.many0` combine them
into larger parsers, and :py:func:`.map_` turns matched text into useful
values::

    >>> from knit import map_, tuple_, preceded, nat
    >>> fraction = map_(tuple_(nat, preceded(char("/"), nat)), lambda p: p[0] / p[1])
    >>> parse(fraction, "3/4")
    0.75

Alternatives
------------

:py:func:`.or_` and :py:func:`.any_` try each alternative in turn against the
same input, returning the first which matches. There is no commitment: an
alternative which fails part-way through costs nothing but time. As a result
the order of alternatives matters when more than one could match::

    >>> from knit import any_
    >>> parse(any_([token("for"), token("foreach")]), "foreach")
    'for'
    >>> parse(any_([token("foreach"), token("for")]), "foreach")
    'foreach'

Recursive grammars
------------------

Grammar rules which refer to one another (or themselves) can be written using
:py:func:`.lazy`, which looks up the parser to use only when it is invoked::

    >>> from knit import delimited, separated0, lazy
    >>> value = any_(
    ...     [nat, delimited(char("["), separated0(char(","), lazy(lambda: value)), char("]"))]
    ... )
    >>> parse(value, "[1,[2,3],[]]")
    [1, [2, 3], []]

Do-notation
-----------

When later parts of a parse depend on earlier values, :py:func:`.do` allows a
parser to be written as a generator. Each ``yield``\ ed parser is run in turn
and its value is sent back into the generator; the first failure ends the
parse::

    >>> from knit import do, success
    >>> @do
    ... def pair():
    ...     first = yield nat
    ...     yield char(",")
    ...     second = yield nat
    ...     return success((first, second))
    >>> pair("12,34 and the rest")
    ((12, 34), ' and the rest')


Expressions
===========

The :py:mod:`knit.expression` module contains a complete grammar for
spreadsheet-style arithmetic expressions, with the usual operator precedence
(``**`` or ``^`` binding tightest and associating to the right), function
calls and cell references::

    >>> from knit import evaluate, parse_expression
    >>> evaluate("2*3+4")
    10.0
    >>> evaluate("2^2^3")
    256.0
    >>> tree = parse_expression("1+3*2")
    >>> tree.operator
    <Operator.add: '+'>
    >>> tree.right
    BinaryOperation(operator=<Operator.multiply: '*'>, left=Number(value=3.0), right=Number(value=2.0))

Expression trees may be processed using an :py:class:`.ExpressionTransformer`.


Debugging
=========

Every parser has a name and parsers log each attempt, failure and match to
the ``knit.parser`` logger at the ``DEBUG`` level. To see this log::

    import logging
    logging.basicConfig(level=logging.DEBUG)

Parsers may be given more helpful names using :py:meth:`.Parser.named`.


Limitations
===========

Parsers are implemented by recursion so deeply nested inputs can exhaust
Python's stack and raise :py:exc:`RecursionError`. Parse results are not
memoised so heavily backtracking grammars may be slow.
"""

from knit.version import __version__

from knit.parser import *
from knit.combinators import *
from knit.primitives import *
from knit.expression import *
from knit.transformer import *
from knit.json_grammar import *
from knit.rle import *

# NB: These names are explicitly re-exported here because mypy in strict mode
# does not allow implicit re-exports. The completeness of this list is tested
# by the test suite.
__all__ = [  # noqa: F405
    # parser.*
    "ParseFailure",
    "ParseResult",
    "is_failure",
    "Parser",
    "GrammarError",
    "RepeatedEmptyMatchError",
    "ParseError",
    "parse",
    # combinators.*
    "map_",
    "sequence",
    "do",
    "or_",
    "any_",
    "all_",
    "tuple_",
    "tuple3",
    "tuple4",
    "many0",
    "many1",
    "maybe",
    "not_",
    "preceded",
    "terminated",
    "delimited",
    "separated0",
    "separated1",
    "concat",
    "lazy",
    # primitives.*
    "success",
    "failure",
    "satisfy",
    "consume",
    "char",
    "token",
    "letter",
    "digit",
    "alpha",
    "space0",
    "space1",
    "multispace0",
    "multispace1",
    "nat",
    "int_",
    "end_of_input",
    # expression.*
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
    # transformer.*
    "ExpressionTransformer",
    "Evaluator",
    "evaluate",
    # json_grammar.*
    "json_value",
    "decode_json",
    # rle.*
    "rle_encode",
    "rle_decode",
    "encode",
    "decode",
]
