"""
Combinators: functions which build new parsers out of existing ones.
"""

from typing import (
    Any,
    Callable,
    Generator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from knit.parser import (
    Parser,
    ParseFailure,
    ParseResult,
    RepeatedEmptyMatchError,
)


__all__ = [
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
]


A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")


def map_(parser: Parser[A], function: Callable[[A], B]) -> Parser[B]:
    """
    Transform the value produced by a parser using the supplied function.
    Failures are passed through unchanged.
    """

    def parse_map(string: str) -> ParseResult[B]:
        outcome, remaining = parser(string)
        if isinstance(outcome, ParseFailure):
            return outcome, string
        return function(outcome), remaining

    return Parser(parse_map, "map({})".format(parser.name))


def sequence(parser: Parser[A], function: Callable[[A], Parser[B]]) -> Parser[B]:
    """
    Run a parser and pass its value to ``function`` which returns the parser
    to run next, against the remaining input. If the first parser fails, its
    failure is returned and ``function`` is never called.

    This is the bind operation upon which all other sequencing is built.
    """

    def parse_sequence(string: str) -> ParseResult[B]:
        outcome, remaining = parser(string)
        if isinstance(outcome, ParseFailure):
            return outcome, string
        return function(outcome)(remaining)

    return Parser(parse_sequence, "sequence({})".format(parser.name))


def do(
    generator_function: Callable[[], Generator[Parser[Any], Any, Parser[A]]]
) -> Parser[A]:
    """
    Build a parser from a generator function (typically used as a decorator).

    The generator yields parsers one at a time. Each is run against the input
    left by the previous one and its value is sent back into the generator as
    the result of the ``yield`` expression. The generator must finally
    ``return`` the parser to run last, for example::

        @do
        def key_value():
            key = yield identifier
            yield char("=")
            value = yield nat
            return success((key, value))

    This is equivalent to nesting calls to :py:func:`sequence`: the first
    failure ends the parse and is returned, closing the generator.

    A fresh generator is created for every parse so the resulting parser may
    be reused and invoked recursively.
    """

    def parse_do(string: str) -> ParseResult[A]:
        steps = generator_function()
        try:
            step = next(steps)
        except StopIteration as stop:
            return stop.value(string)

        remaining = string
        while True:
            outcome, remaining = step(remaining)
            if isinstance(outcome, ParseFailure):
                steps.close()
                return outcome, string
            try:
                step = steps.send(outcome)
            except StopIteration as stop:
                return stop.value(remaining)

    return Parser(parse_do, generator_function.__name__)


def or_(first: Parser[A], second: Parser[B]) -> Parser[Any]:
    """
    Try ``first`` and, if it fails, try ``second`` against the same input.

    If both fail, the failure produced by ``second`` is returned.
    """

    def parse_or(string: str) -> ParseResult[Any]:
        outcome, remaining = first(string)
        if isinstance(outcome, ParseFailure):
            return second(string)
        return outcome, remaining

    return Parser(parse_or, "{} | {}".format(first.name, second.name))


def any_(parsers: Sequence[Parser[A]]) -> Parser[A]:
    """
    Prioritised choice: return the result of the first parser which matches.

    Each alternative is attempted against the original input. The order of
    the parsers is significant: when several could match, the earliest wins.
    Fails with the reason ``"no match"`` if no parser matches (or none were
    given).
    """
    alternatives = tuple(parsers)

    def parse_any(string: str) -> ParseResult[A]:
        for alternative in alternatives:
            outcome, remaining = alternative(string)
            if not isinstance(outcome, ParseFailure):
                return outcome, remaining
        return ParseFailure("no match"), string

    return Parser(
        parse_any, "any_({})".format(", ".join(p.name for p in alternatives))
    )


def all_(parsers: Sequence[Parser[A]]) -> Parser[List[A]]:
    """
    Run each parser in turn, producing a list of their values. Fails with the
    first failure encountered.
    """
    steps = tuple(parsers)

    def parse_all(string: str) -> ParseResult[List[A]]:
        values = []
        remaining = string
        for step in steps:
            outcome, remaining = step(remaining)
            if isinstance(outcome, ParseFailure):
                return outcome, string
            values.append(outcome)
        return values, remaining

    return Parser(parse_all, "all_({})".format(", ".join(p.name for p in steps)))


# NB: Private equivalents of knit.primitives.success and failure, which cannot
# be imported here since knit.primitives imports this module
def _pure(value: A) -> Parser[A]:
    return Parser(lambda string: (value, string), "pure")


def _fail(reason: str) -> Parser[Any]:
    return Parser(lambda string: (ParseFailure(reason), string), "fail")


def tuple_(first: Parser[A], second: Parser[B]) -> Parser[Tuple[A, B]]:
    """Run two parsers in sequence, producing a pair of their values."""
    return sequence(
        first, lambda a: map_(second, lambda b: (a, b))
    ).named("tuple_({}, {})".format(first.name, second.name))


def tuple3(
    first: Parser[A], second: Parser[B], third: Parser[C]
) -> Parser[Tuple[A, B, C]]:
    """Run three parsers in sequence, producing a 3-tuple of their values."""
    return sequence(
        first,
        lambda a: sequence(second, lambda b: map_(third, lambda c: (a, b, c))),
    ).named("tuple3({}, {}, {})".format(first.name, second.name, third.name))


def tuple4(
    first: Parser[A], second: Parser[B], third: Parser[C], fourth: Parser[D]
) -> Parser[Tuple[A, B, C, D]]:
    """Run four parsers in sequence, producing a 4-tuple of their values."""
    return sequence(
        first,
        lambda a: sequence(
            second,
            lambda b: sequence(third, lambda c: map_(fourth, lambda d: (a, b, c, d))),
        ),
    ).named(
        "tuple4({}, {}, {}, {})".format(
            first.name, second.name, third.name, fourth.name
        )
    )


def many0(parser: Parser[A]) -> Parser[List[A]]:
    """
    Match a parser zero or more times, greedily, producing a list of values.
    Never fails.

    Raises :py:exc:`~knit.parser.RepeatedEmptyMatchError` during parsing if
    ``parser`` matches without consuming any input.
    """

    def parse_many0(string: str) -> ParseResult[List[A]]:
        values = []
        remaining = string
        while True:
            outcome, new_remaining = parser(remaining)
            if isinstance(outcome, ParseFailure):
                return values, remaining

            # Well-formedness sanity check: must not have matched the empty
            # string
            if len(new_remaining) >= len(remaining):
                raise RepeatedEmptyMatchError(parser.name)

            values.append(outcome)
            remaining = new_remaining

    return Parser(parse_many0, "many0({})".format(parser.name))


def many1(parser: Parser[A]) -> Parser[List[A]]:
    """As :py:func:`many0` but fails unless at least one match is made."""
    return sequence(
        many0(parser),
        lambda values: _pure(values) if values else _fail("at least one expected"),
    ).named("many1({})".format(parser.name))


def maybe(parser: Parser[A]) -> Parser[Optional[A]]:
    """Match a parser or, failing that, nothing (producing None)."""
    return or_(parser, _pure(None)).named("maybe({})".format(parser.name))


def not_(parser: Parser[Any]) -> Parser[None]:
    """
    Negative lookahead. Succeeds, producing None and consuming nothing, only
    when ``parser`` fails to match.
    """

    def parse_not(string: str) -> ParseResult[None]:
        outcome, _remaining = parser(string)
        if isinstance(outcome, ParseFailure):
            return None, string
        return ParseFailure("unexpected {}".format(parser.name)), string

    return Parser(parse_not, "not_({})".format(parser.name))


def preceded(prefix: Parser[Any], parser: Parser[A]) -> Parser[A]:
    """Match ``prefix`` then ``parser``, keeping only the latter's value."""
    return map_(tuple_(prefix, parser), lambda values: values[1])


def terminated(parser: Parser[A], terminator: Parser[Any]) -> Parser[A]:
    """Match ``parser`` then ``terminator``, keeping only the former's value."""
    return map_(tuple_(parser, terminator), lambda values: values[0])


def delimited(
    prefix: Parser[Any], parser: Parser[A], terminator: Parser[Any]
) -> Parser[A]:
    """Match ``prefix``, ``parser`` and ``terminator``, keeping only ``parser``'s value."""
    return preceded(prefix, terminated(parser, terminator))


def separated1(separator: Parser[Any], parser: Parser[A]) -> Parser[List[A]]:
    """
    Match one or more instances of ``parser`` separated by ``separator``,
    producing a list of the values of ``parser``.
    """
    return map_(
        tuple_(parser, many0(preceded(separator, parser))),
        lambda values: [values[0]] + values[1],
    )


def separated0(separator: Parser[Any], parser: Parser[A]) -> Parser[List[A]]:
    """As :py:func:`separated1` but produces an empty list when nothing matches."""
    # NB: A new list is produced for every parse
    return or_(separated1(separator, parser), map_(_pure(None), lambda _none: []))


def concat(parser: Parser[Sequence[str]]) -> Parser[str]:
    """Join a parser's list of strings into a single string."""
    return map_(parser, "".join)


def lazy(thunk: Callable[[], Parser[A]], name: str = "lazy") -> Parser[A]:
    """
    A parser which calls ``thunk`` to obtain the parser to run each time it is
    invoked.

    Used to refer to rules which have not been defined yet, such as in
    recursive grammars::

        value = any_([nat, delimited(char("["), lazy(lambda: values), char("]"))])
        values = separated0(char(","), value)
    """

    def parse_lazy(string: str) -> ParseResult[A]:
        return thunk()(string)

    return Parser(parse_lazy, name)
