"""
Primitive parsers: the atomic building blocks from which grammars are built.
"""

from functools import reduce

from typing import (
    Any,
    Callable,
    List,
    TypeVar,
)

from knit.parser import (
    Parser,
    ParseFailure,
    ParseResult,
)

from knit.combinators import (
    map_,
    any_,
    all_,
    many0,
    many1,
    preceded,
    concat,
)


__all__ = [
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
]


T = TypeVar("T")


def success(value: T) -> Parser[T]:
    """A parser which always succeeds with ``value``, consuming nothing."""
    return Parser(lambda string: (value, string), "success({!r})".format(value))


def failure(reason: str) -> Parser[Any]:
    """A parser which always fails with the given reason."""
    return Parser(
        lambda string: (ParseFailure(reason), string), "failure({!r})".format(reason)
    )


def satisfy(predicate: Callable[[str], bool], name: str = "satisfy") -> Parser[str]:
    """
    Match a single character for which ``predicate`` returns True.
    """

    def parse_satisfy(string: str) -> ParseResult[str]:
        if string and predicate(string[0]):
            return string[0], string[1:]
        return ParseFailure("doesn't satisfy condition"), string

    return Parser(parse_satisfy, name)


def consume(n: int) -> Parser[str]:
    """Match any ``n`` characters."""

    def parse_consume(string: str) -> ParseResult[str]:
        if len(string) >= n:
            return string[:n], string[n:]
        return ParseFailure("not enough input"), string

    return Parser(parse_consume, "consume({})".format(n))


def char(c: str) -> Parser[str]:
    """Match the single character ``c``."""
    return satisfy(lambda x: x == c, "char({!r})".format(c))


def token(text: str) -> Parser[str]:
    """Match the literal string ``text``."""
    return concat(all_([char(c) for c in text])).named("token({!r})".format(text))


def _is_ascii_letter(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z")


def _is_ascii_digit(c: str) -> bool:
    return "0" <= c <= "9"


letter: Parser[str] = satisfy(_is_ascii_letter, "letter")
"""Match a single ASCII letter."""

digit: Parser[str] = satisfy(_is_ascii_digit, "digit")
"""Match a single ASCII decimal digit."""

alpha: Parser[str] = any_([letter, digit]).named("alpha")
"""Match a single ASCII letter or digit."""

_space: Parser[str] = satisfy(lambda c: c in " \t", "space")

space0: Parser[List[str]] = many0(_space).named("space0")
"""Match zero or more spaces or tabs."""

space1: Parser[List[str]] = many1(_space).named("space1")
"""Match one or more spaces or tabs."""

_multispace: Parser[str] = satisfy(str.isspace, "multispace")

multispace0: Parser[List[str]] = many0(_multispace).named("multispace0")
"""Match zero or more whitespace characters (including newlines)."""

multispace1: Parser[List[str]] = many1(_multispace).named("multispace1")
"""Match one or more whitespace characters (including newlines)."""


def _fold_digits(digits: List[str]) -> int:
    return reduce(lambda total, d: (total * 10) + (ord(d) - ord("0")), digits, 0)


nat: Parser[int] = map_(many1(digit), _fold_digits).named("nat")
"""Match an unsigned decimal integer."""

int_: Parser[int] = any_(
    [
        map_(preceded(char("-"), nat), lambda n: -n),
        preceded(char("+"), nat),
        nat,
    ]
).named("int_")
"""Match a decimal integer with an optional ``+`` or ``-`` sign."""


def _parse_end_of_input(string: str) -> ParseResult[None]:
    if string:
        return ParseFailure("expected end of input"), string
    return None, string


end_of_input: Parser[None] = Parser(_parse_end_of_input, "end_of_input")
"""Match only when no input remains, consuming nothing and producing None."""
