"""
The parser type, its result model and the top-level invocation API.
"""

import logging

from dataclasses import dataclass, replace

from typing import (
    Any,
    Callable,
    Generic,
    Tuple,
    TypeVar,
    Union,
)


__all__ = [
    "ParseFailure",
    "ParseResult",
    "is_failure",
    "Parser",
    "GrammarError",
    "RepeatedEmptyMatchError",
    "ParseError",
    "parse",
]


log = logging.getLogger(__name__)


T = TypeVar("T")


@dataclass(frozen=True)
class ParseFailure:
    """
    The outcome of a parser which failed to match.

    A parser's outcome is either a value or an instance of this class. The two
    are told apart by type alone (see :py:func:`is_failure`) so that any value
    at all -- including ``None``, ``False``, empty containers or dicts -- may
    be produced by a successful parse.
    """

    reason: str
    """A short human-readable explanation of the failure."""


ParseResult = Tuple[Union[T, ParseFailure], str]
"""
The ``(outcome, remaining)`` pair returned by every parser. When the outcome
is a :py:class:`ParseFailure`, the remaining string is unspecified and must not
be relied upon.
"""


def is_failure(outcome: Any) -> bool:
    """Test whether a parser outcome is a :py:class:`ParseFailure`."""
    return isinstance(outcome, ParseFailure)


@dataclass(frozen=True, repr=False)
class Parser(Generic[T]):
    """
    A parser producing values of type ``T``.

    Parsers are called with the string to be parsed and return a
    :py:data:`ParseResult`: a pair containing either the parsed value or a
    :py:class:`ParseFailure`, and the unconsumed suffix of the input.

    Parsers are immutable and hold no state between calls so the same parser
    may be used any number of times, recursively or from several threads.
    """

    function: Callable[[str], ParseResult[T]]
    """The function implementing this parser."""

    name: str = "<anonymous>"
    """A descriptive name, used by :py:func:`repr` and in the debug log."""

    def __call__(self, string: str) -> ParseResult[T]:
        if not log.isEnabledFor(logging.DEBUG):
            return self.function(string)

        log.debug("trying %s on %r", self.name, string)
        outcome, remaining = self.function(string)
        if isinstance(outcome, ParseFailure):
            log.debug("failed %s: %s", self.name, outcome.reason)
        else:
            log.debug("matched %s: %r, remaining %r", self.name, outcome, remaining)
        return outcome, remaining

    def named(self, name: str) -> "Parser[T]":
        """Return a copy of this parser with a different name."""
        return replace(self, name=name)

    def __or__(self, other: "Parser[Any]") -> "Parser[Any]":
        # NB: Imported here to avoid a circular import
        from knit.combinators import or_

        return or_(self, other)

    def __repr__(self) -> str:
        return "<Parser {}>".format(self.name)


class GrammarError(Exception):
    """Thrown when a problem is encountered with the grammar during parsing."""


class RepeatedEmptyMatchError(GrammarError):
    """
    Thrown when a repeated parser (e.g. in :py:func:`~knit.combinators.many0`)
    succeeds without consuming any input and so would repeat forever.
    """


@dataclass
class ParseError(Exception):
    """
    Thrown by :py:func:`parse` when parsing fails.

    Parameters
    ----------
    reason : str
        The reason given by the :py:class:`ParseFailure` which ended the parse.
    """

    reason: str

    def __str__(self) -> str:
        return self.reason


def parse(parser: Parser[T], string: str) -> T:
    """
    Parse a string, returning the parsed value if successful or raising a
    :py:exc:`ParseError` if not.

    Any input left unconsumed by the parser is ignored. To require that the
    whole input is parsed, terminate the parser with
    :py:data:`~knit.primitives.end_of_input`.
    """
    outcome, _remaining = parser(string)
    if isinstance(outcome, ParseFailure):
        raise ParseError(outcome.reason)
    return outcome
