"""
A grammar for a subset of JSON.

Supports ``null``, ``true``, ``false``, integers, strings, arrays and objects.
Escape sequences in strings and non-integer numbers are not supported.
"""

from typing import Any, Dict, List, Tuple

from knit.parser import Parser, parse

from knit.combinators import (
    map_,
    or_,
    any_,
    tuple_,
    many0,
    delimited,
    terminated,
    separated0,
    concat,
    lazy,
)

from knit.primitives import (
    satisfy,
    char,
    token,
    multispace0,
    int_,
)

__all__ = [
    "json_value",
    "decode_json",
]


def _ws(parser: Parser[Any]) -> Parser[Any]:
    """Allow whitespace either side of a parser."""
    return delimited(multispace0, parser, multispace0)


_value: Parser[Any] = lazy(lambda: json_value, "json_value")

_null: Parser[None] = map_(token("null"), lambda _text: None).named("null")

_bool: Parser[bool] = or_(
    map_(token("true"), lambda _text: True), map_(token("false"), lambda _text: False),
).named("bool")

_number: Parser[int] = int_

_quote = char('"')

_string: Parser[str] = delimited(
    _quote, concat(many0(satisfy(lambda c: c != '"'))), _quote
).named("string")

_array: Parser[List[Any]] = delimited(
    char("["), terminated(separated0(char(","), _ws(_value)), multispace0), char("]"),
).named("array")


def _to_dict(entries: List[Tuple[str, Any]]) -> Dict[str, Any]:
    # Later duplicate keys override earlier ones
    return dict(entries)


_entry: Parser[Tuple[str, Any]] = tuple_(
    terminated(_ws(_string), char(":")), _ws(_value)
)

_object: Parser[Dict[str, Any]] = delimited(
    char("{"),
    map_(terminated(separated0(char(","), _ws(_entry)), multispace0), _to_dict),
    char("}"),
).named("object")

json_value: Parser[Any] = any_(
    [_null, _bool, _number, _string, _array, _object]
).named("json_value")
"""A JSON value. Leading and trailing whitespace is not consumed."""


def decode_json(text: str) -> Any:
    """
    Decode a JSON document into Python values (None, bool, int, str, list and
    dict). Raises :py:exc:`~knit.parser.ParseError` on failure.
    """
    return parse(_ws(json_value), text)
